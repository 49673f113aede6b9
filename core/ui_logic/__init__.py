"""
UI logic package - portable across platforms.

Grid sizing, card layout, spring animation, keyboard dispatch, card
selection and board coordination. No UI framework dependencies.
"""
from .grid_sizer import GridGeometry, compute_grid
from .layout_engine import BoardLayout, BoardStateError, compute_layout, visual_bounds
from .animation_driver import AnimationDriver, RenderState, SpringConfig
from .input_dispatcher import (
    ClearSelection,
    DispatchContext,
    DispatcherConfig,
    InputDispatcher,
    KeyEvent,
    SelectCard,
    ToggleCardOrientation,
    ToggleLayoutOrientation,
)
from .card_selection import CardSelection, SelectionEvent
from .board_controller import BoardController

__all__ = [
    'GridGeometry',
    'compute_grid',
    'BoardLayout',
    'BoardStateError',
    'compute_layout',
    'visual_bounds',
    'AnimationDriver',
    'RenderState',
    'SpringConfig',
    'ClearSelection',
    'DispatchContext',
    'DispatcherConfig',
    'InputDispatcher',
    'KeyEvent',
    'SelectCard',
    'ToggleCardOrientation',
    'ToggleLayoutOrientation',
    'CardSelection',
    'SelectionEvent',
    'BoardController',
]
