"""
Spring animation for card transitions.

Interpolate each card's rendered position, rotation and opacity towards the
targets produced by the layout engine. Driven by an external frame loop via
tick(); retargeting keeps the current value and velocity so cards never jump.
"""
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
import logging
import math

from ..data_models import CardVisualState

logger = logging.getLogger(__name__)

STEP_SECONDS = 0.001
MAX_FRAME_SECONDS = 0.25


@dataclass(frozen=True, slots=True)
class SpringConfig:
    """Spring constants; the defaults settle in roughly half a second."""
    tension: float = 64.0
    friction: float = 14.0
    mass: float = 1.0
    precision: float = 0.01

    @property
    def damping_ratio(self) -> float:
        return self.friction / (2 * math.sqrt(self.tension * self.mass))


class SpringValue:
    """A single animated scalar."""

    __slots__ = ("value", "velocity", "target")

    def __init__(self, value: float) -> None:
        self.value = value
        self.velocity = 0.0
        self.target = value

    @property
    def at_rest(self) -> bool:
        return self.value == self.target and self.velocity == 0.0

    def retarget(self, target: float) -> None:
        # Value and velocity carry over so the trajectory bends instead of restarting
        self.target = target

    def advance(self, seconds: float, config: SpringConfig) -> None:
        """
        Advance the simulation using fixed sub-steps.

        Args:
            seconds: Elapsed time since the previous call
            config: Spring constants
        """
        if self.at_rest:
            return
        steps = max(1, math.ceil(seconds / STEP_SECONDS))
        step = seconds / steps
        for _ in range(steps):
            force = -config.tension * (self.value - self.target)
            damping = -config.friction * self.velocity
            self.velocity += (force + damping) / config.mass * step
            self.value += self.velocity * step
            if (abs(self.velocity) < config.precision
                    and abs(self.value - self.target) < config.precision):
                self.value = self.target
                self.velocity = 0.0
                break


@dataclass(frozen=True, slots=True)
class RenderState:
    """Live values handed to the renderer for one frame."""
    x: float
    y: float
    opacity: float
    rotation: float
    visible: bool
    z_index: int
    interactive: bool
    hinted: bool


class _CardAnimation:
    __slots__ = ("x", "y", "opacity", "rotation", "target")

    def __init__(self, target: CardVisualState) -> None:
        self.x = SpringValue(target.x)
        self.y = SpringValue(target.y)
        self.opacity = SpringValue(target.opacity)
        self.rotation = SpringValue(target.rotation)
        self.target = target

    def retarget(self, target: CardVisualState) -> None:
        self.target = target
        self.x.retarget(target.x)
        self.y.retarget(target.y)
        self.opacity.retarget(target.opacity)
        self.rotation.retarget(target.rotation)

    def advance(self, seconds: float, config: SpringConfig) -> None:
        self.x.advance(seconds, config)
        self.y.advance(seconds, config)
        self.opacity.advance(seconds, config)
        self.rotation.advance(seconds, config)

    @property
    def at_rest(self) -> bool:
        return (self.x.at_rest and self.y.at_rest
                and self.opacity.at_rest and self.rotation.at_rest)

    def render_state(self) -> RenderState:
        opacity = min(1.0, max(0.0, self.opacity.value))
        visible = opacity > 0.0
        return RenderState(
            x=self.x.value,
            y=self.y.value,
            opacity=opacity,
            rotation=self.rotation.value,
            visible=visible,
            # Cards fading in or out draw above resting ones
            z_index=0 if self.opacity.at_rest else 1,
            interactive=self.target.in_play and visible,
            hinted=self.target.hinted,
        )


class AnimationDriver:
    """
    Per-card spring animations keyed by card id.

    set_targets() is non-blocking and may be called at any time; tick()
    advances every animation and returns the values to draw.
    """

    def __init__(self, config: Optional[SpringConfig] = None) -> None:
        """
        Initialize the driver.

        Args:
            config: Spring constants shared by every card
        """
        self.config = config or SpringConfig()
        self._animations: Dict[str, _CardAnimation] = {}

    def set_targets(self, targets: Mapping[str, CardVisualState]) -> None:
        """
        Point every card at a new target.

        Cards seen for the first time start at their target. Cards missing
        from ``targets`` are dropped.

        Args:
            targets: Layout output keyed by card id
        """
        dropped = set(self._animations) - set(targets)
        for card_id in dropped:
            del self._animations[card_id]

        for card_id, target in targets.items():
            animation = self._animations.get(card_id)
            if animation is None:
                self._animations[card_id] = _CardAnimation(target)
            else:
                animation.retarget(target)

        if dropped:
            logger.debug("Dropped %d animations no longer in the universe", len(dropped))

    def tick(self, dt: float) -> Dict[str, RenderState]:
        """
        Advance all animations by one frame.

        Args:
            dt: Seconds since the previous frame; clamped to avoid long stalls

        Returns:
            Render state per card id
        """
        seconds = min(max(dt, 0.0), MAX_FRAME_SECONDS)
        if seconds > 0.0:
            for animation in self._animations.values():
                animation.advance(seconds, self.config)
        return self.render_states()

    def render_states(self) -> Dict[str, RenderState]:
        """Current values without advancing time."""
        return {card_id: animation.render_state()
                for card_id, animation in self._animations.items()}

    @property
    def is_settled(self) -> bool:
        """True when no card is moving."""
        return all(animation.at_rest for animation in self._animations.values())

    def __len__(self) -> int:
        return len(self._animations)
