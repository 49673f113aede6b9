from typing import Any, Dict, List, Optional, Set
from PySide6.QtCore import QAbstractListModel, QByteArray, QModelIndex, QPersistentModelIndex, Qt
from core.data_models import Card
from core.ui_logic.animation_driver import RenderState


class CardModel(QAbstractListModel):
    """Per-card render values for the QML board; one row per card in the universe."""

    CardIdRole = Qt.ItemDataRole.UserRole + 1
    ValueRole = Qt.ItemDataRole.UserRole + 2
    XRole = Qt.ItemDataRole.UserRole + 3
    YRole = Qt.ItemDataRole.UserRole + 4
    OpacityRole = Qt.ItemDataRole.UserRole + 5
    RotationRole = Qt.ItemDataRole.UserRole + 6
    VisibleRole = Qt.ItemDataRole.UserRole + 7
    ZRole = Qt.ItemDataRole.UserRole + 8
    InteractiveRole = Qt.ItemDataRole.UserRole + 9
    HintedRole = Qt.ItemDataRole.UserRole + 10
    ActiveRole = Qt.ItemDataRole.UserRole + 11

    RENDER_ROLES = [XRole, YRole, OpacityRole, RotationRole, VisibleRole, ZRole, InteractiveRole, HintedRole]

    def __init__(self, cards: Optional[List[Card]] = None) -> None:
        super().__init__()
        self.cards: List[Card] = list(cards or [])
        self._states: Dict[str, RenderState] = {}
        self._active: Set[str] = set()

    def update_states(self, states: Dict[str, RenderState]) -> None:
        """Replace render values and notify only rows that changed."""
        changed = [row for row, card in enumerate(self.cards)
                   if states.get(card.id) != self._states.get(card.id)]
        self._states = dict(states)
        for row in changed:
            index = self.index(row)
            self.dataChanged.emit(index, index, self.RENDER_ROLES)

    def set_active(self, card_ids: Set[str]) -> None:
        previous = self._active
        self._active = set(card_ids)
        for row, card in enumerate(self.cards):
            if (card.id in previous) != (card.id in self._active):
                index = self.index(row)
                self.dataChanged.emit(index, index, [self.ActiveRole])

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        return len(self.cards)

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or index.row() >= len(self.cards):
            return None

        card = self.cards[index.row()]

        if role == self.CardIdRole:
            return card.id
        elif role == self.ValueRole:
            return card.value
        elif role == self.ActiveRole:
            return card.id in self._active

        state = self._states.get(card.id)
        if state is None:
            return None
        if role == self.XRole:
            return state.x
        elif role == self.YRole:
            return state.y
        elif role == self.OpacityRole:
            return state.opacity
        elif role == self.RotationRole:
            return state.rotation
        elif role == self.VisibleRole:
            return state.visible
        elif role == self.ZRole:
            return state.z_index
        elif role == self.InteractiveRole:
            return state.interactive
        elif role == self.HintedRole:
            return state.hinted

        return None

    def roleNames(self) -> dict[int, QByteArray]:
        return {
            self.CardIdRole: QByteArray(b"cardId"),
            self.ValueRole: QByteArray(b"cardValue"),
            self.XRole: QByteArray(b"posX"),
            self.YRole: QByteArray(b"posY"),
            self.OpacityRole: QByteArray(b"cardOpacity"),
            self.RotationRole: QByteArray(b"cardRotation"),
            self.VisibleRole: QByteArray(b"cardVisible"),
            self.ZRole: QByteArray(b"cardZ"),
            self.InteractiveRole: QByteArray(b"interactive"),
            self.HintedRole: QByteArray(b"hinted"),
            self.ActiveRole: QByteArray(b"active"),
        }
