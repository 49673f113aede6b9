"""
Reference card universe for each game mode.

Card values are digit strings, one digit per trait. The board engines treat
cards as opaque; only renderers and the hint finder decode traits.
"""
from itertools import combinations, product
from typing import Dict, Optional, Sequence, Tuple, Union

from .data_models import Card, GameMode

TRAIT_VALUES = "012"


def generate_cards(mode: Union[GameMode, str]) -> Tuple[Card, ...]:
    """
    Build the ordered card universe for a game mode.

    Args:
        mode: Game mode or its name

    Returns:
        Tuple of cards; 81 for full-deck modes, 27 for junior

    Raises:
        ValueError: If the mode is unknown
    """
    mode = GameMode(mode)
    if mode is GameMode.JUNIOR:
        values = [color + shape + "0" + number
                  for color, shape, number in product(TRAIT_VALUES, repeat=3)]
    else:
        values = ["".join(traits) for traits in product(TRAIT_VALUES, repeat=4)]
    return tuple(Card(id=value, value=value) for value in values)


def card_traits(value: str) -> Dict[str, int]:
    """Decode a card value into trait indices."""
    if len(value) < 4 or not value.isdigit():
        raise ValueError(f"Malformed card value: {value!r}")
    digits = [int(ch) for ch in value]
    return {
        "color": digits[0],
        "shape": digits[1],
        "shade": digits[2],
        "number": digits[3],
        "border": digits[4] if len(digits) > 4 else 0,
    }


def is_set(cards: Sequence[Card]) -> bool:
    """Three cards where every trait is all equal or all different."""
    if len(cards) != 3:
        return False
    digits = [card.value for card in cards]
    return all(sum(int(value[i]) for value in digits) % 3 == 0 for i in range(len(digits[0])))


def find_set(cards: Sequence[Card]) -> Optional[Tuple[Card, Card, Card]]:
    """First set among the given cards in board order, or None."""
    for trio in combinations(cards, 3):
        if is_set(trio):
            return trio
    return None
