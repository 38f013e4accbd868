"""Uno cards and the standard 108 card deck."""

from dataclasses import dataclass
from enum import StrEnum
from random import Random
from typing import Optional


class CardColor(StrEnum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


class CardType(StrEnum):
    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw2"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild4"


# the colors a player can play or declare (wild is not a color you can choose)
PLAYABLE_COLORS: tuple[CardColor, ...] = (
    CardColor.RED,
    CardColor.BLUE,
    CardColor.GREEN,
    CardColor.YELLOW,
)
ACTION_TYPES: frozenset[CardType] = frozenset(
    {CardType.SKIP, CardType.REVERSE, CardType.DRAW_TWO}
)
DRAW_PENALTY: dict[CardType, int] = {CardType.DRAW_TWO: 2, CardType.WILD_DRAW_FOUR: 4}
DECK_SIZE = 108
NUMBER_CARDS = 76
# whatever the shuffle, the cards left after dealing at most this many still hold a number card to turn up
MAX_DEALT_CARDS = NUMBER_CARDS - 1


@dataclass(frozen=True)
class Card:
    id: str
    color: CardColor
    type: CardType
    value: Optional[int] = None

    @property
    def is_wild(self) -> bool:
        return self.color == CardColor.WILD

    def __str__(self) -> str:
        face = str(self.value) if self.type == CardType.NUMBER else str(self.type)
        return f"{self.color} {face}" if not self.is_wild else face


def build_deck() -> list[Card]:
    """
    Per color: one 0, two of each 1-9, two skip, two reverse, two draw-two (25 cards).
    Plus 4 wild and 4 wild-draw-four. 4 * 25 + 8 = 108 cards, in a fixed (unshuffled) order.
    """
    faces: list[tuple[CardColor, CardType, Optional[int]]] = []
    for color in PLAYABLE_COLORS:
        faces.append((color, CardType.NUMBER, 0))
        for number in range(1, 10):
            faces.extend([(color, CardType.NUMBER, number)] * 2)
        for action in (CardType.SKIP, CardType.REVERSE, CardType.DRAW_TWO):
            faces.extend([(color, action, None)] * 2)
    for _ in range(4):
        faces.append((CardColor.WILD, CardType.WILD, None))
        faces.append((CardColor.WILD, CardType.WILD_DRAW_FOUR, None))

    return [
        Card(id=f"{index:03d}", color=color, type=card_type, value=value)
        for index, (color, card_type, value) in enumerate(faces)
    ]


def shuffled(cards: list[Card], rng: Random) -> list[Card]:
    """Uniform random permutation (Fisher-Yates, via random.shuffle) of a copy of the cards"""
    deck = list(cards)
    rng.shuffle(deck)
    return deck


def can_play(card: Card, top_card: Card, current_color: CardColor) -> bool:
    """Matches the current color, the number, the action symbol, or is wild"""
    if card.is_wild:
        return True
    if card.color == current_color:
        return True
    if card.type != top_card.type:
        return False
    if card.type == CardType.NUMBER:
        return card.value == top_card.value
    return True
