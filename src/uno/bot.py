"""
Rule based Uno bot. In order of preference:

1. an action card (skip, reverse, draw two)
2. a card of the current color
3. a wild card, declaring the color the bot holds most of
4. anything else that can be played (a number or symbol match in another color)
5. draw a card
"""

from collections import Counter
from random import Random
from typing import Optional

from src.uno.cards import ACTION_TYPES, PLAYABLE_COLORS, Card, CardColor
from src.uno.game import (
    ChooseColor,
    DrawCard,
    Phase,
    PlayCard,
    UnoMove,
    UnoState,
    playable_cards,
)


def bot_move(state: UnoState, rng: Random) -> Optional[UnoMove]:
    """`rng` is unused: the choice is fully determined by the hand. It is accepted to keep the bot signatures uniform."""
    if state.phase == Phase.FINISHED:
        return None

    hand = state.hand(state.current)
    if state.phase == Phase.COLOR_SELECTION:
        return ChooseColor(preferred_color(hand, state.current_color))

    playable = playable_cards(state, state.current)
    if not playable:
        return DrawCard()

    for card in playable:
        if card.type in ACTION_TYPES:
            return PlayCard(card.id)
    for card in playable:
        if not card.is_wild and card.color == state.current_color:
            return PlayCard(card.id)
    for card in playable:
        if card.is_wild:
            return PlayCard(card.id, preferred_color(hand, state.current_color))
    return PlayCard(playable[0].id)


def preferred_color(hand: tuple[Card, ...], fallback: CardColor) -> CardColor:
    """The color the hand holds the most cards of (ties: first in PLAYABLE_COLORS). Wild cards do not count."""
    counts = Counter(card.color for card in hand if not card.is_wild)
    if not counts:
        return fallback if fallback in PLAYABLE_COLORS else PLAYABLE_COLORS[0]
    return max(PLAYABLE_COLORS, key=lambda color: counts[color])
