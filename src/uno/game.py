"""
Rules of Uno.

* A card can be played when it matches the current color, the number or action symbol of the top card, or is wild.
* Playing a wild card without naming a color puts the game in the color-selection phase: the same player then
  has to choose a color before the card takes effect.
* Skip / reverse (with two players) / draw two / wild draw four skip the next player, the draw cards
  first make that player draw. Penalties do not stack.
* Drawing a card ends your turn. An empty draw pile is refilled by reshuffling the discard pile (except its top card).
* The first player to empty their hand wins.

Shuffling happens inside `apply_move`, so the state carries the seed for the next reshuffle. That keeps every
function here pure (same state + same move = same result).
"""

from dataclasses import dataclass, replace
from enum import StrEnum
from random import Random
from typing import Optional, Self

from src.core.exceptions import InvalidRequestError, NotationError
from src.uno.cards import (
    DRAW_PENALTY,
    MAX_DEALT_CARDS,
    PLAYABLE_COLORS,
    Card,
    CardColor,
    CardType,
    build_deck,
    can_play,
    shuffled,
)

INVALID_CARD_MESSAGE = "Invalid card! Must match color, number, or symbol."
DEFAULT_HAND_SIZE = 7


class Phase(StrEnum):
    PLAYING = "playing"
    COLOR_SELECTION = "color-selection"
    FINISHED = "finished"


# --- MOVES ---
@dataclass(frozen=True)
class PlayCard:
    card_id: str
    # only for wild cards. A wild card played without a color moves the game to the color-selection phase
    color: Optional[CardColor] = None


@dataclass(frozen=True)
class ChooseColor:
    color: CardColor


@dataclass(frozen=True)
class DrawCard:
    pass


UnoMove = PlayCard | ChooseColor | DrawCard


def move_from_notation(notation: str) -> UnoMove:
    """'play:<card id>', 'play:<card id>:<color>', 'color:<color>' or 'draw'"""
    parts = notation.split(":")
    try:
        if parts == ["draw"]:
            return DrawCard()
        if parts[0] == "color" and len(parts) == 2:
            return ChooseColor(CardColor(parts[1]))
        if parts[0] == "play" and len(parts) == 2:
            return PlayCard(parts[1])
        if parts[0] == "play" and len(parts) == 3:
            return PlayCard(parts[1], CardColor(parts[2]))
    except ValueError as e:
        raise NotationError(f"Unknown color in {notation!r}") from e
    raise NotationError(f"Cannot interpret {notation!r} as an Uno move.")


def move_to_notation(move: UnoMove) -> str:
    if isinstance(move, DrawCard):
        return "draw"
    if isinstance(move, ChooseColor):
        return f"color:{move.color}"
    if move.color is None:
        return f"play:{move.card_id}"
    return f"play:{move.card_id}:{move.color}"


# --- STATE ---
@dataclass(frozen=True)
class UnoState:
    hands: tuple[tuple[Card, ...], ...]
    # the top of the draw pile and the top of the discard pile are the LAST elements
    draw_pile: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    current_color: CardColor
    current: int = 0
    direction: int = 1
    phase: Phase = Phase.PLAYING
    # wild card waiting for its color (still in the player's hand until the color is chosen)
    pending_card_id: Optional[str] = None
    # reserved: penalties do not stack, so this always stays 0
    pending_draw_count: int = 0
    winner: Optional[str] = None
    shuffle_seed: int = 0

    @classmethod
    def new_game(
        cls, rng: Random, num_players: int = 2, hand_size: int = DEFAULT_HAND_SIZE
    ) -> Self:
        """
        Shuffle a full deck, deal `hand_size` cards to every player, and turn up the first number card.
        Action and wild cards turned up before it are buried underneath it in the discard pile.
        """
        check_table_size(num_players, hand_size)
        deck = shuffled(build_deck(), rng)
        hands = [[deck.pop() for _ in range(hand_size)] for _ in range(num_players)]

        buried: list[Card] = []
        top_card = deck.pop()
        while top_card.type != CardType.NUMBER:
            buried.append(top_card)
            top_card = deck.pop()

        return cls(
            hands=tuple(tuple(hand) for hand in hands),
            draw_pile=tuple(deck),
            discard_pile=tuple(buried) + (top_card,),
            current_color=top_card.color,
            shuffle_seed=rng.getrandbits(32),
        )

    @property
    def top_card(self) -> Card:
        return self.discard_pile[-1]

    @property
    def num_players(self) -> int:
        return len(self.hands)

    def hand(self, player: int) -> tuple[Card, ...]:
        return self.hands[player]

    def card_count(self) -> int:
        return (
            sum(len(hand) for hand in self.hands)
            + len(self.draw_pile)
            + len(self.discard_pile)
        )


def player_name(index: int) -> str:
    return f"player-{index + 1}"


def check_table_size(num_players: int, hand_size: int) -> None:
    if num_players * hand_size > MAX_DEALT_CARDS:
        raise InvalidRequestError(
            f"Cannot deal {hand_size} cards to each of {num_players} players: "
            f"at most {MAX_DEALT_CARDS} cards can be dealt."
        )


def initialize(
    rng: Random, num_players: int = 2, hand_size: int = DEFAULT_HAND_SIZE
) -> UnoState:
    return UnoState.new_game(rng, num_players, hand_size)


def playable_cards(state: UnoState, player: int) -> list[Card]:
    return [
        card
        for card in state.hand(player)
        if can_play(card, state.top_card, state.current_color)
    ]


def legal_moves(state: UnoState, side: str) -> list[UnoMove]:
    """
    Playing phase: every playable card (wild cards with and without a declared color) and drawing.
    Color-selection phase: the four colors.
    """
    if state.phase == Phase.FINISHED or side != player_name(state.current):
        return []

    if state.phase == Phase.COLOR_SELECTION:
        return [ChooseColor(color) for color in PLAYABLE_COLORS]

    moves: list[UnoMove] = []
    for card in playable_cards(state, state.current):
        moves.append(PlayCard(card.id))
        if card.is_wild:
            moves.extend(PlayCard(card.id, color) for color in PLAYABLE_COLORS)
    moves.append(DrawCard())
    return moves


def apply_move(state: UnoState, move: UnoMove) -> UnoState:
    if move not in legal_moves(state, player_name(state.current)):
        return state

    if isinstance(move, DrawCard):
        after_draw = _draw_cards(state, state.current, 1)
        return replace(after_draw, current=_next_player(after_draw, steps=1))

    if isinstance(move, ChooseColor):
        card = _card_in_hand(state, state.current, state.pending_card_id)
        resolved = replace(state, phase=Phase.PLAYING, pending_card_id=None)
        return _play_card(resolved, card, move.color)

    card = _card_in_hand(state, state.current, move.card_id)
    if card.is_wild and move.color is None:
        return replace(state, phase=Phase.COLOR_SELECTION, pending_card_id=card.id)
    return _play_card(state, card, move.color)


def is_terminal(state: UnoState) -> Optional[str]:
    return state.winner


def rejection_reason(state: UnoState, move: UnoMove) -> str:
    if state.phase == Phase.FINISHED:
        return "The game is over"
    if state.phase == Phase.COLOR_SELECTION:
        return "Choose a color for your wild card"
    if isinstance(move, ChooseColor):
        return "There is no wild card waiting for a color"
    if isinstance(move, PlayCard):
        card = next((c for c in state.hand(state.current) if c.id == move.card_id), None)
        if card is None:
            return f"Card {move.card_id} is not in your hand"
        if not card.is_wild and move.color is not None:
            return "Only wild cards let you choose a color"
    return INVALID_CARD_MESSAGE


# -- PRIVATE HELPERS ---
def _card_in_hand(state: UnoState, player: int, card_id: Optional[str]) -> Card:
    return next(card for card in state.hand(player) if card.id == card_id)


def _next_player(state: UnoState, steps: int) -> int:
    return (state.current + steps * state.direction) % state.num_players


def _play_card(state: UnoState, card: Card, chosen_color: Optional[CardColor]) -> UnoState:
    """
    Move the card from the hand onto the discard pile, then

    1. an empty hand wins immediately
    2. apply the special effect of the card
    3. hand the turn to the next player (one more step if the next player is skipped)
    """
    player = state.current
    hands = list(state.hands)
    hands[player] = tuple(c for c in state.hand(player) if c.id != card.id)
    state = replace(
        state,
        hands=tuple(hands),
        discard_pile=state.discard_pile + (card,),
        current_color=chosen_color if card.is_wild else card.color,
    )

    if not hands[player]:
        return replace(state, phase=Phase.FINISHED, winner=player_name(player))

    skip_next = False
    if card.type == CardType.SKIP:
        skip_next = True
    elif card.type == CardType.REVERSE:
        state = replace(state, direction=-state.direction)
        # with two players, reverse acts like skip
        skip_next = state.num_players == 2
    elif card.type in DRAW_PENALTY:
        state = _draw_cards(state, _next_player(state, steps=1), DRAW_PENALTY[card.type])
        skip_next = True

    return replace(state, current=_next_player(state, steps=2 if skip_next else 1))


def _draw_cards(state: UnoState, player: int, count: int) -> UnoState:
    """Draw from the top of the draw pile, reshuffling the discard pile (minus the top card) into it when it runs out"""
    draw_pile = list(state.draw_pile)
    discard_pile = list(state.discard_pile)
    hand = list(state.hand(player))
    seed = state.shuffle_seed

    for _ in range(count):
        if not draw_pile:
            rng = Random(seed)
            draw_pile = shuffled(discard_pile[:-1], rng)
            discard_pile = discard_pile[-1:]
            seed = rng.getrandbits(32)
        if not draw_pile:
            # every other card is in someone's hand: nothing left to draw
            break
        hand.append(draw_pile.pop())

    hands = list(state.hands)
    hands[player] = tuple(hand)
    return replace(
        state,
        hands=tuple(hands),
        draw_pile=tuple(draw_pile),
        discard_pile=tuple(discard_pile),
        shuffle_seed=seed,
    )
