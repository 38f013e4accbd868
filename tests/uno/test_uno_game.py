"""Unit tests for /src/uno/"""

from collections import Counter
from random import Random
from typing import Optional

import pytest

from src.core.exceptions import InvalidRequestError, NotationError
from src.uno.bot import bot_move, preferred_color
from src.uno.cards import (
    DECK_SIZE,
    Card,
    CardColor,
    CardType,
    build_deck,
    can_play,
)
from src.uno.engine import UnoEngine
from src.uno.game import (
    INVALID_CARD_MESSAGE,
    ChooseColor,
    DrawCard,
    Phase,
    PlayCard,
    UnoState,
    apply_move,
    initialize,
    legal_moves,
    move_from_notation,
    move_to_notation,
    rejection_reason,
)

RED, BLUE, GREEN, YELLOW, WILD = (
    CardColor.RED,
    CardColor.BLUE,
    CardColor.GREEN,
    CardColor.YELLOW,
    CardColor.WILD,
)


def number(card_id: str, color: CardColor, value: int) -> Card:
    return Card(card_id, color, CardType.NUMBER, value)


def action(card_id: str, color: CardColor, card_type: CardType) -> Card:
    return Card(card_id, color, card_type)


TOP_RED_7 = number("t", RED, 7)
DRAW_PILE = tuple(number(f"g{index}", GREEN, index) for index in range(6))


def make_state(
    *hands: tuple[Card, ...],
    top: Card = TOP_RED_7,
    draw_pile: tuple[Card, ...] = DRAW_PILE,
    buried: tuple[Card, ...] = (),
    current_color: Optional[CardColor] = None,
) -> UnoState:
    return UnoState(
        hands=hands,
        draw_pile=draw_pile,
        discard_pile=buried + (top,),
        current_color=current_color or top.color,
    )


# -- DECK --
def test_deck_composition() -> None:
    deck = build_deck()
    assert len(deck) == DECK_SIZE
    assert len({card.id for card in deck}) == DECK_SIZE

    per_type = Counter(card.type for card in deck)
    assert per_type == {
        CardType.NUMBER: 76,
        CardType.SKIP: 8,
        CardType.REVERSE: 8,
        CardType.DRAW_TWO: 8,
        CardType.WILD: 4,
        CardType.WILD_DRAW_FOUR: 4,
    }
    zeros = [card for card in deck if card.type == CardType.NUMBER and card.value == 0]
    assert len(zeros) == 4


def test_new_game_deals_and_turns_up_a_number() -> None:
    state = initialize(Random(1), num_players=3, hand_size=7)
    assert [len(hand) for hand in state.hands] == [7, 7, 7]
    assert state.top_card.type == CardType.NUMBER
    assert state.current_color == state.top_card.color
    assert state.card_count() == DECK_SIZE
    assert state.phase == Phase.PLAYING


def test_same_seed_same_deal() -> None:
    assert initialize(Random(42)) == initialize(Random(42))


@pytest.mark.parametrize("seed", range(5))
def test_largest_table_still_turns_up_a_number(seed: int) -> None:
    state = initialize(Random(seed), num_players=5, hand_size=15)
    assert state.top_card.type == CardType.NUMBER
    assert state.card_count() == DECK_SIZE


@pytest.mark.parametrize("num_players, hand_size", [(10, 20), (4, 19), (2, 38)])
def test_table_too_large_for_the_deck(num_players: int, hand_size: int) -> None:
    with pytest.raises(InvalidRequestError):
        initialize(Random(0), num_players=num_players, hand_size=hand_size)
    with pytest.raises(InvalidRequestError):
        UnoEngine(num_players=num_players, hand_size=hand_size)


def test_legal_moves_do_not_change_between_calls() -> None:
    state = initialize(Random(7))
    assert legal_moves(state, "player-1") == legal_moves(state, "player-1")


@pytest.mark.parametrize(
    "card, playable",
    [
        (number("a", RED, 2), True),  # color
        (number("a", BLUE, 7), True),  # number
        (number("a", BLUE, 2), False),
        (action("a", BLUE, CardType.SKIP), False),
        (action("a", RED, CardType.SKIP), True),
        (action("a", WILD, CardType.WILD), True),
        (action("a", WILD, CardType.WILD_DRAW_FOUR), True),
    ],
)
def test_can_play_on_red_7(card: Card, playable: bool) -> None:
    assert can_play(card, TOP_RED_7, RED) == playable


def test_action_matches_action_of_another_color() -> None:
    top = action("t", RED, CardType.SKIP)
    assert can_play(action("a", BLUE, CardType.SKIP), top, RED)
    assert not can_play(action("a", BLUE, CardType.REVERSE), top, RED)


# -- PLAYING CARDS --
def test_playing_a_number_card() -> None:
    state = make_state((number("a", RED, 2), number("b", BLUE, 3)), (number("c", BLUE, 4),))
    after = apply_move(state, PlayCard("a"))
    assert after.top_card.id == "a"
    assert after.current == 1
    assert [card.id for card in after.hand(0)] == ["b"]
    assert after.card_count() == state.card_count()


def test_unplayable_card_is_rejected() -> None:
    state = make_state((number("a", BLUE, 2), number("b", BLUE, 3)), (number("c", BLUE, 4),))
    assert PlayCard("a") not in legal_moves(state, "player-1")
    assert apply_move(state, PlayCard("a")) is state
    assert rejection_reason(state, PlayCard("a")) == INVALID_CARD_MESSAGE
    assert "not in your hand" in rejection_reason(state, PlayCard("zz"))


def test_not_your_turn() -> None:
    state = make_state((number("a", RED, 2),), (number("c", RED, 4),))
    assert legal_moves(state, "player-2") == []


def test_draw_two_makes_next_player_draw_and_skips_them() -> None:
    state = make_state(
        (action("d2", RED, CardType.DRAW_TWO), number("a", BLUE, 1)),
        (number("b", BLUE, 3), number("c", BLUE, 4)),
    )
    after = apply_move(state, PlayCard("d2"))
    assert len(after.hand(1)) == 4
    assert after.current == 0
    assert len(after.draw_pile) == len(state.draw_pile) - 2
    assert after.card_count() == state.card_count()


def test_skip_with_three_players() -> None:
    state = make_state(
        (action("s", RED, CardType.SKIP), number("a", BLUE, 1)),
        (number("b", BLUE, 3),),
        (number("c", BLUE, 4),),
    )
    assert apply_move(state, PlayCard("s")).current == 2


def test_reverse_with_three_players_changes_direction() -> None:
    state = make_state(
        (action("r", RED, CardType.REVERSE), number("a", BLUE, 1)),
        (number("b", BLUE, 3),),
        (number("c", BLUE, 4),),
    )
    after = apply_move(state, PlayCard("r"))
    assert after.direction == -1
    assert after.current == 2


def test_reverse_with_two_players_acts_as_skip() -> None:
    state = make_state(
        (action("r", RED, CardType.REVERSE), number("a", BLUE, 1)),
        (number("b", BLUE, 3),),
    )
    assert apply_move(state, PlayCard("r")).current == 0


def test_wild_card_waits_for_a_color() -> None:
    state = make_state(
        (action("w", WILD, CardType.WILD), number("a", BLUE, 1)),
        (number("b", BLUE, 3),),
    )
    assert PlayCard("w", GREEN) in legal_moves(state, "player-1")

    waiting = apply_move(state, PlayCard("w"))
    assert waiting.phase == Phase.COLOR_SELECTION
    assert waiting.pending_card_id == "w"
    assert waiting.current == 0
    assert legal_moves(waiting, "player-1") == [
        ChooseColor(RED),
        ChooseColor(BLUE),
        ChooseColor(GREEN),
        ChooseColor(YELLOW),
    ]
    assert apply_move(waiting, DrawCard()) is waiting

    chosen = apply_move(waiting, ChooseColor(BLUE))
    assert chosen.phase == Phase.PLAYING
    assert chosen.current_color == BLUE
    assert chosen.top_card.id == "w"
    assert chosen.current == 1


def test_wild_draw_four_with_declared_color() -> None:
    state = make_state(
        (action("w4", WILD, CardType.WILD_DRAW_FOUR), number("a", BLUE, 1)),
        (number("b", BLUE, 3),),
    )
    after = apply_move(state, PlayCard("w4", YELLOW))
    assert after.current_color == YELLOW
    assert len(after.hand(1)) == 5
    assert after.current == 0


def test_drawing_ends_the_turn() -> None:
    state = make_state((number("a", BLUE, 2),), (number("c", BLUE, 4),))
    after = apply_move(state, DrawCard())
    assert len(after.hand(0)) == 2
    assert after.hand(0)[-1] == DRAW_PILE[-1]
    assert after.current == 1


def test_empty_draw_pile_is_refilled_from_the_discard_pile() -> None:
    buried = (number("x", RED, 1), number("y", RED, 2), number("z", RED, 3))
    state = make_state(
        (number("a", BLUE, 2),), (number("c", BLUE, 4),), draw_pile=(), buried=buried
    )
    after = apply_move(state, DrawCard())
    assert after.discard_pile == (TOP_RED_7,)
    assert len(after.draw_pile) == 2
    assert after.hand(0)[-1] in buried
    assert after.card_count() == state.card_count()
    # the reshuffle is a pure function of the state
    assert apply_move(state, DrawCard()) == after


def test_last_card_wins() -> None:
    state = make_state((action("d2", RED, CardType.DRAW_TWO),), (number("c", BLUE, 4),))
    after = apply_move(state, PlayCard("d2"))
    assert after.winner == "player-1"
    assert after.phase == Phase.FINISHED
    # the game ended before the draw two took effect
    assert len(after.hand(1)) == 1
    assert legal_moves(after, "player-2") == []


# -- NOTATION --
@pytest.mark.parametrize(
    "notation, move",
    [
        ("draw", DrawCard()),
        ("color:blue", ChooseColor(BLUE)),
        ("play:012", PlayCard("012")),
        ("play:100:red", PlayCard("100", RED)),
    ],
)
def test_notation(notation: str, move: object) -> None:
    assert move_from_notation(notation) == move
    assert move_to_notation(move) == notation


@pytest.mark.parametrize("notation", ["", "play", "color:purple", "play:012:wild:x", "jump"])
def test_invalid_notation(notation: str) -> None:
    with pytest.raises(NotationError):
        move_from_notation(notation)


# -- BOT --
@pytest.fixture
def rng() -> Random:
    return Random(9)


def test_bot_prefers_action_cards(rng: Random) -> None:
    state = make_state(
        (number("a", RED, 2), action("s", RED, CardType.SKIP), action("w", WILD, CardType.WILD)),
        (number("c", BLUE, 4),),
    )
    assert bot_move(state, rng) == PlayCard("s")


def test_bot_prefers_color_match_over_wild(rng: Random) -> None:
    state = make_state(
        (action("w", WILD, CardType.WILD), number("a", RED, 2)),
        (number("c", BLUE, 4),),
    )
    assert bot_move(state, rng) == PlayCard("a")


def test_bot_prefers_wild_over_a_number_match_in_another_color(rng: Random) -> None:
    state = make_state(
        (number("b7", BLUE, 7), action("w", WILD, CardType.WILD)),
        (number("c", BLUE, 4),),
    )
    assert bot_move(state, rng) == PlayCard("w", BLUE)


def test_bot_plays_a_number_match_when_nothing_else_fits(rng: Random) -> None:
    state = make_state(
        (number("b7", BLUE, 7), number("g2", GREEN, 2)),
        (number("c", BLUE, 4),),
    )
    assert bot_move(state, rng) == PlayCard("b7")


def test_bot_picks_the_color_it_holds_most(rng: Random) -> None:
    state = make_state(
        (
            action("w", WILD, CardType.WILD),
            number("a", GREEN, 2),
            number("b", GREEN, 3),
            number("c", BLUE, 3),
        ),
        (number("d", BLUE, 4),),
    )
    assert bot_move(state, rng) == PlayCard("w", GREEN)


def test_bot_draws_when_nothing_fits(rng: Random) -> None:
    state = make_state((number("a", BLUE, 2),), (number("c", BLUE, 4),))
    assert bot_move(state, rng) == DrawCard()


def test_bot_chooses_a_color(rng: Random) -> None:
    state = make_state(
        (action("w", WILD, CardType.WILD), number("a", YELLOW, 1)),
        (number("c", BLUE, 4),),
    )
    waiting = apply_move(state, PlayCard("w"))
    assert bot_move(waiting, rng) == ChooseColor(YELLOW)


def test_preferred_color_without_colored_cards() -> None:
    assert preferred_color((action("w", WILD, CardType.WILD),), BLUE) == BLUE


# -- ENGINE ADAPTER --
def test_engine_adapter() -> None:
    engine = UnoEngine(num_players=2, hand_size=5)
    state = engine.initialize(Random(3))
    assert engine.sides(state) == ("player-1", "player-2")
    assert engine.side_to_move(state) == "player-1"
    assert DrawCard() in engine.legal_moves(state, "player-1")

    snapshot = engine.describe(state)
    assert len(snapshot["hands"]["player-1"]) == 5
    assert snapshot["draw_pile"] + snapshot["discard_pile"] + 10 == DECK_SIZE
    assert engine.move_endpoints(DrawCard()) == (None, "draw")
