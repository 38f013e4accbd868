"""Unit tests for /src/snakes/"""

from random import Random

import pytest

from src.core.exceptions import NotationError
from src.snakes.engine import SnakesEngine
from src.snakes.game import (
    FINAL_SQUARE,
    LADDERS,
    SNAKES,
    Roll,
    SnakesState,
    apply_move,
    bot_move,
    initialize,
    legal_moves,
    redirect,
)


def test_initial_state() -> None:
    state = initialize(3)
    assert state.positions == (1, 1, 1)
    assert legal_moves(state, "player-1") == [Roll(value) for value in range(1, 7)]
    assert legal_moves(state, "player-2") == []


@pytest.mark.parametrize(
    "square, expected",
    [
        (9, 21),  # ladder 9 -> 21 lands on the foot of ladder 21 -> 42, but only one hop is taken
        (16, 6),
        (98, 78),
        (80, 100),
        (50, 50),
    ],
)
def test_redirect_is_a_single_hop(square: int, expected: int) -> None:
    assert redirect(square) == expected


def test_legal_moves_do_not_change_between_calls() -> None:
    state = SnakesState(positions=(40, 12))
    assert legal_moves(state, "player-1") == legal_moves(state, "player-1")


def test_snakes_and_ladders_do_not_overlap() -> None:
    assert not set(SNAKES) & set(LADDERS)


def test_roll_moves_and_passes_the_turn() -> None:
    state = initialize()
    after = apply_move(state, Roll(4))
    # 1 + 4 = 5, no snake or ladder there
    assert after.positions == (5, 1)
    assert after.current == 1
    assert after.last_roll == 4


def test_ladder_is_climbed() -> None:
    state = SnakesState(positions=(3, 1))
    # 3 + 1 = 4, ladder to 14
    assert apply_move(state, Roll(1)).positions == (14, 1)


def test_landing_on_9_stops_on_21() -> None:
    state = SnakesState(positions=(5, 1))
    assert apply_move(state, Roll(4)).positions == (21, 1)


def test_reaching_the_last_square_wins() -> None:
    state = SnakesState(positions=(97, 50), current=0)
    after = apply_move(state, Roll(3))
    assert after.positions[0] == FINAL_SQUARE
    assert after.winner == "player-1"
    assert apply_move(after, Roll(1)) is after


def test_overshoot_is_capped_at_the_last_square() -> None:
    state = SnakesState(positions=(99, 50))
    assert apply_move(state, Roll(6)).winner == "player-1"


def test_invalid_roll_is_rejected() -> None:
    state = initialize()
    assert apply_move(state, Roll(7)) is state


@pytest.mark.parametrize("notation", ["5", "roll:", "roll:x", "jump:3"])
def test_invalid_notation(notation: str) -> None:
    with pytest.raises(NotationError):
        Roll.from_notation(notation)


def test_bot_rolls_a_die_face() -> None:
    rng = Random(1)
    assert 1 <= bot_move(initialize(), rng).value <= 6


def test_engine_roll_is_the_whole_turn() -> None:
    engine = SnakesEngine(num_players=2)
    state = engine.initialize(Random(0))
    assert engine.needs_roll(state)
    after = engine.roll(state, (2,))
    assert after.positions == (3, 1)
    assert engine.side_to_move(after) == "player-2"
    assert engine.describe(after)["positions"] == {"player-1": 3, "player-2": 1}
