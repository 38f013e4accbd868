"""Orchestration of communication from the presentation layer to the rules engines and the session repository (and the reverse direction)."""

import logging
from random import Random
from typing import Any, Callable, Optional
from uuid import UUID

from src.api.models import (
    BotTurnRequest,
    CreateSessionRequest,
    DeleteSessionRequest,
    GetSessionRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    ResetRequest,
    RollRequest,
    SelectRequest,
    SessionResponse,
)
from src.core.config import Settings, load_settings
from src.core.engine import Engine
from src.core.exceptions import (
    GameStateError,
    InvalidRequestError,
    NotationError,
    SessionNotFoundError,
)
from src.core.models import SessionModel
from src.core.shared_types import Status
from src.db.repository import SessionRepository
from src.services import dice
from src.services.registry import build_engine
from src.services.scheduler import ScheduledTask, TurnScheduler

logger = logging.getLogger(__name__)

GAME_OVER_MESSAGE = "The game is over"
NOT_YOUR_TURN_MESSAGE = "It is not your turn"
BOT_SIDE_MESSAGE = "That side is played by the bot"
ROLL_FIRST_MESSAGE = "Roll the dice first"
STALE_ROLL_MESSAGE = "The game changed while the dice were rolling"


class GameService:
    """
    Orchestration of layers for all games.
    ----
    Illegal moves, moves out of turn and moves for the bot's side never raise: the response comes back with
    `accepted=False` and the state is left as it was. Exceptions are reserved for requests that make no sense
    (unknown session, unknown side, rolling in a game without dice).

    Without explicit settings, they are read from the TABLETOP_* environment variables (see `load_settings`).

    With a scheduler, the bot answers by itself (after `settings.bot_delay_seconds`) whenever a change hands it the turn.
    Without one, the caller decides when the bot plays via `play_bot_turn`.
    """

    def __init__(
        self,
        repository: SessionRepository,
        settings: Optional[Settings] = None,
        scheduler: Optional[TurnScheduler] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings if settings is not None else load_settings()
        self.scheduler = scheduler

    # -- Session lifecycle ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Set up a new game, dealt/shuffled with the requested seed (if any)."""
        rng = Random(request.seed)
        engine = build_engine(request.game, self.settings, request.players)
        new_session = SessionModel(
            game=request.game,
            state=engine.initialize(rng),
            rng=rng,
            bot_enabled=request.bot_enabled,
            seed=request.seed,
            options={"players": request.players},
        )
        stored_session, session_id = self.repo.create_session(new_session)
        logger.info(
            "Created %s session %s (bot enabled: %s)",
            request.game,
            session_id,
            request.bot_enabled,
        )
        return self._create_response(session_id, stored_session)

    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        """
        Retrieve current game state.
        ----
        Used in a "polling" loop by the presentation layer, e.g. to find out when the bot has moved.
        """
        session = self._fetch_session(request.session_id)
        return self._create_response(request.session_id, session)

    def reset(self, request: ResetRequest) -> SessionResponse:
        """Start the game over. Pending bot turns are cancelled and any that still fire are dropped (version changed)."""
        session = self._fetch_session(request.session_id)
        engine = self._engine(session)
        self._cancel_scheduled(request.session_id)

        # a seeded session replays the same deal / dice after a reset
        if session.seed is not None:
            session.rng = Random(session.seed)
        session.state = engine.initialize(session.rng)
        session.version += 1
        session.selection = None
        self.repo.update_session(request.session_id, session)
        logger.info("Reset session %s (now at version %d)", request.session_id, session.version)
        return self._create_response(request.session_id, session)

    def delete_session(self, request: DeleteSessionRequest) -> None:
        self._cancel_scheduled(request.session_id)
        if self.repo.delete_session(request.session_id) is None:
            raise SessionNotFoundError(f"Session with {request.session_id=} not found.")
        logger.info("Deleted session %s", request.session_id)

    # -- Moves ---
    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        session = self._fetch_session(request.session_id)
        engine = self._engine(session)
        self._check_side(engine, session, request.side)
        return LegalMovesResponse(
            session_id=request.session_id,
            side=request.side,
            legal_moves=[
                engine.format_move(move)
                for move in engine.legal_moves(session.state, request.side)
            ],
        )

    def make_move(self, request: MoveRequest) -> SessionResponse:
        """Make a move attempt, written in the notation of the game."""
        session = self._fetch_session(request.session_id)
        engine = self._engine(session)

        refusal = self._refuse_input(engine, session, request.side)
        if refusal is not None:
            return self._refuse(request.session_id, session, refusal)

        try:
            move = engine.parse_move(request.move)
        except NotationError as e:
            return self._refuse(request.session_id, session, str(e))

        return self._attempt_move(request.session_id, session, engine, move)

    def select(self, request: SelectRequest) -> SessionResponse:
        """
        Click-style input.
        ----
        * nothing selected: a cell holding a movable piece gets selected. In games where a single click is the whole
          move (tris cell, uno card), the move is played right away.
        * something selected: a cell the selected piece can go to plays that move, another movable piece changes the
          selection, the selected cell itself deselects. Anything else drops the selection.
        """
        session = self._fetch_session(request.session_id)
        engine = self._engine(session)

        refusal = self._refuse_input(engine, session, request.side)
        if refusal is not None:
            return self._refuse(request.session_id, session, refusal)

        cell = request.cell
        moves = engine.legal_moves(session.state, request.side)
        endpoints = [(move, engine.move_endpoints(move)) for move in moves]
        origins = {origin for _, (origin, _target) in endpoints if origin is not None}

        if session.selection is None:
            direct = next(
                (move for move, (origin, target) in endpoints if origin is None and target == cell),
                None,
            )
            if direct is not None:
                return self._attempt_move(request.session_id, session, engine, direct)
            if cell in origins:
                return self._set_selection(request.session_id, session, cell)
            return self._refuse(request.session_id, session, "Nothing you can move there")

        if cell == session.selection:
            return self._set_selection(request.session_id, session, None)

        move = next(
            (move for move, (origin, target) in endpoints if origin == session.selection and target == cell),
            None,
        )
        if move is not None:
            return self._attempt_move(request.session_id, session, engine, move)
        if cell in origins:
            return self._set_selection(request.session_id, session, cell)

        self._set_selection(request.session_id, session, None)
        return self._refuse(request.session_id, session, "That piece cannot go there")

    # -- Dice ---
    def roll(self, request: RollRequest) -> SessionResponse:
        """Roll immediately (no animation)."""
        session = self._fetch_session(request.session_id)
        engine = self._engine(session)
        refusal = self._refuse_roll(engine, session, request.side)
        if refusal is not None:
            return self._refuse(request.session_id, session, refusal)
        return self._apply_roll(
            request.session_id, session, engine, dice.roll(session.rng, engine.dice_count)
        )

    async def roll_with_animation(
        self,
        request: RollRequest,
        on_frame: Optional[Callable[[dice.Dice], None]] = None,
    ) -> SessionResponse:
        """
        Show `settings.dice_frames` random faces, then the result, and only then apply it.
        If the session changed in the meantime (reset for instance), the result is thrown away.
        """
        session = self._fetch_session(request.session_id)
        engine = self._engine(session)
        refusal = self._refuse_roll(engine, session, request.side)
        if refusal is not None:
            return self._refuse(request.session_id, session, refusal)

        version = session.version
        frames = dice.animate_roll(session.rng, engine.dice_count, self.settings.dice_frames)
        result = await dice.reveal(frames, self.settings.dice_frame_seconds, on_frame)

        session = self._fetch_session(request.session_id)
        if session.version != version:
            logger.info(
                "Dropping stale roll %s for session %s (rolled at version %d, now %d)",
                result,
                request.session_id,
                version,
                session.version,
            )
            return self._refuse(request.session_id, session, STALE_ROLL_MESSAGE)
        return self._apply_roll(request.session_id, session, self._engine(session), result)

    # -- Bot ---
    def play_bot_turn(self, request: BotTurnRequest) -> SessionResponse:
        """Let the bot play its whole turn right now (including rolling the dice)."""
        session = self._fetch_session(request.session_id)
        engine = self._engine(session)
        if not session.bot_enabled:
            return self._refuse(request.session_id, session, "The bot is not enabled for this session")
        if engine.is_terminal(session.state) is not None:
            return self._refuse(request.session_id, session, GAME_OVER_MESSAGE)
        if engine.side_to_move(session.state) != self._bot_side(engine, session):
            return self._refuse(request.session_id, session, "It is not the bot's turn")

        self._cancel_scheduled(request.session_id)
        self._play_bot_turn(request.session_id, session)
        return self._create_response(request.session_id, session)

    def schedule_bot_turn(self, request: BotTurnRequest) -> Optional[ScheduledTask]:
        """
        Schedule the bot's turn after the "thinking" delay, if it is the bot's turn.
        Needs a scheduler, and (unless the scheduler got one) a running event loop.
        """
        if self.scheduler is None:
            raise GameStateError("This service has no scheduler to play delayed bot turns.")
        session = self._fetch_session(request.session_id)
        return self._schedule_bot_turn(request.session_id, session, self._engine(session))

    # -- Internal helpers --
    def _engine(self, session: SessionModel) -> Engine[Any, Any]:
        return build_engine(session.game, self.settings, session.options.get("players"))

    def _fetch_session(self, session_id: UUID) -> SessionModel:
        """Attempt to find the session in the repository and raise error if it fails."""
        session = self.repo.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session with {session_id=} not found.")
        return session

    def _bot_side(self, engine: Engine[Any, Any], session: SessionModel) -> Optional[str]:
        """The bot always plays the second side."""
        if not session.bot_enabled:
            return None
        return engine.sides(session.state)[1]

    def _check_side(self, engine: Engine[Any, Any], session: SessionModel, side: str) -> None:
        if side not in engine.sides(session.state):
            raise InvalidRequestError(f"{side!r} is not a side in {session.game}.")

    def _refuse_input(
        self, engine: Engine[Any, Any], session: SessionModel, side: str
    ) -> Optional[str]:
        """Why a human on `side` may not act right now (None: they may)."""
        self._check_side(engine, session, side)
        if engine.is_terminal(session.state) is not None:
            return GAME_OVER_MESSAGE
        if side == self._bot_side(engine, session):
            return BOT_SIDE_MESSAGE
        if side != engine.side_to_move(session.state):
            return NOT_YOUR_TURN_MESSAGE
        # in the dice games the dice decide first
        if engine.dice_count and engine.needs_roll(session.state):
            return ROLL_FIRST_MESSAGE
        return None

    def _refuse_roll(
        self, engine: Engine[Any, Any], session: SessionModel, side: str
    ) -> Optional[str]:
        if engine.dice_count == 0:
            raise GameStateError(f"{session.game} is not played with dice.")
        refusal = self._refuse_input(engine, session, side)
        if refusal == ROLL_FIRST_MESSAGE:
            return None
        if refusal is None:
            # dice are already on the table
            return "Play your remaining dice first"
        return refusal

    def _refuse(self, session_id: UUID, session: SessionModel, message: str) -> SessionResponse:
        logger.debug("Session %s refused input: %s", session_id, message)
        return self._create_response(session_id, session, accepted=False, message=message)

    def _set_selection(
        self, session_id: UUID, session: SessionModel, cell: Optional[str]
    ) -> SessionResponse:
        session.selection = cell
        self.repo.update_session(session_id, session)
        return self._create_response(session_id, session)

    def _attempt_move(
        self, session_id: UUID, session: SessionModel, engine: Engine[Any, Any], move: Any
    ) -> SessionResponse:
        next_state = engine.apply_move(session.state, move)
        if next_state is session.state:
            # the engines hand back the very same state for an illegal move
            session.selection = None
            self.repo.update_session(session_id, session)
            return self._refuse(session_id, session, engine.rejection_reason(session.state, move))

        self._commit(session_id, session, engine, next_state)
        return self._create_response(session_id, session)

    def _apply_roll(
        self, session_id: UUID, session: SessionModel, engine: Engine[Any, Any], rolled: dice.Dice
    ) -> SessionResponse:
        next_state = engine.roll(session.state, rolled)
        if next_state is session.state:
            return self._refuse(session_id, session, f"Cannot use the roll {rolled}")
        logger.debug("Session %s rolled %s", session_id, rolled)
        self._commit(session_id, session, engine, next_state)
        return self._create_response(session_id, session)

    def _commit(
        self, session_id: UUID, session: SessionModel, engine: Engine[Any, Any], next_state: Any
    ) -> None:
        """Store an accepted change, then give the bot its turn if the change handed it over."""
        session.state = next_state
        session.version += 1
        session.selection = None
        self.repo.update_session(session_id, session)

        winner = engine.is_terminal(next_state)
        if winner is not None:
            logger.info("Session %s finished, result: %s", session_id, winner)
        elif self.scheduler is not None:
            self._schedule_bot_turn(session_id, session, engine)

    def _play_bot_turn(self, session_id: UUID, session: SessionModel) -> None:
        """
        Keep playing for the bot until the turn is handed to someone else.
        (One turn can be several moves: backgammon dice, dama capture chains, uno skips.)
        """
        engine = self._engine(session)
        bot_side = self._bot_side(engine, session)
        state = session.state
        while engine.is_terminal(state) is None and engine.side_to_move(state) == bot_side:
            if engine.dice_count and engine.needs_roll(state):
                next_state = engine.roll(state, dice.roll(session.rng, engine.dice_count))
            else:
                move = engine.bot_move(state, session.rng)
                if move is None:
                    break
                logger.debug("Bot in session %s plays %s", session_id, engine.format_move(move))
                next_state = engine.apply_move(state, move)
            if next_state is state:
                break
            state = next_state

        if state is session.state:
            return
        session.state = state
        session.version += 1
        session.selection = None
        self.repo.update_session(session_id, session)
        winner = engine.is_terminal(state)
        if winner is not None:
            logger.info("Session %s finished, result: %s", session_id, winner)

    def _schedule_bot_turn(
        self, session_id: UUID, session: SessionModel, engine: Engine[Any, Any]
    ) -> Optional[ScheduledTask]:
        bot_side = self._bot_side(engine, session)
        if bot_side is None or engine.is_terminal(session.state) is not None:
            return None
        if engine.side_to_move(session.state) != bot_side:
            return None
        return self.scheduler.schedule(
            self.settings.bot_delay_seconds,
            session_id,
            session.version,
            self._run_scheduled_bot_turn,
        )

    def _run_scheduled_bot_turn(self, session_id: UUID, version: int) -> None:
        """Callback of a scheduled bot turn. Does nothing if the session moved on since it was scheduled."""
        session = self.repo.get_session(session_id)
        if session is None:
            logger.info("Session %s is gone, dropping its bot turn", session_id)
            return
        if session.version != version:
            logger.info(
                "Dropping stale bot turn for session %s (scheduled at version %d, now %d)",
                session_id,
                version,
                session.version,
            )
            return
        self._play_bot_turn(session_id, session)

    def _cancel_scheduled(self, session_id: UUID) -> None:
        if self.scheduler is not None:
            self.scheduler.cancel(session_id)

    def _create_response(
        self,
        session_id: UUID,
        session: SessionModel,
        accepted: bool = True,
        message: Optional[str] = None,
    ) -> SessionResponse:
        """Convert info in SessionModel to a SessionResponse (for the session with given ID.)"""
        engine = self._engine(session)
        winner = engine.is_terminal(session.state)
        return SessionResponse(
            session_id=session_id,
            game=session.game,
            status=Status.FINISHED if winner is not None else Status.IN_PROGRESS,
            side_to_move=engine.side_to_move(session.state),
            winner=winner,
            version=session.version,
            bot_enabled=session.bot_enabled,
            dice_count=engine.dice_count,
            selection=session.selection,
            snapshot=engine.describe(session.state),
            accepted=accepted,
            message=message,
        )
