"""Game session state and turn resolution logic."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from seabattle.ai.hunt_target import TargetingMemory, pick_target, remember_outcome
from seabattle.app.events import (
    EventBus,
    FleetsPlaced,
    GameOver,
    GameStarted,
    PlacementRetried,
    ShipPlaced,
    Shot,
)
from seabattle.app.ports import NullRenderSink, RenderSink
from seabattle.core.board import Board
from seabattle.core.errors import (
    FleetConfigurationError,
    NoTargetAvailableError,
    PlacementExhaustedError,
)
from seabattle.core.models import Axis, CellState, Coord, Phase, ShotOutcome, Side
from seabattle.core.phase_flow import (
    SESSION_PHASES,
    TRIGGER_FINISH,
    TRIGGER_PLACED,
    TRIGGER_RESET,
    TRIGGER_START,
)
from seabattle.core.placement import place_fleet
from seabattle.core.shot_resolution import resolve_shot
from seabattle.infra.config import GameConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GameSession:
    """Runtime game session state."""

    config: GameConfig
    boards: dict[Side, Board]
    rng: random.Random
    renderer: RenderSink
    events: EventBus
    phase: Phase = Phase.SETUP
    memory: TargetingMemory = field(default_factory=TargetingMemory)
    winner: Side | None = None

    def board(self, side: Side) -> Board:
        return self.boards[side]


@dataclass(frozen=True, slots=True)
class ShotRecord:
    """One resolved shot."""

    coord: Coord
    outcome: ShotOutcome


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Outcome of a full player action (player shot + opponent response)."""

    outcome: ShotOutcome | None
    opponent_shots: tuple[ShotRecord, ...]
    phase: Phase
    winner: Side | None

    @property
    def accepted(self) -> bool:
        return self.outcome is not None


def create_session(
    config: GameConfig | None = None,
    *,
    rng: random.Random | None = None,
    renderer: RenderSink | None = None,
    events: EventBus | None = None,
) -> GameSession:
    """Create a session in ``SETUP`` with two empty boards."""
    config = config or GameConfig()
    try:
        largest = max(config.fleet)
    except ValueError as exc:
        raise FleetConfigurationError(str(exc)) from exc
    if largest > config.board_size:
        raise FleetConfigurationError(
            f"ship of size {largest} does not fit a {config.board_size}x{config.board_size} board"
        )
    return GameSession(
        config=config,
        boards={side: Board(size=config.board_size) for side in Side},
        rng=rng if rng is not None else random.Random(config.seed),
        renderer=renderer if renderer is not None else NullRenderSink(),
        events=events if events is not None else EventBus(),
    )


def reset_session(session: GameSession) -> None:
    """Clear both boards and targeting memory and return to ``SETUP``."""
    for side, board in session.boards.items():
        board.clear()
        session.renderer.reset_board(side, board.size)
    session.memory.clear()
    session.winner = None
    _advance(session, TRIGGER_RESET)


def place_fleets(session: GameSession) -> int:
    """Place both fleets, retrying whole-fleet placement; return attempts used.

    Allowed in any phase: placing again restarts the game.
    """
    attempts = session.config.placement_attempts
    for attempt in range(1, attempts + 1):
        reset_session(session)
        try:
            for side in (Side.THEM, Side.SELF):
                _place_side(session, side)
        except PlacementExhaustedError as exc:
            logger.warning("placement_failed attempt=%d/%d reason=%s", attempt, attempts, exc)
            session.events.publish(PlacementRetried(attempt=attempt, reason=str(exc)))
            continue
        _advance(session, TRIGGER_PLACED)
        session.events.publish(FleetsPlaced(attempts=attempt))
        return attempt

    reset_session(session)
    raise FleetConfigurationError(
        f"could not place fleet {session.config.fleet} on a "
        f"{session.config.board_size}x{session.config.board_size} board in {attempts} attempts"
    )


def start_game(session: GameSession) -> bool:
    """Move a placed session into play; return whether the game started."""
    if not _advance(session, TRIGGER_START):
        return False
    session.events.publish(GameStarted())
    return True


def player_fire(session: GameSession, coord: Coord) -> TurnResult:
    """Resolve the player's shot at the opponent board, then the opponent's reply.

    Shots outside ``IN_PLAY`` are rejected; an out-of-range coordinate raises
    ``InvalidCoordinateError``.
    """
    if session.phase is not Phase.IN_PLAY:
        logger.debug("player_fire_rejected phase=%s coord=%s", session.phase.name, coord)
        return _turn_result(session, None)

    outcome = _fire(session, Side.THEM, coord)
    if outcome is not ShotOutcome.MISS:
        return _turn_result(session, outcome)
    return _turn_result(session, outcome, opponent_turn(session))


def opponent_turn(session: GameSession) -> tuple[ShotRecord, ...]:
    """Let the opponent fire until it misses or wins."""
    board = session.board(Side.SELF)
    shots: list[ShotRecord] = []
    while session.phase is Phase.IN_PLAY:
        target = pick_target(board, session.memory, session.rng)
        if target is None:
            raise NoTargetAvailableError(
                f"no cell left to target while {board.remaining} ship cells remain"
            )
        outcome = _fire(session, Side.SELF, target)
        shots.append(ShotRecord(target, outcome))
        if outcome is ShotOutcome.ALREADY_DECIDED:
            raise NoTargetAvailableError(f"opponent picked decided cell {target}")
        remember_outcome(session.memory, target, outcome)
        if not outcome.is_hit:
            break
    return tuple(shots)


def _place_side(session: GameSession, side: Side) -> None:
    board = session.board(side)

    def show_ship(cell: Coord) -> None:
        session.renderer.show_cell(side, cell, CellState.OCCUPIED)

    def announce(size: int, bow: Coord, axis: Axis) -> None:
        session.events.publish(ShipPlaced(side=side, size=size, bow=bow, axis=axis))

    place_fleet(
        board,
        side,
        session.config.fleet,
        session.rng,
        on_ship_cell=show_ship if side is Side.SELF else None,
        on_ship_placed=announce,
    )


def _fire(session: GameSession, side: Side, coord: Coord) -> ShotOutcome:
    """Fire at ``side``'s board; sinking its last ship ends the game for ``side.opponent``."""
    board = session.board(side)
    resolution = resolve_shot(board, coord)
    for cell, state in resolution.changed:
        session.renderer.show_cell(side, cell, state)
    logger.debug(
        "shot side=%s coord=%s outcome=%s",
        side,
        coord,
        resolution.outcome.value,
        extra={"side": side.value, "coord": (coord.x, coord.y), "outcome": resolution.outcome.value},
    )
    session.events.publish(Shot(side=side, coord=coord, outcome=resolution.outcome))
    if resolution.outcome is ShotOutcome.HIT_AND_SUNK and board.fleet_destroyed():
        _finish(session, side.opponent)
    return resolution.outcome


def _finish(session: GameSession, winner: Side) -> None:
    session.winner = winner
    _advance(session, TRIGGER_FINISH)
    enemy = session.board(Side.THEM)
    for coord in enemy.coords():
        if enemy.get(coord) is CellState.OCCUPIED:
            session.renderer.show_cell(Side.THEM, coord, CellState.OCCUPIED)
    logger.info("game_over winner=%s", winner)
    session.events.publish(GameOver(winner=winner))


def _advance(session: GameSession, trigger: str) -> bool:
    target = SESSION_PHASES.resolve(session.phase, trigger)
    if target is None:
        return False
    if target is not session.phase:
        logger.info("phase %s -> %s", session.phase.name, target.name, extra={"phase": target.name})
    session.phase = target
    return True


def _turn_result(
    session: GameSession,
    outcome: ShotOutcome | None,
    opponent_shots: tuple[ShotRecord, ...] = (),
) -> TurnResult:
    return TurnResult(
        outcome=outcome,
        opponent_shots=opponent_shots,
        phase=session.phase,
        winner=session.winner,
    )
