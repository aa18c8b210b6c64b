"""Tests for session phases and turn resolution."""

import random

import pytest

from seabattle.app.events import FleetsPlaced, GameOver, GameStarted, PlacementRetried, ShipPlaced, Shot
from seabattle.core.errors import FleetConfigurationError, InvalidCoordinateError, NoTargetAvailableError
from seabattle.core.models import Axis, CellState, Coord, Phase, ShotOutcome, Side
from seabattle.core.rules import (
    create_session,
    opponent_turn,
    place_fleets,
    player_fire,
    start_game,
)
from seabattle.infra.config import GameConfig


def _started_session(seed: int = 11, **kwargs):
    session = create_session(rng=random.Random(seed), **kwargs)
    place_fleets(session)
    assert start_game(session)
    return session


def _cells(session, side: Side, state: CellState) -> list[Coord]:
    board = session.board(side)
    return [coord for coord in board.coords() if board.get(coord) is state]


def test_create_session_defaults() -> None:
    session = create_session()
    assert session.phase is Phase.SETUP
    assert session.winner is None
    assert session.memory.last_hit is None
    assert {board.size for board in session.boards.values()} == {8}


def test_create_session_rejects_ship_larger_than_board() -> None:
    with pytest.raises(FleetConfigurationError):
        create_session(GameConfig(board_size=3, max_ship_size=4))


def test_place_fleets_fills_both_boards(renderer, event_log) -> None:
    bus, seen = event_log
    session = create_session(rng=random.Random(3), renderer=renderer, events=bus)
    attempts = place_fleets(session)

    assert session.phase is Phase.PLACED
    assert 1 <= attempts <= session.config.placement_attempts
    for side in Side:
        assert len(_cells(session, side, CellState.OCCUPIED)) == 20
        assert session.board(side).remaining == 20
    assert renderer.shown(Side.SELF, CellState.OCCUPIED) == set(_cells(session, Side.SELF, CellState.OCCUPIED))
    assert renderer.shown(Side.THEM, CellState.OCCUPIED) == set()
    assert sum(isinstance(event, ShipPlaced) for event in seen) == 20
    assert isinstance(seen[-1], FleetsPlaced)


def test_place_fleets_never_exhausts_retries_on_default_board() -> None:
    config = GameConfig(placement_attempts=50)
    for seed in range(100):
        session = create_session(config, rng=random.Random(seed))
        place_fleets(session)
        assert session.phase is Phase.PLACED


def test_place_fleets_raises_after_bounded_retries(event_log) -> None:
    bus, seen = event_log
    config = GameConfig(board_size=3, max_ship_size=3, placement_attempts=4)
    session = create_session(config, rng=random.Random(0), events=bus)
    with pytest.raises(FleetConfigurationError):
        place_fleets(session)
    assert [event.attempt for event in seen if isinstance(event, PlacementRetried)] == [1, 2, 3, 4]
    assert session.phase is Phase.SETUP
    assert session.board(Side.SELF).count(CellState.EMPTY) == 9


def test_fire_is_rejected_outside_play() -> None:
    session = create_session(rng=random.Random(1))
    result = player_fire(session, Coord(0, 0))
    assert not result.accepted
    assert result.phase is Phase.SETUP

    place_fleets(session)
    assert not player_fire(session, Coord(0, 0)).accepted
    assert session.board(Side.THEM).count(CellState.MISS) == 0


def test_start_game_requires_placed_fleets(event_log) -> None:
    bus, seen = event_log
    session = create_session(rng=random.Random(1), events=bus)
    assert not start_game(session)
    place_fleets(session)
    assert start_game(session)
    assert session.phase is Phase.IN_PLAY
    assert not start_game(session)
    assert sum(isinstance(event, GameStarted) for event in seen) == 1


def test_player_hit_keeps_turn() -> None:
    session = _started_session()
    target = _cells(session, Side.THEM, CellState.OCCUPIED)[0]
    result = player_fire(session, target)
    assert result.outcome in {ShotOutcome.HIT, ShotOutcome.HIT_AND_SUNK}
    assert result.opponent_shots == ()
    assert session.board(Side.SELF).count(CellState.MISS) == 0


def test_player_miss_hands_turn_to_opponent(event_log) -> None:
    bus, seen = event_log
    session = _started_session(events=bus)
    target = _cells(session, Side.THEM, CellState.EMPTY)[0]
    result = player_fire(session, target)

    assert result.outcome is ShotOutcome.MISS
    assert result.opponent_shots
    assert all(shot.outcome.is_hit for shot in result.opponent_shots[:-1])
    if result.phase is Phase.IN_PLAY:
        assert result.opponent_shots[-1].outcome is ShotOutcome.MISS
    opponent_events = [event for event in seen if isinstance(event, Shot) and event.side is Side.SELF]
    assert len(opponent_events) == len(result.opponent_shots)


def test_repeat_shot_is_already_decided_without_opponent_turn() -> None:
    session = _started_session()
    target = _cells(session, Side.THEM, CellState.EMPTY)[0]
    player_fire(session, target)
    self_before = session.board(Side.SELF).cells.copy()

    repeat = player_fire(session, target)
    assert repeat.outcome is ShotOutcome.ALREADY_DECIDED
    assert repeat.opponent_shots == ()
    assert (session.board(Side.SELF).cells == self_before).all()


def test_out_of_range_player_shot_raises() -> None:
    session = _started_session()
    with pytest.raises(InvalidCoordinateError):
        player_fire(session, Coord(8, 0))


def test_sinking_every_enemy_ship_ends_game(renderer, event_log) -> None:
    bus, seen = event_log
    session = _started_session(renderer=renderer, events=bus)
    for coord in _cells(session, Side.THEM, CellState.OCCUPIED):
        result = player_fire(session, coord)
    assert session.board(Side.THEM).remaining == 0
    assert result.outcome is ShotOutcome.HIT_AND_SUNK
    assert result.phase is Phase.ENDED
    assert session.winner is Side.SELF
    assert seen[-1] == GameOver(winner=Side.SELF)
    assert not player_fire(session, Coord(0, 0)).accepted


def test_opponent_wins_when_player_fleet_is_destroyed(event_log) -> None:
    bus, seen = event_log
    session = _started_session(seed=21, events=bus)
    for _ in range(64):
        if session.phase is Phase.ENDED:
            break
        opponent_turn(session)
    assert session.phase is Phase.ENDED
    assert session.winner is Side.THEM
    assert session.board(Side.SELF).remaining == 0
    assert seen[-1] == GameOver(winner=Side.THEM)


def test_game_over_reveals_remaining_enemy_ships(renderer) -> None:
    session = _started_session(seed=5, renderer=renderer)
    hidden = set(_cells(session, Side.THEM, CellState.OCCUPIED))
    while session.phase is Phase.IN_PLAY:
        opponent_turn(session)
    assert session.winner is Side.THEM
    assert renderer.shown(Side.THEM, CellState.OCCUPIED) == hidden


def test_opponent_without_targets_is_a_logic_error() -> None:
    session = _started_session()
    board = session.board(Side.SELF)
    board.cells.fill(int(CellState.MISS))
    with pytest.raises(NoTargetAvailableError):
        opponent_turn(session)


def test_opponent_follows_up_a_hit(board_factory) -> None:
    session = create_session(rng=random.Random(4))
    session.boards[Side.SELF] = board_factory(ships=((Coord(3, 3), 3, Axis.HORIZONTAL),))
    session.boards[Side.THEM] = board_factory(ships=((Coord(0, 0), 1, Axis.HORIZONTAL),))
    session.phase = Phase.IN_PLAY
    session.memory.last_hit = Coord(3, 3)
    session.board(Side.SELF).set(Coord(3, 3), CellState.HIT)
    session.board(Side.SELF).stats.hit()

    shots = opponent_turn(session)
    assert shots[0].coord in {Coord(2, 3), Coord(4, 3), Coord(3, 2), Coord(3, 4)}


def test_replacing_ships_resets_the_game() -> None:
    session = _started_session()
    target = _cells(session, Side.THEM, CellState.EMPTY)[0]
    player_fire(session, target)
    session.memory.last_hit = Coord(1, 1)

    place_fleets(session)
    assert session.phase is Phase.PLACED
    assert session.memory.last_hit is None
    for side in Side:
        board = session.board(side)
        assert board.count(CellState.MISS) == 0
        assert board.remaining == 20


def test_sinking_shows_buffer_cells_to_the_renderer(renderer, board_factory) -> None:
    session = create_session(rng=random.Random(6), renderer=renderer)
    session.boards[Side.THEM] = board_factory(
        ships=((Coord(3, 3), 1, Axis.HORIZONTAL), (Coord(0, 7), 2, Axis.HORIZONTAL))
    )
    session.phase = Phase.IN_PLAY

    result = player_fire(session, Coord(3, 3))
    assert result.outcome is ShotOutcome.HIT_AND_SUNK
    near = set(_cells(session, Side.THEM, CellState.NEAR))
    assert near == {Coord(3, 2), Coord(2, 3), Coord(4, 3), Coord(3, 4)}
    assert renderer.shown(Side.THEM, CellState.NEAR) == near
    assert renderer.shown(Side.THEM, CellState.SUNK) == {Coord(3, 3)}
