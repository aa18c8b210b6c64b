"""Shot outcome evaluation (miss/hit/sunk/already decided)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from seabattle.core.board import Board, neighbors
from seabattle.core.errors import InvalidCoordinateError
from seabattle.core.models import DIRECTIONS, CellState, Coord, ShotOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShotResolution:
    """Outcome of a shot plus every cell whose state changed."""

    outcome: ShotOutcome
    changed: tuple[tuple[Coord, CellState], ...] = ()
    sunk_cells: tuple[Coord, ...] = ()


def fire(board: Board, coord: Coord) -> ShotOutcome:
    """Resolve a shot against a board."""
    return resolve_shot(board, coord).outcome


def resolve_shot(board: Board, coord: Coord) -> ShotResolution:
    """Apply a shot and report the changed cells.

    Raises ``InvalidCoordinateError`` for coordinates outside the board.
    """
    if not board.in_bounds(coord):
        raise InvalidCoordinateError(coord, board.size)
    state = board.get(coord)
    if state.is_decided:
        return ShotResolution(ShotOutcome.ALREADY_DECIDED)
    if state is not CellState.OCCUPIED:
        board.set(coord, CellState.MISS)
        return ShotResolution(ShotOutcome.MISS, ((coord, CellState.MISS),))

    board.set(coord, CellState.HIT)
    board.stats.hit()
    ship = _ship_cells_if_sunk(board, coord)
    if ship is None:
        return ShotResolution(ShotOutcome.HIT, ((coord, CellState.HIT),))

    for cell in ship:
        board.set(cell, CellState.SUNK)
    buffer: list[Coord] = []
    for cell in ship:
        for near in neighbors(cell):
            if board.get(near) is CellState.EMPTY:
                board.set(near, CellState.NEAR)
                buffer.append(near)
    board.stats.sunk(len(ship))
    logger.debug("ship_sunk size=%d cells=%s remaining=%d", len(ship), ship, board.remaining)
    changed = [(cell, CellState.SUNK) for cell in ship]
    changed.extend((cell, CellState.NEAR) for cell in buffer)
    return ShotResolution(ShotOutcome.HIT_AND_SUNK, tuple(changed), tuple(ship))


def _ship_cells_if_sunk(board: Board, origin: Coord) -> list[Coord] | None:
    """Walk hit runs from ``origin``; ``None`` while an unhit ship cell remains."""
    cells = [origin]
    for dx, dy in DIRECTIONS:
        cell = origin.shifted(dx, dy)
        while True:
            state = board.get(cell)
            if state is CellState.OCCUPIED:
                return None
            if state is not CellState.HIT:
                break
            cells.append(cell)
            cell = cell.shifted(dx, dy)
    return cells
