"""Random non-touching fleet placement."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

from seabattle.core.board import Board
from seabattle.core.errors import PlacementExhaustedError
from seabattle.core.models import Axis, CellState, Coord, Side

logger = logging.getLogger(__name__)

ShipPlacedCallback = Callable[[int, Coord, Axis], None]
CellCallback = Callable[[Coord], None]


def raster_from(start: Coord, width: int, height: int) -> list[Coord]:
    """Return every cell of a ``width`` x ``height`` area in raster order, wrapping from ``start``."""
    total = width * height
    first = start.y * width + start.x
    return [Coord(i % width, i // width) for i in ((first + k) % total for k in range(total))]


def find_position(board: Board, size: int, axis: Axis, rng: random.Random) -> Coord | None:
    """Return the first free bow position scanning from a random start, or ``None``."""
    dx, dy = axis.step
    width = board.size - dx * (size - 1)
    height = board.size - dy * (size - 1)
    if width <= 0 or height <= 0:
        return None
    start = Coord(rng.randrange(width), rng.randrange(height))
    for bow in raster_from(start, width, height):
        if all(board.get(bow.shifted(dx * i, dy * i)) is CellState.EMPTY for i in range(size)):
            return bow
    return None


def mark_ship(
    board: Board,
    bow: Coord,
    size: int,
    axis: Axis,
    on_ship_cell: CellCallback | None = None,
) -> list[Coord]:
    """Mark ship cells ``OCCUPIED`` and its bow/stern/flank cells ``NEAR``."""
    dx, dy = axis.step
    _mark_near(board, bow.shifted(-dx, -dy))
    cells: list[Coord] = []
    cell = bow
    for _ in range(size):
        board.set(cell, CellState.OCCUPIED)
        cells.append(cell)
        if on_ship_cell is not None:
            on_ship_cell(cell)
        _mark_near(board, cell.shifted(dy, dx))
        _mark_near(board, cell.shifted(-dy, -dx))
        cell = cell.shifted(dx, dy)
    _mark_near(board, cell)
    board.stats.add(size)
    return cells


def place_ship(
    board: Board,
    side: Side,
    size: int,
    rng: random.Random,
    on_ship_cell: CellCallback | None = None,
) -> tuple[Coord, Axis]:
    """Place one ship on a random axis, trying the perpendicular axis once."""
    axis = rng.choice((Axis.HORIZONTAL, Axis.VERTICAL))
    bow = find_position(board, size, axis, rng)
    if bow is None:
        logger.debug("placement_axis_exhausted side=%s size=%d axis=%s", side, size, axis.value)
        axis = axis.perpendicular
        bow = find_position(board, size, axis, rng)
        if bow is None:
            raise PlacementExhaustedError(side, size, axis)
    mark_ship(board, bow, size, axis, on_ship_cell)
    logger.debug("ship_placed side=%s size=%d bow=%s axis=%s", side, size, bow, axis.value)
    return bow, axis


def place_fleet(
    board: Board,
    side: Side,
    fleet: Sequence[int],
    rng: random.Random,
    *,
    on_ship_cell: CellCallback | None = None,
    on_ship_placed: ShipPlacedCallback | None = None,
) -> None:
    """Place a whole fleet on a cleared board, largest ships first.

    Raises ``PlacementExhaustedError`` when a ship has no legal position; the
    board is left partially filled and must be cleared before retrying.
    """
    for size in sorted(fleet, reverse=True):
        bow, axis = place_ship(board, side, size, rng, on_ship_cell)
        if on_ship_placed is not None:
            on_ship_placed(size, bow, axis)
    board.replace(CellState.NEAR, CellState.EMPTY)


def _mark_near(board: Board, coord: Coord) -> None:
    if board.get(coord) is CellState.OCCUPIED:
        return
    board.set(coord, CellState.NEAR)
