"""Hunt/Target opponent strategy."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from seabattle.core.board import Board, neighbors
from seabattle.core.models import DIRECTIONS, CellState, Coord, ShotOutcome

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TargetingMemory:
    """Most recent unresolved hit on the player's board, if any."""

    last_hit: Coord | None = None

    @property
    def targeting(self) -> bool:
        return self.last_hit is not None

    def clear(self) -> None:
        self.last_hit = None


def pick_target(board: Board, memory: TargetingMemory, rng: random.Random) -> Coord | None:
    """Choose the next cell to fire at, or ``None`` when nothing is left.

    Follows up the remembered hit when there is one, otherwise hunts for the
    most open unfired cell.
    """
    if memory.targeting and board.get(memory.last_hit) is CellState.HIT:
        candidates = target_candidates(board, memory.last_hit)
        if candidates:
            return rng.choice(candidates)
        logger.warning("target_mode_boxed_in last_hit=%s; falling back to hunt", memory.last_hit)
        memory.clear()
    candidates = hunt_candidates(board)
    if not candidates:
        return None
    return rng.choice(candidates)


def target_candidates(board: Board, hit: Coord) -> list[Coord]:
    """Cells just beyond the run of hits through ``hit``, minus decided cells."""
    min_x, min_y, max_x, max_y = hit.x, hit.y, hit.x, hit.y
    for dx, dy in DIRECTIONS:
        cell = hit.shifted(dx, dy)
        while board.get(cell) is CellState.HIT:
            min_x, max_x = min(min_x, cell.x), max(max_x, cell.x)
            min_y, max_y = min(min_y, cell.y), max(max_y, cell.y)
            cell = cell.shifted(dx, dy)

    low, high = Coord(min_x, min_y), Coord(max_x, max_y)
    if min_x != max_x:
        ends = [low.shifted(-1, 0), high.shifted(1, 0)]
    elif min_y != max_y:
        ends = [low.shifted(0, -1), high.shifted(0, 1)]
    else:
        ends = list(neighbors(hit))
    return [cell for cell in ends if not board.get(cell).is_decided]


def hunt_candidates(board: Board) -> list[Coord]:
    """Unfired cells tied for the most unfired orthogonal neighbours."""
    best = 0
    cells: list[Coord] = []
    for coord in board.coords():
        if not board.get(coord).is_unfired:
            continue
        open_sides = sum(1 for near in neighbors(coord) if board.get(near).is_unfired)
        if open_sides > best:
            best = open_sides
            cells = [coord]
        elif open_sides == best:
            cells.append(coord)
    return cells


def remember_outcome(memory: TargetingMemory, coord: Coord, outcome: ShotOutcome) -> None:
    """Update targeting memory after the opponent fires."""
    if outcome is ShotOutcome.HIT:
        memory.last_hit = coord
    elif outcome is ShotOutcome.HIT_AND_SUNK:
        memory.clear()
