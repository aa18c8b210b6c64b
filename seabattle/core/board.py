"""Board state representation and grid access helpers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from seabattle.core.models import BOARD_SIZE, DIRECTIONS, CellState, Coord


@dataclass(slots=True)
class FleetStats:
    """Remaining ship cells and afloat ships per size for one board."""

    total: int = 0
    per_size: list[int] = field(default_factory=list)

    @property
    def destroyed(self) -> bool:
        return self.total <= 0

    def add(self, size: int) -> None:
        """Account for a newly placed ship."""
        self.total += size
        if len(self.per_size) <= size:
            self.per_size.extend([0] * (size - len(self.per_size) + 1))
        self.per_size[size] += 1

    def hit(self) -> None:
        self.total -= 1

    def sunk(self, size: int) -> None:
        if size < len(self.per_size) and self.per_size[size] > 0:
            self.per_size[size] -= 1

    def describe(self) -> str:
        """Return ``total:<n> ships: <largest> ... <smallest>``."""
        counts = " ".join(str(self.per_size[size]) for size in range(len(self.per_size) - 1, 0, -1))
        return f"total:{self.total} ships: {counts}".rstrip()


@dataclass(slots=True)
class Board:
    """Numpy-backed square grid of cell states, indexed ``[y, x]``."""

    size: int = BOARD_SIZE
    cells: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    )
    stats: FleetStats = field(default_factory=FleetStats)

    def __post_init__(self) -> None:
        if self.cells.shape != (self.size, self.size):
            self.cells = np.zeros((self.size, self.size), dtype=np.int8)

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.x < self.size and 0 <= coord.y < self.size

    def get(self, coord: Coord) -> CellState:
        """Return the cell state; out-of-bounds cells read as ``MISS``."""
        if not self.in_bounds(coord):
            return CellState.MISS
        return CellState(int(self.cells[coord.y, coord.x]))

    def set(self, coord: Coord, state: CellState) -> None:
        """Set the cell state; out-of-bounds writes are ignored."""
        if not self.in_bounds(coord):
            return
        self.cells[coord.y, coord.x] = int(state)

    def clear(self) -> None:
        """Reset every cell to ``EMPTY`` and forget the fleet."""
        self.cells.fill(int(CellState.EMPTY))
        self.stats = FleetStats()

    def coords(self) -> Iterator[Coord]:
        """Yield every coordinate in raster order."""
        for y in range(self.size):
            for x in range(self.size):
                yield Coord(x, y)

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == int(state)))

    def replace(self, old: CellState, new: CellState) -> None:
        """Convert every ``old`` cell to ``new``."""
        self.cells[self.cells == int(old)] = int(new)

    @property
    def remaining(self) -> int:
        return self.stats.total

    def fleet_destroyed(self) -> bool:
        """Return whether every ship cell has been hit."""
        return self.stats.destroyed


def neighbors(coord: Coord) -> tuple[Coord, ...]:
    """Return the four orthogonal neighbours, which may lie off the board."""
    return tuple(coord.shifted(dx, dy) for dx, dy in DIRECTIONS)
