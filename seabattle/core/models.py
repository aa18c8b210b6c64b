"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, StrEnum, auto

BOARD_SIZE = 8
MAX_SHIP_SIZE = 4


class Side(StrEnum):
    """Owner of a board."""

    SELF = "self"
    THEM = "them"

    @property
    def opponent(self) -> Side:
        return Side.THEM if self is Side.SELF else Side.SELF


class CellState(IntEnum):
    """Engine-side state of one board cell.

    Values are ordered: anything below ``NEAR`` has not been fired upon,
    anything from ``MISS`` upwards is decided.
    """

    EMPTY = 0
    OCCUPIED = 1
    NEAR = 2
    MISS = 3
    HIT = 4
    SUNK = 5

    @property
    def is_unfired(self) -> bool:
        return self < CellState.NEAR

    @property
    def is_decided(self) -> bool:
        return self >= CellState.MISS


class ShotOutcome(StrEnum):
    """Result of a single shot."""

    ALREADY_DECIDED = "ALREADY_DECIDED"
    MISS = "MISS"
    HIT = "HIT"
    HIT_AND_SUNK = "HIT_AND_SUNK"

    @property
    def is_hit(self) -> bool:
        return self in (ShotOutcome.HIT, ShotOutcome.HIT_AND_SUNK)


class Phase(Enum):
    """Game session phases."""

    SETUP = auto()
    PLACED = auto()
    IN_PLAY = auto()
    ENDED = auto()


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate, ``x`` is the column and ``y`` the row."""

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> Coord:
        return Coord(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


DIRECTIONS: tuple[tuple[int, int], ...] = ((0, -1), (-1, 0), (0, 1), (1, 0))


class Axis(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @property
    def step(self) -> tuple[int, int]:
        return (1, 0) if self is Axis.HORIZONTAL else (0, 1)

    @property
    def perpendicular(self) -> Axis:
        return Axis.VERTICAL if self is Axis.HORIZONTAL else Axis.HORIZONTAL


def pyramid_fleet(max_size: int = MAX_SHIP_SIZE) -> tuple[int, ...]:
    """Ship sizes largest first: size ``s`` appears ``max_size - s + 1`` times."""
    if max_size < 1:
        raise ValueError("max ship size must be positive")
    sizes: list[int] = []
    for count, size in enumerate(range(max_size, 0, -1), start=1):
        sizes.extend([size] * count)
    return tuple(sizes)


DEFAULT_FLEET: tuple[int, ...] = pyramid_fleet()
