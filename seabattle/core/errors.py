"""Game engine exception types."""

from __future__ import annotations

from seabattle.core.models import Axis, Coord, Side


class BattleshipError(Exception):
    """Base class for engine errors."""


class InvalidCoordinateError(BattleshipError, ValueError):
    """Coordinate lies outside the board."""

    def __init__(self, coord: Coord, size: int) -> None:
        super().__init__(f"coordinate {coord} is outside a {size}x{size} board")
        self.coord = coord
        self.size = size


class PlacementExhaustedError(BattleshipError):
    """No legal position is left for a ship on either axis."""

    def __init__(self, side: Side, size: int, axis: Axis) -> None:
        super().__init__(
            f"cannot place {side} ship of size {size} with axis {axis.value}: all cells are busy"
        )
        self.side = side
        self.size = size
        self.axis = axis


class FleetConfigurationError(BattleshipError):
    """Fleet cannot be placed on the configured board."""


class NoTargetAvailableError(BattleshipError):
    """Opponent found no cell to fire at while the game is still running."""
