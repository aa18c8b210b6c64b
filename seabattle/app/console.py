"""Plain-text presentation of boards and game events."""

from __future__ import annotations

import re

from seabattle.app.events import (
    FleetsPlaced,
    GameEvent,
    GameOver,
    GameStarted,
    PlacementRetried,
    ShipPlaced,
    Shot,
)
from seabattle.core.board import FleetStats
from seabattle.core.errors import InvalidCoordinateError
from seabattle.core.models import CellState, Coord, ShotOutcome, Side

HIDDEN = "~"
GLYPHS: dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.NEAR: "-",
    CellState.OCCUPIED: "#",
    CellState.MISS: "o",
    CellState.HIT: "x",
    CellState.SUNK: "X",
}

_LABEL_RE = re.compile(r"^\s*([A-Za-z])\s*(\d+)\s*$")


def cell_label(coord: Coord, size: int) -> str:
    """Return ``<column letter><row number>``, rows counted from the bottom."""
    return f"{chr(ord('A') + coord.x)}{size - coord.y}"


def parse_coordinate(text: str, size: int) -> Coord:
    """Parse a label such as ``B3`` into a coordinate.

    Raises ``ValueError`` for malformed labels and ``InvalidCoordinateError``
    for labels outside the board.
    """
    match = _LABEL_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid coordinate format: {text!r}")
    column, row = match.groups()
    coord = Coord(ord(column.upper()) - ord("A"), size - int(row))
    if not (0 <= coord.x < size and 0 <= coord.y < size):
        raise InvalidCoordinateError(coord, size)
    return coord


class ConsoleRenderer:
    """Render sink keeping a visible text grid per side."""

    def __init__(self) -> None:
        self._size = 0
        self._visible: dict[Side, dict[Coord, CellState]] = {Side.SELF: {}, Side.THEM: {}}

    def reset_board(self, side: Side, size: int) -> None:
        self._size = size
        self._visible[side] = {}

    def show_cell(self, side: Side, coord: Coord, state: CellState) -> None:
        self._visible[side][coord] = state

    def glyph(self, side: Side, coord: Coord) -> str:
        state = self._visible[side].get(coord)
        if state is None:
            return HIDDEN if side is Side.THEM else GLYPHS[CellState.EMPTY]
        return GLYPHS[state]

    def render(self, stats: dict[Side, FleetStats] | None = None) -> str:
        """Render both boards side by side, own board on the left."""
        size = self._size
        header = "   " + " ".join(chr(ord("A") + x) for x in range(size))
        gap = "    "
        lines = [f"{'self':<{len(header)}}{gap}them", f"{header}{gap}{header}"]
        for y in range(size):
            row_label = f"{size - y:>2} "
            own = " ".join(self.glyph(Side.SELF, Coord(x, y)) for x in range(size))
            enemy = " ".join(self.glyph(Side.THEM, Coord(x, y)) for x in range(size))
            lines.append(f"{row_label}{own}{gap}{row_label}{enemy}")
        if stats is not None:
            own_stat = stats[Side.SELF].describe()
            lines.append(f"{own_stat:<{len(header)}}{gap}{stats[Side.THEM].describe()}")
        return "\n".join(lines)


def describe_event(event: GameEvent, size: int) -> str | None:
    """Turn a game event into a status line, or ``None`` if it is not announced."""
    if isinstance(event, ShipPlaced):
        if event.side is Side.THEM:
            return None
        return f"Ship of size {event.size} placed at {cell_label(event.bow, size)}."
    if isinstance(event, PlacementRetried):
        return f"Placement attempt {event.attempt} failed: {event.reason} -- trying again."
    if isinstance(event, FleetsPlaced):
        return "All ships are placed. Start the game when ready."
    if isinstance(event, GameStarted):
        return "Game started."
    if isinstance(event, Shot):
        return _describe_shot(event, size)
    if isinstance(event, GameOver):
        name = "you have" if event.winner is Side.SELF else "AI has"
        return f"Game ended: {name} won!!!"
    return None


def _describe_shot(event: Shot, size: int) -> str:
    label = cell_label(event.coord, size)
    if event.outcome is ShotOutcome.ALREADY_DECIDED:
        return f"{label} was already fired upon."
    shooter = "You" if event.side is Side.THEM else "AI"
    result = {
        ShotOutcome.MISS: "miss",
        ShotOutcome.HIT: "hit",
        ShotOutcome.HIT_AND_SUNK: "hit and sunk",
    }[event.outcome]
    return f"{shooter} fired at {label}: {result}."
