"""Rendering boundary used by the game session."""

from __future__ import annotations

from typing import Protocol

from seabattle.core.models import CellState, Coord, Side


class RenderSink(Protocol):
    """Receives visible cell changes; presentation is up to the implementation."""

    def reset_board(self, side: Side, size: int) -> None:
        """Forget everything shown for ``side``."""

    def show_cell(self, side: Side, coord: Coord, state: CellState) -> None:
        """Show the new state of one cell."""


class NullRenderSink:
    """Render sink that discards every update."""

    def reset_board(self, side: Side, size: int) -> None:
        return None

    def show_cell(self, side: Side, coord: Coord, state: CellState) -> None:
        return None
