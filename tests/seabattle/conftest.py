from __future__ import annotations

import random

import pytest

from seabattle.app.events import EventBus, GameEvent
from seabattle.core.board import Board
from seabattle.core.models import Axis, CellState, Coord, Side
from seabattle.core.placement import mark_ship


class RecordingRenderer:
    def __init__(self) -> None:
        self.resets: list[tuple[Side, int]] = []
        self.cells: list[tuple[Side, Coord, CellState]] = []

    def reset_board(self, side: Side, size: int) -> None:
        self.resets.append((side, size))
        self.cells = [cell for cell in self.cells if cell[0] is not side]

    def show_cell(self, side: Side, coord: Coord, state: CellState) -> None:
        self.cells.append((side, coord, state))

    def shown(self, side: Side, state: CellState) -> set[Coord]:
        return {coord for shown_side, coord, shown_state in self.cells if shown_side is side and shown_state is state}


class FirstChoiceRng(random.Random):
    """Deterministic stand-in that always takes the first option."""

    def choice(self, seq):
        return seq[0]

    def randrange(self, start, stop=None, step=1):
        return 0 if stop is None else start


def make_board(size: int = 8, ships: tuple[tuple[Coord, int, Axis], ...] = ()) -> Board:
    board = Board(size=size)
    for bow, length, axis in ships:
        mark_ship(board, bow, length, axis)
    board.replace(CellState.NEAR, CellState.EMPTY)
    return board


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def first_choice_rng() -> FirstChoiceRng:
    return FirstChoiceRng()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def event_log() -> tuple[EventBus, list[GameEvent]]:
    bus = EventBus()
    seen: list[GameEvent] = []
    bus.subscribe(GameEvent, seen.append)
    return bus, seen


@pytest.fixture
def board_factory():
    return make_board
