"""Battleship game engine: boards, fleet placement, shots and the computer opponent."""

from seabattle.core.errors import (
    BattleshipError,
    FleetConfigurationError,
    InvalidCoordinateError,
    NoTargetAvailableError,
    PlacementExhaustedError,
)
from seabattle.core.models import CellState, Coord, Phase, ShotOutcome, Side
from seabattle.core.rules import (
    GameSession,
    TurnResult,
    create_session,
    place_fleets,
    player_fire,
    start_game,
)
from seabattle.infra.config import GameConfig

__all__ = [
    "BattleshipError",
    "CellState",
    "Coord",
    "FleetConfigurationError",
    "GameConfig",
    "GameSession",
    "InvalidCoordinateError",
    "NoTargetAvailableError",
    "Phase",
    "PlacementExhaustedError",
    "ShotOutcome",
    "Side",
    "TurnResult",
    "create_session",
    "place_fleets",
    "player_fire",
    "start_game",
]
