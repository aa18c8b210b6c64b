"""Collaborator-facing seams: events, render sink and console presentation."""

from seabattle.app.events import EventBus, FleetsPlaced, GameEvent, GameOver, GameStarted, PlacementRetried, ShipPlaced, Shot
from seabattle.app.ports import NullRenderSink, RenderSink

__all__ = [
    "EventBus",
    "FleetsPlaced",
    "GameEvent",
    "GameOver",
    "GameStarted",
    "NullRenderSink",
    "PlacementRetried",
    "RenderSink",
    "ShipPlaced",
    "Shot",
]
