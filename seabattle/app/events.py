"""Semantic game events and an in-process event bus."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from seabattle.core.models import Axis, Coord, ShotOutcome, Side

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base class for events published by the session."""


@dataclass(frozen=True, slots=True)
class ShipPlaced(GameEvent):
    side: Side
    size: int
    bow: Coord
    axis: Axis


@dataclass(frozen=True, slots=True)
class PlacementRetried(GameEvent):
    attempt: int
    reason: str


@dataclass(frozen=True, slots=True)
class FleetsPlaced(GameEvent):
    attempts: int


@dataclass(frozen=True, slots=True)
class GameStarted(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class Shot(GameEvent):
    """A shot resolved on ``side``'s board."""

    side: Side
    coord: Coord
    outcome: ShotOutcome


@dataclass(frozen=True, slots=True)
class GameOver(GameEvent):
    winner: Side


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class EventBus:
    """Simple in-process pub/sub with isinstance-based dispatch."""

    def __init__(self) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, tuple[type[object], EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for an event type."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = (event_type, handler)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._subscriptions.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Publish one event and return number of invoked handlers."""
        invoked = 0
        for subscribed_type, handler in tuple(self._subscriptions.values()):
            if isinstance(event, subscribed_type):
                handler(event)
                invoked += 1
        return invoked
