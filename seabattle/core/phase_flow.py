"""Declarative session phase transitions."""

from __future__ import annotations

from dataclasses import dataclass

from seabattle.core.models import Phase


@dataclass(frozen=True, slots=True)
class PhaseTransition:
    """One transition; ``source=None`` matches any phase."""

    trigger: str
    source: Phase | None
    target: Phase


class PhaseProgram:
    """Transition table resolving the next phase for a trigger."""

    def __init__(self, transitions: tuple[PhaseTransition, ...]) -> None:
        self._transitions = transitions

    def resolve(self, current: Phase, trigger: str) -> Phase | None:
        """Return the first matching target, or ``None`` when the trigger is not allowed."""
        for transition in self._transitions:
            if transition.trigger == trigger and transition.source in (None, current):
                return transition.target
        return None


TRIGGER_RESET = "reset"
TRIGGER_PLACED = "placed"
TRIGGER_START = "start"
TRIGGER_FINISH = "finish"

SESSION_PHASES = PhaseProgram(
    (
        PhaseTransition(trigger=TRIGGER_RESET, source=None, target=Phase.SETUP),
        PhaseTransition(trigger=TRIGGER_PLACED, source=Phase.SETUP, target=Phase.PLACED),
        PhaseTransition(trigger=TRIGGER_START, source=Phase.PLACED, target=Phase.IN_PLAY),
        PhaseTransition(trigger=TRIGGER_FINISH, source=Phase.IN_PLAY, target=Phase.ENDED),
    )
)
