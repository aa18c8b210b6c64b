"""Game configuration read from the environment and optional ``.env`` files."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from seabattle.core.models import BOARD_SIZE, MAX_SHIP_SIZE, pyramid_fleet

DEFAULT_PLACEMENT_ATTEMPTS = 20


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable board/fleet configuration."""

    board_size: int = BOARD_SIZE
    max_ship_size: int = MAX_SHIP_SIZE
    placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS
    seed: int | None = None

    @property
    def fleet(self) -> tuple[int, ...]:
        return pyramid_fleet(self.max_ship_size)


def load_game_config() -> GameConfig:
    """Load game configuration from env vars."""
    seed_raw = os.getenv("SEABATTLE_SEED")
    seed = _int("SEABATTLE_SEED", 0) if seed_raw is not None and seed_raw.strip() else None
    return GameConfig(
        board_size=_int("SEABATTLE_BOARD_SIZE", BOARD_SIZE),
        max_ship_size=_int("SEABATTLE_MAX_SHIP_SIZE", MAX_SHIP_SIZE),
        placement_attempts=max(1, _int("SEABATTLE_PLACEMENT_ATTEMPTS", DEFAULT_PLACEMENT_ATTEMPTS)),
        seed=seed,
    )


def read_env_file(path: str | Path) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines; a missing file reads as empty."""
    env_path = Path(path)
    if not env_path.is_file():
        return {}
    values: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_env_line(line)
        if parsed is not None:
            key, value = parsed
            values[key] = value
    return values


def load_env_files(
    paths: Sequence[str | Path] = (".env", ".env.local"), *, override: bool = True
) -> dict[str, str]:
    """Export env files into ``os.environ``, later files winning; return what was set."""
    merged: dict[str, str] = {}
    for path in paths:
        merged.update(read_env_file(path))
    applied = {key: value for key, value in merged.items() if override or key not in os.environ}
    os.environ.update(applied)
    return applied


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if line.startswith("#"):
        return None
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return key, value


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default
