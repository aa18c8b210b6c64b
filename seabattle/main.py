"""Console entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import replace

from seabattle.app.console import ConsoleRenderer, describe_event, parse_coordinate
from seabattle.app.events import EventBus, GameEvent
from seabattle.core.errors import BattleshipError, FleetConfigurationError
from seabattle.core.models import Phase, Side
from seabattle.core.rules import GameSession, create_session, place_fleets, player_fire, start_game
from seabattle.infra.config import load_env_files, load_game_config
from seabattle.infra.logging import setup_logging

logger = logging.getLogger(__name__)

HELP = "Commands: p = place ships, s = start game, <cell> (e.g. B3) = fire, q = quit."


def build_session(seed: int | None = None, emit: Callable[[str], None] = print) -> tuple[GameSession, ConsoleRenderer]:
    """Create a session wired to a console renderer and an event printer."""
    config = load_game_config()
    if seed is not None:
        config = replace(config, seed=seed)
    renderer = ConsoleRenderer()
    events = EventBus()

    def announce(event: GameEvent) -> None:
        line = describe_event(event, config.board_size)
        if line is not None:
            emit(line)

    events.subscribe(GameEvent, announce)
    session = create_session(config, renderer=renderer, events=events)
    for side in Side:
        renderer.reset_board(side, config.board_size)
    return session, renderer


def handle_command(session: GameSession, command: str, emit: Callable[[str], None] = print) -> bool:
    """Apply one console command; return ``False`` when the user quits."""
    command = command.strip()
    if not command:
        return True
    if command.lower() == "q":
        return False
    if command.lower() == "p":
        place_fleets(session)
    elif command.lower() == "s":
        if not start_game(session):
            emit("Place the ships first.")
    else:
        try:
            coord = parse_coordinate(command, session.config.board_size)
        except ValueError as exc:
            emit(f"{exc}. {HELP}")
            return True
        result = player_fire(session, coord)
        if not result.accepted:
            emit("The game is not running. " + HELP)
    return session.phase is not Phase.ENDED


def main(argv: list[str] | None = None) -> int:
    """Run an interactive game in the terminal."""
    parser = argparse.ArgumentParser(description="Play Battleship against the computer.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible games.")
    args = parser.parse_args(argv)

    load_env_files()
    setup_logging()
    try:
        session, renderer = build_session(seed=args.seed)
    except FleetConfigurationError as exc:
        logger.error("invalid game configuration: %s", exc)
        return 2

    print(HELP)
    running = True
    while running:
        print(renderer.render({side: board.stats for side, board in session.boards.items()}))
        try:
            command = input("> ")
        except EOFError:
            break
        try:
            running = handle_command(session, command)
        except BattleshipError:
            logger.exception("game aborted")
            return 1
    if session.phase is Phase.ENDED:
        print(renderer.render({side: board.stats for side, board in session.boards.items()}))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
