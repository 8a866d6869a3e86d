"""Console-driven UI loop for the maze."""
from __future__ import annotations

import argparse
import asyncio
import logging
import secrets
import sys
from typing import Sequence

from fmaze.data.errors import DataError
from fmaze.data.repositories import EntitiesRepository, SettingsRepository
from fmaze.presentation.cli.render import render_board, render_result, render_roulette, render_status
from fmaze.services.controllers import Command, Confirm, GameController, Move, Regenerate

_MAX_RANDOM_SEED = 2**31 - 1
_MOVE_KEYS = {
    "w": "up",
    "up": "up",
    "s": "down",
    "down": "down",
    "a": "left",
    "left": "left",
    "d": "right",
    "right": "right",
}

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fmaze", description="Walk the maze, spin the roulette, find the key.")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible maze (default: random)")
    parser.add_argument("--profile", default="default", help="settings profile from settings.json")
    parser.add_argument("--definitions", default=None, help="directory holding entities.json and settings.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def parse_command(raw: str) -> Command | None | str:
    """Translate one line of input; returns "quit" for the quit key."""
    text = raw.strip().lower()
    if text in ("", "space", "enter"):
        return Confirm()
    if text in ("q", "quit"):
        return "quit"
    if text in ("r", "regen", "regenerate"):
        return Regenerate()
    direction = _MOVE_KEYS.get(text)
    if direction is not None:
        return Move(direction)  # type: ignore[arg-type]
    return None


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive console session."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    seed = args.seed if args.seed is not None else secrets.randbelow(_MAX_RANDOM_SEED)
    try:
        controller = GameController.from_repositories(
            SettingsRepository(args.definitions),
            EntitiesRepository(args.definitions),
            profile=args.profile,
            seed=seed,
        )
    except (DataError, KeyError) as exc:
        print(f"Unable to load game definitions: {exc}", file=sys.stderr)
        return 1
    print("=== Fantastic Maze ===")
    print(f"Seed: {seed}  (w/a/s/d to move, ENTER to stop/confirm, r to regenerate, q to quit)")
    try:
        asyncio.run(_run(controller))
    except (KeyboardInterrupt, EOFError):
        print()
    print("Goodbye!")
    return 0


async def _run(controller: GameController) -> None:
    controller.engine.set_selection_listener(lambda idx: _print_highlight(controller, idx))
    while True:
        snapshot = controller.snapshot()
        print()
        print(render_board(snapshot))
        print(render_status(snapshot))
        if snapshot.encounter is not None:
            print(render_roulette(snapshot, controller.entity_name))
        result_text = render_result(snapshot)
        if result_text:
            print(result_text)

        raw = await asyncio.to_thread(input, "> ")
        command = parse_command(raw)
        if command == "quit":
            controller.engine.cancel()
            return
        if command is None:
            print("Unknown command.")
            continue
        controller.handle(command)  # type: ignore[arg-type]


def _print_highlight(controller: GameController, idx: int) -> None:
    encounter = controller.state.encounter.descriptor
    if encounter is None:
        return
    sys.stdout.write(f"\r  >> {encounter.options[idx].label:<20}")
    sys.stdout.flush()
