"""Plain-text rendering helpers for the console front end."""
from __future__ import annotations

from typing import Callable, Dict, List

from fmaze.core.types import Position
from fmaze.services.controllers import GameSnapshot

WALL = "#"
OPEN = "."
PLAYER = "@"
EXIT = "E"
ENTITY_GLYPHS: Dict[str, str] = {
    "bones": "b",
    "wolf": "w",
    "maw": "M",
    "hp_vial": "+",
    "key": "k",
}


def render_board(snapshot: GameSnapshot) -> str:
    """Return the maze as lines of glyphs, player drawn on top."""
    glyph_at: Dict[Position, str] = {}
    for tag, positions in snapshot.entities.items():
        glyph = ENTITY_GLYPHS.get(tag, "?")
        for pos in positions:
            glyph_at[pos] = glyph

    size = snapshot.size
    lines: List[str] = []
    for row in range(size):
        chars: List[str] = []
        for col in range(size):
            pos = (row, col)
            if pos == snapshot.player:
                chars.append(PLAYER)
            elif pos in glyph_at:
                chars.append(glyph_at[pos])
            elif pos == (size - 1, size - 1):
                chars.append(EXIT)
            else:
                chars.append(WALL if snapshot.grid[row][col] else OPEN)
        lines.append(" ".join(chars))
    return "\n".join(lines)


def render_status(snapshot: GameSnapshot) -> str:
    hearts = snapshot.health // 10
    parts = [
        f"HP {snapshot.health:>3} [{'♥' * hearts}{' ' * (10 - hearts)}]",
        "key: yes" if snapshot.has_key else "key: no",
    ]
    if snapshot.reveal_exit_turns:
        parts.append(f"exit revealed ({snapshot.reveal_exit_turns})")
    if snapshot.exit_locked:
        parts.append("exit sealed")
    return " | ".join(parts)


def render_roulette(snapshot: GameSnapshot, name_for: Callable[[str], str]) -> str:
    encounter = snapshot.encounter
    if encounter is None:
        return ""
    cells = []
    for idx, option in enumerate(encounter.options):
        label = option.label
        cells.append(f"[{label}]" if idx == snapshot.selected_index else f" {label} ")
    header = f"=== VS {name_for(encounter.entity_tag)} ==="
    if snapshot.spinning:
        footer = "Press ENTER to stop the roulette!"
    elif snapshot.selected_index is not None:
        footer = f"Result: {encounter.options[snapshot.selected_index].label}. Press ENTER to continue."
    else:
        footer = ""
    return "\n".join([header, "  ".join(cells), footer])


def render_result(snapshot: GameSnapshot) -> str:
    if snapshot.result == "won":
        return "You escaped the maze! Press ENTER to play again."
    if snapshot.result == "lost":
        return "You have fallen. Press ENTER to try a new maze."
    return ""
