from __future__ import annotations

from enum import IntEnum
from typing import Mapping, Optional


class Intent(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    HARD_DROP = 4
    PAUSE = 5
    UNDO = 6
    RESTART = 7
    QUIT = 8


# Key names as reported by pygame.key.name(); arrows and WASD both steer.
DEFAULT_KEYMAP: Mapping[str, Intent] = {
    "left": Intent.MOVE_LEFT,
    "a": Intent.MOVE_LEFT,
    "right": Intent.MOVE_RIGHT,
    "d": Intent.MOVE_RIGHT,
    "down": Intent.SOFT_DROP,
    "s": Intent.SOFT_DROP,
    "up": Intent.ROTATE,
    "w": Intent.ROTATE,
    "space": Intent.HARD_DROP,
    " ": Intent.HARD_DROP,
    "p": Intent.PAUSE,
    "u": Intent.UNDO,
    "r": Intent.RESTART,
    "x": Intent.QUIT,
    "escape": Intent.QUIT,
}


def translate_key(key: str, keymap: Mapping[str, Intent] = DEFAULT_KEYMAP) -> Optional[Intent]:
    """Map a key name to a game intent, or None for unbound keys."""
    if not key:
        return None
    name = key if key == " " else key.strip().lower()
    return keymap.get(name)
