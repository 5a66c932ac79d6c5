"""Game module for Blockfall.

Exports the core game engine and supporting classes:
- Board: Occupancy grid, placement checks and line clearing
- Piece: Tetromino instance with rotation state and anchor
- TetrominoKind: Enum of the seven piece kinds
- ScoringRules: Scoring, leveling and speed curve
- Intent / translate_key: Key name to game intent mapping
- Snapshot: Read-only view for renderers
- TetrisEngine: State machine driving one game session
"""

from .grid import Board
from .pieces import BASE_SHAPES, Piece, TetrominoKind, rotate
from .rules import ScoringRules
from .intents import DEFAULT_KEYMAP, Intent, translate_key
from .state import Phase
from .snapshot import FLASH_CELL, Snapshot
from .core import GameConfig, TetrisEngine

__all__ = [
    "Board",
    "BASE_SHAPES",
    "Piece",
    "TetrominoKind",
    "rotate",
    "ScoringRules",
    "DEFAULT_KEYMAP",
    "Intent",
    "translate_key",
    "Phase",
    "FLASH_CELL",
    "Snapshot",
    "GameConfig",
    "TetrisEngine",
]
