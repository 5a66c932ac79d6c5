from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .grid import Board
from .pieces import Piece, TetrominoKind


class Phase(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    LINE_CLEAR_ANIMATING = "line_clear_animating"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class UndoSnapshot:
    """State captured immediately before the most recent lock."""
    board: Board
    active: Piece
    next_kind: TetrominoKind
    score: int


@dataclass
class GameSession:
    """Mutable state of one game, owned by exactly one engine."""
    board: Board
    active: Optional[Piece]
    next_kind: TetrominoKind
    ticks_per_drop: int
    high_score: int = 0
    score: int = 0
    level: int = 1
    total_lines_cleared: int = 0
    tick_counter: int = 0
    pieces_placed: int = 0
    phase: Phase = Phase.PLAYING
    undo: Optional[UndoSnapshot] = None
    flashing_rows: Tuple[int, ...] = field(default_factory=tuple)
    animation_ticks: int = 0
    quit_requested: bool = False
