from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .pieces import Cell, Piece, TetrominoKind
from .state import Phase


# Cell value the renderer shows for rows in the "flash on" half-cycle.
FLASH_CELL = 8


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Read-only view of a session handed to renderers.

    `board` holds locked blocks only and is not writeable; use
    `composite()` for the grid with the falling piece drawn in.
    """

    board: np.ndarray
    active: Optional[Piece]
    next_kind: TetrominoKind
    score: int
    level: int
    total_lines_cleared: int
    phase: Phase
    high_score: int
    ticks_per_drop: int
    can_undo: bool
    flashing_rows: Tuple[int, ...] = ()
    flash_on: bool = False
    quit_requested: bool = False

    @property
    def width(self) -> int:
        return int(self.board.shape[1])

    @property
    def height(self) -> int:
        return int(self.board.shape[0])

    @property
    def active_cells(self) -> List[Cell]:
        if self.active is None:
            return []
        return self.active.cells()

    @property
    def is_new_high_score(self) -> bool:
        return self.score > self.high_score

    @property
    def best_score(self) -> int:
        return max(self.score, self.high_score)

    def composite(self) -> np.ndarray:
        # Overlay the falling piece (and the flash marker) on a writable copy
        state = self.board.copy()
        if self.phase == Phase.LINE_CLEAR_ANIMATING and self.flash_on:
            for r in self.flashing_rows:
                state[r, :] = FLASH_CELL
        for r, c in self.active_cells:
            if 0 <= r < self.height and 0 <= c < self.width:
                state[r, c] = int(self.active.kind)
        return state
