from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np

from .pieces import Piece, TetrominoKind


EMPTY = 0


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


class Board:
    """Occupancy grid of locked blocks.

    Only the interior playfield is stored: 0 marks an empty cell and
    1..7 the `TetrominoKind` that filled it. Row 0 is the top (spawn)
    row. The falling piece is never written here until it locks.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from text rows, '.' empty and a kind letter occupied."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        board = cls(width, height)
        for r, line in enumerate(rows):
            _require(len(line) == width, f"row {r} has width {len(line)}, expected {width}")
            for c, ch in enumerate(line):
                if ch != ".":
                    board.grid[r, c] = int(TetrominoKind[ch.upper()])
        return board

    def to_rows(self) -> List[str]:
        return [
            "".join("." if v == EMPTY else TetrominoKind(int(v)).name for v in row)
            for row in self.grid
        ]

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row: int, col: int) -> Optional[TetrominoKind]:
        _require(self.is_inside(row, col), f"cell ({row}, {col}) outside {self.height}x{self.width} board")
        v = int(self.grid[row, col])
        return None if v == EMPTY else TetrominoKind(v)

    def can_place(self, piece: Piece) -> bool:
        for row, col in piece.cells():
            if not self.is_inside(row, col):
                return False
            if self.grid[row, col] != EMPTY:
                return False
        return True

    def lock(self, piece: Piece) -> None:
        """Write the piece's kind into every cell it occupies."""
        _require(self.can_place(piece), f"cannot lock {piece} on occupied or out-of-range cells")
        value = int(piece.kind)
        for row, col in piece.cells():
            self.grid[row, col] = value

    def detect_full_rows(self) -> List[int]:
        full_rows = np.where(np.all(self.grid != EMPTY, axis=1))[0]
        return [int(r) for r in full_rows]

    def clear_rows(self, rows: Iterable[int]) -> int:
        """Remove the given full rows, shifting everything above down.

        Rows are taken top to bottom. Clearing a row only moves the rows
        above it, so lower rows still pending keep their index.
        """
        cleared = 0
        for r in sorted(set(rows)):
            _require(0 <= r < self.height, f"row {r} outside [0, {self.height})")
            _require(bool(np.all(self.grid[r] != EMPTY)), f"row {r} is not full")
            self.grid[1 : r + 1] = self.grid[0:r].copy()
            self.grid[0].fill(EMPTY)
            cleared += 1
        return cleared

    def is_top_row_blocked(self) -> bool:
        return bool(np.any(self.grid[0] != EMPTY))

    def occupied_rows(self) -> int:
        return int(np.count_nonzero(np.any(self.grid != EMPTY, axis=1)))

    def copy(self) -> "Board":
        new_board = Board(self.width, self.height)
        new_board.grid = self.grid.copy()
        return new_board

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool(np.array_equal(self.grid, other.grid))
