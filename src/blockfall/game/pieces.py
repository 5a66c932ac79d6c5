from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoKind(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray
Cell = Tuple[int, int]  # (row, col)


def _mask(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Rotation state 0, each padded to the bounding square the kind rotates in.
BASE_SHAPES: Dict[TetrominoKind, Shape] = {
    TetrominoKind.I: _mask([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoKind.O: _mask([[1, 1], [1, 1]]),
    TetrominoKind.T: _mask([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoKind.S: _mask([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoKind.Z: _mask([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
    TetrominoKind.J: _mask([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoKind.L: _mask([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
}


def box_size(kind: TetrominoKind) -> int:
    """Side of the bounding square the kind rotates in (2, 3 or 4)."""
    return int(BASE_SHAPES[kind].shape[0])


def rotate(shape: Shape, state: int) -> Shape:
    """Rotate a square mask clockwise by `state` quarter turns.

    State 0 is the identity, 1 is 90 degrees clockwise, 2 is 180 and 3 is
    270. The result stays inside the same bounding square, so the anchor of
    a piece never moves when it turns.
    """
    assert shape.ndim == 2 and shape.shape[0] == shape.shape[1], "rotation needs a square mask"
    k = state % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


@dataclass(frozen=True)
class Piece:
    """A tetromino at a rotation state, anchored by the top-left of its box.

    The anchor may sit outside the board as long as the occupied cells do
    not; only the board decides whether a placement is legal.
    """

    kind: TetrominoKind
    rotation: int = 0  # 0..3
    row: int = 0
    col: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoKind, board_width: int) -> "Piece":
        return cls(kind=kind, rotation=0, row=0, col=(board_width - box_size(kind)) // 2)

    def shape(self) -> Shape:
        return rotate(BASE_SHAPES[self.kind], self.rotation)

    def cells(self) -> List[Cell]:
        s = self.shape()
        rows, cols = np.nonzero(s)
        return [(self.row + int(r), self.col + int(c)) for r, c in zip(rows, cols)]

    def moved(self, drow: int, dcol: int) -> "Piece":
        return replace(self, row=self.row + drow, col=self.col + dcol)

    def rotated(self, delta: int = 1) -> "Piece":
        return replace(self, rotation=(self.rotation + delta) % 4)
