from __future__ import annotations

from typing import Tuple


Color = Tuple[int, int, int]

BACKGROUND: Color = (10, 10, 14)
EMPTY_CELL: Color = (20, 20, 26)

_PALETTE = {
    0: EMPTY_CELL,
    1: (0, 240, 240),  # I
    2: (240, 240, 0),  # O
    3: (160, 0, 240),  # T
    4: (0, 240, 0),    # S
    5: (240, 0, 0),    # Z
    6: (0, 0, 240),    # J
    7: (240, 160, 0),  # L
    8: (245, 245, 245),  # flashing row
}


def color_for_value(v: int) -> Color:
    return _PALETTE.get(abs(int(v)), (200, 200, 200))
