from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    placement_score: int = 250
    line_clear_scores: tuple[int, int, int, int] = (1000, 2000, 3000, 5000)
    lines_per_level: int = 2
    base_ticks_per_drop: int = 30
    ticks_per_level: int = 2
    min_ticks_per_drop: int = 2
    # Every `pieces_per_speedup` locks, one tick faster while at or above `speedup_floor` (0 disables).
    pieces_per_speedup: int = 50
    speedup_floor: int = 10

    def __post_init__(self) -> None:
        if self.placement_score < 0:
            raise ValueError("placement_score must be >= 0")
        if len(self.line_clear_scores) == 0 or any(v < 0 for v in self.line_clear_scores):
            raise ValueError("line_clear_scores must be a non-empty table of non-negative scores")
        if self.lines_per_level < 1:
            raise ValueError("lines_per_level must be >= 1")
        if self.min_ticks_per_drop < 1:
            raise ValueError("min_ticks_per_drop must be >= 1")
        if self.base_ticks_per_drop < self.min_ticks_per_drop:
            raise ValueError("base_ticks_per_drop must be >= min_ticks_per_drop")
        if self.ticks_per_level < 0:
            raise ValueError("ticks_per_level must be >= 0")
        if self.pieces_per_speedup < 0:
            raise ValueError("pieces_per_speedup must be >= 0")
        if self.speedup_floor <= self.min_ticks_per_drop:
            raise ValueError("speedup_floor must be > min_ticks_per_drop")

    def score_for_lines(self, lines: int, level: int) -> int:
        """One table entry per lock, picked by how many rows cleared."""
        if lines <= 0:
            return 0
        idx = min(lines, len(self.line_clear_scores)) - 1
        return self.line_clear_scores[idx] * level

    def level_for_lines(self, total_lines: int) -> int:
        return max(1, total_lines // self.lines_per_level + 1)

    def ticks_per_drop_for_level(self, level: int) -> int:
        return max(self.min_ticks_per_drop, self.base_ticks_per_drop - level * self.ticks_per_level)
