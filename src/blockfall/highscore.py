from __future__ import annotations

import logging
import os


logger = logging.getLogger(__name__)

DEFAULT_PATH = "highscore.txt"


class HighScoreStore:
    """Best score kept as a single integer in a text file."""

    def __init__(self, path: str = DEFAULT_PATH) -> None:
        self.path = path

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                value = int(f.read().strip())
        except (ValueError, UnicodeDecodeError):
            logger.warning("Ignoring unreadable high score file %s", self.path)
            return 0
        return max(0, value)

    def save_if_beaten(self, score: int) -> bool:
        if score <= self.load():
            return False
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(f"{int(score)}\n")
        logger.info("New high score %d saved to %s", score, self.path)
        return True
