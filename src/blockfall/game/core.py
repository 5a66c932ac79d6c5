from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from .grid import Board
from .intents import Intent
from .pieces import Piece, TetrominoKind
from .rules import ScoringRules
from .snapshot import Snapshot
from .state import GameSession, Phase, UndoSnapshot


logger = logging.getLogger(__name__)

PieceSource = Callable[[], TetrominoKind]


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    # Line-clear flash: `flash_cycles` on/off cycles of `flash_ticks` ticks per half.
    flash_cycles: int = 2
    flash_ticks: int = 4
    high_score: int = 0
    top_row_game_over: bool = False

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if self.flash_cycles < 0:
            raise ValueError("flash_cycles must be >= 0")
        if self.flash_ticks < 1:
            raise ValueError("flash_ticks must be >= 1")
        if self.high_score < 0:
            raise ValueError("high_score must be >= 0")


class TetrisEngine:
    """Deterministic falling-block game engine.

    The owning loop calls `step()` once per frame with at most one intent
    and the number of gravity ticks that elapsed. Every call returns a fresh
    `Snapshot`; the session itself is never handed out.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        board: Optional[Board] = None,
        piece_source: Optional[PieceSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self._piece_source: PieceSource = piece_source or self._random_kind
        if board is not None and (board.width, board.height) != (self.config.width, self.config.height):
            raise ValueError(
                f"board is {board.width}x{board.height}, config expects {self.config.width}x{self.config.height}"
            )
        self._session = self._new_session(board, self.config.high_score)

    # ---------- Public API ----------
    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def game_over(self) -> bool:
        return self._session.phase == Phase.GAME_OVER

    def step(self, intent: Optional[Intent] = None, ticks_elapsed: int = 0) -> Snapshot:
        if ticks_elapsed < 0:
            raise ValueError(f"ticks_elapsed must be >= 0, got {ticks_elapsed}")
        if intent is not None:
            self._apply_intent(intent)
        for _ in range(ticks_elapsed):
            self._tick()
        return self.snapshot()

    def restart(self) -> Snapshot:
        s = self._session
        best = max(s.high_score, s.score)
        logger.info("Restarting session (final score %d, high score %d)", s.score, best)
        self._session = self._new_session(None, best)
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        s = self._session
        board = s.board.clone_state()
        board.setflags(write=False)
        return Snapshot(
            board=board,
            active=s.active,
            next_kind=s.next_kind,
            score=s.score,
            level=s.level,
            total_lines_cleared=s.total_lines_cleared,
            phase=s.phase,
            high_score=s.high_score,
            ticks_per_drop=s.ticks_per_drop,
            can_undo=s.undo is not None,
            flashing_rows=s.flashing_rows,
            flash_on=self._flash_on(),
            quit_requested=s.quit_requested,
        )

    # ---------- Session lifecycle ----------
    def _random_kind(self) -> TetrominoKind:
        return self.rng.choice(list(TetrominoKind))

    def _new_session(self, board: Optional[Board], high_score: int) -> GameSession:
        if board is None:
            board = Board(self.config.width, self.config.height)
        active_kind = self._piece_source()
        session = GameSession(
            board=board,
            active=None,
            next_kind=self._piece_source(),
            ticks_per_drop=self.rules.base_ticks_per_drop,
            high_score=high_score,
        )
        self._spawn(session, active_kind)
        return session

    def _spawn(self, session: GameSession, kind: TetrominoKind) -> None:
        piece = Piece.spawn(kind, session.board.width)
        session.active = piece
        session.tick_counter = 0
        blocked = not session.board.can_place(piece)
        if not blocked and self.config.top_row_game_over:
            blocked = session.board.is_top_row_blocked()
        if blocked:
            session.phase = Phase.GAME_OVER
            logger.info("Game over: %s cannot spawn (score %d)", kind.name, session.score)
        else:
            session.phase = Phase.PLAYING

    def _promote_next(self) -> None:
        s = self._session
        kind = s.next_kind
        s.next_kind = self._piece_source()
        self._spawn(s, kind)

    # ---------- Intents ----------
    def _apply_intent(self, intent: Intent) -> None:
        s = self._session
        if intent == Intent.QUIT:
            s.quit_requested = True
            s.phase = Phase.GAME_OVER
            s.flashing_rows = ()
            return
        if intent == Intent.RESTART:
            self.restart()
            return
        if intent == Intent.PAUSE:
            if s.phase == Phase.PLAYING:
                s.phase = Phase.PAUSED
            elif s.phase == Phase.PAUSED:
                s.phase = Phase.PLAYING
            return
        if s.phase != Phase.PLAYING:
            logger.debug("Ignoring %s while %s", intent.name, s.phase.value)
            return

        assert s.active is not None
        if intent == Intent.MOVE_LEFT:
            self._try_replace(s.active.moved(0, -1))
        elif intent == Intent.MOVE_RIGHT:
            self._try_replace(s.active.moved(0, 1))
        elif intent == Intent.ROTATE:
            # No wall kicks: a rotation that does not fit in place is dropped
            self._try_replace(s.active.rotated(1))
        elif intent == Intent.SOFT_DROP:
            if not s.board.can_place(s.active.moved(1, 0)):
                self._lock_active()
            else:
                s.active = s.active.moved(1, 0)
        elif intent == Intent.HARD_DROP:
            self._hard_drop()
        elif intent == Intent.UNDO:
            self._undo()

    def _try_replace(self, candidate: Piece) -> bool:
        s = self._session
        if s.board.can_place(candidate):
            s.active = candidate
            return True
        logger.debug("Rejected move to %s", candidate)
        return False

    def _hard_drop(self) -> None:
        s = self._session
        assert s.active is not None
        piece = s.active
        while s.board.can_place(piece.moved(1, 0)):
            piece = piece.moved(1, 0)
        s.active = piece
        self._lock_active()

    def _undo(self) -> None:
        s = self._session
        snap = s.undo
        if snap is None:
            logger.debug("Nothing to undo")
            return
        s.board = snap.board
        s.active = snap.active
        s.next_kind = snap.next_kind
        s.score = snap.score
        s.undo = None
        s.tick_counter = 0
        logger.debug("Undid last lock (score back to %d)", s.score)

    # ---------- Gravity, locking, line clears ----------
    def _tick(self) -> None:
        s = self._session
        if s.phase == Phase.PLAYING:
            s.tick_counter += 1
            if s.tick_counter >= s.ticks_per_drop:
                s.tick_counter = 0
                self._gravity_step()
        elif s.phase == Phase.LINE_CLEAR_ANIMATING:
            s.animation_ticks += 1
            if s.animation_ticks >= self._animation_length():
                self._finish_line_clear()

    def _gravity_step(self) -> None:
        s = self._session
        assert s.active is not None
        below = s.active.moved(1, 0)
        if s.board.can_place(below):
            s.active = below
        else:
            self._lock_active()

    def _lock_active(self) -> None:
        s = self._session
        piece = s.active
        assert piece is not None
        s.undo = UndoSnapshot(board=s.board.copy(), active=piece, next_kind=s.next_kind, score=s.score)
        s.board.lock(piece)
        s.score += self.rules.placement_score
        s.active = None
        s.pieces_placed += 1
        self._speed_up_for_pieces()
        logger.debug("Locked %s r%d at (%d, %d)", piece.kind.name, piece.rotation, piece.row, piece.col)

        rows = s.board.detect_full_rows()
        if not rows:
            self._promote_next()
            return
        s.flashing_rows = tuple(rows)
        s.animation_ticks = 0
        if self._animation_length() == 0:
            self._finish_line_clear()
        else:
            s.phase = Phase.LINE_CLEAR_ANIMATING

    def _finish_line_clear(self) -> None:
        s = self._session
        cleared = s.board.clear_rows(s.flashing_rows)
        s.total_lines_cleared += cleared
        level = max(s.level, self.rules.level_for_lines(s.total_lines_cleared))
        if level > s.level:
            logger.info("Level up: %d -> %d", s.level, level)
        s.level = level
        s.ticks_per_drop = min(s.ticks_per_drop, self.rules.ticks_per_drop_for_level(level))
        s.score += self.rules.score_for_lines(cleared, level)
        logger.debug("Cleared %d line(s), total %d, score %d", cleared, s.total_lines_cleared, s.score)
        s.flashing_rows = ()
        s.animation_ticks = 0
        self._promote_next()

    def _animation_length(self) -> int:
        return self.config.flash_cycles * 2 * self.config.flash_ticks

    def _flash_on(self) -> bool:
        s = self._session
        if s.phase != Phase.LINE_CLEAR_ANIMATING:
            return False
        return (s.animation_ticks // self.config.flash_ticks) % 2 == 0

    def _speed_up_for_pieces(self) -> None:
        s = self._session
        every = self.rules.pieces_per_speedup
        if every and s.pieces_placed % every == 0 and s.ticks_per_drop >= self.rules.speedup_floor:
            s.ticks_per_drop -= 1
            logger.debug("Speed up after %d pieces: %d ticks per drop", s.pieces_placed, s.ticks_per_drop)
