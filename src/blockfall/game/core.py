from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .grid import GameGrid, collides
from .pieces import Piece, TetrominoType, spawn_piece
from .placement import AssistSuggestion, PlacementCandidate, best_column, best_placement, should_suggest
from .randomizer import HoldSlot, PieceQueue, SevenBag
from .rotation import try_rotate
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    HOLD = 6
    ACCEPT_ASSIST = 7
    PAUSE = 8
    NONE = 9


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    lookahead: int = 5
    random_seed: Optional[int] = None
    search_margin: int = 2
    assist_height_threshold: int = 14
    assist_holes_threshold: int = 2

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {self.width}x{self.height}")
        if self.lookahead < 1:
            raise ValueError(f"lookahead must be >= 1, got {self.lookahead}")
        if self.search_margin < 0:
            raise ValueError(f"search_margin must be >= 0, got {self.search_margin}")


class BlockfallGame:
    """Owns the whole game state: grid, active piece, queue, hold, score and suggestions.

    Every input and clock call goes through this object. Blocked moves and
    rejected rotations return False and leave the state untouched; the only
    terminal condition is a spawn (or hold swap) that collides, after which
    everything but `reset` is a no-op.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.bag = SevenBag(self.rng)
        self.queue = PieceQueue(self.bag, self.config.lookahead)
        self.hold_slot = HoldSlot()
        self.current_piece: Optional[Piece] = None
        self.best: Optional[PlacementCandidate] = None
        self.assist: Optional[AssistSuggestion] = None
        self.score = 0
        self.lines_cleared_total = 0
        self.level = 1
        self.gravity_interval_ms = self.rules.gravity_interval_ms(self.level)
        self.drop_counter_ms = 0.0
        self.pieces_locked = 0
        self.paused = False
        self.game_over = False
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.bag.clear()
        self.queue.clear()
        self.queue.fill()
        self.hold_slot.reset()
        self.current_piece = None
        self.best = None
        self.assist = None
        self.score = 0
        self.lines_cleared_total = 0
        self.level = 1
        self.gravity_interval_ms = self.rules.gravity_interval_ms(self.level)
        self.drop_counter_ms = 0.0
        self.pieces_locked = 0
        self.paused = False
        self.game_over = False
        self.spawn()

    # ---------- Spawning ----------
    def _place_new_piece(self, kind: TetrominoType) -> bool:
        self.current_piece = spawn_piece(kind, self.grid.width)
        # Immediate collision check: if overlaps, game over
        if collides(self.grid, self.current_piece):
            self.game_over = True
            self.best = None
            self.assist = None
            logger.debug("game over: %s cannot spawn (score=%d, lines=%d)",
                         kind.name, self.score, self.lines_cleared_total)
            return False
        return True

    def spawn(self) -> bool:
        kind = self.queue.pop()
        if not self._place_new_piece(kind):
            return False
        self.refresh_best()
        self.refresh_assist()
        return True

    def refresh_best(self) -> None:
        if self.current_piece is None or self.game_over:
            self.best = None
            return
        self.best = best_placement(self.grid, self.current_piece, self.config.search_margin)

    def refresh_assist(self) -> None:
        if self.current_piece is None or self.game_over:
            self.assist = None
            return
        if not should_suggest(self.grid, self.config.assist_height_threshold, self.config.assist_holes_threshold):
            self.assist = None
            return
        self.assist = best_column(self.grid, self.current_piece)

    # ---------- Input ----------
    def _accepts_input(self) -> bool:
        return self.current_piece is not None and not self.game_over and not self.paused

    def move(self, dx: int) -> bool:
        if not self._accepts_input():
            return False
        assert self.current_piece is not None
        if collides(self.grid, self.current_piece, dx, 0):
            return False
        self.current_piece.x += dx
        return True

    def rotate(self, direction: int) -> bool:
        if not self._accepts_input():
            return False
        assert self.current_piece is not None
        rotated = try_rotate(self.grid, self.current_piece, direction)
        if rotated is None:
            return False
        self.current_piece = rotated
        self.refresh_best()
        return True

    def soft_drop(self) -> bool:
        """Move down one row (scoring the soft-drop bonus) or lock if grounded."""
        if not self._accepts_input():
            return False
        assert self.current_piece is not None
        if collides(self.grid, self.current_piece, 0, 1):
            self.lock()
            return False
        self.current_piece.y += 1
        self.score += self.rules.soft_drop_bonus
        return True

    def hard_drop(self) -> int:
        if not self._accepts_input():
            return 0
        assert self.current_piece is not None
        dropped = 0
        while not collides(self.grid, self.current_piece, 0, 1):
            self.current_piece.y += 1
            dropped += 1
        self.lock()
        self.score += self.rules.hard_drop_bonus
        return dropped

    def hold(self) -> bool:
        if not self._accepts_input() or not self.hold_slot.can_hold:
            return False
        assert self.current_piece is not None
        active = self.current_piece.kind
        held = self.hold_slot.kind
        self.hold_slot.kind = active
        self.hold_slot.can_hold = False
        logger.debug("hold: %s -> slot, %s out", active.name, held.name if held is not None else "queue")
        if held is None:
            self.spawn()
        elif self._place_new_piece(held):
            self.refresh_best()
            self.refresh_assist()
        return True

    def toggle_pause(self) -> bool:
        if self.game_over:
            return False
        self.paused = not self.paused
        return True

    def accept_assist(self) -> bool:
        """Move the active piece to the suggested column; no rotation, no drop."""
        if not self._accepts_input() or self.assist is None:
            return False
        assert self.current_piece is not None
        suggestion = self.assist
        self.assist = None
        dx = suggestion.x - self.current_piece.x
        if collides(self.grid, self.current_piece, dx, 0):
            return False
        self.current_piece.x = suggestion.x
        return True

    # ---------- Locking ----------
    def lock(self) -> int:
        assert self.current_piece is not None
        piece = self.current_piece
        self.grid.stamp(piece.cells(), int(piece.kind))
        lines = self.grid.clear_full_lines()
        self.pieces_locked += 1
        if lines:
            self.score += self.rules.score_for_lines(lines, self.level)
            self.lines_cleared_total += lines
            level = self.rules.level_for_lines(self.lines_cleared_total)
            if level != self.level:
                logger.debug("level %d -> %d", self.level, level)
            self.level = level
            self.gravity_interval_ms = self.rules.gravity_interval_ms(self.level)
        logger.debug("locked %s at (%d, %d) rot=%d, cleared %d", piece.kind.name, piece.x, piece.y,
                     piece.rotation, lines)
        self.hold_slot.can_hold = True
        self.drop_counter_ms = 0.0
        self.spawn()
        return lines

    # ---------- Clock ----------
    def advance(self, elapsed_ms: float) -> bool:
        """Accumulate elapsed time; perform at most one gravity step (or lock)."""
        if not self._accepts_input():
            return False
        assert self.current_piece is not None
        self.drop_counter_ms += elapsed_ms
        if self.drop_counter_ms <= self.gravity_interval_ms:
            return False
        self.drop_counter_ms = 0.0
        if collides(self.grid, self.current_piece, 0, 1):
            self.lock()
        else:
            self.current_piece.y += 1
        return True

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_board(), 0, True, {}

        score_before = self.score
        if action == Action.LEFT:
            self.move(-1)
        elif action == Action.RIGHT:
            self.move(1)
        elif action == Action.ROTATE_CW:
            self.rotate(1)
        elif action == Action.ROTATE_CCW:
            self.rotate(-1)
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.HOLD:
            self.hold()
        elif action == Action.ACCEPT_ASSIST:
            self.accept_assist()
        elif action == Action.PAUSE:
            self.toggle_pause()
        elif action == Action.NONE:
            pass

        info = {
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "level": self.level,
        }
        return self.get_board(), self.score - score_before, self.game_over, info

    # ---------- Observation ----------
    def ghost_y(self) -> Optional[int]:
        if self.current_piece is None:
            return None
        dy = 0
        while not collides(self.grid, self.current_piece, 0, dy + 1):
            dy += 1
        return self.current_piece.y + dy

    def get_board(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state

    def get_state(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.clone_state(),
            "piece": self.current_piece,
            "ghost_y": self.ghost_y(),
            "best": self.best,
            "assist": self.assist,
            "hold": self.hold_slot.kind,
            "can_hold": self.hold_slot.can_hold,
            "queue": self.queue.peek(),
            "score": self.score,
            "lines": self.lines_cleared_total,
            "level": self.level,
            "paused": self.paused,
            "game_over": self.game_over,
        }
