

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    soft_drop_bonus: int = 1
    hard_drop_bonus: int = 2
    lines_per_level: int = 10
    base_interval_ms: float = 1000.0
    level_decay: float = 0.85
    min_interval_ms: float = 100.0

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        # Clamp to the largest entry for variants that clear more than 4 rows
        index = min(lines, len(self.line_clear_scores)) - 1
        return self.line_clear_scores[index] * level

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def gravity_interval_ms(self, level: int) -> float:
        interval = self.base_interval_ms * self.level_decay ** (level - 1)
        return max(self.min_interval_ms, interval)
