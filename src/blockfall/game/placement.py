"""
Placement heuristics.

Exhaustive landing search for the active piece: every (rotation, column)
pair is dropped straight down on a copy of the grid and the resulting board
is scored. Two scoring variants exist:

- the best-placement overlay searches rotations and columns and uses
  ``overlay_score`` (10 per line, -5 per hole, -1 per row of height);
- the assist suggestion searches columns at the current rotation only and
  uses ``assist_score`` (8 per line, -5 per hole, -1.5 per row of height).

Nothing here mutates the grid or the piece it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .grid import GameGrid, collides
from .pieces import NUM_ROTATIONS, Piece


@dataclass(frozen=True)
class BoardFeatures:
    lines: int
    holes: int
    height: int


@dataclass(frozen=True)
class PlacementCandidate:
    rotation: int
    x: int
    y: int
    lines: int
    holes: int
    height: int
    score: float


@dataclass(frozen=True)
class AssistSuggestion:
    x: int
    score: float
    lines: int
    holes: int
    height: int
    reason: str = ""


ScoreFn = Callable[[BoardFeatures], float]


def evaluate_board(grid: GameGrid) -> BoardFeatures:
    """Full rows, holes and stack height of a board, without clearing anything."""
    return BoardFeatures(
        lines=grid.count_full_lines(),
        holes=grid.count_holes(),
        height=grid.get_max_height(),
    )


def overlay_score(features: BoardFeatures) -> float:
    return 10 * features.lines - 5 * features.holes - 1 * features.height


def assist_score(features: BoardFeatures) -> float:
    return 8 * features.lines - 5 * features.holes - 1.5 * features.height


def simulate_landing(grid: GameGrid, piece: Piece, rotation: int, x: int) -> Optional[Tuple[int, GameGrid]]:
    """Drop the piece from its current row at (rotation, x).

    Returns the resting row and a copy of the grid with the piece stamped in,
    or None when the piece already collides at its starting row.
    """
    test = Piece(piece.kind, rotation, x, piece.y)
    if collides(grid, test):
        return None
    while not collides(grid, test, 0, 1):
        test.y += 1
    landed = grid.clone()
    landed.stamp(test.cells(), int(test.kind))
    return test.y, landed


def best_placement(grid: GameGrid, piece: Piece, margin: int = 2,
                   score_fn: ScoreFn = overlay_score) -> Optional[PlacementCandidate]:
    """Best (rotation, column) landing for `piece`, or None if nothing is legal.

    Columns run from ``-margin`` to ``width + margin - 1`` so that rotations
    whose offsets reach left or right of the anchor are still tried. Ties keep
    the first candidate found (lowest rotation, then lowest column).
    """
    best: Optional[PlacementCandidate] = None
    for rotation in range(NUM_ROTATIONS):
        for x in range(-margin, grid.width + margin):
            landing = simulate_landing(grid, piece, rotation, x)
            if landing is None:
                continue
            y, landed = landing
            features = evaluate_board(landed)
            score = score_fn(features)
            if best is None or score > best.score:
                best = PlacementCandidate(
                    rotation=rotation,
                    x=x,
                    y=y,
                    lines=features.lines,
                    holes=features.holes,
                    height=features.height,
                    score=score,
                )
    return best


def assist_reason(suggestion: AssistSuggestion) -> str:
    if suggestion.lines >= 3:
        return "Prepare lines"
    if suggestion.holes > 0:
        return "Reduce holes"
    if suggestion.height > 14:
        return "Reduce height"
    return "Stabilize surface"


def best_column(grid: GameGrid, piece: Piece, score_fn: ScoreFn = assist_score) -> Optional[AssistSuggestion]:
    """Best column for the piece at its current rotation (coarser assist search)."""
    best: Optional[AssistSuggestion] = None
    for x in range(grid.width):
        landing = simulate_landing(grid, piece, piece.rotation, x)
        if landing is None:
            continue
        features = evaluate_board(landing[1])
        score = score_fn(features)
        if best is None or score > best.score:
            best = AssistSuggestion(x=x, score=score, lines=features.lines,
                                    holes=features.holes, height=features.height)
    if best is None:
        return None
    return AssistSuggestion(best.x, best.score, best.lines, best.holes, best.height, assist_reason(best))


def should_suggest(grid: GameGrid, height_threshold: int = 14, holes_threshold: int = 2) -> bool:
    return grid.get_max_height() >= height_threshold or grid.count_holes() >= holes_threshold
