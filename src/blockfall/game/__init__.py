"""Game module for Blockfall.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation, collision and line clearing
- Piece: Tetromino piece with its 4 rotation states
- TetrominoType: Enum of available piece types
- SevenBag / PieceQueue / HoldSlot: Randomizer, lookahead queue and hold slot
- ScoringRules: Score, level and gravity configuration
- best_placement / best_column: Placement heuristic search
- BlockfallGame: Main game state and operations
"""

from .grid import GameGrid, collides, format_grid, print_grid
from .pieces import Piece, TetrominoType, ROTATIONS, spawn_piece
from .rotation import KICKS, try_rotate
from .randomizer import SevenBag, PieceQueue, HoldSlot
from .rules import ScoringRules
from .placement import (
    AssistSuggestion,
    BoardFeatures,
    PlacementCandidate,
    assist_reason,
    assist_score,
    best_column,
    best_placement,
    evaluate_board,
    overlay_score,
    should_suggest,
    simulate_landing,
)
from .core import BlockfallGame, GameConfig, Action

__all__ = [
    "GameGrid",
    "collides",
    "format_grid",
    "print_grid",
    "Piece",
    "TetrominoType",
    "ROTATIONS",
    "spawn_piece",
    "KICKS",
    "try_rotate",
    "SevenBag",
    "PieceQueue",
    "HoldSlot",
    "ScoringRules",
    "AssistSuggestion",
    "BoardFeatures",
    "PlacementCandidate",
    "assist_reason",
    "assist_score",
    "best_column",
    "best_placement",
    "evaluate_board",
    "overlay_score",
    "should_suggest",
    "simulate_landing",
    "BlockfallGame",
    "GameConfig",
    "Action",
]
