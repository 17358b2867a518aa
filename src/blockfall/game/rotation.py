

from __future__ import annotations

from typing import Optional, Tuple

from .grid import GameGrid, collides
from .pieces import NUM_ROTATIONS, Piece


# No offset, left, right, two left, two right, up, down
KICKS: Tuple[Tuple[int, int], ...] = ((0, 0), (-1, 0), (1, 0), (-2, 0), (2, 0), (0, -1), (0, 1))


def try_rotate(grid: GameGrid, piece: Piece, direction: int) -> Optional[Piece]:
    """Try to rotate the piece through the kick list; return the new piece or None if every kick fails."""
    new_rotation = (piece.rotation + direction + NUM_ROTATIONS) % NUM_ROTATIONS
    for dx, dy in KICKS:
        if not collides(grid, piece, dx, dy, new_rotation):
            return piece.moved(dx, dy, new_rotation)
    return None
