

from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .pieces import Piece


Coordinate = Tuple[int, int]


class GameGrid:
    """Discrete 2D grid of locked cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the TetrominoType of the piece that filled the cell.
    Row 0 is the top row.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        # Cells above the top row are never occupied
        if y < 0:
            return False
        return bool(self.grid[y, x] != 0)

    def blocks(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if self.is_occupied(x, y):
                return True
        return False

    def stamp(self, cells: Iterable[Coordinate], value: int) -> None:
        """Write `value` into every visible cell; cells off the grid are clipped."""
        for x, y in cells:
            if self.is_inside(x, y):
                self.grid[y, x] = value

    def clear_full_lines(self) -> int:
        full = np.all(self.grid != 0, axis=1)
        cleared = int(full.sum())
        if cleared == 0:
            return 0
        # Remove full rows in one pass and add empty rows at the top
        remaining = self.grid[~full]
        new_rows = np.zeros((cleared, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return cleared

    def count_full_lines(self) -> int:
        return int(np.all(self.grid != 0, axis=1).sum())

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height)
        new_grid.grid = self.grid.copy()
        return new_grid

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


def collides(grid: GameGrid, piece: Piece, dx: int = 0, dy: int = 0, rotation: Optional[int] = None) -> bool:
    """Return True if the piece moved by (dx, dy) at `rotation` hits a wall, the floor or a block."""
    return grid.blocks(piece.cells_at(piece.x + dx, piece.y + dy, rotation))


def format_grid(grid: np.ndarray) -> str:
    return "\n".join("".join("█" if cell > 0 else ("▒" if cell < 0 else "·") for cell in row) for row in grid)


def print_grid(grid: np.ndarray) -> None:
    print(format_grid(grid))
