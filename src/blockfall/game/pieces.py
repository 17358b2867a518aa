from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Offset = Tuple[int, int]
RotationStates = Tuple[Tuple[Offset, ...], ...]


# (dx, dy) offsets relative to the piece anchor, one tuple per rotation state
ROTATIONS: Dict[TetrominoType, RotationStates] = {
    TetrominoType.I: (
        ((-1, 0), (0, 0), (1, 0), (2, 0)),
        ((1, -1), (1, 0), (1, 1), (1, 2)),
        ((-1, 1), (0, 1), (1, 1), (2, 1)),
        ((0, -1), (0, 0), (0, 1), (0, 2)),
    ),
    TetrominoType.J: (
        ((-1, 0), (0, 0), (1, 0), (1, 1)),
        ((0, -1), (0, 0), (0, 1), (1, -1)),
        ((-1, -1), (-1, 0), (0, 0), (1, 0)),
        ((-1, 1), (0, -1), (0, 0), (0, 1)),
    ),
    TetrominoType.L: (
        ((-1, 0), (0, 0), (1, 0), (-1, 1)),
        ((0, -1), (0, 0), (0, 1), (1, 1)),
        ((1, -1), (-1, 0), (0, 0), (1, 0)),
        ((-1, -1), (0, -1), (0, 0), (0, 1)),
    ),
    TetrominoType.O: (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    TetrominoType.S: (
        ((-1, 1), (0, 1), (0, 0), (1, 0)),
        ((0, -1), (0, 0), (1, 0), (1, 1)),
        ((-1, 1), (0, 1), (0, 0), (1, 0)),
        ((0, -1), (0, 0), (1, 0), (1, 1)),
    ),
    TetrominoType.T: (
        ((-1, 0), (0, 0), (1, 0), (0, 1)),
        ((0, -1), (0, 0), (0, 1), (1, 0)),
        ((0, -1), (-1, 0), (0, 0), (1, 0)),
        ((-1, 0), (0, -1), (0, 0), (0, 1)),
    ),
    TetrominoType.Z: (
        ((-1, 0), (0, 0), (0, 1), (1, 1)),
        ((1, -1), (0, 0), (1, 0), (0, 1)),
        ((-1, 0), (0, 0), (0, 1), (1, 1)),
        ((1, -1), (0, 0), (1, 0), (0, 1)),
    ),
}

NUM_ROTATIONS = 4
CELLS_PER_PIECE = 4


def validate_rotations(table: Dict[TetrominoType, RotationStates]) -> None:
    """Raise ValueError unless every kind has 4 states of 4 distinct offsets."""
    missing = set(TetrominoType) - set(table)
    if missing:
        names = ", ".join(sorted(kind.name for kind in missing))
        raise ValueError(f"rotation table is missing kinds: {names}")
    for kind, states in table.items():
        if len(states) != NUM_ROTATIONS:
            raise ValueError(f"{kind.name}: expected {NUM_ROTATIONS} rotation states, got {len(states)}")
        for index, offsets in enumerate(states):
            if len(offsets) != CELLS_PER_PIECE or len(set(offsets)) != CELLS_PER_PIECE:
                raise ValueError(
                    f"{kind.name} rotation {index}: expected {CELLS_PER_PIECE} distinct offsets, got {offsets!r}"
                )


validate_rotations(ROTATIONS)


@dataclass
class Piece:
    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: int = 0
    y: int = 0

    def offsets(self, rotation: Optional[int] = None) -> Tuple[Offset, ...]:
        if rotation is None:
            rotation = self.rotation
        return ROTATIONS[self.kind][rotation % NUM_ROTATIONS]

    def cells_at(self, origin_x: int, origin_y: int, rotation: Optional[int] = None) -> List[Tuple[int, int]]:
        return [(origin_x + dx, origin_y + dy) for dx, dy in self.offsets(rotation)]

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)

    def moved(self, dx: int = 0, dy: int = 0, rotation: Optional[int] = None) -> "Piece":
        if rotation is None:
            rotation = self.rotation
        return Piece(self.kind, rotation % NUM_ROTATIONS, self.x + dx, self.y + dy)


def spawn_piece(kind: TetrominoType, width: int) -> Piece:
    """Spawn position: rotation 0, centred, row 0 (the I bar one row higher)."""
    y = -1 if kind == TetrominoType.I else 0
    return Piece(kind=kind, rotation=0, x=width // 2, y=y)
