

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .pieces import TetrominoType


class SevenBag:
    """7-bag randomizer.

    Every kind is drawn exactly once per bag; the bag is reshuffled when it
    runs empty, so each bag-aligned run of 7 draws is a permutation of all kinds.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.bag: List[TetrominoType] = []

    def refill(self) -> None:
        if self.bag:
            return
        kinds = list(TetrominoType)
        self.rng.shuffle(kinds)
        self.bag = kinds

    def draw(self) -> TetrominoType:
        if not self.bag:
            self.refill()
        return self.bag.pop(0)

    def clear(self) -> None:
        self.bag = []


class PieceQueue:
    """Upcoming kinds, kept at least `lookahead` long."""

    def __init__(self, bag: SevenBag, lookahead: int = 5) -> None:
        self.bag = bag
        self.lookahead = int(lookahead)
        self.items: List[TetrominoType] = []

    def fill(self) -> None:
        while len(self.items) < self.lookahead:
            self.items.append(self.bag.draw())

    def pop(self) -> TetrominoType:
        self.fill()
        kind = self.items.pop(0)
        self.fill()
        return kind

    def peek(self) -> Tuple[TetrominoType, ...]:
        return tuple(self.items[: self.lookahead])

    def clear(self) -> None:
        self.items = []

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class HoldSlot:
    kind: Optional[TetrominoType] = None
    can_hold: bool = True

    def reset(self) -> None:
        self.kind = None
        self.can_hold = True
