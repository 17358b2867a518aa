import unittest

from blockfall.game import KICKS, ROTATIONS, GameGrid, Piece, TetrominoType, spawn_piece, try_rotate
from blockfall.game.pieces import validate_rotations


class CatalogTests(unittest.TestCase):
    def test_every_kind_has_four_states_of_four_cells(self):
        self.assertEqual(set(ROTATIONS), set(TetrominoType))
        for states in ROTATIONS.values():
            self.assertEqual(len(states), 4)
            for offsets in states:
                self.assertEqual(len(set(offsets)), 4)

    def test_validation_rejects_missing_state(self):
        table = dict(ROTATIONS)
        table[TetrominoType.O] = ROTATIONS[TetrominoType.O][:3]
        with self.assertRaises(ValueError):
            validate_rotations(table)

    def test_validation_rejects_duplicate_offsets(self):
        table = dict(ROTATIONS)
        table[TetrominoType.T] = (((0, 0), (0, 0), (1, 0), (2, 0)),) + ROTATIONS[TetrominoType.T][1:]
        with self.assertRaises(ValueError):
            validate_rotations(table)

    def test_validation_rejects_missing_kind(self):
        table = dict(ROTATIONS)
        del table[TetrominoType.Z]
        with self.assertRaises(ValueError):
            validate_rotations(table)

    def test_spawn_positions(self):
        self.assertEqual(spawn_piece(TetrominoType.T, 10), Piece(TetrominoType.T, 0, 5, 0))
        self.assertEqual(spawn_piece(TetrominoType.I, 10), Piece(TetrominoType.I, 0, 5, -1))

    def test_cells_follow_anchor(self):
        piece = Piece(TetrominoType.O, 2, 3, 7)
        self.assertEqual(sorted(piece.cells()), [(3, 7), (3, 8), (4, 7), (4, 8)])


class RotationTests(unittest.TestCase):
    def test_kick_order(self):
        self.assertEqual(KICKS, ((0, 0), (-1, 0), (1, 0), (-2, 0), (2, 0), (0, -1), (0, 1)))

    def test_rotation_in_open_space_keeps_position(self):
        grid = GameGrid(10, 20)
        rotated = try_rotate(grid, Piece(TetrominoType.T, 0, 4, 10), 1)
        self.assertEqual(rotated, Piece(TetrominoType.T, 1, 4, 10))
        rotated = try_rotate(grid, Piece(TetrominoType.T, 0, 4, 10), -1)
        self.assertEqual(rotated, Piece(TetrominoType.T, 3, 4, 10))

    def test_wall_kick_two_steps_right(self):
        grid = GameGrid(10, 20)
        # vertical bar flush against the left wall
        bar = Piece(TetrominoType.I, 1, -1, 5)
        rotated = try_rotate(grid, bar, 1)
        self.assertEqual(rotated, Piece(TetrominoType.I, 2, 1, 5))

    def test_no_legal_kick_returns_none(self):
        grid = GameGrid(10, 20)
        grid.grid[:, :] = 1
        piece = Piece(TetrominoType.T, 0, 4, 10)
        for x, y in piece.cells():
            grid.grid[y, x] = 0
        self.assertIsNone(try_rotate(grid, piece, 1))
        self.assertIsNone(try_rotate(grid, piece, -1))
        self.assertEqual(piece, Piece(TetrominoType.T, 0, 4, 10))


if __name__ == "__main__":
    unittest.main()
