import random
import unittest

from blockfall.game import BlockfallGame, GameConfig, PieceQueue, SevenBag, TetrominoType


class SevenBagTests(unittest.TestCase):
    def test_each_bag_is_a_permutation(self):
        bag = SevenBag(random.Random(5))
        draws = [bag.draw() for _ in range(35)]
        for start in range(0, 35, 7):
            self.assertEqual(sorted(draws[start:start + 7]), sorted(TetrominoType))

    def test_refill_only_when_empty(self):
        bag = SevenBag(random.Random(1))
        bag.refill()
        remaining = list(bag.bag)
        bag.draw()
        bag.refill()
        self.assertEqual(bag.bag, remaining[1:])

    def test_same_seed_same_sequence(self):
        first = SevenBag(random.Random(42))
        second = SevenBag(random.Random(42))
        self.assertEqual([first.draw() for _ in range(14)], [second.draw() for _ in range(14)])


class PieceQueueTests(unittest.TestCase):
    def test_pop_keeps_lookahead(self):
        queue = PieceQueue(SevenBag(random.Random(3)), lookahead=5)
        queue.fill()
        self.assertEqual(len(queue), 5)
        upcoming = queue.peek()
        self.assertEqual(queue.pop(), upcoming[0])
        self.assertEqual(len(queue), 5)
        self.assertEqual(queue.peek()[:4], upcoming[1:])


class SpawnSequenceTests(unittest.TestCase):
    def test_spawns_are_bag_aligned(self):
        game = BlockfallGame(GameConfig(random_seed=11))
        kinds = [game.current_piece.kind]
        for _ in range(20):
            self.assertTrue(game.spawn())
            self.assertEqual(len(game.queue), game.config.lookahead)
            kinds.append(game.current_piece.kind)
        for start in range(0, 21, 7):
            self.assertEqual(sorted(kinds[start:start + 7]), sorted(TetrominoType))

    def test_reset_with_seed_is_deterministic(self):
        game = BlockfallGame()
        game.reset(seed=9)
        first = (game.current_piece.kind, game.queue.peek())
        game.hard_drop()
        game.reset(seed=9)
        self.assertEqual((game.current_piece.kind, game.queue.peek()), first)


class HoldTests(unittest.TestCase):
    def setUp(self):
        self.game = BlockfallGame(GameConfig(random_seed=2))

    def test_first_hold_stores_and_spawns(self):
        active = self.game.current_piece.kind
        upcoming = self.game.queue.peek()[0]
        self.assertTrue(self.game.hold())
        self.assertEqual(self.game.hold_slot.kind, active)
        self.assertEqual(self.game.current_piece.kind, upcoming)
        self.assertFalse(self.game.hold_slot.can_hold)

    def test_second_hold_before_lock_has_no_effect(self):
        self.game.hold()
        piece = self.game.current_piece
        held = self.game.hold_slot.kind
        queue = self.game.queue.peek()
        self.assertFalse(self.game.hold())
        self.assertIs(self.game.current_piece, piece)
        self.assertEqual(self.game.hold_slot.kind, held)
        self.assertEqual(self.game.queue.peek(), queue)

    def test_lock_resets_permission_and_swap_uses_spawn_position(self):
        first = self.game.current_piece.kind
        self.game.hold()
        self.game.hard_drop()
        self.assertTrue(self.game.hold_slot.can_hold)

        active = self.game.current_piece.kind
        self.game.move(-1)
        self.game.rotate(1)
        self.assertTrue(self.game.hold())
        self.assertEqual(self.game.hold_slot.kind, active)
        piece = self.game.current_piece
        self.assertEqual(piece.kind, first)
        self.assertEqual(piece.rotation, 0)
        self.assertEqual(piece.x, self.game.grid.width // 2)
        self.assertEqual(piece.y, -1 if first == TetrominoType.I else 0)


if __name__ == "__main__":
    unittest.main()
