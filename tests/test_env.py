import unittest

import gymnasium as gym
import numpy as np

import blockfall.env  # noqa: F401
from blockfall.env.blockfall_env import BlockfallEnv
from blockfall.game import Action, GameConfig, Piece, PlacementCandidate, TetrominoType
from blockfall.runners.autoplay import run_autoplay, steer


class BlockfallEnvTests(unittest.TestCase):
    def setUp(self):
        self.env = BlockfallEnv(config=GameConfig(random_seed=3), render_mode="rgb_array")

    def tearDown(self):
        self.env.close()

    def test_reset_observation(self):
        obs, info = self.env.reset(seed=5)
        self.assertEqual(obs["grid"].shape, (20, 10))
        self.assertEqual(obs["queue"].shape, (5,))
        self.assertEqual(obs["hold"], 0)
        self.assertEqual(info["score"], 0)
        self.assertTrue(self.env.observation_space.contains(obs))

    def test_hard_drop_reward(self):
        self.env.reset(seed=5)
        obs, reward, terminated, truncated, info = self.env.step(int(Action.HARD_DROP))
        self.assertEqual(reward, 2.0)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertEqual(int(np.count_nonzero(self.env.game.grid.grid)), 4)

    def test_invalid_action(self):
        self.env.reset(seed=5)
        with self.assertRaises(ValueError):
            self.env.step(len(Action))

    def test_render(self):
        self.env.reset(seed=5)
        img = self.env.render()
        self.assertEqual(img.shape, (20 * 12, 10 * 12, 3))

    def test_registered(self):
        env = gym.make("Blockfall-10x20-v0")
        obs, info = env.reset(seed=1)
        self.assertIn("grid", obs)
        env.close()


class AutoplayTests(unittest.TestCase):
    def test_steer(self):
        target = PlacementCandidate(rotation=3, x=2, y=18, lines=0, holes=0, height=2, score=-2)
        from blockfall.game import BlockfallGame

        game = BlockfallGame(GameConfig(random_seed=0))
        game.current_piece = Piece(TetrominoType.T, 0, 5, 0)
        self.assertEqual(steer(game, target), Action.ROTATE_CCW)
        game.current_piece = Piece(TetrominoType.T, 2, 5, 0)
        self.assertEqual(steer(game, target), Action.ROTATE_CW)
        game.current_piece = Piece(TetrominoType.T, 3, 5, 0)
        self.assertEqual(steer(game, target), Action.LEFT)
        game.current_piece = Piece(TetrominoType.T, 3, 1, 0)
        self.assertEqual(steer(game, target), Action.RIGHT)
        game.current_piece = Piece(TetrominoType.T, 3, 2, 0)
        self.assertEqual(steer(game, target), Action.HARD_DROP)
        self.assertEqual(steer(game, None), Action.HARD_DROP)

    def test_run_autoplay(self):
        stats = run_autoplay(pieces=25, seed=7)
        self.assertGreater(stats["pieces"], 0)
        self.assertLessEqual(stats["pieces"], 25)
        if not stats["game_over"]:
            self.assertEqual(stats["pieces"], 25)
        self.assertGreaterEqual(stats["score"], 2 * stats["pieces"])


if __name__ == "__main__":
    unittest.main()
