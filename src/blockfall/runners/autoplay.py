

from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import gymnasium as gym

import blockfall.env  # noqa: F401
from blockfall.game import Action, BlockfallGame, PlacementCandidate, print_grid

logger = logging.getLogger(__name__)

# Moves spent steering one piece before it is dropped where it stands
MAX_STEERING_STEPS = 40


def steer(game: BlockfallGame, target: Optional[PlacementCandidate]) -> Action:
    """Next action bringing the active piece onto `target`: rotate, shift, then hard drop."""
    piece = game.current_piece
    if piece is None or target is None:
        return Action.HARD_DROP
    turns = (target.rotation - piece.rotation) % 4
    if turns == 3:
        return Action.ROTATE_CCW
    if turns:
        return Action.ROTATE_CW
    if piece.x < target.x:
        return Action.RIGHT
    if piece.x > target.x:
        return Action.LEFT
    return Action.HARD_DROP


def run_autoplay(pieces: int = 200, seed: Optional[int] = None, show: bool = False) -> Dict[str, int]:
    env = gym.make("Blockfall-10x20-v0")
    try:
        obs, info = env.reset(seed=seed)
        game: BlockfallGame = env.unwrapped.game

        tracked = -1
        target: Optional[PlacementCandidate] = None
        steering = 0
        while game.pieces_locked < pieces:
            # Pick a target once per piece; later overlay refreshes are ignored
            if tracked != game.pieces_locked:
                tracked = game.pieces_locked
                target = game.best
                steering = 0
            action = steer(game, target)
            steering += 1
            if steering > MAX_STEERING_STEPS:
                logger.debug("piece %d: target unreachable, dropping in place", game.pieces_locked)
                action = Action.HARD_DROP
            obs, reward, terminated, truncated, info = env.step(int(action))
            if terminated or truncated:
                break

        if show:
            print_grid(game.get_board())
        return {
            "pieces": game.pieces_locked,
            "lines": game.lines_cleared_total,
            "score": game.score,
            "level": game.level,
            "game_over": int(game.game_over),
        }
    finally:
        env.close()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Blockfall headlessly with the best-placement heuristic")
    p.add_argument("--pieces", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--show", action="store_true", help="print the final board")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    stats = run_autoplay(args.pieces, args.seed, args.show)
    print(
        f"Autoplay: pieces={stats['pieces']} lines={stats['lines']} "
        f"score={stats['score']} level={stats['level']} game_over={bool(stats['game_over'])}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
