from __future__ import annotations

from typing import Dict

import pygame

from blockfall.game import Action, BlockfallGame
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_x: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
    pygame.K_a: Action.ACCEPT_ASSIST,
    pygame.K_p: Action.PAUSE,
}


def run() -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = BlockfallGame()
        renderer = Renderer(cell_size=28)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Blockfall")

        running = True
        while running:
            elapsed_ms = clock.tick(60)

            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            # Gravity
            game.advance(elapsed_ms)

            renderer.draw(screen, game.get_state())
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
