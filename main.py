import argparse
import logging
from dataclasses import replace

import pygame

from config.settings import BlockParams, SessionConfig, WindowConfig
from game.input import InputManager
from game.renderer import Renderer
from game.scene import GameScene

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    defaults = SessionConfig()
    parser = argparse.ArgumentParser(description="Category Switch: task-switching cost assessment")
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--trials", type=int, default=defaults.block.n_trials)
    parser.add_argument("--switch-rate", type=float, default=defaults.block.switch_rate)
    parser.add_argument("--feedback-ms", type=int, default=defaults.feedback_ms)
    parser.add_argument("--width", type=int, default=WindowConfig().width)
    parser.add_argument("--height", type=int, default=WindowConfig().height)
    parser.add_argument("--export", default=None, help="append finished sessions to this jsonl file")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    return parser.parse_args(argv)


def build_configs(args) -> tuple:
    window = replace(WindowConfig(), width=args.width, height=args.height)
    block = replace(BlockParams(), n_trials=args.trials, switch_rate=args.switch_rate)
    session = replace(
        SessionConfig(),
        seed=args.seed,
        feedback_ms=args.feedback_ms,
        export_path=args.export,
        block=block,
    )
    return window, session


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    window, session = build_configs(args)

    pygame.init()
    screen = pygame.display.set_mode((window.width, window.height))
    pygame.display.set_caption(window.title)
    clock = pygame.time.Clock()

    scene = GameScene(
        renderer=Renderer(screen),
        input_manager=InputManager(),
        config=session,
    )
    logger.info("Window %dx%d, %d trials, switch rate %.2f", window.width, window.height,
                session.block.n_trials, session.block.switch_rate)

    # -------------------------------------------------
    # Главный цикл
    # -------------------------------------------------
    running = True
    while running:
        clock.tick(window.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            scene.handle_event(event)

        scene.update()

    pygame.quit()


if __name__ == "__main__":
    main()
