# flappy/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_n

from .config import FPS, COLOR_FG, SEED_DEFAULT, SimulationConfig
from .engine import GameEngine
from .logging_config import configure_logging
from .render import draw_frame

logger = logging.getLogger(__name__)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--log-level", type=str, default=None,
                   help="Overrides FLAPPY_LOG_LEVEL (DEBUG, INFO, ...)")
    return p.parse_args()


def run():
    args = parse_args()
    configure_logging(level=args.log_level)

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals GameEngine to randomize
    else:
        launch_seed = args.seed

    config = SimulationConfig()
    engine = GameEngine(config, seed=launch_seed)
    frame = engine.reset()

    pygame.init()
    pygame.display.set_caption("Flappy — playable baseline")
    screen = pygame.display.set_mode((int(config.width), int(config.height)))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 32)
    hud_font = pygame.font.SysFont("jetbrainsmono", 14)

    def new_engine(seed_spec):
        eng = GameEngine(config, seed=seed_spec)
        logger.info("new engine (seed=%s)", eng.seed)
        return eng, eng.reset()

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            flap = (event.type == pygame.KEYDOWN and event.key == K_SPACE) or \
                   (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1)
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_r and frame.game_over:
                    # Restart SAME seed
                    engine, frame = new_engine(engine.seed)
                if event.key == K_n and frame.game_over:
                    engine, frame = new_engine(None)
            if flap:
                if engine.running:
                    engine.jump()
                elif not frame.game_over:
                    frame = engine.start()

        frame = engine.next_frame()

        draw_frame(screen, frame, font)
        hud = f"Seed: {engine.seed}   {'RUNNING' if engine.running else ('GAME OVER' if frame.game_over else 'READY')}"
        screen.blit(hud_font.render(hud, True, COLOR_FG), (8, 6))
        if not frame.game_started:
            screen.blit(hud_font.render("SPACE / click to start", True, COLOR_FG), (8, 24))
        if frame.game_over:
            screen.blit(hud_font.render("R restart | N new seed | ESC quit", True, COLOR_FG), (8, 24))

        pygame.display.flip()


if __name__ == "__main__":
    run()
