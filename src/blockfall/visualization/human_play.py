from __future__ import annotations

import argparse
import logging
from typing import List

import pygame

from blockfall.game import GameConfig, Intent, Phase, TetrisEngine, translate_key
from blockfall.highscore import DEFAULT_PATH, HighScoreStore
from .renderer import Renderer


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Blockfall with the keyboard.")
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--tick-ms", type=int, default=50, help="milliseconds per gravity tick")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--highscore", type=str, default=DEFAULT_PATH)
    p.add_argument("--log-level", type=str, default="WARNING")
    return p


def _pending_intents() -> List[Intent]:
    intents: List[Intent] = []
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            intents.append(Intent.QUIT)
        elif event.type == pygame.KEYDOWN:
            intent = translate_key(pygame.key.name(event.key))
            if intent is not None:
                intents.append(intent)
    return intents


def run(cell_size: int = 28, tick_ms: int = 50, seed: int | None = None, highscore_path: str = DEFAULT_PATH) -> None:
    store = HighScoreStore(highscore_path)
    engine = TetrisEngine(GameConfig(random_seed=seed, high_score=store.load()))
    renderer = Renderer(cell_size=cell_size)

    pygame.init()
    try:
        snapshot = engine.snapshot()
        screen = pygame.display.set_mode(renderer.window_size(snapshot.width, snapshot.height))
        pygame.display.set_caption("Blockfall")
        clock = pygame.time.Clock()
        last_tick = pygame.time.get_ticks()
        saved_for_this_game = False

        while not snapshot.quit_requested:
            now = pygame.time.get_ticks()
            ticks = max(0, (now - last_tick) // tick_ms)
            last_tick += ticks * tick_ms

            intents = _pending_intents()
            # One intent per engine step; the elapsed ticks ride on the first call
            snapshot = engine.step(intents[0] if intents else None, ticks)
            for intent in intents[1:]:
                snapshot = engine.step(intent, 0)

            if snapshot.phase == Phase.GAME_OVER and not saved_for_this_game:
                logger.info("Game over with score %d", snapshot.score)
                store.save_if_beaten(snapshot.score)
                saved_for_this_game = True
            elif snapshot.phase != Phase.GAME_OVER:
                saved_for_this_game = False

            renderer.draw(screen, snapshot)
            clock.tick(60)
    finally:
        pygame.quit()
        store.save_if_beaten(engine.snapshot().score)


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(cell_size=args.cell_size, tick_ms=args.tick_ms, seed=args.seed, highscore_path=args.highscore)


if __name__ == "__main__":  # pragma: no cover
    main()
