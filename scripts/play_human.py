#!/usr/bin/env python3
"""
Human Play Mode - Defend the wall by typing.

Controls:
    Letters / digits: Type the focused word
    Backspace: Clear the typed input
    Space: Drop a bomb
    After a stage ends: R to retry, N for the next stage
    ESC: Quit

Usage:
    python scripts/play_human.py
    python scripts/play_human.py --stage 2 --seed 7
"""
import sys
import os
import argparse
import warnings
from pathlib import Path
from typing import Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Suppress pygame messages
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
warnings.filterwarnings('ignore', category=UserWarning, module='pygame')

import pygame

from wordsiege.session import GameSession
from wordsiege.stage.events import StageEnded, BossSpawned, BombActivated
from wordsiege.stage.renderer import WordSiegeRenderer
from wordsiege.systems.stage_flow import StageOutcome
from wordsiege.systems.typing_resolver import BACKSPACE
from wordsiege.utils.config_loader import load_config

BOMB_KEY = "space"


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Word Siege - Defend the wall by typing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: config/default.yaml)"
    )
    parser.add_argument(
        "--stage",
        type=int,
        default=None,
        help="Stage number to start at, 1-based (default: saved progress)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible stages"
    )
    parser.add_argument(
        "--progress",
        type=str,
        default=None,
        help="Progress file (default: from config)"
    )
    return parser.parse_args()


def key_from_event(event) -> Optional[str]:
    """Translate a KEYDOWN event into a controller key."""
    if event.key == pygame.K_BACKSPACE:
        return BACKSPACE
    if event.key == pygame.K_SPACE:
        return BOMB_KEY
    char = getattr(event, "unicode", "") or ""
    if len(char) == 1 and char.isascii() and char.isalnum():
        return char.lower()
    return None


def report(summary, outcome: StageOutcome, stage_name: str) -> None:
    """Print the end-of-stage summary."""
    print("\n" + "=" * 50)
    print(f"{stage_name}: {'CLEARED' if outcome == StageOutcome.WON else 'WALL DESTROYED'}")
    print("=" * 50)
    print(f"  Score:        {summary.score}")
    print(f"  Best combo:   {summary.best_combo}")
    print(f"  Accuracy:     {summary.accuracy * 100:.1f}%")
    print(f"  Defeated:     {summary.enemies_defeated} "
          f"({summary.typed_eliminations} typed, {summary.bomb_eliminations} by bomb)")
    print(f"  Breaches:     {summary.breaches}")
    print("=" * 50 + "\n")


def main():
    """Main entry point for human play mode."""
    args = parse_args()
    config = load_config(args.config)
    progress_path = args.progress or config.progress.save_path

    session = GameSession.load(progress_path, stages=config.stages)
    if args.stage is not None:
        session.select_stage(args.stage - 1)

    pygame.init()
    width, height = config.display.window_width, config.display.window_height
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

    controller = session.create_controller(seed=args.seed)
    stage = session.current_stage
    pygame.display.set_caption(f"Word Siege - {stage.name}")

    renderer = WordSiegeRenderer(stage.config.width, stage.config.height)
    renderer.set_render_area(0, 0, width, height)

    print("\n" + "=" * 50)
    print("Word Siege - Human Mode")
    print("=" * 50)
    print("Controls:")
    print("  Type: Shoot the focused word")
    print("  Backspace: Clear input")
    print("  Space: Bomb")
    print("  R / N after a stage: Retry / Next stage")
    print("  ESC: Quit")
    print("=" * 50 + "\n")
    print(f"[Stage] {stage.name} ({stage.difficulty})")

    running = True
    clock = pygame.time.Clock()

    while running:
        delta_ms = clock.tick(config.display.render_fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                renderer.set_render_area(0, 0, event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False

                elif controller.is_over:
                    next_index = None
                    if event.key == pygame.K_r:
                        next_index = session.current_stage_index
                    elif event.key == pygame.K_n and controller.outcome == StageOutcome.WON:
                        candidate = session.current_stage_index + 1
                        if candidate < len(session.stages) and session.is_stage_unlocked(candidate):
                            next_index = candidate

                    if next_index is not None:
                        controller = session.create_controller(next_index, seed=args.seed)
                        stage = session.current_stage
                        renderer = WordSiegeRenderer(stage.config.width, stage.config.height)
                        renderer.set_render_area(0, 0, *screen.get_size())
                        pygame.display.set_caption(f"Word Siege - {stage.name}")
                        print(f"[Stage] {stage.name} ({stage.difficulty})")

                else:
                    key = key_from_event(event)
                    if key is not None:
                        controller.key_press(key)

        controller.update(delta_ms)

        for stage_event in controller.drain_events():
            if isinstance(stage_event, BossSpawned):
                print(f"[Stage] Boss incoming: {stage_event.name}")
            elif isinstance(stage_event, BombActivated):
                print(f"[Stage] Bomb cleared {stage_event.eliminated} hostiles")
            elif isinstance(stage_event, StageEnded):
                report(stage_event.summary, stage_event.outcome, stage.name)
                if stage_event.outcome == StageOutcome.WON:
                    session.mark_stage_completed(session.current_stage_index)
                if config.progress.autosave:
                    session.save(progress_path)

        screen.fill((0, 0, 0))
        renderer.render(controller.get_state(), screen)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
