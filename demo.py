"""Demo: solve a synthetic fingerprint puzzle without touching the real screen."""

from __future__ import annotations

import argparse
import asyncio
import logging
import time

from fingerprint.actuator import ActionExecutor, RecordingKeyboard
from fingerprint.bot import FingerprintBot
from fingerprint.capture import StaticCapture
from fingerprint.config import BotConfig
from fingerprint.utils import build_synthetic_library, compose_screen, set_random_seed


async def _no_wait(seconds: float) -> None:
    return None


def run_demo(variant: int = 2, seed: int = 42, show: bool = True) -> None:
    """Build a synthetic screen, run one bot cycle and report what it pressed."""
    config = BotConfig()
    layout = config.layout
    library = build_synthetic_library(layout, count=config.fingerprint_count, seed=seed)
    rng = set_random_seed(seed)
    answer_slots = [int(s) for s in rng.permutation(len(layout.slots))[:4]]
    screen = compose_screen(layout, library, variant, answer_slots)

    keyboard = RecordingKeyboard()
    executor = ActionExecutor(keyboard, key_delay=config.key_delay, sleep=_no_wait)
    bot = FingerprintBot(config, library, StaticCapture(screen), executor, sleep=_no_wait)

    start = time.perf_counter()
    report = asyncio.run(bot.poll())
    duration = time.perf_counter() - start

    print(f"Shown fingerprint: {variant}, answer slots: {answer_slots}")
    if report is None:
        print("Puzzle not detected")
        return
    print(f"Detected fingerprint: {report.variant}")
    print(f"Assignment (fragment -> slot): {report.assignment.as_dict()}")
    print(f"Move plan: {list(report.plan.steps)}")
    print(f"Keys: {' '.join(keyboard.presses)}")
    print(f"Correct: {list(report.assignment.slots) == answer_slots}")
    print(f"Cycle time: {duration:.4f}s")

    if show:
        import matplotlib.pyplot as plt

        plt.figure(figsize=(12, 7))
        plt.imshow(screen)
        plt.title("Synthetic screen")
        plt.axis("off")
        plt.tight_layout()
        plt.show()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Fingerprint solver demo")
    parser.add_argument("--variant", type=int, default=2, help="Fingerprint to show, default=2")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--no-show", action="store_true", help="Do not display the screen")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    run_demo(variant=args.variant, seed=args.seed, show=not args.no_show)
