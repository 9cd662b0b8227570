"""Run the fingerprint bot against the live screen."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from fingerprint.actuator import ActionExecutor, PyAutoGUIKeyboard
from fingerprint.bot import run_bot
from fingerprint.capture import ScreenCapture
from fingerprint.config import DEFAULT_IMAGE_DIR, BotConfig


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Solve the fingerprint minigame automatically.")
    parser.add_argument(
        "--images",
        default=str(DEFAULT_IMAGE_DIR),
        help=f"Reference image directory, relative to the working directory (default: {DEFAULT_IMAGE_DIR})",
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-cycle scores")
    return parser.parse_args()


def main() -> int:
    """Start the polling loop; returns the process exit status."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    config = BotConfig(image_dir=Path(args.images))
    executor = ActionExecutor(PyAutoGUIKeyboard(), key_delay=config.key_delay)
    return asyncio.run(run_bot(config, ScreenCapture(), executor))


if __name__ == "__main__":
    sys.exit(main())
