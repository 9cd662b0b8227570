#!/usr/bin/env python3
"""Check the fixed capture regions against a saved full-screen screenshot.

    python verify_regions.py --image screenshot.png
    python verify_regions.py --image screenshot.png --images img --output overlay.png --no-show
"""

from __future__ import annotations

import argparse
from pathlib import Path

import cv2
import numpy as np

from fingerprint.classifier import FingerprintClassifier
from fingerprint.config import BotConfig
from fingerprint.detector import PuzzleDetector
from fingerprint.library import ReferenceLibrary, load_image
from fingerprint.planner import plan_moves
from fingerprint.regions import Region, ScreenLayout
from fingerprint.solver import SlotSolver


def draw_regions(image: np.ndarray, layout: ScreenLayout) -> np.ndarray:
    """Return a copy of the screenshot with every region outlined and labelled."""
    canvas = np.ascontiguousarray(image.copy())

    def outline(region: Region, color, label: str) -> None:
        cv2.rectangle(canvas, (region.left, region.top), (region.right - 1, region.bottom - 1), color, 2)
        cv2.putText(
            canvas, label, (region.left + 4, region.top + 18), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2
        )

    outline(layout.header, (255, 0, 0), "header")
    outline(layout.fingerprint, (0, 255, 0), "fingerprint")
    for index, region in enumerate(layout.slots):
        outline(region, (255, 255, 0), str(index))
    return canvas


def replay(image: np.ndarray, config: BotConfig, image_dir: Path) -> None:
    """Run detection and solving once against the screenshot and print the result."""
    layout = config.layout
    library = ReferenceLibrary.load(image_dir, config.fingerprint_count)
    detector = PuzzleDetector(library.header, threshold=config.activation_threshold)
    header_score = detector.score(layout.header.crop(image))
    print(f"Header distance: {header_score:.4f} (active below {detector.threshold})")

    classifier = FingerprintClassifier(library.variants)
    fingerprint = layout.fingerprint.crop(image)
    scores = classifier.scores(fingerprint)
    variant = classifier.classify(fingerprint)
    print("Fingerprint distances: " + ", ".join(f"{i + 1}={s:.4f}" for i, s in enumerate(scores)))
    print(f"Fingerprint detected: {variant.index}")

    slots = [region.crop(image) for region in layout.slots]
    assignment = SlotSolver().solve(variant.fragments, slots)
    plan = plan_moves(assignment)
    print(f"Assignment (fragment -> slot): {assignment.as_dict()}")
    print(f"Move plan: {list(plan.steps)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Overlay capture regions on a screenshot.")
    parser.add_argument("--image", required=True, help="Full-screen screenshot path")
    parser.add_argument(
        "--images", default=None, help="Optional reference directory; replays one solve when given"
    )
    parser.add_argument("--output", default=None, help="Optional path for the overlay image")
    parser.add_argument("--no-show", action="store_true", help="Do not display the overlay")
    args = parser.parse_args()

    image_path = Path(args.image)
    if not image_path.is_file():
        raise SystemExit(f"file not found: {image_path}")

    config = BotConfig()
    layout = config.layout
    image = np.asarray(load_image(image_path))
    h, w = image.shape[:2]
    print(f"Input: {image_path}")
    print(f"Screenshot size: {w}x{h} (layout expects {layout.width}x{layout.height})")
    if not layout.supports(w, h):
        raise SystemExit("screenshot resolution does not match the supported layout")

    print(f"Header: {layout.header.as_xywh()}")
    print(f"Fingerprint: {layout.fingerprint.as_xywh()}")
    for index, region in enumerate(layout.slots):
        print(f"Slot {index}: {region.as_xywh()}")

    if args.images:
        replay(image, config, Path(args.images))

    overlay = draw_regions(image, layout)
    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(out_path), cv2.cvtColor(overlay, cv2.COLOR_RGB2BGR)):
            raise ValueError(f"failed to write image to path: {out_path}")
        print(f"Overlay saved: {out_path.resolve()}")

    if not args.no_show:
        import matplotlib.pyplot as plt

        plt.figure(figsize=(12, 7))
        plt.imshow(overlay)
        plt.title("Capture regions")
        plt.axis("off")
        plt.tight_layout()
        plt.show()


if __name__ == "__main__":
    main()
