"""Synthetic references and screens for offline runs and tests."""

from __future__ import annotations

from typing import Sequence, Tuple

import cv2
import numpy as np

from .library import FRAGMENTS_PER_VARIANT, FingerprintVariant, ReferenceLibrary
from .regions import ScreenLayout

BACKGROUND = 24


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def generate_natural_like_image(shape: Tuple[int, int], seed: int = 42) -> np.ndarray:
    """Generate a deterministic texture-rich RGB image of the given (height, width)."""
    rng = set_random_seed(seed)
    height, width = shape
    base = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    smooth = cv2.GaussianBlur(base, (0, 0), sigmaX=6, sigmaY=6)
    # Blurred noise sits near mid-gray; stretch it back to full contrast.
    smooth = cv2.normalize(smooth, None, 0, 255, cv2.NORM_MINMAX)
    detail = cv2.Canny(smooth, 60, 120)
    detail_rgb = cv2.cvtColor(detail, cv2.COLOR_GRAY2RGB)
    return cv2.addWeighted(smooth, 0.85, detail_rgb, 0.15, 0)


def _fragment_boxes(height: int, width: int, side: int) -> Sequence[Tuple[int, int]]:
    """Top-left corners of the answer fragments inside a full fingerprint."""
    return [
        (height // 8, width // 8),
        (height // 8, width - width // 8 - side),
        (height - height // 8 - side, width // 8),
        (height - height // 8 - side, width - width // 8 - side),
    ]


def build_synthetic_library(
    layout: ScreenLayout, count: int = 4, seed: int = 42
) -> ReferenceLibrary:
    """Build a library sized for ``layout`` whose fragments are crops of each full image."""
    rng = set_random_seed(seed)
    header = generate_natural_like_image(
        (layout.header.height, layout.header.width), seed=int(rng.integers(0, 1_000_000))
    )
    full_h, full_w = layout.fingerprint.height, layout.fingerprint.width
    side = min(full_h, full_w) // 3
    slot = layout.slots[0]

    variants = []
    for index in range(1, count + 1):
        full = generate_natural_like_image((full_h, full_w), seed=int(rng.integers(0, 1_000_000)))
        fragments = []
        for y0, x0 in _fragment_boxes(full_h, full_w, side)[:FRAGMENTS_PER_VARIANT]:
            crop = full[y0 : y0 + side, x0 : x0 + side]
            fragments.append(cv2.resize(crop, (slot.width, slot.height), interpolation=cv2.INTER_AREA))
        variants.append(FingerprintVariant(index=index, full=full, fragments=tuple(fragments)))
    return ReferenceLibrary(header=header, variants=tuple(variants))


def compose_screen(
    layout: ScreenLayout,
    library: ReferenceLibrary,
    variant_index: int,
    answer_slots: Sequence[int],
    with_header: bool = True,
) -> np.ndarray:
    """Paint a full screen showing one fingerprint puzzle.

    Fragment ``i`` of the variant is placed at ``answer_slots[i]``; the
    remaining slots receive fragments of the other variants as decoys.
    """
    if len(set(answer_slots)) != len(answer_slots):
        raise ValueError(f"answer slots must be distinct: {answer_slots}")
    screen = np.full((layout.height, layout.width, 3), BACKGROUND, dtype=np.uint8)
    variant = library.variant(variant_index)

    def paint(region, image: np.ndarray) -> None:
        resized = cv2.resize(image, (region.width, region.height), interpolation=cv2.INTER_AREA)
        screen[region.top : region.bottom, region.left : region.right] = resized

    if with_header:
        paint(layout.header, library.header)
    paint(layout.fingerprint, variant.full)

    decoys = [
        fragment
        for other in library.variants
        if other.index != variant_index
        for fragment in other.fragments
    ]
    if not decoys:
        raise ValueError("decoys need at least two fingerprint variants")
    decoy_iter = iter(decoys * len(layout.slots))
    for slot_index, region in enumerate(layout.slots):
        if slot_index in answer_slots:
            paint(region, variant.fragments[list(answer_slots).index(slot_index)])
        else:
            paint(region, next(decoy_iter))
    return screen
