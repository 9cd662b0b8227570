"""Fixed screen regions sampled by the bot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

SLOT_COUNT = 8


@dataclass(frozen=True)
class Region:
    """Axis-aligned screen rectangle, right/bottom exclusive."""

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        if min(self.left, self.top) < 0:
            raise ValueError(f"negative region coordinates: {self}")
        if self.right <= self.left or self.bottom <= self.top:
            raise ValueError(f"degenerate region: {self}")

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def as_xywh(self) -> Tuple[int, int, int, int]:
        """Return (x, y, width, height) as screen grabbers expect it."""
        return self.left, self.top, self.width, self.height

    def crop(self, image: np.ndarray) -> np.ndarray:
        """Cut this region out of a full-screen HxWxC array."""
        h, w = image.shape[:2]
        if self.right > w or self.bottom > h:
            raise ValueError(f"region {self} exceeds image size {w}x{h}")
        return image[self.top : self.bottom, self.left : self.right].copy()


@dataclass(frozen=True)
class ScreenLayout:
    """Screen geometry: resolution plus every region the bot samples."""

    width: int
    height: int
    header: Region
    fingerprint: Region
    slots: Tuple[Region, ...]

    def __post_init__(self) -> None:
        if len(self.slots) != SLOT_COUNT:
            raise ValueError(f"layout needs {SLOT_COUNT} slot regions, got {len(self.slots)}")

    def supports(self, width: int, height: int) -> bool:
        return width == self.width and height == self.height

    @property
    def name(self) -> str:
        return f"{self.height}p"


# Slots are listed in cursor order: left column even, right column odd.
LAYOUT_1080P = ScreenLayout(
    width=1920,
    height=1080,
    header=Region(370, 90, 1550, 120),
    fingerprint=Region(974, 157, 1320, 685),
    slots=(
        Region(475, 271, 595, 391),
        Region(618, 271, 738, 391),
        Region(475, 414, 595, 535),
        Region(618, 414, 738, 535),
        Region(475, 558, 595, 680),
        Region(618, 558, 738, 680),
        Region(475, 702, 595, 823),
        Region(618, 702, 738, 823),
    ),
)
