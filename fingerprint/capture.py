"""Screen region sampling backends."""

from __future__ import annotations

import asyncio
from typing import List, Sequence, Tuple

import numpy as np

from .regions import Region


class RegionCapture:
    """Base sampler: subclasses implement ``size`` and the blocking ``grab``."""

    def size(self) -> Tuple[int, int]:
        raise NotImplementedError

    def grab(self, region: Region) -> np.ndarray:
        raise NotImplementedError

    def grab_many(self, regions: Sequence[Region]) -> List[np.ndarray]:
        """Grab several regions in one blocking call, in request order."""
        return [self.grab(region) for region in regions]

    async def capture(self, region: Region) -> np.ndarray:
        """Grab a region without blocking the event loop."""
        return await asyncio.to_thread(self.grab, region)

    async def capture_many(self, regions: Sequence[Region]) -> List[np.ndarray]:
        """Grab a batch of regions on one worker thread; results keep request order."""
        return await asyncio.to_thread(self.grab_many, list(regions))


class ScreenCapture(RegionCapture):
    """Live capture of the primary display through pyautogui.

    A batch is cut from a single full-screen grab, so every region comes from
    the same frame and pyscreeze is never called from two threads at once.
    """

    def size(self) -> Tuple[int, int]:
        import pyautogui

        width, height = pyautogui.size()
        return int(width), int(height)

    def grab(self, region: Region) -> np.ndarray:
        import pyautogui

        screenshot = pyautogui.screenshot(region=region.as_xywh())
        return np.asarray(screenshot.convert("RGB"))

    def grab_screen(self) -> np.ndarray:
        import pyautogui

        return np.asarray(pyautogui.screenshot().convert("RGB"))

    def grab_many(self, regions: Sequence[Region]) -> List[np.ndarray]:
        screen = self.grab_screen()
        return [region.crop(screen) for region in regions]


class StaticCapture(RegionCapture):
    """Serve regions cropped from one saved full-screen RGB image."""

    def __init__(self, screenshot: np.ndarray) -> None:
        if screenshot.ndim != 3 or screenshot.shape[2] != 3:
            raise ValueError("screenshot must be an HxWx3 numpy array")
        self.screenshot = screenshot

    def size(self) -> Tuple[int, int]:
        height, width = self.screenshot.shape[:2]
        return width, height

    def grab(self, region: Region) -> np.ndarray:
        return region.crop(self.screenshot)
