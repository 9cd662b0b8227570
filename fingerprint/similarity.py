"""Normalized image distances used for every template comparison."""

from __future__ import annotations

from typing import Callable

import cv2
import numpy as np

DistanceFn = Callable[[np.ndarray, np.ndarray], float]

HASH_SIZE = 8
# The DCT runs on a (HASH_SIZE * HIGHFREQ_FACTOR) square thumbnail.
HIGHFREQ_FACTOR = 4


def _to_gray(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
    raise ValueError(f"unsupported image shape: {image.shape}")


def perceptual_hash(image: np.ndarray) -> np.ndarray:
    """Return the 64-bit DCT perceptual hash of an image as a bool vector."""
    side = HASH_SIZE * HIGHFREQ_FACTOR
    gray = _to_gray(image).astype(np.float32)
    thumb = cv2.resize(gray, (side, side), interpolation=cv2.INTER_AREA)
    low = cv2.dct(thumb)[:HASH_SIZE, :HASH_SIZE]
    # The DC term only carries overall brightness; keep it out of the mean.
    mean = (float(low.sum()) - float(low[0, 0])) / (low.size - 1)
    return (low > mean).flatten()


def hash_distance(image_a: np.ndarray, image_b: np.ndarray) -> float:
    """Fraction of differing perceptual-hash bits, 0 for identical images."""
    bits_a = perceptual_hash(image_a)
    bits_b = perceptual_hash(image_b)
    return float(np.count_nonzero(bits_a != bits_b)) / bits_a.size


def pixel_distance(image_a: np.ndarray, image_b: np.ndarray) -> float:
    """Mean absolute pixel difference scaled to [0, 1].

    The second image is resized to the first one's size when they differ,
    so small capture/template size mismatches still compare.
    """
    if image_a.ndim != image_b.ndim:
        raise ValueError(f"incompatible images: {image_a.shape} vs {image_b.shape}")
    if image_a.shape[:2] != image_b.shape[:2]:
        h, w = image_a.shape[:2]
        image_b = cv2.resize(image_b, (w, h), interpolation=cv2.INTER_AREA)
    if image_a.shape != image_b.shape:
        raise ValueError(f"incompatible images: {image_a.shape} vs {image_b.shape}")
    diff = np.abs(image_a.astype(np.float32) - image_b.astype(np.float32))
    return float(np.mean(diff)) / 255.0 if diff.size else 0.0


class SimilarityEngine:
    """Callable distance between two images, 0 meaning identical."""

    METHODS = {"phash": hash_distance, "pixel": pixel_distance}

    def __init__(self, method: str = "phash") -> None:
        if method not in self.METHODS:
            raise ValueError(f"Unsupported similarity method: {method}")
        self.method = method
        self._distance = self.METHODS[method]

    def distance(self, image_a: np.ndarray, image_b: np.ndarray) -> float:
        return self._distance(image_a, image_b)

    def __call__(self, image_a: np.ndarray, image_b: np.ndarray) -> float:
        return self._distance(image_a, image_b)
