"""Detect whether the fingerprint minigame is on screen."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .similarity import DistanceFn, SimilarityEngine


class PuzzleDetector:
    """Compare the captured header strip with the reference header."""

    def __init__(
        self,
        header_template: np.ndarray,
        threshold: float = 0.1,
        distance: Optional[DistanceFn] = None,
    ) -> None:
        self.header_template = header_template
        self.threshold = float(threshold)
        self.distance = distance if distance is not None else SimilarityEngine()

    def score(self, capture: np.ndarray) -> float:
        return float(self.distance(capture, self.header_template))

    def check(self, capture: np.ndarray) -> Tuple[float, bool]:
        """Return the header distance and whether it is strictly below the threshold."""
        score = self.score(capture)
        return score, score < self.threshold

    def is_active(self, capture: np.ndarray) -> bool:
        return self.check(capture)[1]
