"""Nearest-template fingerprint classification."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .library import FingerprintVariant
from .similarity import DistanceFn, SimilarityEngine


def min_index(scores: Sequence[float]) -> int:
    """Index of the smallest score; the first one wins on ties."""
    if len(scores) == 0:
        raise ValueError("cannot take the minimum of an empty sequence")
    best = 0
    for i, value in enumerate(scores):
        if value < scores[best]:
            best = i
    return best


class FingerprintClassifier:
    """Pick the known fingerprint closest to a capture.

    There is no confidence floor: a noisy capture still yields the least
    distant variant.
    """

    def __init__(
        self, variants: Sequence[FingerprintVariant], distance: Optional[DistanceFn] = None
    ) -> None:
        if not variants:
            raise ValueError("classifier needs at least one fingerprint variant")
        self.variants = list(variants)
        self.distance = distance if distance is not None else SimilarityEngine()

    def scores(self, capture: np.ndarray) -> List[float]:
        """Distance from the capture to every full template, in library order."""
        return [float(self.distance(capture, variant.full)) for variant in self.variants]

    def classify(self, capture: np.ndarray) -> FingerprintVariant:
        return self.variants[min_index(self.scores(capture))]
