"""Fragment-to-slot cost matrix computation."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .similarity import DistanceFn, SimilarityEngine


class FragmentMatcher:
    """Score every answer fragment against every captured slot."""

    def __init__(self, distance: Optional[DistanceFn] = None) -> None:
        self.distance = distance if distance is not None else SimilarityEngine()

    def build_cost_matrix(
        self, fragments: Sequence[np.ndarray], slots: Sequence[np.ndarray]
    ) -> np.ndarray:
        """Build distance matrix indexed [fragment, slot]."""
        cost = np.zeros((len(fragments), len(slots)), dtype=np.float64)
        for i, fragment in enumerate(fragments):
            for j, slot in enumerate(slots):
                cost[i, j] = self.distance(fragment, slot)
        return cost
