"""Greedy assignment of answer fragments to candidate slots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .matcher import FragmentMatcher


@dataclass(frozen=True)
class Assignment:
    """Slot chosen for each fragment: ``slots[i]`` holds fragment ``i``."""

    slots: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(set(self.slots)) != len(self.slots):
            raise ValueError(f"slot assigned twice: {self.slots}")

    def as_dict(self) -> Dict[int, int]:
        return dict(enumerate(self.slots))


def greedy_assign(cost: np.ndarray) -> Assignment:
    """Assign each fragment row, in order, to its cheapest unclaimed slot.

    Earlier fragments pick first, so a later fragment may lose its best slot
    to an earlier one. Ties go to the lowest slot index. No score is too
    poor to accept.
    """
    if cost.ndim != 2:
        raise ValueError("cost matrix must be 2-D [fragment, slot]")
    n_fragments, n_slots = cost.shape
    if n_fragments > n_slots:
        raise ValueError(f"cannot place {n_fragments} fragments into {n_slots} slots")

    unclaimed = set(range(n_slots))
    chosen = []
    for row in range(n_fragments):
        candidates = np.array(sorted(unclaimed), dtype=np.int32)
        choice = int(candidates[int(np.argmin(cost[row, candidates]))])
        chosen.append(choice)
        unclaimed.remove(choice)
    return Assignment(slots=tuple(chosen))


class SlotSolver:
    """Locate the answer fragments among the shuffled slot captures."""

    def __init__(self, matcher: Optional[FragmentMatcher] = None) -> None:
        self.matcher = matcher if matcher is not None else FragmentMatcher()

    def solve(
        self, fragments: Sequence[np.ndarray], slot_captures: Sequence[np.ndarray]
    ) -> Assignment:
        if len(fragments) > len(slot_captures):
            raise ValueError(
                f"Expected at least {len(fragments)} slot captures, got {len(slot_captures)}"
            )
        cost = self.matcher.build_cost_matrix(fragments, slot_captures)
        return greedy_assign(cost)
