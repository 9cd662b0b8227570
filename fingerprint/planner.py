"""Turn an assignment into cursor moves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .solver import Assignment


@dataclass(frozen=True)
class MovePlan:
    """Slots to select in cursor order and the steps to reach each one."""

    slots: Tuple[int, ...]
    steps: Tuple[int, ...]


def relative_steps(sorted_slots: Sequence[int]) -> List[int]:
    """Differences between consecutive slots; the first is measured from slot 0."""
    steps = []
    previous = 0
    for slot in sorted_slots:
        steps.append(slot - previous)
        previous = slot
    return steps


def plan_moves(assignment: Union[Assignment, Sequence[int]]) -> MovePlan:
    """Sort the assigned slots and compress them into relative steps.

    The cursor only moves forward, so the fragments are selected in slot
    order rather than fragment order.
    """
    slots = assignment.slots if isinstance(assignment, Assignment) else tuple(assignment)
    if any(slot < 0 for slot in slots):
        raise ValueError(f"slot indices must be non-negative: {slots}")
    ordered = tuple(sorted(int(slot) for slot in slots))
    return MovePlan(slots=ordered, steps=tuple(relative_steps(ordered)))
