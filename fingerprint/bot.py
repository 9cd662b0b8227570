"""Polling loop that detects, solves and submits the fingerprint minigame."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .actuator import Action, ActionExecutor, SleepFn
from .capture import RegionCapture
from .classifier import FingerprintClassifier, min_index
from .config import BotConfig
from .detector import PuzzleDetector
from .library import ReferenceLibrary
from .matcher import FragmentMatcher
from .planner import MovePlan, plan_moves
from .similarity import DistanceFn, SimilarityEngine
from .solver import Assignment, SlotSolver

LOG = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    SOLVING = "solving"
    ACTUATING = "actuating"
    COOLDOWN = "cooldown"


@dataclass
class CycleReport:
    """Everything decided during one solved puzzle."""

    header_score: float
    variant: int
    fingerprint_scores: List[float]
    assignment: Assignment
    plan: MovePlan
    actions: List[Action]


class FingerprintBot:
    """Single sequential loop: Idle -> Solving -> Actuating -> Cooldown -> Idle."""

    def __init__(
        self,
        config: BotConfig,
        library: ReferenceLibrary,
        capture: RegionCapture,
        executor: ActionExecutor,
        sleep: SleepFn = asyncio.sleep,
        distance: Optional[DistanceFn] = None,
    ) -> None:
        self.config = config
        self.library = library
        self.capture = capture
        self.executor = executor
        self.sleep = sleep
        distance = distance if distance is not None else SimilarityEngine()
        self.detector = PuzzleDetector(
            library.header, threshold=config.activation_threshold, distance=distance
        )
        self.classifier = FingerprintClassifier(library.variants, distance=distance)
        self.solver = SlotSolver(FragmentMatcher(distance))
        self.phase = Phase.IDLE

    async def poll(self) -> Optional[CycleReport]:
        """Sample the header once and run a full cycle if the puzzle is up."""
        layout = self.config.layout
        header = await self.capture.capture(layout.header)
        header_score, active = self.detector.check(header)
        if not active:
            return None

        self.phase = Phase.SOLVING
        captures = await self.capture.capture_many((layout.fingerprint,) + layout.slots)
        fingerprint_capture, slot_captures = captures[0], captures[1:]
        scores = self.classifier.scores(fingerprint_capture)
        variant = self.classifier.variants[min_index(scores)]
        LOG.info("fingerprint detected : %d", variant.index)
        LOG.debug("fingerprint scores: %s", ["%.3f" % s for s in scores])
        assignment = self.solver.solve(variant.fragments, slot_captures)
        plan = plan_moves(assignment)
        LOG.debug("assignment %s -> steps %s", assignment.as_dict(), list(plan.steps))

        self.phase = Phase.ACTUATING
        actions = await self.executor.execute(plan)
        LOG.info("validating")

        self.phase = Phase.COOLDOWN
        await self.sleep(self.config.cooldown)
        self.phase = Phase.IDLE
        return CycleReport(
            header_score=header_score,
            variant=variant.index,
            fingerprint_scores=scores,
            assignment=assignment,
            plan=plan,
            actions=actions,
        )

    async def run(self, max_polls: Optional[int] = None) -> None:
        """Poll forever, or ``max_polls`` times when given."""
        polls = 0
        while max_polls is None or polls < max_polls:
            await self.poll()
            polls += 1
            await self.sleep(self.config.poll_interval)


async def run_bot(
    config: BotConfig,
    capture: RegionCapture,
    executor: ActionExecutor,
    library: Optional[ReferenceLibrary] = None,
    sleep: SleepFn = asyncio.sleep,
    max_polls: Optional[int] = None,
    distance: Optional[DistanceFn] = None,
) -> int:
    """Check the display, load references and run the bot; returns an exit status."""
    width, height = capture.size()
    if not config.layout.supports(width, height):
        LOG.error("screen size not supported: %dx%d", width, height)
        await sleep(config.unsupported_exit_delay)
        return 0

    LOG.info("%s detected", config.layout.name)
    if library is None:
        library = ReferenceLibrary.load(config.image_dir, config.fingerprint_count)
    bot = FingerprintBot(config, library, capture, executor, sleep=sleep, distance=distance)
    LOG.info("waiting for fingerprint ...")
    await bot.run(max_polls=max_polls)
    return 0
