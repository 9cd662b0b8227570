"""Automatic solver for the fingerprint matching minigame."""

from .actuator import Action, ActionExecutor, PyAutoGUIKeyboard, RecordingKeyboard
from .bot import CycleReport, FingerprintBot, Phase, run_bot
from .capture import RegionCapture, ScreenCapture, StaticCapture
from .classifier import FingerprintClassifier, min_index
from .config import BotConfig
from .detector import PuzzleDetector
from .library import FingerprintVariant, ReferenceLibrary, load_image
from .matcher import FragmentMatcher
from .planner import MovePlan, plan_moves, relative_steps
from .regions import LAYOUT_1080P, Region, ScreenLayout
from .similarity import SimilarityEngine, hash_distance, pixel_distance
from .solver import Assignment, SlotSolver, greedy_assign

__all__ = [
    "Action",
    "ActionExecutor",
    "PyAutoGUIKeyboard",
    "RecordingKeyboard",
    "CycleReport",
    "FingerprintBot",
    "Phase",
    "run_bot",
    "RegionCapture",
    "ScreenCapture",
    "StaticCapture",
    "FingerprintClassifier",
    "min_index",
    "BotConfig",
    "PuzzleDetector",
    "FingerprintVariant",
    "ReferenceLibrary",
    "load_image",
    "FragmentMatcher",
    "MovePlan",
    "plan_moves",
    "relative_steps",
    "LAYOUT_1080P",
    "Region",
    "ScreenLayout",
    "SimilarityEngine",
    "hash_distance",
    "pixel_distance",
    "Assignment",
    "SlotSolver",
    "greedy_assign",
]
