"""Main loop tests driven by scripted captures and a fake clock."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np
import pytest

from fingerprint.actuator import ActionExecutor, RecordingKeyboard
from fingerprint.bot import FingerprintBot, Phase, run_bot
from fingerprint.capture import RegionCapture
from fingerprint.config import BotConfig
from fingerprint.library import FingerprintVariant, ReferenceLibrary
from fingerprint.regions import LAYOUT_1080P, Region

HEADER_TAG = 1
HEADER_CAPTURE_TAG = 2
FINGERPRINT_CAPTURE_TAG = 3
SLOT_TAG_BASE = 100


def _tagged(tag: int) -> np.ndarray:
    return np.full((2, 2, 3), tag, dtype=np.uint8)


def _library() -> ReferenceLibrary:
    variants = tuple(
        FingerprintVariant(
            index=i,
            full=_tagged(i * 10),
            fragments=tuple(_tagged(i * 10 + k) for k in range(1, 5)),
        )
        for i in range(1, 5)
    )
    return ReferenceLibrary(header=_tagged(HEADER_TAG), variants=variants)


def _table_distance(table: Dict[Tuple[int, int], float], default: float = 0.9):
    def distance(a: np.ndarray, b: np.ndarray) -> float:
        key = (int(a[0, 0, 0]), int(b[0, 0, 0]))
        return table.get(key, table.get((key[1], key[0]), default))

    return distance


class _ScriptedCapture(RegionCapture):
    """Returns a tagged image per layout region and records every grab."""

    def __init__(self, size=(1920, 1080), fail: bool = False) -> None:
        self._size = size
        self.fail = fail
        self.grabbed: List[Region] = []
        self.tags = {LAYOUT_1080P.header: HEADER_CAPTURE_TAG, LAYOUT_1080P.fingerprint: FINGERPRINT_CAPTURE_TAG}
        for index, region in enumerate(LAYOUT_1080P.slots):
            self.tags[region] = SLOT_TAG_BASE + index

    def size(self):
        return self._size

    def grab(self, region: Region) -> np.ndarray:
        if self.fail:
            raise RuntimeError("capture device lost")
        self.grabbed.append(region)
        return _tagged(self.tags[region])


class _Clock:
    def __init__(self) -> None:
        self.sleeps: List[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


def _scenario_a_distance(header_score: float = 0.05):
    table = {
        (HEADER_CAPTURE_TAG, HEADER_TAG): header_score,
        (FINGERPRINT_CAPTURE_TAG, 10): 0.4,
        (FINGERPRINT_CAPTURE_TAG, 20): 0.02,
        (FINGERPRINT_CAPTURE_TAG, 30): 0.3,
        (FINGERPRINT_CAPTURE_TAG, 40): 0.5,
        (21, SLOT_TAG_BASE + 5): 0.01,
        (22, SLOT_TAG_BASE + 2): 0.01,
        (23, SLOT_TAG_BASE + 7): 0.01,
        (24, SLOT_TAG_BASE + 0): 0.01,
    }
    return _table_distance(table)


def _bot(capture, clock, distance, keyboard=None):
    keyboard = keyboard if keyboard is not None else RecordingKeyboard()
    config = BotConfig()
    executor = ActionExecutor(keyboard, key_delay=config.key_delay, sleep=clock.sleep)
    return FingerprintBot(config, _library(), capture, executor, sleep=clock.sleep, distance=distance)


def test_active_cycle_solves_and_submits() -> None:
    """Header match leads to classification, assignment, key presses and cooldown."""
    capture = _ScriptedCapture()
    clock = _Clock()
    keyboard = RecordingKeyboard()
    bot = _bot(capture, clock, _scenario_a_distance(), keyboard)

    report = asyncio.run(bot.poll())

    assert report is not None
    assert report.header_score == pytest.approx(0.05)
    assert report.variant == 2
    assert report.fingerprint_scores == [0.4, 0.02, 0.3, 0.5]
    assert report.assignment.as_dict() == {0: 5, 1: 2, 2: 7, 3: 0}
    assert report.plan.slots == (0, 2, 5, 7)
    assert report.plan.steps == (0, 2, 3, 2)
    assert keyboard.presses == (
        ["enter"] + ["right"] * 2 + ["enter"] + ["right"] * 3 + ["enter"] + ["right"] * 2 + ["enter", "tab"]
    )
    assert clock.sleeps[-1] == pytest.approx(BotConfig().cooldown)
    assert len(clock.sleeps) == 2 * len(keyboard.presses) + 1
    assert set(capture.grabbed) == {LAYOUT_1080P.header, LAYOUT_1080P.fingerprint, *LAYOUT_1080P.slots}
    assert bot.phase is Phase.IDLE


def test_inactive_header_captures_nothing_else() -> None:
    """A poor header match stays idle and never samples the puzzle."""
    capture = _ScriptedCapture()
    clock = _Clock()
    keyboard = RecordingKeyboard()
    bot = _bot(capture, clock, _scenario_a_distance(header_score=0.4), keyboard)

    assert asyncio.run(bot.poll()) is None
    assert capture.grabbed == [LAYOUT_1080P.header]
    assert keyboard.events == []
    assert clock.sleeps == []
    assert bot.phase is Phase.IDLE


def test_keys_are_pressed_while_actuating() -> None:
    """The loop reports the actuating phase while keys go out."""
    phases = []

    class _PhaseKeyboard(RecordingKeyboard):
        def key_down(self, key: str) -> None:
            phases.append(bot.phase)
            super().key_down(key)

    clock = _Clock()
    bot = _bot(_ScriptedCapture(), clock, _scenario_a_distance(), _PhaseKeyboard())
    asyncio.run(bot.poll())
    assert phases and all(p is Phase.ACTUATING for p in phases)


def test_run_sleeps_poll_interval_between_ticks() -> None:
    """Idle polling sleeps one poll interval after every tick."""
    capture = _ScriptedCapture()
    clock = _Clock()
    bot = _bot(capture, clock, _scenario_a_distance(header_score=0.4))
    asyncio.run(bot.run(max_polls=3))
    assert clock.sleeps == [pytest.approx(0.1)] * 3
    assert capture.grabbed == [LAYOUT_1080P.header] * 3


def test_active_then_cooldown_totals_validation_time() -> None:
    """Cooldown plus the following poll sleep add up to the validation time."""
    clock = _Clock()
    bot = _bot(_ScriptedCapture(), clock, _scenario_a_distance())
    asyncio.run(bot.run(max_polls=1))
    assert clock.sleeps[-2] + clock.sleeps[-1] == pytest.approx(BotConfig().validation_time)


def test_unsupported_resolution_exits_cleanly(tmp_path: Path, caplog) -> None:
    """An unsupported display logs, waits and exits 0 without polling or loading."""
    capture = _ScriptedCapture(size=(2560, 1440))
    clock = _Clock()
    config = BotConfig(image_dir=tmp_path / "missing")
    executor = ActionExecutor(RecordingKeyboard(), sleep=clock.sleep)

    with caplog.at_level(logging.ERROR, logger="fingerprint.bot"):
        status = asyncio.run(run_bot(config, capture, executor, sleep=clock.sleep))

    assert status == 0
    assert clock.sleeps == [pytest.approx(5.0)]
    assert capture.grabbed == []
    assert "screen size not supported" in caplog.text


def test_run_bot_polls_on_supported_display(caplog) -> None:
    """A supported display starts polling with the injected library."""
    capture = _ScriptedCapture()
    clock = _Clock()
    executor = ActionExecutor(RecordingKeyboard(), sleep=clock.sleep)
    with caplog.at_level(logging.INFO, logger="fingerprint.bot"):
        status = asyncio.run(
            run_bot(
                BotConfig(),
                capture,
                executor,
                library=_library(),
                sleep=clock.sleep,
                max_polls=2,
                distance=_scenario_a_distance(header_score=0.4),
            )
        )
    assert status == 0
    assert capture.grabbed == [LAYOUT_1080P.header] * 2
    assert "1080p detected" in caplog.text
    assert "waiting for fingerprint" in caplog.text


def test_run_bot_missing_references_is_fatal(tmp_path: Path) -> None:
    """Reference loading failures abort startup."""
    clock = _Clock()
    executor = ActionExecutor(RecordingKeyboard(), sleep=clock.sleep)
    config = BotConfig(image_dir=tmp_path)
    with pytest.raises(ValueError, match="header.png"):
        asyncio.run(run_bot(config, _ScriptedCapture(), executor, sleep=clock.sleep, max_polls=1))


def test_capture_failure_propagates() -> None:
    """A failing capture primitive aborts the loop."""
    clock = _Clock()
    bot = _bot(_ScriptedCapture(fail=True), clock, _scenario_a_distance())
    with pytest.raises(RuntimeError, match="capture device lost"):
        asyncio.run(bot.run(max_polls=1))
