"""Keyboard actuation of a move plan."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Tuple

from .planner import MovePlan

LOG = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class Action(Enum):
    """Logical inputs of the minigame and the keys that trigger them."""

    ADVANCE = "right"
    SELECT = "enter"
    CONFIRM = "tab"


class PyAutoGUIKeyboard:
    """Inject key events with pyautogui; timing is left to the executor."""

    def key_down(self, key: str) -> None:
        import pyautogui

        pyautogui.keyDown(key, _pause=False)

    def key_up(self, key: str) -> None:
        import pyautogui

        pyautogui.keyUp(key, _pause=False)


class RecordingKeyboard:
    """Keyboard stand-in that only records key events, for dry runs."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str]] = []

    def key_down(self, key: str) -> None:
        self.events.append(("down", key))

    def key_up(self, key: str) -> None:
        self.events.append(("up", key))

    @property
    def presses(self) -> List[str]:
        return [key for kind, key in self.events if kind == "up"]


class ActionExecutor:
    """Press keys for a plan with a fixed delay after every key event."""

    def __init__(self, keyboard, key_delay: float = 0.02, sleep: SleepFn = asyncio.sleep) -> None:
        self.keyboard = keyboard
        self.key_delay = float(key_delay)
        self.sleep = sleep

    async def press(self, action: Action) -> None:
        self.keyboard.key_down(action.value)
        await self.sleep(self.key_delay)
        self.keyboard.key_up(action.value)
        await self.sleep(self.key_delay)

    async def execute(self, plan: MovePlan) -> List[Action]:
        """Advance and select for every step, then confirm the answer."""
        pressed: List[Action] = []
        for step in plan.steps:
            for _ in range(step):
                await self.press(Action.ADVANCE)
                pressed.append(Action.ADVANCE)
            await self.press(Action.SELECT)
            pressed.append(Action.SELECT)
        await self.press(Action.CONFIRM)
        pressed.append(Action.CONFIRM)
        LOG.debug("Pressed %d keys for steps %s", len(pressed), list(plan.steps))
        return pressed
