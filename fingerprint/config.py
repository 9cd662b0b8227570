"""Runtime configuration for the fingerprint bot."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .regions import LAYOUT_1080P, ScreenLayout

# Relative to the working directory the bot is started from.
DEFAULT_IMAGE_DIR = Path("img")


@dataclass(frozen=True)
class BotConfig:
    """Timing, thresholds and geometry for one bot process."""

    image_dir: Path = DEFAULT_IMAGE_DIR
    fingerprint_count: int = 4
    # 10 Hz header polling.
    poll_interval: float = 0.1
    # Header distance strictly below this marks the puzzle as active.
    activation_threshold: float = 0.1
    # Time the game spends validating and animating a submitted answer.
    validation_time: float = 4.35
    key_delay: float = 0.02
    unsupported_exit_delay: float = 5.0
    layout: ScreenLayout = field(default=LAYOUT_1080P)

    def __post_init__(self) -> None:
        if self.fingerprint_count <= 0:
            raise ValueError("fingerprint_count must be positive")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if not 0.0 < self.activation_threshold <= 1.0:
            raise ValueError("activation_threshold must be in (0, 1]")
        if self.key_delay < 0 or self.unsupported_exit_delay < 0:
            raise ValueError("delays must be non-negative")
        if self.cooldown < 0:
            raise ValueError("validation_time must be at least poll_interval")

    @property
    def cooldown(self) -> float:
        """Post-submission wait; the regular poll sleep covers the remainder."""
        return self.validation_time - self.poll_interval
