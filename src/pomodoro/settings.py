"""Immutable timer configuration: session durations, streak threshold, auto-break."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_AUTO_BREAK,
    DEFAULT_FOCUS_SECONDS,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_SHORT_BREAK_SECONDS,
    DEFAULT_STREAKS_TO_LONG_BREAK,
)
from .errors import InvalidSettingsError
from .state import SessionType


@dataclass(frozen=True)
class Settings:
    """Validated durations (seconds) and streak policy for a pomodoro timer."""
    focus_duration: float = float(DEFAULT_FOCUS_SECONDS)
    short_break_duration: float = float(DEFAULT_SHORT_BREAK_SECONDS)
    long_break_duration: float = float(DEFAULT_LONG_BREAK_SECONDS)
    streaks_to_long_break: int = DEFAULT_STREAKS_TO_LONG_BREAK
    auto_break: bool = DEFAULT_AUTO_BREAK

    def __post_init__(self) -> None:
        for name in ("focus_duration", "short_break_duration", "long_break_duration"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidSettingsError(f"{name} must be a number, got: {value!r}")
            if not value > 0:
                raise InvalidSettingsError(f"{name} must be greater than zero, got: {value}")

        if isinstance(self.streaks_to_long_break, bool) or not isinstance(
            self.streaks_to_long_break, int
        ):
            raise InvalidSettingsError(
                f"streaks_to_long_break must be an integer, got: {self.streaks_to_long_break!r}"
            )
        if self.streaks_to_long_break <= 0:
            raise InvalidSettingsError(
                "streaks_to_long_break must be greater than zero, "
                f"got: {self.streaks_to_long_break}"
            )

    @property
    def focus_minutes_duration(self) -> float:
        return self.focus_duration / 60

    @property
    def short_break_minutes_duration(self) -> float:
        return self.short_break_duration / 60

    @property
    def long_break_minutes_duration(self) -> float:
        return self.long_break_duration / 60

    def duration_for(self, session: SessionType) -> float:
        """Configured length of a session; Idle has no countdown and maps to 0."""
        if session is SessionType.FOCUS:
            return float(self.focus_duration)
        if session is SessionType.SHORT_BREAK:
            return float(self.short_break_duration)
        if session is SessionType.LONG_BREAK:
            return float(self.long_break_duration)
        return 0.0
