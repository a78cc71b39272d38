"""Defaults, countdown phases, and wire keys used by the pomodoro session logic."""

from __future__ import annotations

DEFAULT_FOCUS_SECONDS = 25 * 60
DEFAULT_SHORT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_STREAKS_TO_LONG_BREAK = 4
DEFAULT_AUTO_BREAK = True

DEFAULT_POLL_INTERVAL_SECONDS = 0.1
DEFAULT_LOGGER_NAME = "pomodoro"

PHASE_IDLE = "idle"
PHASE_RUNNING = "running"
PHASE_PAUSED = "paused"
PHASE_COMPLETED = "completed"
PHASE_STOPPED = "stopped"

INERT_PHASES: frozenset[str] = frozenset({PHASE_COMPLETED, PHASE_STOPPED})

# Settings wire keys
KEY_FOCUS_DURATION = "fd"
KEY_SHORT_BREAK_DURATION = "sbd"
KEY_LONG_BREAK_DURATION = "lbd"
KEY_STREAKS_TO_LONG_BREAK = "slb"
KEY_AUTO_BREAK = "ab"

# State wire keys
KEY_TYPE = "t"
KEY_ACTIVE = "a"
KEY_STREAK = "st"
KEY_END_TIME = "et"
KEY_SECONDS_REMAINING = "sr"
