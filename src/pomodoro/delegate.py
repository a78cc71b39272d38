"""Observer interface notified of every pomodoro timer transition."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .settings import Settings
from .state import SessionType

if TYPE_CHECKING:
    from .service import PomodoroTimer


class PomodoroTimerDelegate:
    """Base delegate; override any subset of the hooks, the rest are no-ops."""

    def on_session_started(self, timer: "PomodoroTimer", session: SessionType) -> None:
        pass

    def on_session_paused(self, timer: "PomodoroTimer", session: SessionType) -> None:
        pass

    def on_session_resumed(self, timer: "PomodoroTimer", session: SessionType) -> None:
        pass

    def on_session_ended(self, timer: "PomodoroTimer", session: SessionType) -> None:
        pass

    def on_cancelled(self, timer: "PomodoroTimer") -> None:
        pass

    def on_tick(self, timer: "PomodoroTimer", seconds_remaining: float) -> None:
        pass

    def on_settings_changed(self, timer: "PomodoroTimer", settings: Settings) -> None:
        pass

    def on_streaks_reset(self, timer: "PomodoroTimer") -> None:
        pass
