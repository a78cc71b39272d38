"""Pomodoro session state machine: focus/break sequencing, streaks, and restore."""

from __future__ import annotations

import functools
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from .config import PomodoroConfig
from .constants import DEFAULT_LOGGER_NAME
from .countdown import Countdown, CountdownFactory, ThreadedCountdown
from .settings import Settings
from .state import SessionState, SessionType


class _CountdownRelay:
    """Listener handed to each countdown; forwards notifications to the timer."""

    def __init__(self, timer: "PomodoroTimer"):
        self._timer = timer

    def on_tick(self, countdown: Countdown, seconds_remaining: float) -> None:
        self._timer._handle_tick(countdown, seconds_remaining)

    def on_complete(self, countdown: Countdown) -> None:
        self._timer._handle_complete(countdown)


class PomodoroTimer:
    """Sequences Focus, Short Break and Long Break sessions and counts streaks.

    The countdown itself is delegated to a collaborator created per session by
    ``countdown_factory``. Host calls and countdown notifications are serialized
    through a re-entrant lock, and notifications from a countdown that has
    since been replaced are ignored.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        delegate: Any = None,
        countdown_factory: Optional[CountdownFactory] = None,
        now_fn: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings if settings is not None else Settings()
        self.delegate = delegate
        self._countdown_factory: CountdownFactory = countdown_factory or ThreadedCountdown
        self._now_fn = now_fn
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._lock = threading.RLock()
        self._relay = _CountdownRelay(self)

        self._countdown: Optional[Countdown] = None
        self._session = SessionType.IDLE
        self._streaks = 0

    @classmethod
    def from_config(
        cls,
        config: PomodoroConfig,
        *,
        delegate: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> "PomodoroTimer":
        factory = functools.partial(
            ThreadedCountdown,
            poll_interval_seconds=config.poll_interval_seconds,
            logger=logger,
        )
        return cls(
            config.settings,
            delegate=delegate,
            countdown_factory=factory,
            logger=logger,
        )

    # Properties

    @property
    def session(self) -> SessionType:
        return self._session

    @property
    def settings(self) -> Settings:
        return self._settings

    @settings.setter
    def settings(self, settings: Settings) -> None:
        with self._lock:
            self._settings = settings
            self._logger.info("Settings changed: %s", settings)
            self._notify("on_settings_changed", settings)

    @property
    def streaks_count(self) -> int:
        return self._streaks

    @streaks_count.setter
    def streaks_count(self, value: int) -> None:
        with self._lock:
            self._streaks = max(int(value), 0)

    @property
    def is_active(self) -> bool:
        countdown = self._countdown
        return countdown is not None and countdown.is_active

    @property
    def seconds_remaining(self) -> float:
        if self._session is SessionType.IDLE:
            return float(self._settings.focus_duration)
        countdown = self._countdown
        if countdown is None:
            return 0.0
        return countdown.seconds_remaining

    # Sessions

    def start_session(self, session: SessionType, seconds: Optional[float] = None) -> None:
        session = SessionType(session)
        with self._lock:
            if session is SessionType.IDLE:
                duration = 0.0
                self._discard_countdown()
            else:
                duration = (
                    float(seconds) if seconds is not None else self._settings.duration_for(session)
                )
                self._replace_countdown(duration)

            self._session = session
            self._logger.info(
                "Session started: session=%s duration=%ss",
                session.label,
                duration,
            )
            self._notify("on_session_started", session)

    def start_focus(self, seconds: Optional[float] = None) -> None:
        self.start_session(SessionType.FOCUS, seconds)

    def start_short_break(self, seconds: Optional[float] = None) -> None:
        self.start_session(SessionType.SHORT_BREAK, seconds)

    def start_long_break(self, seconds: Optional[float] = None) -> None:
        self.start_session(SessionType.LONG_BREAK, seconds)

    def start_break(self) -> None:
        with self._lock:
            self.start_session(self.next_break_type())

    def next_break_type(self) -> SessionType:
        if self._streaks < self._settings.streaks_to_long_break:
            return SessionType.SHORT_BREAK
        return SessionType.LONG_BREAK

    def pause(self) -> None:
        with self._lock:
            if self._countdown is not None:
                self._countdown.pause()
            self._logger.info(
                "Session paused: session=%s remaining=%ss",
                self._session.label,
                self.seconds_remaining,
            )
            self._notify("on_session_paused", self._session)

    def resume(self) -> None:
        with self._lock:
            if self._countdown is not None:
                self._countdown.resume()
            self._logger.info("Session resumed: session=%s", self._session.label)
            self._notify("on_session_resumed", self._session)

    def resume_session(self, seconds: float, session: SessionType) -> None:
        """Continue ``session`` mid-flight with ``seconds`` left on the clock.

        Idle creates no countdown but still reports a resumed notification.
        """
        session = SessionType(session)
        with self._lock:
            if session is not SessionType.IDLE:
                self._replace_countdown(float(seconds))
            self._session = session
            self._logger.info(
                "Session resumed: session=%s remaining=%ss",
                session.label,
                seconds,
            )
            self._notify("on_session_resumed", session)

    def cancel(self) -> None:
        with self._lock:
            self._discard_countdown()
            self._session = SessionType.IDLE
            self._logger.info("Session cancelled")
            self._notify("on_cancelled")

    def poll(self) -> None:
        """Advance a host-polled countdown; self-driven countdowns need no polling."""
        poll = getattr(self._countdown, "poll", None)
        if poll is not None:
            poll()

    # Streaks

    def reset_streaks(self) -> None:
        with self._lock:
            self._streaks = 0
            self._logger.info("Streaks reset")
            self._notify("on_streaks_reset")

    # End times

    def current_session_end_time(self) -> Optional[datetime]:
        with self._lock:
            if self._session is SessionType.IDLE or not self.is_active:
                return None
            return self._now() + timedelta(seconds=self.seconds_remaining)

    def break_end_time(self) -> Optional[datetime]:
        """End of the current break, or of the break following the current focus."""
        with self._lock:
            if self._session is SessionType.IDLE or not self.is_active:
                return None
            seconds = self.seconds_remaining
            if self._session is SessionType.FOCUS:
                seconds += self._settings.duration_for(self.next_break_type())
            return self._now() + timedelta(seconds=seconds)

    # Snapshots

    def current_state(self) -> SessionState:
        with self._lock:
            end_time = self.current_session_end_time()
            if end_time is not None:
                return SessionState.for_active(self._session, self._streaks, end_time)
            return SessionState.for_inactive(
                self._session,
                self._streaks,
                self.seconds_remaining,
            )

    def set_state(self, state: SessionState) -> None:
        """Rebuild the live session described by a saved snapshot.

        An end time that already passed yields a non-positive remaining time;
        the countdown then completes right away and the usual completion
        effects (streak, auto-break) apply.

        A paused snapshot is restored at its frozen remaining time even when
        that is zero; the completion then fires once the host resumes it, so a
        session saved after it already ended is counted again.
        """
        session = SessionType(state.type)
        with self._lock:
            if session is SessionType.IDLE:
                full_duration = float(self._settings.focus_duration)
            else:
                full_duration = self._settings.duration_for(session)

            if state.end_time is not None:
                seconds = float(round((state.end_time - self._now()).total_seconds()))
            elif state.seconds_remaining is not None:
                seconds = float(state.seconds_remaining)
            else:
                seconds = full_duration

            self.streaks_count = state.streak
            self._logger.info(
                "Restoring session: session=%s active=%s remaining=%ss streak=%s",
                session.label,
                state.active,
                seconds,
                self._streaks,
            )

            if seconds == full_duration:
                self.start_session(session, seconds)
            else:
                self.resume_session(seconds, session)

            if not state.active:
                self.pause()
            elif seconds <= 0:
                self.poll()

    # Countdown notifications

    def _handle_tick(self, countdown: Countdown, seconds_remaining: float) -> None:
        with self._lock:
            if countdown is not self._countdown:
                self._logger.debug("Ignoring tick from replaced countdown")
                return
            self._notify("on_tick", seconds_remaining)

    def _handle_complete(self, countdown: Countdown) -> None:
        with self._lock:
            if countdown is not self._countdown:
                self._logger.debug("Ignoring completion from replaced countdown")
                return

            ended = self._session
            if ended is SessionType.FOCUS:
                self._streaks += 1
            elif ended is SessionType.LONG_BREAK:
                self._streaks = 0

            self._logger.info(
                "Session ended: session=%s streaks=%s",
                ended.label,
                self._streaks,
            )
            self._notify("on_session_ended", ended)

            if not self._settings.auto_break:
                return
            if ended is SessionType.FOCUS:
                self.start_break()
            elif ended.is_break:
                self.start_session(SessionType.IDLE)

    # Internals

    def _replace_countdown(self, duration: float) -> None:
        self._discard_countdown()
        countdown = self._countdown_factory(self._relay)
        self._countdown = countdown
        countdown.start(duration)

    def _discard_countdown(self) -> None:
        countdown = self._countdown
        self._countdown = None
        if countdown is not None:
            countdown.stop()

    def _now(self) -> datetime:
        if self._now_fn is not None:
            return self._now_fn()
        return datetime.now(timezone.utc)

    def _notify(self, hook: str, *args: Any) -> None:
        delegate = self.delegate
        if delegate is None:
            return
        callback = getattr(delegate, hook, None)
        if callback is not None:
            callback(self, *args)
