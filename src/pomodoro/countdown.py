"""Countdown collaborators driving the session timer.

``PolledCountdown`` is advanced explicitly by a host loop calling ``poll()``;
``ThreadedCountdown`` runs the same logic on a daemon worker thread.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable, Optional, Protocol

from .constants import (
    DEFAULT_LOGGER_NAME,
    DEFAULT_POLL_INTERVAL_SECONDS,
    INERT_PHASES,
    PHASE_COMPLETED,
    PHASE_IDLE,
    PHASE_PAUSED,
    PHASE_RUNNING,
    PHASE_STOPPED,
)


class CountdownListener(Protocol):
    def on_tick(self, countdown: "Countdown", seconds_remaining: float) -> None: ...

    def on_complete(self, countdown: "Countdown") -> None: ...


class Countdown(Protocol):
    @property
    def is_active(self) -> bool: ...

    @property
    def seconds_remaining(self) -> float: ...

    def start(self, duration_seconds: float) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def stop(self) -> None: ...


CountdownFactory = Callable[[CountdownListener], Countdown]


class PolledCountdown:
    """Monotonic countdown that reports ticks and completion from ``poll()``."""

    def __init__(
        self,
        listener: CountdownListener,
        *,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._listener = listener
        self._clock = clock
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._lock = threading.Lock()

        self._phase = PHASE_IDLE
        self._duration_seconds = 0.0
        self._started_at: Optional[float] = None
        self._paused_at: Optional[float] = None
        self._paused_total_seconds = 0.0
        self._last_emitted_second: Optional[int] = None

    @property
    def phase(self) -> str:
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase == PHASE_RUNNING

    @property
    def is_finished(self) -> bool:
        return self._phase in INERT_PHASES

    @property
    def seconds_remaining(self) -> float:
        with self._lock:
            return self._remaining_locked(self._now())

    def start(self, duration_seconds: float) -> None:
        with self._lock:
            self._duration_seconds = float(duration_seconds)
            self._phase = PHASE_RUNNING
            self._started_at = self._now()
            self._paused_at = None
            self._paused_total_seconds = 0.0
            self._last_emitted_second = None
        self._logger.debug("Countdown started: duration=%ss", self._duration_seconds)

    def pause(self) -> None:
        with self._lock:
            if self._phase != PHASE_RUNNING:
                return
            self._paused_at = self._now()
            self._phase = PHASE_PAUSED

    def resume(self) -> None:
        with self._lock:
            if self._phase != PHASE_PAUSED or self._paused_at is None:
                return
            self._paused_total_seconds += max(0.0, self._now() - self._paused_at)
            self._paused_at = None
            self._phase = PHASE_RUNNING
            self._last_emitted_second = None

    def stop(self) -> None:
        with self._lock:
            if self._phase in INERT_PHASES:
                return
            self._phase = PHASE_STOPPED
            self._paused_at = None

    def poll(self) -> None:
        """Deliver a tick (at most once per whole second) or the single completion."""
        with self._lock:
            if self._phase != PHASE_RUNNING:
                return

            remaining = self._remaining_locked(self._now())
            completed = remaining <= 0
            if completed:
                self._phase = PHASE_COMPLETED
                self._last_emitted_second = 0
            else:
                second = int(math.ceil(remaining))
                if self._last_emitted_second == second:
                    return
                self._last_emitted_second = second

        if completed:
            self._logger.debug("Countdown completed")
            self._listener.on_complete(self)
        else:
            self._listener.on_tick(self, remaining)

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return time.monotonic()

    def _remaining_locked(self, now: float) -> float:
        if self._phase not in (PHASE_RUNNING, PHASE_PAUSED) or self._started_at is None:
            return 0.0
        if self._phase == PHASE_PAUSED and self._paused_at is not None:
            now = self._paused_at
        elapsed = max(0.0, now - self._started_at - self._paused_total_seconds)
        return max(0.0, self._duration_seconds - elapsed)


class ThreadedCountdown(PolledCountdown):
    """``PolledCountdown`` polled by its own daemon thread until it finishes."""

    def __init__(
        self,
        listener: CountdownListener,
        *,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be greater than zero")
        super().__init__(listener, clock=clock, logger=logger)
        self._poll_interval_seconds = float(poll_interval_seconds)
        self._halt = threading.Event()
        self._worker: Optional[threading.Thread] = None

    def start(self, duration_seconds: float) -> None:
        super().start(duration_seconds)
        self._halt.set()
        halt = threading.Event()
        self._halt = halt
        self._worker = threading.Thread(
            target=self._run,
            args=(halt,),
            name="pomodoro-countdown",
            daemon=True,
        )
        self._worker.start()

    def stop(self) -> None:
        super().stop()
        self._halt.set()

    def _run(self, halt: threading.Event) -> None:
        while not halt.wait(self._poll_interval_seconds):
            try:
                self.poll()
            except Exception:
                self._logger.exception("Countdown listener failed; stopping worker")
                return
            if self.is_finished:
                return
