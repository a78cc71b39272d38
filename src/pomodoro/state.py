"""Session types and the serializable snapshot used to restore a running timer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional


class SessionType(IntEnum):
    """Kind of interval the timer is in; values double as wire codes."""
    IDLE = 0
    FOCUS = 1
    SHORT_BREAK = 2
    LONG_BREAK = 3

    @property
    def is_break(self) -> bool:
        return self in (SessionType.SHORT_BREAK, SessionType.LONG_BREAK)

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, eq=False)
class SessionState:
    """Immutable snapshot of the current session.

    Active snapshots carry the wall-clock ``end_time`` the session is due to
    finish at; inactive (paused or idle) snapshots carry the frozen
    ``seconds_remaining`` instead.
    """
    type: SessionType
    active: bool
    streak: int
    end_time: Optional[datetime] = None
    seconds_remaining: Optional[float] = None

    def __post_init__(self) -> None:
        # Naive end times are read as local wall-clock time.
        if self.end_time is not None and self.end_time.tzinfo is None:
            object.__setattr__(self, "end_time", self.end_time.astimezone(timezone.utc))

    @classmethod
    def for_active(
        cls,
        session_type: SessionType,
        streak: int,
        end_time: datetime,
    ) -> "SessionState":
        return cls(
            type=SessionType(session_type),
            active=True,
            streak=streak,
            end_time=end_time,
        )

    @classmethod
    def for_inactive(
        cls,
        session_type: SessionType,
        streak: int,
        seconds_remaining: float,
    ) -> "SessionState":
        return cls(
            type=SessionType(session_type),
            active=False,
            streak=streak,
            seconds_remaining=float(seconds_remaining),
        )

    def _comparison_key(self) -> tuple:
        # Serialization round-trips lose sub-second precision on end_time.
        rounded_end = round(self.end_time.timestamp()) if self.end_time is not None else None
        return (self.type, self.active, self.streak, rounded_end, self.seconds_remaining)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SessionState):
            return NotImplemented
        return self._comparison_key() == other._comparison_key()

    def __hash__(self) -> int:
        return hash(self._comparison_key())
