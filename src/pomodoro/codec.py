"""JSON wire format for settings and session snapshots (short, stable keys)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Mapping

from .constants import (
    KEY_ACTIVE,
    KEY_AUTO_BREAK,
    KEY_END_TIME,
    KEY_FOCUS_DURATION,
    KEY_LONG_BREAK_DURATION,
    KEY_SECONDS_REMAINING,
    KEY_SHORT_BREAK_DURATION,
    KEY_STREAK,
    KEY_STREAKS_TO_LONG_BREAK,
    KEY_TYPE,
)
from .errors import DecodeError, InvalidSettingsError
from .settings import Settings
from .state import SessionState, SessionType


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    return {
        KEY_FOCUS_DURATION: settings.focus_duration,
        KEY_SHORT_BREAK_DURATION: settings.short_break_duration,
        KEY_LONG_BREAK_DURATION: settings.long_break_duration,
        KEY_STREAKS_TO_LONG_BREAK: settings.streaks_to_long_break,
        KEY_AUTO_BREAK: settings.auto_break,
    }


def settings_from_dict(raw: Any) -> Settings:
    payload = _as_mapping(raw, "settings")
    try:
        return Settings(
            focus_duration=_required_number(payload, KEY_FOCUS_DURATION),
            short_break_duration=_required_number(payload, KEY_SHORT_BREAK_DURATION),
            long_break_duration=_required_number(payload, KEY_LONG_BREAK_DURATION),
            streaks_to_long_break=_required_int(payload, KEY_STREAKS_TO_LONG_BREAK),
            auto_break=_required_bool(payload, KEY_AUTO_BREAK),
        )
    except InvalidSettingsError as error:
        raise DecodeError(f"Invalid settings payload: {error}") from error


def state_to_dict(state: SessionState) -> dict[str, Any]:
    payload: dict[str, Any] = {
        KEY_TYPE: int(state.type),
        KEY_ACTIVE: state.active,
        KEY_STREAK: state.streak,
    }
    if state.active:
        if state.end_time is not None:
            payload[KEY_END_TIME] = state.end_time.timestamp()
    elif state.seconds_remaining is not None:
        payload[KEY_SECONDS_REMAINING] = state.seconds_remaining
    return payload


def state_from_dict(raw: Any) -> SessionState:
    payload = _as_mapping(raw, "state")
    code = _required_int(payload, KEY_TYPE)
    try:
        session_type = SessionType(code)
    except ValueError as error:
        raise DecodeError(f"Unknown session type code: {code}") from error

    active = _required_bool(payload, KEY_ACTIVE)
    streak = _required_int(payload, KEY_STREAK)
    if streak < 0:
        raise DecodeError(f"'{KEY_STREAK}' must not be negative, got: {streak}")

    if active:
        timestamp = _required_number(payload, KEY_END_TIME)
        try:
            end_time = datetime.fromtimestamp(timestamp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as error:
            raise DecodeError(f"'{KEY_END_TIME}' is not a valid timestamp: {timestamp}") from error
        return SessionState.for_active(session_type, streak, end_time)

    seconds_remaining = _required_number(payload, KEY_SECONDS_REMAINING)
    return SessionState.for_inactive(session_type, streak, seconds_remaining)


def encode_settings(settings: Settings) -> str:
    return json.dumps(settings_to_dict(settings))


def decode_settings(data: str | bytes) -> Settings:
    return settings_from_dict(_loads(data))


def encode_state(state: SessionState) -> str:
    return json.dumps(state_to_dict(state))


def decode_state(data: str | bytes) -> SessionState:
    return state_from_dict(_loads(data))


def _loads(data: str | bytes) -> Any:
    try:
        return json.loads(data)
    except (TypeError, ValueError) as error:
        raise DecodeError(f"Failed to parse JSON payload: {error}") from error


def _as_mapping(raw: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise DecodeError(f"{name} payload must be a JSON object.")
    return raw


def _required(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload or payload[key] is None:
        raise DecodeError(f"Missing required field '{key}'.")
    return payload[key]


def _required_number(payload: Mapping[str, Any], key: str) -> float:
    value = _required(payload, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"'{key}' must be a number.")
    return float(value)


def _required_int(payload: Mapping[str, Any], key: str) -> int:
    value = _required(payload, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"'{key}' must be an integer.")
    return value


def _required_bool(payload: Mapping[str, Any], key: str) -> bool:
    value = _required(payload, key)
    if not isinstance(value, bool):
        raise DecodeError(f"'{key}' must be a boolean.")
    return value
