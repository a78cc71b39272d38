"""Loads timer settings from the ``[pomodoro]`` table of a TOML config file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from .constants import (
    DEFAULT_AUTO_BREAK,
    DEFAULT_FOCUS_SECONDS,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_SHORT_BREAK_SECONDS,
    DEFAULT_STREAKS_TO_LONG_BREAK,
)
from .errors import InvalidSettingsError, PomodoroConfigurationError
from .settings import Settings

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV = "POMODORO_CONFIG_FILE"
SECTION_NAME = "pomodoro"


@dataclass(frozen=True)
class PomodoroConfig:
    settings: Settings = field(default_factory=Settings)
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    source_file: str = ""

    def __post_init__(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise PomodoroConfigurationError(
                f"{SECTION_NAME}.poll_interval_seconds must be greater than zero, "
                f"got: {self.poll_interval_seconds}"
            )


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = environ if environ is not None else os.environ
    raw = config_path or env.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def load_pomodoro_config(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> PomodoroConfig:
    path = resolve_config_path(config_path, environ=environ)
    if not path.exists():
        raise PomodoroConfigurationError(f"Config file not found: {path}")
    if not path.is_file():
        raise PomodoroConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise PomodoroConfigurationError(f"Failed to parse config TOML: {error}") from error

    return parse_pomodoro_config(raw, source_file=str(path))


def parse_pomodoro_config(
    raw: Mapping[str, Any],
    *,
    source_file: str = "",
) -> PomodoroConfig:
    """Parse a raw TOML mapping into validated pomodoro settings."""
    if not isinstance(raw, Mapping):
        raise PomodoroConfigurationError("Root config TOML object must be a table.")

    section = _section(raw, SECTION_NAME)
    try:
        settings = Settings(
            focus_duration=_as_float(
                section.get("focus_duration_seconds", DEFAULT_FOCUS_SECONDS),
                "pomodoro.focus_duration_seconds",
            ),
            short_break_duration=_as_float(
                section.get("short_break_duration_seconds", DEFAULT_SHORT_BREAK_SECONDS),
                "pomodoro.short_break_duration_seconds",
            ),
            long_break_duration=_as_float(
                section.get("long_break_duration_seconds", DEFAULT_LONG_BREAK_SECONDS),
                "pomodoro.long_break_duration_seconds",
            ),
            streaks_to_long_break=_as_int(
                section.get("streaks_to_long_break", DEFAULT_STREAKS_TO_LONG_BREAK),
                "pomodoro.streaks_to_long_break",
            ),
            auto_break=_as_bool(
                section.get("auto_break", DEFAULT_AUTO_BREAK),
                "pomodoro.auto_break",
            ),
        )
    except InvalidSettingsError as error:
        raise PomodoroConfigurationError(f"Invalid [{SECTION_NAME}] settings: {error}") from error

    return PomodoroConfig(
        settings=settings,
        poll_interval_seconds=_as_float(
            section.get("poll_interval_seconds", DEFAULT_POLL_INTERVAL_SECONDS),
            "pomodoro.poll_interval_seconds",
        ),
        source_file=source_file,
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise PomodoroConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise PomodoroConfigurationError(f"{field_name} must be a boolean.")


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise PomodoroConfigurationError(f"{field_name} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError) as error:
        raise PomodoroConfigurationError(f"{field_name} must be an integer.") from error


def _as_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise PomodoroConfigurationError(f"{field_name} must be a number.")
    try:
        return float(value)
    except (TypeError, ValueError) as error:
        raise PomodoroConfigurationError(f"{field_name} must be a number.") from error
