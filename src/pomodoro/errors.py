class PomodoroError(Exception):
    """Base exception for pomodoro session handling."""


class InvalidSettingsError(PomodoroError, ValueError):
    """Raised when timer settings contain a non-positive duration or threshold."""


class DecodeError(PomodoroError, ValueError):
    """Raised when serialized settings or session state are malformed."""


class PomodoroConfigurationError(PomodoroError):
    """Raised when the pomodoro configuration file is invalid."""
