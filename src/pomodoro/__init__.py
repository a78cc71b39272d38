from .codec import (
    decode_settings,
    decode_state,
    encode_settings,
    encode_state,
    settings_from_dict,
    settings_to_dict,
    state_from_dict,
    state_to_dict,
)
from .config import PomodoroConfig, load_pomodoro_config, parse_pomodoro_config
from .countdown import (
    Countdown,
    CountdownFactory,
    CountdownListener,
    PolledCountdown,
    ThreadedCountdown,
)
from .delegate import PomodoroTimerDelegate
from .errors import (
    DecodeError,
    InvalidSettingsError,
    PomodoroConfigurationError,
    PomodoroError,
)
from .service import PomodoroTimer
from .settings import Settings
from .state import SessionState, SessionType

__all__ = [
    "Countdown",
    "CountdownFactory",
    "CountdownListener",
    "DecodeError",
    "InvalidSettingsError",
    "PolledCountdown",
    "PomodoroConfig",
    "PomodoroConfigurationError",
    "PomodoroError",
    "PomodoroTimer",
    "PomodoroTimerDelegate",
    "SessionState",
    "SessionType",
    "Settings",
    "ThreadedCountdown",
    "decode_settings",
    "decode_state",
    "encode_settings",
    "encode_state",
    "load_pomodoro_config",
    "parse_pomodoro_config",
    "settings_from_dict",
    "settings_to_dict",
    "state_from_dict",
    "state_to_dict",
]
