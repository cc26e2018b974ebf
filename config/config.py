from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
import logging
import os

# Load environment variables from .env file
load_dotenv()


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    max_wait: float = 10.0
    poll_interval: float = 0.5
    action_timeout: float = 2.0
    log_level: str = "INFO"
    base_url: Optional[str] = None
    api_key: Optional[str] = None


def _float_env(name: str, default: float, positive: bool = False) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}")
    if positive and value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


def _log_level_env(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper() or default
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{name} must be a logging level name, got {level!r}")
    return level


def load_settings() -> Settings:
    return Settings(
        max_wait=_float_env("UI_MAX_WAIT", 10.0),
        poll_interval=_float_env("UI_POLL_INTERVAL", 0.5, positive=True),
        action_timeout=_float_env("UI_ACTION_TIMEOUT", 2.0, positive=True),
        log_level=_log_level_env("UI_LOG_LEVEL", "INFO"),
        base_url=os.getenv("BASE_URL") or None,
        api_key=os.getenv("GEMINI_API_KEY") or None,
    )
