"""
Runtime settings, read from the environment (and ``.env`` via python-dotenv).
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from coding_agent.errors import ConfigError

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1"


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigError: GEMINI_API_KEY is missing, or a numeric/level value
                cannot be parsed
        """
        env = os.environ if environ is None else environ

        api_key = env.get("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigError("GEMINI_API_KEY is missing in your environment or .env file.")

        timeout: Optional[float] = None
        raw_timeout = env.get("GEMINI_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(f"GEMINI_TIMEOUT must be a number of seconds, got {raw_timeout!r}")
            if timeout <= 0:
                raise ConfigError(f"GEMINI_TIMEOUT must be positive, got {raw_timeout!r}")

        level_name = env.get("CODING_AGENT_LOG_LEVEL", "WARNING").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ConfigError(f"CODING_AGENT_LOG_LEVEL is not a logging level: {level_name!r}")

        return cls(
            api_key=api_key,
            model=env.get("GEMINI_MODEL", "").strip() or DEFAULT_MODEL,
            base_url=(env.get("GEMINI_BASE_URL", "").strip() or DEFAULT_BASE_URL).rstrip("/"),
            timeout=timeout,
            log_level=level,
        )
