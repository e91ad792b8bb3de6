"""Centralized configuration with environment-variable overrides."""
from __future__ import annotations
from dataclasses import dataclass
import os
from snek.exceptions.custom_exceptions import ConfigurationError
from snek.utils.constants import DEFAULT_CHUNK_SIZE, LIBRARY_NAME, VERSION

def _env(key: str, default: str) -> str:
    """Read an environment variable with a fallback."""
    return os.getenv(key, default)

def _env_int(key: str, default: int) -> int:
    """Read an integer env var with fallback."""
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default

@dataclass(frozen=True)
class Settings:
    """Library settings (override via env vars)."""
    log_level: str
    user_agent: str
    chunk_size: int

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size}")

    @staticmethod
    def from_env() -> "Settings":
        """Build settings from environment variables."""
        return Settings(
            log_level=_env("SNEK_LOG_LEVEL", "WARNING").upper(),
            user_agent=_env("SNEK_USER_AGENT", f"{LIBRARY_NAME}/{VERSION}"),
            chunk_size=_env_int("SNEK_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        )
