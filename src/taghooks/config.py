"""Configuration

Settings are read from the environment (and a ``.env`` file, if present)
when the module is imported.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when a required setting is missing."""

    def __init__(self, missing_vars: List[str]):
        self.missing_vars = missing_vars
        message = f"Required environment variables are not set: {', '.join(missing_vars)}"
        super().__init__(message)


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Convert a string to bool"""
    if value is None:
        return default
    return value.lower() == "true"


class Config:
    """taghooks settings"""

    # Trace every filter callback at DEBUG level
    DEBUG = _parse_bool(os.getenv("TAGHOOKS_DEBUG"), False)

    # Logging
    LOG_LEVEL = os.getenv("TAGHOOKS_LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
    LOG_PATH = os.getenv("TAGHOOKS_LOG_PATH") or None

    # Hooks YAML file registered by get_hooks()
    REGISTRY_PATH = os.getenv("TAGHOOKS_REGISTRY") or None

    @classmethod
    def require_registry_path(cls) -> str:
        """Return REGISTRY_PATH or raise ConfigurationError."""
        if not cls.REGISTRY_PATH:
            raise ConfigurationError(["TAGHOOKS_REGISTRY"])
        return cls.REGISTRY_PATH
