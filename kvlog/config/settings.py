"""
kv-log Configuration Settings

This module contains all configuration constants for the interpreter.
Every field can be overridden from the environment; CLI flags take
precedence over both.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Interpreter configuration settings."""

    # Input settings
    INPUT_PATH: str = os.environ.get("KVLOG_INPUT", "commands.log")
    INPUT_ENCODING: str = "utf-8"

    # Error policy: "halt" stops at the first bad line, "continue" replies
    # ERR and moves on
    ON_ERROR: str = os.environ.get("KVLOG_ON_ERROR", "halt").lower()

    # Parser settings
    STRICT: bool = _env_flag("KVLOG_STRICT")

    # Logging settings
    DEBUG: bool = _env_flag("KVLOG_DEBUG")
    LOG_LEVEL: str = os.environ.get("KVLOG_LOG_LEVEL", "INFO").upper()


# Global settings instance
settings = Settings()
