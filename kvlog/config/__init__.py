"""Configuration module for kv-log."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
