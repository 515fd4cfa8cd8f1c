"""Store module for kv-log."""

from .executor import CommandExecutor
from .kv_store import KVStore

__all__ = ["CommandExecutor", "KVStore"]
