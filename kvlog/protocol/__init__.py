"""Protocol module for kv-log."""

from .commands import (
    Command,
    CommandType,
    Del,
    Flush,
    Get,
    Incr,
    Reply,
    ReplyStatus,
    Set,
)
from .parser import ProtocolParser, parse_command

__all__ = [
    "Command",
    "CommandType",
    "Del",
    "Flush",
    "Get",
    "Incr",
    "Reply",
    "ReplyStatus",
    "Set",
    "ProtocolParser",
    "parse_command",
]
