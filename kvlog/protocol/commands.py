"""
Protocol Command and Reply Definitions

This module defines the data structures for parsed commands and the
replies the executor produces for them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class CommandType(Enum):
    """Enumeration of supported command types."""
    GET = "GET"
    SET = "SET"
    DEL = "DEL"
    FLUSH = "FLUSH"
    INCR = "INCR"


@dataclass(frozen=True)
class Command:
    """
    Base class of the parsed command variants.

    Each variant carries only the fields it needs; the variant tag lives in
    the class-level ``type`` attribute.
    """
    type: ClassVar[CommandType]

    def __str__(self) -> str:
        return self.type.value


@dataclass(frozen=True)
class Set(Command):
    """SET <key> <value>: insert or overwrite a key."""
    type: ClassVar[CommandType] = CommandType.SET
    key: str
    value: str

    def __str__(self) -> str:
        return f"SET {self.key} {self.value}"


@dataclass(frozen=True)
class Get(Command):
    """GET <key>: read a key."""
    type: ClassVar[CommandType] = CommandType.GET
    key: str

    def __str__(self) -> str:
        return f"GET {self.key}"


@dataclass(frozen=True)
class Del(Command):
    """DEL <key>: remove a key if present."""
    type: ClassVar[CommandType] = CommandType.DEL
    key: str

    def __str__(self) -> str:
        return f"DEL {self.key}"


@dataclass(frozen=True)
class Incr(Command):
    """INCR <key>: add one to an integer value (absent counts as 0)."""
    type: ClassVar[CommandType] = CommandType.INCR
    key: str

    def __str__(self) -> str:
        return f"INCR {self.key}"


@dataclass(frozen=True)
class Flush(Command):
    """FLUSH: remove every key."""
    type: ClassVar[CommandType] = CommandType.FLUSH


class ReplyStatus(Enum):
    """Enumeration of reply statuses."""
    OK = "OK"
    ERROR = "ERROR"


@dataclass
class Reply:
    """
    Represents the single line of output produced for one command.

    Attributes:
        status: OK or ERROR
        text: Reply body ("OK", "nil", a stored value, or an error message)
    """
    status: ReplyStatus
    text: str

    @classmethod
    def ok(cls) -> "Reply":
        """Create the plain 'OK' acknowledgement."""
        return cls(status=ReplyStatus.OK, text="OK")

    @classmethod
    def nil(cls) -> "Reply":
        """Create the 'nil' reply for a missing key."""
        return cls(status=ReplyStatus.OK, text="nil")

    @classmethod
    def value_reply(cls, value: str) -> "Reply":
        """Create a GET reply carrying a stored value."""
        return cls(status=ReplyStatus.OK, text=value)

    @classmethod
    def error(cls, message: str) -> "Reply":
        """Create an error reply."""
        return cls(status=ReplyStatus.ERROR, text=message)

    @property
    def is_error(self) -> bool:
        return self.status == ReplyStatus.ERROR
