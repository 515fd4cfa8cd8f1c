"""
Command Executor Module

This module applies parsed commands to a KVStore and produces one Reply
per command. The executor never performs I/O; reading the log and writing
replies is the runner's job.
"""

import logging
import re
from typing import Any, Callable, Dict, Optional

from ..errors import CommandError, IncrOverflowError, IncrTypeError
from ..protocol.commands import (
    Command,
    CommandType,
    Del,
    Flush,
    Get,
    Incr,
    Reply,
    Set,
)
from .kv_store import KVStore

logger = logging.getLogger(__name__)

# INCR works on signed 64-bit integers
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_int64(text: str) -> Optional[int]:
    """
    Parse ``text`` as a signed 64-bit decimal integer.

    Only an optional sign followed by ASCII digits is accepted; int() alone
    would also allow surrounding whitespace, underscores and non-ASCII
    digits.

    Returns:
        The integer, or None if ``text`` is not one or is out of range.
    """
    if not _INTEGER_RE.fullmatch(text):
        return None
    number = int(text)
    if number < INT64_MIN or number > INT64_MAX:
        return None
    return number


class CommandExecutor:
    """
    Applies commands to a key-value store.

    Command semantics:
        SET k v  -> store v at k                       -> OK
        GET k    -> no change                          -> value | nil
        DEL k    -> remove k if present                -> OK
        INCR k   -> k = int(k or "0") + 1               -> OK
        FLUSH    -> remove every key                   -> OK

    Every apply() either performs the whole effect or raises before touching
    the store.

    Attributes:
        store: The KVStore the commands are applied to
    """

    def __init__(self, store: KVStore = None):
        """
        Initialize the executor.

        Args:
            store: KVStore instance (creates new one if not provided)
        """
        self.store = store if store is not None else KVStore()

        self._handlers: Dict[CommandType, Callable[[Any], Reply]] = {
            CommandType.SET: self._apply_set,
            CommandType.GET: self._apply_get,
            CommandType.DEL: self._apply_del,
            CommandType.INCR: self._apply_incr,
            CommandType.FLUSH: self._apply_flush,
        }

        self._applied = 0
        self._failed = 0

    def apply(self, command: Command) -> Reply:
        """
        Apply one command to the store.

        Args:
            command: A parsed Command variant

        Returns:
            The Reply for the command

        Raises:
            IncrTypeError: INCR on a value that is not an integer
            IncrOverflowError: INCR past the 64-bit maximum
            CommandError: The object is not a known command
        """
        handler = self._handlers.get(getattr(command, "type", None))
        if handler is None:
            self._failed += 1
            raise CommandError(f"unsupported command: {command!r}")

        try:
            reply = handler(command)
        except CommandError:
            self._failed += 1
            raise

        self._applied += 1
        logger.debug(f"{command} -> {reply.text}")
        return reply

    def _apply_set(self, command: Set) -> Reply:
        self.store.set(command.key, command.value)
        return Reply.ok()

    def _apply_get(self, command: Get) -> Reply:
        value = self.store.get(command.key)
        return Reply.value_reply(value) if value is not None else Reply.nil()

    def _apply_del(self, command: Del) -> Reply:
        self.store.delete(command.key)
        return Reply.ok()

    def _apply_incr(self, command: Incr) -> Reply:
        current = self.store.get(command.key)
        if current is None:
            current = "0"

        number = parse_int64(current)
        if number is None:
            raise IncrTypeError(command.key, current)
        if number == INT64_MAX:
            raise IncrOverflowError(command.key, number)

        self.store.set(command.key, str(number + 1))
        return Reply.ok()

    def _apply_flush(self, command: Flush) -> Reply:
        removed = self.store.clear()
        logger.debug(f"Flushed {removed} keys")
        return Reply.ok()

    def get_stats(self) -> Dict[str, Any]:
        """
        Get executor statistics.

        Returns:
            Dictionary with applied/failed command counts and store stats.
        """
        return {
            "applied": self._applied,
            "failed": self._failed,
            "store_stats": self.store.get_stats(),
        }
