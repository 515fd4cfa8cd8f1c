"""
Exception classes for kv-log.

Everything the interpreter raises on bad input derives from KVLogError, so
the runner can decide in one place whether a failing line halts the run or
is reported and skipped.
"""

from typing import Optional, Sequence


class KVLogError(Exception):
    """Base exception for all kv-log errors."""

    pass


class ParseError(KVLogError):
    """
    Raised when a line does not match any command rule.

    Attributes:
        line: The line being parsed
        position: 0-based column where the failure was detected
        expected: Description of what the failing rule wanted at that column
        context: Rule names enclosing the failure, outermost first
                 (e.g. ["command", "parse-set"])
    """

    def __init__(
            self,
            line: str,
            position: int,
            expected: str,
            context: Optional[Sequence[str]] = None,
    ):
        self.line = line
        self.position = position
        self.expected = expected
        self.context = list(context) if context else []
        super().__init__(self._format())

    def push_context(self, name: str) -> "ParseError":
        """Record an enclosing rule name and return self for re-raising."""
        self.context.insert(0, name)
        self.args = (self._format(),)
        return self

    @property
    def found(self) -> str:
        """The input remaining at the failure column, or '<end of line>'."""
        rest = self.line[self.position:]
        return rest if rest else "<end of line>"

    def _format(self) -> str:
        trail = " > ".join(self.context) if self.context else "<root>"
        return (
            f"parse error in {trail} at column {self.position}: "
            f"expected {self.expected}, found {self.found!r}"
        )


class CommandError(KVLogError):
    """Raised when a parsed command cannot be applied to the store."""

    pass


class IncrTypeError(CommandError):
    """Raised when INCR targets a value that is not a signed 64-bit integer."""

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"value of key '{key}' is not an integer: {value!r}")


class IncrOverflowError(CommandError):
    """Raised when INCR would push a value past the signed 64-bit maximum."""

    def __init__(self, key: str, value: int):
        self.key = key
        self.value = value
        super().__init__(f"increment of key '{key}' would overflow: {value}")
