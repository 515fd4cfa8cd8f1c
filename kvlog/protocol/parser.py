"""
Protocol Parser Module

This module turns raw command-log lines into Command objects and formats
Reply objects back into output lines.
"""

import logging
from typing import Optional, Tuple

from ..config.settings import settings
from ..errors import ParseError
from .combinators import (
    alphanumeric1,
    alt,
    context,
    is_space,
    mapped,
    sequence,
    space1,
    tag,
)
from .commands import Command, Del, Flush, Get, Incr, Reply, Set

logger = logging.getLogger(__name__)


def _keyword_with_key(keyword: str):
    return sequence(tag(keyword), space1, alphanumeric1)


parse_get = _keyword_with_key("GET")
parse_delete = _keyword_with_key("DEL")
parse_incr = _keyword_with_key("INCR")
parse_set = sequence(tag("SET"), space1, alphanumeric1, space1, alphanumeric1)
parse_flush = tag("FLUSH")

command_rule = context("command", alt(
    context("parse-get", mapped(parse_get, lambda v: Get(v[2]))),
    context("parse-set", mapped(parse_set, lambda v: Set(v[2], v[4]))),
    context("parse-delete", mapped(parse_delete, lambda v: Del(v[2]))),
    context("parse-flush", mapped(parse_flush, lambda _: Flush())),
    context("parse-incr", mapped(parse_incr, lambda v: Incr(v[2]))),
))


class ProtocolParser:
    """
    Parser for the kv-log command grammar.

    Grammar:
        command := GET SP key | SET SP key SP value | DEL SP key
                 | FLUSH | INCR SP key
        key, value := one or more ASCII letters or digits
        SP := one or more spaces or tabs

    Keywords are case-sensitive. Input left over after a complete command
    is ignored unless the parser is strict.

    Attributes:
        strict: Reject lines with anything but whitespace after the command
    """

    def __init__(self, strict: Optional[bool] = None):
        """
        Initialize the parser.

        Args:
            strict: Reject trailing input (default from settings.STRICT)
        """
        self.strict = strict if strict is not None else settings.STRICT

    def parse_prefix(self, line: str) -> Tuple[Command, str]:
        """
        Parse the command at the start of ``line``.

        Returns:
            The command and whatever input followed it, unconsumed.

        Raises:
            ParseError: If no command rule matches.
        """
        line = line.rstrip("\r\n")
        command, pos = command_rule(line, 0)
        return command, line[pos:]

    def parse(self, line: str) -> Command:
        """
        Parse one line into a Command.

        Args:
            line: Raw command line (a trailing newline is tolerated)

        Returns:
            The parsed Command.

        Raises:
            ParseError: If the line is not a command, or if strict mode is on
                        and the command is followed by extra input.

        Examples:
            >>> ProtocolParser(strict=False).parse("SET a b")
            Set(key='a', value='b')
            >>> ProtocolParser(strict=False).parse("GET a b c")
            Get(key='a')
        """
        command, remainder = self.parse_prefix(line)
        if remainder and not all(is_space(ch) for ch in remainder):
            if self.strict:
                stripped = line.rstrip("\r\n")
                raise ParseError(
                    stripped,
                    len(stripped) - len(remainder),
                    expected="end of line",
                    context=["command"],
                )
            logger.debug(f"Ignoring trailing input after {command}: {remainder!r}")
        return command

    def format_reply(self, reply: Reply) -> str:
        """
        Format a Reply into an output line.

        Returns:
            The reply text WITH trailing newline; error replies are
            prefixed with 'ERR'.

        Examples:
            >>> parser = ProtocolParser()
            >>> parser.format_reply(Reply.ok())
            'OK\\n'
            >>> parser.format_reply(Reply.error("bad line"))
            'ERR bad line\\n'
        """
        if reply.is_error:
            return f"ERR {reply.text}\n"
        return f"{reply.text}\n"


_default_parser = ProtocolParser(strict=False)


def parse_command(line: str) -> Command:
    """Parse ``line`` with a permissive parser."""
    return _default_parser.parse(line)
