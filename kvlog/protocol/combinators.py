"""
Parser Combinators

A parser is any callable ``parser(text, pos) -> (value, new_pos)`` that
either consumes input starting at ``pos`` or raises ParseError. The helpers
below build parsers out of smaller ones; the command grammar in
``parser.py`` is assembled entirely from them.

Example:
    >>> kv = sequence(tag("SET"), space1, alphanumeric1)
    >>> kv("SET foo", 0)
    (('SET', ' ', 'foo'), 7)
"""

from typing import Any, Callable, Tuple

from ..errors import ParseError

Parser = Callable[[str, int], Tuple[Any, int]]


def tag(literal: str) -> Parser:
    """Match ``literal`` exactly (case-sensitive)."""
    def parse(text: str, pos: int) -> Tuple[str, int]:
        if text.startswith(literal, pos):
            return literal, pos + len(literal)
        raise ParseError(text, pos, expected=repr(literal))

    return parse


def take_while1(predicate: Callable[[str], bool], expected: str) -> Parser:
    """Match the longest non-empty run of characters satisfying ``predicate``."""
    def parse(text: str, pos: int) -> Tuple[str, int]:
        end = pos
        while end < len(text) and predicate(text[end]):
            end += 1
        if end == pos:
            raise ParseError(text, pos, expected=expected)
        return text[pos:end], end

    return parse


def is_space(ch: str) -> bool:
    return ch == " " or ch == "\t"


def is_alphanumeric(ch: str) -> bool:
    # ASCII only: str.isalnum() alone would also accept other scripts
    return ch.isascii() and ch.isalnum()


space1 = take_while1(is_space, "whitespace")
alphanumeric1 = take_while1(is_alphanumeric, "alphanumeric")


def sequence(*parsers: Parser) -> Parser:
    """Run ``parsers`` one after another, returning a tuple of their values."""
    def parse(text: str, pos: int) -> Tuple[Tuple[Any, ...], int]:
        values = []
        for parser in parsers:
            value, pos = parser(text, pos)
            values.append(value)
        return tuple(values), pos

    return parse


def alt(*parsers: Parser) -> Parser:
    """
    Try ``parsers`` in order and return the first success.

    When all of them fail, the error from the alternative that got furthest
    into the input is raised (the earlier alternative wins a tie). If none
    got past the starting column, a single error listing everything that
    was expected there is raised instead.
    """
    def parse(text: str, pos: int) -> Tuple[Any, int]:
        errors = []
        for parser in parsers:
            try:
                return parser(text, pos)
            except ParseError as exc:
                errors.append(exc)

        furthest = max(errors, key=lambda exc: exc.position)
        if furthest.position > pos:
            # max() keeps the first of equal positions
            raise furthest
        raise ParseError(
            text,
            pos,
            expected=" or ".join(exc.expected for exc in errors),
        )

    return parse


def mapped(parser: Parser, func: Callable[[Any], Any]) -> Parser:
    """Transform the value produced by ``parser`` with ``func``."""
    def parse(text: str, pos: int) -> Tuple[Any, int]:
        value, pos = parser(text, pos)
        return func(value), pos

    return parse


def context(name: str, parser: Parser) -> Parser:
    """Label failures of ``parser`` with the rule name ``name``."""
    def parse(text: str, pos: int) -> Tuple[Any, int]:
        try:
            return parser(text, pos)
        except ParseError as exc:
            raise exc.push_context(name)

    return parse
