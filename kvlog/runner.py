#!/usr/bin/env python3
"""
kv-log Entry Point

Reads a command log line by line, applies every command to an in-memory
store and writes one reply line per command to stdout.

Usage:
    python -m kvlog                          # Run ./commands.log
    python -m kvlog path/to/commands.log     # Custom input file
    python -m kvlog -                        # Read commands from stdin
    python -m kvlog --on-error continue      # Reply ERR and keep going
    python -m kvlog --strict                 # Reject trailing input
    python -m kvlog --debug                  # Enable debug logging

Environment Variables:
    KVLOG_INPUT      - Default input path
    KVLOG_ON_ERROR   - Error policy (halt/continue)
    KVLOG_STRICT     - Reject trailing input (true/false)
    KVLOG_DEBUG      - Enable debug mode (true/false)
    KVLOG_LOG_LEVEL  - Log level when not in debug mode
"""

import argparse
import logging
import sys
from enum import Enum
from typing import Iterable, Iterator, List, Optional, TextIO

from .config.settings import settings
from .errors import KVLogError
from .protocol.commands import Reply
from .protocol.parser import ProtocolParser
from .store.executor import CommandExecutor

logger = logging.getLogger(__name__)


class ErrorPolicy(Enum):
    """What the runner does with a line that fails to parse or apply."""
    HALT = "halt"
    CONTINUE = "continue"


class CommandLogRunner:
    """
    Drives the parser and executor over a sequence of lines.

    Lines are handled strictly in order. Under ErrorPolicy.HALT the first
    failing line re-raises its KVLogError after the replies for all earlier
    lines have been produced; under ErrorPolicy.CONTINUE the failing line
    produces an ERR reply instead.

    Usage:
        runner = CommandLogRunner()
        for line in runner.run(["SET a 1", "GET a"]):
            print(line, end="")

    Attributes:
        executor: The CommandExecutor holding the store
        parser: The ProtocolParser for parsing lines
        on_error: The ErrorPolicy in force
    """

    def __init__(
            self,
            executor: CommandExecutor = None,
            parser: ProtocolParser = None,
            on_error: ErrorPolicy = None,
    ):
        self.executor = executor if executor is not None else CommandExecutor()
        self.parser = parser if parser is not None else ProtocolParser()
        self.on_error = on_error if on_error is not None else ErrorPolicy(settings.ON_ERROR)

        self._lines = 0
        self._errors = 0

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        """
        Process ``lines`` and yield one formatted reply line per input line.

        Yields:
            Reply strings WITH trailing newline

        Raises:
            KVLogError: Under ErrorPolicy.HALT, for the first failing line
        """
        for lineno, line in enumerate(lines, start=1):
            self._lines += 1
            raw = line.rstrip("\r\n")
            try:
                command = self.parser.parse(raw)
                reply = self.executor.apply(command)
            except KVLogError as exc:
                self._errors += 1
                if self.on_error == ErrorPolicy.HALT:
                    logger.error(f"Halting at line {lineno}: {exc}")
                    raise
                logger.warning(f"Skipping line {lineno}: {exc}")
                reply = Reply.error(str(exc))

            yield self.parser.format_reply(reply)

    def run_stream(self, source: TextIO, out: TextIO) -> None:
        """Process every line of ``source``, writing replies to ``out``."""
        try:
            for reply in self.run(source):
                out.write(reply)
        finally:
            out.flush()

    def get_stats(self) -> dict:
        """
        Get run statistics.

        Returns:
            Dictionary with line and error counts plus executor stats.
        """
        return {
            "lines": self._lines,
            "errors": self._errors,
            "executor_stats": self.executor.get_stats(),
        }


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="kvlog",
        description="kv-log: apply a command log to an in-memory key-value store",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=settings.INPUT_PATH,
        help="Command log to read ('-' for stdin)",
    )

    parser.add_argument(
        "--on-error",
        choices=[policy.value for policy in ErrorPolicy],
        default=settings.ON_ERROR,
        help="Stop at the first bad line, or reply ERR and keep going",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        default=settings.STRICT,
        help="Reject lines with extra input after the command",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    # argparse does not check defaults against choices
    if args.on_error not in [policy.value for policy in ErrorPolicy]:
        parser.error(f"invalid error policy: {args.on_error!r}")

    return args


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL, logging.INFO)

    # stdout carries the replies
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit status: 0 on success, 1 if the run halted on a bad
        line or the input could not be read.
    """
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    runner = CommandLogRunner(
        parser=ProtocolParser(strict=args.strict),
        on_error=ErrorPolicy(args.on_error),
    )

    logger.info(f"Running command log {args.input}")
    logger.debug(f"  On error: {args.on_error}")
    logger.debug(f"  Strict: {args.strict}")

    try:
        if args.input == "-":
            runner.run_stream(sys.stdin, sys.stdout)
        else:
            with open(args.input, encoding=settings.INPUT_ENCODING) as source:
                runner.run_stream(source, sys.stdout)
    except KVLogError:
        # Already logged by the runner
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1

    stats = runner.get_stats()
    logger.info(
        f"Processed {stats['lines']} lines, {stats['errors']} errors, "
        f"{stats['executor_stats']['store_stats']['total_keys']} keys in store"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
