"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import pytest
from pathlib import Path
from typing import Callable, List

from kvlog.protocol.parser import ProtocolParser
from kvlog.runner import CommandLogRunner, ErrorPolicy
from kvlog.store.executor import CommandExecutor
from kvlog.store.kv_store import KVStore


# ============================================================================
# KVStore Fixtures
# ============================================================================

@pytest.fixture
def store() -> KVStore:
    """Create a fresh, empty KVStore."""
    return KVStore()


@pytest.fixture
def executor(store: KVStore) -> CommandExecutor:
    """Create a CommandExecutor bound to the store fixture."""
    return CommandExecutor(store=store)


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a permissive ProtocolParser."""
    return ProtocolParser(strict=False)


@pytest.fixture
def strict_parser() -> ProtocolParser:
    """Create a ProtocolParser that rejects trailing input."""
    return ProtocolParser(strict=True)


# ============================================================================
# Runner Fixtures
# ============================================================================

@pytest.fixture
def halting_runner(parser: ProtocolParser) -> CommandLogRunner:
    """Create a runner that stops at the first bad line."""
    return CommandLogRunner(parser=parser, on_error=ErrorPolicy.HALT)


@pytest.fixture
def continuing_runner(parser: ProtocolParser) -> CommandLogRunner:
    """Create a runner that replies ERR for bad lines and keeps going."""
    return CommandLogRunner(parser=parser, on_error=ErrorPolicy.CONTINUE)


@pytest.fixture
def log_file(tmp_path: Path) -> Callable[[List[str]], Path]:
    """
    Factory fixture writing a command log to a temporary file.

    Usage:
        def test_something(log_file):
            path = log_file(["SET a 1", "GET a"])
    """
    def factory(lines: List[str]) -> Path:
        path = tmp_path / "commands.log"
        path.write_text("".join(f"{line}\n" for line in lines))
        return path
    return factory


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
