"""Shared pytest fixtures for softascii tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

SOME_ASCII = "hy there"
SOME_NOT_ASCII = "malformed←"


@pytest.fixture
def ascii_text() -> str:
    """Plain ASCII text accepted by every checked constructor."""
    return SOME_ASCII


@pytest.fixture
def non_ascii_text() -> str:
    """Text ending in a non-ASCII arrow, rejected by checked constructors."""
    return SOME_NOT_ASCII


@pytest.fixture
def _restore_logging() -> Generator[None]:
    """Restore root and package logger state after a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package = logging.getLogger("softascii")
    package_level = package.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.setLevel(package_level)
