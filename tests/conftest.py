"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_provchain_loggers() -> Iterator[None]:
    """Keep provchain log levels from leaking between tests."""
    logger = logging.getLogger("provchain")
    level = logger.level
    yield
    logger.setLevel(level)
