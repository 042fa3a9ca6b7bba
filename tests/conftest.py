"""Shared test fixtures."""

import os
import sys
from collections.abc import Generator

import pytest
from loguru import logger

from boilerplate.core.config import get_config


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop configuration variables inherited from the shell."""
    for key in list(os.environ):
        if key.upper().startswith(('OBSERVABILITY', 'APP_')):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def clear_config_cache() -> Generator[None, None, None]:
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def restore_logger() -> Generator[None, None, None]:
    """Put loguru back to a single stderr sink after a test reconfigures it."""
    yield
    logger.remove()
    logger.configure(extra={}, patcher=lambda _record: None)
    logger.add(sys.stderr)
