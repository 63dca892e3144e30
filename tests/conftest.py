from __future__ import annotations

import logging
from typing import Iterator

import pytest

from tests._fixtures.api_set_builder import ApiSetBuilder


@pytest.fixture
def api_builder() -> ApiSetBuilder:
    """Provide a fresh builder for an empty API documentation set."""
    return ApiSetBuilder()


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[logging.Logger]:
    """Undo handler, level and propagation changes made by configure_logging."""
    logger = logging.getLogger("doccompiler")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
