from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.docs_builder import DocsBuilder


@pytest.fixture
def docs_builder(tmp_path: Path) -> DocsBuilder:
    """Provide a reusable documentation tree builder rooted at the pytest tmp_path."""
    return DocsBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_tfmeta_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so they never outlive a test's captured streams."""
    logger = logging.getLogger("tfmeta")
    propagate, level = logger.propagate, logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = propagate
    logger.setLevel(level)
