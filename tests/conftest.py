from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.catalog_builder import CatalogBuilder


@pytest.fixture
def catalog(tmp_path: Path) -> CatalogBuilder:
    """Provide a reusable catalog builder rooted at the pytest tmp_path."""
    return CatalogBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_skillindex_logger():
    # CLI tests install a non-propagating handler; undo it so caplog keeps working.
    yield
    logger = logging.getLogger("skillindex")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
