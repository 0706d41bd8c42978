"""
Pytest configuration and fixtures for regulation tree tests.
"""

import logging

import pytest

from helpers import SAMPLE_VOLUME


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging calls made by the code under test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_VOLUME


@pytest.fixture
def sample_path(tmp_path):
    """The sample volume written to disk under a bulk-style file name."""
    path = tmp_path / "CFR-2019-title42-vol4.xml"
    path.write_bytes(SAMPLE_VOLUME.encode("utf-8"))
    return path
