"""pytest configuration and fixtures for pyqt-livefilter tests."""

import os

# Headless runs: no display server needed
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def people():
    """Three records in a fixed order."""
    return [
        {"name": "Alice", "city": "Reno", "age": 31},
        {"name": "Bob", "city": "Lima", "age": 42},
        {"name": "Carol", "city": "Oslo", "age": 27},
    ]


@pytest.fixture(autouse=True)
def reset_filter_config():
    """Keep application-wide filter config from leaking between tests."""
    from pyqt_livefilter.protocols import set_filter_config

    yield
    set_filter_config(None)
