"""Shared pytest fixtures for TamoStudy tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication

from tamostudy.database.db import configure_engine, init_db
from tamostudy.timer.engine import FocusTimer

from helpers import FakeSoundManager


@pytest.fixture(scope="session")
def qapp():
    """A single Qt application instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def sounds():
    return FakeSoundManager()


@pytest.fixture
def timer(qapp, sounds):
    """FocusTimer with DB enabled and a recording sound sink."""
    return FocusTimer(parent=None, sound_manager=sounds, alarm="bell")


@pytest.fixture
def timer_no_db(qapp, sounds):
    """FocusTimer with DB disabled (pure host wiring tests)."""
    return FocusTimer(parent=None, db_enabled=False, sound_manager=sounds)
