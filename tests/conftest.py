"""Pytest configuration.

Puts the project root on sys.path so ``import BackEnd`` works from any
working directory, and points the data directory at a per-test tmp dir
so no test touches the real session log.
"""

import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    monkeypatch.setenv("DESK_TRACKER_HOME", str(data_dir))
    return data_dir


@pytest.fixture(scope="session")
def qt_app():
    # Widgets need a platform plugin even when nothing is shown
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
