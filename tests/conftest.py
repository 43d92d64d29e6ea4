"""Pytest configuration to make the project root importable.

Qt tests run headless (offscreen platform) and share one QApplication.
"""

import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    widgets = pytest.importorskip("PySide6.QtWidgets")
    app = widgets.QApplication.instance() or widgets.QApplication([])
    yield app


@pytest.fixture
def clean_cpb_env(monkeypatch):
    """Vacía los overrides CPB_* (y los restaura al final del test)."""
    from cpb.core.settings import ENV_OVERRIDES

    for env in ENV_OVERRIDES.values():
        monkeypatch.setenv(env, "")
    return monkeypatch
