"""
Pytest configuration and fixtures for git-grab tests.
"""

import os
import tempfile
from pathlib import Path

import pytest

from gitgrab.settings import reload_settings


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate tests from GRAB_* variables and any .env in the working directory."""
    for name in list(os.environ):
        if name.upper().startswith("GRAB_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reload_settings()
    yield
    reload_settings()
