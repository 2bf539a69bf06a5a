"""Shared pytest fixtures for pickercraft tests."""

import pytest

from pickercraft.ui.testing import MockHost, MockPickerView


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config directory at a temp dir and clear env overrides."""
    monkeypatch.setenv("PICKERCRAFT_CONFIG_DIR", str(tmp_path))
    monkeypatch.delenv("PICKERCRAFT_DEBOUNCE_MS", raising=False)
    return tmp_path


@pytest.fixture
def view():
    """Mock view recording presenter calls."""
    return MockPickerView()


@pytest.fixture
def host():
    """Mock host recording opened files."""
    return MockHost()
