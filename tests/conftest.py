"""Pytest configuration and fixtures for all tests."""

import pytest

from fuelsim.core.config import ConfigLoader
from fuelsim.simulation import FuelSimulation


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    """Keep log files out of the user's home directory.

    Any logging initialization that asks for the platform log directory
    gets a per-test temporary directory instead.
    """
    log_dir = tmp_path / "logs"
    monkeypatch.setattr("fuelsim.core.logging_system.get_platform_log_dir", lambda: log_dir)
    yield log_dir


@pytest.fixture
def default_config():
    """Configuration holding only the built-in defaults."""
    return ConfigLoader.defaults()


@pytest.fixture
def simulation():
    """Simulation at the control panel launch state."""
    return FuelSimulation()
