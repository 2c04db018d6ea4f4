"""Pytest configuration and fixtures for all tests."""

import pytest

from model_playground.core.config import CONFIG_DIR_ENV, config_manager


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point config, credentials and logs at a per-test directory.

    The config manager caches what it loaded, so the cache is dropped before
    and after each test.
    """
    home = tmp_path / "playground-home"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(home))
    config_manager.reset()

    yield home

    config_manager.reset()
