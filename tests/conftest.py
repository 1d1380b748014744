"""Shared fixtures: every test gets its own store under tmp_path."""

import pytest

from userdb.config import Settings
from userdb.database import DatabaseHandle


@pytest.fixture(autouse=True)
def reset_handle():
    """Forget the shared handle before and after each test."""
    DatabaseHandle.reset()
    yield
    DatabaseHandle.reset()


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a fresh data directory."""
    return Settings(data_dir=tmp_path / "data", _env_file=None)


@pytest.fixture
def handle(test_settings):
    """The shared handle, built from test_settings."""
    return DatabaseHandle.get(test_settings)


@pytest.fixture
def repo(handle):
    return handle.repository()
