"""Shared fixtures for composewiz tests."""

import pytest

from fakes import MemoryStore


@pytest.fixture
def store():
    """An existing env file with a couple of unrelated keys."""
    return MemoryStore(["POSTGRES_PASSWORD=secret", "N8N_HOST=example.com"])


@pytest.fixture
def missing_store():
    return MemoryStore()


@pytest.fixture
def env_path(tmp_path):
    path = tmp_path / ".env"
    path.write_text("POSTGRES_PASSWORD=secret\nN8N_HOST=example.com\n")
    return path
