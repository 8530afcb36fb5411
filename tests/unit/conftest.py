"""Shared fixtures for repository unit tests."""

import pytest

from api.src.config import Settings
from tests.doubles import FakeDatabase


@pytest.fixture
def settings():
    """Settings with default collection names, independent of the environment."""
    return Settings(
        _env_file=None,
        owner_collection="owner",
        dog_collection="dog",
        booking_collection="booking",
    )


@pytest.fixture
def fake_db():
    return FakeDatabase()
