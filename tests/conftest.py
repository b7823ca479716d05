"""Shared pytest fixtures for box generator tests."""

import pytest

from box_generator.assembly.box import BoxBuilder
from box_generator.config import BoxParams
from box_generator.dimensions import resolve_config
from box_generator.settings import Settings


@pytest.fixture
def settings():
    """Default settings instance."""
    return Settings()


@pytest.fixture
def builder(settings):
    return BoxBuilder(settings)


@pytest.fixture
def default_params():
    """200 x 200 x 200 straight-top box with lid and lock."""
    return BoxParams()


@pytest.fixture
def default_dims(default_params):
    return resolve_config(default_params).dims


@pytest.fixture(scope="session")
def default_result():
    """One built default box, shared across tests that only read it."""
    return BoxBuilder(Settings()).build(BoxParams())
