"""Test configuration and fixtures for objectql."""

import logging

import pytest

from objectql import build_schema

logging.getLogger('objectql').setLevel(logging.DEBUG)


@pytest.fixture(scope="function")
def schema(registry):
    """Schema built from the shared CRM registry."""
    return build_schema(registry)


# Import fixtures from fixtures module
from tests.fixtures import registry  # noqa: E402,F401
