"""Pytest fixtures for app module tests."""

import pytest

from tests.fakes import InMemoryDocumentStore


@pytest.fixture
def fake_store() -> InMemoryDocumentStore:
    """Provide an unconnected in-memory store."""
    return InMemoryDocumentStore()
