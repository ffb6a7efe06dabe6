# tests/conftest.py

"""
Pytest configuration and fixtures.
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from library_catalog.catalog.facade import LibraryFacade
from library_catalog.catalog.schemas import Book
from library_catalog.dependencies import get_facade, get_generation_client
from library_catalog.main import app


class FakeGenerationClient:
    """
    Fake generation client for API tests

    Returns a predetermined answer instantly and remembers what it was asked.
    """

    def __init__(self, answer: str = "Try Dune."):
        self.answer = answer
        self.calls = []

    def ask(self, prompt: str, system_context: str) -> str:
        self.calls.append((prompt, system_context))
        return self.answer


@pytest.fixture
def facade():
    return LibraryFacade()


@pytest.fixture
def dune():
    return Book(title="Dune", author="Frank Herbert", price=Decimal("9.99"), description="Desert planet epic")


@pytest.fixture
def fake_client():
    return FakeGenerationClient()


@pytest.fixture
def api(facade, fake_client):
    """TestClient wired to a fresh facade and the fake generation client."""
    app.dependency_overrides[get_facade] = lambda: facade
    app.dependency_overrides[get_generation_client] = lambda: fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
