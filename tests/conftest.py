"""
Shared pytest fixtures and configuration for contact-curator tests.

This module provides:
- Environment isolation for ``CURATOR_*`` settings
- Deterministic UID and clock generators
- Sample contacts and a standard processor registry

Usage:
    Fixtures are auto-discovered by pytest; request them by argument name.

    def test_something(registry, jane):
        ...
"""

import itertools
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from contact_curator.contact.models import Contact
from contact_curator.core.settings import CuratorSettings, get_settings, load_settings
from contact_curator.curation import ProcessorRegistry, build_registry


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """
    Strip ``CURATOR_*`` variables and run each test from an empty directory.

    A developer's ``.env`` or shell exports must never change test results.
    """
    for key in list(os.environ):
        if key.startswith("CURATOR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings(_force_reload=True)
    yield
    get_settings(_force_reload=True)


@pytest.fixture
def settings() -> CuratorSettings:
    return load_settings()


# =============================================================================
# Deterministic Generators
# =============================================================================


@pytest.fixture
def uid_factory() -> Callable[[], str]:
    """Sequential fake UUIDs: ``00000000-0000-0000-0000-000000000001``, ..."""
    counter = itertools.count(1)
    return lambda: f"00000000-0000-0000-0000-{next(counter):012d}"


class FakeClock:
    """Manually advanced clock for queue ordering tests."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, seconds: float = 1.0) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# Sample Contacts
# =============================================================================


@pytest.fixture
def jane() -> Contact:
    """Contact with a gendered relationship and no structured fields."""
    return Contact(
        path="people/jane.md",
        fields={"FN": "Jane Doe"},
        content="# Jane Doe\n\n## Related\n\n- mother [[Ann Doe]]\n",
    )


@pytest.fixture
def bob() -> Contact:
    """Contact carrying structured relationship fields only."""
    return Contact(
        path="people/bob.md",
        fields={
            "FN": "Bob",
            "UID": "urn:uuid:bbbbbbbb-0000-0000-0000-000000000000",
            "RELATED.FRIEND.0": "name:Ann Doe",
            "RELATED.FRIEND.1": "name:Carl",
        },
        content="# Bob\n\nMet at the climbing gym.\n",
    )


@pytest.fixture
def registry(settings: CuratorSettings, uid_factory: Callable[[], str]) -> ProcessorRegistry:
    """The standard processors with deterministic identifiers."""
    return build_registry(settings, uid_factory=uid_factory)
