"""
Shared pytest fixtures and configuration for hipaa-guardian tests.

This module provides:
- A sample knowledge base covering every required topic
- Knowledge store and registry fixtures built from it
- A JSON file fixture for loader and CLI tests
- Logging configured once for the session
"""

import json
from pathlib import Path
from typing import Any

import pytest

from hipaa_guardian.core.knowledge import REQUIRED_TOPICS, KnowledgeStore
from hipaa_guardian.core.logging import configure_logging
from hipaa_guardian.operations.catalog import build_registry
from hipaa_guardian.operations.registry import OperationRegistry


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True, scope="session")
def _configure_logging() -> None:
    configure_logging(level="DEBUG", json_format=True)


# =============================================================================
# Knowledge Base Fixtures
# =============================================================================


@pytest.fixture
def sample_entries() -> dict[str, str]:
    """One short, distinct section per required topic."""
    return {topic: f"Section for {topic}.\nSecond line." for topic in REQUIRED_TOPICS}


@pytest.fixture
def store(sample_entries: dict[str, str]) -> KnowledgeStore:
    return KnowledgeStore.from_mapping(sample_entries, source="<fixture>")


@pytest.fixture
def registry(store: KnowledgeStore) -> OperationRegistry:
    return build_registry(store)


@pytest.fixture
def write_knowledge_base(tmp_path: Path):
    """Write a JSON document and return its path."""

    def _write(content: Any, name: str = "hipaa-content.json") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def knowledge_base_file(write_knowledge_base, sample_entries: dict[str, str]) -> Path:
    return write_knowledge_base(sample_entries)
