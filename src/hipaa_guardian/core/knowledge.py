"""
Read-only HIPAA knowledge base.

The knowledge base is a JSON object mapping topic keys to guide sections. It
is loaded exactly once, before the transport opens, and handed to the
operation catalog as an explicit value. Nothing writes to it afterwards.

Manifesto:
    - **Fail at startup:** A missing, malformed or incomplete source raises
      ``LoadError`` so the server never serves partial content
    - **Immutable:** Data sits behind a ``MappingProxyType``; the store
      exposes no mutators
    - **Explicit lifecycle:** No module-level singleton; callers own the store

Examples:
    >>> store = KnowledgeStore.from_mapping({"hipaa_fines": "Tier 1 ..."})
    >>> store.get("hipaa_fines")
    'Tier 1 ...'
    >>> store = load()  # bundled hipaa-content.json
    >>> "becoming_hipaa_compliant" in store
    True

Tags:
    knowledge-base, json, immutable, startup, hipaa-guardian

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from hipaa_guardian.core.errors import KeyNotFoundError, LoadError
from hipaa_guardian.core.logging import get_logger

logger = get_logger(__name__)

# Bundled knowledge base
DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_KNOWLEDGE_BASE = DATA_DIR / "hipaa-content.json"

# Topics read by the static-lookup operations
REQUIRED_TOPICS: tuple[str, ...] = (
    "do_i_need_to_be_hipaa_compliant?",
    "becoming_hipaa_compliant",
    "what_is_hipaa?",
    "hipaa_security_rule",
    "mobile_and_wearable_applications",
    "hipaa_fines",
    "who_validates_hipaa_compliance",
    "developer_considerations",
)


class KnowledgeStore:
    """Immutable topic-key to text mapping."""

    __slots__ = ("_entries", "_source")

    def __init__(self, entries: Mapping[str, str], source: str = "<memory>"):
        self._entries = MappingProxyType(dict(entries))
        self._source = source

    @classmethod
    def from_mapping(cls, entries: Mapping[str, str], source: str = "<memory>") -> KnowledgeStore:
        _check_entries(entries, source)
        return cls(entries, source)

    @property
    def source(self) -> str:
        return self._source

    def get(self, key: str) -> str:
        """Return the text stored under ``key``.

        Raises:
            KeyNotFoundError: The key is not in the knowledge base. The key set
                is fixed when operations are registered, so this is an
                internal error rather than a caller mistake.
        """
        try:
            return self._entries[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def keys(self) -> list[str]:
        return list(self._entries)

    def missing(self, keys: Iterable[str]) -> list[str]:
        """Keys from ``keys`` that are not present, in the given order."""
        return [key for key in keys if key not in self._entries]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"KnowledgeStore(source={self._source!r}, topics={len(self)})"


def _check_entries(entries: object, source: str) -> None:
    if not isinstance(entries, Mapping):
        raise LoadError(
            f"Knowledge base must be a JSON object, got {type(entries).__name__}",
            source=source,
        )
    bad = [key for key, value in entries.items() if not isinstance(key, str) or not isinstance(value, str)]
    if bad:
        raise LoadError(
            f"Knowledge base topics must map to text: {', '.join(map(str, bad))}",
            source=source,
        )


def load(
    source: str | Path | None = None,
    required: Iterable[str] = REQUIRED_TOPICS,
) -> KnowledgeStore:
    """Load the knowledge base from a JSON file.

    Args:
        source: Path to the JSON file. ``None`` loads the bundled knowledge base.
        required: Topic keys that must be present.

    Raises:
        LoadError: The file is missing, unreadable, not valid JSON, not an
            object of strings, or lacks a required topic.
    """
    path = Path(source) if source is not None else DEFAULT_KNOWLEDGE_BASE
    location = str(path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(
            f"Could not read knowledge base from {location}",
            source=location,
            cause=e,
        ) from e

    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LoadError(
            f"Knowledge base at {location} is not valid JSON: {e.msg} (line {e.lineno})",
            source=location,
            cause=e,
        ) from e

    store = KnowledgeStore.from_mapping(entries, source=location)

    missing = store.missing(required)
    if missing:
        raise LoadError(
            f"Knowledge base at {location} is missing topics: {', '.join(missing)}",
            source=location,
        ).with_context(missing_topics=missing)

    logger.info("knowledge_base_loaded", source=location, topics=len(store))
    return store


__all__ = [
    "DEFAULT_KNOWLEDGE_BASE",
    "REQUIRED_TOPICS",
    "KnowledgeStore",
    "load",
]
