"""Parsing of memory-extraction answers into categorised memory candidates."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from eros_engine.extraction import find_json_block

CATEGORIES = frozenset({"fact", "preference", "event", "emotion", "relation"})
DEFAULT_CATEGORY = "fact"


@dataclass(frozen=True)
class MemoryCandidate:
    """One memory the model extracted from a session, with its category tag."""

    content: str
    category: str

    @classmethod
    def _from_json(cls, value: Any) -> MemoryCandidate | None:
        if isinstance(value, dict):
            content = value.get("content")
            category = value.get("category")
        elif isinstance(value, list) and len(value) == 2:
            content, category = value
        else:
            return None
        if isinstance(content, str) and isinstance(category, str):
            return cls(content=content, category=category)
        return None


def _first_parsed(raw: str) -> Iterator[Any]:
    try:
        yield json.loads(raw)
        return
    except ValueError:
        pass
    block = find_json_block(raw)
    if block is not None:
        try:
            yield json.loads(block)
        except ValueError:
            pass


def parse_memory_candidates(raw: str) -> list[MemoryCandidate]:
    """Well-formed items of a ``{"memories": [...]}`` answer; others are dropped."""
    for value in _first_parsed(raw):
        if not isinstance(value, dict):
            return []
        items = value.get("memories")
        if not isinstance(items, list):
            return []
        return [c for c in map(MemoryCandidate._from_json, items) if c is not None]
    return []


def normalise_category(raw: str) -> str:
    """Lower-cased known category, or ``fact`` for anything else."""
    lowered = "".join(c.lower() if c.isascii() else c for c in raw.strip())
    return lowered if lowered in CATEGORIES else DEFAULT_CATEGORY