"""Grouping of recalled memory rows into labelled sections for the chat prompt."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

PROFILE_RECALL_K = 4
RELATIONSHIP_RECALL_K = 3
K_PER_CATEGORY = 2

RECENT_LABEL = "近况"
OTHER_LABEL = "其他"

_CATEGORY_LABELS = {
    "fact": "客观事实",
    "preference": "偏好",
    "event": "最近发生",
    "emotion": "情绪倾向",
    "relation": "人际关系",
}


@dataclass(frozen=True)
class MemoryRow:
    """One recalled memory: its text and, for classified rows, its category tag."""

    content: str
    category: str | None = None


def category_label(category: str) -> str:
    """The prompt section label for a category tag; unknown tags become ``其他``."""
    return _CATEGORY_LABELS.get(category, OTHER_LABEL)


def build_profile_groups(
    grouped_rows: Iterable[MemoryRow],
    raw_rows: Iterable[MemoryRow],
) -> list[tuple[str, list[str]]]:
    """Arrange recalled profile rows as ``(label, items)`` groups.

    Categorised rows win: they are grouped by label, keeping their order and
    merging only neighbours with the same label. Without any, the raw rows
    form a single ``近况`` group; with neither, the result is empty.
    """
    groups: list[tuple[str, list[str]]] = []
    for row in grouped_rows:
        label = category_label(row.category or "")
        if groups and groups[-1][0] == label:
            groups[-1][1].append(row.content)
        else:
            groups.append((label, [row.content]))
    if groups:
        return groups

    raw = [row.content for row in raw_rows]
    if raw:
        return [(RECENT_LABEL, raw)]
    return []