"""Lenient parsing of JSON answers from extraction prompts."""

from __future__ import annotations

import json
from typing import Any


def find_json_block(raw: str) -> str | None:
    """Return the first balanced ``{...}`` block, ignoring braces inside strings."""
    start = raw.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escape = False
    for i, ch in enumerate(raw[start:], start):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return raw[start : i + 1]
    return None


def _loads(text: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except ValueError:
        return False, None


def _candidates(raw: str):
    """Yield parsed JSON values: the whole text first, then its first object block."""
    ok, value = _loads(raw)
    if ok:
        yield value
    block = find_json_block(raw)
    if block is not None:
        ok, value = _loads(block)
        if ok:
            yield value


def _facts_array(value: Any) -> list[str]:
    if not isinstance(value, dict):
        return []
    facts = value.get("facts")
    if not isinstance(facts, list):
        return []
    return [f for f in facts if isinstance(f, str)]


def parse_facts(raw: str) -> list[str]:
    """The string items of a ``{"facts": [...]}`` answer, or an empty list."""
    for value in _candidates(raw):
        # The first value that parses decides, as the whole text is preferred.
        return _facts_array(value)
    return []


def parse_structured_insights(raw: str) -> dict[str, Any]:
    """The first JSON object in the answer, or an empty dict."""
    for value in _candidates(raw.strip()):
        if isinstance(value, dict):
            return value
    return {}