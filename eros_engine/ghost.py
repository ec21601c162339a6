"""Deterministic decision on whether the persona stays silent this turn."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from eros_engine.affinity import Affinity

_MIN_MESSAGES = 10
_MAX_STREAK = 2
_COOLDOWN_HOURS = 1.0
_BASE_THRESHOLD = 0.65
_POST_GHOST_THRESHOLD = 0.85


@dataclass(frozen=True)
class GhostSignals:
    """Conversation facts that gate a ghost decision."""

    message_count: int
    hours_since_last_ghost: float | None = None


class GhostDecision(enum.Enum):
    GHOST = "ghost"
    REPLY = "reply"


def score(a: Affinity) -> float:
    """Ghost score: (1-intrigue)*0.4 + (1-patience)*0.4 + tension*0.2."""
    return (1.0 - a.intrigue) * 0.4 + (1.0 - a.patience) * 0.4 + a.tension * 0.2


def decide(a: Affinity, s: GhostSignals) -> GhostDecision:
    """Decide whether to ghost, after four protection layers.

    Fewer than 10 messages, a streak of two or more, or a ghost within the
    last hour always reply. After any earlier ghost the threshold rises
    from 0.65 to 0.85.
    """
    if s.message_count < _MIN_MESSAGES:
        return GhostDecision.REPLY
    if a.ghost_streak >= _MAX_STREAK:
        return GhostDecision.REPLY
    hours = s.hours_since_last_ghost
    if hours is not None and hours < _COOLDOWN_HOURS:
        return GhostDecision.REPLY
    threshold = _POST_GHOST_THRESHOLD if hours is not None else _BASE_THRESHOLD
    return GhostDecision.GHOST if score(a) > threshold else GhostDecision.REPLY