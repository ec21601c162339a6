"""Six-dimensional affinity state between a user and a persona instance."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

_MINUTES_PER_DAY = 60.0 * 24.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


class RelationshipLabel(enum.Enum):
    """Coarse relationship classification derived from the affinity vector."""

    STRANGER = "stranger"
    ROMANTIC = "romantic"
    FRIEND = "friend"
    FRENEMY = "frenemy"
    SLOW_BURN = "slow_burn"


@dataclass
class AffinityDeltas:
    """Signed changes to apply to each affinity dimension."""

    warmth: float = 0.0
    trust: float = 0.0
    intrigue: float = 0.0
    intimacy: float = 0.0
    patience: float = 0.0
    tension: float = 0.0


@dataclass(kw_only=True)
class Affinity:
    """Affinity row. Warmth spans [-1, 1]; every other dimension spans [0, 1]."""

    session_id: UUID
    user_id: UUID
    instance_id: UUID
    id: UUID = field(default_factory=uuid4)
    warmth: float = 0.0
    trust: float = 0.0
    intrigue: float = 0.0
    intimacy: float = 0.0
    patience: float = 0.0
    tension: float = 0.0
    ghost_streak: int = 0
    last_ghost_at: datetime | None = None
    total_ghosts: int = 0
    relationship_label: RelationshipLabel | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def apply_deltas(self, d: AffinityDeltas, ema_inertia: float) -> None:
        """Apply deltas with EMA smoothing; an inertia of 0 applies them in full."""
        blend = 1.0 - ema_inertia
        self.warmth = _clamp(self.warmth + blend * d.warmth, -1.0, 1.0)
        self.trust = _clamp(self.trust + blend * d.trust, 0.0, 1.0)
        self.intrigue = _clamp(self.intrigue + blend * d.intrigue, 0.0, 1.0)
        self.intimacy = _clamp(self.intimacy + blend * d.intimacy, 0.0, 1.0)
        self.patience = _clamp(self.patience + blend * d.patience, 0.0, 1.0)
        self.tension = _clamp(self.tension + blend * d.tension, 0.0, 1.0)
        self.updated_at = _utcnow()

    def apply_time_decay(self) -> None:
        """Fade intrigue, restore patience and soften tension with elapsed days."""
        elapsed = _utcnow() - self.updated_at
        minutes = int(elapsed.total_seconds() / 60)
        days = minutes / _MINUTES_PER_DAY
        if days <= 0.0:
            return
        self.intrigue = _clamp(self.intrigue - 0.01 * days, 0.0, 1.0)
        self.patience = _clamp(self.patience + 0.005 * days, 0.0, 1.0)
        self.tension = _clamp(self.tension - 0.005 * days, 0.0, 1.0)

    def infer_label(self) -> RelationshipLabel:
        """Classify the relationship: romantic > friend > frenemy > slow burn > stranger."""
        if self.warmth >= 0.7 and self.tension >= 0.3 and self.intimacy >= 0.4:
            return RelationshipLabel.ROMANTIC
        if self.warmth >= 0.7 and self.trust >= 0.6 and self.tension < 0.2:
            return RelationshipLabel.FRIEND
        if self.warmth < 0.4 and self.tension >= 0.6 and self.intrigue >= 0.5:
            return RelationshipLabel.FRENEMY
        if self.intrigue >= 0.6 and self.tension >= 0.4 and self.intimacy < 0.4:
            return RelationshipLabel.SLOW_BURN
        return RelationshipLabel.STRANGER