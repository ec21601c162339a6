"""Persona records, pipeline events and the decision engine's inputs and outputs."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from eros_engine.affinity import Affinity, AffinityDeltas


@dataclass
class PersonaGenome:
    """Persona template: prompt, tipping personality and free-form art metadata."""

    id: UUID
    name: str
    system_prompt: str
    tip_personality: str | None = None
    avatar_url: str | None = None
    art_metadata: Any = field(default_factory=dict)
    is_active: bool = True


@dataclass
class PersonaInstance:
    """A concrete, owned instance of a persona genome."""

    id: UUID
    genome_id: UUID
    owner_uid: UUID
    status: str


@dataclass
class CompanionPersona:
    """Joined view of an instance and its genome."""

    instance_id: UUID
    genome: PersonaGenome
    instance: PersonaInstance

    def model_override(self) -> str | None:
        """The model named in ``art_metadata["model"]``, if it is a string."""
        metadata = self.genome.art_metadata
        if not isinstance(metadata, dict):
            return None
        model = metadata.get("model")
        return model if isinstance(model, str) else None


@dataclass(frozen=True)
class UserMessage:
    content: str
    message_id: UUID


@dataclass(frozen=True)
class Gift:
    gift_id: UUID
    amount: int


@dataclass(frozen=True)
class ProactiveTrigger:
    pass


@dataclass(frozen=True)
class AppOpen:
    pass


Event = UserMessage | Gift | ProactiveTrigger | AppOpen


class ActionType(enum.Enum):
    REPLY = "Reply"
    GHOST = "Ghost"
    PROACTIVE = "Proactive"
    GIFT_REACTION = "GiftReaction"


class ReplyStyle(enum.Enum):
    WARM = "Warm"
    NEUTRAL = "Neutral"
    COLD = "Cold"
    TSUNDERE = "Tsundere"
    EXCITED = "Excited"


@dataclass
class ActionPlan:
    """What the decision engine chose to do for one event."""

    action_type: ActionType
    reply_style: ReplyStyle
    affinity_deltas: AffinityDeltas = field(default_factory=AffinityDeltas)
    energy_cost: float = 0.0
    context_hints: list[str] = field(default_factory=list)


@dataclass
class ConversationSignals:
    """Signals computed from chat history."""

    message_count: int
    hours_since_last_message: float
    ghost_streak: int
    hours_since_last_ghost: float | None = None


@dataclass
class ChatResponse:
    """Plain-text reply produced by the chat engine."""

    reply: str


@dataclass
class DecisionInput:
    """Everything the decision engine looks at for one event."""

    event: Event
    affinity: Affinity
    persona: CompanionPersona
    signals: ConversationSignals