import dataclasses
from uuid import uuid4

import pytest

from eros_engine.affinity import Affinity, AffinityDeltas
from eros_engine.types import (
    ActionPlan,
    ActionType,
    AppOpen,
    ChatResponse,
    CompanionPersona,
    ConversationSignals,
    DecisionInput,
    Gift,
    PersonaGenome,
    PersonaInstance,
    ProactiveTrigger,
    ReplyStyle,
    UserMessage,
)


def persona(art_metadata) -> CompanionPersona:
    iid, gid = uuid4(), uuid4()
    return CompanionPersona(
        instance_id=iid,
        genome=PersonaGenome(
            id=gid,
            name="Mia",
            system_prompt="You are Mia.",
            tip_personality="normal",
            art_metadata=art_metadata,
        ),
        instance=PersonaInstance(id=iid, genome_id=gid, owner_uid=uuid4(), status="active"),
    )


def test_model_override_reads_art_metadata_model():
    p = persona({"model": "x-ai/grok-4-fast", "mbti": "INFP"})
    assert p.model_override() == "x-ai/grok-4-fast"


def test_model_override_absent_or_non_string_is_none():
    assert persona({}).model_override() is None
    assert persona({"model": 42}).model_override() is None
    assert persona(["model"]).model_override() is None
    assert persona(None).model_override() is None


def test_events_compare_by_value_and_are_frozen():
    mid = uuid4()
    assert UserMessage(content="hi", message_id=mid) == UserMessage(content="hi", message_id=mid)
    assert ProactiveTrigger() == ProactiveTrigger()
    assert AppOpen() != ProactiveTrigger()
    gift = Gift(gift_id=uuid4(), amount=50)
    with pytest.raises(dataclasses.FrozenInstanceError):
        gift.amount = 10


def test_action_plan_defaults_are_independent():
    first = ActionPlan(ActionType.REPLY, ReplyStyle.NEUTRAL)
    second = ActionPlan(ActionType.GHOST, ReplyStyle.COLD)
    first.context_hints.append("hint")
    assert second.context_hints == []
    assert first.affinity_deltas == AffinityDeltas()
    assert first.energy_cost == 0.0


def test_decision_input_carries_parts():
    aff = Affinity(session_id=uuid4(), user_id=uuid4(), instance_id=uuid4())
    signals = ConversationSignals(
        message_count=20, hours_since_last_message=1.0, ghost_streak=0
    )
    event = UserMessage(content="hello", message_id=uuid4())
    p = persona({})
    di = DecisionInput(event=event, affinity=aff, persona=p, signals=signals)
    assert di.event is event
    assert di.signals.hours_since_last_ghost is None
    assert di.persona.genome.name == "Mia"


def test_chat_response_holds_reply():
    assert ChatResponse(reply="hey").reply == "hey"


def test_enums_round_trip_through_values():
    for member in ActionType:
        assert ActionType(member.value) is member
    for member in ReplyStyle:
        assert ReplyStyle(member.value) is member