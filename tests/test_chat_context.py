from uuid import uuid4

import pytest

from eros_engine.chat_context import (
    HistoryMessage,
    build_chat_request,
    insights_to_bullets,
)
from eros_engine.model_config import ModelConfig
from eros_engine.openrouter import ChatMessage
from eros_engine.types import CompanionPersona, PersonaGenome, PersonaInstance

SAMPLE = """
[defaults]
fallback_model = "x-ai/grok-4-mini"
fallback_temperature = 0.5
fallback_max_tokens = 200

[tasks.chat_companion]
model = "x-ai/grok-4-fast"
fallback = "deepseek/deepseek-chat-v3.2"
temperature = 0.85
max_tokens = 600
"""


def _persona(art_metadata=None):
    iid, gid = uuid4(), uuid4()
    return CompanionPersona(
        instance_id=iid,
        genome=PersonaGenome(
            id=gid,
            name="Mia",
            system_prompt="You are Mia.",
            tip_personality="normal",
            art_metadata=art_metadata if art_metadata is not None else {},
        ),
        instance=PersonaInstance(id=iid, genome_id=gid, owner_uid=uuid4(), status="active"),
    )


def test_insights_to_bullets_empty_object():
    assert insights_to_bullets({}) == []


@pytest.mark.parametrize("value", ["just a string", ["array", "not", "object"], None])
def test_insights_to_bullets_non_object_returns_empty(value):
    assert insights_to_bullets(value) == []


def test_insights_to_bullets_skips_empty_strings():
    v = {"city": "", "occupation": "   ", "mbti_guess": "INFP"}
    assert insights_to_bullets(v) == ["MBTI：INFP"]


def test_insights_to_bullets_renders_string_fields():
    v = {
        "city": "上海",
        "occupation": "产品经理",
        "mbti_guess": "ENFJ",
        "love_values": "重视沟通",
        "emotional_needs": "需要被认可",
        "life_rhythm": "夜猫子",
    }
    assert insights_to_bullets(v) == [
        "城市：上海",
        "职业：产品经理",
        "MBTI：ENFJ",
        "感情观：重视沟通",
        "情感需求：需要被认可",
        "作息：夜猫子",
    ]


def test_insights_to_bullets_joins_arrays_and_skips_blanks():
    v = {"interests": ["登山", "  ", "精酿"], "personality_traits": ["真诚", "敏感"]}
    assert insights_to_bullets(v) == ["兴趣：登山、精酿", "性格特质：真诚、敏感"]


def test_insights_to_bullets_omits_matching_preferences():
    v = {
        "city": "北京",
        "matching_preferences": {
            "preferred_gender": "female",
            "age_range": [25, 35],
            "deal_breakers": ["smoking"],
        },
    }
    assert insights_to_bullets(v) == ["城市：北京"]


def test_insights_to_bullets_preserves_canonical_field_order():
    v = {
        "personality_traits": ["真诚"],
        "city": "上海",
        "interests": ["登山"],
        "occupation": "工程师",
    }
    assert insights_to_bullets(v) == [
        "城市：上海",
        "职业：工程师",
        "兴趣：登山",
        "性格特质：真诚",
    ]


def test_insights_to_bullets_ignores_wrong_types():
    v = {"city": 42, "interests": "登山", "personality_traits": [1, None, "真诚"]}
    assert insights_to_bullets(v) == ["性格特质：真诚"]


def test_build_chat_request_filters_roles_and_keeps_order():
    cfg = ModelConfig.from_toml_str(SAMPLE)
    history = [
        HistoryMessage("user", "hi"),
        HistoryMessage("tip_user", "tipped"),
        HistoryMessage("assistant", "hello"),
        HistoryMessage("system_error", "oops"),
        HistoryMessage("user", "how are you"),
    ]
    req = build_chat_request(cfg, _persona(), "SYSTEM", history)
    assert req.messages == [
        ChatMessage("system", "SYSTEM"),
        ChatMessage("user", "hi"),
        ChatMessage("assistant", "hello"),
        ChatMessage("user", "how are you"),
    ]


def test_build_chat_request_uses_task_config():
    cfg = ModelConfig.from_toml_str(SAMPLE)
    req = build_chat_request(cfg, _persona(), "S", [])
    assert req.model == "x-ai/grok-4-fast"
    assert req.fallback_model == "deepseek/deepseek-chat-v3.2"
    assert req.temperature == 0.85
    assert req.max_tokens == 600
    assert req.messages == [ChatMessage("system", "S")]


def test_build_chat_request_persona_override_wins():
    cfg = ModelConfig.from_toml_str(SAMPLE)
    persona = _persona({"model": "anthropic/claude-sonnet-4"})
    req = build_chat_request(cfg, persona, "S", [])
    assert req.model == "anthropic/claude-sonnet-4"
    assert req.temperature == 0.85
    assert req.max_tokens == 600


def test_build_chat_request_non_string_override_ignored():
    cfg = ModelConfig.from_toml_str(SAMPLE)
    persona = _persona({"model": 7})
    req = build_chat_request(cfg, persona, "S", [])
    assert req.model == "x-ai/grok-4-fast"


def test_build_chat_request_empty_config_uses_builtin_defaults():
    req = build_chat_request(ModelConfig(), _persona(), "S", [])
    assert req.model == "x-ai/grok-4-mini"
    assert req.fallback_model is None
    assert req.temperature == 0.5
    assert req.max_tokens == 200