"""Assembly of the chat request for reply and gift turns, and insight bullets."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from eros_engine.model_config import ModelConfig
from eros_engine.openrouter import ChatMessage, ChatRequest
from eros_engine.types import CompanionPersona

CHAT_TASK = "chat_companion"
HISTORY_WINDOW = 20

_CONVERSATION_ROLES = frozenset({"user", "assistant"})

_STRING_FIELDS = {
    "city": "城市",
    "occupation": "职业",
    "mbti_guess": "MBTI",
    "love_values": "感情观",
    "emotional_needs": "情感需求",
    "life_rhythm": "作息",
}
_ARRAY_FIELDS = {
    "interests": "兴趣",
    "personality_traits": "性格特质",
}
# Canonical order in which insight fields are rendered.
_FIELD_ORDER = (
    "city",
    "occupation",
    "mbti_guess",
    "love_values",
    "interests",
    "emotional_needs",
    "life_rhythm",
    "personality_traits",
)


@dataclass(frozen=True)
class HistoryMessage:
    """One stored chat message, in chronological order within a session."""

    role: str
    content: str


def _string_bullet(value: Any, label: str) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return f"{label}：{text}" if text else None


def _array_bullet(value: Any, label: str) -> str | None:
    if not isinstance(value, list):
        return None
    parts = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return f"{label}：{'、'.join(parts)}" if parts else None


def insights_to_bullets(insights: Any) -> list[str]:
    """Render a stored insights object as labelled bullet lines.

    Missing or blank fields are skipped; anything that is not an object
    yields no bullets. ``matching_preferences`` is never rendered.
    """
    if not isinstance(insights, dict):
        return []
    bullets: list[str] = []
    for key in _FIELD_ORDER:
        value = insights.get(key)
        if key in _STRING_FIELDS:
            bullet = _string_bullet(value, _STRING_FIELDS[key])
        else:
            bullet = _array_bullet(value, _ARRAY_FIELDS[key])
        if bullet is not None:
            bullets.append(bullet)
    return bullets


def build_chat_request(
    model_config: ModelConfig,
    persona: CompanionPersona,
    system_prompt: str,
    history: Iterable[HistoryMessage],
) -> ChatRequest:
    """A chat request: the system prompt, then the user and assistant turns.

    Other roles in the history are dropped. The model comes from the
    persona's override when set, otherwise from the chat task's config.
    """
    messages = [ChatMessage(role="system", content=system_prompt)]
    messages.extend(
        ChatMessage(role=msg.role, content=msg.content)
        for msg in history
        if msg.role in _CONVERSATION_ROLES
    )
    resolved = model_config.resolve(CHAT_TASK, persona.model_override())
    return ChatRequest(
        model=resolved.model,
        messages=messages,
        fallback_model=resolved.fallback_model,
        temperature=resolved.temperature,
        max_tokens=resolved.max_tokens,
    )