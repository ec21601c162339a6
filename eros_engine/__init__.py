"""Companion engine core: affinity, decisions, model clients, prompt and signing helpers."""

__version__ = "0.1.0"

__all__ = [
    "affinity",
    "chat_context",
    "errors",
    "extraction",
    "ghost",
    "memories",
    "model_config",
    "openrouter",
    "pde",
    "recall",
    "s2s",
    "types",
    "voyage",
]