"""TOML-driven mapping from task names to model parameters."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from eros_engine.errors import DecodeError

FALLBACK_MODEL = "x-ai/grok-4-mini"
FALLBACK_TEMPERATURE = 0.5
FALLBACK_MAX_TOKENS = 200

DEFAULT_CONFIG_PATH = "examples/model_config.toml"
_U32_MAX = 0xFFFFFFFF

_log = logging.getLogger(__name__)


def _table(data: Any, where: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected a table")
    return data


def _opt_str(table: dict[str, Any], key: str, where: str) -> str | None:
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodeError(f"{where}.{key}: expected a string")
    return value


def _opt_float(table: dict[str, Any], key: str, where: str) -> float | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"{where}.{key}: expected a number")
    return float(value)


def _opt_u32(table: dict[str, Any], key: str, where: str) -> int | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{where}.{key}: expected an integer")
    if not 0 <= value <= _U32_MAX:
        raise DecodeError(f"{where}.{key}: {value} out of range")
    return value


@dataclass
class DefaultConfig:
    """Fallback parameters used when a task does not set its own."""

    fallback_model: str | None = None
    fallback_temperature: float | None = None
    fallback_max_tokens: int | None = None

    @classmethod
    def _from_table(cls, data: Any) -> DefaultConfig:
        table = _table(data, "defaults")
        return cls(
            fallback_model=_opt_str(table, "fallback_model", "defaults"),
            fallback_temperature=_opt_float(table, "fallback_temperature", "defaults"),
            fallback_max_tokens=_opt_u32(table, "fallback_max_tokens", "defaults"),
        )


@dataclass
class TaskConfig:
    """Model settings for one named task."""

    model: str
    temperature: float | None = None
    max_tokens: int | None = None
    description: str = ""
    fallback: str | None = None
    dimensions: int | None = None

    @classmethod
    def _from_table(cls, name: str, data: Any) -> TaskConfig:
        where = f"tasks.{name}"
        table = _table(data, where)
        model = table.get("model")
        if model is None:
            raise DecodeError(f"{where}: missing field `model`")
        if not isinstance(model, str):
            raise DecodeError(f"{where}.model: expected a string")
        return cls(
            model=model,
            temperature=_opt_float(table, "temperature", where),
            max_tokens=_opt_u32(table, "max_tokens", where),
            description=_opt_str(table, "description", where) or "",
            fallback=_opt_str(table, "fallback", where),
            dimensions=_opt_u32(table, "dimensions", where),
        )


@dataclass(frozen=True)
class ResolvedModel:
    """Concrete parameters for one model call."""

    model: str
    fallback_model: str | None
    temperature: float
    max_tokens: int


@dataclass
class ModelConfig:
    """Task table plus defaults, as read from TOML."""

    defaults: DefaultConfig = field(default_factory=DefaultConfig)
    tasks: dict[str, TaskConfig] = field(default_factory=dict)

    @classmethod
    def from_toml_str(cls, text: str) -> ModelConfig:
        """Parse a config document; malformed input raises DecodeError."""
        try:
            doc = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise DecodeError(exc) from exc

        defaults = (
            DefaultConfig._from_table(doc["defaults"]) if "defaults" in doc else DefaultConfig()
        )
        tasks_table = _table(doc.get("tasks", {}), "tasks")
        tasks = {
            name: TaskConfig._from_table(name, data) for name, data in tasks_table.items()
        }
        return cls(defaults=defaults, tasks=tasks)

    @classmethod
    def load(cls) -> ModelConfig:
        """Read the file named by MODEL_CONFIG_PATH, or the bundled example path."""
        path = os.environ.get("MODEL_CONFIG_PATH", DEFAULT_CONFIG_PATH)
        text = Path(path).read_text(encoding="utf-8")
        return cls.from_toml_str(text)

    def resolve(self, task: str, persona_override: str | None = None) -> ResolvedModel:
        """Resolve a task's parameters: persona override, then task, then defaults."""
        task_cfg = self.tasks.get(task)
        if task_cfg is None:
            _log.warning("model_config: unknown task %r, using defaults", task)

        if persona_override is not None:
            model = persona_override
        elif task_cfg is not None:
            model = task_cfg.model
        elif self.defaults.fallback_model is not None:
            model = self.defaults.fallback_model
        else:
            model = FALLBACK_MODEL

        fallback_model = task_cfg.fallback if task_cfg is not None else None
        if fallback_model is None:
            fallback_model = self.defaults.fallback_model

        temperature = task_cfg.temperature if task_cfg is not None else None
        if temperature is None:
            temperature = self.defaults.fallback_temperature
        if temperature is None:
            temperature = FALLBACK_TEMPERATURE

        max_tokens = task_cfg.max_tokens if task_cfg is not None else None
        if max_tokens is None:
            max_tokens = self.defaults.fallback_max_tokens
        if max_tokens is None:
            max_tokens = FALLBACK_MAX_TOKENS

        return ResolvedModel(
            model=model,
            fallback_model=fallback_model,
            temperature=temperature,
            max_tokens=max_tokens,
        )