# eros-engine

Core logic for an AI companion engine: persona records, a six-dimensional
affinity model, a rule-based decision engine, ghost ("stay silent")
decisions, async chat and embedding HTTP clients, a TOML task-to-model
configuration, helpers for building chat requests from stored history and
insights, lenient parsing of model JSON output, and HMAC signing of
server-to-server requests.

## Installation

```
pip install eros-engine
```

To run the tests:

```
pip install "eros-engine[test]"
pytest
```

## Modules

- `eros_engine.affinity`: `Affinity`, `AffinityDeltas` and
  `RelationshipLabel`. `Affinity.apply_deltas(d, ema_inertia)` applies
  EMA-smoothed deltas and clamps each dimension (warmth to [-1, 1], the rest
  to [0, 1]); `apply_time_decay()` fades intrigue, restores patience and
  softens tension by the days since `updated_at`; `infer_label()` returns a
  `RelationshipLabel`.
- `eros_engine.ghost`: `score(a)` and `decide(a, s)`, with `GhostSignals`
  and `GhostDecision`. Fewer than 10 messages, a ghost streak of two or a
  ghost within the last hour always give `REPLY`; otherwise the score is
  compared with 0.65, or 0.85 after an earlier ghost.
- `eros_engine.types`: `PersonaGenome`, `PersonaInstance`,
  `CompanionPersona` (with `model_override()` reading
  `art_metadata["model"]`), the events `UserMessage`, `Gift`,
  `ProactiveTrigger` and `AppOpen`, and `ActionType`, `ReplyStyle`,
  `ActionPlan`, `ConversationSignals`, `ChatResponse`, `DecisionInput`.
- `eros_engine.pde`: `decide(input)` turns a `DecisionInput` into an
  `ActionPlan`.
- `eros_engine.model_config`: `ModelConfig.from_toml_str(text)`,
  `ModelConfig.load()` (reads the file named by `MODEL_CONFIG_PATH`, else
  `examples/model_config.toml`) and `resolve(task, persona_override=None)`,
  which picks the model from the override, then the task, then the defaults.
- `eros_engine.openrouter`: `OpenRouterClient(api_key).execute(req)`, an
  async chat completion that retries once with `req.fallback_model` when the
  first call fails, plus `ChatMessage`, `ChatRequest`, `ChatResponse` and
  `clean_response(raw)`, which strips code fences and quotes.
- `eros_engine.voyage`: `VoyageClient(api_key)` with async
  `embed_document(text)` and `embed_query(text)`, and `format_vector` for
  pgvector's text form.
- `eros_engine.s2s`: `canonical_signing_string`, `canonicalize_query`,
  `sign`, `build_outbound_signature`, `verify_against` and
  `verify_request`, which raises `S2SRejected` (carrying an HTTP status)
  for missing headers, a skewed timestamp, an oversized body or a bad
  signature.
- `eros_engine.extraction`: `find_json_block`, `parse_facts` and
  `parse_structured_insights`.
- `eros_engine.memories`: `MemoryCandidate`, `parse_memory_candidates` and
  `normalise_category`.
- `eros_engine.recall`: `MemoryRow`, `category_label` and
  `build_profile_groups`.
- `eros_engine.chat_context`: `HistoryMessage`, `insights_to_bullets` and
  `build_chat_request`.
- `eros_engine.errors`: `LlmError` with `HttpError`, `StatusError`,
  `DecodeError`, `ConfigError`, `ProviderError`; `AppError` with
  `NotFound`, `Unauthorized`, `BadRequest`, `Forbidden`, `Internal` and
  `to_response()` giving an HTTP status and JSON body; and `AuthError`.

Both HTTP clients accept an optional `http=httpx.AsyncClient(...)` keyword;
without one they open a client per call.

## Example

```python
from uuid import uuid4

from eros_engine import ghost
from eros_engine.affinity import Affinity

affinity = Affinity(
    session_id=uuid4(),
    user_id=uuid4(),
    instance_id=uuid4(),
    intrigue=0.1,
    patience=0.1,
    tension=0.5,
)
decision = ghost.decide(
    affinity,
    ghost.GhostSignals(message_count=50, hours_since_last_ghost=None),
)
print(decision)  # GhostDecision.GHOST
```

```python
from eros_engine.model_config import ModelConfig

cfg = ModelConfig.from_toml_str('''
[tasks.chat_companion]
model = "deepseek/chat"
temperature = 0.85
''')
resolved = cfg.resolve("chat_companion")
print(resolved.model, resolved.temperature, resolved.max_tokens)
```

```python
import asyncio

from eros_engine.openrouter import ChatMessage, ChatRequest, OpenRouterClient

async def main():
    client = OpenRouterClient(api_key="placeholder")
    req = ChatRequest(model="x-ai/grok-4-mini",
                      messages=[ChatMessage(role="user", content="hi")])
    print((await client.execute(req)).reply)

asyncio.run(main())
```

## What this package does not do

It is a library of domain logic and clients only. It has no HTTP server or
routes, no bearer-token validator, no database storage of sessions,
messages, affinity, memories or insights, no prompt text builder, no
background memory-extraction or sync loops, and no command-line program.
Callers supply history, memory rows and insights themselves and persist the
results where they choose.