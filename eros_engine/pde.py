"""Persona decision engine: turns one event into an action plan using fixed rules."""

from __future__ import annotations

from eros_engine import ghost
from eros_engine.affinity import AffinityDeltas
from eros_engine.ghost import GhostDecision, GhostSignals
from eros_engine.types import (
    ActionPlan,
    ActionType,
    AppOpen,
    DecisionInput,
    Gift,
    ProactiveTrigger,
    ReplyStyle,
    UserMessage,
)

LONG_MSG_CHARS = 30
SHORT_MSG_CHARS = 3
STALE_HOURS = 24.0

INTRIGUE_LONG_BUMP = 0.02
PATIENCE_LONG_BUMP = 0.02
PATIENCE_SHORT_PENALTY = -0.02
PATIENCE_STALE_PENALTY = -0.05
TENSION_STALE_BUMP = 0.03

ENERGY_COST_REPLY = 0.05
ENERGY_COST_GIFT = 0.05
ENERGY_COST_PROACTIVE = 0.10
ENERGY_COST_GHOST = 0.0
ENERGY_COST_APP_OPEN = 0.0

GHOST_DELTA_PATIENCE = -0.05
GHOST_DELTA_TENSION = 0.05

_GIFT_STYLES = {
    "gold_digger": ReplyStyle.EXCITED,
    "tsundere": ReplyStyle.TSUNDERE,
    "zen": ReplyStyle.NEUTRAL,
    "slow_warm": ReplyStyle.WARM,
}


def decide(input: DecisionInput) -> ActionPlan:
    """Choose the action for one event.

    Gifts always get a gift reaction; otherwise the ghost rules run first,
    then proactive triggers and app opens, and everything else is a reply.
    """
    event = input.event

    if isinstance(event, Gift):
        return ActionPlan(
            action_type=ActionType.GIFT_REACTION,
            reply_style=_pick_gift_style(input),
            energy_cost=ENERGY_COST_GIFT,
        )

    signals = GhostSignals(
        message_count=input.signals.message_count,
        hours_since_last_ghost=input.signals.hours_since_last_ghost,
    )
    if ghost.decide(input.affinity, signals) is GhostDecision.GHOST:
        return ActionPlan(
            action_type=ActionType.GHOST,
            reply_style=ReplyStyle.COLD,
            affinity_deltas=AffinityDeltas(
                patience=GHOST_DELTA_PATIENCE, tension=GHOST_DELTA_TENSION
            ),
            energy_cost=ENERGY_COST_GHOST,
        )

    if isinstance(event, ProactiveTrigger):
        return ActionPlan(
            action_type=ActionType.PROACTIVE,
            reply_style=ReplyStyle.NEUTRAL,
            energy_cost=ENERGY_COST_PROACTIVE,
        )

    if isinstance(event, AppOpen):
        # The user opened the app: take the proactive path at no cost and
        # leave it to later stages whether anything is actually sent.
        return ActionPlan(
            action_type=ActionType.PROACTIVE,
            reply_style=ReplyStyle.NEUTRAL,
            energy_cost=ENERGY_COST_APP_OPEN,
        )

    return ActionPlan(
        action_type=ActionType.REPLY,
        reply_style=ReplyStyle.NEUTRAL,
        affinity_deltas=_predict_reply_deltas(input),
        energy_cost=ENERGY_COST_REPLY,
    )


def _predict_reply_deltas(input: DecisionInput) -> AffinityDeltas:
    """Small heuristic deltas from message length and the time since the last message."""
    deltas = AffinityDeltas()

    if isinstance(input.event, UserMessage):
        chars = len(input.event.content)
        if chars >= LONG_MSG_CHARS:
            deltas.intrigue += INTRIGUE_LONG_BUMP
            deltas.patience += PATIENCE_LONG_BUMP
        if chars <= SHORT_MSG_CHARS:
            deltas.patience += PATIENCE_SHORT_PENALTY

    if input.signals.hours_since_last_message > STALE_HOURS:
        deltas.patience += PATIENCE_STALE_PENALTY
        deltas.tension += TENSION_STALE_BUMP

    return deltas


def _pick_gift_style(input: DecisionInput) -> ReplyStyle:
    tip = input.persona.genome.tip_personality
    return _GIFT_STYLES.get(tip, ReplyStyle.WARM) if tip is not None else ReplyStyle.WARM