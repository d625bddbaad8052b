"""
STG Gate Engine.

This module applies constitutional law to measured signals.

All functions are pure (no side effects).
No learning. No interpretation. No clock other than the passed-in `now`.

THIS IS A POLICY LAYER ONLY.
IT DOES NOT OPEN WINDOWS.
IT DOES NOT EXECUTE ANYTHING.
"""
from typing import Optional

from .gate_types import (
    GateDecision,
    GateResult,
    STGSignals,
    REASON_COOLDOWN_ACTIVE,
    REASON_UNAUTHORIZED_INTENT,
    REASON_INSUFFICIENT_RESOURCES,
    REASON_LOW_PREDICTION_ERROR,
    REASON_LOW_NOVELTY,
    REASON_THRESHOLDS_SATISFIED,
    SCOPE_SEPARATOR,
)
from .gate_policy import STGPolicy


def evaluate_gate(
    signals: STGSignals,
    policy: STGPolicy,
    now: int,
    cooldown_until: int,
) -> GateResult:
    """Evaluate signals against policy.

    Rules are evaluated in strict order. First match wins.

    Args:
        signals: Externally measured signals
        policy: Gate policy
        now: Current time (epoch ms)
        cooldown_until: Cooldown deadline (epoch ms)

    Returns:
        GateResult with decision and reason code
    """
    # Cooldown → DENY
    if now < cooldown_until:
        return GateResult(GateDecision.DENY, REASON_COOLDOWN_ACTIVE)

    # Unauthorized intent → DENY
    if not signals.intent_authorized:
        return GateResult(GateDecision.DENY, REASON_UNAUTHORIZED_INTENT)

    # Resources → DEFER (not terminal)
    if not signals.resources_ok:
        return GateResult(GateDecision.DEFER, REASON_INSUFFICIENT_RESOURCES)

    if signals.prediction_error <= policy.epsilon_prediction_error:
        return GateResult(GateDecision.DENY, REASON_LOW_PREDICTION_ERROR)

    if signals.novelty_delta <= policy.delta_novelty:
        return GateResult(GateDecision.DENY, REASON_LOW_NOVELTY)

    return GateResult(GateDecision.OPEN, REASON_THRESHOLDS_SATISFIED)


def is_scope_authorized(requested: str, authorized: Optional[str]) -> bool:
    """Check hierarchical scope containment.

    Args:
        requested: Requested scope
        authorized: Scope authorized by the window (None if closed)

    Returns:
        True on exact match or dot-delimited descendant
    """
    if authorized is None:
        return False
    return (
        requested == authorized
        or requested.startswith(authorized + SCOPE_SEPARATOR)
    )


def is_scope_exact(requested: str, authorized: Optional[str]) -> bool:
    """Strict scope check used by execution (no descendants)."""
    if authorized is None:
        return False
    return requested == authorized
