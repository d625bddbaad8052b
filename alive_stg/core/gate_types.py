"""
STG Core Types.

This module defines enums and reason codes for the Selective Thought Gate.

CLOSED ENUMS - No new members may be added.

Gate decisions are authoritative outcomes.
They are NOT suggestions and MUST be enforced by the runtime.
"""
from dataclasses import dataclass
from enum import Enum


class GateDecision(Enum):
    """Gate evaluation decision.

    CLOSED ENUM - No new members may be added.

    Decision values:
    - OPEN: A window MAY be opened
    - DEFER: Try again later (resources)
    - DENY: Terminal refusal for this request
    """
    OPEN = "OPEN"
    DEFER = "DEFER"
    DENY = "DENY"


class WindowStatus(Enum):
    """Window lifecycle status.

    CLOSED ENUM - No new members may be added.
    """
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class AuditEventType(Enum):
    """Audit event types.

    CLOSED ENUM - No new members may be added.
    """
    WINDOW_OPEN = "WINDOW_OPEN"
    WINDOW_CLOSE = "WINDOW_CLOSE"
    ACTION_START = "ACTION_START"
    ACTION_END = "ACTION_END"
    VIOLATION = "VIOLATION"
    # Decision trace
    GATE_EVALUATION = "GATE_EVALUATION"
    WINDOW_DEFER = "WINDOW_DEFER"
    WINDOW_DENY = "WINDOW_DENY"


# Evaluation reason codes (first matching rule wins)
REASON_COOLDOWN_ACTIVE = "cooldown_active"
REASON_UNAUTHORIZED_INTENT = "unauthorized_intent"
REASON_INSUFFICIENT_RESOURCES = "insufficient_resources"
REASON_LOW_PREDICTION_ERROR = "low_prediction_error"
REASON_LOW_NOVELTY = "low_novelty"
REASON_THRESHOLDS_SATISFIED = "thresholds_satisfied"

EVALUATION_REASONS = frozenset({
    REASON_COOLDOWN_ACTIVE,
    REASON_UNAUTHORIZED_INTENT,
    REASON_INSUFFICIENT_RESOURCES,
    REASON_LOW_PREDICTION_ERROR,
    REASON_LOW_NOVELTY,
    REASON_THRESHOLDS_SATISFIED,
})

# Scope separator for hierarchical scopes
SCOPE_SEPARATOR = "."


@dataclass(frozen=True)
class STGSignals:
    """Externally measured signals. Frozen.

    Core does not compute these.

    Attributes:
        prediction_error: Measured prediction error
        novelty_delta: Measured novelty
        resources_ok: Whether resources are available
        intent_authorized: Whether the intent is authorized
        requested_scope: Scope the window is requested for
    """
    prediction_error: float
    novelty_delta: float
    resources_ok: bool
    intent_authorized: bool
    requested_scope: str


@dataclass(frozen=True)
class GateResult:
    """Result of gate evaluation. Frozen.

    Core returns law + reason, not action.
    """
    decision: GateDecision
    reason: str
