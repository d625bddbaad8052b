"""
STG Core — Policy, Evaluation & Invariants.

THIS IS A POLICY LAYER ONLY.
IT DOES NOT HOLD STATE.
IT DOES NOT EXECUTE ANYTHING.

Exports:
    Enums:
        GateDecision: OPEN, DEFER, DENY
        WindowStatus: OPEN, CLOSED
        AuditEventType: WINDOW_OPEN, ACTION_START, VIOLATION, etc.

    Dataclasses (all frozen=True):
        STGSignals: Measured signals
        GateResult: Decision + reason
        STGPolicy: Gate policy
        WindowOpenRecord, ActionRecord: Invariant records

    Functions:
        create_policy: Validate and build a policy
        evaluate_gate: Apply policy to signals
        is_scope_authorized: Hierarchical scope rule
        verify_action_authorization: Audit invariant
"""
from .gate_types import (
    GateDecision,
    WindowStatus,
    AuditEventType,
    STGSignals,
    GateResult,
    EVALUATION_REASONS,
    SCOPE_SEPARATOR,
)
from .gate_policy import (
    STGPolicy,
    InvalidPolicy,
    create_policy,
    compute_policy_hash,
)
from .gate_engine import (
    evaluate_gate,
    is_scope_authorized,
    is_scope_exact,
)
from .gate_invariants import (
    WindowOpenRecord,
    ActionRecord,
    verify_action_authorization,
    find_unauthorized_actions,
)

__all__ = [
    # Enums
    "GateDecision",
    "WindowStatus",
    "AuditEventType",
    # Constants
    "EVALUATION_REASONS",
    "SCOPE_SEPARATOR",
    # Dataclasses
    "STGSignals",
    "GateResult",
    "STGPolicy",
    "WindowOpenRecord",
    "ActionRecord",
    # Errors
    "InvalidPolicy",
    # Functions
    "create_policy",
    "compute_policy_hash",
    "evaluate_gate",
    "is_scope_authorized",
    "is_scope_exact",
    "verify_action_authorization",
    "find_unauthorized_actions",
]
