"""
ALIVE STG — Selective Thought Gate

A single, centrally-enforced checkpoint for privileged work.

CORE RULES:
- Core defines law (policy, evaluation)
- Body enforces law (window state, audit, run_gated)
- Authority opens windows
- Consumers only act inside them

FAIL-CLOSED:
- No action without an open, unexpired, in-scope window
"""
from alive_stg.core import (
    GateDecision,
    WindowStatus,
    AuditEventType,
    STGSignals,
    GateResult,
    STGPolicy,
    InvalidPolicy,
    create_policy,
    evaluate_gate,
    is_scope_authorized,
)
from alive_stg.body import (
    AuditEvent,
    AuditLog,
    AuditLogSealed,
    GateRuntime,
    GateViolation,
    ViolationReason,
    WindowState,
    create_gate_runtime,
)

__version__ = "1.0.0"

__all__ = [
    "GateDecision",
    "WindowStatus",
    "AuditEventType",
    "STGSignals",
    "GateResult",
    "STGPolicy",
    "InvalidPolicy",
    "create_policy",
    "evaluate_gate",
    "is_scope_authorized",
    "AuditEvent",
    "AuditLog",
    "AuditLogSealed",
    "GateRuntime",
    "GateViolation",
    "ViolationReason",
    "WindowState",
    "create_gate_runtime",
]
