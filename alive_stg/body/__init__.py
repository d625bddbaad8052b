"""
STG Body — Window State, Audit Log & Enforcement.

The body owns mutable gate state. The core only defines law.

Exports:
    Classes:
        GateRuntime: Window state machine + enforcement entry point
        AuditLog: Append-only event log
    Dataclasses (frozen=True):
        WindowState: Window snapshot
        AuditEvent: Audit entry
    Errors:
        GateError, GateViolation, AuditLogSealed
    Enums:
        ViolationReason
"""
from .errors import (
    ViolationReason,
    GateError,
    GateViolation,
    AuditLogSealed,
)
from .audit_log import AuditEvent, AuditLog
from .window_state import (
    WindowState,
    initial_state,
    opened_state,
    closed_state,
)
from .clock import Clock, now_ms
from .gate_runtime import GateRuntime, create_gate_runtime

__all__ = [
    "ViolationReason",
    "GateError",
    "GateViolation",
    "AuditLogSealed",
    "AuditEvent",
    "AuditLog",
    "WindowState",
    "initial_state",
    "opened_state",
    "closed_state",
    "Clock",
    "now_ms",
    "GateRuntime",
    "create_gate_runtime",
]
