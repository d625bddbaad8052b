"""
STG Authority — decides when windows open.

Exports:
    GateAuthority: Evaluate + open
    AuthorityOutcome: Request outcome
    CognitionAuthorization: Consumer handle
    create_window_id: Window ID generator
"""
from .gate_authority import (
    GateAuthority,
    AuthorityOutcome,
    CognitionAuthorization,
    create_window_id,
    REASON_SCOPE_NOT_ALLOWED,
    REASON_WINDOW_ALREADY_OPEN,
)

__all__ = [
    "GateAuthority",
    "AuthorityOutcome",
    "CognitionAuthorization",
    "create_window_id",
    "REASON_SCOPE_NOT_ALLOWED",
    "REASON_WINDOW_ALREADY_OPEN",
]
