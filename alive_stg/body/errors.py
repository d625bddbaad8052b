"""
STG Body Errors

Explicit error types for gate enforcement.
All violations are fail-closed and auditable.
"""

from enum import Enum
from typing import Optional


class ViolationReason(Enum):
    """Gate violation reason codes.

    CLOSED ENUM - No new members may be added.
    """
    NO_WINDOW_OPEN = "no_window_open"
    WINDOW_EXPIRED = "window_expired"
    UNAUTHORIZED_SCOPE = "unauthorized_scope"
    REENTRANT_CALL = "reentrant_call"
    WINDOW_MISMATCH = "window_mismatch"


_VIOLATION_MESSAGES = {
    ViolationReason.NO_WINDOW_OPEN: "Action attempted without an open window",
    ViolationReason.WINDOW_EXPIRED: "Window has expired",
    ViolationReason.UNAUTHORIZED_SCOPE: "Scope not authorized",
    ViolationReason.REENTRANT_CALL: "Gated call attempted from inside a gated task",
    ViolationReason.WINDOW_MISMATCH: "Request is bound to a different window",
}


class GateError(Exception):
    """Base error for gate enforcement."""
    pass


class GateViolation(GateError):
    """
    Raised when an action is attempted outside an open, unexpired,
    in-scope window.

    Violations are NOT retried and NEVER reopen the window.
    """

    def __init__(
        self,
        reason: ViolationReason,
        requested_scope: Optional[str] = None,
        window_id: Optional[str] = None,
        authorized_scope: Optional[str] = None,
    ):
        self.reason = reason
        self.requested_scope = requested_scope
        self.window_id = window_id
        self.authorized_scope = authorized_scope
        detail = _VIOLATION_MESSAGES[reason]
        if reason == ViolationReason.UNAUTHORIZED_SCOPE:
            detail = (
                f"Scope '{requested_scope}' not authorized "
                f"(authorized: '{authorized_scope}')"
            )
        super().__init__(f"CONSTITUTIONAL_VIOLATION [{reason.value}]: {detail}")

    @property
    def reason_code(self) -> str:
        return self.reason.value


class AuditLogSealed(GateError):
    """Raised when clearing the audit log outside the TEST build profile."""
    pass
