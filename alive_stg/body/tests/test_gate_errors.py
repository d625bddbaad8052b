"""
STG Gate Error Tests.
"""
from alive_stg.body.errors import (
    AuditLogSealed,
    GateError,
    GateViolation,
    ViolationReason,
)


class TestViolationReason:

    def test_five_members(self):
        assert len(ViolationReason) == 5

    def test_reason_codes(self):
        assert {r.value for r in ViolationReason} == {
            "no_window_open",
            "window_expired",
            "unauthorized_scope",
            "reentrant_call",
            "window_mismatch",
        }


class TestGateViolation:

    def test_hierarchy(self):
        assert issubclass(GateViolation, GateError)
        assert issubclass(AuditLogSealed, GateError)
        assert issubclass(GateError, Exception)

    def test_carries_reason(self):
        err = GateViolation(ViolationReason.WINDOW_EXPIRED, "demo", "STG-1")
        assert err.reason == ViolationReason.WINDOW_EXPIRED
        assert err.reason_code == "window_expired"
        assert err.requested_scope == "demo"
        assert err.window_id == "STG-1"

    def test_message_prefix(self):
        err = GateViolation(ViolationReason.NO_WINDOW_OPEN)
        assert str(err).startswith("CONSTITUTIONAL_VIOLATION [no_window_open]")

    def test_scope_message(self):
        err = GateViolation(ViolationReason.UNAUTHORIZED_SCOPE, "a.b", "STG-1", "c")
        assert "'a.b' not authorized (authorized: 'c')" in str(err)
