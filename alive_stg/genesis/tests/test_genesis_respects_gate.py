"""
Genesis Respects STG Tests.

Genesis never opens windows, never evaluates permission, never retries.
Silence is success.
"""
import pytest

from alive_stg.authority.gate_authority import CognitionAuthorization
from alive_stg.body.errors import GateViolation, ViolationReason
from alive_stg.body.gate_runtime import GateRuntime
from alive_stg.core.gate_types import AuditEventType
from alive_stg.genesis.cognitive import (
    CognitiveResult,
    CognitiveTask,
    cognitive_step,
    perform_task,
)


def _open(runtime, clock, scope="cognition.genesis"):
    runtime.open(clock.now, clock.now + 1000, scope, "STG-GEN", 0)
    return CognitionAuthorization(window_id="STG-GEN", scope=scope, expires_at=clock.now + 1000)


class TestSilence:

    def test_no_auth_returns_none(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        assert cognitive_step(runtime, CognitiveTask("THINK")) is None
        assert len(runtime.audit_log) == 0

    def test_expired_auth_returns_none(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        auth = _open(runtime, fake_clock)
        fake_clock.advance(1001)
        before = len(runtime.audit_log)
        assert cognitive_step(runtime, CognitiveTask("THINK"), auth) is None
        assert len(runtime.audit_log) == before


class TestAuthorizedCognition:

    def test_think(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        auth = _open(runtime, fake_clock)
        result = cognitive_step(runtime, CognitiveTask("THINK"), auth)
        assert result == CognitiveResult("THOUGHT", "Genesis processed task: THINK")
        assert runtime.audit_log.count(AuditEventType.ACTION_END) == 1

    def test_exactly_one_cycle(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        auth = _open(runtime, fake_clock)
        cognitive_step(runtime, CognitiveTask("REFLECT", "x"), auth)
        assert runtime.audit_log.count(AuditEventType.ACTION_START) == 1

    def test_violation_not_caught(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        auth = _open(runtime, fake_clock)
        runtime.close(fake_clock.now)
        with pytest.raises(GateViolation) as exc_info:
            cognitive_step(runtime, CognitiveTask("THINK"), auth)
        assert exc_info.value.reason == ViolationReason.NO_WINDOW_OPEN

    def test_forged_scope_refused(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        _open(runtime, fake_clock)
        forged = CognitionAuthorization("STG-GEN", "cognition", fake_clock.now + 1000)
        with pytest.raises(GateViolation) as exc_info:
            cognitive_step(runtime, CognitiveTask("THINK"), forged)
        assert exc_info.value.reason == ViolationReason.UNAUTHORIZED_SCOPE


class TestPerformTask:

    def test_reflect(self):
        assert perform_task(CognitiveTask("REFLECT", {"a": 1}), 0) == CognitiveResult("REFLECTION", {"a": 1})

    def test_analyze(self):
        result = perform_task(CognitiveTask("ANALYZE", "p"), 1234)
        assert result.kind == "ANALYSIS"
        assert result.output == {"task_kind": "ANALYZE", "analyzed_at": 1234, "payload": "p"}

    def test_unknown(self):
        result = perform_task(CognitiveTask("DANCE"), 0)
        assert result.kind == "UNKNOWN"
        assert "DANCE" in result.output
