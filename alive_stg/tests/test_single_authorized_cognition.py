"""
Single Authorized Cognition — full flow.

Authority evaluates and opens, a consumer thinks exactly once inside the
window, the window closes, and every later attempt is silenced and logged.
The recorded trail replays clean.
"""
import pytest

from alive_stg import (
    AuditEventType,
    GateDecision,
    GateRuntime,
    GateViolation,
    STGSignals,
    ViolationReason,
    create_policy,
)
from alive_stg.authority import GateAuthority
from alive_stg.genesis import CognitiveTask, cognitive_step
from alive_stg.observation import get_snapshot, replay_audit_log


@pytest.fixture
def policy():
    return create_policy(
        epsilon_prediction_error=0.3,
        delta_novelty=0.2,
        max_window_duration_ms=1000,
        max_compute_budget=1,
        cooldown_duration_ms=5000,
        allowed_scopes={"demo.think-once"},
    )


def test_single_authorized_cognition(policy, fake_clock):
    runtime = GateRuntime(clock=fake_clock)
    authority = GateAuthority(runtime, policy, clock=fake_clock)

    outcome = authority.request_window(STGSignals(
        prediction_error=0.8,
        novelty_delta=0.7,
        resources_ok=True,
        intent_authorized=True,
        requested_scope="demo.think-once",
    ))
    assert outcome.decision == GateDecision.OPEN

    auth = authority.create_authorization()
    fake_clock.advance(10)
    result = cognitive_step(runtime, CognitiveTask("THINK"), auth)
    assert result.kind == "THOUGHT"

    authority.revoke()
    with pytest.raises(GateViolation) as exc_info:
        cognitive_step(runtime, CognitiveTask("THINK"), auth)
    assert exc_info.value.reason == ViolationReason.NO_WINDOW_OPEN

    # A second window is refused during cooldown
    again = authority.request_window(STGSignals(0.8, 0.7, True, True, "demo.think-once"))
    assert again.reason == "cooldown_active"

    log = runtime.audit_log
    assert log.count(AuditEventType.ACTION_END) == 1
    assert log.count(AuditEventType.VIOLATION) == 1
    assert log.count(AuditEventType.WINDOW_OPEN) == 1

    snap = get_snapshot(runtime)
    assert snap.status == "CLOSED"
    assert snap.last_event == "WINDOW_DENY"

    assert replay_audit_log(log.read_all()).valid
