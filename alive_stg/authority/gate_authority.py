"""
STG Authority — the only component that opens windows.

Flow:
  1. Evaluate signals against policy (pure)
  2. Record the decision trace in the audit log
  3. On OPEN only: enforce the closed scope world, then open

Authority never executes tasks. Consumers never open windows.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from alive_stg.body.audit_log import AuditEvent
from alive_stg.body.clock import Clock, now_ms
from alive_stg.body.gate_runtime import GateRuntime
from alive_stg.body.window_state import WindowState
from alive_stg.core.gate_engine import evaluate_gate
from alive_stg.core.gate_policy import STGPolicy
from alive_stg.core.gate_types import AuditEventType, GateDecision, STGSignals

logger = logging.getLogger("alive.stg.authority")

REASON_SCOPE_NOT_ALLOWED = "scope_not_allowed"
REASON_WINDOW_ALREADY_OPEN = "window_already_open"


@dataclass(frozen=True)
class AuthorityOutcome:
    """Outcome of a window request. Frozen."""
    decision: GateDecision
    reason: str
    window_id: Optional[str] = None
    expires_at: Optional[int] = None

    @property
    def opened(self) -> bool:
        return self.window_id is not None


@dataclass(frozen=True)
class CognitionAuthorization:
    """Handle given to consumers. Consumers use it, never create windows."""
    window_id: str
    scope: str
    expires_at: int


def create_window_id() -> str:
    """Generate unique window ID."""
    return f"STG-{uuid.uuid4().hex[:16].upper()}"


class GateAuthority:
    """
    Decides when a window opens on a given runtime.

    INVARIANTS:
    - Every request leaves a GATE_EVALUATION event
    - Only OPEN + allowed scope + no live window opens a window
    - expires_at = now + max_window_duration_ms
    - cooldown_until = expires_at + cooldown_duration_ms
    """

    def __init__(self, runtime: GateRuntime, policy: STGPolicy, clock: Optional[Clock] = None):
        self._runtime = runtime
        self._policy = policy
        self._clock = clock or now_ms

    @property
    def policy(self) -> STGPolicy:
        return self._policy

    def request_window(self, signals: STGSignals) -> AuthorityOutcome:
        """Evaluate signals and open a window if the law allows it.

        The state read, the decision and the open happen under the
        runtime lock, so concurrent requests can never both open.
        """
        with self._runtime.exclusive():
            return self._request_window_locked(signals)

    def _request_window_locked(self, signals: STGSignals) -> AuthorityOutcome:
        now = self._clock()
        state = self._runtime.get_state()
        result = evaluate_gate(signals, self._policy, now, state.cooldown_until)
        audit = self._runtime.audit_log

        audit.append(AuditEvent(
            type=AuditEventType.GATE_EVALUATION,
            timestamp=now,
            reason=result.reason,
            scope=signals.requested_scope,
            metadata={
                "decision": result.decision.value,
                "prediction_error": signals.prediction_error,
                "novelty_delta": signals.novelty_delta,
                "resources_ok": signals.resources_ok,
                "intent_authorized": signals.intent_authorized,
                "policy_hash": self._policy.policy_hash,
            },
        ))

        # A live window shadows cooldown: report the real cause
        if state.is_open and not state.is_expired(now):
            return self._refuse(
                AuditEventType.WINDOW_DENY, GateDecision.DENY, REASON_WINDOW_ALREADY_OPEN, now, signals,
            )

        if result.decision == GateDecision.DEFER:
            return self._refuse(AuditEventType.WINDOW_DEFER, GateDecision.DEFER, result.reason, now, signals)

        if result.decision == GateDecision.DENY:
            return self._refuse(AuditEventType.WINDOW_DENY, GateDecision.DENY, result.reason, now, signals)

        # Closed world: no scope outside the policy is ever legal
        if not self._policy.allows_scope(signals.requested_scope):
            return self._refuse(
                AuditEventType.WINDOW_DENY, GateDecision.DENY, REASON_SCOPE_NOT_ALLOWED, now, signals,
            )

        window_id = create_window_id()
        expires_at = now + self._policy.max_window_duration_ms
        cooldown_until = expires_at + self._policy.cooldown_duration_ms
        self._runtime.open(
            now=now,
            expires_at=expires_at,
            scope=signals.requested_scope,
            window_id=window_id,
            cooldown_until=cooldown_until,
            metadata={
                "policy_hash": self._policy.policy_hash,
                "max_compute_budget": self._policy.max_compute_budget,
            },
        )
        logger.info(f"Authority opened {window_id} for '{signals.requested_scope}'")
        return AuthorityOutcome(
            decision=GateDecision.OPEN,
            reason=result.reason,
            window_id=window_id,
            expires_at=expires_at,
        )

    def revoke(self, reason: str = "revoked") -> WindowState:
        """Close the current window. Cooldown is never shortened."""
        return self._runtime.close(self._clock(), reason=reason)

    def create_authorization(self) -> Optional[CognitionAuthorization]:
        """Authorization handle for the open window, or None."""
        state = self._runtime.get_state()
        if not state.is_open:
            return None
        return CognitionAuthorization(
            window_id=state.window_id,
            scope=state.scope,
            expires_at=state.expires_at,
        )

    def _refuse(
        self,
        event_type: AuditEventType,
        decision: GateDecision,
        reason: str,
        now: int,
        signals: STGSignals,
    ) -> AuthorityOutcome:
        self._runtime.audit_log.append(AuditEvent(
            type=event_type,
            timestamp=now,
            reason=reason,
            scope=signals.requested_scope,
        ))
        logger.info(f"Authority {decision.value} for '{signals.requested_scope}': {reason}")
        return AuthorityOutcome(decision=decision, reason=reason)
