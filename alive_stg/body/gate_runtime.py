"""
STG enforcement boundary.

GateRuntime owns the window state and the audit log of ONE gate.
run_gated() is the ONLY entry point for privileged work.

CRITICAL RULES:
- No action without an open window
- Expired windows are never honored
- Scope is never widened
- All violations are logged, then raised
- No retry, no fallback, no auto-reopen
- Task errors are logged and re-raised unchanged
"""

import logging
import threading
from typing import Callable, ContextManager, Optional, TypeVar

from alive_stg.core.gate_engine import is_scope_authorized, is_scope_exact
from alive_stg.core.gate_types import AuditEventType

from .audit_log import AuditEvent, AuditLog
from .clock import Clock, now_ms
from .errors import GateViolation, ViolationReason
from .window_state import WindowState, closed_state, initial_state, opened_state

logger = logging.getLogger("alive.stg.gate")

T = TypeVar("T")


class GateRuntime:
    """
    Window state machine + append-only audit log + enforcement.

    INVARIANTS:
    - Starts CLOSED
    - State changes only through open() and close()
    - State and audit log change under one lock
    - A gated task cannot call run_gated() on the same runtime
    """

    def __init__(self, clock: Optional[Clock] = None, audit_log: Optional[AuditLog] = None):
        self._clock = clock or now_ms
        self._audit = audit_log if audit_log is not None else AuditLog()
        self._state = initial_state()
        self._lock = threading.RLock()
        self._active_thread: Optional[int] = None

    @property
    def audit_log(self) -> AuditLog:
        return self._audit

    def now(self) -> int:
        return self._clock()

    def get_state(self) -> WindowState:
        """Read-only snapshot. Callers may inspect, never mutate."""
        with self._lock:
            return self._state

    def exclusive(self) -> ContextManager:
        """
        Hold the runtime lock across a read-decide-open sequence.

        Re-entrant: open(), close() and audit appends may be called inside.
        """
        return self._lock

    # -------------------------------------------------------------------------
    # STATE OPERATIONS
    # -------------------------------------------------------------------------

    def open(
        self,
        now: int,
        expires_at: int,
        scope: str,
        window_id: str,
        cooldown_until: int,
        metadata: Optional[dict] = None,
    ) -> WindowState:
        """
        Open a window with explicit, fully-specified state.

        No validation: the caller has already evaluated the gate.
        Replaces the whole state at once. Caller metadata never overrides
        the recorded window timing.
        """
        with self._lock:
            self._state = opened_state(now, expires_at, scope, window_id, cooldown_until)
            event_meta = dict(metadata or {})
            event_meta.update({
                "opened_at": now,
                "expires_at": expires_at,
                "cooldown_until": cooldown_until,
            })
            self._audit.append(AuditEvent(
                type=AuditEventType.WINDOW_OPEN,
                timestamp=now,
                reason="window_opened",
                window_id=window_id,
                scope=scope,
                metadata=event_meta,
            ))
            logger.info(f"Window {window_id} OPEN for scope '{scope}' until {expires_at}")
            return self._state

    def close(
        self,
        now: int,
        cooldown_until: Optional[int] = None,
        reason: str = "window_closed",
    ) -> WindowState:
        """
        Force the window CLOSED.

        Cooldown is carried over, or extended to cooldown_until if later.
        It is never shortened.
        """
        with self._lock:
            return self._close_locked(now, cooldown_until, reason)

    def _close_locked(self, now: int, cooldown_until: Optional[int], reason: str) -> WindowState:
        prior = self._state
        self._state = closed_state(prior, cooldown_until)
        self._audit.append(AuditEvent(
            type=AuditEventType.WINDOW_CLOSE,
            timestamp=now,
            reason=reason,
            window_id=prior.window_id,
            scope=prior.scope,
            metadata={
                "was_open": prior.is_open,
                "cooldown_until": self._state.cooldown_until,
            },
        ))
        logger.info(f"Window {prior.window_id} CLOSED ({reason})")
        return self._state

    # -------------------------------------------------------------------------
    # ENFORCEMENT
    # -------------------------------------------------------------------------

    def is_window_valid(self, requested_scope: str, now: Optional[int] = None) -> bool:
        """Side-effect-free re-check for long-running tasks."""
        with self._lock:
            state = self._state
        current = self._clock() if now is None else now
        return (
            state.is_open
            and not state.is_expired(current)
            and is_scope_authorized(requested_scope, state.scope)
        )

    def run_gated(
        self,
        task: Callable[[], T],
        requested_scope: str,
        *,
        exact_scope: bool = False,
        close_on_expiry: bool = False,
        window_id: Optional[str] = None,
    ) -> T:
        """
        Run task inside the open window.

        Args:
            task: Zero-argument callable
            requested_scope: Scope the task acts on
            exact_scope: Refuse descendant scopes
            close_on_expiry: Force the window closed when found expired
            window_id: Bind the call to this window; None accepts any

        Returns:
            The task's result

        Raises:
            GateViolation: no_window_open, window_expired, window_mismatch,
                unauthorized_scope, reentrant_call
            Any exception raised by task, unchanged
        """
        with self._lock:
            now = self._clock()
            state = self._state

            # Chaining is forbidden
            if self._active_thread == threading.get_ident():
                self._violation(
                    now, ViolationReason.REENTRANT_CALL, requested_scope, state,
                    {"authorized_scope": state.scope},
                )

            # 1. Window MUST be OPEN
            if not state.is_open:
                self._violation(
                    now, ViolationReason.NO_WINDOW_OPEN, requested_scope, state,
                    {"state": state.status.value},
                )

            # 2. Window MUST NOT be expired
            if state.is_expired(now):
                meta = {"expires_at": state.expires_at, "now": now}
                if close_on_expiry:
                    self._violation(
                        now, ViolationReason.WINDOW_EXPIRED, requested_scope, state, meta,
                        raise_now=False,
                    )
                    self._close_locked(now, None, ViolationReason.WINDOW_EXPIRED.value)
                    raise GateViolation(
                        ViolationReason.WINDOW_EXPIRED, requested_scope, state.window_id, state.scope,
                    )
                self._violation(now, ViolationReason.WINDOW_EXPIRED, requested_scope, state, meta)

            # Bound requests only run in their own window
            if window_id is not None and window_id != state.window_id:
                self._violation(
                    now, ViolationReason.WINDOW_MISMATCH, requested_scope, state,
                    {"requested_window_id": window_id},
                )

            # 3. Scope MUST be authorized
            scope_ok = (
                is_scope_exact(requested_scope, state.scope)
                if exact_scope
                else is_scope_authorized(requested_scope, state.scope)
            )
            if not scope_ok:
                self._violation(
                    now, ViolationReason.UNAUTHORIZED_SCOPE, requested_scope, state,
                    {"authorized_scope": state.scope},
                )

            # 4. Start
            self._audit.append(AuditEvent(
                type=AuditEventType.ACTION_START,
                timestamp=now,
                reason="authorized",
                window_id=state.window_id,
                scope=requested_scope,
            ))
            logger.debug(f"Action START scope='{requested_scope}' window={state.window_id}")

            # 5. Execute
            self._active_thread = threading.get_ident()
            try:
                result = task()
            except BaseException as e:
                self._audit.append(AuditEvent(
                    type=AuditEventType.ACTION_END,
                    timestamp=self._clock(),
                    reason="failed",
                    window_id=state.window_id,
                    scope=requested_scope,
                    metadata={"error": str(e), "error_type": type(e).__name__},
                ))
                logger.warning(
                    f"Action FAILED scope='{requested_scope}' window={state.window_id}: "
                    f"{type(e).__name__}: {e}"
                )
                raise
            finally:
                self._active_thread = None

            # 6. End
            self._audit.append(AuditEvent(
                type=AuditEventType.ACTION_END,
                timestamp=self._clock(),
                reason="completed",
                window_id=state.window_id,
                scope=requested_scope,
            ))
            logger.debug(f"Action END scope='{requested_scope}' window={state.window_id}")
            return result

    def _violation(
        self,
        now: int,
        reason: ViolationReason,
        requested_scope: str,
        state: WindowState,
        metadata: dict,
        raise_now: bool = True,
    ) -> None:
        self._audit.append(AuditEvent(
            type=AuditEventType.VIOLATION,
            timestamp=now,
            reason=reason.value,
            window_id=state.window_id,
            scope=requested_scope,
            metadata=metadata,
        ))
        logger.warning(
            f"VIOLATION {reason.value}: scope='{requested_scope}' window={state.window_id}"
        )
        if raise_now:
            raise GateViolation(reason, requested_scope, state.window_id, state.scope)


def create_gate_runtime(clock: Optional[Clock] = None) -> GateRuntime:
    """Factory function to create a gate runtime."""
    return GateRuntime(clock=clock)
