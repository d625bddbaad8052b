"""
Audit replay — forensic verification of a recorded trail.

Rebuilds window opens and completed actions from the audit log and checks
that every action is covered by a lawful prior open.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from alive_stg.body.audit_log import AuditEvent
from alive_stg.core.gate_invariants import (
    ActionRecord,
    WindowOpenRecord,
    find_unauthorized_actions,
)
from alive_stg.core.gate_types import AuditEventType

logger = logging.getLogger("alive.stg.replay")


@dataclass(frozen=True)
class ReplayReport:
    total_events: int
    window_opens: int
    completed_actions: int
    violations: int
    unauthorized_actions: Tuple[ActionRecord, ...]

    @property
    def valid(self) -> bool:
        return not self.unauthorized_actions


def extract_window_opens(events: Iterable[AuditEvent]) -> List[WindowOpenRecord]:
    """Window opens with a recorded deadline.

    An open without expires_at authorizes nothing; actions that relied on
    it surface as unauthorized.
    """
    opens = []
    for e in events:
        if e.type != AuditEventType.WINDOW_OPEN or e.window_id is None:
            continue
        if "expires_at" not in e.metadata:
            logger.warning(f"Replay skipped WINDOW_OPEN {e.window_id} without expires_at")
            continue
        opens.append(WindowOpenRecord(
            window_id=e.window_id,
            scope=e.scope,
            issued_at=e.metadata.get("opened_at", e.timestamp),
            expires_at=e.metadata["expires_at"],
        ))
    return opens


def extract_completed_actions(events: Iterable[AuditEvent]) -> List[ActionRecord]:
    return [
        ActionRecord(window_id=e.window_id, scope=e.scope, completed_at=e.timestamp)
        for e in events
        if e.type == AuditEventType.ACTION_END and e.reason == "completed"
    ]


def replay_audit_log(events: Iterable[AuditEvent]) -> ReplayReport:
    """Verify: no completed action without a valid prior window open."""
    events = tuple(events)
    opens = extract_window_opens(events)
    actions = extract_completed_actions(events)
    return ReplayReport(
        total_events=len(events),
        window_opens=len(opens),
        completed_actions=len(actions),
        violations=sum(1 for e in events if e.type == AuditEventType.VIOLATION),
        unauthorized_actions=tuple(find_unauthorized_actions(actions, opens)),
    )
