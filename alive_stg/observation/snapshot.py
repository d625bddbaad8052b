"""
STG Snapshot Reader (Read-Only Telemetry)

Contract:
- Read window state and audit log ONLY
- NO mutations
- NO opening or closing windows
- NO execution
"""

from dataclasses import dataclass
from typing import Optional

from alive_stg.body.gate_runtime import GateRuntime
from alive_stg.core.gate_types import AuditEventType


@dataclass(frozen=True)
class GateSnapshot:
    """Point-in-time view of a gate. Frozen."""
    status: str
    scope: Optional[str]
    window_id: Optional[str]
    expires_at: Optional[int]
    cooldown_until: int
    last_event: Optional[str]
    last_event_time: Optional[int]
    total_events: int
    violation_count: int


def get_snapshot(runtime: GateRuntime) -> GateSnapshot:
    """Get a read-only snapshot of the gate's audit-visible state."""
    state = runtime.get_state()
    events = runtime.audit_log.read_all()
    last = events[-1] if events else None
    return GateSnapshot(
        status=state.status.value,
        scope=state.scope,
        window_id=state.window_id,
        expires_at=state.expires_at,
        cooldown_until=state.cooldown_until,
        last_event=last.type.value if last else None,
        last_event_time=last.timestamp if last else None,
        total_events=len(events),
        violation_count=sum(1 for e in events if e.type == AuditEventType.VIOLATION),
    )
