"""
Observation API — read-only FastAPI router for one gate.

Endpoints:
  - GET /stg/snapshot  — window state + last event
  - GET /stg/audit     — audit events (optional type filter, tail limit)
  - GET /stg/replay    — invariant verification of the trail

READ ONLY. No route opens, closes, or executes anything.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query
from pydantic import BaseModel

from alive_stg.body.gate_runtime import GateRuntime
from alive_stg.core.gate_types import AuditEventType

from .audit_sink import event_to_dict
from .replay import replay_audit_log
from .snapshot import get_snapshot

logger = logging.getLogger(__name__)


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class SnapshotResponse(BaseModel):
    status: str
    scope: Optional[str] = None
    window_id: Optional[str] = None
    expires_at: Optional[int] = None
    cooldown_until: int
    last_event: Optional[str] = None
    last_event_time: Optional[int] = None
    total_events: int
    violation_count: int


class AuditEventResponse(BaseModel):
    type: str
    timestamp: int
    reason: str
    window_id: Optional[str] = None
    scope: Optional[str] = None
    metadata: Dict[str, Any] = {}


class AuditResponse(BaseModel):
    total: int
    events: List[AuditEventResponse]


class ReplayResponse(BaseModel):
    valid: bool
    total_events: int
    window_opens: int
    completed_actions: int
    violations: int
    unauthorized_window_ids: List[Optional[str]]


# =============================================================================
# ROUTER
# =============================================================================

def create_observation_router(runtime: GateRuntime) -> APIRouter:
    router = APIRouter(prefix="/stg", tags=["stg-observation"])

    @router.get("/snapshot", response_model=SnapshotResponse)
    def snapshot():
        snap = get_snapshot(runtime)
        return SnapshotResponse(**asdict(snap))

    @router.get("/audit", response_model=AuditResponse)
    def audit(
        event_type: Optional[str] = Query(None),
        limit: int = Query(100, ge=1, le=10000),
    ):
        events = runtime.audit_log.read_all()
        if event_type is not None:
            try:
                wanted = AuditEventType(event_type.upper())
            except ValueError:
                raise HTTPException(status_code=400, detail=f"Unknown event_type: {event_type}")
            events = tuple(e for e in events if e.type == wanted)
        tail = events[-limit:]
        return AuditResponse(
            total=len(events),
            events=[AuditEventResponse(**event_to_dict(e)) for e in tail],
        )

    @router.get("/replay", response_model=ReplayResponse)
    def replay():
        report = replay_audit_log(runtime.audit_log.read_all())
        if not report.valid:
            logger.warning(f"Replay found {len(report.unauthorized_actions)} unauthorized actions")
        return ReplayResponse(
            valid=report.valid,
            total_events=report.total_events,
            window_opens=report.window_opens,
            completed_actions=report.completed_actions,
            violations=report.violations,
            unauthorized_window_ids=[a.window_id for a in report.unauthorized_actions],
        )

    return router


def create_app(runtime: GateRuntime) -> FastAPI:
    app = FastAPI(
        title="ALIVE STG Observation",
        description="Read-only gate telemetry",
        version="1.0.0",
    )
    app.include_router(create_observation_router(runtime))
    return app
