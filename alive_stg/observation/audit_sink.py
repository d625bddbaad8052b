"""
Audit sink — persists the in-memory audit log as JSON lines.

The core guarantees nothing beyond process lifetime. This sink reads
read_all() and writes a full copy, replacing the target atomically.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from alive_stg.body.audit_log import AuditEvent, AuditLog
from alive_stg.config import get_audit_export_path

logger = logging.getLogger("alive.stg.audit_sink")


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, (tuple, frozenset)):
        return [_thaw(v) for v in value]
    return value


def event_to_dict(event: AuditEvent) -> Dict[str, Any]:
    """Serialize one event. Frozen metadata comes back as plain dicts and lists."""
    return {
        "type": event.type.value,
        "timestamp": event.timestamp,
        "reason": event.reason,
        "window_id": event.window_id,
        "scope": event.scope,
        "metadata": _thaw(event.metadata),
    }


def events_to_lines(events: Iterable[AuditEvent]) -> List[str]:
    """JSON lines; non-JSON metadata values are stringified."""
    return [
        json.dumps(event_to_dict(e), sort_keys=True, separators=(',', ':'), default=str)
        for e in events
    ]


def export_audit_log(log: AuditLog, path: Optional[Path] = None) -> int:
    """Write the whole log to path as JSON lines.

    Returns:
        Number of events written
    """
    target = Path(path) if path is not None else get_audit_export_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    lines = events_to_lines(log.read_all())

    fd, tmp_path = tempfile.mkstemp(dir=str(target.parent), prefix=".stg_audit_")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        os.replace(tmp_path, target)
    except OSError:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.info(f"Exported {len(lines)} audit events to {target}")
    return len(lines)


def load_exported_events(path: Path) -> List[Dict[str, Any]]:
    """Read back an export for forensic review."""
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]
