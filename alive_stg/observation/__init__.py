"""
STG Observation — read-only telemetry, audit sink and replay.

THIS LAYER OBSERVES.
IT NEVER OPENS, CLOSES OR EXECUTES.
"""
from .snapshot import GateSnapshot, get_snapshot
from .audit_sink import event_to_dict, events_to_lines, export_audit_log, load_exported_events
from .genesis_stream import GenesisUtterance, emit_genesis_utterance
from .replay import (
    ReplayReport,
    replay_audit_log,
    extract_window_opens,
    extract_completed_actions,
)

__all__ = [
    "GateSnapshot",
    "get_snapshot",
    "event_to_dict",
    "events_to_lines",
    "export_audit_log",
    "load_exported_events",
    "ReplayReport",
    "replay_audit_log",
    "extract_window_opens",
    "extract_completed_actions",
    "GenesisUtterance",
    "emit_genesis_utterance",
]
