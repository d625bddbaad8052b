"""
Execution log capability.

Single-line, append-only execution log. The first side effect beyond
audit logging.

Contract:
- Append exactly one JSON line per call
- To exactly one file
- No directory creation, no reading, no retry
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from alive_stg.config import get_execution_log_path


@dataclass(frozen=True)
class ExecutionLogEntry:
    execution_id: str
    scope: str
    timestamp: int


@dataclass(frozen=True)
class ExecutionResult:
    status: str
    execution_id: str


def append_execution_log(entry: ExecutionLogEntry, path: Optional[Path] = None) -> ExecutionResult:
    """Append exactly one line to the execution log.

    Raises:
        FileNotFoundError: Parent directory does not exist
    """
    log_path = Path(path) if path is not None else get_execution_log_path()
    line = json.dumps(asdict(entry), sort_keys=True, separators=(',', ':'))
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(line + "\n")
    return ExecutionResult(status="EXECUTED", execution_id=entry.execution_id)
