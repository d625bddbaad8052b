"""
Genesis cognitive entry point.
This is the ONLY way Genesis performs cognition.

Genesis never opens windows.
Genesis never evaluates permission.
Genesis only consumes a valid authorization or does nothing.

Silence is normal. Refusal is expected.
"""

from dataclasses import dataclass
from typing import Any, Optional

from alive_stg.authority.gate_authority import CognitionAuthorization
from alive_stg.body.gate_runtime import GateRuntime


@dataclass(frozen=True)
class CognitiveTask:
    kind: str
    payload: Any = None


@dataclass(frozen=True)
class CognitiveResult:
    kind: str
    output: Any = None


def cognitive_step(
    runtime: GateRuntime,
    task: CognitiveTask,
    auth: Optional[CognitionAuthorization] = None,
) -> Optional[CognitiveResult]:
    """
    One cognitive step.

    - auth missing -> None
    - auth expired -> None
    - otherwise exactly one gated cycle under auth.scope

    Violations raised by the gate are not caught. No retry.
    No logging here: the runtime already logs.
    """
    if auth is None:
        return None

    if runtime.now() > auth.expires_at:
        return None

    return runtime.run_gated(lambda: perform_task(task, runtime.now()), auth.scope)


def perform_task(task: CognitiveTask, now: int) -> CognitiveResult:
    """The cognition itself. Only reachable through the gate."""
    if task.kind == "THINK":
        return CognitiveResult("THOUGHT", f"Genesis processed task: {task.kind}")
    if task.kind == "REFLECT":
        return CognitiveResult("REFLECTION", task.payload)
    if task.kind == "ANALYZE":
        return CognitiveResult("ANALYSIS", {
            "task_kind": task.kind,
            "analyzed_at": now,
            "payload": task.payload,
        })
    return CognitiveResult("UNKNOWN", f"Unknown task kind: {task.kind}")
