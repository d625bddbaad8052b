"""
Execution Runtime.

Execution analogue of GateRuntime.run_gated with stricter law:
- Scope MUST match the window scope exactly (no descendants)
- An expired window is force-closed on the spot
- A request bound to a window_id runs only in that window
- Throws on all violations
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from alive_stg.body.gate_runtime import GateRuntime

T = TypeVar("T")


@dataclass(frozen=True)
class ExecutionRequest(Generic[T]):
    """Execution parameters. Frozen."""
    scope: str
    execute: Callable[[], T]
    window_id: Optional[str] = None


def run_execution(runtime: GateRuntime, request: ExecutionRequest[T]) -> T:
    """Run a single execution with window authorization.

    Args:
        runtime: Gate runtime holding the window
        request: Execution parameters

    Returns:
        Result of request.execute

    Raises:
        GateViolation: Window closed or expired, window_id mismatch,
            or scope mismatch
    """
    return runtime.run_gated(
        request.execute,
        request.scope,
        exact_scope=True,
        close_on_expiry=True,
        window_id=request.window_id,
    )
