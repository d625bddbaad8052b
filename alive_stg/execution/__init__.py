"""
STG Execution — window-authorized execution and its first capability.

Exports:
    ExecutionRequest, run_execution: Strict gated execution
    ExecutionLogEntry, ExecutionResult, append_execution_log: JSONL capability
"""
from .execution_runner import ExecutionRequest, run_execution
from .execution_log import (
    ExecutionLogEntry,
    ExecutionResult,
    append_execution_log,
)

__all__ = [
    "ExecutionRequest",
    "run_execution",
    "ExecutionLogEntry",
    "ExecutionResult",
    "append_execution_log",
]
