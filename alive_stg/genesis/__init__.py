"""
Genesis — downstream consumer of STG authorization.

Exports:
    CognitiveTask, CognitiveResult: Task/result envelopes
    cognitive_step: Single gated cognition cycle
"""
from .cognitive import CognitiveTask, CognitiveResult, cognitive_step, perform_task

__all__ = [
    "CognitiveTask",
    "CognitiveResult",
    "cognitive_step",
    "perform_task",
]
