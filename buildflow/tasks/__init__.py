"""Step composition and task registry."""

from .compose import BuildContext, Step, step, series, parallel
from .registry import TaskRegistry
from .schemas import StepRecord, TaskDefinition

__all__ = [
    "BuildContext",
    "Step",
    "step",
    "series",
    "parallel",
    "TaskRegistry",
    "StepRecord",
    "TaskDefinition",
]
