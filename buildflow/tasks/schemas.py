"""Pydantic schemas for step tracing and task listing."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


StepStatus = Literal["running", "succeeded", "failed", "cancelled"]
StepKind = Literal["task", "series", "parallel"]


class StepRecord(BaseModel):
    """One step invocation in a build run."""

    name: str = Field(description="Step name")
    kind: StepKind = Field(default="task", description="Leaf task or composition")
    status: StepStatus = Field(default="running", description="Current state")
    started_at: datetime = Field(default_factory=datetime.now)
    duration_ms: int | None = Field(default=None, description="Set once finished")
    error: str | None = Field(default=None, description="Error message if the step failed")

    @property
    def finished(self) -> bool:
        return self.status != "running"


class TaskDefinition(BaseModel):
    """A registered entry point."""

    name: str = Field(description="Task name as used on the command line")
    description: str = Field(default="", description="Help text")
