"""Task registry for the named build entry points."""

import logging
import time
from typing import Callable

from ..exceptions import TaskNotFoundError
from .compose import BuildContext, Step, StepFunc
from .schemas import TaskDefinition

logger = logging.getLogger("buildflow.tasks.registry")


class TaskRegistry:
    """Registry mapping entry-point names to steps."""

    def __init__(self):
        """Initialize empty registry."""
        self._tasks: dict[str, Step] = {}
        self._definitions: dict[str, TaskDefinition] = {}

    def add(self, task: Step, name: str | None = None, description: str | None = None) -> Step:
        """
        Register an existing step under a task name.

        Args:
            task: The step (leaf or composed)
            name: Task name (default: the step's own name)
            description: Help text (default: the step's description)

        Returns:
            The step, unchanged
        """
        name = name or task.name
        self._tasks[name] = task
        self._definitions[name] = TaskDefinition(
            name=name,
            description=description if description is not None else task.description,
        )
        logger.debug(f"Registered task: {name}")
        return task

    def register(self, name: str, description: str = "") -> Callable[[StepFunc], Step]:
        """
        Decorator to register an async function as a task.

        Args:
            name: Task name
            description: Help text shown by `buildflow tasks`

        Returns:
            Decorator function
        """

        def decorator(func: StepFunc) -> Step:
            return self.add(Step(name, func, description))

        return decorator

    def get_task(self, name: str) -> Step | None:
        """Get a registered task by name."""
        return self._tasks.get(name)

    def get_definition(self, name: str) -> TaskDefinition | None:
        """Get a task definition by name."""
        return self._definitions.get(name)

    def get_all_definitions(self) -> list[TaskDefinition]:
        """Get all registered task definitions."""
        return list(self._definitions.values())

    async def run(self, name: str, ctx: BuildContext) -> None:
        """
        Run a registered task.

        Raises:
            TaskNotFoundError: If no task has that name
            BuildError: Propagated from the failing step
        """
        task = self.get_task(name)
        if task is None:
            available = ", ".join(sorted(self._tasks)) or "none"
            raise TaskNotFoundError(f"Unknown task '{name}' (available: {available})")

        start_time = time.perf_counter()
        logger.info(f"Running task: {name}")
        try:
            await task(ctx)
        finally:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.info(f"Task {name} ended after {duration_ms}ms")

    def __contains__(self, name: str) -> bool:
        """Check if a task is registered."""
        return name in self._tasks

    def __len__(self) -> int:
        """Get number of registered tasks."""
        return len(self._tasks)
