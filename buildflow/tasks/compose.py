"""
Named steps and the series/parallel combinators.

A step is an async callable taking a BuildContext. Wrapping it in Step gives
it a name and makes every invocation show up in the context trace:

    @step("sync-resource-file")
    async def sync_resource_file(ctx):
        ...

    build = series(clean, sync_resource_file, build_css, name="build")
    await build(ctx)
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ..config import Settings
from .schemas import StepKind, StepRecord

logger = logging.getLogger("buildflow.tasks.compose")

StepFunc = Callable[["BuildContext"], Awaitable[None]]
Reporter = Callable[[StepRecord], None]


@dataclass
class BuildContext:
    """State shared by the steps of one run."""

    settings: Settings
    trace: list[StepRecord] = field(default_factory=list)
    reporter: Reporter | None = None

    def report(self, record: StepRecord) -> None:
        if self.reporter is not None:
            self.reporter(record)

    def step_names(self, kind: StepKind | None = "task") -> list[str]:
        """Names of the invoked steps in start order, optionally by kind."""
        return [r.name for r in self.trace if kind is None or r.kind == kind]


class Step:
    """A named unit of build work."""

    def __init__(
        self,
        name: str,
        func: StepFunc,
        description: str = "",
        kind: StepKind = "task",
    ):
        self.name = name
        self.func = func
        self.description = description or (func.__doc__ or "").strip().split("\n")[0]
        self.kind = kind

    async def __call__(self, ctx: BuildContext) -> None:
        record = StepRecord(name=self.name, kind=self.kind)
        ctx.trace.append(record)
        ctx.report(record)

        logger.info(f"Starting '{self.name}'...")
        start_time = time.perf_counter()

        try:
            await self.func(ctx)
        except asyncio.CancelledError:
            record.status = "cancelled"
            raise
        except Exception as e:
            record.status = "failed"
            record.error = str(e)
            logger.error(f"'{self.name}' errored: {e}")
            raise
        else:
            record.status = "succeeded"
        finally:
            record.duration_ms = int((time.perf_counter() - start_time) * 1000)
            ctx.report(record)

        logger.info(f"Finished '{self.name}' after {record.duration_ms} ms")

    def __repr__(self) -> str:
        return f"Step({self.name!r}, kind={self.kind!r})"


def step(name: str, description: str = "") -> Callable[[StepFunc], Step]:
    """Decorator turning an async function into a named Step."""

    def decorator(func: StepFunc) -> Step:
        return Step(name, func, description)

    return decorator


def series(*steps: Step, name: str | None = None, description: str = "") -> Step:
    """
    Compose steps to run one after another.

    Each step starts only after the previous one completed; the first
    failure stops the chain.
    """
    steps = tuple(steps)

    async def run_series(ctx: BuildContext) -> None:
        for s in steps:
            await s(ctx)

    label = name or f"<series: {', '.join(s.name for s in steps)}>"
    return Step(label, run_series, description, kind="series")


def parallel(*steps: Step, name: str | None = None, description: str = "") -> Step:
    """
    Compose steps to run concurrently on the event loop.

    No ordering is guaranteed between the steps. Completes when all of them
    complete; the first failure cancels the others and is re-raised.
    """
    steps = tuple(steps)

    async def run_parallel(ctx: BuildContext) -> None:
        tasks = [asyncio.create_task(s(ctx), name=s.name) for s in steps]
        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        if pending:
            for t in pending:
                t.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        for t in tasks:
            if t.done() and not t.cancelled() and t.exception() is not None:
                raise t.exception()

    label = name or f"<parallel: {', '.join(s.name for s in steps)}>"
    return Step(label, run_parallel, description, kind="parallel")
