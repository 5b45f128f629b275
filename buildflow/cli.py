"""CLI interface for buildflow."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import Settings, get_settings
from .exceptions import BuildError, CommandError
from .logging_config import setup_logging, get_logger
from .pipelines import register_all_tasks
from .tasks import BuildContext, StepRecord, TaskRegistry

logger = get_logger("buildflow.cli")

# Exit code used when the user interrupts a long-running task
EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="buildflow",
    help="Build orchestration for the desktop application shell",
    no_args_is_help=True,
)
console = Console()

_state: dict = {"project_root": None}


def _print_record(record: StepRecord) -> None:
    """Print step progress, gulp style."""
    timestamp = record.started_at.strftime("%H:%M:%S")
    if not record.finished:
        console.print(f"[dim]\\[{timestamp}][/dim] Starting '[cyan]{record.name}[/cyan]'...")
    elif record.status == "succeeded":
        console.print(
            f"[dim]\\[{timestamp}][/dim] Finished '[cyan]{record.name}[/cyan]' "
            f"after [magenta]{record.duration_ms} ms[/magenta]"
        )
    elif record.status == "failed":
        console.print(
            f"[dim]\\[{timestamp}][/dim] [red]'{record.name}' errored after "
            f"{record.duration_ms} ms[/red]"
        )


def _load_settings() -> Settings:
    settings = get_settings()
    if _state["project_root"] is not None:
        settings = settings.model_copy(update={"project_root": _state["project_root"]})
    return settings


def _exit_code(error: BuildError) -> int:
    if isinstance(error, CommandError) and error.returncode > 0:
        return error.returncode
    return 1


def run_task(name: str, registry: TaskRegistry | None = None) -> None:
    """Run a registered task and translate failures into exit codes."""
    registry = registry or register_all_tasks(TaskRegistry())
    ctx = BuildContext(settings=_load_settings(), reporter=_print_record)

    try:
        asyncio.run(registry.run(name, ctx))
    except BuildError as e:
        logger.error(f"Task {name} failed: {e}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=_exit_code(e))
    except KeyboardInterrupt:
        console.print(f"\n[yellow]Interrupted, stopped '{name}'.[/yellow]")
        raise typer.Exit(code=EXIT_INTERRUPTED)


@app.callback()
def main_callback(
    project_root: Optional[Path] = typer.Option(
        None,
        "--project-root",
        "-C",
        help="Project directory (default: current directory or BUILDFLOW_PROJECT_ROOT)",
        file_okay=False,
        resolve_path=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show INFO logs on stderr"),
    log_file: bool = typer.Option(False, "--log-file", help="Also write a daily log file"),
):
    """Build orchestration for the desktop application shell."""
    _state["project_root"] = project_root
    settings = _load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_dir=settings.log_path if (log_file or settings.log_to_file) else None,
        verbose=verbose,
    )


@app.command()
def clean():
    """Remove build output, keeping the lockfile and dependencies."""
    run_task("clean")


@app.command()
def build():
    """Clean, sync static files and build minified CSS."""
    run_task("build")


@app.command()
def watch():
    """Sync static files, then keep syncing and recompiling CSS until interrupted."""
    run_task("watch")


@app.command()
def electron():
    """Install shell dependencies if needed and launch Electron in dev mode."""
    run_task("electron")


@app.command("electron-package")
def electron_package():
    """Release-build, version-stamp and package the desktop application."""
    run_task("electron-package")


@app.command()
def tasks():
    """List the available tasks."""
    registry = register_all_tasks(TaskRegistry())

    table = Table(title="buildflow tasks")
    table.add_column("Task", style="cyan")
    table.add_column("Description")
    for definition in registry.get_all_definitions():
        table.add_row(definition.name, definition.description)

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
