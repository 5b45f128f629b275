"""
Scoped execution of external build commands.

Commands run through the shell with inherited stdin/stdout/stderr so the
developer sees tool output in real time. The child process is always reaped:
on normal exit, on failure, and when the awaiting task is cancelled (Ctrl+C
in watch mode), in which case it is terminated first.

Example:
    await run_command("yarn css:build", cwd=project_root)
"""
import asyncio
import logging
import sys
from pathlib import Path

from .exceptions import CommandError

logger = logging.getLogger("buildflow.process")

# Seconds to wait after terminate() before killing the child
TERMINATE_GRACE_PERIOD = 5.0


async def _stop_process(process: asyncio.subprocess.Process) -> None:
    """Terminate a child process, killing it if it doesn't stop in time."""
    if process.returncode is not None:
        return

    logger.info(f"Terminating child process (PID {process.pid})")
    try:
        process.terminate()
    except ProcessLookupError:
        return

    try:
        await asyncio.wait_for(process.wait(), timeout=TERMINATE_GRACE_PERIOD)
    except asyncio.TimeoutError:
        logger.warning(f"Process {process.pid} didn't stop gracefully, killing...")
        process.kill()
        await process.wait()


async def run_command(
    command: str,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """
    Run a shell command to completion with inherited I/O.

    Args:
        command: Command line, interpreted by the shell
        cwd: Working directory (default: current directory)
        env: Environment for the child (default: inherit)

    Returns:
        The exit code (always 0; failures raise)

    Raises:
        CommandError: If the command exits nonzero or is killed by a signal
    """
    logger.info(f"Running: {command} (cwd={cwd or Path.cwd()})")

    # Make sure our own buffered output lands before the child's
    sys.stdout.flush()
    sys.stderr.flush()

    process = await asyncio.create_subprocess_shell(
        command,
        cwd=cwd,
        env=env,
    )

    try:
        returncode = await process.wait()
    except BaseException:
        await asyncio.shield(_stop_process(process))
        raise

    if returncode != 0:
        logger.error(f"Command failed ({returncode}): {command}")
        raise CommandError(command, returncode, cwd)

    logger.debug(f"Command succeeded: {command}")
    return returncode
