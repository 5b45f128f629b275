"""Build orchestration exceptions."""

from pathlib import Path


class BuildError(Exception):
    """Base exception for build errors."""
    pass


class CommandError(BuildError):
    """Raised when an external command exits nonzero or is killed by a signal."""

    def __init__(self, command: str, returncode: int, cwd: Path | None = None):
        self.command = command
        self.returncode = returncode
        self.cwd = cwd

        if returncode < 0:
            reason = f"terminated by signal {-returncode}"
        else:
            reason = f"failed with exit code {returncode}"
        super().__init__(f"Command '{command}' {reason}")


class VersionNotFoundError(BuildError):
    """Raised when no release version can be read from the version source."""
    pass


class TaskNotFoundError(BuildError):
    """Raised when an unknown task name is requested."""
    pass
