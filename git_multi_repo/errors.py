"""
Error types raised by git_multi_repo.

Configuration errors abort a run before any repository is touched. The
remaining errors are raised per repository and are captured by the fan-out
so that one failing repository never stops the others.
"""

from pathlib import Path


class MultiRepoError(Exception):
    """Base class for all git_multi_repo errors."""


class ConfigNotFoundError(MultiRepoError):
    """The configuration file is missing or cannot be read."""

    def __init__(self, path: Path, reason: str | None = None):
        self.path = path
        message = f"Config file not found: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ConfigMalformedError(MultiRepoError):
    """The configuration file is not valid JSON or has the wrong shape."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Malformed config file {path}: {reason}")


class ProcessError(MultiRepoError):
    """An external command exited non-zero or could not be started."""

    def __init__(
        self,
        command: str,
        cwd: Path,
        status: int | str | None = None,
        stderr: str = "",
    ):
        self.command = command
        self.cwd = cwd
        self.status = status
        self.stderr = stderr
        message = f"'{command}' failed in {cwd}"
        if status is not None:
            message += f" (exit status {status})"
        if stderr:
            message += f": {stderr}"
        super().__init__(message)


class CurrentBranchNotFoundError(MultiRepoError):
    """`git branch -vv` output has no line for the checked-out branch."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Failed to find current branch in {path}")


class BranchInfoNotExtractedError(MultiRepoError):
    """The current branch line carries no [upstream] annotation."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Failed to extract branch tracking info in {path}")
