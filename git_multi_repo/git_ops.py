"""
Git operations for git_multi_repo.

Runs git commands through GitPython's command wrapper and turns their plain
text output into structured results. Parsing lives in small pure functions
so the text heuristics can be swapped without touching the callers.
"""

import re
import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from git import Git
from git.exc import GitCommandNotFound
from rich.console import Console
from rich.markup import escape

from .config import RepoDescriptor
from .errors import BranchInfoNotExtractedError, CurrentBranchNotFoundError, ProcessError

console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

# Literal messages printed by git that the parsers rely on
PULL_UP_TO_DATE = "Already up to date."
PUSH_UP_TO_DATE_MARKER = "[up to date]"
PUSH_REMOTE_PREFIX = "To "
PUSH_DONE_LINE = "Done"

# First [...] segment on the current branch line, e.g. [origin/main: ahead 1]
BRANCH_INFO_PATTERN = re.compile(r"\[([^\]]+)]")


def run_command(
    command: str | Sequence[str],
    cwd: Path | str,
    verbose: bool = False,
) -> str:
    """
    Run an external command in a working directory and return its output.

    Args:
        command: Command line to run, e.g. "git status --short"
        cwd: Working directory for the command
        verbose: Echo the command and its output to stderr

    Returns:
        The command's standard output without trailing whitespace

    Raises:
        ProcessError: If the command cannot be started or exits non-zero
    """
    args = shlex.split(command) if isinstance(command, str) else list(command)
    command_line = shlex.join(args)
    cwd = Path(cwd)

    if verbose:
        console.print(f"[dim]$ {escape(command_line)}  ({escape(str(cwd))})[/dim]")

    # GitPython falls back to the current directory when cwd is missing
    if not cwd.is_dir():
        raise ProcessError(command_line, cwd, stderr="No such directory")

    try:
        status, stdout, stderr = Git(cwd).execute(
            args,
            with_extended_output=True,
            with_exceptions=False,
        )
    except GitCommandNotFound as e:
        raise ProcessError(command_line, cwd, stderr=str(e)) from e

    output = stdout.rstrip()
    stderr = stderr.rstrip()

    if verbose:
        if output:
            console.print(f"[dim]{escape(output)}[/dim]")
        if stderr:
            console.print(f"[dim yellow]{escape(stderr)}[/dim yellow]")

    if status != 0:
        raise ProcessError(command_line, cwd, status=status, stderr=stderr)

    return output


@dataclass
class StatusResult:
    """Working tree and upstream tracking state of one repository."""

    repo: RepoDescriptor
    changed_lines: list[str]
    branch_info: str

    @property
    def has_changes(self) -> bool:
        return len(self.changed_lines) > 0

    @property
    def is_out_of_sync(self) -> bool:
        """Check if the branch is ahead of or behind its upstream."""
        return "ahead" in self.branch_info or "behind" in self.branch_info


@dataclass
class PullResult:
    """Result of pulling one repository."""

    repo: RepoDescriptor
    output: str
    no_changes: bool


@dataclass
class PushResult:
    """Result of pushing one repository."""

    repo: RepoDescriptor
    output: str
    no_changes: bool


def parse_changed_lines(output: str) -> list[str]:
    """Split `git status --short` output into its non-empty lines."""
    return [line for line in output.split("\n") if line.strip()]


def parse_branch_info(output: str, path: Path) -> str:
    """
    Extract the upstream annotation of the checked-out branch.

    Given `git branch -vv` output, finds the line marked with "* " and returns
    its first bracketed segment verbatim, brackets included.
    """
    current_branch = next(
        (line for line in output.split("\n") if line.startswith("* ")), None
    )
    if current_branch is None:
        raise CurrentBranchNotFoundError(path)

    match = BRANCH_INFO_PATTERN.search(current_branch)
    if match is None:
        raise BranchInfoNotExtractedError(path)
    return match.group(0)


def parse_pull_output(output: str) -> bool:
    """Check if `git pull` output reports that nothing was pulled."""
    return output == PULL_UP_TO_DATE


def parse_push_output(output: str) -> tuple[str, bool]:
    """
    Interpret `git push --porcelain` output.

    Example output when nothing was pushed:

        To github.com:org/repo.git
        =	refs/heads/main:refs/heads/main	[up to date]
        Done

    And when a ref was updated:

        To github.com:org/repo.git
         	refs/heads/main:refs/heads/main	e0e4db2..1d6ad1f
        Done

    Returns:
        The output without its final line, and whether nothing was pushed
    """
    lines = output.split("\n")
    ref_lines = [
        line
        for line in lines
        if not line.startswith(PUSH_REMOTE_PREFIX) and line != PUSH_DONE_LINE
    ]
    # No ref lines at all also counts as nothing pushed
    no_changes = all(line.endswith(PUSH_UP_TO_DATE_MARKER) for line in ref_lines)
    return "\n".join(lines[:-1]), no_changes


def git_status(repo: RepoDescriptor, verbose: bool = False) -> StatusResult:
    """Get changed files and branch tracking info for a repository."""
    status_output = run_command("git status --short", cwd=repo.path, verbose=verbose)
    branch_output = run_command("git branch -vv", cwd=repo.path, verbose=verbose)
    return StatusResult(
        repo=repo,
        changed_lines=parse_changed_lines(status_output),
        branch_info=parse_branch_info(branch_output, repo.path),
    )


def git_pull(repo: RepoDescriptor, verbose: bool = False) -> PullResult:
    """Pull a repository from its upstream."""
    output = run_command("git pull", cwd=repo.path, verbose=verbose)
    return PullResult(repo=repo, output=output, no_changes=parse_pull_output(output))


def git_push(repo: RepoDescriptor, verbose: bool = False) -> PushResult:
    """Push a repository to its upstream."""
    # --porcelain, since a plain push prints nothing on stdout when up to date
    raw_output = run_command("git push --porcelain", cwd=repo.path, verbose=verbose)
    output, no_changes = parse_push_output(raw_output)
    return PushResult(repo=repo, output=output, no_changes=no_changes)
