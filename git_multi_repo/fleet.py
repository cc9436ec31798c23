"""
Fan-out of one git operation across every configured repository.

Each repository runs in its own worker thread. Failures are captured per
repository so that every run yields one outcome per configured repository,
in configuration order.
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Literal

from .config import RepoDescriptor
from .git_ops import PullResult, PushResult, StatusResult, git_pull, git_push, git_status

Command = Literal["status", "pull", "push"]
OperationResult = StatusResult | PullResult | PushResult
Operation = Callable[[RepoDescriptor, bool], OperationResult]

OPERATIONS: dict[str, Operation] = {
    "status": git_status,
    "pull": git_pull,
    "push": git_push,
}


@dataclass
class Outcome:
    """Settled result of one operation on one repository."""

    repo: RepoDescriptor
    result: OperationResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_all(
    repos: Sequence[RepoDescriptor],
    operation: Operation,
    verbose: bool = False,
) -> list[Outcome]:
    """
    Run an operation against every repository concurrently.

    Args:
        repos: Repositories to operate on
        operation: Callable taking (repo, verbose) and returning a result
        verbose: Passed through to the operation

    Returns:
        One Outcome per repository, in the same order as `repos`
    """
    if not repos:
        return []

    # One worker per repository, no cap
    with ThreadPoolExecutor(max_workers=len(repos)) as executor:
        futures = [executor.submit(operation, repo, verbose) for repo in repos]

    outcomes = []
    for repo, future in zip(repos, futures):
        try:
            outcomes.append(Outcome(repo=repo, result=future.result()))
        except Exception as e:
            outcomes.append(Outcome(repo=repo, error=e))
    return outcomes


def run_command_on_all(
    command: Command,
    repos: Sequence[RepoDescriptor],
    verbose: bool = False,
) -> list[Outcome]:
    """Run the named git operation against every repository."""
    return run_all(repos, OPERATIONS[command], verbose=verbose)
