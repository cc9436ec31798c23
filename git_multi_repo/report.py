"""
Terminal output for git_multi_repo.

Renders settled outcomes in configuration order. Results go to stdout and
per-repository errors go to stderr.
"""

from collections.abc import Callable, Sequence

from rich.console import Console
from rich.markup import escape

from .config import RepoDescriptor
from .fleet import Command, Outcome
from .git_ops import PullResult, PushResult, StatusResult

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

# Push --porcelain prints nothing like this, so the label is synthesized
PUSH_UP_TO_DATE_LABEL = "Everything up-to-date"
PUSHED_LABEL = "pushed changes"
PULLED_LABEL = "pulled changes"


def format_name(repo: RepoDescriptor) -> str:
    """Repository name (with alias) as rich markup."""
    return f"[magenta]{escape(repo.display_name)}[/magenta]"


def _print_indented(text: str, out: Console) -> None:
    for line in text.split("\n"):
        out.print(f"  {escape(line)}")


def _print_error(command: str, outcome: Outcome, err: Console) -> None:
    err.print(
        f"[red]Internal error ({command}):[/red] {escape(outcome.repo.display_name)}"
    )
    err.print(escape(str(outcome.error)))


def print_status(result: StatusResult, out: Console) -> None:
    branch_info = escape(result.branch_info)
    if result.is_out_of_sync:
        branch_info = f"[red]{branch_info}[/red]"

    if result.has_changes:
        out.print(f"{format_name(result.repo)} - [red]has changes[/red] - {branch_info}:")
        for line in result.changed_lines:
            out.print(f"  {escape(line)}")
    else:
        out.print(f"{format_name(result.repo)} - [green]no changes[/green] - {branch_info}")


def print_pull(result: PullResult, out: Console) -> None:
    if result.no_changes:
        out.print(f"{format_name(result.repo)} - [yellow]{escape(result.output)}[/yellow]")
    else:
        out.print(f"{format_name(result.repo)} - [green]{PULLED_LABEL}[/green]")
        _print_indented(result.output, out)


def print_push(result: PushResult, out: Console) -> None:
    if result.no_changes:
        out.print(f"{format_name(result.repo)} - [yellow]{PUSH_UP_TO_DATE_LABEL}[/yellow]")
    else:
        out.print(f"{format_name(result.repo)} - [green]{PUSHED_LABEL}[/green]")
        _print_indented(result.output, out)


PRINTERS: dict[str, Callable] = {
    "status": print_status,
    "pull": print_pull,
    "push": print_push,
}


def report(
    command: Command,
    outcomes: Sequence[Outcome],
    out: Console | None = None,
    err: Console | None = None,
) -> None:
    """
    Print every outcome of a command, in order.

    A failed repository prints an error to stderr and the report carries on
    with the next one.
    """
    out = out or console
    err = err or err_console
    printer = PRINTERS[command]

    for outcome in outcomes:
        if not outcome.ok:
            _print_error(command, outcome, err)
            continue
        printer(outcome.result, out)
