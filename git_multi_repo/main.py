"""
CLI entry point for git_multi_repo.

Provides the status, pull and push commands over every configured repository.
"""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import MultiRepoConfig, config_path, load_config
from .errors import ConfigMalformedError, ConfigNotFoundError
from .fleet import Command, run_command_on_all
from .report import report

err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="git-multi-repo")
@click.option(
    "--home",
    envvar="HOME",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    required=True,
    help="Directory containing .git-multi-repo.json (defaults to $HOME)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Echo every git command and its output to stderr",
)
@click.pass_context
def cli(ctx: click.Context, home: Path, verbose: bool):
    """Git Multi Repo - Status, pull and push across many git repositories."""
    ctx.ensure_object(dict)
    ctx.obj["home"] = home
    ctx.obj["verbose"] = verbose

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _load_or_exit(home: Path, verbose: bool) -> MultiRepoConfig:
    """Load the config file, exiting with status 1 if it is unusable."""
    try:
        config = load_config(home)
    except (ConfigNotFoundError, ConfigMalformedError) as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    if verbose:
        err_console.print(
            f"[dim]Loaded {len(config.repos)} repositories from "
            f"{escape(str(config_path(home)))}[/dim]"
        )
    return config


def _run(ctx: click.Context, command: Command) -> None:
    home = ctx.obj["home"]
    verbose = ctx.obj["verbose"]

    config = _load_or_exit(home, verbose)
    outcomes = run_command_on_all(command, config.repos, verbose=verbose)
    report(command, outcomes)


@cli.command()
@click.pass_context
def status(ctx: click.Context):
    """Show working tree changes and upstream tracking for every repository."""
    _run(ctx, "status")


@cli.command()
@click.pass_context
def pull(ctx: click.Context):
    """Pull every repository from its upstream."""
    _run(ctx, "pull")


@cli.command()
@click.pass_context
def push(ctx: click.Context):
    """Push every repository to its upstream."""
    _run(ctx, "push")


if __name__ == "__main__":
    cli()
