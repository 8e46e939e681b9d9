"""CLI interface for whatdo using Typer.

Usage:
    wd                      # Same as 'wd status'
    wd add fix-login -m "Fix the login form"
    wd next                 # What to do next
    wd start fix-login      # Checkout a branch for it
    wd finish               # Resolve, commit and merge

The CLI is structured as:
- app: Main Typer application
- commands/: Command implementations
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from whatdo import __version__
from whatdo.config import get_config
from whatdo.interfaces.cli.commands import task
from whatdo.logging_setup import setup_logging

app = typer.Typer(
    name="wd",
    help="A git-based tool for tracking what to do next",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"wd version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Whatdo file to use (default: WHATDO.yaml at the repository root)",
        envvar="WHATDO_FILE",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git commands and warnings"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """whatdo - track what to do next as a tree of whatdos in your repository.

    Each whatdo can be worked on in its own git branch; finishing it
    merges the branch back and removes the whatdo.
    """
    setup_logging(logging.DEBUG if verbose else get_config().log_level)
    ctx.obj = {"file": file}
    if ctx.invoked_subcommand is None:
        task.status(ctx, tags=None, priorities=None, transitive=True)


# =============================================================================
# Register Commands
# =============================================================================

app.command("init")(task.init)
app.command("add")(task.add)
app.command("show")(task.show)
app.command("next")(task.next_whatdos)
app.command("start")(task.start)
app.command("finish")(task.finish)
app.command("delete")(task.delete)
app.command("rm", help="Alias for 'delete'")(task.delete)
app.command("resolve")(task.resolve)
app.command("status")(task.status)
app.command("ls", help="Alias for 'status'")(task.status)
