"""Whatdo CLI commands.

Commands for the whatdo lifecycle: adding, viewing, starting, finishing
and removing whatdos. Each command loads the tree through the service,
prints the outcome and exits with status 1 on error.
"""

from typing import Optional

import typer

from whatdo.config import get_config
from whatdo.domain.task import CURRENT, WhatdoStarted
from whatdo.interfaces.cli.common import (
    format_detail,
    format_view_line,
    format_whatdo,
    get_service,
    print_info,
    print_success,
    unwrap,
)

tag_option = typer.Option(None, "--tag", "-t", help="Only whatdos with this tag (repeatable)")
priority_option = typer.Option(
    None, "--priority", "-p", help="Only whatdos with this priority (repeatable)"
)


# =============================================================================
# Commands
# =============================================================================


def init(ctx: typer.Context) -> None:
    """Create a whatdo file with a short tutorial."""
    service = get_service(ctx)
    unwrap(service.init())
    print_success(f"Created {service.path}")
    typer.echo("Run 'wd next' to see what to do first.")


def add(
    ctx: typer.Context,
    whatdo_id: str = typer.Argument(..., metavar="ID", help="Id of the new whatdo"),
    summary: Optional[str] = typer.Option(None, "--summary", "-m", help="What to do"),
    tags: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    priority: Optional[int] = typer.Option(None, "--priority", "-p", help="Lower runs first"),
    parent: Optional[str] = typer.Option(
        None,
        "--parent",
        help=f"Parent whatdo id, or '{CURRENT}' for the active whatdo",
    ),
    branch: Optional[str] = typer.Option(None, "--branch", help="Branch name to use instead of the id"),
) -> None:
    """Add a new whatdo."""
    service = get_service(ctx)
    event = unwrap(service.add(whatdo_id, summary, tags, priority, parent, branch))
    print_success(f"Added {event.whatdo_id} under {event.parent_id}")


def show(
    ctx: typer.Context,
    whatdo_id: str = typer.Argument(..., metavar="ID"),
) -> None:
    """Show a whatdo."""
    whatdo = unwrap(get_service(ctx).get(whatdo_id))
    typer.echo(format_detail(whatdo))


def _print_started(event: WhatdoStarted) -> None:
    typer.echo(f"Starting {format_whatdo(event.whatdo)}")
    if event.created:
        print_info(f"Created branch {event.branch}")


def next_whatdos(
    ctx: typer.Context,
    amount: int = typer.Option(1, "--amount", "-n", min=1, help="How many to show"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show everything left to do"),
    tags: Optional[list[str]] = tag_option,
    priorities: Optional[list[int]] = priority_option,
    start: bool = typer.Option(False, "--start", help="Automatically start the first whatdo"),
) -> None:
    """Show the next whatdos in the queue."""
    service = get_service(ctx)
    limit = None if show_all else amount

    if start:
        event, found = unwrap(service.start_next(limit, tags or (), priorities or ()))
        if event is None:
            print_success("Nothing left to do!")
            return
        _print_started(event)
    else:
        found = unwrap(service.upcoming(limit, tags or (), priorities or ()))
        if not found:
            print_success("Nothing left to do!")
            return

    for whatdo in found:
        typer.echo(format_whatdo(whatdo))


def start(
    ctx: typer.Context,
    whatdo_id: str = typer.Argument(..., metavar="ID"),
    push: Optional[bool] = typer.Option(None, "--push/--no-push", help="Push the new branch"),
) -> None:
    """Start a whatdo by checking out its git branch."""
    _print_started(unwrap(get_service(ctx).start(whatdo_id, push)))


def finish(
    ctx: typer.Context,
    push: Optional[bool] = typer.Option(None, "--push/--no-push", help="Push the commit and merge"),
) -> None:
    """Finish the active whatdo: resolve it, commit, and merge its branch."""
    event = unwrap(get_service(ctx).finish(push))
    typer.echo(f"Finished {event.whatdo_id}: {event.summary}")
    print_info(f"Merged {event.branch} into {event.merged_into}")
    print_success("Congratulations!")


def delete(
    ctx: typer.Context,
    whatdo_id: str = typer.Argument(..., metavar="ID"),
) -> None:
    """Delete a whatdo and everything under it."""
    event = unwrap(get_service(ctx).delete(whatdo_id))
    typer.echo(f"Deleted {event.whatdo_id}: {event.summary}")


def resolve(
    ctx: typer.Context,
    whatdo_id: str = typer.Argument(..., metavar="ID"),
) -> None:
    """Mark a whatdo as done. That is, delete it and receive congratulations."""
    event = unwrap(get_service(ctx).resolve(whatdo_id))
    typer.echo(f"Deleted {event.whatdo_id}: {event.summary}")
    print_success("Well done!")


def status(
    ctx: typer.Context,
    tags: Optional[list[str]] = tag_option,
    priorities: Optional[list[int]] = priority_option,
    transitive: bool = typer.Option(
        True,
        "--transitive/--no-transitive",
        help="Also show whatdos under a matching whatdo",
    ),
) -> None:
    """Display the active whatdo, the whatdo tree and the next few to do."""
    report = unwrap(
        get_service(ctx).status(tags or [], priorities or [], transitive, get_config().next_amount)
    )

    if report.active is None:
        typer.echo("No active whatdo")
    else:
        typer.echo(f"Active: {format_whatdo(report.active)}")

    if report.lines:
        typer.echo("")
    for line in report.lines:
        typer.echo(format_view_line(line))

    if report.upcoming:
        typer.echo("")
        typer.echo(typer.style("Next:", bold=True))
        for whatdo in report.upcoming:
            typer.echo(f"  {format_whatdo(whatdo)}")
