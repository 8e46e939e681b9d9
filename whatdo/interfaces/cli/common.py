"""Shared utilities for whatdo CLI commands.

This module provides common utilities used across CLI commands:
- Locating the whatdo document and building the service
- Formatted output helpers (error, success, info)
- Whatdo and tree-view formatting for display
"""

from pathlib import Path
from typing import TypeVar

import typer

from whatdo.application import WhatdoService
from whatdo.config import get_config
from whatdo.domain.shared import Err, Result
from whatdo.domain.task import LineStyle, ViewLine, Whatdo
from whatdo.infrastructure.git import GitOperations

T = TypeVar("T")

INDENT = "  "


def get_service(ctx: typer.Context) -> WhatdoService:
    """Build the service for this invocation.

    Resolution order for the document:
    1. ``--file`` option (or WHATDO_FILE env var), given to the main callback
    2. ``<git repository root>/<config file_name>``

    Raises:
        typer.Exit: If not inside a git repository and no file was given.
    """
    config = get_config()
    file: Path | None = (ctx.obj or {}).get("file")

    if file is not None:
        path = file.resolve()
        git = GitOperations(path.parent, timeout=config.git_timeout)
        return WhatdoService(path, git, push=config.push)

    root = GitOperations(timeout=config.git_timeout).get_root()
    if isinstance(root, Err):
        print_error(root.error)
        typer.echo("Run wd inside a git repository, or pass --file.", err=True)
        raise typer.Exit(1)

    git = GitOperations(root.value, timeout=config.git_timeout)
    return WhatdoService(root.value / config.file_name, git, push=config.push)


def unwrap(result: Result[T, str]) -> T:
    """Return the value of an Ok result, or print the error and exit.

    Raises:
        typer.Exit: With status 1 if the result is an Err.
    """
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message.

    Args:
        msg: Success message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message.

    Args:
        msg: Info message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


# =============================================================================
# Whatdo Formatting
# =============================================================================


def format_whatdo(whatdo: Whatdo) -> str:
    """One-line display: id, priority, tags, then the summary."""
    parts = [typer.style(whatdo.id, fg=typer.colors.CYAN, bold=True)]
    if whatdo.priority is not None:
        parts.append(typer.style(f" (P{whatdo.priority})", fg=typer.colors.YELLOW))
    if whatdo.tags:
        parts.append(typer.style(f" [{', '.join(whatdo.tags)}]", fg=typer.colors.MAGENTA))
    parts.append(f": {whatdo.display_summary}")
    return "".join(parts)


def format_view_line(line: ViewLine) -> str:
    """Format one tree-view line, dimming context and transitive lines."""
    indent = INDENT * line.depth
    if line.style == LineStyle.FULL:
        return f"{indent}{format_whatdo(line.whatdo)}"
    return f"{indent}{typer.style(line.whatdo.id, dim=True)}"


def format_detail(whatdo: Whatdo) -> str:
    """Multi-line display of every field of a whatdo."""
    lines = [format_whatdo(whatdo).rstrip()]
    if whatdo.branch_name:
        lines.append(f"Branch: {whatdo.branch_name}")
    if whatdo.queue:
        lines.append(f"Queue: {', '.join(whatdo.queue)}")
    if whatdo.children:
        lines.append("Whatdos:")
        lines.extend(f"{INDENT}{format_whatdo(child)}" for child in whatdo.children)
    return "\n".join(lines)


__all__ = [
    "get_service",
    "unwrap",
    "print_error",
    "print_success",
    "print_info",
    "format_whatdo",
    "format_view_line",
    "format_detail",
]
