"""Entry point for the whatdo CLI.

Usage:
    python -m whatdo.interfaces.cli.main

Or via installed entry point:
    wd <command>
"""

from whatdo.interfaces.cli import app


def main() -> None:
    """Run the whatdo CLI application."""
    app()


if __name__ == "__main__":
    main()
