"""Entry point for the taskpie CLI.

Usage:
    python -m taskpie.interfaces.cli.main

Or via installed entry point:
    taskpie <command>
"""

from taskpie.interfaces.cli import app


def main() -> None:
    """Run the taskpie CLI application."""
    app()


if __name__ == "__main__":
    main()
