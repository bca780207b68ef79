"""Entry point for the cadence CLI.

Usage:
    python -m cadence.interfaces.cli.main

Or via installed entry point:
    cadence <command>
"""

from cadence.interfaces.cli import app


def main() -> None:
    """Run the cadence CLI application."""
    app()


if __name__ == "__main__":
    main()
