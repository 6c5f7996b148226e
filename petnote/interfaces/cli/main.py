"""Entry point for the petnote CLI.

Usage:
    python -m petnote.interfaces.cli.main

Or via installed entry point:
    petnote <command>
"""

from petnote.interfaces.cli import app


def main() -> None:
    """Run the petnote CLI application."""
    app()


if __name__ == "__main__":
    main()
