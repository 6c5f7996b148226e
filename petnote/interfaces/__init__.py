"""Interfaces layer for petnote.

Adapters for external interaction. Currently the command-line interface
built with Typer; it accepts input, calls application services and
formats their results.
"""

from petnote.interfaces.cli import app

__all__ = ["app"]
