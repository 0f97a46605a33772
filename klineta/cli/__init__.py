"""CLI commands for klineta.

This package provides the command-line interface for importing
candles and running technical analysis over them.
"""

from klineta.cli.main import cli, main

__all__ = ["cli", "main"]
