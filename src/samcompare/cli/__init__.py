"""Command line interface for samcompare."""

from samcompare.cli.main import cli, main

__all__ = ["cli", "main"]
