"""
CLI package for gedcom_ancestry.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedcom_ancestry.cli.app import app, main

__all__ = [
    "app",
    "main",
]
