"""CLI module for the ClaML code tools."""

from claml_codes.cli.main import app, main

__all__ = ["app", "main"]
