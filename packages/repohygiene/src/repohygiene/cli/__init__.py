"""Command-line entry point for repository hygiene runs."""

from .main import build_parser, main

__all__ = ["build_parser", "main"]
