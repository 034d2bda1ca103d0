"""Command-line interface for retriable."""

from .main import cli

__all__ = ["cli"]
