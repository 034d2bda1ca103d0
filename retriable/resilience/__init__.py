"""Retry loop for re-executing failing commands."""

from .retry import RetryEngine

__all__ = ["RetryEngine"]
