"""Single-attempt command execution."""

from .command_runner import CommandRunner, classify_exit, decode_output

__all__ = ["CommandRunner", "classify_exit", "decode_output"]
