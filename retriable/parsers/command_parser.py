"""Turn trailing CLI arguments into an Invocation."""

from typing import Sequence

from retriable.core.exceptions import CommandParseError
from retriable.core.models import Invocation


def parse_command(args: Sequence[str]) -> Invocation:
    """Build the command to retry from positional arguments.

    A single argument is treated as a whole command line and split on
    whitespace; several arguments are taken as already tokenized.

    Args:
        args: Positional arguments following the CLI options

    Returns:
        Invocation with the program name and its arguments

    Raises:
        CommandParseError: If no command was supplied

    Example:
        >>> parse_command(["ls -la /tmp"]).arguments
        ('-la', '/tmp')
    """
    if len(args) == 1:
        tokens = args[0].split()
    else:
        tokens = list(args)

    if not tokens or not tokens[0].strip():
        raise CommandParseError("Please provide a command to execute.")

    return Invocation(program=tokens[0], arguments=tuple(tokens[1:]))
