"""Run one attempt of a command and classify its result."""

import asyncio
import logging
from typing import Optional, Tuple

import click

from retriable.core.models import AttemptResult, Invocation, MatchRules
from retriable.core.types import AttemptOutcome

logger = logging.getLogger(__name__)

# Exit code whose output is checked against the expected-failure patterns
MATCHABLE_EXIT_CODE = 1

# Exit code recorded when the child could not be started
LAUNCH_FAILURE_EXIT_CODE = -1


def decode_output(data: bytes) -> str:
    """Decode captured output, replacing undecodable bytes."""
    return data.decode("utf-8", errors="replace")


def classify_exit(
    exit_code: int, output: str, match_rules: MatchRules
) -> Tuple[AttemptOutcome, Optional[str]]:
    """Classify an attempt from its exit code and captured stdout.

    Only exit code 1 is checked against the patterns. Every other non-zero
    code is retryable whatever the output says.

    Args:
        exit_code: Exit code of the child process
        output: Decoded standard output
        match_rules: Ordered expected-failure patterns

    Returns:
        Tuple of (outcome, matched pattern or None)
    """
    if exit_code == 0:
        return AttemptOutcome.SUCCESS, None

    if exit_code == MATCHABLE_EXIT_CODE:
        pattern = match_rules.first_match(output)
        if pattern is not None:
            return AttemptOutcome.TERMINAL_FAILURE, pattern

    return AttemptOutcome.RETRYABLE_FAILURE, None


class CommandRunner:
    """Execute a command once, buffering its output in memory."""

    def __init__(self, echo_output: bool = True):
        """Initialize command runner.

        Args:
            echo_output: Print each attempt's captured stdout
        """
        self.echo_output = echo_output

    async def run(self, invocation: Invocation, match_rules: MatchRules) -> AttemptResult:
        """Execute one attempt.

        Never raises for a failing child: a non-zero exit and a launch
        failure are both reported through the returned AttemptResult.

        Args:
            invocation: Command to execute
            match_rules: Expected-failure patterns

        Returns:
            AttemptResult with captured output and classification
        """
        logger.info(f"Launching command: {invocation}")

        try:
            process = await asyncio.create_subprocess_exec(
                invocation.program,
                *invocation.arguments,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            logger.warning(f"Failed to launch {invocation.program!r}: {e}")
            if self.echo_output:
                self._print_output(b"")
            return AttemptResult(
                exit_code=LAUNCH_FAILURE_EXIT_CODE,
                outcome=AttemptOutcome.RETRYABLE_FAILURE,
                error=str(e),
            )

        exit_code = process.returncode
        outcome, pattern = classify_exit(
            exit_code, decode_output(stdout), match_rules
        )
        result = AttemptResult(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            outcome=outcome,
            matched_pattern=pattern,
        )

        if self.echo_output:
            self._print_output(result.stdout)

        if pattern is not None:
            logger.info(f"Exit code {exit_code} with output matching {pattern!r}, not retrying")
        else:
            logger.info(f"Exit code {exit_code}: {outcome.value}")
        if stderr:
            logger.debug(f"stderr: {decode_output(stderr)}")

        return result

    @staticmethod
    def _print_output(output: bytes) -> None:
        # Always one line at least, even for empty output
        click.echo(output, nl=False)
        if not output.endswith(b"\n"):
            click.echo()
