"""Retry engine with a constant delay between attempts."""

import asyncio
import logging
from typing import Optional

from rich.console import Console

from retriable.core.models import AttemptResult, Invocation, MatchRules, RetryPolicy
from retriable.core.types import AttemptOutcome, EngineState, RunOutcome
from retriable.runner.command_runner import CommandRunner

logger = logging.getLogger(__name__)


class RetryEngine:
    """Re-run a command until it succeeds, fails terminally or runs out of attempts.

    Example:
        ```python
        engine = RetryEngine()
        outcome = await engine.execute(
            Invocation(program="make", arguments=("test",)),
            RetryPolicy(max_attempts=3, sleep_interval=5.0, sleep_text="5s"),
            MatchRules(patterns=("No rule to make target",)),
        )
        ```
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
    ):
        """Initialize retry engine.

        Args:
            runner: Executes single attempts, or use defaults
            console: Destination for progress messages
        """
        self.runner = runner or CommandRunner()
        self.console = console or Console(soft_wrap=True, highlight=False)
        self.state = EngineState.RUNNING
        self.attempts = 0
        self.last_result: Optional[AttemptResult] = None

    async def execute(
        self, invocation: Invocation, policy: RetryPolicy, match_rules: MatchRules
    ) -> RunOutcome:
        """Execute the command under the retry policy.

        The sleep is skipped after the last attempt, since no retry follows it.

        Args:
            invocation: Command to execute on every attempt
            policy: Attempt budget and sleep interval
            match_rules: Expected-failure patterns that stop retries

        Returns:
            RunOutcome.SUCCESS if an attempt succeeded, RunOutcome.FAILURE otherwise
        """
        self.state = EngineState.RUNNING
        self.attempts = 0
        self.last_result = None
        sleep_text = policy.sleep_text or f"{policy.sleep_interval}s"

        while self.attempts < policy.max_attempts:
            result = await self.runner.run(invocation, match_rules)
            self.attempts += 1
            self.last_result = result

            if result.outcome == AttemptOutcome.SUCCESS:
                self.state = EngineState.SUCCEEDED
                break

            if result.outcome == AttemptOutcome.TERMINAL_FAILURE:
                logger.info(
                    f"Attempt {self.attempts} matched {result.matched_pattern!r}, "
                    f"stopping without retry"
                )
                self.state = EngineState.MATCHED_TERMINAL
                break

            # Final attempt: report and stop, there is nothing to sleep before
            if self.attempts >= policy.max_attempts:
                self.console.print(
                    f"Attempt {self.attempts}/{policy.max_attempts} failed."
                )
                break

            self.console.print(
                f"Encountered an error eligible for retrying. "
                f"Attempt {self.attempts}/{policy.max_attempts} failed. "
                f"Sleeping {sleep_text} before retrying."
            )
            await asyncio.sleep(policy.sleep_interval)

        if self.state == EngineState.RUNNING:
            self.state = EngineState.EXHAUSTED_RETRIES
            logger.warning(f"Retries exhausted after {self.attempts} attempts")

        if self.state == EngineState.SUCCEEDED:
            return RunOutcome.SUCCESS
        return RunOutcome.FAILURE
