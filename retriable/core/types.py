"""Core type definitions and enums for retriable."""

from enum import Enum


class AttemptOutcome(str, Enum):
    """Classification of a single command attempt."""

    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    TERMINAL_FAILURE = "terminal_failure"  # Output matched an expected-failure pattern


class EngineState(str, Enum):
    """Retry engine states."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    EXHAUSTED_RETRIES = "exhausted_retries"
    MATCHED_TERMINAL = "matched_terminal"


class RunOutcome(str, Enum):
    """Overall result of a retried invocation."""

    SUCCESS = "success"
    FAILURE = "failure"
