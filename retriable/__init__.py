"""Retriable - Re-run failing commands with a fixed delay and expected-failure patterns."""

from .core import (
    # Types
    AttemptOutcome,
    # Models
    AttemptResult,
    # Exceptions
    CommandParseError,
    ConfigurationError,
    EngineState,
    Invocation,
    MatchRules,
    RetriableError,
    # Config
    RetryConfig,
    RetryPolicy,
    RunOutcome,
    RuntimeSettings,
    ValidationError,
    configure_logging,
    parse_duration,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Types
    "AttemptOutcome",
    "EngineState",
    "RunOutcome",
    # Exceptions
    "RetriableError",
    "ConfigurationError",
    "ValidationError",
    "CommandParseError",
    # Models
    "Invocation",
    "RetryPolicy",
    "MatchRules",
    "AttemptResult",
    # Config
    "RetryConfig",
    "RuntimeSettings",
    "configure_logging",
    "parse_duration",
]
