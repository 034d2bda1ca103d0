"""Core infrastructure for retriable."""

from .config import (
    RetryConfig,
    RuntimeSettings,
    configure_logging,
    parse_duration,
)
from .exceptions import (
    CommandParseError,
    ConfigurationError,
    RetriableError,
    ValidationError,
)
from .models import AttemptResult, Invocation, MatchRules, RetryPolicy
from .types import AttemptOutcome, EngineState, RunOutcome

__all__ = [
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
