"""Core Pydantic data models for retriable."""

import re
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import AttemptOutcome


def check_patterns(patterns: Tuple[str, ...]) -> Tuple[str, ...]:
    """Raise ValueError for the first pattern that does not compile."""
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"invalid regular expression {pattern!r}: {e}")
    return patterns


class Invocation(BaseModel):
    """Command to execute, reused unchanged across attempts."""

    model_config = ConfigDict(frozen=True)

    program: str = Field(..., min_length=1, description="Executable name or path")
    arguments: Tuple[str, ...] = Field(
        default=(), description="Arguments passed to the executable"
    )

    @property
    def argv(self) -> Tuple[str, ...]:
        """Full argument vector, program first."""
        return (self.program, *self.arguments)

    def __str__(self) -> str:
        return " ".join(self.argv)


class RetryPolicy(BaseModel):
    """Attempt budget and constant delay between attempts."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(..., ge=1, description="Maximum number of attempts")
    sleep_interval: float = Field(
        ..., ge=0.0, description="Seconds to sleep between attempts"
    )
    sleep_text: str = Field(
        default="", description="Sleep duration as configured, for messages"
    )


class MatchRules(BaseModel):
    """Ordered expected-failure patterns searched in captured stdout."""

    model_config = ConfigDict(frozen=True)

    patterns: Tuple[str, ...] = Field(
        default=(), description="Regular expressions, first match wins"
    )

    @field_validator("patterns")
    @classmethod
    def _compile_patterns(cls, patterns: Tuple[str, ...]) -> Tuple[str, ...]:
        return check_patterns(patterns)

    def first_match(self, text: str) -> Optional[str]:
        """Return the first pattern found anywhere in text, or None."""
        for pattern in self.patterns:
            if re.search(pattern, text):
                return pattern
        return None


class AttemptResult(BaseModel):
    """Outcome of one execution of the command."""

    model_config = ConfigDict(frozen=True)

    exit_code: int = Field(..., description="Child exit code, -1 if it never started")
    stdout: bytes = Field(default=b"", description="Captured standard output")
    stderr: bytes = Field(default=b"", description="Captured standard error")
    outcome: AttemptOutcome = Field(..., description="Classification of the attempt")
    error: Optional[str] = Field(
        default=None, description="Launch failure message if the child never ran"
    )
    matched_pattern: Optional[str] = Field(
        default=None, description="Pattern that made the failure terminal"
    )
