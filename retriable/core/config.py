"""Configuration management for retriable."""

import logging
import os
import re
import sys
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import MatchRules, RetryPolicy, check_patterns

# Seconds per unit, same unit set as Go's time.ParseDuration
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration string such as "5s", "1ms" or "1h30m".

    Args:
        value: Sequence of decimal numbers, each followed by a unit
            (ns, us, ms, s, m, h). A bare "0" is also accepted.

    Returns:
        Duration in seconds

    Raises:
        ValueError: If the string is empty, malformed or negative

    Example:
        >>> parse_duration("1m30s")
        90.0
    """
    text = value.strip()
    if text == "0":
        return 0.0
    if text.startswith("-"):
        raise ValueError(f"duration must not be negative: {value!r}")
    if text.startswith("+"):
        text = text[1:]
    if not text:
        raise ValueError(f"invalid duration: {value!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration: {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return total


class RetryConfig(BaseModel):
    """Resolved configuration for one retried invocation.

    Built once from defaults, config file, flags and environment, then handed
    to the retry engine as a policy and a set of match rules.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    retries: int = Field(default=9, ge=1, description="Maximum number of attempts")
    sleep: str = Field(default="5s", description="Delay between attempts")
    regex: Tuple[str, ...] = Field(
        default=(), description="Expected-failure patterns matched against stdout"
    )
    # Reserved for a future back-off strategy, not used by the engine
    min_delay: str = Field(default="10s", alias="min", description="Minimum delay")
    max_delay: str = Field(default="10s", alias="max", description="Maximum delay")

    @field_validator("sleep", "min_delay", "max_delay", mode="before")
    @classmethod
    def _stringify_duration(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("sleep")
    @classmethod
    def _check_sleep(cls, value: str) -> str:
        parse_duration(value)
        return value

    @field_validator("regex", mode="before")
    @classmethod
    def _coerce_regex(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("regex")
    @classmethod
    def _check_regex(cls, patterns: Tuple[str, ...]) -> Tuple[str, ...]:
        return check_patterns(patterns)

    @property
    def sleep_interval(self) -> float:
        """Sleep between attempts in seconds."""
        return parse_duration(self.sleep)

    @property
    def min_interval(self) -> float:
        return parse_duration(self.min_delay)

    @property
    def max_interval(self) -> float:
        return parse_duration(self.max_delay)

    def to_policy(self) -> RetryPolicy:
        """Build the retry policy consumed by the engine."""
        return RetryPolicy(
            max_attempts=self.retries,
            sleep_interval=self.sleep_interval,
            sleep_text=self.sleep,
        )

    def to_match_rules(self) -> MatchRules:
        """Build the ordered expected-failure patterns."""
        return MatchRules(patterns=self.regex)


class RuntimeSettings(BaseModel):
    """Process-level settings read from the environment."""

    log_level: str = Field(
        default_factory=lambda: os.getenv("RETRIABLE_LOG_LEVEL", "WARNING")
    )
    log_format: str = Field(
        default_factory=lambda: os.getenv(
            "RETRIABLE_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


def configure_logging(settings: RuntimeSettings) -> None:
    """Send log records to stderr so stdout only carries command output."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=settings.log_format, stream=sys.stderr)
