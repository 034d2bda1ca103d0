"""Custom exceptions for retriable."""


class RetriableError(Exception):
    """Base exception for all retriable errors."""

    pass


class ConfigurationError(RetriableError):
    """Raised when the configuration file cannot be read."""

    pass


class ValidationError(RetriableError):
    """Raised when configuration values are invalid."""

    pass


class CommandParseError(RetriableError):
    """Raised when no command to execute was supplied."""

    pass
