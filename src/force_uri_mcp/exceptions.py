"""Custom exceptions for the REST URI formatter."""


class ForceUriError(Exception):
    """Base exception for URI formatting failures."""


class InvalidArgumentError(ForceUriError, ValueError):
    """Raised when a required argument is missing, empty or not a valid URI."""

    def __init__(self, param_name: str, message: str | None = None) -> None:
        self.param_name = param_name
        super().__init__(message or f"{param_name} must be a non-empty value")


class ConfigurationError(ForceUriError):
    """Raised when configuration is invalid or incomplete."""
