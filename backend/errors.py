"""Failure taxonomy for the audit pipeline.

Every error carries the HTTP status the request handler should answer with.
Only URL validation is the client's fault; everything else is a 500.
"""


class AuditError(Exception):
    """Base class for all audit pipeline failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AuditError):
    """Missing or malformed URL in the request."""

    status_code = 400


class FetchError(AuditError):
    """Target site unreachable, timed out, or did not return HTML."""


class ConfigError(AuditError):
    """No usable AI provider credential in the environment."""


class ProviderError(AuditError):
    """Completion call failed or returned empty content."""


class ParseError(AuditError):
    """Model output was not a JSON object after fence stripping."""

    def __init__(self, message: str, excerpt: str = "") -> None:
        super().__init__(message)
        self.excerpt = excerpt
