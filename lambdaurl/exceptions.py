"""Exceptions raised by lambdaurl."""

from typing import Optional


class LambdaURLError(Exception):
    """Base class for all lambdaurl errors."""

    pass


class RequestParseError(LambdaURLError, ValueError):
    """Raised when the inbound request path is not a well-formed URL.

    The invocation is aborted before the handler runs.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(LambdaURLError):
    """Raised when configuration validation fails."""

    pass
