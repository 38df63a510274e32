"""Exceptions raised while running a remote call through the pipeline.

Service-reported errors are NOT exceptions at this layer: they come back as
ordinary ``{"Error": ...}`` data. These classes cover the failures that make
a call unusable.
"""

from __future__ import annotations


class CoralError(Exception):
    """Base exception for client errors.

    Args:
        message: Human-readable error description
        cause: Original exception that caused this error

    Attributes:
        message: Error message
        cause: Original exception (or None)
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize CoralError.

        Args:
            message: Human-readable error description
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.cause = cause


class TransportError(CoralError):
    """The service could not be reached or answered with a failing status.

    Raised when the response body cannot be parsed and the HTTP status is not
    200, or when the HTTP handler fails to get any response at all (in which
    case ``status_code`` is None).

    Args:
        message: Human-readable error description
        status_code: HTTP status code if a response was received
        status_message: HTTP reason phrase if a response was received
        cause: Original exception that caused this error

    Attributes:
        status_code: HTTP status code (or None)
        status_message: HTTP reason phrase (or None)
    """

    def __init__(
        self,
        message: str,
        status_code: int | str | None = None,
        status_message: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.status_message = status_message

    def __str__(self) -> str:
        """Return string representation of error.

        Returns:
            Formatted error message with status code if present
        """
        if self.status_code is not None:
            return f"{self.message} (status: {self.status_code})"
        return self.message


class DecodeError(CoralError):
    """The response could not be turned into a result.

    Raised on a 200 response whose body is not valid JSON, or whose JSON does
    not have the expected ``{Operation}Response.{Operation}Result`` envelope.

    Attributes:
        detail: Description of the parse or shape failure
    """

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class OrchestrationError(CoralError):
    """The pipeline is misconfigured and cannot run a call."""

    pass
