"""
Error Taxonomy

Standard errors raised by the request facade.
Defines both Pydantic models for structured error communication
(CLI JSON output, logs) and Python exceptions for control flow.
"""

from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .headers import HeaderMap


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Request construction
    REQUEST_BUILD_ERROR = "REQUEST_BUILD_ERROR"
    UNSUPPORTED_METHOD = "UNSUPPORTED_METHOD"

    # Transport
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    CONNECTION_FAILED = "CONNECTION_FAILED"
    TIMEOUT = "TIMEOUT"
    BODY_READ_ERROR = "BODY_READ_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class SimpleHttpError(BaseModel):
    """
    Error model for structured error communication.

    Used by the CLI for ``--json`` output and anywhere an error needs to be
    serialized instead of raised.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.TRANSPORT_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "SimpleHttpException":
        """Convert this error model to a raisable exception."""
        return SimpleHttpException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SimpleHttpException(Exception):
    """
    Base exception for all simplehttp errors.

    Carries structured error information and can be converted to a
    SimpleHttpError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "SIMPLEHTTP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> SimpleHttpError:
        """Convert this exception to a SimpleHttpError model."""
        return SimpleHttpError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class RequestBuildError(SimpleHttpException):
    """Raised when call parameters cannot be turned into a request."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.REQUEST_BUILD_ERROR,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=False,
        )


class UnsupportedMethodError(RequestBuildError):
    """Raised when a method other than GET or POST is requested."""

    def __init__(self, method: str) -> None:
        super().__init__(
            message=f"Unsupported HTTP method: {method!r}",
            details={"method": method},
            code=ErrorCodes.UNSUPPORTED_METHOD,
        )
        self.method = method


class TransportError(SimpleHttpException):
    """
    Raised when the underlying engine fails to complete an exchange.

    Covers connection refused, DNS failure, timeout and stream interruption.
    The failed request (method, url, headers, body) is attached for
    diagnostics; the engine's exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        url: str = "",
        headers: Optional["HeaderMap"] = None,
        body: Optional[bytes] = None,
        code: str = ErrorCodes.TRANSPORT_ERROR,
        retryable: bool = True,
    ) -> None:
        details: dict[str, Any] = {"method": method, "url": url}
        if headers is not None:
            details["headers"] = headers.to_dict()
        if body is not None:
            details["body_length"] = len(body)
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=retryable,
        )
        self.method = method
        self.url = url
        self.headers = headers
        self.body = body


class BodyReadError(TransportError):
    """Raised when the response body cannot be fully drained."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("code", ErrorCodes.BODY_READ_ERROR)
        super().__init__(message, **kwargs)
