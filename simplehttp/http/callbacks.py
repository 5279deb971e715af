"""
Callback Interface

Result handler for asynchronous calls. Exactly one of the two methods is
invoked per call, on a worker thread.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from simplehttp.schemas.headers import HeaderMap
from simplehttp.schemas.response import SimpleResponse


ResponseHandler = Callable[[str, str, HeaderMap, Optional[bytes], SimpleResponse], None]
ExceptionHandler = Callable[[str, str, HeaderMap, Optional[bytes], Exception], None]


class CustomCallback(ABC):
    """
    Receives the outcome of an asynchronous request.

    ``headers`` and ``request_body`` describe what was actually sent,
    including headers the engine added. ``request_body`` is None for GET
    requests and whenever the body could not be replayed.

    Implementations run on worker threads and must be thread-safe.
    """

    @abstractmethod
    def on_response(
        self,
        url: str,
        method: str,
        headers: HeaderMap,
        request_body: Optional[bytes],
        response: SimpleResponse,
    ) -> None:
        """Handle a completed exchange."""

    @abstractmethod
    def on_exception(
        self,
        url: str,
        method: str,
        headers: HeaderMap,
        request_body: Optional[bytes],
        error: Exception,
    ) -> None:
        """Handle a failed exchange."""


class NoOpCallback(CustomCallback):
    """Discards both outcomes."""

    def on_response(self, url, method, headers, request_body, response) -> None:
        pass

    def on_exception(self, url, method, headers, request_body, error) -> None:
        pass


class FunctionCallback(CustomCallback):
    """Adapts two plain callables to the callback interface; either may be omitted."""

    def __init__(
        self,
        on_response: Optional[ResponseHandler] = None,
        on_exception: Optional[ExceptionHandler] = None,
    ) -> None:
        self._on_response = on_response
        self._on_exception = on_exception

    def on_response(self, url, method, headers, request_body, response) -> None:
        if self._on_response is not None:
            self._on_response(url, method, headers, request_body, response)

    def on_exception(self, url, method, headers, request_body, error) -> None:
        if self._on_exception is not None:
            self._on_exception(url, method, headers, request_body, error)
