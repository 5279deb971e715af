"""
Request Facade

Simplified GET/POST helpers on top of the shared client, each in a
blocking and a callback-based form.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import requests

from simplehttp.schemas.errors import (
    BodyReadError,
    ErrorCodes,
    RequestBuildError,
    TransportError,
)
from simplehttp.schemas.headers import HeaderInput, HeaderMap
from simplehttp.schemas.request import Method, RequestDescriptor
from simplehttp.schemas.response import SimpleResponse

from .callbacks import CustomCallback, NoOpCallback
from .client import SharedClient, get_shared_client

logger = logging.getLogger(__name__)

GET = Method.GET.value
POST = Method.POST.value

# Errors requests raises while preparing, i.e. before anything is sent
_BUILD_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
)


def outbound_headers(prepared: requests.PreparedRequest) -> HeaderMap:
    """Rebuild the multi-valued header map from a prepared request, one value per wire line."""
    sent = HeaderMap()
    for name, value in prepared.headers.items():
        sent.add(name, value)
    return sent


def replay_body(prepared: requests.PreparedRequest) -> Optional[bytes]:
    """Return the body bytes that were sent, or None if they cannot be replayed."""
    body = prepared.body
    if body is None or isinstance(body, bytes):
        return body
    if isinstance(body, str):
        try:
            return body.encode("utf-8")
        except UnicodeEncodeError:
            logger.debug("Request body could not be re-encoded; reporting no body")
            return None
    # Streams and generators are consumed by sending
    logger.debug(f"Request body of type {type(body).__name__} is not replayable")
    return None


def _transport_error(exc: Exception, descriptor: RequestDescriptor) -> TransportError:
    if isinstance(exc, requests.Timeout):
        code = ErrorCodes.TIMEOUT
    elif isinstance(exc, requests.ConnectionError):
        code = ErrorCodes.CONNECTION_FAILED
    else:
        code = ErrorCodes.TRANSPORT_ERROR
    return TransportError(
        f"{descriptor.method.value} {descriptor.url} failed: {exc}",
        method=descriptor.method.value,
        url=descriptor.url,
        headers=descriptor.headers,
        body=descriptor.body,
        code=code,
    )


def to_simple_response(response: requests.Response, descriptor: RequestDescriptor) -> SimpleResponse:
    """Copy the status code and drain the body into memory."""
    try:
        body = response.content
    except (requests.RequestException, OSError) as e:
        raise BodyReadError(
            f"{descriptor.method.value} {descriptor.url}: body read failed: {e}",
            method=descriptor.method.value,
            url=descriptor.url,
            headers=descriptor.headers,
            body=descriptor.body,
        ) from e
    finally:
        response.close()
    return SimpleResponse(status_code=response.status_code, body=body or b"")


class RequestFacade:
    """
    GET/POST helpers bound to one shared client.

    Usage:
        facade = RequestFacade(SharedClient())

        response = facade.get_sync("https://example.com/")
        facade.post_async("https://example.com/api", b"{}", callback=handler)

    Without an explicit client the process-wide one is used.
    """

    GET = GET
    POST = POST

    def __init__(self, client: Optional[SharedClient] = None) -> None:
        self._client = client

    @property
    def client(self) -> SharedClient:
        return self._client if self._client is not None else get_shared_client()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _prepare(
        self,
        url: str,
        method: Union[str, Method],
        headers: HeaderInput,
        body: Optional[bytes],
    ) -> tuple[RequestDescriptor, requests.PreparedRequest]:
        descriptor = RequestDescriptor.build(url, method, headers, body)
        try:
            prepared = self.client.prepare(descriptor)
        except _BUILD_ERRORS as e:
            raise RequestBuildError(str(e), details={"url": url}) from e
        return descriptor, prepared

    def _execute(
        self,
        descriptor: RequestDescriptor,
        prepared: requests.PreparedRequest,
    ) -> SimpleResponse:
        logger.debug(f"{prepared.method} {prepared.url}")
        try:
            response = self.client.send(prepared)
        except requests.RequestException as e:
            error = _transport_error(e, descriptor)
            logger.warning(str(error))
            raise error from e
        return to_simple_response(response, descriptor)

    def _complete(
        self,
        descriptor: RequestDescriptor,
        prepared: requests.PreparedRequest,
        callback: CustomCallback,
    ) -> None:
        """Worker-thread body of an asynchronous call."""
        url = prepared.url
        method = prepared.method
        sent_headers = outbound_headers(prepared)
        sent_body = replay_body(prepared)

        try:
            response = self._execute(descriptor, prepared)
        except Exception as e:
            try:
                callback.on_exception(url, method, sent_headers, sent_body, e)
            except Exception:
                logger.exception(f"on_exception handler failed for {method} {url}")
            return

        try:
            callback.on_response(url, method, sent_headers, sent_body, response)
        except Exception:
            logger.exception(f"on_response handler failed for {method} {url}")

    def request_sync(
        self,
        url: str,
        method: Union[str, Method],
        headers: HeaderInput = None,
        body: Optional[bytes] = None,
    ) -> SimpleResponse:
        """
        Make a blocking request.

        Args:
            url: Request URL
            method: "GET" or "POST"
            headers: Header map (name -> value or list of values)
            body: Request body; ignored for GET

        Returns:
            SimpleResponse with status code and full body

        Raises:
            RequestBuildError: parameters cannot form a request
            TransportError: the exchange failed
        """
        descriptor, prepared = self._prepare(url, method, headers, body)
        return self._execute(descriptor, prepared)

    def request_async(
        self,
        url: str,
        method: Union[str, Method],
        headers: HeaderInput = None,
        body: Optional[bytes] = None,
        callback: Optional[CustomCallback] = None,
    ) -> None:
        """
        Enqueue a request on the worker pool and return immediately.

        The outcome is delivered to ``callback`` on a worker thread; without a
        callback it is discarded. Parameter errors raise RequestBuildError
        here, before anything is enqueued.
        """
        descriptor, prepared = self._prepare(url, method, headers, body)
        self.client.submit(self._complete, descriptor, prepared, callback or NoOpCallback())

    # ------------------------------------------------------------------
    # GET
    # ------------------------------------------------------------------

    def get_sync(self, url: str, headers: HeaderInput = None) -> SimpleResponse:
        """Make a blocking GET request."""
        return self.request_sync(url, GET, headers)

    def get_async(
        self,
        url: str,
        headers: HeaderInput = None,
        callback: Optional[CustomCallback] = None,
    ) -> None:
        """Make a GET request on the worker pool."""
        self.request_async(url, GET, headers, callback=callback)

    # ------------------------------------------------------------------
    # POST
    # ------------------------------------------------------------------

    def post_sync(self, url: str, body: bytes, headers: HeaderInput = None) -> SimpleResponse:
        """Make a blocking POST request; ``body`` is sent verbatim."""
        return self.request_sync(url, POST, headers, body)

    def post_async(
        self,
        url: str,
        body: bytes,
        headers: HeaderInput = None,
        callback: Optional[CustomCallback] = None,
    ) -> None:
        """Make a POST request on the worker pool."""
        self.request_async(url, POST, headers, body, callback)


# Facade bound to the process-wide client
_default_facade = RequestFacade()


def get_sync(url: str, headers: HeaderInput = None) -> SimpleResponse:
    return _default_facade.get_sync(url, headers)


def get_async(
    url: str,
    headers: HeaderInput = None,
    callback: Optional[CustomCallback] = None,
) -> None:
    _default_facade.get_async(url, headers, callback)


def post_sync(url: str, body: bytes, headers: HeaderInput = None) -> SimpleResponse:
    return _default_facade.post_sync(url, body, headers)


def post_async(
    url: str,
    body: bytes,
    headers: HeaderInput = None,
    callback: Optional[CustomCallback] = None,
) -> None:
    _default_facade.post_async(url, body, headers, callback)
