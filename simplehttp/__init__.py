"""
simplehttp

Simplified synchronous and asynchronous GET/POST helpers over requests.

Usage:
    from simplehttp import get_sync, post_async

    response = get_sync("https://example.com/")
    print(response.status_code, response.body_as_string())
"""

from simplehttp.config import ClientConfig
from simplehttp.http import (
    GET,
    POST,
    CustomCallback,
    FunctionCallback,
    NoOpCallback,
    RequestFacade,
    SharedClient,
    get_async,
    get_shared_client,
    get_sync,
    post_async,
    post_sync,
    set_shared_client,
)
from simplehttp.schemas import (
    BodyReadError,
    HeaderMap,
    RequestBuildError,
    SimpleHttpException,
    SimpleResponse,
    TransportError,
    UnsupportedMethodError,
)

__version__ = "0.1.0"

__all__ = [
    "BodyReadError",
    "ClientConfig",
    "CustomCallback",
    "FunctionCallback",
    "GET",
    "HeaderMap",
    "NoOpCallback",
    "POST",
    "RequestBuildError",
    "RequestFacade",
    "SharedClient",
    "SimpleHttpException",
    "SimpleResponse",
    "TransportError",
    "UnsupportedMethodError",
    "get_async",
    "get_shared_client",
    "get_sync",
    "post_async",
    "post_sync",
    "set_shared_client",
]
