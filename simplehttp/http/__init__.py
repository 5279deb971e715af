"""
HTTP Module

Shared client handle, callback interface and the request facade.
"""

from .callbacks import CustomCallback, FunctionCallback, NoOpCallback
from .client import SharedClient, get_shared_client, set_shared_client
from .facade import (
    GET,
    POST,
    RequestFacade,
    get_async,
    get_sync,
    post_async,
    post_sync,
)

__all__ = [
    "CustomCallback",
    "FunctionCallback",
    "GET",
    "NoOpCallback",
    "POST",
    "RequestFacade",
    "SharedClient",
    "get_async",
    "get_shared_client",
    "get_sync",
    "post_async",
    "post_sync",
    "set_shared_client",
]
