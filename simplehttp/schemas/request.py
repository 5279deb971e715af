"""
Request Descriptor

Transient description of one outbound call. Built per call by the facade
and handed to the shared client; never retained.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .errors import RequestBuildError, UnsupportedMethodError
from .headers import HeaderInput, HeaderMap


class Method(str, Enum):
    """HTTP methods supported by the facade."""
    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, method: Union[str, "Method"]) -> "Method":
        """Validate ``method``; raises UnsupportedMethodError for anything else."""
        if isinstance(method, Method):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise UnsupportedMethodError(str(method)) from None


@dataclass(frozen=True)
class RequestDescriptor:
    """
    One outbound request.

    GET descriptors never carry a body; POST descriptors always do
    (possibly zero-length).
    """
    url: str
    method: Method
    headers: HeaderMap = field(default_factory=HeaderMap)
    body: Optional[bytes] = None

    @classmethod
    def build(
        cls,
        url: str,
        method: Union[str, Method],
        headers: HeaderInput = None,
        body: Optional[bytes] = None,
    ) -> "RequestDescriptor":
        """Validate call parameters and assemble a descriptor."""
        method = Method.parse(method)
        if not isinstance(url, str) or not url:
            raise RequestBuildError("URL must be a non-empty string", details={"url": url})
        header_map = HeaderMap(headers)

        if method is Method.GET:
            body = None
        else:
            if body is None:
                body = b""
            elif isinstance(body, (bytearray, memoryview)):
                body = bytes(body)
            elif not isinstance(body, bytes):
                raise RequestBuildError(
                    f"POST body must be bytes, got {type(body).__name__}",
                    details={"body_type": type(body).__name__},
                )
        return cls(url=url, method=method, headers=header_map, body=body)
