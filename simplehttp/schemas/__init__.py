"""
Schemas Module

Data shapes exchanged with callers: header maps, responses, request
descriptors and the error taxonomy.
"""

from .errors import (
    BodyReadError,
    ErrorCodes,
    RequestBuildError,
    SimpleHttpError,
    SimpleHttpException,
    TransportError,
    UnsupportedMethodError,
)
from .headers import HeaderMap
from .request import Method, RequestDescriptor
from .response import SimpleResponse

__all__ = [
    "BodyReadError",
    "ErrorCodes",
    "HeaderMap",
    "Method",
    "RequestBuildError",
    "RequestDescriptor",
    "SimpleHttpError",
    "SimpleHttpException",
    "SimpleResponse",
    "TransportError",
    "UnsupportedMethodError",
]
