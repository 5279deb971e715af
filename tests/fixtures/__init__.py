"""
Test fixtures package for simplehttp tests.

- transport.py: FakeAdapter, an in-memory requests transport
- server.py: LocalServer, a threaded localhost HTTP server

Usage:
    from fixtures import FakeAdapter

    def test_something(client, fake_adapter):
        ...
"""

from .server import LocalServer, unused_port
from .transport import BrokenBody, FakeAdapter, build_response

__all__ = [
    "BrokenBody",
    "FakeAdapter",
    "LocalServer",
    "build_response",
    "unused_port",
]
