"""
Simple Response

Minimal immutable DTO returned in place of the engine's native response.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class SimpleResponse:
    """
    Status code plus the fully drained response body.
    """
    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    def body_as_bytes(self) -> bytes:
        return self.body

    def body_as_string(self, encoding: Optional[str] = None) -> str:
        """Decode the body, using UTF-8 unless ``encoding`` is given."""
        return self.body.decode(encoding or DEFAULT_ENCODING)

    def json(self) -> Any:
        """Parse response as JSON."""
        return json.loads(self.body)
