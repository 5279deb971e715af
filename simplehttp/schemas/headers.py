"""
Header Map

Multi-valued, case-insensitive header mapping. Values for a name are kept
in insertion order and replayed in that order when outbound headers are
built.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator, Optional, Sequence, Union

from .errors import RequestBuildError


HeaderValues = Union[str, Sequence[str]]
HeaderInput = Optional[Union["HeaderMap", Mapping[str, HeaderValues]]]

# Separator used when several values of one field share a single header line
FIELD_VALUE_SEPARATOR = ", "


def _check_token(kind: str, text: str) -> None:
    if "\r" in text or "\n" in text:
        raise RequestBuildError(
            f"Header {kind} contains a line break: {text!r}",
            details={kind: text},
        )


class HeaderMap(Mapping):
    """
    Case-insensitive mapping of header name to an ordered list of values.

    Iteration yields names in the casing they were first added with.

    Usage:
        headers = HeaderMap({"X-Test": ["1", "2"], "Accept": "text/plain"})
        headers.add("x-test", "3")
        headers.get_all("X-TEST")  # ["1", "2", "3"]
    """

    def __init__(self, data: HeaderInput = None) -> None:
        # lowercase name -> (display name, values)
        self._entries: dict[str, tuple[str, list[str]]] = {}
        if data is None:
            return
        if isinstance(data, HeaderMap):
            for name, value in data.multi_items():
                self.add(name, value)
            return
        for name, values in data.items():
            if isinstance(values, (str, bytes)):
                values = [values]
            for value in values:
                self.add(name, value)

    def add(self, name: str, value: str) -> None:
        """Append a value for ``name``, keeping previously added values."""
        if isinstance(value, bytes):
            value = value.decode("latin-1")
        name = str(name)
        value = str(value)
        _check_token("name", name)
        _check_token("value", value)
        if not name:
            raise RequestBuildError("Header name must not be empty")
        key = name.lower()
        if key not in self._entries:
            self._entries[key] = (name, [])
        self._entries[key][1].append(value)

    def get_all(self, name: str) -> list[str]:
        """Return every value recorded for ``name`` (empty list if absent)."""
        entry = self._entries.get(name.lower())
        return list(entry[1]) if entry else []

    def joined(self, name: str) -> Optional[str]:
        """Return all values of ``name`` combined into one field value."""
        entry = self._entries.get(name.lower())
        if entry is None:
            return None
        return FIELD_VALUE_SEPARATOR.join(entry[1])

    def multi_items(self) -> Iterator[tuple[str, str]]:
        """Yield one ``(name, value)`` pair per value, in insertion order."""
        for name, values in self._entries.values():
            for value in values:
                yield name, value

    def to_dict(self) -> dict[str, list[str]]:
        """Plain ``dict[str, list[str]]`` copy."""
        return {name: list(values) for name, values in self._entries.values()}

    def __getitem__(self, name: str) -> list[str]:
        entry = self._entries.get(name.lower()) if isinstance(name, str) else None
        if entry is None:
            raise KeyError(name)
        return list(entry[1])

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderMap):
            return {k: v for k, (_, v) in self._entries.items()} == {
                k: v for k, (_, v) in other._entries.items()
            }
        if isinstance(other, Mapping):
            return self == HeaderMap(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"HeaderMap({self.to_dict()!r})"
