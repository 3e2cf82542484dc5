"""Error types raised by the checked soft-ASCII constructors.

Both errors subclass :class:`ValueError` so that callers (and pydantic
validators) can treat them like any other rejected value.
"""

from __future__ import annotations

from typing import Any


class SoftAsciiError(Exception):
    """Base class for softascii errors."""


class FromSourceError(SoftAsciiError, ValueError):
    """Raised when a checked conversion rejects a non-ASCII source.

    The rejected value is kept as-is (same object, not a copy) so the caller
    can recover it and fall back to plain text handling.

    Attributes:
        source: The original value passed to the checked constructor.
        first_non_ascii: Index of the first non-ASCII character in the
            source's text, or None if it could not be determined.
    """

    def __init__(self, source: Any) -> None:
        super().__init__("source is not soft ascii")
        self.source = source
        self.first_non_ascii = _first_non_ascii(source)

    def into_source(self) -> Any:
        """Return the rejected source value."""
        return self.source

    def __repr__(self) -> str:
        return f"FromSourceError(source={self.source!r})"


class StringFromStrError(SoftAsciiError, ValueError):
    """Raised when parsing text into a soft-ASCII type fails."""

    def __init__(self) -> None:
        super().__init__("could not convert str to SoftAsciiString")


def _first_non_ascii(source: Any) -> int | None:
    text = source
    if not isinstance(text, str):
        as_str = getattr(source, "as_str", None)
        text = as_str() if callable(as_str) else None
    if not isinstance(text, str):
        return None
    for index, ch in enumerate(text):
        if ord(ch) > 0x7F:
            return index
    return None
