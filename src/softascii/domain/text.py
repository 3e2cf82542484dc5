"""SoftAsciiStr: an immutable text view expected (not guaranteed) to be ASCII.

A ``SoftAsciiStr`` wraps a plain ``str`` without copying it.  Every
sub-view (slices, ``split_at``, ``trim``, ``lines``) is produced without
re-checking the content: a piece of ASCII text is ASCII text, and a piece of
text that was never ASCII to begin with was the caller's choice.
"""

from __future__ import annotations

import abc
import logging
import socket
from collections.abc import Iterator
from functools import total_ordering
from typing import TYPE_CHECKING, Any

from softascii.domain.char import SoftAsciiChar
from softascii.domain.errors import FromSourceError, StringFromStrError
from softascii.domain.schema import soft_ascii_core_schema, soft_ascii_json_schema

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
    from pydantic.json_schema import JsonSchemaValue
    from pydantic_core import core_schema

    from softascii.domain.string import SoftAsciiString

logger = logging.getLogger(__name__)

# Whitespace removed by trimming and splitting. Unlike
# SoftAsciiChar.is_ascii_whitespace, this includes the vertical tab.
ASCII_WHITESPACE = " \t\n\x0b\x0c\r"


class SoftAsciiText(abc.ABC):
    """Common base of the soft-ASCII text types (view and owned string)."""

    __slots__ = ()

    @abc.abstractmethod
    def as_str(self) -> str:
        """Return the underlying plain text."""


def require_str(text: object) -> str:
    if not isinstance(text, str):
        msg = f"expected str, got {type(text).__name__}"
        raise TypeError(msg)
    return text


def text_of(value: object) -> str | None:
    """Return the plain text behind a ``str`` or soft-ASCII value, else None."""
    if isinstance(value, str):
        return value
    if isinstance(value, SoftAsciiText | SoftAsciiChar):
        return value.as_str()
    return None


def contiguous_slice(key: slice) -> None:
    """Reject extended slices; soft-ASCII views are contiguous ranges only."""
    if key.step not in (None, 1):
        msg = "soft ascii views only support contiguous slices"
        raise ValueError(msg)


def socket_addrs(text: str) -> list[tuple[str, int]]:
    """Resolve ``"host:port"`` text into ``(address, port)`` pairs."""
    host, sep, port = text.rpartition(":")
    if not sep or not port.isdigit():
        msg = f"invalid socket address: {text!r}"
        raise ValueError(msg)
    host = host.removeprefix("[").removesuffix("]")
    infos = socket.getaddrinfo(host, int(port), type=socket.SOCK_STREAM)
    seen: list[tuple[str, int]] = []
    for _family, _type, _proto, _canon, sockaddr in infos:
        addr = (str(sockaddr[0]), int(sockaddr[1]))
        if addr not in seen:
            seen.append(addr)
    return seen


@total_ordering
class SoftAsciiStr(SoftAsciiText):
    """Immutable text tagged as "expected to be US-ASCII"."""

    __slots__ = ("_text",)

    def __init__(self, text: str = "") -> None:
        self._text = require_str(text)

    # --- construction ---

    @classmethod
    def from_checked(cls, text: str) -> SoftAsciiStr:
        """Wrap *text*, raising :class:`FromSourceError` if any char is not ASCII."""
        require_str(text)
        if not text.isascii():
            error = FromSourceError(text)
            logger.debug(
                "Rejected non-ASCII str (len=%d, first_non_ascii=%s)",
                len(text),
                error.first_non_ascii,
            )
            raise error
        return cls(text)

    @classmethod
    def from_unchecked(cls, text: str) -> SoftAsciiStr:
        """Wrap *text* as-is; ASCII-ness is the caller's promise."""
        return cls(text)

    @classmethod
    def from_unchecked_mut(cls, text: str) -> SoftAsciiStr:
        """Wrap a region the caller intends to replace.

        Python text is immutable, so this is the same as
        :meth:`from_unchecked`; replacement happens on the owning
        :class:`~softascii.domain.string.SoftAsciiString`.
        """
        return cls(text)

    @classmethod
    def parse(cls, text: str) -> SoftAsciiStr:
        """Like :meth:`from_checked` but raises :class:`StringFromStrError`."""
        require_str(text)
        if not text.isascii():
            logger.debug("Failed to parse non-ASCII str (len=%d)", len(text))
            raise StringFromStrError
        return cls(text)

    # --- plain views ---

    def as_str(self) -> str:
        return self._text

    def into_boxed_str(self) -> str:
        return self._text

    def as_bytes(self) -> bytes:
        return self._text.encode("utf-8")

    def len(self) -> int:
        return len(self._text)

    def is_empty(self) -> bool:
        return not self._text

    def is_ascii(self) -> bool:
        return self._text.isascii()

    def revalidate_soft_constraint(self) -> SoftAsciiStr | str:
        """Return ``self`` if the text is still ASCII, otherwise the plain ``str``."""
        if self._text.isascii():
            return self
        logger.debug("Soft constraint violated by str (len=%d)", len(self._text))
        return self._text

    def to_soft_ascii_string(self) -> SoftAsciiString:
        """Materialise an owned copy."""
        from softascii.domain.string import SoftAsciiString

        return SoftAsciiString.from_unchecked(self._text)

    into_soft_ascii_string = to_soft_ascii_string

    # --- iteration ---

    def chars(self) -> Iterator[SoftAsciiChar]:
        return (SoftAsciiChar(ch) for ch in self._text)

    def char_indices(self) -> Iterator[tuple[int, SoftAsciiChar]]:
        return ((index, SoftAsciiChar(ch)) for index, ch in enumerate(self._text))

    def lines(self) -> Iterator[SoftAsciiStr]:
        """Yield lines without their ``\\n`` / ``\\r\\n`` terminators.

        A final line ending does not produce a trailing empty line, and a
        ``\\r`` that is not followed by ``\\n`` stays part of its line.
        """
        *terminated, last = self._text.split("\n")
        for line in terminated:
            yield SoftAsciiStr(line.removesuffix("\r"))
        if last:
            yield SoftAsciiStr(last)

    def split_whitespace(self) -> Iterator[SoftAsciiStr]:
        start: int | None = None
        for index, ch in enumerate(self._text):
            if ch in ASCII_WHITESPACE:
                if start is not None:
                    yield SoftAsciiStr(self._text[start:index])
                    start = None
            elif start is None:
                start = index
        if start is not None:
            yield SoftAsciiStr(self._text[start:])

    # --- sub-views ---

    def split_at(self, mid: int) -> tuple[SoftAsciiStr, SoftAsciiStr]:
        if not 0 <= mid <= len(self._text):
            msg = f"split index {mid} out of range for length {len(self._text)}"
            raise IndexError(msg)
        return SoftAsciiStr(self._text[:mid]), SoftAsciiStr(self._text[mid:])

    def trim(self) -> SoftAsciiStr:
        return SoftAsciiStr(self._text.strip(ASCII_WHITESPACE))

    def trim_start(self) -> SoftAsciiStr:
        return SoftAsciiStr(self._text.lstrip(ASCII_WHITESPACE))

    def trim_end(self) -> SoftAsciiStr:
        return SoftAsciiStr(self._text.rstrip(ASCII_WHITESPACE))

    def startswith(self, prefix: object) -> bool:
        return self._text.startswith(_pattern(prefix))

    def endswith(self, suffix: object) -> bool:
        return self._text.endswith(_pattern(suffix))

    def find(self, sub: object) -> int | None:
        index = self._text.find(_pattern(sub))
        return None if index < 0 else index

    # --- interop ---

    def to_socket_addrs(self) -> list[tuple[str, int]]:
        return socket_addrs(self._text)

    def __fspath__(self) -> str:
        return self._text

    # --- dunder protocol ---

    def __len__(self) -> int:
        return len(self._text)

    def __iter__(self) -> Iterator[SoftAsciiChar]:
        return self.chars()

    def __contains__(self, item: object) -> bool:
        return _pattern(item) in self._text

    def __getitem__(self, key: int | slice) -> Any:
        if isinstance(key, slice):
            contiguous_slice(key)
            return SoftAsciiStr(self._text[key])
        return SoftAsciiChar(self._text[key])

    def __add__(self, other: object) -> SoftAsciiString:
        if not isinstance(other, SoftAsciiText | SoftAsciiChar):
            return NotImplemented
        owned = self.to_soft_ascii_string()
        owned += other
        return owned

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"SoftAsciiStr({self._text!r})"

    def __format__(self, format_spec: str) -> str:
        return format(self._text, format_spec)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __eq__(self, other: object) -> bool:
        text = text_of(other)
        if text is None or isinstance(other, SoftAsciiChar):
            return NotImplemented
        return self._text == text

    def __lt__(self, other: object) -> bool:
        text = text_of(other)
        if text is None or isinstance(other, SoftAsciiChar):
            return NotImplemented
        return self._text < text

    def __hash__(self) -> int:
        return hash(self._text)

    # --- pydantic ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return soft_ascii_core_schema(cls, cls.from_checked)

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return soft_ascii_json_schema()


def _pattern(value: object) -> str:
    text = text_of(value)
    if text is None:
        msg = f"expected text, got {type(value).__name__}"
        raise TypeError(msg)
    return text
