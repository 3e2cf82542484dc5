"""SoftAsciiString: an owned, mutable text buffer expected to be ASCII.

The "is US-ASCII" constraint is soft: it holds for values built through
:meth:`SoftAsciiString.from_string` and is preserved by every mutator that
takes soft-ASCII input (``push``, ``push_str``, ``insert``, ``extend``, ...).
Two paths can break it on purpose:

- :meth:`SoftAsciiString.from_unchecked` wraps any text without a check.
- Assigning to :attr:`SoftAsciiString.inner_string` replaces the raw buffer.

:meth:`SoftAsciiString.revalidate_soft_constraint` is the way back: it
re-scans the buffer and hands out either the wrapper or the plain ``str``.

Positions are ``str`` indices, which equal byte offsets for ASCII content.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from functools import total_ordering
from typing import TYPE_CHECKING, Any, ClassVar

from softascii.domain.char import SoftAsciiChar
from softascii.domain.errors import FromSourceError, StringFromStrError
from softascii.domain.schema import soft_ascii_core_schema, soft_ascii_json_schema
from softascii.domain.text import (
    SoftAsciiStr,
    SoftAsciiText,
    contiguous_slice,
    require_str,
    socket_addrs,
    text_of,
)

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
    from pydantic.json_schema import JsonSchemaValue
    from pydantic_core import core_schema

logger = logging.getLogger(__name__)

SoftAsciiPiece = SoftAsciiChar | SoftAsciiText


def _source_text(source: object) -> str:
    text = text_of(source)
    if text is None:
        msg = f"cannot build a SoftAsciiString from {type(source).__name__}"
        raise TypeError(msg)
    return text


def _typed_text(value: object) -> str:
    if not isinstance(value, SoftAsciiText):
        msg = (
            f"expected SoftAsciiStr or SoftAsciiString, got {type(value).__name__}; "
            "wrap plain text with SoftAsciiStr.from_checked first"
        )
        raise TypeError(msg)
    return value.as_str()


def _typed_char(value: object) -> str:
    if not isinstance(value, SoftAsciiChar):
        msg = (
            f"expected SoftAsciiChar, got {type(value).__name__}; "
            "wrap plain characters with SoftAsciiChar.from_checked first"
        )
        raise TypeError(msg)
    return value.value


def _check_position(index: int, length: int, *, inclusive: bool) -> None:
    upper = length if inclusive else length - 1
    if not 0 <= index <= upper:
        msg = f"index {index} out of range for length {length}"
        raise IndexError(msg)


def _check_amount(value: int, what: str) -> None:
    if value < 0:
        msg = f"{what} must be non-negative, got {value}"
        raise ValueError(msg)


def _forward_to_view(name: str) -> Callable[..., Any]:
    target = getattr(SoftAsciiStr, name)

    def method(self: SoftAsciiString, *args: Any, **kwargs: Any) -> Any:
        return target(self.as_soft_ascii_str(), *args, **kwargs)

    method.__name__ = name
    method.__qualname__ = f"SoftAsciiString.{name}"
    method.__doc__ = target.__doc__
    return method


@total_ordering
class SoftAsciiString(SoftAsciiText):
    """Owned text buffer tagged as "expected to be US-ASCII".

    Read-only ``SoftAsciiStr`` operations (``chars``, ``lines``, ``trim``,
    ``split_at``, ``find``, ...) are forwarded to a view of the current
    buffer.  The string is mutable and therefore unhashable; hash
    :meth:`as_soft_ascii_str` instead.
    """

    __slots__ = ("_buf", "_capacity")
    __hash__: ClassVar[None] = None  # type: ignore[assignment]

    _VIEW_METHODS: ClassVar[tuple[str, ...]] = (
        "chars",
        "char_indices",
        "lines",
        "split_whitespace",
        "split_at",
        "trim",
        "trim_start",
        "trim_end",
        "startswith",
        "endswith",
        "find",
    )

    def __init__(self) -> None:
        self._buf = ""
        self._capacity = 0

    # --- construction ---

    @classmethod
    def new(cls) -> SoftAsciiString:
        return cls()

    @classmethod
    def with_capacity(cls, capacity: int) -> SoftAsciiString:
        _check_amount(capacity, "capacity")
        owned = cls()
        owned._capacity = capacity
        return owned

    @classmethod
    def from_unchecked(cls, source: str | SoftAsciiPiece) -> SoftAsciiString:
        """Wrap *source* without checking it; ASCII-ness is the caller's promise."""
        owned = cls()
        owned._buf = _source_text(source)
        return owned

    @classmethod
    def from_string(cls, source: Any) -> SoftAsciiString:
        """Wrap *source* after checking that all of it is ASCII.

        Raises:
            FromSourceError: If any character is outside the ASCII range.
                ``error.source`` is *source* itself, unmodified.
        """
        text = _source_text(source)
        if not text.isascii():
            error = FromSourceError(source)
            logger.debug(
                "Rejected non-ASCII source %s (len=%d, first_non_ascii=%s)",
                type(source).__name__,
                len(text),
                error.first_non_ascii,
            )
            raise error
        return cls.from_unchecked(text)

    @classmethod
    def parse(cls, text: str) -> SoftAsciiString:
        """Parse *text*, raising :class:`StringFromStrError` if it is not ASCII."""
        require_str(text)
        if not text.isascii():
            logger.debug("Failed to parse non-ASCII text (len=%d)", len(text))
            raise StringFromStrError
        return cls.from_unchecked(text)

    @classmethod
    def from_iterable(cls, items: Iterable[SoftAsciiPiece]) -> SoftAsciiString:
        """Collect chars, views and strings into a new buffer."""
        owned = cls()
        owned.extend(items)
        return owned

    def copy(self) -> SoftAsciiString:
        duplicate = type(self).from_unchecked(self._buf)
        duplicate._capacity = self._capacity
        return duplicate

    __copy__ = copy

    # --- soft constraint ---

    def is_ascii(self) -> bool:
        return self._buf.isascii()

    def revalidate_soft_constraint(self) -> SoftAsciiString | str:
        """Re-scan the whole buffer.

        Returns:
            ``self`` when the buffer is still ASCII, otherwise the raw
            ``str`` buffer so the caller holds untagged text.
        """
        if self._buf.isascii():
            return self
        logger.debug("Soft constraint violated (len=%d)", len(self._buf))
        return self._buf

    @property
    def inner_string(self) -> str:
        """The raw buffer.

        Assigning to this property replaces the buffer with any ``str``
        without a check.  This is the sanctioned way to break the soft
        constraint (e.g. for bulk edits); call
        :meth:`revalidate_soft_constraint` afterwards to regain confidence.
        """
        return self._buf

    @inner_string.setter
    def inner_string(self, value: str) -> None:
        if not isinstance(value, str):
            msg = f"expected str, got {type(value).__name__}"
            raise TypeError(msg)
        self._replace(value)

    # --- conversions ---

    def as_str(self) -> str:
        return self._buf

    def into_string(self) -> str:
        return self._buf

    def as_soft_ascii_str(self) -> SoftAsciiStr:
        return SoftAsciiStr.from_unchecked(self._buf)

    def as_soft_ascii_str_mut(self) -> SoftAsciiStr:
        return SoftAsciiStr.from_unchecked_mut(self._buf)

    def into_boxed_soft_ascii_str(self) -> SoftAsciiStr:
        return SoftAsciiStr.from_unchecked(self._buf)

    def into_boxed_str(self) -> str:
        return self._buf

    def as_bytes(self) -> bytes:
        return self._buf.encode("utf-8")

    into_bytes = as_bytes

    def to_socket_addrs(self) -> list[tuple[str, int]]:
        return socket_addrs(self._buf)

    def __fspath__(self) -> str:
        return self._buf

    # --- size and capacity ---

    def len(self) -> int:
        return len(self._buf)

    def is_empty(self) -> bool:
        return not self._buf

    def capacity(self) -> int:
        """Capacity hint; never smaller than the current length."""
        return max(self._capacity, len(self._buf))

    def reserve(self, additional: int) -> None:
        _check_amount(additional, "additional")
        self._capacity = max(self._capacity, len(self._buf) + additional)

    reserve_exact = reserve

    def shrink_to_fit(self) -> None:
        self._capacity = len(self._buf)

    # --- mutation ---

    def push(self, ch: SoftAsciiChar) -> None:
        self._buf += _typed_char(ch)

    def push_str(self, other: SoftAsciiText) -> None:
        self._buf += _typed_text(other)

    def insert(self, idx: int, ch: SoftAsciiChar) -> None:
        text = _typed_char(ch)
        _check_position(idx, len(self._buf), inclusive=True)
        self._replace(self._buf[:idx] + text + self._buf[idx:])

    def insert_str(self, idx: int, other: SoftAsciiText) -> None:
        text = _typed_text(other)
        _check_position(idx, len(self._buf), inclusive=True)
        self._replace(self._buf[:idx] + text + self._buf[idx:])

    def pop(self) -> SoftAsciiChar | None:
        if not self._buf:
            return None
        ch = self._buf[-1]
        self._replace(self._buf[:-1])
        return SoftAsciiChar.from_unchecked(ch)

    def remove(self, idx: int) -> SoftAsciiChar:
        _check_position(idx, len(self._buf), inclusive=False)
        ch = self._buf[idx]
        self._replace(self._buf[:idx] + self._buf[idx + 1 :])
        return SoftAsciiChar.from_unchecked(ch)

    def extend(self, items: Iterable[SoftAsciiPiece]) -> None:
        parts: list[str] = []
        for item in items:
            if isinstance(item, SoftAsciiChar):
                parts.append(item.value)
            else:
                parts.append(_typed_text(item))
        self._buf += "".join(parts)

    def truncate(self, new_len: int) -> None:
        """Keep the first *new_len* characters; no-op if already shorter."""
        _check_amount(new_len, "new_len")
        if new_len < len(self._buf):
            self._replace(self._buf[:new_len])

    def clear(self) -> None:
        self._replace("")

    def _replace(self, text: str) -> None:
        # Shrinking keeps the capacity already used.
        self._capacity = max(self._capacity, len(self._buf))
        self._buf = text

    def split_off(self, at: int) -> SoftAsciiString:
        """Split at *at*; ``self`` keeps ``[0, at)``, the result gets ``[at, len)``."""
        _check_position(at, len(self._buf), inclusive=True)
        tail = type(self).from_unchecked(self._buf[at:])
        self._replace(self._buf[:at])
        return tail

    # --- dunder protocol ---

    def __len__(self) -> int:
        return len(self._buf)

    def __iter__(self) -> Iterator[SoftAsciiChar]:
        return (SoftAsciiChar(ch) for ch in self._buf)

    def __contains__(self, item: object) -> bool:
        return item in self.as_soft_ascii_str()

    def __getitem__(self, key: int | slice) -> Any:
        return self.as_soft_ascii_str()[key]

    def __setitem__(self, key: int | slice, value: SoftAsciiPiece) -> None:
        """Replace a character or a contiguous range with soft-ASCII input."""
        if isinstance(key, slice):
            contiguous_slice(key)
            text = _typed_char(value) if isinstance(value, SoftAsciiChar) else _typed_text(value)
            start, stop, _ = key.indices(len(self._buf))
            stop = max(start, stop)
        else:
            text = _typed_char(value)
            start = key + len(self._buf) if key < 0 else key
            _check_position(start, len(self._buf), inclusive=False)
            stop = start + 1
        self._replace(self._buf[:start] + text + self._buf[stop:])

    def __iadd__(self, other: object) -> SoftAsciiString:
        if isinstance(other, SoftAsciiChar):
            self.push(other)
        elif isinstance(other, SoftAsciiText):
            self.push_str(other)
        else:
            return NotImplemented
        return self

    def __add__(self, other: object) -> SoftAsciiString:
        if not isinstance(other, SoftAsciiChar | SoftAsciiText):
            return NotImplemented
        result = self.copy()
        result += other
        return result

    def __str__(self) -> str:
        return self._buf

    def __repr__(self) -> str:
        return f"SoftAsciiString({self._buf!r})"

    def __format__(self, format_spec: str) -> str:
        return format(self._buf, format_spec)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __eq__(self, other: object) -> bool:
        text = text_of(other)
        if text is None or isinstance(other, SoftAsciiChar):
            return NotImplemented
        return self._buf == text

    def __lt__(self, other: object) -> bool:
        text = text_of(other)
        if text is None or isinstance(other, SoftAsciiChar):
            return NotImplemented
        return self._buf < text

    # --- pydantic ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return soft_ascii_core_schema(cls, cls.from_string)

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return soft_ascii_json_schema()


for _name in SoftAsciiString._VIEW_METHODS:
    setattr(SoftAsciiString, _name, _forward_to_view(_name))
del _name
