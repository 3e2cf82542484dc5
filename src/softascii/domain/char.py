"""SoftAsciiChar: a single character expected (not guaranteed) to be ASCII."""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING, Any

from softascii.domain.errors import FromSourceError
from softascii.domain.schema import soft_ascii_core_schema, soft_ascii_json_schema

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
    from pydantic.json_schema import JsonSchemaValue
    from pydantic_core import core_schema

logger = logging.getLogger(__name__)

_UPPER_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_LOWER_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def _require_char(value: Any) -> str:
    if not isinstance(value, str):
        msg = f"expected a one-character str, got {type(value).__name__}"
        raise TypeError(msg)
    if len(value) != 1:
        msg = f"expected a single character, got {len(value)} characters"
        raise ValueError(msg)
    return value


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class SoftAsciiChar:
    """A character tagged as "expected to be US-ASCII".

    The tag is the type itself.  Instances built with :meth:`from_checked`
    are ASCII; instances built with :meth:`from_unchecked` are whatever the
    caller says they are.  Comparisons are structural on the character and
    also accept a plain one-character ``str``.
    """

    value: str

    @classmethod
    def from_checked(cls, ch: str) -> SoftAsciiChar:
        """Wrap *ch*, raising :class:`FromSourceError` if it is not ASCII."""
        _require_char(ch)
        if not ch.isascii():
            logger.debug("Rejected non-ASCII char U+%04X", ord(ch))
            raise FromSourceError(ch)
        return cls(ch)

    @classmethod
    def from_unchecked(cls, ch: str) -> SoftAsciiChar:
        """Wrap *ch* without checking it; ASCII-ness is the caller's promise."""
        return cls(_require_char(ch))

    def to_char(self) -> str:
        return self.value

    def as_str(self) -> str:
        return self.value

    def is_ascii(self) -> bool:
        return self.value.isascii()

    def revalidate_soft_constraint(self) -> SoftAsciiChar | str:
        """Return ``self`` if still ASCII, otherwise the plain character."""
        if self.is_ascii():
            return self
        logger.debug("Soft constraint violated by char U+%04X", ord(self.value))
        return self.value

    # --- ASCII classification (false for any non-ASCII value) ---

    def is_ascii_alphabetic(self) -> bool:
        return self.value in string.ascii_letters

    def is_ascii_uppercase(self) -> bool:
        return self.value in string.ascii_uppercase

    def is_ascii_lowercase(self) -> bool:
        return self.value in string.ascii_lowercase

    def is_ascii_digit(self) -> bool:
        return self.value in string.digits

    def is_ascii_alphanumeric(self) -> bool:
        return self.is_ascii_alphabetic() or self.is_ascii_digit()

    def is_ascii_whitespace(self) -> bool:
        # No vertical tab.
        return self.value in " \t\n\x0c\r"

    def is_ascii_punctuation(self) -> bool:
        return self.value in string.punctuation

    def is_ascii_graphic(self) -> bool:
        return "\x21" <= self.value <= "\x7e"

    def is_ascii_control(self) -> bool:
        return self.value < "\x20" or self.value == "\x7f"

    # --- ASCII case mapping (non-letters come back unchanged) ---

    def to_ascii_uppercase(self) -> SoftAsciiChar:
        return SoftAsciiChar(self.value.translate(_LOWER_TO_UPPER))

    def to_ascii_lowercase(self) -> SoftAsciiChar:
        return SoftAsciiChar(self.value.translate(_UPPER_TO_LOWER))

    def eq_ignore_ascii_case(self, other: SoftAsciiChar | str) -> bool:
        other_value = other.value if isinstance(other, SoftAsciiChar) else other
        return self.value.translate(_UPPER_TO_LOWER) == other_value.translate(_UPPER_TO_LOWER)

    # --- dunder protocol ---

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"SoftAsciiChar({self.value!r})"

    def __index__(self) -> int:
        return ord(self.value)

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SoftAsciiChar):
            return self.value == other.value
        if isinstance(other, str):
            return self.value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, SoftAsciiChar):
            return self.value < other.value
        if isinstance(other, str):
            return self.value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

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
        return soft_ascii_json_schema(minLength=1, maxLength=1)
