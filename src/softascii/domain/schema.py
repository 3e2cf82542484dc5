"""Pydantic v2 hooks shared by the soft-ASCII types.

Lets ``SoftAsciiChar``, ``SoftAsciiStr`` and ``SoftAsciiString`` be used as
model field types: plain ``str`` input goes through the checked constructor,
existing instances pass through untouched, and dumps emit plain ``str``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

ASCII_PATTERN = r"^[\x00-\x7F]*$"


def soft_ascii_core_schema(cls: type, checked: Callable[[str], Any]) -> core_schema.CoreSchema:
    """Build a plain-validator core schema around *checked*."""

    def validate(value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            msg = f"expected str, got {type(value).__name__}"
            raise ValueError(msg)
        return checked(value)

    return core_schema.no_info_plain_validator_function(
        validate,
        serialization=core_schema.plain_serializer_function_ser_schema(
            str,
            return_schema=core_schema.str_schema(),
        ),
    )


def soft_ascii_json_schema(**extra: Any) -> JsonSchemaValue:
    """JSON schema for a soft-ASCII string, plus any *extra* keywords."""
    return {"type": "string", "pattern": ASCII_PATTERN, **extra}
