"""
Key case conversion between camelCase and snake_case.
Accepts plain string keys and Symbol keys; any other value is returned unchanged.
"""
from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any

_LOWER = frozenset(string.ascii_lowercase)
_UPPER = frozenset(string.ascii_uppercase)
_WORD = _LOWER | _UPPER | frozenset(string.digits) | {"_"}


@dataclass(frozen=True)
class Symbol:
    """Symbolic key, distinct from a plain string with the same text."""

    name: str

    def __str__(self) -> str:
        return self.name


def _starts_word(text: str, i: int) -> bool:
    """Whether the uppercase letter at text[i] opens a new word."""
    prev = text[i - 1]
    if prev in _LOWER:
        return True
    nxt = text[i + 1] if i + 1 < len(text) else ""
    # acronym run ending: "APIResponse" splits before "Re", not inside "API"
    return prev in _WORD and nxt in _LOWER


def camel_to_snake(value: Any) -> Any:
    """
    Convert a camelCase string or Symbol to snake_case.
    str subclasses (including str-valued Enum members) come back as plain str.
    "userFirstName" -> "user_first_name", "APIResponse" -> "api_response", "iOS" -> "i_os".
    """
    if isinstance(value, Symbol):
        return Symbol(camel_to_snake(value.name))
    if not isinstance(value, str):
        return value
    out: list[str] = []
    for i, ch in enumerate(value):
        if i and ch in _UPPER and _starts_word(value, i):
            out.append("_")
        out.append(ch)
    return "".join(out).lower()


def snake_to_camel(value: Any) -> Any:
    """
    Convert a snake_case string or Symbol to camelCase.
    "user__first__name" -> "userFirstName", "API_response" -> "apiResponse", "API" -> "api".
    """
    if isinstance(value, Symbol):
        return Symbol(snake_to_camel(value.name))
    if not isinstance(value, str):
        return value
    if "_" in value:
        joined = "".join(part.capitalize() for part in value.split("_"))
        return joined[:1].lower() + joined[1:]
    if value.upper() == value:
        return value.lower()
    return value
