"""Conversions between identifier naming styles."""

from __future__ import annotations

import string

_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_ALNUM = _LETTERS | _DIGITS


def _format_name(name: str) -> str:
    """Drop leading non-letters and trailing non-alphanumerics."""
    start = next((i for i, ch in enumerate(name) if ch in _LETTERS), len(name))
    result = name[start:]
    end = len(result)
    while end > 0 and result[end - 1] not in _ALNUM:
        end -= 1
    return result[:end]


def to_pascal_case(name: str) -> str:
    """Convert a snake, kebab or camel case name to PascalCase."""
    formatted = _format_name(name)
    if formatted:
        formatted = formatted[0].upper() + formatted[1:]
    result: list[str] = []
    prev_non_alpha = False
    for ch in formatted:
        if ch not in _LETTERS:
            if ch in _DIGITS:
                result.append(ch)
            if result:
                prev_non_alpha = True
            continue
        result.append(ch.upper() if prev_non_alpha else ch)
        prev_non_alpha = False
    return "".join(result)


def to_snake_case(name: str) -> str:
    """Convert a kebab, camel or Pascal case name to snake_case."""
    formatted = _format_name(name.replace("-", "_"))
    if formatted:
        formatted = formatted[0].lower() + formatted[1:]
    result: list[str] = []
    for ch in formatted:
        if ch.isupper() and ch in _LETTERS and result:
            result.append("_")
            result.append(ch.lower())
        else:
            result.append(ch)
    return "".join(result)


def to_lower_case(name: str) -> str:
    """Convert a name to lower case letters and digits only."""
    return "".join(ch.lower() for ch in _format_name(name) if ch in _ALNUM)