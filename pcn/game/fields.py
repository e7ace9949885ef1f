"""Small checks shared by the record value objects. bool is excluded wherever a number is expected."""

from collections.abc import Mapping
from typing import Any

from pcn.core.exceptions import InvalidFieldError


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """Lists and tuples only. Strings and mappings do not count."""
    return isinstance(value, (list, tuple))


def reject_unknown_keys(data: Mapping, allowed: tuple[str, ...], where: str) -> None:
    for key in data:
        if key not in allowed:
            raise InvalidFieldError(
                str(key), f"unknown {where} field, expected one of {', '.join(allowed)}"
            )
