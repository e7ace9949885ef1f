"""
Game metadata: a read-only mapping of standard and custom fields.

Standard fields are validated, anything else is stored as-is. An empty Meta is valid.
"""

import re
from collections.abc import Iterator, Mapping
from copy import deepcopy
from types import MappingProxyType
from typing import Any, Callable, Optional, Self

from pcn.core.exceptions import InvalidFieldError
from pcn.game.fields import is_integer

# ISO 8601 datetime with ASCII digits only. Fractional seconds and a timezone (Z or +HH:MM) are optional
DATETIME_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?", re.ASCII
)
URL_PATTERN = re.compile(r"https?://.+")


def _validate_string(key: str, value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidFieldError(
            key, f"{key} must be a string, got {type(value).__name__}"
        )


def _validate_round(key: str, value: Any) -> None:
    if not is_integer(value):
        raise InvalidFieldError(
            key, f"{key} must be a positive integer (>= 1), got {value!r}"
        )
    if value < 1:
        raise InvalidFieldError(key, f"{key} must be >= 1, got {value}")


def _validate_datetime(key: str, value: Any) -> None:
    _validate_string(key, value)
    if DATETIME_PATTERN.fullmatch(value) is None:
        raise InvalidFieldError(
            key,
            f"{key} must be an ISO 8601 datetime (YYYY-MM-DDTHH:MM:SS[.fff][Z|+HH:MM]), got {value!r}",
        )


def _validate_href(key: str, value: Any) -> None:
    _validate_string(key, value)
    if URL_PATTERN.fullmatch(value) is None:
        raise InvalidFieldError(
            key, f"{key} must be an absolute URL (http:// or https://), got {value!r}"
        )


STANDARD_FIELDS: dict[str, Callable[[str, Any], None]] = {
    "name": _validate_string,
    "event": _validate_string,
    "location": _validate_string,
    "round": _validate_round,
    "started_at": _validate_datetime,
    "href": _validate_href,
}


class Meta(Mapping[str, Any]):
    """
    ex)
    Meta(event="World Championship", round=5, started_at="2025-01-27T14:00:00Z")
    Meta({"event": "Tournament", "platform": "lichess.org", "rated": True})
    """

    def __init__(self, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        if fields is not None and not isinstance(fields, Mapping):
            raise InvalidFieldError(
                "meta", f"meta must be a mapping, got {type(fields).__name__}"
            )

        data: dict[str, Any] = {}
        for key, value in {**(fields or {}), **kwargs}.items():
            if not isinstance(key, str):
                raise InvalidFieldError(repr(key), "metadata keys must be strings")
            validate = STANDARD_FIELDS.get(key)
            if validate is not None:
                validate(key, value)
            # custom fields are copied so the caller cannot change them afterwards
            data[key] = value if validate is not None else deepcopy(value)

        self._data = MappingProxyType(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Meta({dict(self._data)!r})"

    def has_key(self, key: str) -> bool:
        return key in self._data

    @property
    def is_empty(self) -> bool:
        return not self._data

    def merged(self, partial: Mapping[str, Any]) -> Self:
        """New Meta with the keys of `partial` added (or overwritten)."""
        if not isinstance(partial, Mapping):
            raise InvalidFieldError(
                "meta", f"meta must be a mapping, got {type(partial).__name__}"
            )
        return type(self)({**self._data, **partial})

    def to_dict(self) -> dict[str, Any]:
        """Every stored key, including falsy values."""
        return deepcopy(dict(self._data))
