"""
One participant of a game: style, name, rating and time control.

Every field is optional. A Player without any information is the empty player.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Self

from pcn.core.exceptions import (
    CollaboratorRejectedError,
    InvalidFieldError,
    InvalidSNNError,
)
from pcn.game.fields import is_integer, is_sequence, reject_unknown_keys
from pcn.notation.snn import StyleName

PERIOD_FIELDS = ("time", "moves", "inc")
PLAYER_FIELDS = ("style", "name", "elo", "periods")


@dataclass(frozen=True)
class Period:
    """
    One segment of a time control.
    ----

    * time: seconds added to the clock when the period starts
    * moves: number of moves to play within the period. None means the rest of the game
    * inc: seconds added after every move played in the period

    ex) Fischer 5+3: [Period(300, None, 3)], byoyomi: [Period(3600), Period(60, 1), Period(60, 1), ...]
    """

    time: int
    moves: Optional[int] = None
    inc: int = 0

    def __post_init__(self) -> None:
        if not (is_integer(self.time) and self.time >= 0):
            raise InvalidFieldError(
                "time", f"time must be a non-negative integer (>= 0), got {self.time!r}"
            )
        if self.moves is not None and not (is_integer(self.moves) and self.moves >= 1):
            raise InvalidFieldError(
                "moves", f"moves must be a positive integer (>= 1), got {self.moves!r}"
            )
        if not (is_integer(self.inc) and self.inc >= 0):
            raise InvalidFieldError(
                "inc", f"inc must be a non-negative integer (>= 0), got {self.inc!r}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        if not isinstance(data, Mapping):
            raise InvalidFieldError(
                "period", f"period must be a mapping, got {type(data).__name__}"
            )
        reject_unknown_keys(data, PERIOD_FIELDS, "period")
        if "time" not in data:
            raise InvalidFieldError("time", "time is required in every period")

        # absent inc means no increment
        inc = data.get("inc")
        return cls(time=data["time"], moves=data.get("moves"), inc=0 if inc is None else inc)

    def to_dict(self) -> dict[str, Any]:
        return {"time": self.time, "moves": self.moves, "inc": self.inc}


@dataclass(frozen=True)
class Player:
    style: Optional[StyleName] = None
    name: Optional[str] = None
    elo: Optional[int] = None
    periods: tuple[Period, ...] = field(default=())

    def __post_init__(self) -> None:
        # Normalize. Accepts raw values (str style, dict periods) as well as already parsed ones.
        object.__setattr__(self, "style", _normalize_style(self.style))
        object.__setattr__(self, "periods", _normalize_periods(self.periods))

        if self.name is not None and not isinstance(self.name, str):
            raise InvalidFieldError(
                "name", f"name must be a string, got {type(self.name).__name__}"
            )
        if self.elo is not None and not (is_integer(self.elo) and self.elo >= 0):
            raise InvalidFieldError(
                "elo", f"elo must be a non-negative integer (>= 0), got {self.elo!r}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        if not isinstance(data, Mapping):
            raise InvalidFieldError(
                "player", f"player must be a mapping, got {type(data).__name__}"
            )
        reject_unknown_keys(data, PLAYER_FIELDS, "player")
        return cls(
            style=data.get("style"),
            name=data.get("name"),
            elo=data.get("elo"),
            periods=data.get("periods"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Only the fields that are present. An empty player gives an empty dict."""
        data: dict[str, Any] = {}
        if self.style is not None:
            data["style"] = self.style.to_string()
        if self.name is not None:
            data["name"] = self.name
        if self.elo is not None:
            data["elo"] = self.elo
        if self.periods:
            data["periods"] = [period.to_dict() for period in self.periods]
        return data

    @property
    def is_empty(self) -> bool:
        return (
            self.style is None
            and self.name is None
            and self.elo is None
            and not self.periods
        )

    @property
    def has_time_control(self) -> bool:
        return len(self.periods) > 0

    @property
    def unlimited_time(self) -> bool:
        return not self.periods

    @property
    def initial_time_budget(self) -> Optional[int]:
        """Sum of the time of all periods. None if playing without a clock."""
        if self.unlimited_time:
            return None
        return sum(period.time for period in self.periods)


def _normalize_style(style: Any) -> Optional[StyleName]:
    if style is None or isinstance(style, StyleName):
        return style
    if not isinstance(style, str):
        raise InvalidFieldError(
            "style", f"style must be a SNN string, got {type(style).__name__}"
        )
    try:
        return StyleName.from_string(style)
    except InvalidSNNError as e:
        raise CollaboratorRejectedError("style", str(e)) from e


def _normalize_periods(periods: Any) -> tuple[Period, ...]:
    """None or an empty list: unlimited time."""
    if periods is None:
        return ()
    if not is_sequence(periods):
        raise InvalidFieldError(
            "periods", f"periods must be a list, got {type(periods).__name__}"
        )

    normalized: list[Period] = []
    for index, period in enumerate(periods):
        if not isinstance(period, (Period, Mapping)):
            raise InvalidFieldError(
                f"periods[{index}]",
                f"period must be a mapping, got {type(period).__name__}",
            )
        try:
            normalized.append(
                period if isinstance(period, Period) else Period.from_dict(period)
            )
        except InvalidFieldError as e:
            raise e.nested_under(f"periods[{index}]", f"invalid period {index}") from e
    return tuple(normalized)
