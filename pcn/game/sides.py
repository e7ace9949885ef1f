"""
Player information for both sides of a game.

Both slots default to the empty player, so Sides() is a valid record without any player information.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Self

from pcn.core.exceptions import InvalidFieldError
from pcn.core.shared_types import Side
from pcn.game.fields import reject_unknown_keys
from pcn.game.player import Period, Player

SIDES_FIELDS = ("first", "second")


@dataclass(frozen=True)
class Sides:
    first: Player = field(default_factory=Player)
    second: Player = field(default_factory=Player)

    def __post_init__(self) -> None:
        object.__setattr__(self, "first", _normalize_player(self.first, Side.FIRST))
        object.__setattr__(self, "second", _normalize_player(self.second, Side.SECOND))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        if not isinstance(data, Mapping):
            raise InvalidFieldError(
                "sides", f"sides must be a mapping, got {type(data).__name__}"
            )
        reject_unknown_keys(data, SIDES_FIELDS, "sides")
        return cls(first=data.get("first"), second=data.get("second"))

    def to_dict(self) -> dict[str, Any]:
        """Empty players are left out. No player information at all gives an empty dict."""
        data: dict[str, Any] = {}
        if not self.first.is_empty:
            data["first"] = self.first.to_dict()
        if not self.second.is_empty:
            data["second"] = self.second.to_dict()
        return data

    def __iter__(self) -> Iterator[Player]:
        yield self.first
        yield self.second

    def player(self, side: Side | str) -> Optional[Player]:
        """Look up a player by side name. None for anything other than 'first' or 'second'."""
        if side == Side.FIRST:
            return self.first
        if side == Side.SECOND:
            return self.second
        return None

    def has_player(self, side: Side | str) -> bool:
        player = self.player(side)
        return player is not None and not player.is_empty

    @property
    def is_empty(self) -> bool:
        return self.first.is_empty and self.second.is_empty

    @property
    def is_complete(self) -> bool:
        return not self.first.is_empty and not self.second.is_empty

    # --- BATCH ACCESSORS (first, second) ---
    @property
    def names(self) -> tuple[Optional[str], Optional[str]]:
        return self.first.name, self.second.name

    @property
    def elos(self) -> tuple[Optional[int], Optional[int]]:
        return self.first.elo, self.second.elo

    @property
    def styles(self) -> tuple[Optional[str], Optional[str]]:
        first, second = (
            player.style.to_string() if player.style is not None else None
            for player in self
        )
        return first, second

    @property
    def periods(self) -> tuple[tuple[Period, ...], tuple[Period, ...]]:
        return self.first.periods, self.second.periods

    @property
    def time_budgets(self) -> tuple[Optional[int], Optional[int]]:
        return self.first.initial_time_budget, self.second.initial_time_budget

    # --- TIME CONTROL ---
    @property
    def unlimited_game(self) -> bool:
        return self.first.unlimited_time and self.second.unlimited_time

    @property
    def symmetric_time_control(self) -> bool:
        """Both players play with exactly the same periods (includes both playing without a clock)."""
        return self.first.periods == self.second.periods

    @property
    def mixed_time_control(self) -> bool:
        return not self.symmetric_time_control

    @property
    def both_have_time_control(self) -> bool:
        return self.first.has_time_control and self.second.has_time_control


def _normalize_player(value: Any, side: Side) -> Player:
    """None means no information about that player."""
    if value is None:
        return Player()
    if isinstance(value, Player):
        return value
    if not isinstance(value, Mapping):
        raise InvalidFieldError(
            side.value,
            f"invalid '{side.value}' player: must be a mapping, got {type(value).__name__}",
        )
    try:
        return Player.from_dict(value)
    except InvalidFieldError as e:
        raise e.nested_under(side.value, f"invalid '{side.value}' player") from e
