"""
The Game class is the entrypoint into the domain layer: an immutable, validated record of one game.

A Game consists of:
* setup: initial position (FEEN) [required]
* moves: sequence of [PAN, seconds] pairs, seconds being the time spent on that move [defaults to empty]
* status: game status (CGSN) [optional]
* draw_offered_by: side with a pending draw offer [optional]
* winner: 'first', 'second', or 'none' for a draw [optional]
* meta: metadata [defaults to empty]
* sides: player information [defaults to empty]

Nothing is ever changed in place. Every with_* / add_* method builds (and validates) a new Game.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, NamedTuple, Optional, Self

from pcn.core.exceptions import (
    CollaboratorRejectedError,
    InvalidFEENError,
    InvalidFieldError,
    InvalidPANError,
    InvalidStatusError,
    InvalidStructureError,
    MissingFieldError,
    PCNError,
)
from pcn.core.models import GameRecordModel
from pcn.core.shared_types import Side, Status, Winner
from pcn.game.fields import is_number, is_sequence, reject_unknown_keys
from pcn.game.meta import Meta
from pcn.game.player import Player
from pcn.game.sides import Sides
from pcn.notation.cgsn import parse_status
from pcn.notation.feen import Position
from pcn.notation.pan import Action

logger = logging.getLogger(__name__)

DOCUMENT_FIELDS = (
    "setup",
    "moves",
    "status",
    "draw_offered_by",
    "winner",
    "meta",
    "sides",
)


class Move(NamedTuple):
    """One ply. Compares equal to a plain (pan, seconds) tuple."""

    pan: str
    seconds: float

    def to_list(self) -> list[Any]:
        return [self.pan, self.seconds]


@dataclass(frozen=True, repr=False)
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE ---

    setup: Position
    moves: tuple[Move, ...] = ()
    status: Optional[Status] = None
    draw_offered_by: Optional[Side] = None
    winner: Optional[Winner] = None
    meta: Meta = field(default_factory=Meta)
    sides: Sides = field(default_factory=Sides)

    def __post_init__(self) -> None:
        """Validation. Raw values (strings, lists, dicts) are parsed, already parsed values are kept."""
        object.__setattr__(self, "setup", _normalize_setup(self.setup))
        object.__setattr__(self, "moves", _normalize_moves(self.moves))
        object.__setattr__(self, "status", _normalize_status(self.status))
        object.__setattr__(
            self,
            "draw_offered_by",
            _normalize_choice(self.draw_offered_by, Side, "draw_offered_by"),
        )
        object.__setattr__(
            self, "winner", _normalize_choice(self.winner, Winner, "winner")
        )
        object.__setattr__(self, "meta", _normalize_meta(self.meta))
        object.__setattr__(self, "sides", _normalize_sides(self.sides))

    # --- (DE)SERIALIZATION ---
    @classmethod
    def from_dict(cls, document: Mapping[str, Any]) -> Self:
        """Build a Game from a PCN document (ex. the output of json.loads)"""
        if not isinstance(document, Mapping):
            raise InvalidStructureError(
                "document",
                f"PCN document must be a mapping, got {type(document).__name__}",
            )
        reject_unknown_keys(document, DOCUMENT_FIELDS, "document")
        if document.get("setup") is None:
            raise MissingFieldError("setup")

        return cls(
            setup=document["setup"],
            moves=document.get("moves", ()),
            status=document.get("status"),
            draw_offered_by=document.get("draw_offered_by"),
            winner=document.get("winner"),
            meta=document.get("meta"),
            sides=document.get("sides"),
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Reverse operation: the PCN document.

        setup and moves are always there (moves may be an empty list), the other fields only when present/non-empty.
        """
        document: dict[str, Any] = {
            "setup": self.setup.to_string(),
            "moves": [move.to_list() for move in self.moves],
        }
        if self.status is not None:
            document["status"] = self.status.value
        if self.draw_offered_by is not None:
            document["draw_offered_by"] = self.draw_offered_by.value
        if self.winner is not None:
            document["winner"] = self.winner.value
        if not self.meta.is_empty:
            document["meta"] = self.meta.to_dict()
        if not self.sides.is_empty:
            document["sides"] = self.sides.to_dict()
        return document

    @classmethod
    def from_model(cls, model: GameRecordModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        return cls(
            setup=model.setup,
            moves=model.moves,
            status=model.status,
            draw_offered_by=model.draw_offered_by,
            winner=model.winner,
            meta=model.meta,
            sides=model.sides,
        )

    def to_model(self) -> GameRecordModel:
        """Encode back into a format the Service layer uses"""
        document = self.to_dict()
        return GameRecordModel(
            setup=document["setup"],
            moves=document["moves"],
            status=document.get("status"),
            draw_offered_by=document.get("draw_offered_by"),
            winner=document.get("winner"),
            meta=document.get("meta", {}),
            sides=document.get("sides", {}),
        )

    @classmethod
    def is_valid(cls, document: Any) -> bool:
        """Same checks as from_dict, but answers with a bool instead of raising."""
        try:
            cls.from_dict(document)
        except PCNError as e:
            logger.debug("Rejected PCN document: %s", e)
            return False
        return True

    # --- MOVES ---
    @property
    def move_count(self) -> int:
        return len(self.moves)

    def move_at(self, index: int) -> Optional[Move]:
        """None when out of range. Negative indices are out of range too."""
        if 0 <= index < self.move_count:
            return self.moves[index]
        return None

    def pan_at(self, index: int) -> Optional[str]:
        move = self.move_at(index)
        return move.pan if move is not None else None

    def seconds_at(self, index: int) -> Optional[float]:
        move = self.move_at(index)
        return move.seconds if move is not None else None

    @property
    def first_player_time(self) -> float:
        """Total time spent by the first player: moves at even indices."""
        return sum((move.seconds for move in self.moves[0::2]), 0.0)

    @property
    def second_player_time(self) -> float:
        """Total time spent by the second player: moves at odd indices."""
        return sum((move.seconds for move in self.moves[1::2]), 0.0)

    # --- PLAYERS / METADATA SHORTCUTS ---
    @property
    def first_player(self) -> Player:
        return self.sides.first

    @property
    def second_player(self) -> Player:
        return self.sides.second

    @property
    def event(self) -> Optional[str]:
        return self.meta.get("event")

    @property
    def round(self) -> Optional[int]:
        return self.meta.get("round")

    @property
    def location(self) -> Optional[str]:
        return self.meta.get("location")

    @property
    def started_at(self) -> Optional[str]:
        return self.meta.get("started_at")

    @property
    def href(self) -> Optional[str]:
        return self.meta.get("href")

    # --- PREDICATES ---
    @property
    def has_status(self) -> bool:
        return self.status is not None

    @property
    def in_progress(self) -> Optional[bool]:
        """None if no status was declared."""
        if self.status is None:
            return None
        return self.status == Status.IN_PROGRESS

    @property
    def finished(self) -> Optional[bool]:
        """None if no status was declared."""
        if self.status is None:
            return None
        return self.status != Status.IN_PROGRESS

    @property
    def draw_offered(self) -> bool:
        return self.draw_offered_by is not None

    @property
    def has_winner(self) -> bool:
        return self.winner is not None

    @property
    def decisive(self) -> Optional[bool]:
        """True for a win, False for a draw, None if no winner was declared."""
        if self.winner is None:
            return None
        return self.winner != Winner.NONE

    @property
    def drawn(self) -> bool:
        return self.winner == Winner.NONE

    # --- TRANSFORMATIONS (always a new, fully validated Game) ---
    def add_move(self, move: Any) -> Self:
        # validate the move on its own first, for a precise error message
        new_move = _normalize_move(move, self.move_count)
        return replace(self, moves=self.moves + (new_move,))

    def with_moves(self, moves: Any) -> Self:
        return replace(self, moves=moves)

    def with_status(self, status: Optional[str | Status]) -> Self:
        return replace(self, status=status)

    def with_draw_offered_by(self, side: Optional[str | Side]) -> Self:
        """Pass None to withdraw the offer."""
        return replace(self, draw_offered_by=side)

    def with_winner(self, winner: Optional[str | Winner]) -> Self:
        return replace(self, winner=winner)

    def with_meta(self, partial: Optional[Mapping[str, Any]] = None, **fields: Any) -> Self:
        """Merge into the current metadata. Existing keys are kept unless given again."""
        if partial is not None and not isinstance(partial, Mapping):
            raise InvalidFieldError(
                "meta", f"meta must be a mapping, got {type(partial).__name__}"
            )
        try:
            meta = self.meta.merged({**(partial or {}), **fields})
        except InvalidFieldError as e:
            raise e.nested_under("meta", "invalid meta") from e
        return replace(self, meta=meta)

    def with_sides(self, sides: Any) -> Self:
        """Replaces the player information as a whole."""
        return replace(self, sides=sides)

    # --- DUNDER ---
    def __hash__(self) -> int:
        # Meta may hold unhashable custom values, so it is left out
        return hash(
            (self.setup, self.moves, self.status, self.draw_offered_by, self.winner, self.sides)
        )

    def __repr__(self) -> str:
        fields = [f"setup={self.setup.to_string()!r}", f"moves={self.move_count}"]
        if self.status is not None:
            fields.append(f"status={self.status.value!r}")
        if self.draw_offered_by is not None:
            fields.append(f"draw_offered_by={self.draw_offered_by.value!r}")
        if self.winner is not None:
            fields.append(f"winner={self.winner.value!r}")
        return f"Game({', '.join(fields)})"


def parse(document: Mapping[str, Any]) -> Game:
    """Parse a PCN document. Raises on the first invalid field."""
    return Game.from_dict(document)


def is_valid(document: Any) -> bool:
    return Game.is_valid(document)


# --- NORMALIZATION HELPERS ---
def _normalize_setup(value: Any) -> Position:
    if value is None:
        raise MissingFieldError("setup")
    if isinstance(value, Position):
        return value
    if not isinstance(value, str):
        raise InvalidFieldError(
            "setup", f"setup must be a FEEN string, got {type(value).__name__}"
        )
    try:
        return Position.from_string(value)
    except InvalidFEENError as e:
        raise CollaboratorRejectedError("setup", f"invalid setup: {e}") from e


def _normalize_moves(value: Any) -> tuple[Move, ...]:
    if not is_sequence(value):
        raise InvalidStructureError(
            "moves",
            f"moves must be a list of [PAN, seconds] tuples, got {type(value).__name__}",
        )
    return tuple(_normalize_move(move, index) for index, move in enumerate(value))


def _normalize_move(move: Any, index: int) -> Move:
    """A move is a [PAN, seconds] tuple. Integer seconds are widened to float."""
    path = f"moves[{index}]"
    if not is_sequence(move) or len(move) != 2:
        raise InvalidFieldError(
            path, f"move must be a [PAN, seconds] tuple, got {move!r}"
        )

    pan, seconds = move
    try:
        action = Action.from_string(pan)
    except InvalidPANError as e:
        raise CollaboratorRejectedError(f"{path}.pan", f"invalid PAN: {e}") from e

    # NOTE: 'not seconds >= 0' also rejects NaN
    if not is_number(seconds) or not seconds >= 0:
        raise InvalidFieldError(
            f"{path}.seconds",
            f"seconds must be a non-negative number (>= 0), got {seconds!r}",
        )
    return Move(action.to_string(), float(seconds))


def _normalize_status(value: Any) -> Optional[Status]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidFieldError(
            "status", f"status must be a string, got {type(value).__name__}"
        )
    try:
        return parse_status(value)
    except InvalidStatusError as e:
        raise CollaboratorRejectedError("status", str(e)) from e


def _normalize_choice(value: Any, choices: type[Side] | type[Winner], name: str) -> Any:
    """draw_offered_by / winner: None, or exactly one of the enumeration values."""
    if value is None:
        return None
    allowed = [choice.value for choice in choices]
    if not isinstance(value, str) or value not in allowed:
        raise InvalidFieldError(
            name,
            f"{name} must be one of {', '.join(repr(choice) for choice in allowed)} or None, got {value!r}",
        )
    return choices(value)


def _normalize_meta(value: Any) -> Meta:
    if value is None:
        return Meta()
    if isinstance(value, Meta):
        return value
    if not isinstance(value, Mapping):
        raise InvalidFieldError(
            "meta", f"meta must be a mapping, got {type(value).__name__}"
        )
    try:
        return Meta(value)
    except InvalidFieldError as e:
        raise e.nested_under("meta", "invalid meta") from e


def _normalize_sides(value: Any) -> Sides:
    if value is None:
        return Sides()
    if isinstance(value, Sides):
        return value
    if not isinstance(value, Mapping):
        raise InvalidFieldError(
            "sides", f"sides must be a mapping, got {type(value).__name__}"
        )
    try:
        return Sides.from_dict(value)
    except InvalidFieldError as e:
        raise e.nested_under("sides", "invalid sides") from e
