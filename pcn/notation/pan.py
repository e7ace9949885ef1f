"""
A single action (ply) written in PAN (Portable Action Notation).

examples:
* "e2-e4": move to an empty square
* "d1+f3": move and capture
* "e1~g1": special move (castling, en passant, ...)
* "e7-e8=Q": move, then transform into Q
* "P*e4": drop a piece from the hand
* "+e5": capture in place, without moving
* "e4=+P": transform in place
* "...": pass
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Self

from pcn.core.exceptions import InvalidPANError

PASS = "..."

_SQUARE = r"[a-z]+[1-9][0-9]*(?:[A-Z]+)?"
_PIECE = r"[+-]?[A-Za-z]'?"

MOVE_PATTERN = re.compile(
    rf"(?P<source>{_SQUARE})(?P<operator>[-+~])(?P<destination>{_SQUARE})(?:=(?P<piece>{_PIECE}))?"
)
STATIC_CAPTURE_PATTERN = re.compile(rf"\+(?P<destination>{_SQUARE})")
DROP_PATTERN = re.compile(
    rf"(?P<dropped>{_PIECE})?\*(?P<destination>{_SQUARE})(?:=(?P<piece>{_PIECE}))?"
)
MODIFY_PATTERN = re.compile(rf"(?P<destination>{_SQUARE})=(?P<piece>{_PIECE})")


class ActionKind(StrEnum):
    MOVE = "move"
    CAPTURE = "capture"
    SPECIAL = "special"
    STATIC_CAPTURE = "static_capture"
    DROP = "drop"
    MODIFY = "modify"
    PASS = "pass"


OPERATOR_TO_KIND: dict[str, ActionKind] = {
    "-": ActionKind.MOVE,
    "+": ActionKind.CAPTURE,
    "~": ActionKind.SPECIAL,
}

KIND_TO_OPERATOR: dict[ActionKind, str] = {
    value: key for key, value in OPERATOR_TO_KIND.items()
}


def is_valid_pan(pan: str) -> bool:
    if not isinstance(pan, str):
        return False
    if pan == PASS:
        return True
    return any(
        pattern.fullmatch(pan)
        for pattern in (MOVE_PATTERN, STATIC_CAPTURE_PATTERN, DROP_PATTERN, MODIFY_PATTERN)
    )


@dataclass(frozen=True)
class Action:
    """basic definition of an action. to_string() writes the PAN string back from the parsed parts."""

    kind: ActionKind
    destination: Optional[str] = None
    source: Optional[str] = None
    piece: Optional[str] = None
    dropped: Optional[str] = None

    @classmethod
    def from_string(cls, pan: str) -> Self:
        if not isinstance(pan, str):
            raise InvalidPANError(f"PAN must be a string, got {type(pan).__name__}")

        if pan == PASS:
            return cls(ActionKind.PASS)

        move = MOVE_PATTERN.fullmatch(pan)
        if move:
            return cls(
                OPERATOR_TO_KIND[move["operator"]],
                destination=move["destination"],
                source=move["source"],
                piece=move["piece"],
            )

        static_capture = STATIC_CAPTURE_PATTERN.fullmatch(pan)
        if static_capture:
            return cls(ActionKind.STATIC_CAPTURE, destination=static_capture["destination"])

        drop = DROP_PATTERN.fullmatch(pan)
        if drop:
            return cls(
                ActionKind.DROP,
                destination=drop["destination"],
                piece=drop["piece"],
                dropped=drop["dropped"],
            )

        modify = MODIFY_PATTERN.fullmatch(pan)
        if modify:
            return cls(
                ActionKind.MODIFY, destination=modify["destination"], piece=modify["piece"]
            )

        raise InvalidPANError(f"Cannot interpret supplied string as PAN: {pan!r}")

    def to_string(self) -> str:
        """reverse operation: write the PAN string"""
        transformation = f"={self.piece}" if self.piece else ""

        if self.kind == ActionKind.PASS:
            return PASS
        if self.kind == ActionKind.STATIC_CAPTURE:
            return f"+{self.destination}"
        if self.kind == ActionKind.DROP:
            return f"{self.dropped or ''}*{self.destination}{transformation}"
        if self.kind == ActionKind.MODIFY:
            return f"{self.destination}{transformation}"

        operator = KIND_TO_OPERATOR[self.kind]
        return f"{self.source}{operator}{self.destination}{transformation}"

    def __str__(self) -> str:
        return self.to_string()
