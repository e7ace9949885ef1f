"""
Board position as encoded in a FEEN string (Forsyth-Edwards Enhanced Notation).
"""

import re
from dataclasses import dataclass
from typing import Self

from pcn.core.exceptions import InvalidFEENError
from pcn.core.shared_types import Side

EMPTY_POSITION = "8/8/8/8/8/8/8/8 / C/c"

# EPIN: optional state modifier, a letter (case gives the side), optional "'" for a native/derived marker
PIECE_PATTERN = re.compile(r"[+-]?[A-Za-z]'?")
EMPTY_COUNT_PATTERN = re.compile(r"[1-9][0-9]*")
HAND_ITEM_PATTERN = re.compile(r"(?:[1-9][0-9]*)?[+-]?[A-Za-z]'?")
STYLE_TURN_PATTERN = re.compile(r"([A-Za-z])/([A-Za-z])")


def is_valid_feen(feen: str) -> bool:
    """
    Check if given string follows FEEN notation.
    """
    if not isinstance(feen, str):
        return False

    # there should be 3 parts to the string
    parts = feen.split(" ")
    if len(parts) != 3:
        return False

    placement, hands, style_turn = parts
    return (
        is_valid_placement(placement)
        and is_valid_hands(hands)
        and is_valid_style_turn(style_turn)
    )


def is_valid_placement(placement: str) -> bool:
    """Ranks are separated by '/'. Every rank is a mix of empty-square counts and pieces."""
    ranks = placement.split("/")
    return all(is_valid_rank(rank) for rank in ranks)


def is_valid_rank(rank: str) -> bool:
    if not rank:
        return False

    position = 0
    while position < len(rank):
        match = EMPTY_COUNT_PATTERN.match(rank, position) or PIECE_PATTERN.match(
            rank, position
        )
        if match is None:
            # immediately invalidate if the character is anything else
            return False
        position = match.end()
    return True


def is_valid_hands(hands: str) -> bool:
    """'<first player's hand>/<second player's hand>', both may be empty: '/'"""
    sides = hands.split("/")
    if len(sides) != 2:
        return False
    return all(is_valid_hand(hand) for hand in sides)


def is_valid_hand(hand: str) -> bool:
    position = 0
    while position < len(hand):
        match = HAND_ITEM_PATTERN.match(hand, position)
        if match is None:
            return False
        position = match.end()
    return True


def is_valid_style_turn(style_turn: str) -> bool:
    """Active player's style first. Exactly one of the two is uppercase (the first player's)."""
    match = STYLE_TURN_PATTERN.fullmatch(style_turn)
    if match is None:
        return False
    active, inactive = match.groups()
    return active.isupper() != inactive.isupper()


@dataclass(frozen=True)
class Position:
    """
    Data that can be constructed from a FEEN string.
    ----

    <piece placement> <pieces in hand> <style-turn>

    * Piece placement lists the ranks separated by '/'. Digits count consecutive empty squares,
        letters are pieces (uppercase for the first player, lowercase for the second), optionally prefixed
        by a '+' or '-' state modifier.
    * Pieces in hand are given as '<first>/<second>', with an optional count in front of a piece. '/' if nobody holds anything.
    * Style-turn names the style of both sides, the side to move first. ex) 'C/c' the first player (chess) is to move.

    ex) An empty 8x8 board with chess styles on both sides, first player to move
    8/8/8/8/8/8/8/8 / C/c
    """

    placement: str
    hands: str
    style_turn: str

    @classmethod
    def from_string(cls, feen: str) -> Self:
        # raise an exception if invalid FEEN:
        if not is_valid_feen(feen):
            raise InvalidFEENError(f"Cannot interpret supplied string as FEEN: {feen!r}")

        placement, hands, style_turn = feen.split(" ")
        return cls(placement, hands, style_turn)

    def to_string(self) -> str:
        return f"{self.placement} {self.hands} {self.style_turn}"

    def __str__(self) -> str:
        return self.to_string()

    @property
    def active_side(self) -> Side:
        return Side.FIRST if self.style_turn[0].isupper() else Side.SECOND

    @classmethod
    def empty(cls) -> Self:
        return cls.from_string(EMPTY_POSITION)
