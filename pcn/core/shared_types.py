"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    """Closed vocabulary of game statuses (CGSN tokens)."""

    IN_PROGRESS = "in_progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    BARE_KING = "bare_king"
    MARE_KING = "mare_king"
    RESIGNATION = "resignation"
    ILLEGAL_MOVE = "illegal_move"
    TIME_LIMIT = "time_limit"
    MOVE_LIMIT = "move_limit"
    REPETITION = "repetition"
    AGREEMENT = "agreement"
    INSUFFICIENT = "insufficient"


class Side(StrEnum):
    FIRST = "first"
    SECOND = "second"


class Winner(StrEnum):
    """'none' is a declared draw."""

    FIRST = "first"
    SECOND = "second"
    NONE = "none"
