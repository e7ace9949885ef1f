"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The record is kept in the shape of a PCN document (plain strings, lists and dicts), so the
persistence layer never needs to know about the value objects of the domain layer.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Type alias to make GameRecordModel easier to read: [PAN, seconds]
TimedMove = list[Any]


@dataclass
class GameRecordModel:
    """Transport-safe representation of a game record used between Service, DB, and Game layers."""

    setup: str
    moves: list[TimedMove] = field(default_factory=list)
    status: Optional[str] = None
    draw_offered_by: Optional[str] = None
    winner: Optional[str] = None
    meta: dict[str, Any] = field(default_factory=dict)
    sides: dict[str, Any] = field(default_factory=dict)
