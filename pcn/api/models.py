"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from pcn.core.exceptions import InvalidRequestError
from pcn.core.shared_types import Side, Status, Winner

PAN = str
Seconds = float


# --- REQUEST MODELS ---
class CreateRecordRequest(BaseModel):
    setup: str
    moves: list[tuple[PAN, Seconds]] = Field(default_factory=list)
    status: Optional[Status] = None
    draw_offered_by: Optional[Side] = None
    winner: Optional[Winner] = None
    meta: dict[str, Any] = Field(default_factory=dict)
    sides: dict[str, Any] = Field(default_factory=dict)

    @field_validator("setup")
    @classmethod
    def validate_setup(cls, value: str) -> str:
        parts = value.strip().split(" ")
        if len(parts) != 3:
            raise InvalidRequestError(
                "FEEN string must contain 3 space-separated parts."
            )
        return value.strip()

    def to_document(self) -> dict[str, Any]:
        """PCN document with the absent optional fields left out."""
        document: dict[str, Any] = {
            "setup": self.setup,
            "moves": [[pan, seconds] for pan, seconds in self.moves],
            "meta": self.meta,
            "sides": self.sides,
        }
        for name in ("status", "draw_offered_by", "winner"):
            value = getattr(self, name)
            if value is not None:
                document[name] = value.value
        return document


class GetRecordRequest(BaseModel):
    record_id: UUID


class DeleteRecordRequest(BaseModel):
    record_id: UUID


class AddMoveRequest(BaseModel):
    record_id: UUID
    pan: PAN
    seconds: Seconds = 0.0

    @field_validator("seconds")
    @classmethod
    def validate_seconds(cls, value: float) -> float:
        if value < 0:
            raise InvalidRequestError(
                f"Time spent on a move cannot be negative: {value!r} seconds."
            )
        return value


class SetStatusRequest(BaseModel):
    record_id: UUID
    status: Optional[Status]


class OfferDrawRequest(BaseModel):
    """side=None withdraws the offer"""

    record_id: UUID
    side: Optional[Side]


class DeclareWinnerRequest(BaseModel):
    record_id: UUID
    winner: Optional[Winner]


class UpdateMetaRequest(BaseModel):
    record_id: UUID
    meta: dict[str, Any]


# --- RESPONSE MODELS ---
class RecordResponse(BaseModel):
    record_id: UUID
    document: dict[str, Any]
    move_count: int
    status: Optional[Status] = None
    winner: Optional[Winner] = None
