"""Orchestration of communication from API layer to the game record model and persistence layers (and the reverse direction)."""

import logging
from typing import Callable
from uuid import UUID

from pcn.api.models import (
    AddMoveRequest,
    CreateRecordRequest,
    DeclareWinnerRequest,
    DeleteRecordRequest,
    GetRecordRequest,
    OfferDrawRequest,
    RecordResponse,
    SetStatusRequest,
    UpdateMetaRequest,
)
from pcn.core.exceptions import RepositoryError
from pcn.core.models import GameRecordModel
from pcn.db.repository import GameRecordRepository
from pcn.game.game import Game

logger = logging.getLogger(__name__)


class RecordService:
    """Orchestration of layers for game records."""

    def __init__(self, repository: GameRecordRepository) -> None:
        self.repo = repository

    # -- API logic ---
    def create_record(self, request: CreateRecordRequest) -> RecordResponse:
        """Validate the document in the request and store it as a new record."""

        # Build (and validate) the Game, and convert into GameRecordModel
        game = Game.from_dict(request.to_document())

        # Store the GameRecordModel in the repository
        stored_record, record_id = self.repo.create_record(game.to_model())
        logger.info("Created game record %s (%d moves)", record_id, game.move_count)

        return self._create_record_response(record_id, stored_record)

    def get_record(self, request: GetRecordRequest) -> RecordResponse:
        record = self._fetch_record(request.record_id)
        return self._create_record_response(request.record_id, record)

    def add_move(self, request: AddMoveRequest) -> RecordResponse:
        """Append one [PAN, seconds] move to a stored record."""
        return self._update(
            request.record_id, lambda game: game.add_move([request.pan, request.seconds])
        )

    def set_status(self, request: SetStatusRequest) -> RecordResponse:
        return self._update(request.record_id, lambda game: game.with_status(request.status))

    def offer_draw(self, request: OfferDrawRequest) -> RecordResponse:
        return self._update(
            request.record_id, lambda game: game.with_draw_offered_by(request.side)
        )

    def declare_winner(self, request: DeclareWinnerRequest) -> RecordResponse:
        return self._update(request.record_id, lambda game: game.with_winner(request.winner))

    def update_meta(self, request: UpdateMetaRequest) -> RecordResponse:
        """Merge new metadata into the existing metadata."""
        return self._update(request.record_id, lambda game: game.with_meta(request.meta))

    def list_records(self) -> list[UUID]:
        return self.repo.list_record_ids()

    def delete_record(self, request: DeleteRecordRequest) -> None:
        """Handle a request to delete a game record."""
        deleted = self.repo.delete_record(request.record_id)
        if deleted is None:
            raise RepositoryError(f"Game record with {request.record_id=} not found.")
        logger.info("Deleted game record %s", request.record_id)

    # -- Internal helpers --
    def _update(
        self, record_id: UUID, transform: Callable[[Game], Game]
    ) -> RecordResponse:
        """
        1. Retrieve the persisted record
        2. Create a Game from it
        3. Apply the (immutable) transformation: returns a new, validated Game
        4. Store the new state and respond
        """
        stored_record = self._fetch_record(record_id)
        game = Game.from_model(stored_record)

        updated = transform(game).to_model()
        self.repo.update_record(record_id, updated)
        logger.info("Updated game record %s", record_id)

        return self._create_record_response(record_id, updated)

    def _create_record_response(
        self, record_id: UUID, record: GameRecordModel
    ) -> RecordResponse:
        """Convert info in GameRecordModel to a RecordResponse (for record with given ID.)"""
        game = Game.from_model(record)
        return RecordResponse(
            record_id=record_id,
            document=game.to_dict(),
            move_count=game.move_count,
            status=game.status,
            winner=game.winner,
        )

    def _fetch_record(self, record_id: UUID) -> GameRecordModel:
        """Attempt to find the record in the repository and raise error if it fails."""
        record = self.repo.get_record(record_id)
        if record is None:
            raise RepositoryError(f"Game record with {record_id=} not found.")
        return record
