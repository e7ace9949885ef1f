"""Implementation of (GameRecord)Repository using SQLAlchemy"""

import logging
from copy import deepcopy
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from pcn.core.models import GameRecordModel
from pcn.db.schema import DBGameRecord

logger = logging.getLogger(__name__)


class SQLGameRecordRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_record(self, record_id: UUID) -> GameRecordModel | None:
        """Get record by ID, if it exists."""
        record_db = self._fetch_record(record_id)
        if record_db:
            return self._to_model(record_db)
        return None

    def create_record(self, record: GameRecordModel) -> tuple[GameRecordModel, UUID]:
        """Store new record and return the stored data + newly created record ID."""
        new_id = uuid4()
        record_db = DBGameRecord(id=new_id)
        self._copy_into(record_db, record)
        self.db.add(record_db)
        self.db.commit()
        self.db.refresh(record_db)
        logger.debug("Stored game record %s", new_id)
        return self._to_model(record_db), new_id

    def update_record(
        self, record_id: UUID, record: GameRecordModel
    ) -> GameRecordModel | None:
        """Replace the data of an existing record."""
        record_db = self._fetch_record(record_id)
        if not record_db:
            return None
        self._copy_into(record_db, record)
        self.db.commit()
        self.db.refresh(record_db)
        logger.debug("Updated game record %s", record_id)
        return self._to_model(record_db)

    def delete_record(self, record_id: UUID) -> GameRecordModel | None:
        """Remove a record."""
        record_db = self._fetch_record(record_id)
        if not record_db:
            return None
        record = self._to_model(record_db)
        self.db.delete(record_db)
        self.db.commit()
        logger.debug("Deleted game record %s", record_id)
        return record

    def list_record_ids(self) -> list[UUID]:
        """IDs of all stored records, oldest first."""
        query = select(DBGameRecord.id).order_by(DBGameRecord.created_at)
        return list(self.db.scalars(query))

    def _fetch_record(self, record_id: UUID) -> DBGameRecord | None:
        query = select(DBGameRecord).where(DBGameRecord.id == record_id)
        return self.db.scalar(query)

    def _copy_into(self, record_db: DBGameRecord, record: GameRecordModel) -> None:
        """
        NOTE: JSON columns are assigned fresh copies. SQLAlchemy does not track in-place changes of JSON values,
        and the caller keeps ownership of its own lists/dicts.
        """
        record_db.setup = record.setup
        record_db.moves = [list(move) for move in record.moves]
        record_db.status = record.status
        record_db.draw_offered_by = record.draw_offered_by
        record_db.winner = record.winner
        record_db.meta = deepcopy(record.meta)
        record_db.sides = deepcopy(record.sides)

    def _to_model(self, record_db: DBGameRecord) -> GameRecordModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameRecordModel(
            setup=record_db.setup,
            moves=[list(move) for move in record_db.moves],
            status=record_db.status,
            draw_offered_by=record_db.draw_offered_by,
            winner=record_db.winner,
            meta=deepcopy(record_db.meta),
            sides=deepcopy(record_db.sides),
        )
