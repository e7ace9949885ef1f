"""Protocol repository (SQLAlchemy implementation in sql_repository.py, in-memory ones for tests)"""

from typing import Protocol
from uuid import UUID

from pcn.core.models import GameRecordModel


class GameRecordRepository(Protocol):
    """Persistence layer orchestration"""

    def get_record(self, record_id: UUID) -> GameRecordModel | None:
        """Get record by ID, if it exists."""
        ...

    def create_record(self, record: GameRecordModel) -> tuple[GameRecordModel, UUID]:
        """Store new record and return the stored data + newly created record ID."""
        ...

    def update_record(
        self, record_id: UUID, record: GameRecordModel
    ) -> GameRecordModel | None:
        """Replace the data of an existing record."""
        ...

    def delete_record(self, record_id: UUID) -> GameRecordModel | None:
        """Remove a record."""
        ...

    def list_record_ids(self) -> list[UUID]:
        """IDs of all stored records, oldest first."""
        ...
