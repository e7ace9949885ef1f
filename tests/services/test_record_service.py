"""Unit tests for pcn/services/record_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from pcn.core.exceptions import InvalidFieldError, PCNError, RepositoryError
from pcn.core.models import GameRecordModel
from pcn.core.shared_types import Status, Winner
from pcn.services.record_service import (
    AddMoveRequest,
    CreateRecordRequest,
    DeclareWinnerRequest,
    DeleteRecordRequest,
    GetRecordRequest,
    OfferDrawRequest,
    RecordResponse,
    RecordService,
    SetStatusRequest,
    UpdateMetaRequest,
)

# --- MOCK DEPENDENCIES ----
MOCK_SETUP = "8/8/8/8/8/8/8/8 / C/c"


class MockRepository:
    """Mock the GameRecordRepository using a dictionary of record models."""

    def __init__(self) -> None:
        self._records: dict[UUID, GameRecordModel] = {}

    def create_record(self, record: GameRecordModel) -> tuple[GameRecordModel, UUID]:
        record_id = uuid4()
        self._records[record_id] = record
        return record, record_id

    def get_record(self, record_id: UUID) -> GameRecordModel | None:
        return self._records.get(record_id)

    def update_record(
        self, record_id: UUID, record: GameRecordModel
    ) -> GameRecordModel | None:
        if record_id not in self._records:
            return None
        self._records[record_id] = record
        return record

    def delete_record(self, record_id: UUID) -> GameRecordModel | None:
        return self._records.pop(record_id, None)

    def list_record_ids(self) -> list[UUID]:
        return list(self._records)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._records.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> RecordService:
    return RecordService(mock_repository)


@pytest.fixture
def record_id(service: RecordService) -> UUID:
    """ID of a freshly created record without moves."""
    return service.create_record(CreateRecordRequest(setup=MOCK_SETUP)).record_id


# --- SERVICE - CREATE RECORD ----
def test_create_record(mock_repository: MockRepository, service: RecordService) -> None:
    """Check that the record is created, persisted in repo, and the response has the appropriate information."""
    request = CreateRecordRequest(
        setup=MOCK_SETUP,
        moves=[["e2-e4", 2.5]],
        status="in_progress",
        meta={"event": "Open", "round": 1},
        sides={"first": {"name": "Alice"}},
    )
    response = service.create_record(request)

    # Check response structure
    assert isinstance(response, RecordResponse)
    assert isinstance(response.record_id, UUID)

    # Check response data
    assert response.move_count == 1
    assert response.status == Status.IN_PROGRESS
    assert response.winner is None
    assert response.document == {
        "setup": MOCK_SETUP,
        "moves": [["e2-e4", 2.5]],
        "status": "in_progress",
        "meta": {"event": "Open", "round": 1},
        "sides": {"first": {"name": "Alice"}},
    }

    # Check persisted data
    stored = mock_repository.get_record(response.record_id)
    assert stored is not None
    assert stored.setup == MOCK_SETUP
    assert stored.moves == [["e2-e4", 2.5]]
    assert stored.status == "in_progress"
    assert stored.meta == {"event": "Open", "round": 1}


def test_create_with_invalid_document(
    mock_repository: MockRepository, service: RecordService
) -> None:
    """Make sure service propagates the exceptions, and nothing is stored."""
    request = CreateRecordRequest(setup=MOCK_SETUP, moves=[["e9", 1.0]])

    # Test any top-level custom exception is raised (specific exception types are responsibility of other layers)
    with pytest.raises(PCNError):
        _ = service.create_record(request)
    assert mock_repository.list_record_ids() == []


# --- SERVICE - GET RECORD ----
def test_get_record(service: RecordService, record_id: UUID) -> None:
    response = service.get_record(GetRecordRequest(record_id=record_id))
    assert response.record_id == record_id
    assert response.document == {"setup": MOCK_SETUP, "moves": []}
    assert response.move_count == 0


def test_attempt_to_find_unknown_record(service: RecordService) -> None:
    with pytest.raises(RepositoryError):
        _ = service.get_record(GetRecordRequest(record_id=uuid4()))


# --- SERVICE - UPDATES ----
def test_add_moves(
    mock_repository: MockRepository, service: RecordService, record_id: UUID
) -> None:
    service.add_move(AddMoveRequest(record_id=record_id, pan="e2-e4", seconds=2.5))
    response = service.add_move(AddMoveRequest(record_id=record_id, pan="e7-e5", seconds=3))

    assert response.move_count == 2
    assert response.document["moves"] == [["e2-e4", 2.5], ["e7-e5", 3.0]]

    stored = mock_repository.get_record(record_id)
    assert stored is not None
    assert stored.moves == [["e2-e4", 2.5], ["e7-e5", 3.0]]


def test_attempt_invalid_move(
    mock_repository: MockRepository, service: RecordService, record_id: UUID
) -> None:
    """The stored record stays as it was."""
    with pytest.raises(InvalidFieldError) as exc_info:
        service.add_move(AddMoveRequest(record_id=record_id, pan="e2e4"))
    assert exc_info.value.field == "moves[0].pan"

    stored = mock_repository.get_record(record_id)
    assert stored is not None
    assert stored.moves == []


def test_add_move_to_unknown_record(service: RecordService) -> None:
    with pytest.raises(RepositoryError):
        service.add_move(AddMoveRequest(record_id=uuid4(), pan="e2-e4"))


def test_set_status(service: RecordService, record_id: UUID) -> None:
    response = service.set_status(SetStatusRequest(record_id=record_id, status="checkmate"))
    assert response.status == Status.CHECKMATE
    assert response.document["status"] == "checkmate"

    cleared = service.set_status(SetStatusRequest(record_id=record_id, status=None))
    assert cleared.status is None
    assert "status" not in cleared.document


def test_offer_and_withdraw_draw(service: RecordService, record_id: UUID) -> None:
    response = service.offer_draw(OfferDrawRequest(record_id=record_id, side="second"))
    assert response.document["draw_offered_by"] == "second"

    response = service.offer_draw(OfferDrawRequest(record_id=record_id, side=None))
    assert "draw_offered_by" not in response.document


def test_declare_winner(service: RecordService, record_id: UUID) -> None:
    response = service.declare_winner(DeclareWinnerRequest(record_id=record_id, winner="none"))
    assert response.winner == Winner.NONE
    assert response.document["winner"] == "none"


def test_update_meta_merges(service: RecordService, record_id: UUID) -> None:
    service.update_meta(UpdateMetaRequest(record_id=record_id, meta={"event": "Open"}))
    response = service.update_meta(UpdateMetaRequest(record_id=record_id, meta={"round": 4}))
    assert response.document["meta"] == {"event": "Open", "round": 4}


def test_update_meta_with_invalid_field(service: RecordService, record_id: UUID) -> None:
    with pytest.raises(InvalidFieldError) as exc_info:
        service.update_meta(UpdateMetaRequest(record_id=record_id, meta={"round": 0}))
    assert exc_info.value.field == "meta.round"


# --- SERVICE - LIST / DELETE ----
def test_list_and_delete_records(service: RecordService) -> None:
    first = service.create_record(CreateRecordRequest(setup=MOCK_SETUP)).record_id
    second = service.create_record(CreateRecordRequest(setup=MOCK_SETUP)).record_id
    assert service.list_records() == [first, second]

    service.delete_record(DeleteRecordRequest(record_id=first))
    assert service.list_records() == [second]
    with pytest.raises(RepositoryError):
        service.get_record(GetRecordRequest(record_id=first))


def test_delete_unknown_record(service: RecordService) -> None:
    with pytest.raises(RepositoryError):
        service.delete_record(DeleteRecordRequest(record_id=uuid4()))


# --- SERVICE + SQL REPOSITORY ---
def test_record_lifecycle_in_database(sql_record_service: RecordService) -> None:
    """Create, play, finish and reload a record through the SQL repository."""
    service = sql_record_service
    record_id = service.create_record(
        CreateRecordRequest(
            setup=MOCK_SETUP,
            sides={"first": {"style": "CHESS"}, "second": {"style": "chess"}},
        )
    ).record_id

    service.add_move(AddMoveRequest(record_id=record_id, pan="e2-e4", seconds=1.5))
    service.add_move(AddMoveRequest(record_id=record_id, pan="e7-e5", seconds=2))
    service.set_status(SetStatusRequest(record_id=record_id, status="resignation"))
    service.declare_winner(DeclareWinnerRequest(record_id=record_id, winner="first"))

    response = service.get_record(GetRecordRequest(record_id=record_id))
    assert response.document == {
        "setup": MOCK_SETUP,
        "moves": [["e2-e4", 1.5], ["e7-e5", 2.0]],
        "status": "resignation",
        "winner": "first",
        "sides": {"first": {"style": "CHESS"}, "second": {"style": "chess"}},
    }
    assert service.list_records() == [record_id]
