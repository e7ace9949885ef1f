"""Unit tests for pcn/notation/cgsn.py"""

import pytest

from pcn.core.exceptions import InvalidStatusError
from pcn.core.shared_types import Status
from pcn.notation.cgsn import is_inferable, is_valid_status, parse_status


@pytest.mark.parametrize("token", [status.value for status in Status])
def test_every_status_token_parses(token: str) -> None:
    assert is_valid_status(token)
    assert parse_status(token) == Status(token)


def test_status_members_pass_through() -> None:
    assert parse_status(Status.CHECKMATE) is Status.CHECKMATE


@pytest.mark.parametrize("token", ["", "Checkmate", "CHECKMATE", "draw", "in progress", "resigned"])
def test_unknown_status_tokens(token: str) -> None:
    assert not is_valid_status(token)
    with pytest.raises(InvalidStatusError, match="Invalid status value"):
        parse_status(token)


def test_non_string_status() -> None:
    assert not is_valid_status(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidStatusError):
        parse_status(3)  # type: ignore[arg-type]


def test_inferable_statuses() -> None:
    assert is_inferable(Status.CHECKMATE)
    assert is_inferable(Status.STALEMATE)
    assert not is_inferable(Status.RESIGNATION)
    assert not is_inferable(Status.IN_PROGRESS)
    assert not is_inferable(Status.AGREEMENT)
