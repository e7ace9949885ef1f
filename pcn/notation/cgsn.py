"""Game status tokens (CGSN). The vocabulary is closed, see Status."""

from pcn.core.exceptions import InvalidStatusError
from pcn.core.shared_types import Status

# Statuses a rules engine could read off the position itself. The others need to be declared (resignation, agreement, ...)
INFERABLE_STATUSES = frozenset(
    {
        Status.CHECKMATE,
        Status.STALEMATE,
        Status.BARE_KING,
        Status.MARE_KING,
        Status.INSUFFICIENT,
    }
)


def is_valid_status(token: str) -> bool:
    return isinstance(token, str) and token in Status.__members__.values()


def parse_status(token: str | Status) -> Status:
    if isinstance(token, Status):
        return token
    if not is_valid_status(token):
        raise InvalidStatusError(
            f"Invalid status value: {token!r}. \nPick one from {','.join(Status)}"
        )
    return Status(token)


def is_inferable(status: Status) -> bool:
    return status in INFERABLE_STATUSES
