"""Style names (SNN). ex) 'CHESS' for the first player, 'shogi' for the second."""

import re
from dataclasses import dataclass
from typing import Self

from pcn.core.exceptions import InvalidSNNError
from pcn.core.shared_types import Side

SNN_PATTERN = re.compile(r"[A-Z][A-Z0-9]*|[a-z][a-z0-9]*")


def is_valid_snn(name: str) -> bool:
    """Letters and digits, starting with a letter. Either all uppercase or all lowercase."""
    return isinstance(name, str) and SNN_PATTERN.fullmatch(name) is not None


@dataclass(frozen=True)
class StyleName:
    name: str

    @classmethod
    def from_string(cls, name: str) -> Self:
        if not is_valid_snn(name):
            raise InvalidSNNError(f"Cannot interpret supplied value as SNN: {name!r}")
        return cls(name)

    def to_string(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name

    @property
    def side(self) -> Side:
        """Uppercase names belong to the first player."""
        return Side.FIRST if self.name.isupper() else Side.SECOND
