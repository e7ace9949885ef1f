"""
Custom exceptions used across layers.

Notation errors are raised by the parsers of the sub-formats (FEEN, PAN, SNN, CGSN).
Record errors are raised while building a game record and always name the offending field.
"""


class PCNError(Exception):
    """Top-level exception for anything raised by this package."""


# --- NOTATION (sub-format parsers) ---
class NotationError(PCNError):
    """A string could not be parsed in one of the sub-formats."""


class InvalidFEENError(NotationError):
    pass


class InvalidPANError(NotationError):
    pass


class InvalidSNNError(NotationError):
    pass


class InvalidStatusError(NotationError):
    pass


# --- RECORD (Game / Meta / Sides / Player) ---
class RecordError(PCNError, ValueError):
    """A game record (or one of its parts) failed validation."""


class MissingFieldError(RecordError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"missing required field {field!r}")


class InvalidFieldError(RecordError):
    """
    A present field failed its own rule.

    `field` is a path into the document: dotted for nested objects, with indices for list elements.
    ex) 'sides.first.elo', 'moves[2].seconds', 'sides.second.periods[0].time'
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")

    def nested_under(self, parent: str, context: str) -> "InvalidFieldError":
        """Same error, re-rooted under a parent field. Keeps the concrete error type."""
        separator = "" if self.field.startswith("[") else "."
        return type(self)(f"{parent}{separator}{self.field}", f"{context}: {self.reason}")


class InvalidStructureError(InvalidFieldError):
    """The document (or a list inside it) does not have the expected shape."""


class CollaboratorRejectedError(InvalidFieldError):
    """One of the notation parsers rejected the value. The parser's message is kept as the reason."""


# --- APPLICATION ---
class InvalidRequestError(PCNError):
    pass


class RepositoryError(PCNError):
    pass
