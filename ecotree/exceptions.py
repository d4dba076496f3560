"""
Custom exceptions for the ecotree package.
"""

from __future__ import annotations

from enum import Enum
from typing import NoReturn, Optional


class EcotreeError(Exception):
    """Base exception for tree handling errors."""

    pass


class InvalidTreeKind(Enum):
    TRUNCATED = "truncated"
    UNEXPECTED_CHARACTER = "unexpected-character"
    UNTERMINATED_QUOTED_LABEL = "unterminated-quoted-label"
    NOT_ENOUGH_LEAVES = "not-enough-leaves"
    NON_NUMERIC_LENGTH = "non-numeric-length"
    NEGATIVE_LENGTH = "negative-length"
    FILE_NOT_FOUND = "file-not-found"


_MESSAGES = {
    InvalidTreeKind.TRUNCATED: "Malformed Newick tree, input ended unexpectedly",
    InvalidTreeKind.UNEXPECTED_CHARACTER: "Malformed Newick tree, unexpected character",
    InvalidTreeKind.UNTERMINATED_QUOTED_LABEL: "Malformed Newick tree, unterminated quoted label",
    InvalidTreeKind.NOT_ENOUGH_LEAVES: "Malformed Newick tree, not enough leaves found",
    InvalidTreeKind.NON_NUMERIC_LENGTH: "Malformed Newick tree, branch length is not a number",
    InvalidTreeKind.NEGATIVE_LENGTH: "Invalid Newick tree, negative branch length",
    InvalidTreeKind.FILE_NOT_FOUND: "File not found",
}


class InvalidTreeError(EcotreeError, ValueError):
    """Raised when a Newick tree cannot be read.

    Attributes:
        kind: The failure category.
        offset: Character offset in the input where the failure was detected,
            or None when the failure is not tied to a position.
        detail: Extra context, e.g. the offending character or token.
    """

    def __init__(
        self,
        kind: InvalidTreeKind,
        offset: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.kind = kind
        self.offset = offset
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        message = _MESSAGES[self.kind]
        if self.offset is not None:
            message += f" at offset {self.offset}"
        if self.detail:
            message += f": {self.detail}"
        return message + "."

    @staticmethod
    def raise_unexpected(char: str, offset: int) -> NoReturn:
        raise InvalidTreeError(
            InvalidTreeKind.UNEXPECTED_CHARACTER, offset, repr(char)
        )
