"""Exceptions raised while decoding bank OCR entries."""

from typing import Optional


class DecodeError(ValueError):
    """Base class for entry decoding failures."""


class MalformedEntryError(DecodeError):
    """A line group does not have the 3 x 27 shape of an entry."""

    def __init__(
        self,
        message: str,
        entry_index: Optional[int] = None,
        row: Optional[int] = None,
        width: Optional[int] = None,
    ):
        if entry_index is not None:
            message = f"Entry {entry_index}: {message}"
        super().__init__(message)
        self.entry_index = entry_index
        self.row = row
        self.width = width


class UnrecognizedDigitError(DecodeError):
    """A glyph cell matches none of the known digit renderings."""

    def __init__(self, cell=None, position: Optional[int] = None):
        if position is None:
            message = "Failed to parse digit"
        else:
            message = f"Failed to parse digit at position {position}"
        super().__init__(message)
        self.cell = cell
        self.position = position
