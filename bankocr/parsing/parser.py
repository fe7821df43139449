"""Decode entries into account numbers."""

from typing import Optional, Sequence

from bankocr.engines.base import BaseGlyphEngine
from bankocr.engines.table_engine import TableMatchingEngine
from bankocr.errors import MalformedEntryError, UnrecognizedDigitError
from bankocr.models import CELL_ROWS, ENTRY_WIDTH, ILLEGIBLE_MARK, Entry

_DEFAULT_ENGINE = TableMatchingEngine()


def _check_shape(entry: Entry) -> None:
    if len(entry.rows) != CELL_ROWS:
        raise MalformedEntryError(
            f"Entry must have {CELL_ROWS} rows, got {len(entry.rows)}"
        )
    for row_index, row in enumerate(entry.rows):
        if len(row) != ENTRY_WIDTH:
            raise MalformedEntryError(
                f"Row {row_index} is {len(row)} characters wide, "
                f"expected {ENTRY_WIDTH}",
                row=row_index,
                width=len(row),
            )


def decode(entry: Entry, engine: Optional[BaseGlyphEngine] = None) -> int:
    """
    Decode an entry into its account number.

    Cells are classified left to right and accumulated as
    ``acc * 10 + digit``; the leftmost digit is the most significant.

    Raises:
        MalformedEntryError: If there are not exactly 3 rows or a row
            is not exactly 27 characters wide. Checked before any cell
            is classified.
        UnrecognizedDigitError: On the first cell that matches no digit.
    """
    engine = engine or _DEFAULT_ENGINE
    _check_shape(entry)

    account_number = 0
    for position, cell in enumerate(entry.cells()):
        try:
            digit = engine.classify(cell)
        except UnrecognizedDigitError:
            raise UnrecognizedDigitError(cell, position) from None
        account_number = account_number * 10 + digit
    return account_number


def decode_lines(
    lines: Sequence[str], engine: Optional[BaseGlyphEngine] = None
) -> int:
    """Decode three raw rows, validating their shape first."""
    return decode(Entry.from_lines(lines), engine)


def read_digits(
    entry: Entry, engine: Optional[BaseGlyphEngine] = None
) -> list[Optional[int]]:
    """Classify every cell, using None for illegible ones."""
    engine = engine or _DEFAULT_ENGINE
    _check_shape(entry)

    digits = []
    for cell in entry.cells():
        try:
            digits.append(engine.classify(cell))
        except UnrecognizedDigitError:
            digits.append(None)
    return digits


def mask_digits(digits: Sequence[Optional[int]]) -> str:
    """Render digits as a token, marking illegible ones with '?'."""
    return "".join(ILLEGIBLE_MARK if d is None else str(d) for d in digits)
