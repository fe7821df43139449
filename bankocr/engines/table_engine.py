"""Lookup-table engine for seven-segment style glyph recognition."""

import logging
import warnings
from pathlib import Path
from typing import Iterator, Optional, Sequence

import numpy as np

from bankocr.engines.base import BaseGlyphEngine
from bankocr.errors import UnrecognizedDigitError
from bankocr.models import CELL_ROWS, CELL_WIDTH, GlyphCell

logger = logging.getLogger(__name__)

DIGITS_COUNT = 10

# Canonical renderings of 0-9, side by side in one 3 x 30 block.
_CANONICAL_GLYPHS = (
    " _     _  _     _  _  _  _  _ ",
    "| |  | _| _||_||_ |_   ||_||_|",
    "|_|  ||_  _|  | _||_|  ||_| _|",
)


def _split_cells(rows: Sequence[str], count: int) -> list[GlyphCell]:
    return [
        GlyphCell(
            tuple(row[i * CELL_WIDTH : (i + 1) * CELL_WIDTH] for row in rows)
        )
        for i in range(count)
    ]


class GlyphTable:
    """
    Immutable ordered mapping from glyph renderings to digits.

    Lookups scan the entries in order and return the first exact match,
    so a custom table with duplicate renderings still resolves
    deterministically.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[tuple[GlyphCell, int]]):
        entries = tuple(entries)
        for _, digit in entries:
            if not 0 <= digit <= 9:
                raise ValueError(f"Digit must be in 0..9, got {digit}")
        object.__setattr__(self, "_entries", entries)

    def __setattr__(self, name, value):
        raise AttributeError("GlyphTable is immutable")

    def __iter__(self) -> Iterator[tuple[GlyphCell, int]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"GlyphTable({len(self._entries)} glyphs)"

    def lookup(self, cell: GlyphCell) -> Optional[int]:
        """Return the digit for ``cell``, or None when nothing matches."""
        for glyph, digit in self._entries:
            if glyph == cell:
                return digit
        return None

    def glyph_for(self, digit: int) -> GlyphCell:
        """Return the first rendering registered for ``digit``."""
        for glyph, value in self._entries:
            if value == digit:
                return glyph
        raise KeyError(digit)


DEFAULT_GLYPH_TABLE = GlyphTable(
    [
        (cell, digit)
        for digit, cell in enumerate(_split_cells(_CANONICAL_GLYPHS, DIGITS_COUNT))
    ]
)


def load_glyph_table(path: Path | str) -> GlyphTable:
    """
    Load a glyph table from a file rendering digits 0-9 side by side.

    The file holds three rows of 30 characters, laid out like an entry.
    Trailing blank lines are ignored.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file does not have the expected shape.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Glyph file not found: {path}")

    rows = path.read_text(encoding="utf-8").splitlines()
    while rows and not rows[-1].strip():
        rows.pop()

    width = CELL_WIDTH * DIGITS_COUNT
    if len(rows) != CELL_ROWS or any(len(row) != width for row in rows):
        raise ValueError(
            f"Glyph file {path} must have {CELL_ROWS} rows of {width} characters"
        )

    cells = _split_cells(rows, DIGITS_COUNT)
    seen = set()
    for digit, cell in enumerate(cells):
        if cell in seen:
            warnings.warn(
                f"Glyph for digit {digit} in {path} duplicates an earlier "
                "digit and will never match"
            )
        seen.add(cell)

    logger.debug("Loaded glyph table from %s", path)
    return GlyphTable([(cell, digit) for digit, cell in enumerate(cells)])


class TableMatchingEngine(BaseGlyphEngine):
    """
    Primary recognition engine using exact lookup against a glyph table.

    A cell is legible only if it matches one of the table's renderings
    exactly. ``nearest`` gives a graded score against the closest
    rendering, used for confidence reporting and repair.
    """

    def __init__(
        self,
        glyphs_file: Path | str | None = None,
        table: GlyphTable | None = None,
    ):
        if table is None:
            table = (
                load_glyph_table(glyphs_file)
                if glyphs_file is not None
                else DEFAULT_GLYPH_TABLE
            )
        self.table = table

    @property
    def name(self) -> str:
        return "table_matching"

    def classify(self, cell: GlyphCell) -> int:
        digit = self.table.lookup(cell)
        if digit is None:
            raise UnrecognizedDigitError(cell)
        return digit

    def lookup(self, cell: GlyphCell) -> Optional[int]:
        return self.table.lookup(cell)

    def nearest(self, cell: GlyphCell) -> tuple[Optional[int], float]:
        """Return the closest digit and its stroke similarity in [0, 1]."""
        best_digit = None
        best_score = 0.0
        for glyph, digit in self.table:
            score = stroke_similarity(cell, glyph)
            if score > best_score:
                best_score = score
                best_digit = digit
        return best_digit, best_score


def classify(cell: GlyphCell, table: GlyphTable = DEFAULT_GLYPH_TABLE) -> int:
    """Classify a cell against ``table``, raising on no match."""
    digit = table.lookup(cell)
    if digit is None:
        raise UnrecognizedDigitError(cell)
    return digit


def _cell_grid(cell: GlyphCell) -> Optional[np.ndarray]:
    """Return the cell as a 3x3 character array, or None if misshapen."""
    if len(cell.rows) != CELL_ROWS or any(len(r) != CELL_WIDTH for r in cell.rows):
        return None
    return np.array([list(row) for row in cell.rows])


def stroke_distance(cell: GlyphCell, other: GlyphCell) -> int:
    """Count positions where two cells differ; misshapen cells differ everywhere."""
    a = _cell_grid(cell)
    b = _cell_grid(other)
    if a is None or b is None:
        return CELL_ROWS * CELL_WIDTH
    return int(np.count_nonzero(a != b))


def stroke_similarity(cell: GlyphCell, other: GlyphCell) -> float:
    return 1.0 - stroke_distance(cell, other) / (CELL_ROWS * CELL_WIDTH)
