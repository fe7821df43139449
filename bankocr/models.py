"""Data models for bank OCR entries and decoding results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Sequence

from bankocr.errors import MalformedEntryError

# Every digit is drawn in a 3x3 block; an entry is nine blocks side by side.
CELL_ROWS = 3
CELL_WIDTH = 3
DIGITS_PER_ENTRY = 9
ENTRY_WIDTH = CELL_WIDTH * DIGITS_PER_ENTRY

ILLEGIBLE_MARK = "?"

GLYPH_ALPHABET = frozenset(" _|")

MAX_ACCOUNT_NUMBER = 10**DIGITS_PER_ENTRY - 1


class EntryStatus(Enum):
    OK = "OK"
    ERR = "ERR"  # legible, checksum fails
    ILL = "ILL"  # at least one illegible digit
    AMB = "AMB"  # several repaired candidates pass the checksum


@dataclass(frozen=True)
class GlyphCell:
    """One digit rendering: three rows of three characters."""

    rows: tuple[str, str, str]

    @classmethod
    def from_text(cls, text: str) -> "GlyphCell":
        rows = text.split("\n")
        if len(rows) != CELL_ROWS:
            raise ValueError(f"Glyph must have {CELL_ROWS} rows, got {len(rows)}")
        return cls(tuple(rows))

    def __str__(self) -> str:
        return "\n".join(self.rows)


@dataclass(frozen=True)
class Entry:
    """
    One account number rendering: three rows of 27 characters.

    Cell j is built from the 3-character slice at offset j*3 of each row.
    """

    rows: tuple[str, str, str]

    @classmethod
    def from_lines(
        cls, lines: Sequence[str], entry_index: Optional[int] = None
    ) -> "Entry":
        """
        Build an entry from raw rows, checking its shape.

        Raises:
            MalformedEntryError: If there are not exactly 3 rows or a row
                is not exactly 27 characters wide.
        """
        if len(lines) != CELL_ROWS:
            raise MalformedEntryError(
                f"Entry must have {CELL_ROWS} rows, got {len(lines)}",
                entry_index=entry_index,
            )
        for row_index, line in enumerate(lines):
            if len(line) != ENTRY_WIDTH:
                raise MalformedEntryError(
                    f"Row {row_index} is {len(line)} characters wide, "
                    f"expected {ENTRY_WIDTH}",
                    entry_index=entry_index,
                    row=row_index,
                    width=len(line),
                )
        return cls(tuple(lines))

    def cell(self, index: int) -> GlyphCell:
        start = index * CELL_WIDTH
        return GlyphCell(
            tuple(row[start : start + CELL_WIDTH] for row in self.rows)
        )

    def cells(self) -> Iterator[GlyphCell]:
        for index in range(DIGITS_PER_ENTRY):
            yield self.cell(index)


def format_account_number(account_number: int) -> str:
    """Render an account number as a 9-character zero-padded string."""
    if not 0 <= account_number <= MAX_ACCOUNT_NUMBER:
        raise ValueError(
            f"Account number {account_number} is outside 0..{MAX_ACCOUNT_NUMBER}"
        )
    return str(account_number).zfill(DIGITS_PER_ENTRY)


@dataclass
class EntryResult:
    """Decoding result for a single entry of a batch."""

    index: int
    token: str  # 9 characters, '?' where a digit was illegible
    account_number: Optional[int] = None
    status: EntryStatus = EntryStatus.OK
    candidates: list[str] = field(default_factory=list)
    confidence: float = 1.0
    warnings: list[str] = field(default_factory=list)

    @property
    def is_legible(self) -> bool:
        return ILLEGIBLE_MARK not in self.token

    @property
    def annotated(self) -> str:
        if self.status is EntryStatus.OK:
            return self.token
        if self.status is EntryStatus.AMB:
            return f"{self.token} AMB {sorted(self.candidates)!r}"
        return f"{self.token} {self.status.value}"

    def to_dict(self) -> dict:
        d = {
            "index": self.index,
            "token": self.token,
            "account_number": self.account_number,
            "status": self.status.value,
            "confidence": round(self.confidence, 4),
            "warnings": self.warnings,
        }
        if self.candidates:
            d["candidates"] = sorted(self.candidates)
        return d
