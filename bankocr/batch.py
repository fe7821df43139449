"""Batch decoding of multi-entry line streams."""

import logging
from typing import Iterable, Iterator, Optional

from bankocr.engines.base import BaseGlyphEngine
from bankocr.engines.table_engine import TableMatchingEngine
from bankocr.errors import UnrecognizedDigitError
from bankocr.models import (
    CELL_ROWS,
    Entry,
    EntryResult,
    EntryStatus,
    format_account_number,
)
from bankocr.parsing.parser import decode, mask_digits, read_digits
from bankocr.parsing.repair import entry_confidence, repair_candidates
from bankocr.parsing.validator import classify_status, validate_entry_result

logger = logging.getLogger(__name__)

REPORT_SEPARATOR = "\n"


def iter_entries(lines: Iterable[str]) -> Iterator[Entry]:
    """
    Group lines three at a time into entries.

    Line terminators are stripped; nothing else is normalized. Empty lines
    are held back until a non-empty line follows, so blank lines at the end
    of the stream are ignored. A final group of fewer than three lines ends
    the stream without being decoded.

    Raises:
        MalformedEntryError: If a complete group is not 3 x 27.
    """
    group: list[str] = []
    blanks: list[str] = []
    index = 0
    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            blanks.append(line)
            continue

        for row in [*blanks, line]:
            group.append(row)
            if len(group) == CELL_ROWS:
                yield Entry.from_lines(group, entry_index=index)
                index += 1
                group = []
        blanks = []

    if group or blanks:
        logger.debug(
            "Ignoring %d trailing line(s) after %d entries",
            len(group) + len(blanks),
            index,
        )


def _decode_token(entry: Entry, engine: Optional[BaseGlyphEngine]) -> str:
    try:
        return format_account_number(decode(entry, engine))
    except UnrecognizedDigitError as e:
        token = mask_digits(read_digits(entry, engine))
        logger.warning("Illegible entry %s (first bad digit at %d)", token, e.position)
        return token


def decode_stream(
    lines: Iterable[str], engine: Optional[BaseGlyphEngine] = None
) -> str:
    """
    Decode a stream of entries into a newline-joined report.

    Each entry yields a 9-character token: the zero-padded account number,
    or the legible digits with '?' at each illegible position. Tokens are
    separated by a single newline with none after the last.

    Raises:
        MalformedEntryError: If any entry has the wrong shape. No partial
            report is returned.
    """
    tokens = [_decode_token(entry, engine) for entry in iter_entries(lines)]
    return REPORT_SEPARATOR.join(tokens)


def decode_entries(
    lines: Iterable[str],
    engine: Optional[TableMatchingEngine] = None,
    repair: bool = False,
) -> list[EntryResult]:
    """
    Decode a stream of entries into structured results with a status.

    Args:
        lines: Raw input lines, three per entry.
        engine: Table engine to classify with (default glyph table).
        repair: Try single-stroke fixes for ILL and ERR entries.

    Returns:
        One EntryResult per complete entry, in input order.
    """
    results = []
    for index, entry in enumerate(iter_entries(lines)):
        token = mask_digits(read_digits(entry, engine))
        result = EntryResult(
            index=index,
            token=token,
            account_number=int(token) if token.isdigit() else None,
            status=classify_status(token),
            confidence=entry_confidence(entry, engine),
        )

        repaired_from = None
        if repair and result.status is not EntryStatus.OK:
            candidates = repair_candidates(entry, engine)
            if len(candidates) == 1:
                repaired_from = result.token
                result.token = candidates[0]
                result.account_number = int(candidates[0])
                result.status = EntryStatus.OK
            elif candidates:
                result.status = EntryStatus.AMB
                result.candidates = candidates

        result.warnings = validate_entry_result(result)
        if repaired_from is not None:
            result.warnings.append(f"Repaired from {repaired_from}")
        results.append(result)

    return results


def annotate_stream(
    lines: Iterable[str],
    engine: Optional[TableMatchingEngine] = None,
    repair: bool = False,
) -> str:
    """Report with a status suffix (ERR, ILL, AMB) on each unusable entry."""
    results = decode_entries(lines, engine, repair=repair)
    return REPORT_SEPARATOR.join(r.annotated for r in results)
