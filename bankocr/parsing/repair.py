"""Single-stroke repair of illegible or invalid entries."""

import logging
from typing import Iterator, Optional

import numpy as np

from bankocr.engines.table_engine import TableMatchingEngine
from bankocr.models import CELL_ROWS, CELL_WIDTH, Entry, GlyphCell
from bankocr.parsing.parser import mask_digits, read_digits
from bankocr.parsing.validator import validate_checksum

logger = logging.getLogger(__name__)

_DEFAULT_ENGINE = TableMatchingEngine()


def _stroke_options(engine: TableMatchingEngine) -> list[list[set[str]]]:
    """Characters each position takes across the table's renderings."""
    options = [[set() for _ in range(CELL_WIDTH)] for _ in range(CELL_ROWS)]
    for glyph, _ in engine.table:
        for r, row in enumerate(glyph.rows):
            for c, ch in enumerate(row[:CELL_WIDTH]):
                options[r][c].add(ch)
    return options


def _single_stroke_variants(
    cell: GlyphCell, options: list[list[set[str]]]
) -> Iterator[GlyphCell]:
    """Yield every cell reachable by changing one character."""
    grid = np.array([list(row) for row in cell.rows])
    for r in range(CELL_ROWS):
        for c in range(CELL_WIDTH):
            current = grid[r, c]
            for replacement in sorted(options[r][c] - {current}):
                variant = grid.copy()
                variant[r, c] = replacement
                yield GlyphCell(tuple("".join(row) for row in variant))


def repair_candidates(
    entry: Entry, engine: Optional[TableMatchingEngine] = None
) -> list[str]:
    """
    Find account numbers one stroke away from ``entry`` that pass the checksum.

    Only one cell is changed per candidate. When more than one digit is
    illegible no single change can fix the entry and the result is empty.

    Returns:
        Sorted list of candidate tokens.
    """
    engine = engine or _DEFAULT_ENGINE
    digits = read_digits(entry, engine)
    illegible = [i for i, d in enumerate(digits) if d is None]
    if len(illegible) > 1:
        return []

    positions = illegible or range(len(digits))
    options = _stroke_options(engine)
    candidates = set()

    for position in positions:
        for variant in _single_stroke_variants(entry.cell(position), options):
            digit = engine.lookup(variant)
            if digit is None or digit == digits[position]:
                continue
            trial = list(digits)
            trial[position] = digit
            token = mask_digits(trial)
            if validate_checksum(token):
                candidates.add(token)

    logger.debug(
        "Repair of %s produced %d candidate(s)", mask_digits(digits), len(candidates)
    )
    return sorted(candidates)


def entry_confidence(
    entry: Entry, engine: Optional[TableMatchingEngine] = None
) -> float:
    """Mean stroke similarity of each cell to its nearest known glyph."""
    engine = engine or _DEFAULT_ENGINE
    scores = [engine.nearest(cell)[1] for cell in entry.cells()]
    return float(np.mean(scores))
