"""Render account numbers back into glyph rows."""

from bankocr.engines.table_engine import DEFAULT_GLYPH_TABLE, GlyphTable
from bankocr.models import CELL_ROWS, DIGITS_PER_ENTRY, format_account_number


def render_account_number(
    account: int | str, table: GlyphTable = DEFAULT_GLYPH_TABLE
) -> list[str]:
    """
    Draw an account number as the three 27-character rows of an entry.

    Args:
        account: Integer in 0..999999999, or a 9-digit string.
        table: Glyph table supplying the digit renderings.

    Returns:
        The three rows, without line terminators.
    """
    token = format_account_number(account) if isinstance(account, int) else account
    if len(token) != DIGITS_PER_ENTRY or not token.isdigit():
        raise ValueError(f"Expected {DIGITS_PER_ENTRY} digits, got {token!r}")

    glyphs = [table.glyph_for(int(d)) for d in token]
    return ["".join(g.rows[r] for g in glyphs) for r in range(CELL_ROWS)]


def render_entries(accounts, table: GlyphTable = DEFAULT_GLYPH_TABLE) -> str:
    """Render several account numbers as a newline-terminated entry file."""
    lines = []
    for account in accounts:
        lines.extend(render_account_number(account, table))
    return "".join(f"{line}\n" for line in lines)
