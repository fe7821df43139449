"""Public API for reading bank OCR entry files."""

import logging
from pathlib import Path
from typing import Iterable, Iterator

from bankocr.batch import annotate_stream, decode_entries, decode_stream
from bankocr.engines.table_engine import TableMatchingEngine
from bankocr.models import ENTRY_WIDTH, EntryResult, EntryStatus

logger = logging.getLogger(__name__)


class BankOCRReader:
    """
    Main entry point for reading scanned account number files.

    Usage:
        reader = BankOCRReader()
        print(reader.read("path/to/entries.txt"))
        for result in reader.read_entries("path/to/entries.txt"):
            print(result.token, result.status.value)
    """

    def __init__(
        self,
        glyphs_file: str | Path | None = None,
        pad_short_lines: bool = False,
        repair: bool = False,
    ):
        """
        Initialize the reader.

        Args:
            glyphs_file: Path to a custom glyph file (default: built-in
                seven-segment digits).
            pad_short_lines: Right-pad lines with spaces to 27 characters.
                Scanners often drop trailing whitespace.
            repair: Try single-stroke fixes for illegible or invalid entries
                when producing structured results.
        """
        self._engine = TableMatchingEngine(glyphs_file)
        self.pad_short_lines = pad_short_lines
        self.repair = repair

    def _prepare(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            line = line.rstrip("\r\n")
            if self.pad_short_lines and line:
                line = line.ljust(ENTRY_WIDTH)
            yield line

    def _open(self, path: str | Path) -> list[str]:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Entry file not found: {path}")
        return path.read_text(encoding="utf-8").split("\n")

    def read_lines(self, lines: Iterable[str]) -> str:
        """Decode lines into the plain report of 9-character tokens."""
        return decode_stream(self._prepare(lines), self._engine)

    def read(self, path: str | Path) -> str:
        """
        Decode an entry file into the plain report.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            MalformedEntryError: If an entry is not 3 x 27.
        """
        report = self.read_lines(self._open(path))
        logger.info("Decoded %s", path)
        return report

    def read_entries(self, path: str | Path) -> list[EntryResult]:
        """Decode an entry file into structured per-entry results."""
        results = decode_entries(
            self._prepare(self._open(path)), self._engine, repair=self.repair
        )
        self._log_summary(path, results)
        return results

    def read_annotated(self, path: str | Path) -> str:
        """Decode an entry file into a report with ERR/ILL/AMB suffixes."""
        return annotate_stream(
            self._prepare(self._open(path)), self._engine, repair=self.repair
        )

    @staticmethod
    def _log_summary(path, results: list[EntryResult]) -> None:
        counts = {status: 0 for status in EntryStatus}
        for r in results:
            counts[r.status] += 1
        logger.info(
            "Decoded %d entries from %s: %s",
            len(results),
            path,
            ", ".join(f"{s.value}={n}" for s, n in counts.items()),
        )
