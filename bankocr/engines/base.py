"""Abstract base class for glyph recognition engines."""

from abc import ABC, abstractmethod

from bankocr.models import GlyphCell


class BaseGlyphEngine(ABC):
    """Base interface for single-digit glyph recognition engines."""

    @abstractmethod
    def classify(self, cell: GlyphCell) -> int:
        """
        Recognize the digit drawn in a glyph cell.

        Args:
            cell: A 3x3 glyph cell.

        Returns:
            The digit value, 0 to 9.

        Raises:
            UnrecognizedDigitError: If the cell is not a known rendering.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine identifier name."""
