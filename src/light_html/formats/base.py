"""Abstract base class for output format handlers."""

from abc import ABC, abstractmethod
from pathlib import Path

from light_html.formatting.ir import RenderedDocument


class FormatHandler(ABC):
    """Abstract base class for output format handlers.

    Each handler writes rendered lines to one file format. Handlers for
    text-based formats can also read markup sources back.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.pdf',))."""
        ...

    @abstractmethod
    def write(self, document: RenderedDocument, path: Path) -> None:
        """Write a rendered document to file.

        Args:
            document: The RenderedDocument with styled lines
            path: Path to write the output document
        """
        ...

    def read(self, path: Path) -> str:
        """Read markup source text from a file.

        Export-only formats do not support this.

        Raises:
            ValueError: If the format cannot hold markup source
        """
        raise ValueError(
            f"{path.suffix or path.name} files cannot be used as markup sources"
        )
