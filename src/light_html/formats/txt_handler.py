"""Plain text file handler."""

from pathlib import Path

from light_html.formats.base import FormatHandler
from light_html.formatting.ir import RenderedDocument


class TXTHandler(FormatHandler):
    """Handler for plain text (.txt) files.

    Markup sources are read as-is. Rendered output drops all styling and
    writes one line of text per display line, with the label (if any)
    after a blank line.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt",)

    def read(self, path: Path) -> str:
        """Read markup source from file."""
        return path.read_text(encoding="utf-8")

    def write(self, document: RenderedDocument, path: Path) -> None:
        """Write rendered lines as plain text."""
        content = document.plain_text
        if document.label:
            content += f"\n\n{document.label}"
        path.write_text(content, encoding="utf-8")
