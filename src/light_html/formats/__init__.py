"""Output format handlers for light-html."""

from light_html.formats.base import FormatHandler
from light_html.formats.txt_handler import TXTHandler
from light_html.formats.html_handler import HTMLHandler
from light_html.formats.docx_handler import DOCXHandler
from light_html.formats.pdf_handler import PDFHandler

__all__ = [
    "FormatHandler",
    "TXTHandler",
    "HTMLHandler",
    "DOCXHandler",
    "PDFHandler",
]

# Map file extensions to handlers
HANDLER_MAP: dict[str, type[FormatHandler]] = {
    ".txt": TXTHandler,
    ".html": HTMLHandler,
    ".htm": HTMLHandler,
    ".docx": DOCXHandler,
    ".pdf": PDFHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())

# Extensions that hold markup source text
SOURCE_EXTENSIONS = (".txt", ".html", ".htm")


def get_handler(extension: str) -> type[FormatHandler]:
    """Get the appropriate handler class for a file extension."""
    ext = extension.lower()
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported file format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
