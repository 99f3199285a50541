"""HTML file handler."""

from pathlib import Path

from light_html.formats.base import FormatHandler
from light_html.formatting.ir import Line, RenderedDocument, ResolvedStyle

BORDER_COLOR = "#000000"


class HTMLHandler(FormatHandler):
    """Handler for HTML (.html, .htm) files.

    Rendered output is a standalone page: one <p> per line, each run an
    inline-styled <span>. Markup sources are read as plain UTF-8 text.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".html", ".htm")

    def read(self, path: Path) -> str:
        """Read markup source from file."""
        return path.read_text(encoding="utf-8")

    def write(self, document: RenderedDocument, path: Path) -> None:
        """Write rendered lines to an HTML page."""
        path.write_text(self._document_to_html(document), encoding="utf-8")

    def _document_to_html(self, document: RenderedDocument) -> str:
        """Convert a RenderedDocument to a complete HTML page."""
        title = self._escape_html(document.metadata.get("title", "Rendered text"))
        padding = f"padding: {document.padding:g}pt;"
        border = f" border: 1px solid {BORDER_COLOR};" if document.has_border else ""

        html_parts: list[str] = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="UTF-8"/>',
            f"<title>{title}</title>",
            "</head>",
            "<body>",
            f'<div class="richtext" style="{padding}{border}">',
        ]

        for line in document.lines:
            html_parts.append(self._line_to_html(line))

        html_parts.append("</div>")

        if document.label:
            style = self._style_to_css(document.label_style)
            html_parts.append(
                f'<p class="label" style="{padding} {style}">'
                f"{self._escape_html(document.label)}</p>"
            )

        html_parts.extend(["</body>", "</html>"])
        return "\n".join(html_parts)

    def _line_to_html(self, line: Line) -> str:
        """Convert one display line to a <p> of styled spans."""
        parts: list[str] = []
        for span in line.spans:
            if not span.text:
                continue
            style = self._style_to_css(span.style)
            parts.append(f'<span style="{style}">{self._escape_html(span.text)}</span>')

        # An empty paragraph would collapse
        content = "".join(parts) or "<br/>"
        return f'<p style="margin: 0;">{content}</p>'

    def _style_to_css(self, style: ResolvedStyle) -> str:
        """Build inline CSS for a resolved style."""
        declarations: list[str] = []
        if style.bold:
            declarations.append("font-weight: bold;")
        if style.italic:
            declarations.append("font-style: italic;")
        if style.underline:
            declarations.append("text-decoration: underline;")
        declarations.append(f"color: {style.color};")
        declarations.append(f"font-size: {style.font_size:g}pt;")
        return " ".join(declarations)

    def _escape_html(self, text: str) -> str:
        """Escape HTML special characters."""
        return (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
        )
