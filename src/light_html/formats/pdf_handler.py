"""PDF file handler."""

from pathlib import Path

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from light_html.formats.base import FormatHandler
from light_html.formatting.ir import Line, RenderedDocument, ResolvedStyle

BORDER_COLOR = HexColor("#000000")

# Line height relative to the largest font on the line
LEADING_FACTOR = 1.2


class PDFHandler(FormatHandler):
    """Handler for PDF files.

    Uses reportlab's Paragraph with HTML-like tags for run formatting.
    Each display line becomes one paragraph whose leading follows the
    largest font size on that line.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".pdf",)

    def write(self, document: RenderedDocument, path: Path) -> None:
        """Write rendered lines to a PDF file."""
        doc = SimpleDocTemplate(
            str(path),
            pagesize=letter,
            rightMargin=inch,
            leftMargin=inch,
            topMargin=inch,
            bottomMargin=inch,
        )
        base_styles = getSampleStyleSheet()

        lines: list = [
            self._line_flowable(line, i, base_styles["Normal"])
            for i, line in enumerate(document.lines)
        ]

        story: list = []
        if document.has_border:
            table = Table([[lines]], colWidths=[doc.width])
            table.setStyle(TableStyle([
                ("BOX", (0, 0), (-1, -1), 1, BORDER_COLOR),
                ("LEFTPADDING", (0, 0), (-1, -1), document.padding),
                ("RIGHTPADDING", (0, 0), (-1, -1), document.padding),
                ("TOPPADDING", (0, 0), (-1, -1), document.padding),
                ("BOTTOMPADDING", (0, 0), (-1, -1), document.padding),
            ]))
            story.append(table)
        else:
            story.extend(lines)

        if document.label:
            label_style = ParagraphStyle(
                "Label",
                parent=base_styles["Normal"],
                fontSize=document.label_style.font_size,
                leading=document.label_style.font_size * LEADING_FACTOR,
                spaceBefore=document.padding,
            )
            story.append(Paragraph(
                self._span_to_markup(document.label, document.label_style),
                label_style,
            ))

        doc.build(story)

    def _line_flowable(self, line: Line, index: int, parent: ParagraphStyle):
        """Create the flowable for one display line."""
        size = max((span.style.font_size for span in line.spans), default=12.0)
        leading = size * LEADING_FACTOR

        markup = "".join(
            self._span_to_markup(span.text, span.style)
            for span in line.spans
            if span.text
        )
        if not markup:
            # Empty paragraphs have no height
            return Spacer(1, leading)

        style = ParagraphStyle(
            f"Line{index}",
            parent=parent,
            fontSize=size,
            leading=leading,
        )
        return Paragraph(markup, style)

    def _span_to_markup(self, text: str, style: ResolvedStyle) -> str:
        """Convert text with a resolved style to reportlab paragraph markup."""
        # Escape HTML special characters
        text = (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
        )

        if style.underline:
            text = f"<u>{text}</u>"
        if style.italic:
            text = f"<i>{text}</i>"
        if style.bold:
            text = f"<b>{text}</b>"

        return f'<font size="{style.font_size:g}" color="{style.color}">{text}</font>'
