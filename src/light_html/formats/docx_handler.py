"""Microsoft Word (.docx) file handler."""

from pathlib import Path

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from light_html.formats.base import FormatHandler
from light_html.formatting.ir import Line, RenderedDocument, ResolvedStyle

BORDER_COLOR = RGBColor(0, 0, 0)

# Eighths of a point
BORDER_SIZE = "8"


class DOCXHandler(FormatHandler):
    """Handler for Microsoft Word (.docx) files.

    Uses python-docx to write one paragraph per display line with
    run-level bold, italic, underline, color and size. A border is drawn
    by placing the lines in a bordered single-cell table.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".docx",)

    def write(self, document: RenderedDocument, path: Path) -> None:
        """Write rendered lines to a DOCX file."""
        doc = Document()

        if document.has_border:
            table = doc.add_table(rows=1, cols=1)
            table.alignment = WD_TABLE_ALIGNMENT.CENTER
            cell = table.rows[0].cells[0]
            self._draw_box(table, BORDER_COLOR)

            # A new cell already holds one empty paragraph
            for i, line in enumerate(document.lines):
                para = cell.paragraphs[0] if i == 0 else cell.add_paragraph()
                self._fill_paragraph(para, line)
        else:
            for line in document.lines:
                self._fill_paragraph(doc.add_paragraph(), line)

        if document.label:
            para = doc.add_paragraph()
            para.paragraph_format.space_before = Pt(document.padding)
            run = para.add_run(document.label)
            self._apply_style(run, document.label_style)

        doc.save(path)

    def _fill_paragraph(self, para, line: Line) -> None:
        """Add the spans of a line to a paragraph as runs."""
        para.paragraph_format.space_after = Pt(0)
        for span in line.spans:
            if not span.text:
                continue
            run = para.add_run(span.text)
            self._apply_style(run, span.style)

    def _apply_style(self, run, style: ResolvedStyle) -> None:
        """Apply a resolved style to a python-docx run."""
        run.bold = style.bold
        run.italic = style.italic
        run.underline = style.underline
        run.font.size = Pt(style.font_size)
        run.font.color.rgb = RGBColor.from_string(style.color.lstrip("#").upper())

    def _draw_box(self, table, color: RGBColor) -> None:
        """Draw a single-line box on the outer edges of a table."""
        tbl = table._tbl
        tbl_pr = tbl.tblPr if tbl.tblPr is not None else OxmlElement("w:tblPr")
        borders = OxmlElement("w:tblBorders")

        for edge in ("top", "left", "bottom", "right"):
            border = OxmlElement(f"w:{edge}")
            border.set(qn("w:val"), "single")
            border.set(qn("w:sz"), BORDER_SIZE)
            border.set(qn("w:space"), "0")
            border.set(qn("w:color"), str(color))
            borders.append(border)

        tbl_pr.append(borders)
        if tbl.tblPr is None:
            tbl.insert(0, tbl_pr)
