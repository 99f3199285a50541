"""Tests for TXT handler."""

import pytest
from pathlib import Path

from light_html.formats.txt_handler import TXTHandler
from light_html.formatting.ir import Line, RenderedDocument, ResolvedStyle


def _line(*texts: str) -> Line:
    line = Line()
    for text in texts:
        line.append(text, ResolvedStyle())
    return line


class TestTXTHandler:
    """Tests for the TXT format handler."""

    def test_supported_extensions(self):
        """Test that handler supports .txt extension."""
        handler = TXTHandler()
        assert ".txt" in handler.supported_extensions

    def test_read_markup(self, tmp_path: Path):
        """Markup is read back verbatim."""
        file_path = tmp_path / "test.txt"
        file_path.write_text("Hello, <b>world</b>!", encoding="utf-8")

        handler = TXTHandler()
        assert handler.read(file_path) == "Hello, <b>world</b>!"

    def test_read_multiline(self, tmp_path: Path):
        """Test reading multiline text file."""
        content = "Line one.\n\nLine two."
        file_path = tmp_path / "test.txt"
        file_path.write_text(content, encoding="utf-8")

        handler = TXTHandler()
        assert handler.read(file_path) == content

    def test_read_unicode(self, tmp_path: Path):
        """Test reading file with unicode characters."""
        content = "Café <i>naïve</i> 日本語"
        file_path = tmp_path / "test.txt"
        file_path.write_text(content, encoding="utf-8")

        handler = TXTHandler()
        assert handler.read(file_path) == content

    def test_write_lines(self, tmp_path: Path):
        """Each display line becomes one line of text, styles dropped."""
        document = RenderedDocument(lines=[_line("Hello ", "world"), _line("Bye")])
        file_path = tmp_path / "output.txt"

        TXTHandler().write(document, file_path)

        assert file_path.read_text(encoding="utf-8") == "Hello world\nBye"

    def test_write_empty_line(self, tmp_path: Path):
        """Blank display lines are kept."""
        document = RenderedDocument(lines=[_line("a"), _line(""), _line("b")])
        file_path = tmp_path / "output.txt"

        TXTHandler().write(document, file_path)

        assert file_path.read_text(encoding="utf-8") == "a\n\nb"

    @pytest.mark.parametrize("label", [None, ""])
    def test_write_without_label(self, tmp_path: Path, label):
        document = RenderedDocument(lines=[_line("text")], label=label)
        file_path = tmp_path / "output.txt"

        TXTHandler().write(document, file_path)

        assert file_path.read_text(encoding="utf-8") == "text"

    def test_write_label(self, tmp_path: Path):
        """The label follows the text after a blank line."""
        document = RenderedDocument(lines=[_line("text")], label="Caption")
        file_path = tmp_path / "output.txt"

        TXTHandler().write(document, file_path)

        assert file_path.read_text(encoding="utf-8") == "text\n\nCaption"
