"""Tests for the CLI interface."""

import pytest
from pathlib import Path
from unittest.mock import patch

import typer
from typer.testing import CliRunner

from light_html import config
from light_html.cli import OutputFormat, app, generate_output_path, parse_placeholders
from light_html.formatting.ir import Placeholder


runner = CliRunner()


class TestGenerateOutputPath:
    """Tests for output path generation."""

    def test_adds_rendered_suffix(self):
        input_path = Path("/path/to/note.txt")
        output = generate_output_path(input_path, OutputFormat.PDF)

        assert output.name == "note-rendered.pdf"
        assert output.parent == input_path.parent

    def test_custom_output_directory(self):
        output = generate_output_path(
            Path("/path/to/note.txt"), OutputFormat.DOCX, Path("/custom/output")
        )

        assert output == Path("/custom/output/note-rendered.docx")

    def test_handles_spaces_in_filename(self):
        output = generate_output_path(Path("/path/to/my note.html"), OutputFormat.HTML)

        assert output.name == "my note-rendered.html"


class TestParsePlaceholders:
    """Tests for NAME=VALUE parsing."""

    def test_pairs_in_order(self):
        assert parse_placeholders(["A=1", "B=x=y", "C="]) == [
            Placeholder("A", "1"),
            Placeholder("B", "x=y"),
            Placeholder("C", ""),
        ]

    def test_none(self):
        assert parse_placeholders(None) == []

    @pytest.mark.parametrize("value", ["NAME", "=value"])
    def test_malformed(self, value: str):
        with pytest.raises(typer.BadParameter):
            parse_placeholders([value])


class TestCLI:
    """Tests for CLI commands."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "light-html" in result.stdout

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "markup" in result.stdout.lower()

    def test_missing_file_error(self, tmp_path: Path):
        result = runner.invoke(app, [str(tmp_path / "nonexistent.txt")])

        assert result.exit_code != 0

    def test_preview_in_terminal(self, tmp_markup_file: Path):
        result = runner.invoke(app, [str(tmp_markup_file), "-p", "NAME=Ada"])

        assert result.exit_code == 0
        assert "Hello Ada, welcome to the red room." in result.stdout
        assert "Second line" in result.stdout

    def test_output_option(self, tmp_markup_file: Path, tmp_path: Path):
        output = tmp_path / "result.txt"

        result = runner.invoke(
            app, [str(tmp_markup_file), "-o", str(output), "-p", "NAME=Ada"]
        )

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").splitlines()[1] == (
            "Hello Ada, welcome to the red room."
        )

    def test_format_option(self, tmp_markup_file: Path):
        result = runner.invoke(app, [str(tmp_markup_file), "--format", "html"])

        assert result.exit_code == 0
        assert (tmp_markup_file.parent / "note-rendered.html").exists()

    def test_max_length_option(self, tmp_path: Path):
        source = tmp_path / "long.txt"
        source.write_text("0123456789", encoding="utf-8")
        output = tmp_path / "long-out.txt"

        result = runner.invoke(app, [str(source), "-o", str(output), "-n", "4"])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == "0123..."

    def test_cumulative_option(self, tmp_path: Path):
        source = tmp_path / "lines.txt"
        source.write_text("abc<br>def", encoding="utf-8")
        output = tmp_path / "lines-out.txt"

        result = runner.invoke(
            app, [str(source), "-o", str(output), "-n", "4", "--cumulative"]
        )

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == "abc\nd..."

    def test_label_option(self, tmp_markup_file: Path, tmp_path: Path):
        output = tmp_path / "labelled.txt"

        runner.invoke(app, [str(tmp_markup_file), "-o", str(output), "--label", "Note"])

        assert output.read_text(encoding="utf-8").endswith("\n\nNote")

    def test_malformed_placeholder(self, tmp_markup_file: Path):
        result = runner.invoke(app, [str(tmp_markup_file), "-p", "broken"])

        assert result.exit_code != 0

    def test_invalid_color(self, tmp_markup_file: Path):
        result = runner.invoke(app, [str(tmp_markup_file), "--color", "nope"])

        assert result.exit_code == 1
        assert "Invalid default color" in result.stdout

    def test_invalid_log_level_setting(
        self, tmp_markup_file: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(config, "_settings", None)
        monkeypatch.setenv("LIGHT_HTML_LOG_LEVEL", "LOUD")

        result = runner.invoke(app, [str(tmp_markup_file)])

        assert result.exit_code == 2
        assert "Invalid configuration" in result.stdout
        assert not isinstance(result.exception, ValueError)

    def test_unsupported_source_format(self, tmp_path: Path):
        unsupported = tmp_path / "file.xyz"
        unsupported.write_text("content")

        result = runner.invoke(app, [str(unsupported)])

        assert result.exit_code == 1
        assert "unsupported" in result.stdout.lower()

    def test_unsupported_output_format(self, tmp_markup_file: Path, tmp_path: Path):
        result = runner.invoke(app, [str(tmp_markup_file), "-o", str(tmp_path / "x.xyz")])

        assert result.exit_code == 1

    def test_verbose_shows_diagnostics(self, tmp_path: Path):
        source = tmp_path / "bad.txt"
        source.write_text("<foo>text", encoding="utf-8")

        result = runner.invoke(app, [str(source), "-v"])

        assert result.exit_code == 0
        assert "unknown tag" in result.stdout

    def test_folder_processing(self, tmp_path: Path):
        (tmp_path / "one.txt").write_text("<b>1</b>")
        (tmp_path / "two.html").write_text("<i>2</i>")
        (tmp_path / "ignored.xyz").write_text("ignored")

        result = runner.invoke(app, [str(tmp_path), "--format", "txt"])

        assert result.exit_code == 0
        assert (tmp_path / "one-rendered.txt").read_text(encoding="utf-8") == "1"
        assert (tmp_path / "two-rendered.txt").read_text(encoding="utf-8") == "2"
        assert "2 succeeded, 0 failed" in result.stdout

    def test_folder_skips_rendered_files(self, tmp_path: Path):
        (tmp_path / "original.txt").write_text("Original")
        (tmp_path / "original-rendered.txt").write_text("Already rendered")

        with patch("light_html.cli.process_file", return_value=True) as mock_process:
            result = runner.invoke(app, [str(tmp_path)])

        assert mock_process.call_count == 1
        assert mock_process.call_args[0][0] == tmp_path / "original.txt"
        assert mock_process.call_args[0][1] == tmp_path / "original-rendered.html"
        assert result.exit_code == 0
