"""Pytest fixtures for light-html tests."""

import pytest
from pathlib import Path

from light_html.formatting.ir import RenderDefaults, ResolvedStyle
from light_html.formatting.parser import MarkupParser


@pytest.fixture
def parser() -> MarkupParser:
    """Create a parser instance."""
    return MarkupParser()


@pytest.fixture
def defaults() -> RenderDefaults:
    """Render defaults distinct from the built-in ones."""
    return RenderDefaults(font_size=20.0, color="#123456")


@pytest.fixture
def plain_style() -> ResolvedStyle:
    """Style of unstyled text under the built-in defaults."""
    return ResolvedStyle()


@pytest.fixture
def sample_markup() -> str:
    """Sample markup covering styles, breaks and a placeholder."""
    return (
        "<h1>Greeting</h1>"
        "Hello <b>$NAME$</b>, welcome to "
        '<span style="color: #ff0000">the <i>red</i> room</span>.<br>'
        "<u>Second line</u>"
    )


@pytest.fixture
def tmp_markup_file(tmp_path: Path, sample_markup: str) -> Path:
    """Create a temporary markup file for testing."""
    file_path = tmp_path / "note.txt"
    file_path.write_text(sample_markup, encoding="utf-8")
    return file_path
