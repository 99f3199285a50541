"""Rendering of parsed markup into display lines, terminal output and files."""

from pathlib import Path
from typing import Iterable, Optional

from rich import box
from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from light_html.config import Settings, get_settings
from light_html.formats import SOURCE_EXTENSIONS, get_handler
from light_html.formatting.composer import DEFAULT_MARKER, compose
from light_html.formatting.flattener import flatten
from light_html.formatting.ir import (
    LABEL_STYLE,
    Diagnostic,
    DocumentNode,
    Line,
    Placeholder,
    RenderDefaults,
    RenderedDocument,
    ResolvedStyle,
    TruncationMode,
)
from light_html.formatting.parser import MarkupParser, parse_markup
from light_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Points of padding per terminal cell
POINTS_PER_CELL = 4.0


class RenderError(Exception):
    """Error while rendering a markup file."""

    pass


class RichtextRenderer:
    """Render a parsed document as lines of styled text.

    Holds the presentation options of one rendering: default font size
    and color for unstyled text, the length budget, placeholders, and
    the caption and border drawn around the text. None of these affect
    parsing.
    """

    def __init__(
        self,
        root: Optional[DocumentNode] = None,
        *,
        has_border: bool = True,
        padding: float = 4.0,
        default_font_size: float = 14.0,
        default_color: str = "#000000",
        label: Optional[str] = None,
        label_style: ResolvedStyle = LABEL_STYLE,
        max_length: Optional[int] = None,
        truncation: TruncationMode = TruncationMode.PER_RUN,
        placeholder_marker: str = DEFAULT_MARKER,
        placeholders: Iterable[Placeholder] = (),
        diagnostics: Iterable[Diagnostic] = (),
    ) -> None:
        """Initialize the renderer.

        Args:
            root: Root of the parse tree to display (None shows a blank line)
            has_border: Whether a border is drawn around the text
            padding: Padding around the text and the label, in points
            default_font_size: Size for text with no font-size
            default_color: Color for text with no color
            label: Optional caption displayed below the text
            label_style: Style of the caption
            max_length: Optional length budget for the rendered text
            truncation: How max_length is applied
            placeholder_marker: Marker enclosing placeholder symbols
            placeholders: Values substituted into the rendered text
            diagnostics: Parser diagnostics carried along for reporting

        Raises:
            ValueError: If default_color is not a valid color
        """
        color = MarkupParser().parse_color(default_color)
        if color is None:
            raise ValueError(f"Invalid default color: {default_color!r}")

        self.root = root
        self.has_border = has_border
        self.padding = padding
        self.defaults = RenderDefaults(font_size=default_font_size, color=color)
        self.label = label
        self.label_style = label_style
        self.max_length = max_length
        self.truncation = TruncationMode(truncation)
        self.placeholder_marker = placeholder_marker
        self.placeholders = list(placeholders)
        self.diagnostics = list(diagnostics)

    @classmethod
    def from_markup(cls, markup: str, **options) -> "RichtextRenderer":
        """Create a renderer for markup source text.

        Parsing is memoized, so re-rendering unchanged source is cheap.
        """
        result = parse_markup(markup)
        return cls(result.root, diagnostics=result.diagnostics, **options)

    @classmethod
    def from_settings(
        cls,
        root: Optional[DocumentNode],
        settings: Optional[Settings] = None,
        **options,
    ) -> "RichtextRenderer":
        """Create a renderer whose defaults come from Settings.

        Explicit keyword options take precedence over the settings.
        """
        settings = settings or get_settings()
        kwargs = {
            "default_font_size": settings.default_font_size,
            "default_color": settings.default_color,
            "placeholder_marker": settings.placeholder_marker,
            "max_length": settings.max_length,
            "truncation": settings.truncation,
        }
        kwargs.update(options)
        return cls(root, **kwargs)

    def render_lines(self) -> list[Line]:
        """Flatten the tree and compose the display lines."""
        if self.root is None:
            blank = Line()
            blank.append(" ", self.defaults.style)
            return [blank]

        runs = flatten(self.root, self.defaults)
        return compose(
            runs,
            placeholders=self.placeholders,
            marker=self.placeholder_marker,
            max_length=self.max_length,
            defaults=self.defaults,
            truncation=self.truncation,
        )

    def render(self, metadata: Optional[dict] = None) -> RenderedDocument:
        """Render into a RenderedDocument ready for a format handler."""
        return RenderedDocument(
            lines=self.render_lines(),
            label=self.label or None,
            label_style=self.label_style,
            has_border=self.has_border,
            padding=self.padding,
            diagnostics=list(self.diagnostics),
            metadata=dict(metadata or {}),
        )

    def to_rich(self) -> RenderableType:
        """Build a rich renderable for terminal display.

        Font sizes cannot be shown in a terminal and are ignored. Text in
        the default color uses the terminal's own foreground color.
        """
        body = Group(*(self._line_to_text(line) for line in self.render_lines()))
        cells = round(self.padding / POINTS_PER_CELL)

        if self.has_border:
            content: RenderableType = Panel(
                body, box=box.SQUARE, padding=(0, cells), expand=True
            )
        else:
            content = Padding(body, (0, cells))

        if self.label:
            label = Text(self.label, style=self._rich_style(self.label_style))
            return Group(content, Padding(label, (0, cells)))
        return content

    def _line_to_text(self, line: Line) -> Text:
        text = Text()
        for span in line.spans:
            text.append(span.text, style=self._rich_style(span.style))
        return text

    def _rich_style(self, style: ResolvedStyle) -> Style:
        """Map a resolved style onto a rich Style."""
        return Style(
            bold=style.bold,
            italic=style.italic,
            underline=style.underline,
            color=None if style.color == self.defaults.color else style.color,
        )


class FileRenderer:
    """Render markup files to output documents.

    Pipeline:
    1. Read the markup source (UTF-8)
    2. Parse, flatten and compose with the configured options
    3. Write with the handler for the output extension
    """

    def __init__(self, **options) -> None:
        """Initialize with RichtextRenderer keyword options."""
        self.options = options

    def render_file(self, input_path: Path, output_path: Path) -> RenderedDocument:
        """Render a markup file to an output document.

        Args:
            input_path: Path to the markup source
            output_path: Path for the output document

        Returns:
            The RenderedDocument that was written

        Raises:
            RenderError: If the input is missing or a format is unsupported
        """
        if not input_path.exists():
            raise RenderError(f"Input file not found: {input_path}")

        ext = input_path.suffix.lower()
        if ext not in SOURCE_EXTENSIONS:
            raise RenderError(
                f"Unsupported source format: {ext}. "
                f"Supported: {', '.join(SOURCE_EXTENSIONS)}"
            )

        try:
            output_handler = get_handler(output_path.suffix)()
        except ValueError as e:
            raise RenderError(str(e)) from e

        markup = get_handler(ext)().read(input_path)
        renderer = RichtextRenderer.from_markup(markup, **self.options)
        document = renderer.render(
            metadata={"source": str(input_path), "title": input_path.stem}
        )

        for diagnostic in document.diagnostics:
            LOGGER.debug("%s:%s", input_path.name, diagnostic)

        output_handler.write(document, output_path)
        LOGGER.info("Rendered %s -> %s", input_path, output_path)

        return document
