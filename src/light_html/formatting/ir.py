"""Intermediate Representation for formatted rich text.

This module defines the data structures shared by the parser, the
flattener and the line composer: the style model, the document tree
and the display lines produced from it.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union


class TreeInvariantError(AssertionError):
    """Raised when a document tree is built from inconsistent parts."""


class TruncationMode(str, Enum):
    """How ``max_length`` is applied while composing lines.

    PER_RUN: every run is checked against the full budget on its own,
        and later runs keep being appended.
    CUMULATIVE: a running total is kept; the run that overflows is cut
        to the remaining budget and every later run is dropped.
    """

    PER_RUN = "per_run"
    CUMULATIVE = "cumulative"


# =============================================================================
# Style Model
# =============================================================================

@dataclass(frozen=True)
class StyleAttributes:
    """Style of one formatting scope.

    Attributes:
        bold: Bold weight
        italic: Italic slant
        underline: Underline decoration
        color: Normalized ``#rrggbb`` color, or None to use the default
        font_size: Font size in points, or None to use the default
    """

    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: Optional[str] = None
    font_size: Optional[float] = None

    def merge(self, **overrides) -> "StyleAttributes":
        """Return a copy with the given fields overridden."""
        return replace(self, **overrides)


@dataclass(frozen=True)
class ResolvedStyle:
    """A style with every attribute resolved to a concrete value."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: str = "#000000"
    font_size: float = 14.0


@dataclass(frozen=True)
class RenderDefaults:
    """Document-wide fallbacks for unset color and font size."""

    font_size: float = 14.0
    color: str = "#000000"

    def resolve(self, attributes: StyleAttributes) -> ResolvedStyle:
        """Resolve a node's attributes against these defaults.

        Only color and font size fall back; the boolean flags are taken
        from the attributes as they are.
        """
        return ResolvedStyle(
            bold=attributes.bold,
            italic=attributes.italic,
            underline=attributes.underline,
            color=attributes.color if attributes.color is not None else self.color,
            font_size=(
                attributes.font_size
                if attributes.font_size is not None
                else self.font_size
            ),
        )

    @property
    def style(self) -> ResolvedStyle:
        """The style of text that specifies nothing."""
        return self.resolve(StyleAttributes())


# Style used for the caption below rendered text
LABEL_STYLE = ResolvedStyle(italic=True, color="#757575", font_size=12.0)


# =============================================================================
# Document Tree
# =============================================================================

@dataclass(frozen=True)
class TextPiece:
    """Raw text owned directly by a node.

    Attributes:
        text: The text content (may be empty for a bare line break)
        ends_line: Whether a hard line break follows this text
    """

    text: str
    ends_line: bool = False


@dataclass(frozen=True)
class ChildRef:
    """A nested formatting scope at this position of its parent."""

    node: "DocumentNode"


Element = Union[TextPiece, ChildRef]


@dataclass(frozen=True)
class DocumentNode:
    """One formatting scope of a parsed document.

    Content is kept as an ordered tuple of elements, each either a
    TextPiece or a ChildRef, so text and nested scopes interleave in
    exactly the order they were written.

    ``text_segments``, ``children`` and ``invokes_newline_per_segment``
    give the same content in the parallel-array encoding, where the
    content reads ``text_segments[0], children[0], text_segments[1],
    children[1], ...``. Two text pieces in a row are kept apart there by
    the empty ``SPACER`` node, and a child with no text piece before it
    gets an empty segment.
    """

    attributes: StyleAttributes = field(default_factory=StyleAttributes)
    elements: tuple[Element, ...] = ()

    def _parallel(self) -> tuple[list[TextPiece], list["DocumentNode"]]:
        pieces: list[TextPiece] = []
        children: list[DocumentNode] = []
        for element in self.elements:
            if isinstance(element, TextPiece):
                if len(pieces) > len(children):
                    children.append(SPACER)
                pieces.append(element)
            else:
                if len(pieces) == len(children):
                    pieces.append(TextPiece(""))
                children.append(element.node)
        return pieces, children

    @property
    def text_segments(self) -> list[str]:
        """Segment texts of the parallel-array encoding."""
        return [piece.text for piece in self._parallel()[0]]

    @property
    def invokes_newline_per_segment(self) -> list[bool]:
        """Line break flags aligned with ``text_segments``."""
        return [piece.ends_line for piece in self._parallel()[0]]

    @property
    def children(self) -> list["DocumentNode"]:
        """Children of the parallel-array encoding, aligned with ``text_segments``."""
        return self._parallel()[1]

    @property
    def plain_text(self) -> str:
        """All text of this subtree without styling or breaks."""
        parts: list[str] = []
        for element in self.elements:
            if isinstance(element, TextPiece):
                parts.append(element.text)
            else:
                parts.append(element.node.plain_text)
        return "".join(parts)

    def walk(self):
        """Yield this node and all descendants, depth first."""
        yield self
        for element in self.elements:
            if isinstance(element, ChildRef):
                yield from element.node.walk()

    @classmethod
    def from_segments(
        cls,
        attributes: StyleAttributes,
        text_segments: list[str],
        children: list["DocumentNode"],
        invokes_newline_per_segment: Optional[list[bool]] = None,
    ) -> "DocumentNode":
        """Build a node from the parallel-array encoding.

        The content is ``text_segments[0], children[0], text_segments[1],
        children[1], ...`` followed by any trailing segments. ``SPACER``
        children are dropped, so the views of a node built by the parser
        convert back to an equal node.

        Raises:
            TreeInvariantError: If there are more children than segments,
                or the newline flags are not aligned with the segments
        """
        if invokes_newline_per_segment is None:
            invokes_newline_per_segment = [False] * len(text_segments)

        if len(children) > len(text_segments):
            raise TreeInvariantError(
                f"{len(children)} children but only "
                f"{len(text_segments)} text segments"
            )
        if len(invokes_newline_per_segment) != len(text_segments):
            raise TreeInvariantError(
                f"{len(invokes_newline_per_segment)} newline flags for "
                f"{len(text_segments)} text segments"
            )

        elements: list[Element] = []
        for i, text in enumerate(text_segments):
            elements.append(TextPiece(text, invokes_newline_per_segment[i]))
            if i < len(children) and children[i] is not SPACER:
                elements.append(ChildRef(children[i]))

        return cls(attributes=attributes, elements=tuple(elements))


# Placeholder child between two adjacent text segments; renders nothing
SPACER = DocumentNode()


@dataclass(frozen=True)
class Diagnostic:
    """An informational note about markup the parser had to recover from.

    Attributes:
        position: Offset in the source where the problem starts
        message: Human-readable description
    """

    position: int
    message: str

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"


@dataclass(frozen=True)
class ParseResult:
    """A parsed tree together with the diagnostics collected on the way."""

    root: DocumentNode
    diagnostics: tuple[Diagnostic, ...] = ()


# =============================================================================
# Runs and Lines
# =============================================================================

@dataclass(frozen=True)
class LeafRun:
    """A piece of text with a fully resolved style.

    Attributes:
        text: The text content
        style: Resolved style for the text
        ends_line: Whether a line break follows this run
    """

    text: str
    style: ResolvedStyle
    ends_line: bool = False


@dataclass(frozen=True)
class Placeholder:
    """A named value substituted into rendered text.

    Matched in rendered text as ``marker + symbol + marker``.
    """

    symbol: str
    value: str


@dataclass
class StyledSpan:
    """Text rendered with one style inside a line."""

    text: str
    style: ResolvedStyle

    def __str__(self) -> str:
        return self.text


@dataclass
class Line:
    """A group of spans displayed together before a forced break."""

    spans: list[StyledSpan] = field(default_factory=list)

    @property
    def plain_text(self) -> str:
        """Get the plain text content without styling."""
        return "".join(span.text for span in self.spans)

    def append(self, text: str, style: ResolvedStyle) -> None:
        """Append a new span to this line."""
        self.spans.append(StyledSpan(text=text, style=style))

    def __bool__(self) -> bool:
        return bool(self.spans)

    def __str__(self) -> str:
        return self.plain_text


@dataclass
class RenderedDocument:
    """Composed lines plus the presentation options they are shown with.

    Attributes:
        lines: Display lines
        label: Optional caption shown below the text
        label_style: Style of the caption
        has_border: Whether a border is drawn around the text
        padding: Padding around the text, in points
        diagnostics: Parser diagnostics for the source markup
        metadata: Additional metadata (source path, etc.)
    """

    lines: list[Line] = field(default_factory=list)
    label: Optional[str] = None
    label_style: ResolvedStyle = LABEL_STYLE
    has_border: bool = True
    padding: float = 4.0
    diagnostics: list[Diagnostic] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    @property
    def plain_text(self) -> str:
        """Get all text content without styling, one line per line."""
        return "\n".join(line.plain_text for line in self.lines)
