"""Formatting engine: markup parsing, flattening and line composition."""

from light_html.formatting.ir import (
    StyleAttributes,
    ResolvedStyle,
    RenderDefaults,
    TextPiece,
    ChildRef,
    DocumentNode,
    SPACER,
    Diagnostic,
    ParseResult,
    LeafRun,
    Placeholder,
    StyledSpan,
    Line,
    RenderedDocument,
    TruncationMode,
    TreeInvariantError,
    LABEL_STYLE,
)
from light_html.formatting.parser import MarkupParser, parse_markup
from light_html.formatting.flattener import flatten
from light_html.formatting.composer import LineComposer, compose

__all__ = [
    "StyleAttributes",
    "ResolvedStyle",
    "RenderDefaults",
    "TextPiece",
    "ChildRef",
    "DocumentNode",
    "SPACER",
    "Diagnostic",
    "ParseResult",
    "LeafRun",
    "Placeholder",
    "StyledSpan",
    "Line",
    "RenderedDocument",
    "TruncationMode",
    "TreeInvariantError",
    "LABEL_STYLE",
    "MarkupParser",
    "parse_markup",
    "flatten",
    "LineComposer",
    "compose",
]
