"""Markup parser for converting rich text source to a document tree."""

import re
from functools import lru_cache
from typing import Optional, Union

from reportlab.lib.colors import cssParse, getAllNamedColors

from light_html.formatting.ir import (
    ChildRef,
    Diagnostic,
    DocumentNode,
    ParseResult,
    StyleAttributes,
    TextPiece,
)
from light_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

# CSS color keywords, without reportlab's own brand colors
_NOT_CSS = {"transparent", "cornflower", "fidblue", "fidred", "fidlightblue"}
NAMED_COLORS = {
    name: color
    for name, color in getAllNamedColors().items()
    if name.isalpha() and name.islower() and name not in _NOT_CSS
}
NAMED_COLORS.setdefault("lightgray", NAMED_COLORS["lightgrey"])


class _Scope:
    """A formatting scope while its content is still being collected."""

    def __init__(
        self,
        tag: Optional[str],
        attributes: StyleAttributes,
        position: int = 0,
    ) -> None:
        self.tag = tag
        self.attributes = attributes
        self.position = position
        self.elements: list[Union[TextPiece, "_Scope"]] = []

    def add_text(self, text: str) -> None:
        """Append text, merging it into a trailing open piece."""
        if not text:
            return
        if self.elements:
            last = self.elements[-1]
            if isinstance(last, TextPiece) and not last.ends_line:
                self.elements[-1] = TextPiece(last.text + text)
                return
        self.elements.append(TextPiece(text))

    def add_child(self, child: "_Scope") -> None:
        """Append a nested scope, anchored after a text piece."""
        if not self.elements or not isinstance(self.elements[-1], TextPiece):
            self.elements.append(TextPiece(""))
        self.elements.append(child)

    def end_trailing_text(self) -> bool:
        """Mark the last text written in this scope as ending a line.

        Looks into nested scopes, so a break written right after a closing
        tag lands on that scope's last text piece. Returns False when that
        text already ends a line or no text was written.
        """
        return self._end_last_text() is True

    def _end_last_text(self) -> Optional[bool]:
        # None: no text in this scope at all
        for index in range(len(self.elements) - 1, -1, -1):
            element = self.elements[index]
            if isinstance(element, _Scope):
                ended = element._end_last_text()
                if ended is not None:
                    return ended
            elif element.ends_line:
                return False
            else:
                self.elements[index] = TextPiece(element.text, ends_line=True)
                return True
        return None

    def break_line(self) -> None:
        """Add a hard line break at the current position."""
        if not self.end_trailing_text():
            self.elements.append(TextPiece("", ends_line=True))

    def build(self) -> DocumentNode:
        elements = tuple(
            ChildRef(e.build()) if isinstance(e, _Scope) else e
            for e in self.elements
        )
        return DocumentNode(attributes=self.attributes, elements=elements)


class MarkupParser:
    """Parse light HTML markup into a DocumentNode tree.

    Supported markup:
    - <b>, <i>, <u> for bold, italic and underline
    - <span style="color: ...; font-size: ..."> for color and size
    - <p> paragraphs and <h1>..<h6> headings, which end the line on close
    - <br> and literal newlines for hard line breaks

    Parsing never fails. Unknown tags, stray closing tags and anything
    that is not a well-formed tag are kept as literal text; tags left
    open at the end are closed implicitly.
    """

    TAG_PATTERN = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9]*)(\s[^<>]*?)?\s*(/?)>")
    ATTRIBUTE_PATTERN = re.compile(
        r"""([A-Za-z-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))"""
    )
    FONT_SIZE_PATTERN = re.compile(
        r"^(\d+(?:\.\d+)?|\.\d+)\s*(px|pt)?$", re.IGNORECASE
    )
    SHORT_HEX_PATTERN = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$")
    HEX_PATTERN = re.compile(r"^#[0-9a-f]{6}$")
    COLOR_FUNCTIONS = ("rgb(", "rgba(", "hsl(", "hsla(")

    INLINE_TAGS = {
        "b": {"bold": True},
        "i": {"italic": True},
        "u": {"underline": True},
    }

    # Browser default heading sizes
    BLOCK_TAGS = {
        "p": {},
        "h1": {"bold": True, "font_size": 32.0},
        "h2": {"bold": True, "font_size": 24.0},
        "h3": {"bold": True, "font_size": 18.72},
        "h4": {"bold": True, "font_size": 16.0},
        "h5": {"bold": True, "font_size": 13.28},
        "h6": {"bold": True, "font_size": 10.72},
    }

    def parse(self, source: str) -> DocumentNode:
        """Convert markup text to a document tree.

        Args:
            source: The markup source text

        Returns:
            Root DocumentNode with default attributes
        """
        return self.parse_with_diagnostics(source).root

    def parse_with_diagnostics(self, source: str) -> ParseResult:
        """Convert markup text to a document tree, keeping diagnostics.

        Args:
            source: The markup source text

        Returns:
            ParseResult with the root node and every recovery note
        """
        diagnostics: list[Diagnostic] = []
        root = _Scope(None, StyleAttributes())
        stack: list[_Scope] = [root]
        pos = 0

        for match in self.TAG_PATTERN.finditer(source):
            self._add_text(stack[-1], source[pos:match.start()])
            self._handle_tag(match, stack, diagnostics)
            pos = match.end()

        self._add_text(stack[-1], source[pos:])

        while len(stack) > 1:
            scope = stack[-1]
            diagnostics.append(
                Diagnostic(scope.position, f"unterminated <{scope.tag}> closed at end of input")
            )
            self._close(stack)

        for diagnostic in diagnostics:
            LOGGER.debug("markup recovery at %s", diagnostic)

        return ParseResult(root=root.build(), diagnostics=tuple(diagnostics))

    def _add_text(self, scope: _Scope, text: str) -> None:
        """Add source text to a scope, turning newlines into breaks."""
        lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        for i, line in enumerate(lines):
            scope.add_text(line)
            if i < len(lines) - 1:
                scope.break_line()

    def _handle_tag(
        self,
        match: re.Match,
        stack: list[_Scope],
        diagnostics: list[Diagnostic],
    ) -> None:
        is_closing, raw_name, raw_attributes, self_closing = match.groups()
        name = raw_name.lower()
        scope = stack[-1]

        if name == "br":
            scope.break_line()
            return

        if name not in self.INLINE_TAGS and name not in self.BLOCK_TAGS and name != "span":
            diagnostics.append(
                Diagnostic(match.start(), f"unknown tag {match.group(0)!r} kept as text")
            )
            scope.add_text(match.group(0))
            return

        if is_closing:
            self._handle_closing(name, match, stack, diagnostics)
            return

        if self_closing:
            # An empty scope has nothing to style
            diagnostics.append(
                Diagnostic(match.start(), f"self-closing <{name}/> ignored")
            )
            return

        attributes = self._tag_attributes(
            name, raw_attributes or "", scope.attributes, match.start(), diagnostics
        )
        child = _Scope(name, attributes, match.start())
        scope.add_child(child)
        stack.append(child)

    def _handle_closing(
        self,
        name: str,
        match: re.Match,
        stack: list[_Scope],
        diagnostics: list[Diagnostic],
    ) -> None:
        # Closes back to the nearest matching open tag
        for depth in range(len(stack) - 1, 0, -1):
            if stack[depth].tag == name:
                while len(stack) - 1 > depth:
                    inner = stack[-1]
                    diagnostics.append(
                        Diagnostic(
                            match.start(),
                            f"<{inner.tag}> implicitly closed by </{name}>",
                        )
                    )
                    self._close(stack)
                self._close(stack)
                return

        diagnostics.append(
            Diagnostic(match.start(), f"closing tag </{name}> has no open tag, kept as text")
        )
        stack[-1].add_text(match.group(0))

    def _close(self, stack: list[_Scope]) -> None:
        """Pop the innermost scope; block scopes end the line."""
        scope = stack.pop()
        if scope.tag in self.BLOCK_TAGS and not scope.end_trailing_text():
            stack[-1].break_line()

    def _tag_attributes(
        self,
        name: str,
        raw_attributes: str,
        inherited: StyleAttributes,
        position: int,
        diagnostics: list[Diagnostic],
    ) -> StyleAttributes:
        """Compute a new scope's attributes from its parent's and its tag."""
        if name in self.INLINE_TAGS:
            return inherited.merge(**self.INLINE_TAGS[name])
        if name in self.BLOCK_TAGS:
            return inherited.merge(**self.BLOCK_TAGS[name])

        overrides: dict = {}
        for attr_match in self.ATTRIBUTE_PATTERN.finditer(raw_attributes):
            attr_name = attr_match.group(1).lower()
            value = next(v for v in attr_match.groups()[1:] if v is not None)
            if attr_name == "style":
                overrides.update(self._parse_style(value, position, diagnostics))

        return inherited.merge(**overrides)

    def _parse_style(
        self,
        style: str,
        position: int,
        diagnostics: list[Diagnostic],
    ) -> dict:
        """Parse a CSS-like declaration list into attribute overrides."""
        overrides: dict = {}

        for declaration in style.split(";"):
            if not declaration.strip():
                continue
            prop, sep, value = declaration.partition(":")
            prop = prop.strip().lower()
            value = value.strip()

            if not sep:
                diagnostics.append(
                    Diagnostic(position, f"malformed style declaration {declaration.strip()!r}")
                )
            elif prop == "color":
                color = self.parse_color(value)
                if color is None:
                    diagnostics.append(Diagnostic(position, f"invalid color {value!r} ignored"))
                else:
                    overrides["color"] = color
            elif prop == "font-size":
                size = self.parse_font_size(value)
                if size is None:
                    diagnostics.append(
                        Diagnostic(position, f"invalid font-size {value!r} ignored")
                    )
                else:
                    overrides["font_size"] = size
            else:
                diagnostics.append(
                    Diagnostic(position, f"unsupported style property {prop!r} ignored")
                )

        return overrides

    def parse_color(self, value: str) -> Optional[str]:
        """Normalize a color value to ``#rrggbb``, or None if invalid.

        Accepts ``#rgb``, ``#rrggbb``, CSS color names and the ``rgb()``,
        ``rgba()``, ``hsl()`` and ``hsla()`` functions. Alpha is dropped.
        """
        value = value.strip().lower()
        short = self.SHORT_HEX_PATTERN.match(value)
        if short:
            return "#" + "".join(c * 2 for c in short.groups())
        if self.HEX_PATTERN.match(value):
            return value

        if value in NAMED_COLORS:
            color = NAMED_COLORS[value]
        elif value.startswith(self.COLOR_FUNCTIONS):
            try:
                color = cssParse(value)
            except ValueError:
                return None
            if color is None:
                return None
        else:
            return None

        return "#" + "".join(f"{round(c * 255):02x}" for c in color.rgb())

    def parse_font_size(self, value: str) -> Optional[float]:
        """Parse a positive font size such as ``18``, ``18px`` or ``12.5pt``."""
        match = self.FONT_SIZE_PATTERN.match(value.strip())
        if not match:
            return None
        size = float(match.group(1))
        return size if size > 0 else None


@lru_cache(maxsize=256)
def parse_markup(source: str) -> ParseResult:
    """Parse markup with memoization.

    Trees are immutable, so a cached result can be shared between callers.
    """
    return MarkupParser().parse_with_diagnostics(source)
