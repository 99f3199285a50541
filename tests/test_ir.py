"""Tests for the intermediate representation."""

import pytest

from light_html.formatting.flattener import flatten
from light_html.formatting.ir import (
    ChildRef,
    SPACER,
    DocumentNode,
    Line,
    RenderDefaults,
    ResolvedStyle,
    StyleAttributes,
    TextPiece,
    TreeInvariantError,
)
from light_html.formatting.parser import MarkupParser


class TestRenderDefaults:
    """Tests for style resolution."""

    def test_unset_values_fall_back(self):
        defaults = RenderDefaults(font_size=20.0, color="#123456")

        style = defaults.resolve(StyleAttributes(bold=True))

        assert style == ResolvedStyle(bold=True, color="#123456", font_size=20.0)

    def test_set_values_win(self):
        defaults = RenderDefaults(font_size=20.0, color="#123456")

        style = defaults.resolve(StyleAttributes(color="#ff0000", font_size=9.0))

        assert style.color == "#ff0000"
        assert style.font_size == 9.0

    def test_default_style(self):
        assert RenderDefaults().style == ResolvedStyle()


class TestDocumentNode:
    """Tests for the document tree node."""

    def test_from_segments_interleaves(self):
        """Test that children follow the segment at the same index."""
        child_a = DocumentNode(StyleAttributes(bold=True), (TextPiece("A"),))
        child_b = DocumentNode(StyleAttributes(italic=True), (TextPiece("B"),))

        node = DocumentNode.from_segments(
            StyleAttributes(),
            ["one", "two", "three"],
            [child_a, child_b],
            [False, True, False],
        )

        assert node.elements == (
            TextPiece("one"),
            ChildRef(child_a),
            TextPiece("two", ends_line=True),
            ChildRef(child_b),
            TextPiece("three"),
        )
        assert node.text_segments == ["one", "two", "three"]
        assert node.children == [child_a, child_b]
        assert node.invokes_newline_per_segment == [False, True, False]

    def test_from_segments_default_flags(self):
        node = DocumentNode.from_segments(StyleAttributes(), ["a"], [])

        assert node.invokes_newline_per_segment == [False]

    def test_from_segments_rejects_extra_children(self):
        """Test that more children than segments is a programming error."""
        with pytest.raises(TreeInvariantError):
            DocumentNode.from_segments(StyleAttributes(), [], [DocumentNode()])

    def test_from_segments_rejects_misaligned_flags(self):
        with pytest.raises(TreeInvariantError):
            DocumentNode.from_segments(StyleAttributes(), ["a", "b"], [], [True])

    def test_invariant_error_is_assertion(self):
        assert issubclass(TreeInvariantError, AssertionError)

    def test_plain_text_and_walk(self):
        inner = DocumentNode(StyleAttributes(), (TextPiece("b"),))
        root = DocumentNode(
            StyleAttributes(), (TextPiece("a"), ChildRef(inner), TextPiece("c"))
        )

        assert root.plain_text == "abc"
        assert list(root.walk()) == [root, inner]

    def test_value_equality(self):
        first = DocumentNode(StyleAttributes(bold=True), (TextPiece("x"),))
        second = DocumentNode(StyleAttributes(bold=True), (TextPiece("x"),))

        assert first == second
        assert first is not second

    def test_views_keep_document_order(self):
        """Test that adjacent text pieces are kept apart by the spacer."""
        bold = DocumentNode(StyleAttributes(bold=True), (TextPiece("World"),))
        node = DocumentNode(
            StyleAttributes(),
            (TextPiece("Line one", ends_line=True), TextPiece("Hello "), ChildRef(bold)),
        )

        assert node.text_segments == ["Line one", "Hello "]
        assert node.invokes_newline_per_segment == [True, False]
        assert node.children[0] is SPACER
        assert node.children[1] == bold

    def test_views_anchor_leading_child(self):
        child = DocumentNode(StyleAttributes(bold=True), (TextPiece("x"),))
        node = DocumentNode(StyleAttributes(), (ChildRef(child), ChildRef(child)))

        assert node.text_segments == ["", ""]
        assert node.children == [child, child]

    def test_spacer_dropped_by_from_segments(self):
        node = DocumentNode.from_segments(StyleAttributes(), ["a", "b"], [SPACER])

        assert node.elements == (TextPiece("a"), TextPiece("b"))

    def test_empty_child_kept_by_from_segments(self):
        """Test that only the spacer itself is dropped, not equal nodes."""
        node = DocumentNode.from_segments(StyleAttributes(), ["a"], [DocumentNode()])

        assert node.elements == (TextPiece("a"), ChildRef(DocumentNode()))

    @pytest.mark.parametrize(
        "markup",
        [
            "Line one<br>Hello <b>World</b>",
            "a<br><br>b<i>c</i>\nd<u>e</u>",
            "<b>x</b><br>y<i>z</i>",
            "<p>one</p><p>two <b>three</b></p>four",
            "<b>1<i>2</b>3</i>",
            "<span></span>tail<b></b>",
            "",
        ],
    )
    def test_parallel_views_round_trip(self, markup: str):
        """Test that a parsed node rebuilds equal from its parallel views."""
        root = MarkupParser().parse(markup)

        for node in root.walk():
            rebuilt = DocumentNode.from_segments(
                node.attributes,
                node.text_segments,
                node.children,
                node.invokes_newline_per_segment,
            )
            assert rebuilt == node

        assert flatten(root) == flatten(
            DocumentNode.from_segments(
                root.attributes,
                root.text_segments,
                root.children,
                root.invokes_newline_per_segment,
            )
        )


class TestLine:
    """Tests for display lines."""

    def test_plain_text(self):
        line = Line()
        line.append("Hello ", ResolvedStyle())
        line.append("world", ResolvedStyle(bold=True))

        assert line.plain_text == "Hello world"
        assert str(line) == "Hello world"

    def test_truthiness_follows_spans(self):
        line = Line()
        assert not line

        line.append("", ResolvedStyle())
        assert line
