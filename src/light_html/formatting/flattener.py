"""In-order flattening of a document tree into styled leaf runs."""

from light_html.formatting.ir import (
    ChildRef,
    DocumentNode,
    LeafRun,
    RenderDefaults,
    TextPiece,
)

DEFAULTS = RenderDefaults()


def flatten(root: DocumentNode, defaults: RenderDefaults = DEFAULTS) -> list[LeafRun]:
    """Convert a tree into a list of LeafRun, in document order.

    Only text pieces with text produce a run; a piece holding nothing but
    a line break is skipped. Styles come from the owning node's own
    attributes, with unset color and font size taken from ``defaults``.

    Args:
        root: Root of the parsed document
        defaults: Fallbacks for unset color and font size

    Returns:
        Leaf runs in depth-first, in-order traversal order
    """
    runs: list[LeafRun] = []
    _flatten_node(root, defaults, runs)
    return runs


def _flatten_node(
    node: DocumentNode,
    defaults: RenderDefaults,
    runs: list[LeafRun],
) -> None:
    style = defaults.resolve(node.attributes)

    for element in node.elements:
        if isinstance(element, TextPiece):
            if element.text:
                runs.append(LeafRun(element.text, style, element.ends_line))
        elif isinstance(element, ChildRef):
            _flatten_node(element.node, defaults, runs)
        else:
            raise TypeError(f"Unexpected tree element: {element!r}")
