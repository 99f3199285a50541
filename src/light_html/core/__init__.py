"""Core rendering logic for light-html."""

from light_html.core.renderer import FileRenderer, RenderError, RichtextRenderer

__all__ = [
    "FileRenderer",
    "RenderError",
    "RichtextRenderer",
]
