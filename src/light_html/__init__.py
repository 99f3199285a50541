"""light-html: a small rich text markup language with a line renderer."""

__version__ = "0.1.0"
