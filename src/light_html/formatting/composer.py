"""Line composition: truncation, placeholder substitution and grouping."""

import re
from typing import Iterable, Optional, Sequence

from light_html.formatting.ir import (
    LeafRun,
    Line,
    Placeholder,
    RenderDefaults,
    TruncationMode,
)

ELLIPSIS = "..."
DEFAULT_MARKER = "$"


class LineComposer:
    """Turn flattened runs into display lines.

    For every run, in order:
    1. Apply the length budget (see TruncationMode)
    2. Substitute placeholders
    3. Append to the open line; a run that ends a line closes it

    Runs without text add no span. Whatever is left open is flushed at
    the end. If nothing was produced, the result is a single line holding
    one empty span in the default style.
    """

    def __init__(
        self,
        placeholders: Iterable[Placeholder] = (),
        marker: str = DEFAULT_MARKER,
        max_length: Optional[int] = None,
        defaults: RenderDefaults = RenderDefaults(),
        truncation: TruncationMode = TruncationMode.PER_RUN,
    ) -> None:
        if max_length is not None and max_length < 0:
            raise ValueError(f"max_length must not be negative, got {max_length}")

        self.placeholders = list(placeholders)
        self.marker = marker
        self.max_length = max_length
        self.defaults = defaults
        self.truncation = TruncationMode(truncation)

        self._patterns = [
            (re.compile(re.escape(f"{marker}{p.symbol}{marker}")), p.value)
            for p in self.placeholders
        ]

    def compose(self, runs: Sequence[LeafRun]) -> list[Line]:
        """Compose runs into lines.

        Args:
            runs: Leaf runs in display order

        Returns:
            At least one Line
        """
        result: list[Line] = []
        current = Line()
        used = 0

        for run in runs:
            text = run.text
            exhausted = False

            if not text:
                # A bare break only closes a line that has content
                if run.ends_line and current:
                    result.append(current)
                    current = Line()
                continue

            if self.max_length is not None:
                if self.truncation is TruncationMode.CUMULATIVE:
                    remaining = self.max_length - used
                    if len(text) > remaining:
                        text = text[:remaining] + ELLIPSIS
                        exhausted = True
                    else:
                        used += len(text)
                elif len(text) > self.max_length:
                    text = text[:self.max_length] + ELLIPSIS

            text = self.substitute(text)
            current.append(text, run.style)

            if exhausted:
                break

            if run.ends_line:
                result.append(current)
                current = Line()

        if current:
            result.append(current)

        if not result:
            empty = Line()
            empty.append("", self.defaults.style)
            result.append(empty)

        return result

    def substitute(self, text: str) -> str:
        """Replace every ``marker + symbol + marker`` with its value."""
        for pattern, value in self._patterns:
            text = pattern.sub(lambda _match, value=value: value, text)
        return text


def compose(
    runs: Sequence[LeafRun],
    placeholders: Iterable[Placeholder] = (),
    marker: str = DEFAULT_MARKER,
    max_length: Optional[int] = None,
    defaults: RenderDefaults = RenderDefaults(),
    truncation: TruncationMode = TruncationMode.PER_RUN,
) -> list[Line]:
    """Compose runs into display lines. See LineComposer."""
    composer = LineComposer(
        placeholders=placeholders,
        marker=marker,
        max_length=max_length,
        defaults=defaults,
        truncation=truncation,
    )
    return composer.compose(runs)
