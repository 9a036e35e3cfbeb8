"""
Greedy word wrap for the text column.

The layout is measured through an injected callback so it can be computed
without a drawing surface.
"""

from dataclasses import dataclass
from typing import Callable, Tuple


@dataclass(frozen=True)
class LayoutLine:
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class LayoutResult:
    lines: Tuple[LayoutLine, ...]
    end_y: float


def layout_text(
    text: str,
    start_x: float,
    start_y: float,
    max_width: float,
    line_height: float,
    measure: Callable[[str], float],
) -> LayoutResult:
    """
    Wrap `text` into lines no wider than `max_width` where possible.

    A word that does not fit on its own still gets its own line. The returned
    end_y already includes the advance after the last line, so callers only
    add their own gap before stacking the next block.
    """
    lines = []
    line = ""
    y = start_y
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if measure(candidate) > max_width and line:
            lines.append(LayoutLine(line, start_x, y))
            line = word
            y += line_height
        else:
            line = candidate
    if line:
        lines.append(LayoutLine(line, start_x, y))
        y += line_height
    return LayoutResult(lines=tuple(lines), end_y=y)
