"""Greedy line wrapping against a pluggable text measurer."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Protocol

_WORD = re.compile(r"\S+")


class TextMeasurer(Protocol):
    """Returns the rendered width (mm) of text at a font size (pt) and style."""

    def width(self, text: str, font_size: float, style: str = "") -> float: ...


def wrap_text(
    text: str,
    max_width: float,
    font_size: float,
    measurer: TextMeasurer,
    style: str = "",
) -> list[str]:
    """Split text into lines no wider than max_width.

    Words are never broken: a word wider than max_width sits alone on its
    own line. Empty or blank input yields no lines.
    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and measurer.width(candidate, font_size, style) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def wrap_ranges(
    text: str,
    max_width: float,
    range_width: Callable[[int, int], float],
) -> list[tuple[int, int]]:
    """Greedy wrap returning the (start, end) offsets of each line in text.

    range_width(start, end) measures text[start:end], so lines mixing
    font styles can be measured run by run.
    """
    ranges: list[tuple[int, int]] = []
    start = end = None
    for word in _WORD.finditer(text):
        if start is None:
            start, end = word.start(), word.end()
        elif range_width(start, word.end()) > max_width:
            ranges.append((start, end))
            start, end = word.start(), word.end()
        else:
            end = word.end()
    if start is not None:
        ranges.append((start, end))
    return ranges
