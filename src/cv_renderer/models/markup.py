"""Text with styled spans, used for emphasising metrics inside highlights."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

BOLD = "bold"

Run = tuple[str, Optional[str]]


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    style: str = BOLD


@dataclass(frozen=True)
class MarkedText:
    """Plain text plus sorted, non-overlapping style spans."""

    text: str
    spans: tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        previous_end = 0
        for span in self.spans:
            if not 0 <= span.start < span.end <= len(self.text):
                raise ValueError(f"Span {span.start}:{span.end} outside text of length {len(self.text)}")
            if span.start < previous_end:
                raise ValueError(f"Span {span.start}:{span.end} overlaps the previous span")
            previous_end = span.end

    def styled(self) -> list[str]:
        """Return the substrings covered by spans."""
        return [self.text[s.start : s.end] for s in self.spans]

    def runs(self, start: int = 0, end: int | None = None) -> list[Run]:
        """Split text[start:end] into (segment, style) runs; style is None for plain text."""
        end = len(self.text) if end is None else end
        runs: list[Run] = []
        pos = start
        for span in self.spans:
            if span.end <= start or span.start >= end:
                continue
            s_start, s_end = max(span.start, start), min(span.end, end)
            if s_start > pos:
                runs.append((self.text[pos:s_start], None))
            runs.append((self.text[s_start:s_end], span.style))
            pos = s_end
        if pos < end:
            runs.append((self.text[pos:end], None))
        return runs

    def line_runs(self, lines: Sequence[str]) -> list[list[Run]]:
        """Map wrapped lines back onto the text and return the runs of each line.

        Lines are located in order, so the text must contain them exactly
        (single-space separated, as produced by wrap_text on sanitized text).
        A line that cannot be located is returned as a single plain run.
        """
        result: list[list[Run]] = []
        pos = 0
        for line in lines:
            start = self.text.find(line, pos)
            if start < 0:
                result.append([(line, None)])
                continue
            end = start + len(line)
            result.append(self.runs(start, end))
            pos = end
        return result


def _metric_pattern(value: str) -> re.Pattern:
    # Not glued to word characters, nor to "," / "." that continue a number.
    return re.compile(r"(?<![\w.,])" + re.escape(value) + r"(?!\w|[.,]\d)")


def mark_metrics(text: str, metrics: Mapping[str, object], style: str = BOLD) -> MarkedText:
    """Emphasise every occurrence of the metric values inside text.

    Only string and numeric values are considered. Overlapping matches keep
    the one that starts first (the longest, on ties).
    """
    candidates: list[tuple[int, int]] = []
    for value in metrics.values():
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            continue
        needle = str(value).strip()
        if not needle:
            continue
        for match in _metric_pattern(needle).finditer(text):
            candidates.append((match.start(), match.end()))

    spans: list[Span] = []
    last_end = 0
    for start, end in sorted(candidates, key=lambda c: (c[0], -c[1])):
        if start < last_end:
            continue
        spans.append(Span(start, end, style))
        last_end = end
    return MarkedText(text, tuple(spans))
