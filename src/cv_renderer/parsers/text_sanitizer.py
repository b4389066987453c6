"""Normalize record text to the printable ASCII subset the PDF core fonts can draw."""

from __future__ import annotations

import re
import unicodedata

# Superscript run directly after a digit: "10\u207b\u2079" -> "10^-9"
_SUPERSCRIPT_RUN = re.compile(
    "(?<=[0-9])([\u207a\u207b]?[\u2070\u00b9\u00b2\u00b3\u2074-\u2079]+)"
)
_SUPERSCRIPTS = str.maketrans(
    "\u2070\u00b9\u00b2\u00b3\u2074\u2075\u2076\u2077\u2078\u2079\u207a\u207b",
    "0123456789+-",
)

_SHORT_DASHES = re.compile("[\u2010\u2011\u2012\u2013\u2212\ufe63\uff0d]")
_LONG_DASHES = re.compile("[\u2014\u2015]")
_SINGLE_QUOTES = re.compile("[\u2018\u2019\u201a\u201b]")
_DOUBLE_QUOTES = re.compile("[\u201c\u201d\u201e\u201f]")

_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff\u00ad]")
_EXOTIC_SPACE = re.compile("[\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7e]")
_WHITESPACE = re.compile(r"\s+")

MIN_SPLIT_RUN = 4
SPLIT_RATIO = 0.65


def sanitize(text: str | None, *, repair_spacing: bool = True) -> str:
    """Normalize dashes, superscripts, quotes and whitespace; drop non-ASCII.

    Idempotent: sanitize(sanitize(x)) == sanitize(x).
    """
    if not text:
        return ""

    text = _SUPERSCRIPT_RUN.sub(lambda m: "^" + m.group(1).translate(_SUPERSCRIPTS), text)
    text = _SHORT_DASHES.sub("-", text)
    text = _LONG_DASHES.sub(" - ", text)
    text = _SINGLE_QUOTES.sub("'", text)
    text = _DOUBLE_QUOTES.sub('"', text)

    text = _ZERO_WIDTH.sub("", text)
    text = _EXOTIC_SPACE.sub(" ", text)

    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = _NON_PRINTABLE.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()

    if repair_spacing:
        text = repair_split_words(text)
    return text


def repair_split_words(text: str) -> str:
    """Rejoin words that arrive split into single characters ("M L O p s").

    Best effort: mostly-single-character text is joined whole; otherwise
    every run of MIN_SPLIT_RUN or more single letters is collapsed.
    Legitimate sequences of one-letter words are joined too.
    """
    tokens = text.split(" ")
    if len(tokens) < 2:
        return text

    singles = sum(1 for t in tokens if len(t) == 1 and t.isalnum())
    if len(tokens) >= MIN_SPLIT_RUN and singles / len(tokens) > SPLIT_RATIO:
        return "".join(tokens)

    out: list[str] = []
    run: list[str] = []

    def flush() -> None:
        if len(run) >= MIN_SPLIT_RUN:
            out.append("".join(run))
        else:
            out.extend(run)
        run.clear()

    for token in tokens:
        if len(token) == 1 and token.isalpha():
            run.append(token)
            continue
        flush()
        out.append(token)
    flush()
    return " ".join(out)
