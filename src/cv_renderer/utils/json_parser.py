"""Utility to extract a JSON object from a data file."""

from __future__ import annotations

import json


def extract_json(text: str) -> dict | list:
    """Extract JSON from a record file, handling JS assignment wrappers.

    Tries in order:
    1. Direct json.loads on the full text
    2. Find first '{' to last '}' and parse (``window.cvData = {...};``)
    """
    text = text.strip()

    # 1) Direct parse
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass

    # 2) First '{' to last '}'
    result = _extract_braces(text)
    if result is not None:
        return result

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _extract_braces(text: str) -> dict | None:
    """Try to extract JSON object from first '{' to last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass
    return None
