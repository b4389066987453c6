"""Release helper: stamp the record's lastUpdated date and bump its version."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

DEFAULT_VERSION = "1.0.0"


def bump_patch_version(version: str) -> str:
    """Increment the patch component of "X.Y.Z"; other shapes are returned unchanged."""
    parts = version.split(".")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return version
    parts[2] = str(int(parts[2]) + 1)
    return ".".join(parts)


def touch_metadata(path: str | Path, *, bump: bool = True, today: date | None = None) -> dict:
    """Update metadata.lastUpdated (and the patch version) of a JSON record in place.

    Returns the updated metadata mapping.
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a record object")

    metadata = data.setdefault("metadata", {})
    metadata["lastUpdated"] = (today or date.today()).isoformat()
    if not metadata.get("version"):
        metadata["version"] = DEFAULT_VERSION
    elif bump:
        metadata["version"] = bump_patch_version(metadata["version"])

    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return metadata
