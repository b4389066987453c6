"""Tests for the release metadata helper."""

import json
from datetime import date

import pytest

from cv_renderer.utils.metadata import bump_patch_version, touch_metadata

TODAY = date(2026, 3, 14)


class TestBumpPatchVersion:
    def test_bump(self):
        assert bump_patch_version("1.2.3") == "1.2.4"
        assert bump_patch_version("0.9.9") == "0.9.10"

    def test_other_shapes_unchanged(self):
        assert bump_patch_version("1.2") == "1.2"
        assert bump_patch_version("1.2.x") == "1.2.x"


class TestTouchMetadata:
    def test_bumps_and_stamps(self, record_file):
        metadata = touch_metadata(record_file, today=TODAY)
        assert metadata == {"version": "1.2.4", "lastUpdated": "2026-03-14"}
        saved = json.loads(record_file.read_text(encoding="utf-8"))
        assert saved["metadata"]["version"] == "1.2.4"
        assert saved["personal"]["name"]["first"] == "Ana María"

    def test_no_bump(self, record_file):
        metadata = touch_metadata(record_file, bump=False, today=TODAY)
        assert metadata["version"] == "1.2.3"
        assert metadata["lastUpdated"] == "2026-03-14"

    def test_missing_metadata_gets_default_version(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text(json.dumps({"personal": {}}), encoding="utf-8")
        metadata = touch_metadata(path, today=TODAY)
        assert metadata["version"] == "1.0.0"

    def test_written_with_indent_and_newline(self, record_file):
        touch_metadata(record_file, today=TODAY)
        text = record_file.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '\n  "personal"' in text

    def test_non_object_rejected(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            touch_metadata(path)
