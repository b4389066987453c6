"""Tests for JSON extraction utility."""

import pytest

from cv_renderer.utils.json_parser import extract_json


class TestExtractJson:
    def test_direct_json(self):
        result = extract_json('{"name": "test"}')
        assert result == {"name": "test"}

    def test_js_assignment_wrapper(self):
        text = 'window.cvData = {"personal": {"title": "Engineer"}};\n'
        result = extract_json(text)
        assert result == {"personal": {"title": "Engineer"}}

    def test_export_wrapper(self):
        text = 'const cvData = {"a": 1};\nexport default cvData;'
        assert extract_json(text) == {"a": 1}

    def test_nested_json(self):
        text = '{"outer": {"inner": [1, 2, 3]}}'
        result = extract_json(text)
        assert result["outer"]["inner"] == [1, 2, 3]

    def test_wrapped_array_not_extracted(self):
        with pytest.raises(ValueError, match="Could not extract JSON"):
            extract_json("items = [1, 2];")

    def test_invalid_json_raises(self):
        with pytest.raises(ValueError, match="Could not extract JSON"):
            extract_json("no json here at all")

    def test_empty_string_raises(self):
        with pytest.raises(ValueError):
            extract_json("")
