"""Tests for config loading."""

import pytest

from cv_renderer.config import SOURCE_ENV_VAR, AppConfig, CacheConfig, ExportConfig, load_config


@pytest.fixture(autouse=True)
def _no_source_override(monkeypatch):
    monkeypatch.delenv(SOURCE_ENV_VAR, raising=False)


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.data.source == "data/cv-data.json"
        assert config.cache.ttl_days is None
        assert config.export.default_format == "full"
        assert config.export.repair_split_text is True

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.data.timeout == 10.0
        assert config.export.full_version_url is None

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "data:\n  source: https://example.com/cv.json\n"
            "export:\n  repair_split_text: false\n  output_dir: dist\n"
        )
        config = load_config(yaml_path)
        assert config.data.source == "https://example.com/cv.json"
        assert config.export.repair_split_text is False
        assert config.export.output_dir == "dist"
        # Defaults for unspecified
        assert config.data.timeout == 10.0
        assert config.export.default_format == "full"

    def test_empty_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_env_overrides_source(self, tmp_path, monkeypatch):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("data:\n  source: data/cv-data.json\n")
        monkeypatch.setenv(SOURCE_ENV_VAR, "/tmp/other.yaml")
        assert load_config(yaml_path).data.source == "/tmp/other.yaml"

    def test_cache_resolved_path(self):
        cache = CacheConfig(db_path="~/test.db")
        resolved = cache.resolved_db_path
        assert "~" not in str(resolved)

    def test_frozen_config(self):
        config = ExportConfig()
        with pytest.raises(AttributeError):
            config.output_dir = "changed"
