"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

SOURCE_ENV_VAR = "CV_DATA_SOURCE"


@dataclass(frozen=True)
class DataConfig:
    source: str = "data/cv-data.json"
    timeout: float = 10.0


@dataclass(frozen=True)
class CacheConfig:
    ttl_days: int | None = None
    db_path: str = "~/.cv-renderer/records.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class ExportConfig:
    output_dir: str = "output"
    default_format: str = "full"
    full_version_url: str | None = None
    repair_split_text: bool = True


@dataclass(frozen=True)
class AppConfig:
    data: DataConfig = field(default_factory=DataConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    data = DataConfig(**raw.get("data", {}))
    env_source = os.environ.get(SOURCE_ENV_VAR)
    if env_source:
        data = replace(data, source=env_source)

    return AppConfig(
        data=data,
        cache=CacheConfig(**raw.get("cache", {})),
        export=ExportConfig(**raw.get("export", {})),
    )
