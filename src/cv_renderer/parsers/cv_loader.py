"""Load the CV record from a local file or URL, with a cached fallback."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
import yaml
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cv_renderer.cache.record_cache import RecordCache
from cv_renderer.models.cv import CVData
from cv_renderer.utils.json_parser import extract_json

logger = logging.getLogger(__name__)


class DataUnavailableError(RuntimeError):
    """Raised when neither a fresh nor a cached record can be obtained."""


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(min=1, max=10),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)
def fetch_remote(url: str, *, timeout: float = 10.0, client: httpx.Client | None = None) -> str:
    """Fetch a record over HTTP, bypassing intermediate caches."""
    headers = {"Cache-Control": "no-store"}
    if client is not None:
        resp = client.get(url, headers=headers, timeout=timeout)
    else:
        with httpx.Client(follow_redirects=True, timeout=timeout) as owned:
            resp = owned.get(url, headers=headers)
    resp.raise_for_status()
    return resp.text


def parse_record_text(text: str, suffix: str = ".json") -> dict:
    """Parse record text as YAML or JSON (a JS assignment wrapper is tolerated)."""
    if suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = extract_json(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a record object, got {type(data).__name__}")
    return data


def read_record(
    source: str,
    *,
    timeout: float = 10.0,
    client: httpx.Client | None = None,
) -> CVData:
    """Read and validate a record without any cache involvement."""
    if is_url(source):
        text = fetch_remote(source, timeout=timeout, client=client)
        suffix = Path(httpx.URL(source).path).suffix
    else:
        path = Path(source).expanduser()
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix
    return CVData.model_validate(parse_record_text(text, suffix))


def load_cv(
    source: str,
    *,
    cache: RecordCache | None = None,
    timeout: float = 10.0,
    client: httpx.Client | None = None,
) -> CVData:
    """Load a fresh record, falling back to the cached copy on any failure.

    Raises:
        DataUnavailableError: when loading fails and nothing is cached.
    """
    try:
        cv = read_record(source, timeout=timeout, client=client)
    except (httpx.HTTPError, OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Failed to load CV record from %s: %s", source, e)
        cached = cache.get(source) if cache is not None else None
        if cached is None:
            raise DataUnavailableError(
                f"CV data unavailable: could not load {source} and no cached copy exists"
            ) from e
        logger.warning("Using cached CV record for %s", source)
        return cached

    if cache is not None:
        cache.put(source, cv)
    return cv
