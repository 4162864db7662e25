"""Remote catalog of released Go versions.

Fetched from the go.dev download index and cached as JSON under the cache
path. The cache is reused until it is older than the configured TTL; when the
network is unavailable a stale cache is still better than nothing.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, List, Optional

from common.http_client import get_json
from config import GoenvConfig
from constants import Constants
from versioning.compare import sort_versions
from versioning.parser import is_release

logger = logging.getLogger(__name__)


def parse_release_index(data: Any) -> List[str]:
    """Extract version names (without the ``go`` prefix) from the index."""
    if not isinstance(data, list):
        return []
    versions = []
    for item in data:
        if not isinstance(item, dict):
            continue
        name = str(item.get("version", ""))
        if name.startswith("go"):
            name = name[2:]
        if name and is_release(name) and name not in versions:
            versions.append(name)
    return versions


class RemoteCatalog:
    """Upstream release list with an on-disk TTL cache."""

    def __init__(self, config: GoenvConfig, clock=time.time):
        self.config = config
        self._clock = clock

    @property
    def cache_file(self) -> Path:
        return Path(self.config.cache_path) / Constants.CATALOG_CACHE_FILE

    def _read_cache(self) -> Optional[dict]:
        try:
            with open(self.cache_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            return None
        if not isinstance(data, dict) or not isinstance(data.get("versions"), list):
            return None
        return data

    def _write_cache(self, versions: List[str]) -> None:
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, "w", encoding="utf-8") as f:
                json.dump({"fetched_at": self._clock(), "versions": versions}, f, indent=2)
        except OSError as e:
            logger.warning("Cannot write catalog cache %s: %s", self.cache_file, e)

    def _is_fresh(self, cached: dict) -> bool:
        try:
            fetched_at = float(cached.get("fetched_at", 0))
        except (TypeError, ValueError):
            return False
        return self._clock() - fetched_at < self.config.catalog_ttl

    def versions(self, refresh: bool = False) -> List[str]:
        """Released versions in ascending order; empty when unavailable."""
        cached = self._read_cache()
        if cached and not refresh and self._is_fresh(cached):
            return list(cached["versions"])

        status, data = get_json(self.config.catalog_url)
        versions = parse_release_index(data) if status == 200 else []
        if versions:
            # The index lists newest releases first.
            versions = sort_versions(versions[::-1], self.config.ordering)
            self._write_cache(versions)
            return versions

        if cached:
            logger.warning("Using stale release catalog from %s", self.cache_file)
            return list(cached["versions"])
        return []
