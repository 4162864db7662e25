"""The version store: one install prefix per directory under <root>/versions."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional

from config import GoenvConfig
from versioning.compare import sort_versions
from versioning.models import InstalledVersion

logger = logging.getLogger(__name__)


class VersionStore:
    """Read and remove installed versions.

    Directory names are the version names, so the store can never hold two
    entries with the same name.
    """

    def __init__(self, config: GoenvConfig):
        self.config = config

    @property
    def versions_dir(self) -> Path:
        return self.config.versions_dir

    def prefix(self, name: str) -> Path:
        """Install prefix for ``name``, whether or not it exists."""
        return self.versions_dir / name

    def get(self, name: str) -> Optional[InstalledVersion]:
        """Return the entry for ``name`` if its directory exists."""
        path = self.prefix(name)
        if not path.is_dir():
            return None
        return InstalledVersion(name=name, path=path)

    def is_installed(self, name: str) -> bool:
        entry = self.get(name)
        return entry is not None and entry.has_bin

    def list(self) -> List[InstalledVersion]:
        """Installed versions (entries with a bin/ directory), ascending."""
        if not self.versions_dir.is_dir():
            return []
        entries = {
            p.name: InstalledVersion(name=p.name, path=p)
            for p in self.versions_dir.iterdir()
            if p.is_dir() and not p.name.startswith(".")
        }
        names = [n for n, e in entries.items() if e.has_bin]
        return [entries[n] for n in sort_versions(sorted(names), self.config.ordering)]

    def names(self) -> List[str]:
        return [v.name for v in self.list()]

    def remove(self, name: str) -> bool:
        """Delete the prefix for ``name``; returns False if it did not exist."""
        path = self.prefix(name)
        if not path.exists():
            return False
        logger.info("Removing %s", path)
        shutil.rmtree(path)
        return True
