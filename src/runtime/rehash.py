"""Shim regeneration.

Every executable found in ``<root>/versions/*/bin`` gets a shim in
``<root>/shims`` that re-enters ``goenv exec <name>``. Shims for executables
that no longer exist are removed. A lock file inside the shims directory keeps
two rehashes from interleaving.
"""

from __future__ import annotations

import logging
import os
import shlex
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from config import GoenvConfig
from constants import Constants, HookPhase
from errors import RehashLockedError
from hooks.registry import HookContext, HookRegistry
from .store import VersionStore

logger = logging.getLogger(__name__)

SHIM_TEMPLATE = """#!/usr/bin/env bash
set -e
[ -n "$GOENV_DEBUG" ] && set -x

program="${{0##*/}}"

export GOENV_ROOT={root}
exec {python} -m goenv exec "$program" "$@"
"""


def render_shim(root: Path, python: Optional[str] = None) -> str:
    """Shim script text; identical for every executable name."""
    return SHIM_TEMPLATE.format(
        root=shlex.quote(str(root)),
        python=shlex.quote(python or sys.executable),
    )


class Rehasher:
    """Regenerates the shims directory from the version store."""

    def __init__(self, config: GoenvConfig, store: VersionStore, hooks: Optional[HookRegistry] = None):
        self.config = config
        self.store = store
        self.hooks = hooks or HookRegistry()

    @property
    def shims_dir(self) -> Path:
        return self.config.shims_dir

    @property
    def lock_path(self) -> Path:
        return self.shims_dir / Constants.SHIM_LOCK_FILE

    @contextmanager
    def _lock(self) -> Iterator[None]:
        self.shims_dir.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError as exc:
            raise RehashLockedError(f"cannot rehash: {self.lock_path} exists") from exc
        os.close(fd)
        try:
            yield
        finally:
            try:
                self.lock_path.unlink()
            except FileNotFoundError:
                pass

    def executable_names(self) -> List[str]:
        """Names of all executables across installed versions."""
        names = set()
        for version in self.store.list():
            for entry in version.bin_dir.iterdir():
                if entry.is_file() and os.access(entry, os.X_OK):
                    names.add(entry.name)
        return sorted(names)

    def list_shims(self) -> List[Path]:
        """Existing shim files, sorted by name."""
        if not self.shims_dir.is_dir():
            return []
        return sorted(
            p for p in self.shims_dir.iterdir()
            if p.is_file() and p.name != Constants.SHIM_LOCK_FILE
        )

    def rehash(self) -> List[str]:
        """Rebuild the shims directory; returns the shim names now present.

        Raises:
            RehashLockedError: If another rehash is in progress.
        """
        with self._lock():
            context = HookContext(phase=HookPhase.REHASH, shims=self.executable_names())
            self.hooks.run(HookPhase.REHASH, context)
            wanted = sorted(set(context.shims))

            content = render_shim(self.config.root)
            for shim in self.list_shims():
                if shim.name not in wanted:
                    logger.debug("Removing stale shim %s", shim.name)
                    shim.unlink()
            for name in wanted:
                path = self.shims_dir / name
                path.write_text(content, encoding="utf-8")
                path.chmod(0o755)
        logger.info("Rehashed %d shims", len(wanted))
        return wanted
