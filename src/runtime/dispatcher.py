"""Shim dispatch: decide the active version and route commands to it.

Precedence, first match wins:

1. explicit override (``GOENV_VERSION``)
2. local version file: ``GOENV_VERSION_FILE`` if set, otherwise the nearest
   ``.go-version`` (or go.mod when enabled) walking up from ``GOENV_DIR``
3. the global default file ``<root>/version``
4. the ``system`` Go found on PATH outside the shims directory
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from config import GoenvConfig
from constants import Constants, HookPhase
from errors import (
    CommandNotFoundError,
    NoVersionSetError,
    VersionNotFoundError,
    VersionNotInstalledError,
)
from hooks.registry import HookContext, HookRegistry
from versioning.models import ActiveVersions, SpecifierKind, VersionSelection
from versioning.parser import parse_specifier
from versioning.resolver import DefinitionResolver
from versioning.version_file import find_local_version_file, read_version_file
from .store import VersionStore

logger = logging.getLogger(__name__)

ENV_ORIGIN = f"{Constants.ENV_VERSION} environment variable"


class ShimDispatcher:
    """Active version selection plus ``which`` and ``exec``."""

    def __init__(self, config: GoenvConfig, store: VersionStore, hooks: Optional[HookRegistry] = None):
        self.config = config
        self.store = store
        self.hooks = hooks or HookRegistry()

    # ---------- selection ----------

    def search_path(self) -> str:
        """PATH without the shims directory."""
        shims = str(self.config.shims_dir)
        parts = [p for p in self.config.path.split(os.pathsep) if p and os.path.normpath(p) != os.path.normpath(shims)]
        return os.pathsep.join(parts)

    def system_command(self, command: str = "go") -> Optional[str]:
        """Locate ``command`` on PATH, skipping goenv's own shims."""
        return shutil.which(command, path=self.search_path())

    def local_version_file(self) -> Optional[Path]:
        """The local version file in effect, if any."""
        if self.config.version_file is not None:
            return self.config.version_file if self.config.version_file.is_file() else None
        return find_local_version_file(self.config.work_dir, self.config.gomod_version_enable)

    def version_file(self) -> Path:
        """The file that selects the version: local if present, else global."""
        local = self.local_version_file()
        if local is not None:
            return local
        return self.config.global_version_file

    def selection(self) -> VersionSelection:
        """Raw specifiers from the highest-precedence source that has any.

        Raises:
            NoVersionSetError: If no source selects a version and there is no
                system Go.
        """
        if self.config.version_override:
            versions = [v for v in re.split(r"[:\s]+", self.config.version_override) if v]
            if versions:
                return VersionSelection(versions=versions, origin=ENV_ORIGIN)

        for path in (self.local_version_file(), self.config.global_version_file):
            if path is None or not path.is_file():
                continue
            versions = read_version_file(path)
            if versions:
                return VersionSelection(versions=versions, origin=str(path))

        if self.system_command() is not None:
            return VersionSelection(versions=[Constants.SYSTEM_VERSION], origin=Constants.SYSTEM_VERSION)
        raise NoVersionSetError(
            f"no version set; run '{Constants.PROG} global <version>' or '{Constants.PROG} local <version>'"
        )

    def resolve_installed(self, specifier: str) -> Optional[str]:
        """Map a specifier onto an installed name or ``system``; None if unusable."""
        spec = parse_specifier(specifier)
        if spec.kind == SpecifierKind.SYSTEM:
            return Constants.SYSTEM_VERSION if self.system_command() is not None else None
        resolver = DefinitionResolver(self.store.names(), self.config.ordering)
        try:
            return resolver.resolve_spec(spec)
        except VersionNotFoundError:
            return None

    def active_versions(self) -> ActiveVersions:
        """Usable versions from the selection, in order.

        Raises:
            NoVersionSetError: Nothing is selected.
            VersionNotInstalledError: Versions are selected but none is usable.
        """
        selection = self.selection()
        names: List[str] = []
        missing: List[str] = []
        for specifier in selection.versions:
            name = self.resolve_installed(specifier)
            if name is None:
                missing.append(specifier)
            elif name not in names:
                names.append(name)

        if is_debug_enabled(logger):
            logger.debug(
                "Selected versions",
                extra=extra_context(
                    event="decision",
                    component="dispatcher",
                    action="active_versions",
                    target=selection.origin,
                    outcome=",".join(names) or "none",
                    missing=",".join(missing) or None,
                )
            )
        if not names:
            raise VersionNotInstalledError(missing, selection.origin)
        for specifier in missing:
            logger.warning("version '%s' is not installed (set by %s)", specifier, selection.origin)
        return ActiveVersions(names=names, origin=selection.origin, missing=missing)

    def version_name(self) -> str:
        """Name of the primary active version."""
        return self.active_versions().primary

    def prefix(self, name: Optional[str] = None) -> Path:
        """Install prefix of ``name`` (default: the active version).

        For ``system`` this is the directory above the system ``go``'s bin/.
        """
        name = name or self.version_name()
        if name == Constants.SYSTEM_VERSION:
            go = self.system_command()
            if go is None:
                raise VersionNotInstalledError([name], Constants.SYSTEM_VERSION)
            return Path(go).resolve().parent.parent
        resolved = self.resolve_installed(name)
        if resolved is None:
            raise VersionNotInstalledError([name], "argument")
        return self.store.prefix(resolved)

    # ---------- dispatch ----------

    def _command_in(self, name: str, command: str) -> Optional[str]:
        if name == Constants.SYSTEM_VERSION:
            return self.system_command(command)
        candidate = self.store.prefix(name) / "bin" / command
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
        return None

    def versions_with(self, command: str) -> List[str]:
        """Installed versions whose bin/ provides ``command``."""
        return [v.name for v in self.store.list() if self._command_in(v.name, command)]

    def locate(self, command: str) -> Tuple[str, str]:
        """Return (version, path) of the first active version providing ``command``.

        Raises:
            CommandNotFoundError: If no active version provides it.
        """
        for name in self.active_versions().names:
            path = self._command_in(name, command)
            if path is not None:
                return name, path
        raise CommandNotFoundError(command, self.versions_with(command))

    def which(self, command: str) -> str:
        """Absolute path of ``command`` for the active version(s)."""
        return self.locate(command)[1]

    def exec_env(self, version: str, base_env: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Environment for running a command under ``version``."""
        env = dict(os.environ if base_env is None else base_env)
        env[Constants.ENV_VERSION] = version
        if version != Constants.SYSTEM_VERSION:
            bin_dir = str(self.store.prefix(version) / "bin")
            env["PATH"] = os.pathsep.join(p for p in (bin_dir, env.get("PATH", "")) if p)
        return env

    def exec(self, command: str, args: Sequence[str]) -> None:
        """Replace the current process with ``command`` of the active version."""
        version, path = self.locate(command)
        context = HookContext(
            phase=HookPhase.EXEC,
            version_name=version,
            prefix=str(self.prefix(version)),
            command=command,
            argv=[path, *args],
            env=self.exec_env(version),
        )
        self.hooks.run(HookPhase.EXEC, context)
        logger.debug("exec %s", " ".join(context.argv))
        os.execve(context.argv[0], context.argv, context.env)
