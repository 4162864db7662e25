"""Install and uninstall orchestration.

The installer resolves a specifier against the builder's definitions, guards
existing prefixes, runs lifecycle hooks around the builder and either rehashes
(success) or removes a half-built prefix (failure or interrupt).
"""

from __future__ import annotations

import logging
import signal
import shutil
import subprocess
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, TextIO

from config import GoenvConfig
from constants import Constants, ExitCodes, HookPhase
from errors import NoVersionSetError, RehashLockedError
from hooks.registry import HookContext, HookRegistry
from runtime.dispatcher import ShimDispatcher
from runtime.rehash import Rehasher
from runtime.store import VersionStore
from versioning.models import SpecifierKind
from versioning.parser import parse_specifier
from versioning.resolver import DefinitionResolver
from .builder import BuildOptions, GoBuilder
from .catalog import RemoteCatalog

logger = logging.getLogger(__name__)

Prompt = Callable[[str], bool]


def confirm(question: str) -> bool:
    """Ask a yes/no question on stdin; anything but y/Y means no."""
    try:
        reply = input(question)
    except EOFError:
        return False
    return reply.strip().lower().startswith("y")


@contextmanager
def terminate_as_interrupt() -> Iterator[None]:
    """Treat SIGTERM like Ctrl+C while the block runs."""
    def _handler(signum, frame):  # pylint: disable=unused-argument
        raise KeyboardInterrupt

    try:
        previous = signal.signal(signal.SIGTERM, _handler)
    except ValueError:
        # Signal handlers can only be installed from the main thread.
        previous = None
    try:
        yield
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)


@dataclass
class InstallOptions:
    """Options of one ``goenv install`` run."""

    force: bool = False
    skip_existing: bool = False
    build: BuildOptions = field(default_factory=BuildOptions)


class Installer:
    """Orchestrates installs into, and removals from, the version store."""

    def __init__(
        self,
        config: GoenvConfig,
        builder: GoBuilder,
        store: VersionStore,
        hooks: Optional[HookRegistry] = None,
        rehasher: Optional[Rehasher] = None,
        catalog: Optional[RemoteCatalog] = None,
        prompt: Prompt = confirm,
        stream: Optional[TextIO] = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.config = config
        self.builder = builder
        self.store = store
        self.hooks = hooks or HookRegistry()
        self.rehasher = rehasher or Rehasher(config, store, self.hooks)
        self.catalog = catalog
        self.prompt = prompt
        self._stream = stream
        self._runner = runner

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stderr

    def _say(self, message: str = "") -> None:
        self.stream.write(message + "\n")

    # ---------- resolution ----------

    def resolve(self, specifier: Optional[str], dispatcher: Optional[ShimDispatcher] = None) -> str:
        """Turn the install argument into a definition name or file.

        Without a specifier, the first entry of the configured version file
        (override, local or global) is used.

        Raises:
            NoVersionSetError: No specifier and nothing configured.
            VersionNotFoundError: ``latest``/``unstable``/prefix found nothing.
        """
        if not specifier:
            dispatcher = dispatcher or ShimDispatcher(self.config, self.store, self.hooks)
            selection = dispatcher.selection()
            configured = [v for v in selection.versions if v != Constants.SYSTEM_VERSION]
            if not configured:
                raise NoVersionSetError("no version specified and no version file found")
            specifier = configured[0]
            logger.info("Using version '%s' (set by %s)", specifier, selection.origin)

        spec = parse_specifier(specifier, allow_files=True)
        if spec.kind in (SpecifierKind.FILE, SpecifierKind.EXACT):
            return spec.raw
        resolver = DefinitionResolver(self.builder.definitions(), self.config.ordering, strict=False)
        return resolver.resolve_spec(spec)

    @staticmethod
    def version_name(definition: str, debug: bool = False) -> str:
        """Store name for a definition: its basename, plus -debug for debug builds."""
        name = Path(definition).name
        if debug:
            name += Constants.DEBUG_SUFFIX
        return name

    # ---------- install ----------

    def install(self, definition: str, options: Optional[InstallOptions] = None) -> int:
        """Build ``definition`` into the store; returns the exit status."""
        options = options or InstallOptions()
        name = self.version_name(definition, options.build.debug)
        prefix = self.store.prefix(name)

        if self.store.is_installed(name):
            if options.skip_existing:
                logger.info("%s is already installed, skipping", name)
                return ExitCodes.SUCCESS.value
            if not options.force:
                self._say(f"{Constants.PROG}: {prefix} already exists")
                if not self.prompt("continue with installation? (y/N) "):
                    return ExitCodes.USAGE_ERROR.value

        prefix_existed = prefix.exists()
        build_env = {}
        if options.build.keep:
            build_env[Constants.ENV_BUILD_BUILD_PATH] = str(Path(self.config.build_root) / name)
        if Path(self.config.cache_path).is_dir():
            build_env[Constants.ENV_BUILD_CACHE_PATH] = str(self.config.cache_path)

        self.hooks.run(
            HookPhase.BEFORE_INSTALL,
            HookContext(phase=HookPhase.BEFORE_INSTALL, version_name=name,
                        definition=definition, prefix=str(prefix)),
        )

        try:
            with terminate_as_interrupt():
                status = self.builder.build(definition, str(prefix), options.build, env=build_env)
        except KeyboardInterrupt:
            self._say()
            self._say(f"{Constants.PROG}: installation of {name} interrupted")
            self._cleanup(prefix, prefix_existed)
            return ExitCodes.INTERRUPTED.value

        if status == ExitCodes.DEFINITION_NOT_FOUND.value:
            self.report_not_found(definition)

        try:
            self.hooks.run(
                HookPhase.AFTER_INSTALL,
                HookContext(phase=HookPhase.AFTER_INSTALL, version_name=name,
                            definition=definition, prefix=str(prefix), status=status),
            )
        finally:
            # A hook aborting the run must not leave a half-built prefix.
            if status == ExitCodes.SUCCESS.value:
                self._rehash()
            elif status != ExitCodes.DEFINITION_NOT_FOUND.value:
                self._cleanup(prefix, prefix_existed)
        return status

    def _cleanup(self, prefix: Path, prefix_existed: bool) -> None:
        if prefix_existed or not prefix.exists():
            return
        logger.info("Removing incomplete installation %s", prefix)
        shutil.rmtree(prefix, ignore_errors=True)

    def _rehash(self) -> None:
        try:
            self.rehasher.rehash()
        except RehashLockedError as e:
            logger.warning("%s", e)

    # ---------- diagnostics ----------

    def suggestions(self, definition: str) -> List[str]:
        """Installable definitions containing ``definition`` in their name."""
        return DefinitionResolver(self.builder.definitions()).suggestions(definition)

    def report_not_found(self, definition: str) -> None:
        """Explain a status-2 build failure on the error stream."""
        candidates = self.suggestions(definition)
        if candidates:
            self._say()
            self._say(f"The following versions contain `{definition}' in the name:")
            for candidate in candidates:
                self._say(f"  {candidate}")
        if self.catalog is not None and definition in self.catalog.versions():
            self._say()
            self._say(f"{Constants.RUNTIME_NAME} {definition} has been released, "
                      f"but this {Constants.BUILDER_NAME} has no definition for it yet.")
        self._say()
        self._say(f"See all available versions with `{Constants.PROG} install --list'.")
        self._say()
        self.stream.write(self.upgrade_guidance())

    def _brew_prefix(self) -> Optional[str]:
        brew = shutil.which("brew", path=self.config.path)
        if brew is None:
            return None
        try:
            result = self._runner([brew, "--prefix"], capture_output=True, text=True, check=False)
        except OSError:
            return None
        if result.returncode != 0 or not result.stdout.strip():
            return None
        return result.stdout.strip()

    def upgrade_guidance(self) -> str:
        """How to get newer definitions, depending on how goenv was installed."""
        message = f"If the version you need is missing, try upgrading {Constants.PROG}"
        brew = self._brew_prefix()
        here = Path(__file__).resolve()
        if brew and here.is_relative_to(Path(brew).resolve()):
            return f"{message}:\n\n  {Constants.BREW_UPGRADE_HINT}\n"
        if (self.config.root / ".git").is_dir():
            return f"{message}:\n\n  cd {self.config.root} && git pull && cd -\n"
        return f"{message}.\n"

    # ---------- uninstall ----------

    def uninstall(self, name: str, force: bool = False) -> int:
        """Remove an installed version; returns the exit status."""
        entry = self.store.get(name)
        if entry is None:
            if force:
                return ExitCodes.SUCCESS.value
            self._say(f"{Constants.PROG}: version `{name}' not installed")
            return ExitCodes.USAGE_ERROR.value
        if not force and not self.prompt(f"{Constants.PROG}: remove {entry.path}? (y/N) "):
            return ExitCodes.USAGE_ERROR.value

        context = dict(version_name=name, prefix=str(entry.path))
        self.hooks.run(HookPhase.BEFORE_UNINSTALL, HookContext(phase=HookPhase.BEFORE_UNINSTALL, **context))
        self.store.remove(name)
        self.hooks.run(HookPhase.AFTER_UNINSTALL, HookContext(phase=HookPhase.AFTER_UNINSTALL, **context))
        self._rehash()
        self._say(f"{Constants.PROG}: {name} uninstalled")
        return ExitCodes.SUCCESS.value
