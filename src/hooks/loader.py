"""Plugin discovery.

Two sources, loaded in this order:

1. Python entry points in the ``goenv.plugins`` group. Each entry point
   resolves to a ``register(registry)`` function.
2. Hook files ``<dir>/<command>/*.py`` for every directory on the hook path
   (``GOENV_HOOK_PATH`` entries, then ``<root>/goenv.d``), in sorted order.
   Each file defines ``register(registry)``.
"""

from __future__ import annotations

import importlib.util
import logging
from importlib.metadata import entry_points
from pathlib import Path
from typing import Iterable, List

from config import GoenvConfig
from constants import Constants
from errors import HookError
from .registry import HookRegistry

logger = logging.getLogger(__name__)

COMMAND_GROUPS = ("install", "uninstall", "exec", "rehash")


def hook_files(directories: Iterable[Path], commands: Iterable[str] = COMMAND_GROUPS) -> List[Path]:
    """List hook files in search-path order, then command order, then by name."""
    found = []
    seen = set()
    for directory in directories:
        for command in commands:
            group_dir = Path(directory) / command
            if not group_dir.is_dir():
                continue
            for path in sorted(group_dir.glob("*.py")):
                resolved = path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                found.append(path)
    return found


def _load_file(path: Path, registry: HookRegistry) -> None:
    module_name = f"goenv_hook_{path.parent.name}_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load hook file {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    register = getattr(module, "register", None)
    if not callable(register):
        raise AttributeError(f"{path} does not define register(registry)")
    register(registry)


def _handle_failure(registry: HookRegistry, source: str, exc: Exception) -> None:
    if registry.abort_on_failure:
        raise HookError("load", source, exc) from exc
    logger.warning("Skipping plugin %s: %s", source, exc)


def load_plugins(registry: HookRegistry, config: GoenvConfig) -> HookRegistry:
    """Populate ``registry`` from entry points and hook files."""
    for ep in entry_points(group=Constants.ENTRY_POINT_GROUP):
        try:
            ep.load()(registry)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            _handle_failure(registry, ep.name, exc)

    for path in hook_files(config.plugin_dirs):
        try:
            _load_file(path, registry)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            _handle_failure(registry, str(path), exc)
        else:
            logger.debug("Loaded hook file %s", path)
    return registry


def build_registry(config: GoenvConfig) -> HookRegistry:
    """Create a registry honouring the configured failure policy and load plugins."""
    return load_plugins(HookRegistry(abort_on_failure=config.hooks_abort_on_failure), config)
