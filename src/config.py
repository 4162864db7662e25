"""Explicit runtime configuration for all goenv components.

Built once per invocation from an optional YAML file and the process
environment (environment wins), then passed to each component instead of
components reading ``os.environ`` themselves.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants, Ordering

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load the YAML configuration file.

    Missing files yield an empty dict; unreadable or malformed files are
    logged and ignored.
    """
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be a mapping", path)
        return {}
    return data


@dataclass
class GoenvConfig:
    """Configuration for one goenv invocation."""

    root: Path
    build_root: Optional[Path] = None
    cache_path: Optional[Path] = None
    debug: bool = False
    version_file: Optional[Path] = None
    version_override: Optional[str] = None
    work_dir: Path = field(default_factory=Path.cwd)
    hook_paths: List[Path] = field(default_factory=list)
    builder: Optional[str] = None
    ordering: Ordering = Ordering.SEMANTIC
    hooks_abort_on_failure: bool = False
    gomod_version_enable: bool = False
    catalog_url: str = Constants.CATALOG_URL
    catalog_ttl: int = Constants.CATALOG_TTL_SEC
    path: str = ""

    def __post_init__(self):
        self.root = Path(self.root)
        if self.build_root is None:
            self.build_root = self.root / Constants.SOURCES_DIR
        if self.cache_path is None:
            self.cache_path = self.root / Constants.CACHE_DIR

    @property
    def versions_dir(self) -> Path:
        return self.root / Constants.VERSIONS_DIR

    @property
    def shims_dir(self) -> Path:
        return self.root / Constants.SHIMS_DIR

    @property
    def global_version_file(self) -> Path:
        return self.root / Constants.GLOBAL_VERSION_FILE

    @property
    def plugin_dirs(self) -> List[Path]:
        """Hook search path: GOENV_HOOK_PATH entries, then <root>/goenv.d."""
        return list(self.hook_paths) + [self.root / Constants.PLUGIN_DIR]

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
    ) -> "GoenvConfig":
        """Create config from the environment and the optional YAML file.

        Args:
            environ: Environment mapping; defaults to ``os.environ``.
            cwd: Working directory; defaults to the process cwd.

        Returns:
            GoenvConfig instance.
        """
        env = os.environ if environ is None else environ

        root = Path(os.path.expanduser(env.get(Constants.ENV_ROOT) or Constants.DEFAULT_ROOT))
        config_path = env.get(Constants.ENV_CONFIG)
        file_data = load_config_file(Path(config_path) if config_path else root / Constants.CONFIG_FILE)

        hooks_section = file_data.get("hooks") or {}
        resolution_section = file_data.get("resolution") or {}
        catalog_section = file_data.get("catalog") or {}

        config = cls(
            root=root,
            work_dir=Path(env.get(Constants.ENV_DIR) or cwd or Path.cwd()),
            debug=bool(env.get(Constants.ENV_DEBUG)),
            version_override=env.get(Constants.ENV_VERSION) or None,
            builder=env.get(Constants.ENV_BUILDER) or None,
            hooks_abort_on_failure=_truthy(hooks_section.get("abort_on_failure", False)),
            gomod_version_enable=_truthy(file_data.get("gomod_version_enable", False)),
            catalog_url=str(catalog_section.get("url", Constants.CATALOG_URL)),
            path=env.get("PATH", ""),
        )

        ordering = env.get(Constants.ENV_VERSION_ORDER) or resolution_section.get("ordering")
        if ordering:
            try:
                config.ordering = Ordering(str(ordering).lower())
            except ValueError:
                logger.warning("Unknown version ordering '%s', using '%s'",
                               ordering, config.ordering.value)
        if "ttl" in catalog_section:
            try:
                config.catalog_ttl = int(catalog_section["ttl"])
            except (TypeError, ValueError):
                logger.warning("Invalid catalog.ttl '%s' in config file", catalog_section["ttl"])

        if env.get(Constants.ENV_BUILD_ROOT):
            config.build_root = Path(env[Constants.ENV_BUILD_ROOT])
        if env.get(Constants.ENV_CACHE_PATH):
            config.cache_path = Path(env[Constants.ENV_CACHE_PATH])
        if env.get(Constants.ENV_VERSION_FILE):
            config.version_file = Path(env[Constants.ENV_VERSION_FILE])
        if env.get(Constants.ENV_HOOK_PATH):
            config.hook_paths = [Path(p) for p in env[Constants.ENV_HOOK_PATH].split(os.pathsep) if p]
        if Constants.ENV_HOOK_ABORT in env:
            config.hooks_abort_on_failure = _truthy(env[Constants.ENV_HOOK_ABORT])
        if Constants.ENV_GOMOD_VERSION_ENABLE in env:
            config.gomod_version_enable = _truthy(env[Constants.ENV_GOMOD_VERSION_ENABLE])

        return config

    def builder_env(self) -> Dict[str, str]:
        """Environment variables every builder invocation receives."""
        return {Constants.ENV_ROOT: str(self.root)}
