"""Wiring of the components shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

from config import GoenvConfig
from hooks.loader import build_registry
from hooks.registry import HookRegistry
from runtime.dispatcher import ShimDispatcher
from runtime.rehash import Rehasher
from runtime.store import VersionStore


@dataclass
class AppContext:
    """Configuration plus the components built from it."""

    config: GoenvConfig
    hooks: HookRegistry
    store: VersionStore
    dispatcher: ShimDispatcher
    rehasher: Rehasher

    @classmethod
    def create(cls, config: GoenvConfig, load_plugins: bool = True) -> "AppContext":
        """Build every component from ``config``.

        Args:
            config: Configuration for this invocation.
            load_plugins: Discover entry-point and file plugins.

        Returns:
            AppContext instance.
        """
        hooks = build_registry(config) if load_plugins else HookRegistry(config.hooks_abort_on_failure)
        store = VersionStore(config)
        return cls(
            config=config,
            hooks=hooks,
            store=store,
            dispatcher=ShimDispatcher(config, store, hooks),
            rehasher=Rehasher(config, store, hooks),
        )
