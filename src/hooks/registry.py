"""Typed lifecycle hook registry.

Plugins register plain callables against a ``HookPhase``. Callbacks for a
phase run in registration order and receive a ``HookContext``. Their return
values are ignored. A failing callback is logged and skipped, unless the
registry was created with ``abort_on_failure=True``, in which case a
``HookError`` stops the sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import HookPhase
from errors import HookError

logger = logging.getLogger(__name__)


@dataclass
class HookContext:
    """State handed to hook callbacks.

    ``env`` and ``shims`` are mutable: exec hooks may adjust the environment
    of the command about to run, rehash hooks may add shim names.
    """

    phase: HookPhase
    version_name: Optional[str] = None
    definition: Optional[str] = None
    prefix: Optional[str] = None
    status: Optional[int] = None
    command: Optional[str] = None
    argv: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    shims: List[str] = field(default_factory=list)


HookCallback = Callable[[HookContext], object]


@dataclass
class RegisteredHook:
    """A callback plus the name used in logs."""

    name: str
    callback: HookCallback


class HookRegistry:
    """Ordered per-phase callback lists."""

    def __init__(self, abort_on_failure: bool = False):
        self.abort_on_failure = abort_on_failure
        self._hooks: Dict[HookPhase, List[RegisteredHook]] = {phase: [] for phase in HookPhase}

    def register(self, phase: HookPhase, callback: HookCallback, name: Optional[str] = None) -> HookCallback:
        """Append ``callback`` to the list for ``phase`` and return it."""
        hook_name = name or getattr(callback, "__qualname__", repr(callback))
        self._hooks[phase].append(RegisteredHook(name=hook_name, callback=callback))
        logger.debug("Registered %s hook %s", phase.value, hook_name)
        return callback

    def before_install(self, callback: HookCallback) -> HookCallback:
        return self.register(HookPhase.BEFORE_INSTALL, callback)

    def after_install(self, callback: HookCallback) -> HookCallback:
        return self.register(HookPhase.AFTER_INSTALL, callback)

    def before_uninstall(self, callback: HookCallback) -> HookCallback:
        return self.register(HookPhase.BEFORE_UNINSTALL, callback)

    def after_uninstall(self, callback: HookCallback) -> HookCallback:
        return self.register(HookPhase.AFTER_UNINSTALL, callback)

    def on_exec(self, callback: HookCallback) -> HookCallback:
        return self.register(HookPhase.EXEC, callback)

    def on_rehash(self, callback: HookCallback) -> HookCallback:
        return self.register(HookPhase.REHASH, callback)

    def hooks(self, phase: HookPhase) -> List[RegisteredHook]:
        """Snapshot of the callbacks registered for ``phase``."""
        return list(self._hooks[phase])

    def run(self, phase: HookPhase, context: HookContext) -> List[str]:
        """Run every callback of ``phase`` in registration order.

        Returns:
            Names of the hooks that failed (best-effort mode).

        Raises:
            HookError: On the first failure when ``abort_on_failure`` is set.
        """
        failed = []
        # Hooks registered while the phase runs wait for the next run.
        for hook in self.hooks(phase):
            with Timer() as t:
                try:
                    hook.callback(context)
                except Exception as exc:  # pylint: disable=broad-exception-caught
                    if self.abort_on_failure:
                        raise HookError(phase.value, hook.name, exc) from exc
                    logger.warning("%s hook %s failed: %s", phase.value, hook.name, exc)
                    failed.append(hook.name)
                    continue
            if is_debug_enabled(logger):
                logger.debug(
                    "Hook finished",
                    extra=extra_context(
                        event="hook",
                        component="hooks",
                        action=phase.value,
                        target=hook.name,
                        duration_ms=t.duration_ms(),
                    )
                )
        return failed
