"""Lifecycle hooks for plugins.

- registry.py: typed per-phase callback lists and the failure policy
- loader.py: discovery of entry-point plugins and hook files
"""

from .registry import HookContext, HookRegistry, RegisteredHook
from .loader import build_registry, load_plugins

__all__ = [
    "HookContext",
    "HookRegistry",
    "RegisteredHook",
    "build_registry",
    "load_plugins",
]
