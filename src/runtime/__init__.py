"""Installed-version runtime support.

- store.py: the version store under <root>/versions
- dispatcher.py: active version selection, which and exec
- rehash.py: shim regeneration
"""

from .store import VersionStore
from .dispatcher import ShimDispatcher
from .rehash import Rehasher

__all__ = [
    "VersionStore",
    "ShimDispatcher",
    "Rehasher",
]
