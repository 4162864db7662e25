"""Version ordering.

Two orderings are supported:

* ``semantic``: explicit semantic-version comparison of Go version names.
* ``catalog``: the order the catalog lists names in, where the last match
  wins. This only matches numeric order when the catalog itself is sorted
  that way (``1.9`` after ``1.10`` in a plain lexicographic listing breaks it).
"""

from typing import List, Optional, Sequence, Tuple

from constants import Ordering
from .parser import to_semver


def _semantic_key(name: str) -> Tuple[object, str]:
    return (to_semver(name), name)


def sort_versions(names: Sequence[str], ordering: Ordering = Ordering.SEMANTIC) -> List[str]:
    """Return names in ascending order under ``ordering``."""
    if ordering == Ordering.CATALOG:
        return list(names)
    parsed = [n for n in names if to_semver(n) is not None]
    # Non-version names sort before every real version.
    others = sorted(n for n in names if to_semver(n) is None)
    return others + sorted(parsed, key=_semantic_key)


def pick_highest(candidates: Sequence[str], ordering: Ordering = Ordering.SEMANTIC) -> Optional[str]:
    """Pick the highest candidate, or None when there are none."""
    if not candidates:
        return None
    return sort_versions(candidates, ordering)[-1]
