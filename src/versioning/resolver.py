"""Definition resolution: turn a specifier into one concrete version name."""

import logging
import re
from typing import List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from constants import Ordering
from errors import VersionNotFoundError
from .compare import pick_highest
from .models import SpecifierKind, VersionSpec
from .parser import is_release, is_stable, parse_specifier

logger = logging.getLogger(__name__)


class DefinitionResolver:
    """Resolve specifiers against a catalog of version names.

    The catalog is either the builder's installable definitions or the names
    of installed versions.
    """

    def __init__(
        self,
        catalog: Sequence[str],
        ordering: Ordering = Ordering.SEMANTIC,
        strict: bool = True,
    ):
        """Initialize resolver.

        Args:
            catalog: Known version names, in the catalog's own order.
            ordering: How the highest match is chosen.
            strict: When False, exact names missing from the catalog are
                returned unchanged so a downstream tool can report them.
        """
        self.catalog = list(catalog)
        self.ordering = ordering
        self.strict = strict

    def suggestions(self, query: str) -> List[str]:
        """Catalog entries containing ``query`` as a substring, in catalog order."""
        if not query:
            return []
        return [name for name in self.catalog if query in name]

    def resolve(self, raw: str) -> str:
        """Resolve a raw specifier string.

        Raises:
            VersionNotFoundError: If nothing in the catalog satisfies it.
        """
        return self.resolve_spec(parse_specifier(raw))

    def resolve_spec(self, spec: VersionSpec) -> str:
        """Resolve an already classified specifier."""
        if spec.kind == SpecifierKind.LATEST:
            result = pick_highest([n for n in self.catalog if is_stable(n)], self.ordering)
        elif spec.kind == SpecifierKind.UNSTABLE:
            result = pick_highest([n for n in self.catalog if is_release(n)], self.ordering)
        elif spec.kind == SpecifierKind.MAJOR_MINOR:
            pattern = re.compile(rf"^{re.escape(spec.raw)}\.\d+$")
            result = pick_highest([n for n in self.catalog if pattern.match(n)], self.ordering)
            if result is None and spec.raw in self.catalog:
                # Patch-less releases such as 1.20 name themselves.
                result = spec.raw
        elif spec.kind == SpecifierKind.FILE:
            result = spec.raw
        else:
            result = self._resolve_exact(spec.raw)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved specifier",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve",
                    target=spec.raw,
                    kind=spec.kind.value,
                    outcome=result or "not_found",
                    candidate_count=len(self.catalog),
                )
            )
        if result is None:
            raise VersionNotFoundError(spec.raw, self.suggestions(spec.raw))
        return result

    def _resolve_exact(self, name: str) -> Optional[str]:
        if name in self.catalog or not self.strict:
            return name
        return None
