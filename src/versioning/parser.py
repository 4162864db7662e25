"""Specifier and version-name parsing utilities."""

import os
import re
from typing import List, Optional

import semantic_version

from constants import Constants
from .models import SpecifierKind, VersionSpec

_GO_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?(?:(alpha|beta|rc)(\d*))?$")


def parse_specifier(raw: str, allow_files: bool = False) -> VersionSpec:
    """Classify a raw specifier string.

    Args:
        raw: Text given on the command line or read from a version file.
        allow_files: Treat an existing path as a definition file (install only).

    Returns:
        VersionSpec with the detected kind.
    """
    spec = raw.strip()
    lowered = spec.lower()
    if lowered == Constants.LATEST:
        return VersionSpec(raw=spec, kind=SpecifierKind.LATEST)
    if lowered == Constants.UNSTABLE:
        return VersionSpec(raw=spec, kind=SpecifierKind.UNSTABLE)
    if lowered == Constants.SYSTEM_VERSION:
        return VersionSpec(raw=spec, kind=SpecifierKind.SYSTEM)
    if re.match(Constants.MAJOR_MINOR_RE, spec):
        return VersionSpec(raw=spec, kind=SpecifierKind.MAJOR_MINOR)
    if allow_files and os.sep in spec and os.path.isfile(spec):
        return VersionSpec(raw=spec, kind=SpecifierKind.FILE)
    return VersionSpec(raw=spec, kind=SpecifierKind.EXACT)


def is_stable(name: str) -> bool:
    """True for purely numeric release names such as 1.21.3 or 1.20."""
    return re.match(Constants.STABLE_VERSION_RE, name) is not None


def is_release(name: str) -> bool:
    """True for stable names and beta/rc pre-releases."""
    return re.match(Constants.UNSTABLE_VERSION_RE, name) is not None


def to_semver(name: str) -> Optional[semantic_version.Version]:
    """Map a Go-style version name onto a semantic version.

    ``1.20`` becomes ``1.20.0`` and ``1.21rc2`` becomes ``1.21.0-rc.2`` so the
    numeric pre-release counter compares numerically. A ``-debug`` suffix is
    ignored. Names that are not version-like, such as ``tip``, return None.
    """
    base = name[:-len(Constants.DEBUG_SUFFIX)] if name.endswith(Constants.DEBUG_SUFFIX) else name
    m = _GO_VERSION_RE.match(base)
    if not m:
        try:
            return semantic_version.Version(base)
        except ValueError:
            return None
    major, minor, patch, pre_tag, pre_num = m.groups()
    text = f"{int(major)}.{int(minor)}.{int(patch or 0)}"
    if pre_tag:
        text += f"-{pre_tag}.{int(pre_num or 0)}"
    return semantic_version.Version(text)


def parse_version_file_text(text: str) -> List[str]:
    """Split version file content into its ordered specifier list.

    Entries are separated by whitespace or newlines; ``#`` starts a comment.
    """
    versions = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        for word in line.split():
            if word in (".", ".."):
                continue
            versions.append(word)
    return versions


def parse_gomod_text(text: str) -> Optional[str]:
    """Return the version of the ``go`` directive in a go.mod file."""
    for line in text.splitlines():
        m = re.match(r"^\s*go\s+(\S+)\s*(//.*)?$", line)
        if m:
            return m.group(1)
    return None
