"""Data models for version specifiers, installed versions and selections."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

from constants import Constants


class SpecifierKind(Enum):
    """Kind of a version specifier, derived from its text."""
    EXACT = "exact"
    LATEST = "latest"
    UNSTABLE = "unstable"
    MAJOR_MINOR = "major_minor"
    SYSTEM = "system"
    FILE = "file"


@dataclass
class VersionSpec:
    """Normalized representation of a raw specifier."""
    raw: str
    kind: SpecifierKind


@dataclass
class InstalledVersion:
    """One entry of the version store: <root>/versions/<name>."""
    name: str
    path: Path

    @property
    def bin_dir(self) -> Path:
        return self.path / "bin"

    @property
    def has_bin(self) -> bool:
        """Presence of bin/ is what makes a prefix count as installed."""
        return self.bin_dir.is_dir()

    @property
    def debug(self) -> bool:
        return self.name.endswith(Constants.DEBUG_SUFFIX)


@dataclass
class VersionSelection:
    """Raw specifiers read from one source, with a description of that source."""
    versions: List[str]
    origin: str


@dataclass
class ActiveVersions:
    """Installed versions selected for dispatch, in precedence order."""
    names: List[str]
    origin: str
    missing: List[str] = field(default_factory=list)

    @property
    def primary(self) -> str:
        return self.names[0]
