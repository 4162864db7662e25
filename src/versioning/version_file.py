"""Version file discovery, reading and writing.

A local ``.go-version`` is searched from the working directory upwards. When
go.mod support is enabled, a directory without ``.go-version`` but with a
``go.mod`` contributes the version of its ``go`` directive.
"""

import logging
from pathlib import Path
from typing import List, Optional

from constants import Constants
from .parser import parse_gomod_text, parse_version_file_text

logger = logging.getLogger(__name__)


def find_local_version_file(start: Path, gomod_enable: bool = False) -> Optional[Path]:
    """Walk up from ``start`` and return the nearest version file, if any."""
    directory = Path(start).resolve()
    for candidate_dir in [directory, *directory.parents]:
        candidate = candidate_dir / Constants.LOCAL_VERSION_FILE
        if candidate.is_file():
            return candidate
        if gomod_enable:
            gomod = candidate_dir / Constants.GOMOD_FILE
            if gomod.is_file():
                return gomod
    return None


def read_version_file(path: Path) -> List[str]:
    """Read the ordered specifier list from a version file or go.mod.

    Unreadable files yield an empty list.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot read version file %s: %s", path, e)
        return []
    if Path(path).name == Constants.GOMOD_FILE:
        version = parse_gomod_text(text)
        return [version] if version else []
    return parse_version_file_text(text)


def write_version_file(path: Path, versions: List[str]) -> None:
    """Write one specifier per line."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{v}\n" for v in versions), encoding="utf-8")


def remove_version_file(path: Path) -> bool:
    """Delete a version file; returns False when it did not exist."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    return True
