"""Installing versions.

- builder.py: wrapper around the external go-build executable
- catalog.py: cached upstream release list
- installer.py: install/uninstall orchestration
"""

from .builder import BuildOptions, GoBuilder
from .catalog import RemoteCatalog
from .installer import InstallOptions, Installer

__all__ = [
    "BuildOptions",
    "GoBuilder",
    "RemoteCatalog",
    "InstallOptions",
    "Installer",
]
