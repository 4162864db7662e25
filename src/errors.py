"""Exception types raised by the version manager core.

CLI modules translate these into ``goenv: ...`` messages and exit codes.
"""

from __future__ import annotations

from typing import List, Optional


class GoenvError(Exception):
    """Base class for all version manager errors."""


class VersionNotFoundError(GoenvError):
    """A specifier could not be resolved to a concrete version."""

    def __init__(self, specifier: str, suggestions: Optional[List[str]] = None):
        self.specifier = specifier
        self.suggestions = list(suggestions or [])
        super().__init__(f"version '{specifier}' not found")


class NoVersionSetError(GoenvError):
    """No version is selected by override, local file, global file or system."""

    def __init__(self, message: str = "no version set"):
        super().__init__(message)


class VersionNotInstalledError(GoenvError):
    """A version is selected but not present in the store."""

    def __init__(self, versions: List[str], origin: str):
        self.versions = list(versions)
        self.origin = origin
        names = ", ".join(f"'{v}'" for v in self.versions)
        noun = "version" if len(self.versions) == 1 else "versions"
        super().__init__(f"{noun} {names} is not installed (set by {origin})")


class CommandNotFoundError(GoenvError):
    """The active version does not provide the requested command."""

    def __init__(self, command: str, available_in: Optional[List[str]] = None):
        self.command = command
        self.available_in = list(available_in or [])
        super().__init__(f"'{command}': command not found")


class HookError(GoenvError):
    """A hook failed while the abort-on-failure policy is active."""

    def __init__(self, phase: str, hook_name: str, cause: BaseException):
        self.phase = phase
        self.hook_name = hook_name
        self.cause = cause
        super().__init__(f"{phase} hook '{hook_name}' failed: {cause}")


class BuilderNotFoundError(GoenvError):
    """The external builder executable could not be located."""


class RehashLockedError(GoenvError):
    """Another rehash holds the shim lock."""
