"""CLI entry points for selecting and inspecting versions."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List

from app import AppContext
from constants import Constants, ExitCodes
from errors import GoenvError, VersionNotInstalledError
from versioning.version_file import read_version_file, remove_version_file, write_version_file


def _validate(ctx: AppContext, versions: List[str]) -> None:
    missing = [v for v in versions if ctx.dispatcher.resolve_installed(v) is None]
    if missing:
        raise VersionNotInstalledError(missing, "argument")


def versions_command(args: Any, ctx: AppContext) -> int:
    """List installed versions, marking the active ones."""
    bare = bool(getattr(args, "BARE", False))
    try:
        active = ctx.dispatcher.active_versions()
        current, origin = active.names, active.origin
    except GoenvError:
        current, origin = [], None

    names = [v.name for v in ctx.store.list()]
    if not bare and ctx.dispatcher.system_command() is not None:
        names.insert(0, Constants.SYSTEM_VERSION)
    for name in names:
        if bare:
            print(name)
        elif name in current:
            print(f"* {name} (set by {origin})")
        else:
            print(f"  {name}")
    return ExitCodes.SUCCESS.value


def version_command(args: Any, ctx: AppContext) -> int:  # pylint: disable=unused-argument
    """Print each active version with the place it was set."""
    active = ctx.dispatcher.active_versions()
    for name in active.names:
        print(f"{name} (set by {active.origin})")
    return ExitCodes.SUCCESS.value


def version_name_command(args: Any, ctx: AppContext) -> int:  # pylint: disable=unused-argument
    print(":".join(ctx.dispatcher.active_versions().names))
    return ExitCodes.SUCCESS.value


def version_file_command(args: Any, ctx: AppContext) -> int:  # pylint: disable=unused-argument
    print(ctx.dispatcher.version_file())
    return ExitCodes.SUCCESS.value


def local_command(args: Any, ctx: AppContext) -> int:
    """Show, set or unset the local version file."""
    target = ctx.config.work_dir / Constants.LOCAL_VERSION_FILE
    if getattr(args, "UNSET", False):
        remove_version_file(target)
        return ExitCodes.SUCCESS.value

    versions = list(getattr(args, "VERSIONS", []) or [])
    if versions:
        _validate(ctx, versions)
        write_version_file(target, versions)
        return ExitCodes.SUCCESS.value

    local = ctx.dispatcher.local_version_file()
    entries = read_version_file(local) if local else []
    if not entries:
        sys.stderr.write(f"{Constants.PROG}: no local version configured for this directory\n")
        return ExitCodes.USAGE_ERROR.value
    print("\n".join(entries))
    return ExitCodes.SUCCESS.value


def global_command(args: Any, ctx: AppContext) -> int:
    """Show or set the global default version."""
    target = ctx.config.global_version_file
    versions = list(getattr(args, "VERSIONS", []) or [])
    if versions:
        _validate(ctx, versions)
        write_version_file(target, versions)
        return ExitCodes.SUCCESS.value

    entries = read_version_file(target) if target.is_file() else []
    print("\n".join(entries or [Constants.SYSTEM_VERSION]))
    return ExitCodes.SUCCESS.value


def prefix_command(args: Any, ctx: AppContext) -> int:
    print(ctx.dispatcher.prefix(getattr(args, "VERSION", None)))
    return ExitCodes.SUCCESS.value


def root_command(args: Any, ctx: AppContext) -> int:  # pylint: disable=unused-argument
    print(Path(ctx.config.root))
    return ExitCodes.SUCCESS.value
