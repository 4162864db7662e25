"""CLI entry points for install and uninstall."""

from __future__ import annotations

import logging
import sys
from typing import Any

from app import AppContext
from constants import Constants, ExitCodes
from errors import VersionNotFoundError
from toolchain.builder import BuildOptions, GoBuilder
from toolchain.catalog import RemoteCatalog
from toolchain.installer import InstallOptions, Installer

logger = logging.getLogger(__name__)


def make_installer(ctx: AppContext) -> Installer:
    """Installer wired to the real builder, remote catalog and stdin prompt."""
    return Installer(
        ctx.config,
        GoBuilder(ctx.config),
        ctx.store,
        hooks=ctx.hooks,
        rehasher=ctx.rehasher,
        catalog=RemoteCatalog(ctx.config),
    )


def _list_definitions(installer: Installer, remote: bool) -> int:
    if remote:
        versions = installer.catalog.versions() if installer.catalog else []
        if not versions:
            sys.stderr.write(f"{Constants.PROG}: upstream release index unavailable\n")
            return ExitCodes.USAGE_ERROR.value
    else:
        versions = installer.builder.definitions()
    print("Available versions:")
    for version in versions:
        print(f"  {version}")
    return ExitCodes.SUCCESS.value


def _install_options(args: Any) -> InstallOptions:
    return InstallOptions(
        force=bool(getattr(args, "FORCE", False)),
        skip_existing=bool(getattr(args, "SKIP_EXISTING", False)),
        build=BuildOptions(
            keep=bool(getattr(args, "KEEP", False)),
            verbose=bool(getattr(args, "VERBOSE", False)),
            patch=bool(getattr(args, "PATCH", False)),
            quiet=bool(getattr(args, "QUIET", False)),
            debug=bool(getattr(args, "DEBUG_BUILD", False)),
        ),
    )


def install_command(args: Any, ctx: AppContext, installer: Installer = None) -> int:
    """Entry point for ``goenv install``.

    Args:
        args: Parsed CLI arguments namespace.
        ctx: Shared components.
        installer: Optional pre-built installer (tests).

    Returns:
        Exit status.
    """
    installer = installer or make_installer(ctx)

    if getattr(args, "LIST", False):
        return _list_definitions(installer, bool(getattr(args, "REMOTE", False)))
    if getattr(args, "SHOW_VERSION", False):
        status, banner = installer.builder.version()
        if banner:
            print(banner)
        return status

    try:
        definition = installer.resolve(getattr(args, "VERSION", None), ctx.dispatcher)
    except VersionNotFoundError as e:
        sys.stderr.write(f"{Constants.PROG}: {e}\n")
        if e.suggestions:
            sys.stderr.write(f"\nThe following versions contain `{e.specifier}' in the name:\n")
            for candidate in e.suggestions:
                sys.stderr.write(f"  {candidate}\n")
        return ExitCodes.USAGE_ERROR.value

    logger.info("Installing %s", definition)
    return installer.install(definition, _install_options(args))


def uninstall_command(args: Any, ctx: AppContext, installer: Installer = None) -> int:
    """Entry point for ``goenv uninstall``."""
    installer = installer or make_installer(ctx)
    return installer.uninstall(args.VERSION, force=bool(getattr(args, "FORCE", False)))
