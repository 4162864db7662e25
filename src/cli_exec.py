"""CLI entry points for shims: which, exec, rehash and shims."""

from __future__ import annotations

import sys
from typing import Any

from app import AppContext
from constants import Constants, ExitCodes
from errors import CommandNotFoundError


def _report_missing_command(e: CommandNotFoundError) -> int:
    sys.stderr.write(f"{Constants.PROG}: {e}\n")
    if e.available_in:
        sys.stderr.write(
            f"\nThe `{e.command}' command exists in these {Constants.RUNTIME_NAME} versions:\n"
        )
        for name in e.available_in:
            sys.stderr.write(f"  {name}\n")
    return ExitCodes.COMMAND_NOT_FOUND.value


def which_command(args: Any, ctx: AppContext) -> int:
    """Print the full path of the executable the shim would run."""
    try:
        print(ctx.dispatcher.which(args.COMMAND))
    except CommandNotFoundError as e:
        return _report_missing_command(e)
    return ExitCodes.SUCCESS.value


def exec_command(args: Any, ctx: AppContext) -> int:
    """Replace this process with the command of the active version."""
    cmd_args = list(getattr(args, "EXEC_ARGS", []) or [])
    if cmd_args and cmd_args[0] == "--":
        cmd_args = cmd_args[1:]
    try:
        ctx.dispatcher.exec(args.COMMAND, cmd_args)
    except CommandNotFoundError as e:
        return _report_missing_command(e)
    # Only reached when os.execve is replaced (tests).
    return ExitCodes.SUCCESS.value


def rehash_command(args: Any, ctx: AppContext) -> int:  # pylint: disable=unused-argument
    ctx.rehasher.rehash()
    return ExitCodes.SUCCESS.value


def shims_command(args: Any, ctx: AppContext) -> int:
    """List shim files, as paths or with --short as names."""
    short = bool(getattr(args, "SHORT", False))
    for shim in ctx.rehasher.list_shims():
        print(shim.name if short else shim)
    return ExitCodes.SUCCESS.value
