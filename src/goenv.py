"""goenv - Go version manager.

Installs Go versions side by side under $GOENV_ROOT/versions, selects the
active one per directory, shell or user, and routes shims to it.

    Returns:
        int: Exit code
"""
import logging
import sys

from app import AppContext
from args import parse_args
from cli_exec import exec_command, rehash_command, shims_command, which_command
from cli_install import install_command, uninstall_command
from cli_versions import (
    global_command,
    local_command,
    prefix_command,
    root_command,
    version_command,
    version_file_command,
    version_name_command,
    versions_command,
)
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import GoenvConfig
from constants import Constants, ExitCodes
from errors import GoenvError

COMMANDS = {
    "install": install_command,
    "uninstall": uninstall_command,
    "versions": versions_command,
    "version": version_command,
    "version-name": version_name_command,
    "version-file": version_file_command,
    "local": local_command,
    "global": global_command,
    "prefix": prefix_command,
    "root": root_command,
    "which": which_command,
    "exec": exec_command,
    "rehash": rehash_command,
    "shims": shims_command,
}

# Commands that never fire plugin hooks.
_NO_PLUGIN_COMMANDS = ("root", "version-file", "shims")


def run(argv=None) -> int:
    """Parse ``argv``, run the command and return its exit status."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    level = getattr(logging, args.LOG_LEVEL) if getattr(args, "LOG_LEVEL", None) else None
    configure_logging(level, getattr(args, "LOG_FILE", None))

    config = GoenvConfig.from_env()
    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action,
                                target=str(config.root))
        )

    try:
        ctx = AppContext.create(config, load_plugins=args.action not in _NO_PLUGIN_COMMANDS)
        return COMMANDS[args.action](args, ctx)
    except GoenvError as e:
        sys.stderr.write(f"{Constants.PROG}: {e}\n")
        return ExitCodes.USAGE_ERROR.value
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return ExitCodes.INTERRUPTED.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
