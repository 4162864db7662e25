"""Argument parsing functionality for goenv."""

import argparse
import sys

from constants import Constants, ExitCodes


class GoenvArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCodes.USAGE_ERROR.value, f"{self.prog}: error: {message}\n")


def _add_install_parser(subparsers):
    install = subparsers.add_parser(
        "install",
        help="Install a Go version using go-build",
        description=(
            "Install a Go version. Without a version argument the version "
            "configured by the local or global version file is installed."
        ),
    )
    existing = install.add_mutually_exclusive_group()
    existing.add_argument("-f", "--force",
                          dest="FORCE",
                          help="Install even if the version appears to be installed already",
                          action="store_true")
    existing.add_argument("-s", "--skip-existing",
                          dest="SKIP_EXISTING",
                          help="Skip if the version appears to be installed already",
                          action="store_true")
    install.add_argument("-k", "--keep",
                         dest="KEEP",
                         help="Keep source tree in $GOENV_BUILD_ROOT after installation "
                              "(defaults to $GOENV_ROOT/sources)",
                         action="store_true")
    install.add_argument("-v", "--verbose",
                         dest="VERBOSE",
                         help="Verbose mode: print compilation status to stdout",
                         action="store_true")
    install.add_argument("-p", "--patch",
                         dest="PATCH",
                         help="Apply a patch from stdin before building",
                         action="store_true")
    install.add_argument("-q", "--quiet",
                         dest="QUIET",
                         help="Disable progress output",
                         action="store_true")
    install.add_argument("-g", "--debug",
                         dest="DEBUG_BUILD",
                         help="Build a debug version",
                         action="store_true")
    install.add_argument("-l", "--list",
                         dest="LIST",
                         help="List all available versions",
                         action="store_true")
    install.add_argument("--remote",
                         dest="REMOTE",
                         help="With --list, list released versions from the upstream index",
                         action="store_true")
    install.add_argument("--version",
                         dest="SHOW_VERSION",
                         help="Show the go-build version",
                         action="store_true")
    install.add_argument("VERSION",
                         nargs="?",
                         help="Version, 'latest', 'unstable', a major.minor prefix or a definition file")


def build_parser():
    """Build the goenv argument parser."""
    parser = GoenvArgumentParser(
        prog=Constants.PROG,
        description="goenv - Simple Go version management",
        add_help=True,
    )
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    subparsers = parser.add_subparsers(dest="action", metavar="<command>")
    subparsers.required = True

    _add_install_parser(subparsers)

    uninstall = subparsers.add_parser("uninstall", help="Uninstall a specific Go version")
    uninstall.add_argument("-f", "--force",
                           dest="FORCE",
                           help="Do not prompt for confirmation; succeed if not installed",
                           action="store_true")
    uninstall.add_argument("VERSION", help="Installed version name")

    versions = subparsers.add_parser("versions", help="List all Go versions available to goenv")
    versions.add_argument("--bare",
                          dest="BARE",
                          help="Print names only, without the active-version marker",
                          action="store_true")

    subparsers.add_parser("version", help="Show the current Go version and its origin")
    subparsers.add_parser("version-name", help="Show the current Go version")
    subparsers.add_parser("version-file", help="Show the file that selects the current version")

    local = subparsers.add_parser("local", help="Set or show the local application-specific Go version")
    local.add_argument("--unset",
                       dest="UNSET",
                       help="Remove the local version file",
                       action="store_true")
    local.add_argument("VERSIONS", nargs="*", help="Versions to write to .go-version")

    glob = subparsers.add_parser("global", help="Set or show the global Go version")
    glob.add_argument("VERSIONS", nargs="*", help="Versions to write to $GOENV_ROOT/version")

    prefix = subparsers.add_parser("prefix", help="Display prefix for a Go version")
    prefix.add_argument("VERSION", nargs="?", help="Version name (default: current)")

    subparsers.add_parser("root", help="Display the root directory where versions and shims are kept")

    which = subparsers.add_parser("which", help="Display the full path to an executable")
    which.add_argument("COMMAND", help="Executable name, e.g. go or gofmt")

    exec_ = subparsers.add_parser("exec", help="Run an executable with the selected Go version")
    exec_.add_argument("COMMAND", help="Executable name")
    exec_.add_argument("EXEC_ARGS", nargs=argparse.REMAINDER, help="Arguments passed through")

    subparsers.add_parser("rehash", help="Rehash goenv shims (run this after installing executables)")

    shims = subparsers.add_parser("shims", help="List existing goenv shims")
    shims.add_argument("--short",
                       dest="SHORT",
                       help="Print shim names instead of paths",
                       action="store_true")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
