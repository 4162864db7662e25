"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    USAGE_ERROR = 1
    DEFINITION_NOT_FOUND = 2
    COMMAND_NOT_FOUND = 127
    INTERRUPTED = 130


class HookPhase(Enum):
    """Lifecycle phases plugins can hook into.

    Args:
        Enum (string): Phase name, also used as the hook directory group.
    """

    BEFORE_INSTALL = "before_install"
    AFTER_INSTALL = "after_install"
    BEFORE_UNINSTALL = "before_uninstall"
    AFTER_UNINSTALL = "after_uninstall"
    EXEC = "exec"
    REHASH = "rehash"


class Ordering(Enum):
    """How "highest version" is decided when resolving specifiers."""

    SEMANTIC = "semantic"
    CATALOG = "catalog"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG = "goenv"
    RUNTIME_NAME = "Go"
    BUILDER_NAME = "go-build"
    DEFAULT_ROOT = "~/.goenv"

    VERSIONS_DIR = "versions"
    SOURCES_DIR = "sources"
    CACHE_DIR = "cache"
    SHIMS_DIR = "shims"
    PLUGIN_DIR = "goenv.d"
    GLOBAL_VERSION_FILE = "version"
    LOCAL_VERSION_FILE = ".go-version"
    GOMOD_FILE = "go.mod"
    CONFIG_FILE = "config.yml"
    SHIM_LOCK_FILE = ".goenv-shim"

    SYSTEM_VERSION = "system"
    LATEST = "latest"
    UNSTABLE = "unstable"
    DEBUG_SUFFIX = "-debug"

    # Environment variables consumed by the tool
    ENV_ROOT = "GOENV_ROOT"
    ENV_BUILD_ROOT = "GOENV_BUILD_ROOT"
    ENV_CACHE_PATH = "GOENV_CACHE_PATH"
    ENV_DEBUG = "GOENV_DEBUG"
    ENV_VERSION_FILE = "GOENV_VERSION_FILE"
    ENV_VERSION = "GOENV_VERSION"
    ENV_DIR = "GOENV_DIR"
    ENV_HOOK_PATH = "GOENV_HOOK_PATH"
    ENV_BUILDER = "GOENV_BUILDER"
    ENV_VERSION_ORDER = "GOENV_VERSION_ORDER"
    ENV_HOOK_ABORT = "GOENV_HOOK_ABORT"
    ENV_GOMOD_VERSION_ENABLE = "GOENV_GOMOD_VERSION_ENABLE"
    ENV_CONFIG = "GOENV_CONFIG"
    ENV_LOG_LEVEL = "GOENV_LOG_LEVEL"

    # Environment variables handed to the builder
    ENV_BUILD_BUILD_PATH = "GO_BUILD_BUILD_PATH"
    ENV_BUILD_CACHE_PATH = "GO_BUILD_CACHE_PATH"

    # Version name patterns (Go style: 1.21.3, 1.20, 1.22rc1, 1.9beta2)
    STABLE_VERSION_RE = r"^\d+\.\d+(\.\d+)?$"
    UNSTABLE_VERSION_RE = r"^\d+\.\d+(\.\d+)?((beta|rc)\d*)?$"
    MAJOR_MINOR_RE = r"^\d+\.\d+$"

    ENTRY_POINT_GROUP = "goenv.plugins"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # Remote catalog of released versions
    CATALOG_URL = "https://go.dev/dl/?mode=json&include=all"
    CATALOG_CACHE_FILE = "definitions.json"
    CATALOG_TTL_SEC = 86400
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3

    BREW_UPGRADE_HINT = "brew update && brew upgrade goenv"
