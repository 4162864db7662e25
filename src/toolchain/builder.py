"""Wrapper around the external ``go-build`` executable.

goenv never compiles Go itself. The builder knows the installable definitions
and produces an install prefix:

    go-build [-k] [-v] [-p] [-q] [-g] <definition> <prefix>
    go-build --definitions
    go-build --version

Exit status 2 from a build means the definition was not found.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from common.logging_utils import Timer, extra_context, is_debug_enabled
from config import GoenvConfig
from constants import Constants
from errors import BuilderNotFoundError

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass
class BuildOptions:
    """Install options forwarded to the builder."""

    keep: bool = False
    verbose: bool = False
    patch: bool = False
    quiet: bool = False
    debug: bool = False

    def flags(self) -> List[str]:
        """Builder command-line flags, in a fixed order."""
        flags = []
        if self.keep:
            flags.append("-k")
        if self.verbose:
            flags.append("-v")
        if self.patch:
            flags.append("-p")
        if self.quiet:
            flags.append("-q")
        if self.debug:
            flags.append("-g")
        return flags


def shell_status(returncode: int) -> int:
    """Map a subprocess return code onto a shell exit status.

    Negative codes (killed by signal N) become 128 + N.
    """
    if returncode < 0:
        return 128 + abs(returncode)
    return returncode


class GoBuilder:
    """Invokes the external builder."""

    def __init__(self, config: GoenvConfig, runner: Runner = subprocess.run):
        self.config = config
        self._runner = runner

    def executable(self) -> str:
        """Path of the builder executable.

        Raises:
            BuilderNotFoundError: If it is neither configured nor on PATH.
        """
        if self.config.builder:
            return self.config.builder
        found = shutil.which(Constants.BUILDER_NAME, path=self.config.path)
        if found is None:
            raise BuilderNotFoundError(f"{Constants.BUILDER_NAME} not found in PATH")
        return found

    def _env(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        env = dict(os.environ)
        env.update(self.config.builder_env())
        if extra:
            env.update(extra)
        return env

    def _run(self, cmd: List[str], **kwargs) -> subprocess.CompletedProcess:
        try:
            return self._runner(cmd, **kwargs)
        except OSError as e:
            raise BuilderNotFoundError(f"cannot run {cmd[0]}: {e}") from e

    def definitions(self) -> List[str]:
        """Installable definition names, in the builder's order."""
        result = self._run(
            [self.executable(), "--definitions"],
            capture_output=True,
            text=True,
            env=self._env(),
            check=False,
        )
        if result.returncode != 0:
            logger.warning("%s --definitions exited with status %s", Constants.BUILDER_NAME, result.returncode)
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def version(self) -> Tuple[int, str]:
        """Builder version banner and status."""
        result = self._run(
            [self.executable(), "--version"],
            capture_output=True,
            text=True,
            env=self._env(),
            check=False,
        )
        return shell_status(result.returncode), result.stdout.strip()

    def build(
        self,
        definition: str,
        prefix: str,
        options: Optional[BuildOptions] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> int:
        """Run a build; returns the builder's exit status.

        stdin, stdout and stderr are inherited so patches can be piped in and
        build output reaches the terminal.
        """
        options = options or BuildOptions()
        cmd = [self.executable(), *options.flags(), definition, prefix]
        logger.info("Running: %s", " ".join(cmd))
        with Timer() as t:
            result = self._run(cmd, env=self._env(env), check=False)
        status = shell_status(result.returncode)
        if is_debug_enabled(logger):
            logger.debug(
                "Build finished",
                extra=extra_context(
                    event="build",
                    component="builder",
                    action="build",
                    target=definition,
                    status_code=status,
                    duration_ms=t.duration_ms(),
                )
            )
        return status
