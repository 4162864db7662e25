"""Shared fixtures: a throwaway GOENV_ROOT, fake installs and a fake builder."""

import os
import stat
from pathlib import Path

import pytest

from config import GoenvConfig


def make_executable(path: Path, body: str = "#!/bin/sh\nexit 0\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def install_fake_version(root: Path, name: str, commands=("go", "gofmt")) -> Path:
    """Create <root>/versions/<name>/bin/<command> for each command."""
    prefix = root / "versions" / name
    (prefix / "bin").mkdir(parents=True, exist_ok=True)
    for command in commands:
        make_executable(prefix / "bin" / command)
    return prefix


class FakeBuilder:
    """Stands in for GoBuilder; records build calls."""

    def __init__(self, definitions=(), status=0, create_prefix=True, on_build=None):
        self._definitions = list(definitions)
        self.status = status
        self.create_prefix = create_prefix
        self.on_build = on_build
        self.calls = []

    def definitions(self):
        return list(self._definitions)

    def version(self):
        return 0, "go-build 2.2.0"

    def build(self, definition, prefix, options=None, env=None):
        self.calls.append({"definition": definition, "prefix": prefix, "options": options, "env": env})
        if self.create_prefix:
            make_executable(Path(prefix) / "bin" / "go", "#!/bin/sh\necho built\n")
        if self.on_build:
            self.on_build()
        return self.status


@pytest.fixture
def goenv_root(tmp_path):
    root = tmp_path / "goenv-root"
    root.mkdir()
    return root


@pytest.fixture
def work_dir(tmp_path):
    work = tmp_path / "project"
    work.mkdir()
    return work


@pytest.fixture
def config(goenv_root, work_dir):
    """Config isolated from the real environment; no system Go on PATH."""
    return GoenvConfig(root=goenv_root, work_dir=work_dir, path="")


@pytest.fixture
def system_go(tmp_path, config):
    """Put an executable `go` on the config's PATH."""
    bin_dir = tmp_path / "usr" / "bin"
    make_executable(bin_dir / "go")
    config.path = os.pathsep.join([str(config.shims_dir), str(bin_dir)])
    return bin_dir / "go"
