"""End-to-end tests of the goenv command line with a fake go-build."""

import logging
import os
from unittest.mock import patch

import pytest

import goenv
from conftest import install_fake_version, make_executable

FAKE_GO_BUILD = """#!/bin/sh
case "$1" in
  --definitions) printf '1.20.14\\n1.21.0\\n1.21.5\\n'; exit 0 ;;
  --version) echo "go-build 2.2.0"; exit 0 ;;
esac
while [ $# -gt 2 ]; do shift; done
definition="$1"
prefix="$2"
case "$definition" in
  1.20.14|1.21.0|1.21.5) ;;
  *) echo "go-build: definition not found: $definition" >&2; exit 2 ;;
esac
mkdir -p "$prefix/bin"
printf '#!/bin/sh\\necho go version go%s\\n' "$definition" > "$prefix/bin/go"
chmod +x "$prefix/bin/go"
"""

GOENV_VARIABLES = (
    "GOENV_VERSION", "GOENV_VERSION_FILE", "GOENV_DEBUG", "GOENV_HOOK_PATH",
    "GOENV_BUILD_ROOT", "GOENV_CACHE_PATH", "GOENV_VERSION_ORDER", "GOENV_HOOK_ABORT",
    "GOENV_GOMOD_VERSION_ENABLE", "GOENV_CONFIG", "GOENV_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.name == "goenv-stderr"]:
        root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def cli_env(monkeypatch, goenv_root, work_dir, tmp_path):
    for name in GOENV_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    builder = make_executable(tmp_path / "fake-bin" / "go-build", FAKE_GO_BUILD)
    monkeypatch.setenv("GOENV_ROOT", str(goenv_root))
    monkeypatch.setenv("GOENV_DIR", str(work_dir))
    monkeypatch.setenv("GOENV_BUILDER", str(builder))
    monkeypatch.setenv("PATH", os.pathsep.join([str(goenv_root / "shims"), str(builder.parent), "/usr/bin", "/bin"]))
    return goenv_root


class TestInstallCommand:
    """goenv install through the real builder wrapper."""

    def test_install_major_minor(self, cli_env, capsys):
        assert goenv.run(["install", "1.21"]) == 0
        assert (cli_env / "versions" / "1.21.5" / "bin" / "go").is_file()
        assert (cli_env / "shims" / "go").is_file()

        assert goenv.run(["versions", "--bare"]) == 0
        assert capsys.readouterr().out.splitlines() == ["1.21.5"]

    def test_skip_existing(self, cli_env):
        install_fake_version(cli_env, "1.21.5")
        assert goenv.run(["install", "-s", "1.21.5"]) == 0

    def test_missing_definition(self, cli_env, capsys):
        with patch("toolchain.catalog.get_json", return_value=(0, None)):
            assert goenv.run(["install", "1.21.99"]) == 2
        err = capsys.readouterr().err
        assert "The following versions contain" not in err
        assert "See all available versions with `goenv install --list'." in err
        assert not (cli_env / "versions" / "1.21.99").exists()

    def test_unknown_major_minor(self, cli_env, capsys):
        assert goenv.run(["install", "1.19"]) == 1
        assert "version '1.19' not found" in capsys.readouterr().err

    def test_list(self, cli_env, capsys):
        assert goenv.run(["install", "--list"]) == 0
        assert capsys.readouterr().out == "Available versions:\n  1.20.14\n  1.21.0\n  1.21.5\n"

    def test_builder_version(self, cli_env, capsys):
        assert goenv.run(["install", "--version"]) == 0
        assert capsys.readouterr().out.strip() == "go-build 2.2.0"

    def test_missing_builder_reports_error(self, cli_env, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("GOENV_BUILDER", str(tmp_path / "missing" / "go-build"))
        assert goenv.run(["install", "1.21.5"]) == 1
        assert goenv.run(["install", "--list"]) == 1
        assert goenv.run(["install", "latest"]) == 1
        err = capsys.readouterr().err
        assert "goenv: cannot run" in err
        assert not (cli_env / "versions" / "1.21.5").exists()

    def test_uninstall(self, cli_env, capsys):
        install_fake_version(cli_env, "1.21.5")
        assert goenv.run(["uninstall", "-f", "1.21.5"]) == 0
        assert not (cli_env / "versions" / "1.21.5").exists()
        assert "1.21.5 uninstalled" in capsys.readouterr().err


class TestVersionCommands:
    """global, local, version, version-name and friends."""

    def test_global_then_version(self, cli_env, capsys):
        install_fake_version(cli_env, "1.21.5")
        assert goenv.run(["global", "1.21.5"]) == 0
        assert (cli_env / "version").read_text() == "1.21.5\n"

        assert goenv.run(["version-name"]) == 0
        assert goenv.run(["version"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["1.21.5", f"1.21.5 (set by {cli_env / 'version'})"]

    def test_global_rejects_uninstalled(self, cli_env, capsys):
        assert goenv.run(["global", "1.21.5"]) == 1
        assert "goenv: version '1.21.5' is not installed (set by argument)" in capsys.readouterr().err
        assert not (cli_env / "version").exists()

    def test_local_set_show_unset(self, cli_env, work_dir, capsys):
        install_fake_version(cli_env, "1.20.14")
        assert goenv.run(["local", "1.20.14"]) == 0
        assert (work_dir / ".go-version").read_text() == "1.20.14\n"
        assert goenv.run(["local"]) == 0
        assert capsys.readouterr().out == "1.20.14\n"

        assert goenv.run(["local", "--unset"]) == 0
        assert not (work_dir / ".go-version").exists()

    def test_local_without_file(self, cli_env, capsys):
        assert goenv.run(["local"]) == 1
        assert "no local version configured for this directory" in capsys.readouterr().err

    def test_version_not_installed(self, cli_env, monkeypatch, capsys):
        monkeypatch.setenv("GOENV_VERSION", "1.19.13")
        assert goenv.run(["version-name"]) == 1
        err = capsys.readouterr().err
        assert "'1.19.13' is not installed (set by GOENV_VERSION environment variable)" in err

    def test_versions_marks_active(self, cli_env, monkeypatch, capsys):
        install_fake_version(cli_env, "1.20.14")
        install_fake_version(cli_env, "1.21.5")
        monkeypatch.setenv("GOENV_VERSION", "1.21.5")
        assert goenv.run(["versions"]) == 0
        out = capsys.readouterr().out
        assert "  1.20.14\n" in out
        assert "* 1.21.5 (set by GOENV_VERSION environment variable)\n" in out

    def test_root_and_prefix(self, cli_env, capsys):
        prefix = install_fake_version(cli_env, "1.21.5")
        assert goenv.run(["root"]) == 0
        assert goenv.run(["prefix", "1.21.5"]) == 0
        assert capsys.readouterr().out.splitlines() == [str(cli_env), str(prefix)]

    def test_version_file(self, cli_env, work_dir, capsys):
        (work_dir / ".go-version").write_text("1.21.5\n")
        assert goenv.run(["version-file"]) == 0
        assert capsys.readouterr().out.strip() == str((work_dir / ".go-version").resolve())


class TestShimCommands:
    """which, exec, rehash and shims."""

    def test_which(self, cli_env, monkeypatch, capsys):
        prefix = install_fake_version(cli_env, "1.21.5")
        monkeypatch.setenv("GOENV_VERSION", "1.21.5")
        assert goenv.run(["which", "gofmt"]) == 0
        assert capsys.readouterr().out.strip() == str(prefix / "bin" / "gofmt")

    def test_which_missing_command(self, cli_env, monkeypatch, capsys):
        install_fake_version(cli_env, "1.21.5", commands=("go",))
        install_fake_version(cli_env, "1.20.14", commands=("go", "godoc"))
        monkeypatch.setenv("GOENV_VERSION", "1.21.5")
        assert goenv.run(["which", "godoc"]) == 127
        err = capsys.readouterr().err
        assert "goenv: 'godoc': command not found" in err
        assert "  1.20.14" in err

    def test_exec(self, cli_env, monkeypatch):
        prefix = install_fake_version(cli_env, "1.21.5")
        monkeypatch.setenv("GOENV_VERSION", "1.21.5")
        with patch("runtime.dispatcher.os.execve") as execve:
            assert goenv.run(["exec", "go", "--", "env", "GOROOT"]) == 0
        path, argv, env = execve.call_args[0]
        assert argv == [str(prefix / "bin" / "go"), "env", "GOROOT"]
        assert env["GOENV_VERSION"] == "1.21.5"

    def test_rehash_and_shims(self, cli_env, capsys):
        install_fake_version(cli_env, "1.21.5")
        assert goenv.run(["rehash"]) == 0
        assert goenv.run(["shims", "--short"]) == 0
        assert capsys.readouterr().out.splitlines() == ["go", "gofmt"]
