"""Tests for shim regeneration."""

import os

import pytest

from conftest import install_fake_version
from errors import RehashLockedError
from hooks.registry import HookRegistry
from runtime.rehash import Rehasher, render_shim
from runtime.store import VersionStore


def make_rehasher(config, hooks=None):
    return Rehasher(config, VersionStore(config), hooks)


class TestRenderShim:
    def test_reenters_exec(self, tmp_path):
        text = render_shim(tmp_path / "root dir", python="/usr/bin/python3")
        assert text.startswith("#!/usr/bin/env bash\n")
        assert "export GOENV_ROOT='" in text
        assert 'exec /usr/bin/python3 -m goenv exec "$program" "$@"' in text


class TestRehash:
    """Tests for Rehasher.rehash."""

    def test_creates_union_of_executables(self, config, goenv_root):
        install_fake_version(goenv_root, "1.21.5", commands=("go", "gofmt"))
        install_fake_version(goenv_root, "1.20.14", commands=("go", "godoc"))

        names = make_rehasher(config).rehash()
        assert names == ["go", "godoc", "gofmt"]
        for name in names:
            shim = goenv_root / "shims" / name
            assert shim.is_file()
            assert os.access(shim, os.X_OK)

    def test_removes_stale_shims(self, config, goenv_root):
        install_fake_version(goenv_root, "1.21.5", commands=("go",))
        shims = goenv_root / "shims"
        shims.mkdir()
        (shims / "godoc").write_text("")

        make_rehasher(config).rehash()
        assert [p.name for p in make_rehasher(config).list_shims()] == ["go"]

    def test_ignores_versions_without_bin(self, config, goenv_root):
        (goenv_root / "versions" / "broken").mkdir(parents=True)
        assert make_rehasher(config).rehash() == []

    def test_non_executables_ignored(self, config, goenv_root):
        prefix = install_fake_version(goenv_root, "1.21.5", commands=("go",))
        (prefix / "bin" / "README").write_text("not a program\n")
        assert make_rehasher(config).rehash() == ["go"]

    def test_hooks_can_add_shims(self, config, goenv_root):
        install_fake_version(goenv_root, "1.21.5", commands=("go",))
        hooks = HookRegistry()
        hooks.on_rehash(lambda ctx: ctx.shims.append("gopls"))

        assert make_rehasher(config, hooks).rehash() == ["go", "gopls"]
        assert (goenv_root / "shims" / "gopls").is_file()

    def test_lock_released(self, config, goenv_root):
        install_fake_version(goenv_root, "1.21.5")
        rehasher = make_rehasher(config)
        rehasher.rehash()
        assert not rehasher.lock_path.exists()

    def test_locked(self, config, goenv_root):
        rehasher = make_rehasher(config)
        rehasher.shims_dir.mkdir(parents=True)
        rehasher.lock_path.write_text("")
        with pytest.raises(RehashLockedError):
            rehasher.rehash()
        assert rehasher.lock_path.exists()

    def test_list_shims_hides_lock(self, config):
        rehasher = make_rehasher(config)
        assert rehasher.list_shims() == []
        rehasher.shims_dir.mkdir(parents=True)
        rehasher.lock_path.write_text("")
        assert rehasher.list_shims() == []
