"""Tests for configuration loading from the environment and YAML."""

from pathlib import Path

from config import GoenvConfig, load_config_file
from constants import Ordering


def write_yaml(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    """Tests for derived defaults."""

    def test_paths_under_root(self, tmp_path):
        config = GoenvConfig(root=tmp_path)
        assert config.versions_dir == tmp_path / "versions"
        assert config.shims_dir == tmp_path / "shims"
        assert config.global_version_file == tmp_path / "version"
        assert config.build_root == tmp_path / "sources"
        assert config.cache_path == tmp_path / "cache"
        assert config.plugin_dirs == [tmp_path / "goenv.d"]

    def test_from_empty_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        config = GoenvConfig.from_env({}, cwd=tmp_path)
        assert config.root == tmp_path / ".goenv"
        assert config.work_dir == tmp_path
        assert config.ordering == Ordering.SEMANTIC
        assert config.hooks_abort_on_failure is False
        assert config.version_override is None
        assert config.path == ""


class TestFromEnv:
    """Environment variables map onto config fields."""

    def test_environment_variables(self, tmp_path):
        env = {
            "GOENV_ROOT": str(tmp_path / "root"),
            "GOENV_BUILD_ROOT": str(tmp_path / "build"),
            "GOENV_CACHE_PATH": str(tmp_path / "cache"),
            "GOENV_DEBUG": "1",
            "GOENV_VERSION_FILE": str(tmp_path / "pinned"),
            "GOENV_VERSION": "1.21.5",
            "GOENV_DIR": str(tmp_path / "project"),
            "GOENV_HOOK_PATH": f"{tmp_path / 'a'}:{tmp_path / 'b'}",
            "GOENV_BUILDER": "/opt/go-build/bin/go-build",
            "GOENV_VERSION_ORDER": "catalog",
            "GOENV_HOOK_ABORT": "yes",
            "GOENV_GOMOD_VERSION_ENABLE": "1",
            "PATH": "/usr/bin",
        }
        config = GoenvConfig.from_env(env)

        assert config.root == tmp_path / "root"
        assert config.build_root == tmp_path / "build"
        assert config.cache_path == tmp_path / "cache"
        assert config.debug is True
        assert config.version_file == tmp_path / "pinned"
        assert config.version_override == "1.21.5"
        assert config.work_dir == tmp_path / "project"
        assert config.hook_paths == [tmp_path / "a", tmp_path / "b"]
        assert config.plugin_dirs[-1] == tmp_path / "root" / "goenv.d"
        assert config.builder == "/opt/go-build/bin/go-build"
        assert config.ordering == Ordering.CATALOG
        assert config.hooks_abort_on_failure is True
        assert config.gomod_version_enable is True
        assert config.path == "/usr/bin"

    def test_unknown_ordering_keeps_default(self, tmp_path, caplog):
        config = GoenvConfig.from_env({"GOENV_ROOT": str(tmp_path), "GOENV_VERSION_ORDER": "random"})
        assert config.ordering == Ordering.SEMANTIC
        assert "Unknown version ordering" in caplog.text

    def test_builder_env(self, tmp_path):
        config = GoenvConfig.from_env({"GOENV_ROOT": str(tmp_path)})
        assert config.builder_env() == {"GOENV_ROOT": str(tmp_path)}


class TestConfigFile:
    """YAML file settings, overridden by the environment."""

    def test_file_in_root(self, tmp_path):
        write_yaml(tmp_path / "config.yml", (
            "hooks:\n"
            "  abort_on_failure: true\n"
            "resolution:\n"
            "  ordering: catalog\n"
            "catalog:\n"
            "  url: https://mirror.example.com/dl/?mode=json\n"
            "  ttl: 60\n"
            "gomod_version_enable: true\n"
        ))
        config = GoenvConfig.from_env({"GOENV_ROOT": str(tmp_path)})

        assert config.hooks_abort_on_failure is True
        assert config.ordering == Ordering.CATALOG
        assert config.catalog_url == "https://mirror.example.com/dl/?mode=json"
        assert config.catalog_ttl == 60
        assert config.gomod_version_enable is True

    def test_environment_wins(self, tmp_path):
        write_yaml(tmp_path / "config.yml", "hooks:\n  abort_on_failure: true\nresolution:\n  ordering: catalog\n")
        config = GoenvConfig.from_env({
            "GOENV_ROOT": str(tmp_path),
            "GOENV_HOOK_ABORT": "0",
            "GOENV_VERSION_ORDER": "semantic",
        })
        assert config.hooks_abort_on_failure is False
        assert config.ordering == Ordering.SEMANTIC

    def test_explicit_config_path(self, tmp_path):
        custom = write_yaml(tmp_path / "etc" / "goenv.yml", "resolution:\n  ordering: catalog\n")
        config = GoenvConfig.from_env({"GOENV_ROOT": str(tmp_path / "root"), "GOENV_CONFIG": str(custom)})
        assert config.ordering == Ordering.CATALOG

    def test_invalid_ttl_ignored(self, tmp_path, caplog):
        write_yaml(tmp_path / "config.yml", "catalog:\n  ttl: soon\n")
        config = GoenvConfig.from_env({"GOENV_ROOT": str(tmp_path)})
        assert config.catalog_ttl == 86400
        assert "Invalid catalog.ttl" in caplog.text


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_missing(self, tmp_path):
        assert load_config_file(tmp_path / "missing.yml") == {}

    def test_malformed(self, tmp_path, caplog):
        path = write_yaml(tmp_path / "config.yml", "hooks: [unclosed\n")
        assert load_config_file(path) == {}
        assert "Ignoring config file" in caplog.text

    def test_not_a_mapping(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "- a\n- b\n")
        assert load_config_file(Path(path)) == {}
