"""Tests for configuration loading."""

import os

import pytest

from cyclo.config import ColorScheme, CycloConfig, load_config
from cyclo.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run with an empty HOME and cwd and no CYCLO_* variables."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    for key in [k for k in os.environ if k.startswith("CYCLO_")]:
        monkeypatch.delenv(key)
    return project


class TestDefaults:
    def test_defaults(self):
        cfg = CycloConfig()
        assert cfg.extensions == (".c", ".cpp", ".cc", ".cxx")
        assert cfg.workers is None
        assert cfg.debug is False
        assert cfg.colorscheme == ColorScheme("Greens", False, "mean")
        assert cfg.max_file_size_bytes == 10 * 1024 * 1024

    def test_frozen(self):
        cfg = CycloConfig()
        with pytest.raises(AttributeError):
            cfg.debug = True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"extensions": ()},
            {"extensions": ("c",)},
            {"max_file_size_mb": 0},
            {"max_files": 0},
            {"workers": 0},
            {"parallel_threshold": -1},
            {"encoding": "no-such-codec"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            CycloConfig(**kwargs)

    def test_invalid_colorscheme(self):
        with pytest.raises(InvalidConfigError):
            ColorScheme(midpoint="median")
        with pytest.raises(InvalidConfigError):
            ColorScheme(name=" ")


class TestLoadConfig:
    """Test source merging in load_config()."""

    def test_no_sources(self, workdir):
        assert load_config() == CycloConfig()

    def test_project_file(self, workdir):
        (workdir / "cyclo.toml").write_text(
            'workers = 2\nextensions = [".c", ".h"]\n\n[colorscheme]\nname = "YlOrRd"\nreverse = true\n'
        )
        cfg = load_config()
        assert cfg.workers == 2
        assert cfg.extensions == (".c", ".h")
        assert cfg.colorscheme == ColorScheme("YlOrRd", True, "mean")

    def test_global_file_overridden_by_project(self, workdir, tmp_path):
        (tmp_path / "home" / ".cyclo.toml").write_text("workers = 1\nmax_files = 5\n")
        (workdir / "cyclo.toml").write_text("workers = 3\n")
        cfg = load_config()
        assert cfg.workers == 3
        assert cfg.max_files == 5

    def test_explicit_file(self, workdir, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("debug = true\n")
        assert load_config(config_file=path).debug is True

    def test_missing_explicit_file(self, workdir, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "nope.toml")

    def test_bad_toml(self, workdir):
        (workdir / "cyclo.toml").write_text("workers = = 2\n")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_unknown_key(self, workdir):
        (workdir / "cyclo.toml").write_text("colour = 'red'\n")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_unknown_colorscheme_key(self, workdir):
        (workdir / "cyclo.toml").write_text("[colorscheme]\nhue = 3\n")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_env_overrides_file(self, workdir, monkeypatch):
        (workdir / "cyclo.toml").write_text("workers = 3\n")
        monkeypatch.setenv("CYCLO_WORKERS", "6")
        monkeypatch.setenv("CYCLO_DEBUG", "yes")
        monkeypatch.setenv("CYCLO_MAX_FILE_SIZE_MB", "0.5")
        cfg = load_config()
        assert cfg.workers == 6
        assert cfg.debug is True
        assert cfg.max_file_size_mb == 0.5

    def test_bad_env_value(self, workdir, monkeypatch):
        monkeypatch.setenv("CYCLO_DEBUG", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_overrides_win(self, workdir, monkeypatch):
        monkeypatch.setenv("CYCLO_WORKERS", "6")
        assert load_config(workers=2).workers == 2

    def test_none_overrides_ignored(self, workdir):
        (workdir / "cyclo.toml").write_text("workers = 3\n")
        assert load_config(workers=None).workers == 3

    def test_colorscale_name_keeps_table(self, workdir, monkeypatch):
        """A bare name only replaces the name of a configured scheme."""
        (workdir / "cyclo.toml").write_text('[colorscheme]\nreverse = true\nmidpoint = "none"\n')
        monkeypatch.setenv("CYCLO_COLORSCHEME", "Viridis")
        assert load_config().colorscheme == ColorScheme("Viridis", True, "none")

    def test_colorscheme_override_types(self, workdir):
        assert load_config(colorscheme="Blues").colorscheme.name == "Blues"
        scheme = ColorScheme("Reds", True)
        assert load_config(colorscheme=scheme).colorscheme is scheme
        with pytest.raises(InvalidConfigError):
            load_config(colorscheme=42)
