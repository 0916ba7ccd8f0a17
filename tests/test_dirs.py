"""Tests for jobrank.dirs — platform-aware config and data directory resolution."""

import os
import pytest
from pathlib import Path
from unittest.mock import patch

from jobrank.dirs import (
    ensure_dirs,
    find_catalog,
    find_config,
    get_config_dir,
    get_data_dir,
    get_env_path,
    get_state_path,
)


# ── get_config_dir ──────────────────────────────────────────────────


class TestGetConfigDir:
    def test_windows(self):
        with patch("jobrank.dirs.platform.system", return_value="Windows"):
            result = get_config_dir()
            assert result == Path.home() / "AppData" / "Roaming" / "jobrank"

    def test_macos(self):
        with patch("jobrank.dirs.platform.system", return_value="Darwin"):
            result = get_config_dir()
            assert result == Path.home() / "Library" / "Application Support" / "jobrank"

    def test_linux_default(self):
        env = dict(os.environ)
        env.pop("XDG_CONFIG_HOME", None)
        # Keep HOME so Path.home() works
        with (
            patch("jobrank.dirs.platform.system", return_value="Linux"),
            patch.dict(os.environ, env, clear=True),
        ):
            result = get_config_dir()
            assert result == Path.home() / ".config" / "jobrank"

    def test_linux_xdg_set(self, tmp_path):
        with (
            patch("jobrank.dirs.platform.system", return_value="Linux"),
            patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}),
        ):
            assert get_config_dir() == tmp_path / "jobrank"

    def test_linux_xdg_empty_falls_back(self):
        with (
            patch("jobrank.dirs.platform.system", return_value="Linux"),
            patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}, clear=False),
        ):
            # Empty string → falsy → fallback to ~/.config
            assert get_config_dir() == Path.home() / ".config" / "jobrank"


# ── get_data_dir / get_state_path / get_env_path ────────────────────


class TestDataPaths:
    def test_linux_uses_xdg_data_home(self, tmp_path):
        with (
            patch("jobrank.dirs.platform.system", return_value="Linux"),
            patch.dict(os.environ, {"XDG_DATA_HOME": str(tmp_path)}),
        ):
            assert get_data_dir() == tmp_path / "jobrank"
            assert get_state_path() == tmp_path / "jobrank" / "progress.json"

    def test_linux_data_default(self):
        env = dict(os.environ)
        env.pop("XDG_DATA_HOME", None)
        with (
            patch("jobrank.dirs.platform.system", return_value="Linux"),
            patch.dict(os.environ, env, clear=True),
        ):
            assert get_data_dir() == Path.home() / ".local" / "share" / "jobrank"

    def test_macos_data_is_config_dir(self):
        with patch("jobrank.dirs.platform.system", return_value="Darwin"):
            assert get_data_dir() == get_config_dir()

    def test_env_path_is_in_config_dir(self):
        with patch("jobrank.dirs.platform.system", return_value="Windows"):
            assert get_env_path() == get_config_dir() / ".env"


# ── ensure_dirs ─────────────────────────────────────────────────────


class TestEnsureDirs:
    def test_creates_config_and_data_dirs(self, tmp_path):
        config_dir = tmp_path / "cfg" / "jobrank"
        data_dir = tmp_path / "data" / "jobrank"
        with (
            patch("jobrank.dirs.get_config_dir", return_value=config_dir),
            patch("jobrank.dirs.get_data_dir", return_value=data_dir),
        ):
            result = ensure_dirs()
        assert result == config_dir
        assert config_dir.is_dir()
        assert data_dir.is_dir()

    def test_idempotent(self, tmp_path):
        config_dir = tmp_path / "jobrank"
        config_dir.mkdir()
        with (
            patch("jobrank.dirs.get_config_dir", return_value=config_dir),
            patch("jobrank.dirs.get_data_dir", return_value=config_dir),
        ):
            assert ensure_dirs() == config_dir


# ── find_config ─────────────────────────────────────────────────────


class TestFindConfig:
    def test_explicit_path_exists(self, tmp_path):
        cfg = tmp_path / "my.yaml"
        cfg.write_text("rating: {}")
        assert find_config(cfg) == cfg

    def test_explicit_path_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_config(tmp_path / "nonexistent.yaml")

    def test_local_config_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        local = tmp_path / "config.yaml"
        local.write_text("rating: {}")
        result = find_config()
        assert result is not None
        assert result.resolve() == local.resolve()

    def test_user_dir_fallback(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        user_cfg = tmp_path / "user_config" / "config.yaml"
        user_cfg.parent.mkdir()
        user_cfg.write_text("rating: {}")
        with patch("jobrank.dirs.get_config_dir", return_value=tmp_path / "user_config"):
            assert find_config() == user_cfg

    def test_returns_none_when_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch("jobrank.dirs.get_config_dir", return_value=tmp_path / "empty"):
            assert find_config() is None


# ── find_catalog ────────────────────────────────────────────────────


class TestFindCatalog:
    def test_local_catalog_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "catalog.json").write_text("{}")
        assert find_catalog() == Path("catalog.json")

    def test_falls_back_to_user_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        user_catalog = tmp_path / "user" / "catalog.json"
        user_catalog.parent.mkdir()
        user_catalog.write_text("{}")
        with patch("jobrank.dirs.get_config_dir", return_value=tmp_path / "user"):
            assert find_catalog() == user_catalog

    def test_none_when_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch("jobrank.dirs.get_config_dir", return_value=tmp_path / "empty"):
            assert find_catalog() is None
