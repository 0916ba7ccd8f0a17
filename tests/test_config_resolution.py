"""Tests for config loading and resolution order."""

import pytest
import yaml
from pathlib import Path
from pydantic import ValidationError
from unittest.mock import patch

from jobrank.core.config import (
    Config,
    PreferenceConfig,
    SelectionConfig,
    default_config_yaml,
    load_config,
)


@pytest.fixture(autouse=True)
def _no_env(monkeypatch):
    for var in ("JOBRANK_CONFIG", "JOBRANK_CATALOG", "JOBRANK_STATE"):
        monkeypatch.delenv(var, raising=False)


class TestLoadConfigResolution:
    """Test that load_config() uses the correct resolution order."""

    def test_returns_defaults_when_no_config_anywhere(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch("jobrank.dirs.get_config_dir", return_value=tmp_path / "empty"):
            config = load_config()
        assert isinstance(config, Config)
        assert config.rating.elo_k == 32.0
        assert config.paths.catalog is None

    def test_loads_from_explicit_path(self, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text(yaml.dump({"rating": {"elo_k": 16}}))
        config = load_config(cfg)
        assert config.rating.elo_k == 16

    def test_explicit_path_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_env_var_names_config(self, tmp_path, monkeypatch):
        cfg = tmp_path / "env.yaml"
        cfg.write_text(yaml.dump({"session": {"daily_target": 10}}))
        monkeypatch.setenv("JOBRANK_CONFIG", str(cfg))
        assert load_config().session.daily_target == 10

    def test_finds_local_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text(yaml.dump({"session": {"daily_target": 5}}))
        config = load_config()
        assert config.session.daily_target == 5

    def test_local_over_user_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text(yaml.dump({"session": {"daily_target": 1}}))
        user_cfg = tmp_path / "user" / "config.yaml"
        user_cfg.parent.mkdir()
        user_cfg.write_text(yaml.dump({"session": {"daily_target": 2}}))
        with patch("jobrank.dirs.get_config_dir", return_value=tmp_path / "user"):
            config = load_config()
        assert config.session.daily_target == 1

    def test_falls_back_to_user_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        user_cfg = tmp_path / "user_config" / "config.yaml"
        user_cfg.parent.mkdir()
        user_cfg.write_text(yaml.dump({"session": {"daily_target": 40}}))
        with patch("jobrank.dirs.get_config_dir", return_value=tmp_path / "user_config"):
            config = load_config()
        assert config.session.daily_target == 40

    def test_partial_config_fills_defaults(self, tmp_path):
        cfg = tmp_path / "partial.yaml"
        cfg.write_text(yaml.dump({"selection": {"top_group_probability": 0.9}}))
        config = load_config(cfg)
        assert config.selection.top_group_probability == 0.9
        # Other sections use defaults
        assert config.selection.discriminative_shortlist == 10
        assert config.session.daily_target == 25
        assert config.preferences.win_increment == 1.0

    def test_empty_file_is_defaults(self, tmp_path):
        cfg = tmp_path / "empty.yaml"
        cfg.write_text("")
        assert load_config(cfg).rating.default_score == 1000.0

    def test_non_mapping_rejected(self, tmp_path):
        cfg = tmp_path / "list.yaml"
        cfg.write_text(yaml.dump([1, 2, 3]))
        with pytest.raises(ValueError):
            load_config(cfg)

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        cfg = tmp_path / "extra.yaml"
        cfg.write_text(yaml.dump({"rating": {"elo_k": 24, "bogus": 1}, "other": {"x": 1}}))
        assert load_config(cfg).rating.elo_k == 24
        assert "bogus" in caplog.text

    def test_empty_section_uses_defaults(self, tmp_path):
        cfg = tmp_path / "blank.yaml"
        cfg.write_text("rating:\nsession:\n  daily_target: 7\n")
        config = load_config(cfg)
        assert config.rating.elo_k == 32.0
        assert config.session.daily_target == 7

    def test_paths_become_path_objects(self, tmp_path):
        cfg = tmp_path / "paths.yaml"
        cfg.write_text(yaml.dump({"paths": {"catalog": "jobs.json", "state_file": "s.json"}}))
        config = load_config(cfg)
        assert config.paths.catalog == Path("jobs.json")
        assert config.paths.state_file == Path("s.json")

    def test_env_overrides_paths(self, tmp_path, monkeypatch):
        cfg = tmp_path / "paths.yaml"
        cfg.write_text(yaml.dump({"paths": {"catalog": "jobs.json"}}))
        monkeypatch.setenv("JOBRANK_CATALOG", str(tmp_path / "other.json"))
        monkeypatch.setenv("JOBRANK_STATE", str(tmp_path / "state.json"))
        config = load_config(cfg)
        assert config.paths.catalog == tmp_path / "other.json"
        assert config.paths.state_file == tmp_path / "state.json"


class TestValidation:
    def test_bad_probability(self):
        with pytest.raises(ValueError, match="top_group_probability"):
            SelectionConfig(top_group_probability=1.5)

    def test_bad_fraction(self):
        with pytest.raises(ValueError, match="top_group_fraction"):
            SelectionConfig(top_group_fraction=0)

    def test_bad_shortlist(self):
        with pytest.raises(ValueError, match="discriminative_shortlist"):
            SelectionConfig(discriminative_shortlist=0)

    def test_win_increment_positive(self):
        with pytest.raises(ValueError, match="win_increment"):
            PreferenceConfig(win_increment=0)

    def test_validation_error_names_section(self, tmp_path):
        cfg = tmp_path / "bad.yaml"
        cfg.write_text(yaml.dump({"selection": {"discriminative_shortlist": 0}}))
        with pytest.raises(ValidationError, match="selection.discriminative_shortlist"):
            load_config(cfg)

    def test_invalid_value_from_file(self, tmp_path):
        cfg = tmp_path / "bad.yaml"
        cfg.write_text(yaml.dump({"logging": {"level": "chatty"}}))
        with pytest.raises(ValueError, match="level"):
            load_config(cfg)

    def test_log_level_uppercased(self, tmp_path):
        cfg = tmp_path / "log.yaml"
        cfg.write_text(yaml.dump({"logging": {"level": "info"}}))
        assert load_config(cfg).logging.level == "INFO"

    def test_section_must_be_mapping(self):
        with pytest.raises(ValueError, match="rating"):
            Config.model_validate({"rating": 5})


def test_default_config_yaml_round_trips(tmp_path):
    cfg = tmp_path / "default.yaml"
    cfg.write_text(default_config_yaml())
    config = load_config(cfg)
    assert config.selection == SelectionConfig()
    assert config.session.daily_target == 25
