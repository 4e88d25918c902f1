"""Tests for the config manager (load_config + env overrides)."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from vscsdeck.config.config_manager import load_config
from vscsdeck.core.models.config import DeckConfig


class TestLoadConfig:
    def test_load_default_config(self):
        """The shipped vscsdeck_config.json should load without errors."""
        cfg = load_config()
        assert isinstance(cfg, DeckConfig)
        assert cfg.bridge.port == 18084
        assert cfg.client.profile == "vatsys"
        assert cfg.client.buttons

    def test_default_seed_path_is_resolved(self):
        cfg = load_config()
        assert cfg.bridge.seed_file is not None
        assert Path(cfg.bridge.seed_file).is_file()

    def test_load_custom_config(self, tmp_path):
        config_file = tmp_path / "test_config.json"
        config_file.write_text(
            json.dumps(
                {
                    "bridge": {"port": 19000},
                    "client": {"profile": "classic", "request_timeout": 0.5},
                    "system": {"log_level": "DEBUG"},
                }
            )
        )
        cfg = load_config(config_file)
        assert cfg.bridge.port == 19000
        assert cfg.client.profile == "classic"
        assert cfg.client.request_timeout == 0.5
        assert cfg.system.log_level == "DEBUG"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.json")

    def test_unknown_key_rejected(self, tmp_path):
        config_file = tmp_path / "cfg.json"
        config_file.write_text(json.dumps({"bridge": {"prot": 1}}))
        with pytest.raises(ValidationError):
            load_config(config_file)

    def test_config_file_env_var(self, tmp_path, monkeypatch):
        config_file = tmp_path / "cfg.json"
        config_file.write_text(json.dumps({"bridge": {"port": 18555}}))
        monkeypatch.setenv("VSCSDECK_CONFIG_FILE", str(config_file))
        assert load_config().bridge.port == 18555

    def test_relative_seed_file_resolved_against_config_dir(self, tmp_path):
        (tmp_path / "seed.json").write_text("{}")
        config_file = tmp_path / "cfg.json"
        config_file.write_text(json.dumps({"bridge": {"seed_file": "seed.json"}}))
        cfg = load_config(config_file)
        assert cfg.bridge.seed_file == str(tmp_path / "seed.json")


class TestEnvOverrides:
    @pytest.fixture
    def config_file(self, tmp_path):
        p = tmp_path / "cfg.json"
        p.write_text(json.dumps({"system": {"log_level": "INFO"}}))
        return p

    def test_log_level(self, config_file, monkeypatch):
        monkeypatch.setenv("VSCSDECK_LOG_LEVEL", "DEBUG")
        assert load_config(config_file).system.log_level == "DEBUG"

    def test_dev_mode(self, config_file, monkeypatch):
        monkeypatch.setenv("VSCSDECK_DEV_MODE", "yes")
        assert load_config(config_file).system.dev_mode is True

    def test_bridge_port(self, config_file, monkeypatch):
        monkeypatch.setenv("VSCSDECK_BRIDGE_PORT", "18999")
        assert load_config(config_file).bridge.port == 18999

    def test_bridge_url(self, config_file, monkeypatch):
        monkeypatch.setenv("VSCSDECK_BRIDGE_URL", "http://127.0.0.1:18999")
        assert load_config(config_file).client.base_url == "http://127.0.0.1:18999"

    def test_profile(self, config_file, monkeypatch):
        monkeypatch.setenv("VSCSDECK_PROFILE", "classic")
        assert load_config(config_file).client.profile == "classic"


class TestConfigModels:
    def test_defaults(self, deck_config):
        assert deck_config.bridge.host == "127.0.0.1"
        assert deck_config.client.retain_slots_on_disappear is True
        assert deck_config.client.location_aliases["MUN"]["label"] == "Mungo"

    def test_port_range(self):
        with pytest.raises(ValidationError):
            DeckConfig(bridge={"port": 70000})
