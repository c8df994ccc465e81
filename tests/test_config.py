"""Test configuration loading and validation"""

from pathlib import Path

import pytest

from spot_sync.core.config import Config, load_config, parse_config
from spot_sync.core.exceptions import ConfigError


def write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    """Test reading config.yaml"""

    def test_missing_default_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_config() == Config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "nope.yaml")

        assert "not found" in exc_info.value.message

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(write_config(tmp_path, "")) == Config()

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, "spotify: [unclosed"))

    def test_reads_cwd_file(self, tmp_path, monkeypatch):
        write_config(tmp_path, "spotify:\n  batch_size: 20\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().spotify.batch_size == 20

    def test_full_file(self, tmp_path):
        config = load_config(write_config(tmp_path, """
spotify:
  api_base_url: "http://localhost:9000/v1/"
  page_size: 25
  batch_size: 10
  request_timeout: 5
sync:
  description_prefix: "Copied: "
  public_playlists: true
logging:
  directory: "logs"
  level: debug
credentials:
  primary_token: " abc "
  secondary_token: null
"""))

        assert config.spotify.api_base_url == "http://localhost:9000/v1"
        assert config.spotify.page_size == 25
        assert config.spotify.batch_size == 10
        assert config.spotify.request_timeout == 5.0
        assert config.sync.description_prefix == "Copied: "
        assert config.sync.public_playlists is True
        assert config.logging.directory.is_absolute()
        assert config.logging.directory.name == "logs"
        assert config.logging.level == "DEBUG"
        assert config.credentials.primary_token == "abc"
        assert config.credentials.secondary_token is None


class TestParseConfig:
    """Test field validation"""

    def test_defaults(self):
        config = parse_config({})

        assert config.spotify.page_size == 50
        assert config.spotify.batch_size == 50
        assert config.sync.description_prefix == "Synced from primary account - "
        assert config.sync.public_playlists is False
        assert config.logging.directory is None

    def test_not_a_dictionary(self):
        with pytest.raises(ConfigError):
            parse_config(["spotify"])

    def test_section_not_a_dictionary(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_config({"sync": "yes"})

        assert exc_info.value.details == {"section": "sync"}

    @pytest.mark.parametrize("key,value", [
        ("batch_size", 0),
        ("batch_size", 51),
        ("batch_size", True),
        ("page_size", "50"),
        ("page_size", 100),
        ("request_timeout", 0),
        ("request_timeout", "fast"),
        ("api_base_url", ""),
    ])
    def test_invalid_spotify_values(self, key, value):
        with pytest.raises(ConfigError):
            parse_config({"spotify": {key: value}})

    def test_invalid_public_playlists(self):
        with pytest.raises(ConfigError):
            parse_config({"sync": {"public_playlists": "yes"}})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError):
            parse_config({"logging": {"level": "LOUD"}})

    def test_invalid_token_is_not_echoed(self):
        """Test a malformed token value does not end up in the error"""
        with pytest.raises(ConfigError) as exc_info:
            parse_config({"credentials": {"primary_token": 123456789}})

        assert "123456789" not in str(exc_info.value)
        assert "123456789" not in str(exc_info.value.details)

    def test_tokens_hidden_from_repr(self):
        config = parse_config({"credentials": {"primary_token": "secret-token"}})

        assert "secret-token" not in repr(config)
