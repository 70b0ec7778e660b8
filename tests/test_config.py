"""Tests for msgchunk.config module."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from msgchunk.config import (
    MsgchunkConfig,
    default_config,
    load_config,
    save_config,
    validate_config,
)
from msgchunk.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path


class TestDefaultConfig:
    def test_default_has_all_sections(self):
        config = default_config()
        assert config.channel is not None
        assert config.chunk is not None
        assert config.delivery is not None

    def test_default_chunking(self):
        config = default_config()
        assert config.chunk.mode == "markdown"
        assert config.chunk.limit == 4000

    def test_default_delivery(self):
        config = default_config()
        assert config.channel.delivery_mode == "direct"
        assert config.delivery.provider == "http"
        assert config.delivery.max_retries == 2
        assert config.delivery.media_fallback_prefix == "\U0001f4ce"

    def test_defaults_are_valid(self):
        validate_config(default_config())


class TestConfigRoundTrip:
    def test_save_and_load_defaults(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        original = default_config()
        save_config(original, path)
        loaded = load_config(path)

        assert loaded == original

    def test_save_and_load_with_values(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        config = MsgchunkConfig()
        config.channel.name = "feishu"
        config.chunk.mode = "plain"
        config.chunk.limit = 2000
        config.delivery.base_url = "https://open.example.com"
        config.delivery.api_key_env = "CHAT_TOKEN"

        save_config(config, path)
        loaded = load_config(path)

        assert loaded.channel.name == "feishu"
        assert loaded.chunk.mode == "plain"
        assert loaded.chunk.limit == 2000
        assert loaded.delivery.base_url == "https://open.example.com"
        assert loaded.delivery.api_key_env == "CHAT_TOKEN"

    def test_save_creates_parent_dirs(self, tmp_path: Path):
        path = tmp_path / "nested" / "dir" / "msgchunk.toml"
        save_config(default_config(), path)
        assert path.exists()

    def test_load_partial_toml_gets_defaults(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[chunk]\nlimit = 500\n", encoding="utf-8")

        loaded = load_config(path)
        assert loaded.chunk.limit == 500
        assert loaded.chunk.mode == "markdown"
        assert loaded.delivery.provider == "http"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text(
            '[chunk]\nmode = "plain"\nfences = true\n[extra]\nx = 1\n', encoding="utf-8"
        )

        loaded = load_config(path)
        assert loaded.chunk.mode == "plain"
        assert not hasattr(loaded.chunk, "fences")

    def test_non_table_section_ignored(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("chunk = 5\n", encoding="utf-8")

        loaded = load_config(path)
        assert loaded.chunk.limit == 4000


class TestLoadErrors:
    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[chunk\nlimit = ", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to load"):
            load_config(path)

    def test_unknown_mode_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text('[chunk]\nmode = "html"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="Unknown chunk mode"):
            load_config(path)

    def test_string_limit_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text('[chunk]\nlimit = "4000"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="must be an integer"):
            load_config(path)

    def test_bool_limit_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[chunk]\nlimit = true\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be an integer"):
            load_config(path)

    def test_zero_limit_is_allowed(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[chunk]\nlimit = 0\n", encoding="utf-8")
        assert load_config(path).chunk.limit == 0

    def test_list_mode_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text('[chunk]\nmode = ["plain"]\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="chunk.mode must be a string"):
            load_config(path)

    def test_string_timeout_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text('[delivery]\ntimeout = "30"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="delivery.timeout must be a number"):
            load_config(path)

    def test_string_max_retries_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text('[delivery]\nmax_retries = "2"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="delivery.max_retries must be an integer"):
            load_config(path)

    def test_float_max_retries_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[delivery]\nmax_retries = 2.5\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="delivery.max_retries must be an integer"):
            load_config(path)

    def test_bool_retry_backoff_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[delivery]\nretry_backoff = false\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="delivery.retry_backoff must be a number"):
            load_config(path)

    def test_negative_retry_backoff_raises(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[delivery]\nretry_backoff = -1.0\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="retry_backoff must be >= 0"):
            load_config(path)

    def test_integer_timeout_and_zero_backoff_are_allowed(self, tmp_path: Path):
        path = tmp_path / "msgchunk.toml"
        path.write_text("[delivery]\ntimeout = 5\nretry_backoff = 0\n", encoding="utf-8")
        config = load_config(path)
        assert config.delivery.timeout == 5
        assert config.delivery.retry_backoff == 0


class TestValidateConfig:
    def test_negative_retries(self):
        config = default_config()
        config.delivery.max_retries = -1
        with pytest.raises(ConfigError, match="max_retries"):
            validate_config(config)

    def test_zero_timeout(self):
        config = default_config()
        config.delivery.timeout = 0
        with pytest.raises(ConfigError, match="timeout"):
            validate_config(config)
