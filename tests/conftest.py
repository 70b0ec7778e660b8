"""Shared fixtures for msgchunk tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from msgchunk.config import CONFIG_FILE, MsgchunkConfig, save_config

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config() -> MsgchunkConfig:
    """A config pointing at a fake webhook, with plain chunking at 10 chars."""
    cfg = MsgchunkConfig()
    cfg.chunk.mode = "plain"
    cfg.chunk.limit = 10
    cfg.delivery.base_url = "https://chat.example.com/api"
    return cfg


@pytest.fixture
def project_dir(tmp_path: Path, config: MsgchunkConfig) -> Path:
    """A temporary directory with msgchunk.toml already written."""
    save_config(config, tmp_path / CONFIG_FILE)
    return tmp_path


@pytest.fixture
def message_file(tmp_path: Path) -> Path:
    """A small outbound message on disk."""
    f = tmp_path / "message.txt"
    f.write_text("the quick brown fox", encoding="utf-8")
    return f
