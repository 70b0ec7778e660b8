"""Configuration system for msgchunk.

Manages delivery configuration via msgchunk.toml with typed dataclasses
and sensible defaults for all values.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import tomli_w

if sys.version_info >= (3, 12):
    import tomllib
else:
    import tomli as tomllib

from msgchunk.chunk import CHUNKERS
from msgchunk.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CHUNK_MODES",
    "CONFIG_FILE",
    "ChannelConfig",
    "ChunkConfig",
    "DeliveryConfig",
    "MsgchunkConfig",
    "default_config",
    "load_config",
    "save_config",
    "validate_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "msgchunk.toml"

CHUNK_MODES: frozenset[str] = frozenset(CHUNKERS)


@dataclass
class ChannelConfig:
    """[channel] section."""

    name: str = "webhook"
    delivery_mode: str = "direct"


@dataclass
class ChunkConfig:
    """[chunk] section.

    ``limit`` is measured in characters; ``limit <= 0`` disables chunking.
    """

    mode: str = "markdown"
    limit: int = 4000


@dataclass
class DeliveryConfig:
    """[delivery] section."""

    provider: str = "http"
    base_url: str = ""
    api_key_env: str = ""
    timeout: float = 30
    max_retries: int = 2
    retry_backoff: float = 0.5
    media_fallback_prefix: str = "\U0001f4ce"


@dataclass
class MsgchunkConfig:
    """Root configuration combining all sections."""

    channel: ChannelConfig = field(default_factory=ChannelConfig)
    chunk: ChunkConfig = field(default_factory=ChunkConfig)
    delivery: DeliveryConfig = field(default_factory=DeliveryConfig)


_SECTION_MAP: dict[str, type] = {
    "channel": ChannelConfig,
    "chunk": ChunkConfig,
    "delivery": DeliveryConfig,
}


def default_config() -> MsgchunkConfig:
    """Return a config with all default values."""
    return MsgchunkConfig()


def _config_to_dict(config: MsgchunkConfig) -> dict[str, object]:
    """Convert MsgchunkConfig to a nested dict suitable for TOML serialization."""
    return {name: dict(vars(getattr(config, name))) for name in _SECTION_MAP}


def save_config(config: MsgchunkConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def _load_section(cls: type[_T], data: dict[str, object]) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys."""
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    filtered = {k: v for k, v in data.items() if k in known_fields}
    return cls(**filtered)


def _is_int(value: object) -> bool:
    # bool is an int subclass; a TOML `limit = true` is still a mistake
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return _is_int(value) or isinstance(value, float)


def validate_config(config: MsgchunkConfig) -> None:
    """Check values that would otherwise fail late, mid-delivery.

    Types are checked before ranges so a quoted number in the TOML file
    surfaces as a ``ConfigError`` rather than a comparison ``TypeError``.

    Raises:
        ConfigError: If any value is out of range or of the wrong type.
    """
    chunk = config.chunk
    delivery = config.delivery

    if not isinstance(chunk.mode, str):
        raise ConfigError(f"chunk.mode must be a string, got {chunk.mode!r}")
    if chunk.mode not in CHUNK_MODES:
        raise ConfigError(
            f"Unknown chunk mode {chunk.mode!r}. Expected one of: {sorted(CHUNK_MODES)}"
        )
    if not _is_int(chunk.limit):
        raise ConfigError(f"chunk.limit must be an integer, got {chunk.limit!r}")

    if not _is_int(delivery.max_retries):
        raise ConfigError(f"delivery.max_retries must be an integer, got {delivery.max_retries!r}")
    if delivery.max_retries < 0:
        raise ConfigError(f"delivery.max_retries must be >= 0, got {delivery.max_retries}")

    if not _is_number(delivery.timeout):
        raise ConfigError(f"delivery.timeout must be a number, got {delivery.timeout!r}")
    if delivery.timeout <= 0:
        raise ConfigError(f"delivery.timeout must be > 0, got {delivery.timeout}")

    if not _is_number(delivery.retry_backoff):
        raise ConfigError(
            f"delivery.retry_backoff must be a number, got {delivery.retry_backoff!r}"
        )
    if delivery.retry_backoff < 0:
        raise ConfigError(f"delivery.retry_backoff must be >= 0, got {delivery.retry_backoff}")


def load_config(path: Path) -> MsgchunkConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = MsgchunkConfig()
    for name, cls in _SECTION_MAP.items():
        section = data.get(name)
        if isinstance(section, dict):
            setattr(config, name, _load_section(cls, section))

    validate_config(config)
    logger.info("Loaded config from %s", path)
    return config
