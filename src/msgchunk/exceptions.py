"""Custom exception hierarchy for msgchunk."""

__all__ = [
    "ChunkError",
    "ConfigError",
    "DeliveryError",
    "MsgchunkError",
    "PluginError",
    "TransientDeliveryError",
]


class MsgchunkError(Exception):
    """Base exception for all msgchunk errors."""


class ConfigError(MsgchunkError):
    """Raised when configuration loading or validation fails."""


class ChunkError(MsgchunkError):
    """Raised when a chunker cannot be resolved."""


class PluginError(MsgchunkError):
    """Raised when provider lookup or registration fails."""


class DeliveryError(MsgchunkError):
    """Raised when a message cannot be delivered and retrying will not help."""


class TransientDeliveryError(DeliveryError):
    """Raised when delivery failed for a reason that may clear on retry."""
