"""Delivery data contracts for msgchunk.

Frozen dataclasses passed between the outbound adapter, its transport
and its failure reporter.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "DeliveryFailure",
    "DeliveryResult",
]


@dataclass(frozen=True)
class DeliveryResult:
    """One message accepted by a transport."""

    channel: str
    message_id: str = ""
    chat_id: str = ""
    chunk_index: int = 0


@dataclass(frozen=True)
class DeliveryFailure:
    """Context recorded when a delivery attempt gives up."""

    channel: str
    to: str
    stage: str
    error: str
    media_url: str = ""
    attempts: int = 1
