"""Abstract base classes for delivery transports and failure reporters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from msgchunk.types import DeliveryFailure, DeliveryResult

__all__ = ["BaseTransport", "FailureReporter", "LoggingFailureReporter"]

logger = logging.getLogger(__name__)


class BaseTransport(ABC):
    """Base class for all delivery transports.

    A transport sends exactly one message per call and knows nothing about
    chunking or retries; the outbound adapter handles both.
    """

    @property
    @abstractmethod
    def channel(self) -> str:
        """Channel name stamped on every result."""

    @abstractmethod
    def send_text(self, to: str, text: str) -> DeliveryResult:
        """Send one text message.

        Args:
            to: Recipient identifier (chat, user or room).
            text: Message body, already within the platform limit.

        Returns:
            The accepted message.

        Raises:
            TransientDeliveryError: If the failure may clear on retry.
            DeliveryError: If the message was rejected.
        """

    @abstractmethod
    def send_media(self, to: str, media_url: str) -> DeliveryResult:
        """Upload and send one media attachment.

        Args:
            to: Recipient identifier.
            media_url: Location of the asset to deliver.

        Returns:
            The accepted message.

        Raises:
            TransientDeliveryError: If the failure may clear on retry.
            DeliveryError: If the upload or send was rejected.
        """


class FailureReporter(ABC):
    """Receives a record of every delivery the adapter gave up on."""

    @abstractmethod
    def record(self, failure: DeliveryFailure) -> None:
        """Record a delivery failure with its context."""


class LoggingFailureReporter(FailureReporter):
    """Report failures through the ``msgchunk.deliver`` logger."""

    def record(self, failure: DeliveryFailure) -> None:
        logger.error(
            "[%s] %s delivery to %s failed after %d attempt(s): %s%s",
            failure.channel,
            failure.stage,
            failure.to,
            failure.attempts,
            failure.error,
            f" (media_url={failure.media_url})" if failure.media_url else "",
        )
