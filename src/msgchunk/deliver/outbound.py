"""Outbound adapter for msgchunk.

Composes chunker → transport via constructor injection and owns the retry
and media-fallback policy.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from msgchunk.chunk import get_chunker
from msgchunk.deliver.base import LoggingFailureReporter
from msgchunk.exceptions import DeliveryError, TransientDeliveryError
from msgchunk.types import DeliveryFailure

if TYPE_CHECKING:
    from collections.abc import Callable

    from tenacity import RetryCallState

    from msgchunk.chunk.base import BaseChunker
    from msgchunk.config import MsgchunkConfig
    from msgchunk.deliver.base import BaseTransport, FailureReporter
    from msgchunk.types import DeliveryResult

__all__ = ["OutboundAdapter"]

logger = logging.getLogger(__name__)


def _log_retry(stage: str, to: str) -> Callable[[RetryCallState], None]:
    def log(retry_state: RetryCallState) -> None:
        logger.warning(
            "Transient %s delivery failure to %s (attempt %d): %s; retrying in %.2fs",
            stage,
            to,
            retry_state.attempt_number,
            retry_state.outcome.exception() if retry_state.outcome else None,
            retry_state.next_action.sleep if retry_state.next_action else 0.0,
        )

    return log


class OutboundAdapter:
    """Splits outbound messages and hands each piece to a transport in order.

    The chunker is picked from ``chunk.mode`` and applied with
    ``chunk.limit``. Transient transport failures are retried with
    exponential backoff; anything the adapter gives up on is passed to the
    failure reporter. A failed media upload falls back to sending a text
    link to the asset.

    Usage::

        adapter = OutboundAdapter(transport=HttpTransport(config), config=config)
        results = adapter.send_text("room-42", long_reply)
    """

    def __init__(
        self,
        transport: BaseTransport,
        config: MsgchunkConfig,
        reporter: FailureReporter | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.transport = transport
        self.config = config
        self.reporter = reporter or LoggingFailureReporter()
        self._sleep = sleep
        self._chunker: BaseChunker = get_chunker(config.chunk.mode)

    @property
    def delivery_mode(self) -> str:
        return self.config.channel.delivery_mode

    @property
    def chunker_mode(self) -> str:
        return self._chunker.mode

    @property
    def text_chunk_limit(self) -> int:
        return self.config.chunk.limit

    def chunk(self, text: str) -> list[str]:
        """Split text with the configured chunker and limit."""
        return self._chunker.split(text, self.text_chunk_limit)

    def send_text(self, to: str, text: str) -> list[DeliveryResult]:
        """Send text as one message per chunk, preserving order.

        Returns:
            One result per chunk, ``chunk_index`` numbered from 0.

        Raises:
            DeliveryError: If a chunk could not be delivered. Chunks before
                it have already been sent.
        """
        results: list[DeliveryResult] = []
        for index, piece in enumerate(self.chunk(text)):
            result = self._call("text", to, self.transport.send_text, piece)
            results.append(replace(result, chunk_index=index))

        logger.info(
            "Delivered %d chunk(s) to %s via %s", len(results), to, self.transport.channel
        )
        return results

    def send_media(self, to: str, text: str = "", media_url: str = "") -> list[DeliveryResult]:
        """Send optional caption text followed by a media attachment.

        If the media cannot be delivered, a text message pointing at
        ``media_url`` is sent in its place.

        Returns:
            Results in delivery order, ``chunk_index`` numbered from 0.

        Raises:
            DeliveryError: If the caption or the fallback text fails.
        """
        results: list[DeliveryResult] = []
        text_sent = False

        if text.strip():
            results.extend(self.send_text(to, text))
            text_sent = True

        if media_url:
            try:
                results.append(
                    self._call(
                        "media", to, self.transport.send_media, media_url, media_url=media_url
                    )
                )
            except DeliveryError:
                fallback = f"{self.config.delivery.media_fallback_prefix} {media_url}".strip()
                logger.warning("Media delivery to %s failed; sending link instead", to)
                results.append(self._call("text", to, self.transport.send_text, fallback))
        elif not text_sent:
            results.extend(self.send_text(to, text))

        return [replace(r, chunk_index=i) for i, r in enumerate(results)]

    def _call(
        self,
        stage: str,
        to: str,
        send: Callable[[str, str], DeliveryResult],
        payload: str,
        media_url: str = "",
    ) -> DeliveryResult:
        """Invoke a transport method, retrying transient failures."""
        delivery = self.config.delivery
        retryer = Retrying(
            retry=retry_if_exception_type(TransientDeliveryError),
            stop=stop_after_attempt(delivery.max_retries + 1),
            wait=wait_exponential(multiplier=delivery.retry_backoff),
            sleep=self._sleep,
            before_sleep=_log_retry(stage, to),
            reraise=True,
        )
        try:
            return retryer(send, to, payload)
        except DeliveryError as e:
            attempts = retryer.statistics.get("attempt_number", 1)
            self._report(stage, to, e, attempts, media_url)
            raise

    def _report(
        self,
        stage: str,
        to: str,
        error: DeliveryError,
        attempts: int,
        media_url: str,
    ) -> None:
        self.reporter.record(
            DeliveryFailure(
                channel=self.transport.channel,
                to=to,
                stage=stage,
                error=str(error),
                media_url=media_url,
                attempts=attempts,
            )
        )
