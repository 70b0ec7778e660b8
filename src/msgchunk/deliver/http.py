"""JSON webhook transport.

Posts each message to a generic HTTP endpoint:

- ``POST {base_url}/messages`` with ``{"to": ..., "text": ...}``
- ``POST {base_url}/media`` with ``{"to": ..., "media_url": ...}``

The response body may carry ``message_id`` and ``chat_id``.
"""

from __future__ import annotations

import json
import logging
import os
from http.client import HTTPException
from typing import TYPE_CHECKING, Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from msgchunk.deliver.base import BaseTransport
from msgchunk.exceptions import ConfigError, DeliveryError, TransientDeliveryError
from msgchunk.types import DeliveryResult

if TYPE_CHECKING:
    from msgchunk.config import MsgchunkConfig

__all__ = ["HttpTransport"]

logger = logging.getLogger(__name__)


def _is_retryable_status(code: int) -> bool:
    return code == 429 or code >= 500


class HttpTransport(BaseTransport):
    """Transport posting JSON to a webhook-style messaging endpoint.

    Config fields used::

        [channel]
        name = "webhook"

        [delivery]
        base_url = "https://chat.example.com/api"
        api_key_env = "CHAT_API_TOKEN"   # env var name; empty = no auth
        timeout = 30
    """

    def __init__(self, config: MsgchunkConfig) -> None:
        if not config.delivery.base_url:
            raise ConfigError("delivery.base_url is required for the http transport")

        self._channel = config.channel.name
        self._base_url = config.delivery.base_url.rstrip("/")
        self._timeout = config.delivery.timeout

        # Resolve API key from environment variable
        self._api_key: str | None = None
        if config.delivery.api_key_env:
            self._api_key = os.environ.get(config.delivery.api_key_env)
            if not self._api_key:
                logger.warning(
                    "API key env var %s is not set; requests may fail",
                    config.delivery.api_key_env,
                )

    @property
    def channel(self) -> str:
        return self._channel

    def send_text(self, to: str, text: str) -> DeliveryResult:
        data = self._post("messages", {"to": to, "text": text})
        return self._to_result(data)

    def send_media(self, to: str, media_url: str) -> DeliveryResult:
        data = self._post("media", {"to": to, "media_url": media_url})
        return self._to_result(data)

    def _to_result(self, data: dict[str, Any]) -> DeliveryResult:
        return DeliveryResult(
            channel=self._channel,
            message_id=str(data.get("message_id") or ""),
            chat_id=str(data.get("chat_id") or ""),
        )

    def _post(self, endpoint: str, payload: dict[str, str]) -> dict[str, Any]:
        """POST a JSON payload and return the decoded response object.

        Raises:
            TransientDeliveryError: On connection errors, timeouts, truncated
                responses, 429 or 5xx.
            DeliveryError: On other HTTP errors or a malformed response.
        """
        url = f"{self._base_url}/{endpoint}"
        body = json.dumps(payload).encode("utf-8")

        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        req = Request(url, data=body, headers=headers, method="POST")

        try:
            with urlopen(req, timeout=self._timeout) as resp:
                raw = resp.read()
        except HTTPError as e:
            if _is_retryable_status(e.code):
                raise TransientDeliveryError(
                    f"Messaging API error (HTTP {e.code}): {e.reason}"
                ) from e
            raise DeliveryError(
                f"Messaging API rejected request (HTTP {e.code}): {e.reason}"
            ) from e
        except (ConnectionError, TimeoutError, URLError, HTTPException) as e:
            raise TransientDeliveryError(
                f"Messaging API not reachable at {self._base_url}. Error: {e}"
            ) from e

        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DeliveryError(f"Messaging API returned invalid JSON from {url}") from e

        if not isinstance(data, dict):
            raise DeliveryError(f"Unexpected response format from {url}: expected a JSON object")

        logger.debug("Posted to %s (message_id=%s)", url, data.get("message_id", ""))
        return data
