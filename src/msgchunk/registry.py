"""Transport registry for msgchunk.

Resolves ``delivery.provider`` to a transport factory, so the CLI never
names a concrete transport class. Built-in transports register themselves
when :mod:`msgchunk.deliver` is imported; the default registry does that
import on first lookup.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from msgchunk.exceptions import PluginError

if TYPE_CHECKING:
    from collections.abc import Callable

    from msgchunk.config import MsgchunkConfig
    from msgchunk.deliver.base import BaseTransport

    TransportFactory = Callable[[MsgchunkConfig], BaseTransport]

__all__ = ["TransportRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class TransportRegistry:
    """Maps provider names to transport factories.

    Args:
        builtins: Module to import before the first lookup so its transports
            can register. ``None`` starts with an empty registry.

    Usage::

        registry = TransportRegistry()
        registry.register("http", HttpTransport)
        transport = registry.create(config)  # uses config.delivery.provider
    """

    def __init__(self, builtins: str | None = None) -> None:
        self._factories: dict[str, TransportFactory] = {}
        self._builtins = builtins

    def register(self, name: str, factory: TransportFactory) -> None:
        """Register a transport factory under a provider name.

        Raises:
            PluginError: If ``name`` is already taken.
        """
        if name in self._factories:
            raise PluginError(f"Delivery provider {name!r} is already registered")
        self._factories[name] = factory
        logger.debug("Registered delivery provider %s", name)

    def create(self, config: MsgchunkConfig) -> BaseTransport:
        """Build the transport named by ``config.delivery.provider``.

        Raises:
            PluginError: If no transport is registered under that name.
        """
        self._load_builtins()
        name = config.delivery.provider
        factory = self._factories.get(name)
        if factory is None:
            raise PluginError(
                f"Unknown delivery provider {name!r}. Available: {sorted(self._factories)}"
            )
        return factory(config)

    def _load_builtins(self) -> None:
        if self._builtins is None:
            return
        module, self._builtins = self._builtins, None
        importlib.import_module(module)


default_registry = TransportRegistry(builtins="msgchunk.deliver")
