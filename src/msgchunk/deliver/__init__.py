"""Outbound delivery: transports, failure reporting and the outbound adapter."""

from msgchunk.deliver.base import BaseTransport, FailureReporter, LoggingFailureReporter
from msgchunk.deliver.http import HttpTransport
from msgchunk.deliver.outbound import OutboundAdapter
from msgchunk.registry import default_registry

__all__ = [
    "BaseTransport",
    "FailureReporter",
    "HttpTransport",
    "LoggingFailureReporter",
    "OutboundAdapter",
]

# Register built-in transports
default_registry.register("http", HttpTransport)
