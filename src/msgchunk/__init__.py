"""msgchunk: split outbound messages into platform-sized chunks."""

__version__ = "0.1.0"
