"""Chunking engine that splits outbound text into platform-sized pieces."""

from msgchunk.chunk.base import WHITESPACE, BaseChunker, is_whitespace
from msgchunk.chunk.markdown import MarkdownChunker, split_markdown
from msgchunk.chunk.text import Breakpoints, PlainTextChunker, scan_breakpoints, split_text
from msgchunk.exceptions import ChunkError

__all__ = [
    "CHUNKERS",
    "WHITESPACE",
    "BaseChunker",
    "Breakpoints",
    "MarkdownChunker",
    "PlainTextChunker",
    "get_chunker",
    "is_whitespace",
    "scan_breakpoints",
    "split_markdown",
    "split_text",
]

# Keyed by ``chunk.mode``; config validation and the CLI read the mode names from here
CHUNKERS: dict[str, type[BaseChunker]] = {
    cls.mode: cls for cls in (PlainTextChunker, MarkdownChunker)
}


def get_chunker(mode: str) -> BaseChunker:
    """Return a chunker instance for the given mode.

    This is the only lookup path: the CLI and ``OutboundAdapter`` both go
    through it, so an unknown mode fails the same way everywhere.

    Args:
        mode: Chunker identifier (``"plain"`` or ``"markdown"``).

    Returns:
        A new chunker instance.

    Raises:
        ChunkError: If no chunker exists for the given mode.
    """
    cls = CHUNKERS.get(mode) if isinstance(mode, str) else None
    if cls is None:
        raise ChunkError(f"No chunker for mode: {mode!r}. Expected one of: {sorted(CHUNKERS)}")
    return cls()
