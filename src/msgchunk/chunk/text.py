"""Plain-text chunker: breaks at the last newline, else the last whitespace."""

from __future__ import annotations

from typing import ClassVar, NamedTuple

from msgchunk.chunk.base import BaseChunker, is_whitespace

__all__ = ["Breakpoints", "PlainTextChunker", "scan_breakpoints", "split_text"]


class Breakpoints(NamedTuple):
    """Last boundary positions found in a window; ``-1`` when absent."""

    last_newline: int
    last_whitespace: int


def scan_breakpoints(window: str) -> Breakpoints:
    """Scan a window once, recording the last newline and last other whitespace."""
    last_newline = -1
    last_whitespace = -1

    for i, char in enumerate(window):
        if char == "\n":
            last_newline = i
        elif is_whitespace(char):
            last_whitespace = i

    return Breakpoints(last_newline, last_whitespace)


class PlainTextChunker(BaseChunker):
    """Split text preferring line breaks, then word breaks, then a hard cut.

    The separator at the break is dropped from both neighbouring chunks.
    A boundary at index 0 is unusable (it would emit nothing) and falls
    through to the next preference.
    """

    mode: ClassVar[str] = "plain"

    def select_break(self, window: str, limit: int) -> int:
        points = scan_breakpoints(window)
        break_idx = points.last_newline if points.last_newline > 0 else points.last_whitespace
        if break_idx <= 0:
            break_idx = limit
        return break_idx


_chunker = PlainTextChunker()


def split_text(text: str, limit: int) -> list[str]:
    """Split plain text into chunks of at most ``limit`` characters.

    Example::

        >>> split_text("hello world", 5)
        ['hello', 'world']
    """
    return _chunker.split(text, limit)
