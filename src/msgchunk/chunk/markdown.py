"""Markdown-flavoured chunker.

Breaks just after the last newline in the window, else just after the last
plain space, else hard at the limit. Only ``"\\n"`` and ``" "`` count as
boundaries here; tabs and other whitespace do not.

Known limitations:
- Code fences are not tracked. A chunk can end inside a fenced block and
  the next chunk will start mid-block without reopening the fence.
- The break index already sits past the separator, yet the shared loop
  still skips one more character when that position is whitespace. The
  extra skip is invisible after the left trim, and is kept so chunk
  boundaries stay stable for existing callers.
"""

from __future__ import annotations

from typing import ClassVar

from msgchunk.chunk.base import BaseChunker

__all__ = ["MarkdownChunker", "split_markdown"]


class MarkdownChunker(BaseChunker):
    """Split markdown text at line and word boundaries.

    Unlike :class:`~msgchunk.chunk.text.PlainTextChunker`, the separator is
    included in the emitted slice before trailing whitespace is trimmed.
    """

    mode: ClassVar[str] = "markdown"

    def select_break(self, window: str, limit: int) -> int:
        last_newline = window.rfind("\n")
        last_space = window.rfind(" ")

        if last_newline > 0:
            return last_newline + 1
        if last_space > 0:
            return last_space + 1
        return limit


_chunker = MarkdownChunker()


def split_markdown(text: str, limit: int) -> list[str]:
    """Split markdown text into chunks of at most ``limit`` characters."""
    return _chunker.split(text, limit)
