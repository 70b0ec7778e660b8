"""Abstract base class for chunking strategies.

Every chunker shares the same loop: take a window of ``limit`` characters
off the front of the remaining text, ask the strategy where to break it,
emit the trimmed piece, and continue with the rest until it fits. Only the
choice of break index differs between strategies.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

__all__ = ["WHITESPACE", "BaseChunker", "is_whitespace"]

logger = logging.getLogger(__name__)

# Break and trim characters: ASCII whitespace, no-break space, the Unicode
# space separators, line and paragraph separators, and the BOM. Unlike
# str.isspace() this excludes \x1c-\x1f and \x85.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_WHITESPACE_CHARS = frozenset(WHITESPACE)


def is_whitespace(char: str) -> bool:
    """Return True if ``char`` separates words for chunking purposes."""
    return char in _WHITESPACE_CHARS


class BaseChunker(ABC):
    """Base class for all chunking strategies.

    Subclasses only implement :meth:`select_break`. The split itself is
    pure: no state is kept between calls, so one instance can be shared.
    """

    mode: ClassVar[str] = ""

    @abstractmethod
    def select_break(self, window: str, limit: int) -> int:
        """Choose where to cut the current window.

        Args:
            window: The first ``limit`` characters of the remaining text.
            limit: Maximum chunk length.

        Returns:
            Break index in ``1..limit``. Text before it forms the next chunk.
        """

    def split(self, text: str, limit: int) -> list[str]:
        """Split text into chunks of at most ``limit`` characters.

        Empty text gives ``[]``. A non-positive limit, or text that already
        fits, is returned unchanged as a single chunk. Otherwise every chunk
        is non-empty, right-trimmed, and no longer than ``limit``; only the
        final remainder is appended verbatim.

        Never raises.
        """
        if not text:
            return []
        if limit <= 0 or len(text) <= limit:
            return [text]

        chunks: list[str] = []
        remaining = text

        while len(remaining) > limit:
            window = remaining[:limit]
            break_idx = self.select_break(window, limit)

            chunk = remaining[:break_idx].rstrip(WHITESPACE)
            if chunk:
                chunks.append(chunk)

            # Consume one separator at the break, then any leading whitespace
            broke_on_separator = break_idx < len(remaining) and is_whitespace(remaining[break_idx])
            next_start = min(len(remaining), break_idx + (1 if broke_on_separator else 0))
            remaining = remaining[next_start:].lstrip(WHITESPACE)

        if remaining:
            chunks.append(remaining)

        logger.debug(
            "Split %d chars into %d chunks (mode=%s, limit=%d)",
            len(text),
            len(chunks),
            self.mode,
            limit,
        )
        return chunks
