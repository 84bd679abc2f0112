"""Multi-pattern keyword gate run before the per-tag extraction rules.

Most lines in a source tree carry no tag at all. The extraction patterns are
case-insensitive, anchored on a comment opener and backtrack around the
author group, so running all of them on every line is wasteful. The
prefilter compiles every keyword into one alternation and rejects a line
after a single pass of the regex engine when none of them occurs.
"""

import re
from collections.abc import Iterable


class Prefilter:
    """Case-sensitive exact substring search for a fixed set of keywords"""

    def __init__(self, keywords: Iterable[str]):
        words = sorted({k for k in keywords if k}, key=lambda k: (-len(k), k))
        if not words:
            raise ValueError('Prefilter needs at least one keyword')
        self.keywords: tuple[str, ...] = tuple(words)
        self._pattern = re.compile(b'|'.join(re.escape(k.encode('utf-8')) for k in words))

    def has_candidate(self, line: bytes | str) -> bool:
        """Return True if any keyword occurs anywhere in the line."""
        if isinstance(line, str):
            line = line.encode('utf-8', errors='surrogateescape')
        return self._pattern.search(line) is not None

    def __repr__(self) -> str:
        return f'Prefilter(keywords={list(self.keywords)!r})'
