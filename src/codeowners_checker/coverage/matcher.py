"""
Path Matcher

Accumulates CODEOWNERS glob patterns and answers whether a path is
matched by any of them, using gitignore-style wildcard semantics.
"""

from typing import List, Optional

import pathspec


class PathMatcher:
    """
    Ordered collection of glob patterns with a match predicate.

    Patterns are kept exactly as added, duplicates included. The compiled
    spec is rebuilt on the first match after any addition.
    """

    def __init__(self):
        self._patterns: List[str] = []
        self._spec: Optional[pathspec.PathSpec] = None

    def add(self, pattern: str) -> "PathMatcher":
        """Append a pattern and return the matcher for chaining."""
        self._patterns.append(pattern)
        self._spec = None
        return self

    def matches(self, path: str) -> bool:
        """True if at least one added pattern matches the path."""
        if self._spec is None:
            self._spec = pathspec.GitIgnoreSpec.from_lines(self._patterns)
        return self._spec.match_file(path)

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"PathMatcher(patterns={self._patterns!r})"
