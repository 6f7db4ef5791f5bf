"""
Core data structures for SimpleNER.

Contains the match records produced by recognition, the prefix-match result of
the trie, and the exception hierarchy shared by the whole package.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class MatchRecord:
    """A recognized entity: associated value plus its character span."""

    value: Any
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def span_text(self, content: str) -> str:
        """Return the slice of ``content`` covered by this match."""
        return content[self.offset : self.end]


@dataclass(frozen=True)
class PrefixMatch:
    """Result of a longest-prefix match: tokens consumed and the value found."""

    length: int = 0
    value: Optional[Any] = None

    def __bool__(self) -> bool:
        return self.length > 0


NO_MATCH = PrefixMatch()


class SimpleNerError(Exception):
    """Base class for all SimpleNER errors."""


class PathLookupError(SimpleNerError, KeyError):
    """Raised when an exact-path lookup hits a node holding no value."""

    def __init__(self, path):
        self.path = tuple(path)
        super().__init__(f"No value stored at path {self.path!r}")

    def __str__(self):
        return self.args[0]


class TermConflictError(SimpleNerError, KeyError):
    """Raised when adding a term that already exists in the dictionary."""

    def __init__(self, term: str):
        self.term = term
        super().__init__(f"Term '{term}' already exists in the dictionary")

    def __str__(self):
        return self.args[0]


class ConsistencyError(SimpleNerError, AssertionError):
    """Raised when the flat table and the prefix tree disagree."""


class ContentFormatError(SimpleNerError, ValueError):
    """Raised when a content file line cannot be parsed."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class DescriptorFormatError(SimpleNerError, ValueError):
    """Raised when a descriptor file is malformed."""
