"""
Case-insensitive term dictionary for SimpleNER.

Keeps a flat lookup table and a token prefix tree holding the same entries,
both keyed by the term's lowercased tokens, and scans text for the longest
non-overlapping occurrences of the stored terms.
"""

import logging
from collections.abc import MutableMapping
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from .core import ConsistencyError, MatchRecord, TermConflictError
from .prefix_tree import PrefixTree
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

V = TypeVar("V")

_MISSING = object()


class TermDictionary(MutableMapping, Generic[V]):
    """
    Mapping from terms to values with token-level longest-match recognition.

    Every mutation updates the flat table and the prefix tree together: the
    table's key set is always the set of valued paths in the tree, and the
    values agree.
    """

    def __init__(self, entries=None, tokenizer: Optional[Tokenizer] = None):
        """
        Initialize the dictionary.

        Args:
            entries: Optional mapping or iterable of (term, value) pairs, each
                inserted with ``add`` so duplicate terms raise
            tokenizer: Tokenizer used for terms and content
        """
        self.tokenizer = tokenizer or Tokenizer()
        self._table: dict = {}
        self._paths: Dict[str, Tuple[str, ...]] = {}
        self._tree: PrefixTree[str, V] = PrefixTree()

        if entries is not None:
            pairs = entries.items() if hasattr(entries, "items") else entries
            for term, value in pairs:
                self.add(term, value)

    @staticmethod
    def normalize(token: str) -> str:
        return token.lower()

    def _normalize_tokens(self, text: str) -> Tuple[str, ...]:
        # Terms and content are folded the same way: split first, then lowercase
        return tuple(self.normalize(token) for token in self.tokenizer.tokenize(text))

    def _key(self, term: str) -> str:
        return "".join(self._normalize_tokens(term))

    def _path(self, term: str) -> Tuple[str, ...]:
        path = self._normalize_tokens(term)
        if not path:
            raise ValueError("Terms must contain at least one character")
        return path

    # Mapping protocol

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __contains__(self, term) -> bool:
        if not isinstance(term, str):
            return False
        return self._key(term) in self._table

    def __getitem__(self, term: str) -> V:
        if not isinstance(term, str):
            raise KeyError(term)
        return self._table[self._key(term)]

    def __setitem__(self, term: str, value: V) -> None:
        self.set(term, value)

    def __delitem__(self, term: str) -> None:
        if not self.remove(term):
            raise KeyError(term)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._table!r})"

    # Mutation

    def set(self, term: str, value: V) -> None:
        """Insert or overwrite ``term`` in both the table and the tree."""
        path = self._path(term)
        key = "".join(path)
        previous = self._paths.get(key)
        if previous is not None and previous != path:
            # Same key split differently; the tree must not keep both paths
            self._tree.remove(previous)
        self._tree.set(path, value)
        self._table[key] = value
        self._paths[key] = path

    def add(self, term: str, value: V) -> None:
        """
        Insert a new term.

        Raises:
            TermConflictError: if the term is already present, ignoring case
        """
        path = self._path(term)
        key = "".join(path)
        if key in self._table:
            raise TermConflictError(term)
        self._tree.set(path, value)
        self._table[key] = value
        self._paths[key] = path

    def remove(self, term: str) -> bool:
        """
        Remove ``term`` from both structures.

        Returns:
            True if the term was present, False otherwise

        Raises:
            ConsistencyError: if the table and the tree disagree on the term
        """
        if not isinstance(term, str):
            return False
        path = self._normalize_tokens(term)
        key = "".join(path)
        in_table = self._table.pop(key, _MISSING) is not _MISSING
        path = self._paths.pop(key, path)
        in_tree = self._tree.remove(path) if path else False
        if in_table != in_tree:
            raise ConsistencyError(
                f"Term '{key}' present in table={in_table} but in tree={in_tree}"
            )
        return in_table

    def update(self, *args, **kwargs) -> None:  # pylint: disable=arguments-differ
        """Upsert every pair; later entries for the same term win."""
        for other in args:
            pairs = other.items() if hasattr(other, "items") else other
            for term, value in pairs:
                self.set(term, value)
        for term, value in kwargs.items():
            self.set(term, value)

    def clear(self) -> None:
        self._table.clear()
        self._paths.clear()
        self._tree.clear()

    # Lookup

    def try_get(self, term: str, default: Optional[V] = None) -> Optional[V]:
        if not isinstance(term, str):
            return default
        return self._table.get(self._key(term), default)

    def check_consistency(self) -> None:
        """
        Verify that the table and the tree hold exactly the same entries.

        Raises:
            ConsistencyError: on the first disagreement found
        """
        if len(self._table) != len(self._tree):
            raise ConsistencyError(
                f"Table holds {len(self._table)} terms but tree holds {len(self._tree)}"
            )
        for key, value in self._table.items():
            path = self._paths.get(key)
            if path is None or "".join(path) != key:
                raise ConsistencyError(f"No token path recorded for '{key}'")
            match = self._tree.longest_prefix_match(path)
            if match.length != len(path) or match.value is not value:
                raise ConsistencyError(f"Tree entry for '{key}' does not match table")

    # Recognition

    def recognize(self, content: str) -> List[MatchRecord]:
        """
        Find the stored terms occurring in ``content``.

        Scans left to right over the lowercased tokens of the content. At each
        position the longest stored term starting there is committed and the
        scan jumps past it; otherwise the scan moves on by one token. Matches
        are therefore maximal at their start and never overlap, but a longer
        match starting inside an earlier one is never considered.

        Args:
            content: Text to scan, in its original case

        Returns:
            MatchRecords in order of offset
        """
        # Lowercase per token so lengths always refer to the original content
        original = self.tokenizer.tokenize(content)
        lengths = self.tokenizer.token_lengths(original)
        tokens = [self.normalize(token) for token in original]

        result = []
        index = 0
        offset = 0
        while index < len(tokens):
            match = self._tree.longest_prefix_match(tokens, index)
            if not match:
                offset += lengths[index]
                index += 1
                continue

            term_length = sum(lengths[index : index + match.length])
            result.append(MatchRecord(match.value, offset, term_length))
            offset += term_length
            index += match.length

        logger.debug(
            "Recognized %s entities in %s tokens", len(result), len(tokens)
        )
        return result

