"""
Recognizer façade for SimpleNER.

Binds a TermDictionary to the recognition entry point used by drivers.
"""

import logging
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .core import MatchRecord
from .dictionary import TermDictionary
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

V = TypeVar("V")


class Recognizer(Generic[V]):
    """Finds dictionary terms occurring in content text."""

    def __init__(self, entries=None, tokenizer: Optional[Tokenizer] = None):
        self.dictionary: TermDictionary[V] = TermDictionary(entries, tokenizer=tokenizer)

    def recognize(self, content: str) -> List[MatchRecord]:
        """Return the non-overlapping matches of dictionary terms in ``content``."""
        return self.dictionary.recognize(content)

    def recognize_many(
        self, records: Iterable[Tuple[int, str]]
    ) -> Iterator[Tuple[int, MatchRecord]]:
        """
        Recognize a stream of ``(record_id, text)`` pairs.

        Args:
            records: Content records, for example from ``read_content``

        Yields:
            ``(record_id, match)`` for every match, in record order
        """
        record_count = 0
        match_count = 0
        for record_id, text in records:
            record_count += 1
            for match in self.recognize(text):
                match_count += 1
                yield record_id, match

        logger.info("Recognized %s entities in %s records", match_count, record_count)
