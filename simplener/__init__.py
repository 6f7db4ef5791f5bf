"""
SimpleNER - dictionary-based named-entity recognition.

The package is split into focused modules:

- core: match records, prefix-match results and the exception hierarchy
- tokenizer: lossless delimiter tokenization
- prefix_tree: generic token-sequence trie with longest-prefix matching
- dictionary: case-insensitive term dictionary and the recognition scan
- recognizer: façade binding a dictionary to ``recognize``
- io: descriptor, content and result file collaborators
"""

from .core import (
    ConsistencyError,
    ContentFormatError,
    DescriptorFormatError,
    MatchRecord,
    PathLookupError,
    PrefixMatch,
    SimpleNerError,
    TermConflictError,
)
from .dictionary import TermDictionary
from .prefix_tree import PrefixTree, PrefixTreeNode
from .recognizer import Recognizer
from .tokenizer import DEFAULT_DELIMITERS, Tokenizer, tokenize

__version__ = "0.1.0"

__all__ = [
    "ConsistencyError",
    "ContentFormatError",
    "DEFAULT_DELIMITERS",
    "DescriptorFormatError",
    "MatchRecord",
    "PathLookupError",
    "PrefixMatch",
    "PrefixTree",
    "PrefixTreeNode",
    "Recognizer",
    "SimpleNerError",
    "TermConflictError",
    "TermDictionary",
    "Tokenizer",
    "tokenize",
]
