"""
File collaborators for SimpleNER: descriptor vocabularies, content records and
tab-separated results.
"""

from .content import ContentRecord, parse_content, read_content
from .descriptors import Descriptor, load_descriptors, populate_dictionary
from .results import default_value_id, format_match, write_results

__all__ = [
    "ContentRecord",
    "Descriptor",
    "default_value_id",
    "format_match",
    "load_descriptors",
    "parse_content",
    "populate_dictionary",
    "read_content",
    "write_results",
]
