"""
Descriptor vocabulary loader for SimpleNER.

Reads MeSH-style descriptor XML (``DescriptorRecordSet/DescriptorRecord``) and
feeds every entry term of every descriptor into a term dictionary.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from lxml import etree

from ..core import DescriptorFormatError
from ..dictionary import TermDictionary

logger = logging.getLogger(__name__)


@dataclass
class Descriptor:
    """A vocabulary record: identifier, tree numbers and its entry terms."""

    id: str
    tree_numbers: List[str] = field(default_factory=list)
    terms: List[str] = field(default_factory=list)


def _parse_record(node) -> Descriptor:
    descriptor_id = node.findtext("DescriptorUI")
    if descriptor_id is None or not descriptor_id.strip():
        raise DescriptorFormatError(
            f"DescriptorRecord without DescriptorUI at line {node.sourceline}"
        )

    tree_numbers = [
        n.text.strip() for n in node.iterfind("TreeNumberList/TreeNumber") if n.text
    ]
    terms = [n.text for n in node.iterfind(".//TermList/Term/String") if n.text]
    return Descriptor(id=descriptor_id.strip(), tree_numbers=tree_numbers, terms=terms)


def load_descriptors(source: Union[str, Path]) -> List[Descriptor]:
    """
    Load descriptors from an XML file or file-like object.

    Records are parsed incrementally and released once read, so full MeSH
    releases do not need to fit in memory as a tree.

    Args:
        source: Path or binary file object of the descriptor XML

    Returns:
        Descriptors in file order

    Raises:
        DescriptorFormatError: if the XML is malformed or a record has no id
    """
    if isinstance(source, Path):
        source = str(source)

    descriptors = []
    try:
        for _, node in etree.iterparse(source, events=("end",), tag="DescriptorRecord"):
            parent = node.getparent()
            if parent is None or parent.tag != "DescriptorRecordSet":
                continue
            descriptors.append(_parse_record(node))
            node.clear()
            while node.getprevious() is not None:
                del parent[0]
    except etree.XMLSyntaxError as e:
        raise DescriptorFormatError(f"Cannot parse descriptor XML: {e}") from e

    logger.info("Loaded %s descriptors", len(descriptors))
    return descriptors


def populate_dictionary(
    dictionary: TermDictionary,
    descriptors: Iterable[Descriptor],
    strict: bool = False,
) -> int:
    """
    Insert every term of every descriptor into ``dictionary``.

    Args:
        dictionary: Target dictionary
        descriptors: Descriptors whose terms are inserted
        strict: Use ``add`` so a term shared by two descriptors raises
            TermConflictError instead of being reassigned

    Returns:
        Number of terms inserted
    """
    count = 0
    for descriptor in descriptors:
        for term in descriptor.terms:
            if strict:
                dictionary.add(term, descriptor)
            else:
                previous = dictionary.try_get(term)
                if previous is not None and previous is not descriptor:
                    logger.debug(
                        "Term '%s' reassigned from %s to %s",
                        term,
                        getattr(previous, "id", previous),
                        descriptor.id,
                    )
                dictionary.set(term, descriptor)
            count += 1

    logger.info("Inserted %s terms, dictionary holds %s", count, len(dictionary))
    return count
