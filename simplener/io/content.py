"""
Content file reader for SimpleNER.

Parses line-oriented content files where each record is ``id<TAB>text``. Only
the first tab separates the fields; the text may contain further tabs. Lines
end at LF, CRLF or a lone CR. Blank lines are ignored.
"""

import logging
from pathlib import Path
from typing import List, NamedTuple, Union

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedInput

from ..core import ContentFormatError

logger = logging.getLogger(__name__)

CONTENT_GRAMMAR = r"""
    start: line*
    line: record? _NL
    record: RECORD_ID _TAB TEXT?

    RECORD_ID: /\d+/
    TEXT: /[^\r\n]+/
    _TAB: "\t"
    _NL: /\r\n?|\n/
"""


class ContentRecord(NamedTuple):
    """One unit of content to recognize."""

    id: int
    text: str


@v_args(inline=True)
class ContentTransformer(Transformer):
    """Turns content parse trees into ContentRecord tuples."""

    def start(self, *lines):
        return [record for record in lines if record is not None]

    def line(self, record=None):
        return record

    def record(self, record_id, text=None):
        return ContentRecord(id=int(record_id), text=str(text) if text is not None else "")


content_parser = Lark(
    CONTENT_GRAMMAR, start="start", parser="lalr", transformer=ContentTransformer()
)


def parse_content(text: str) -> List[ContentRecord]:
    """
    Parse content records from a string.

    Args:
        text: Whole content file body

    Returns:
        Records in file order

    Raises:
        ContentFormatError: if a line is not ``id<TAB>text``
    """
    if text and not text.endswith("\n"):
        text += "\n"
    try:
        records = content_parser.parse(text)
    except UnexpectedInput as e:
        raise ContentFormatError(
            f"expected '<id>\\t<text>' at column {e.column}", line=e.line
        ) from e

    logger.debug("Parsed %s content records", len(records))
    return records


def read_content(path: Union[str, Path]) -> List[ContentRecord]:
    """Read and parse a UTF-8 content file."""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return parse_content(f.read())
