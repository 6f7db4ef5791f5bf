"""
Result writer for SimpleNER.

Emits one ``id<TAB>value-id<TAB>offset<TAB>length`` line per match.
"""

from typing import Any, Callable, Iterable, TextIO, Tuple

from ..core import MatchRecord


def default_value_id(value: Any) -> str:
    """Use the value's ``id`` attribute when it has one, else the value itself."""
    return str(getattr(value, "id", value))


def format_match(
    record_id: int,
    match: MatchRecord,
    value_id: Callable[[Any], str] = default_value_id,
) -> str:
    return f"{record_id}\t{value_id(match.value)}\t{match.offset}\t{match.length}\n"


def write_results(
    stream: TextIO,
    results: Iterable[Tuple[int, MatchRecord]],
    value_id: Callable[[Any], str] = default_value_id,
) -> int:
    """
    Write ``(record_id, match)`` pairs as tab-separated lines.

    Returns:
        Number of lines written
    """
    count = 0
    for record_id, match in results:
        stream.write(format_match(record_id, match, value_id))
        count += 1
    return count
