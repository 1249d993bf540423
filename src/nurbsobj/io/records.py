"""Split OBJ text into logical records.

A record is one physical line split on whitespace: a leading keyword plus
its tokens. A line whose last token is the continuation marker carries on
onto the next physical line, whose tokens are appended to the same record.

Usage::

    with open(path) as stream:
        for record in iter_records(stream):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from nurbsobj.config import CONTINUATION_MARKER
from nurbsobj.errors import RecordLocation

END_KEYWORD = "end"
COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class Record:
    """One logical record of an OBJ stream."""
    keyword: str
    tokens: Tuple[str, ...]
    line: int                       # 1-indexed line the record starts on
    filename: Optional[str] = None

    @property
    def location(self) -> RecordLocation:
        return RecordLocation(self.line, self.filename)


def _strip_marker(tokens: List[str], marker: str) -> bool:
    if tokens and tokens[-1] == marker:
        tokens.pop()
        return True
    return False


def iter_records(lines: Iterable[str],
                 *,
                 continuation: str = CONTINUATION_MARKER,
                 blank_line_terminates: bool = False,
                 filename: Optional[str] = None) -> Iterator[Record]:
    """Yield the logical records of ``lines``.

    Blank lines are skipped, or end the scan when ``blank_line_terminates``
    is set. Comment lines yield nothing. An ``end`` record stops the scan
    and is not yielded.
    """

    numbered = enumerate(lines, start=1)
    for lineno, text in numbered:
        tokens = text.split()
        if not tokens:
            if blank_line_terminates:
                return
            continue
        if tokens[0].startswith(COMMENT_PREFIX):
            continue

        keyword = tokens[0]
        body = tokens[1:]
        while _strip_marker(body, continuation):
            nxt = next(numbered, None)
            if nxt is None:
                break
            body.extend(nxt[1].split())

        if keyword == END_KEYWORD:
            return
        yield Record(keyword, tuple(body), lineno, filename)


__all__ = ['Record', 'iter_records', 'END_KEYWORD']
