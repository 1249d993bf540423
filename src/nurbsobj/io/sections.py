"""Typed accumulators for the records of an OBJ freeform file.

A :class:`SectionAccumulator` consumes records for a single curve or
surface and collects the vertex pool, the rational flag, degrees, the
control point index list and the knot vectors. Every buffer lives on the
accumulator instance, so each read uses its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from nurbsobj.errors import (
    RecordLocation,
    error_bad_number,
    error_incomplete_record,
    error_missing_section,
)
from nurbsobj.io.records import Record

CURVE = "curve"
SURFACE = "surface"

# Keyword holding the index list, per geometry kind
BODY_KEYWORDS = {CURVE: "curv", SURFACE: "surf"}
# Number of leading domain-bound fields on the body record
DOMAIN_FIELDS = {CURVE: 2, SURFACE: 4}
DEGREE_FIELDS = {CURVE: 1, SURFACE: 2}
AXES = {CURVE: ("u",), SURFACE: ("u", "v")}


def _parse_float(record: Record, token: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise error_bad_number(record.keyword, token, "a number", record.location) from None


def _parse_int(record: Record, token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise error_bad_number(record.keyword, token, "an integer", record.location) from None


@dataclass
class SectionAccumulator:
    """Collects the fields of one curve or surface from its records."""

    kind: str
    filename: Optional[str] = None
    points: List[List[float]] = field(default_factory=list)
    point_weights: List[float] = field(default_factory=list)
    rational: bool = False
    degrees: List[int] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    knots: Dict[str, List[float]] = field(default_factory=dict)
    seen: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.kind not in BODY_KEYWORDS:
            raise ValueError(f"unknown geometry kind '{self.kind}'")
        self._handlers: Dict[str, Callable[[Record], None]] = {
            "v": self._vertex,
            "cstype": self._cstype,
            "deg": self._degree,
            BODY_KEYWORDS[self.kind]: self._body,
            "parm": self._parm,
        }

    @property
    def body_keyword(self) -> str:
        return BODY_KEYWORDS[self.kind]

    def location(self, section: Optional[str] = None) -> RecordLocation:
        return RecordLocation(self.seen.get(section), self.filename)

    def feed(self, record: Record) -> None:
        """Dispatch one record; unknown keywords are ignored."""
        handler = self._handlers.get(record.keyword)
        if handler is not None:
            handler(record)

    def consume(self, records: Iterable[Record]) -> "SectionAccumulator":
        for record in records:
            self.feed(record)
        return self

    def _mark(self, section: str, record: Record) -> None:
        self.seen.setdefault(section, record.line)

    # --- handlers ---

    def _vertex(self, record: Record) -> None:
        coords = [0.0, 0.0, 0.0, 1.0]
        for idx, token in enumerate(record.tokens[:4]):
            coords[idx] = _parse_float(record, token)
        self.points.append(coords[:3])
        self.point_weights.append(coords[3])

    def _cstype(self, record: Record) -> None:
        tokens = record.tokens
        if tokens[:1] == ("bspline",):
            self.rational = False
            self._mark("cstype", record)
        elif tokens[:2] == ("rat", "bspline"):
            self.rational = True
            self._mark("cstype", record)

    def _degree(self, record: Record) -> None:
        needed = DEGREE_FIELDS[self.kind]
        if len(record.tokens) < needed:
            raise error_incomplete_record("deg", needed, len(record.tokens), record.location)
        degrees = [_parse_int(record, tok) for tok in record.tokens[:needed]]
        for deg in degrees:
            if deg < 0:
                raise error_bad_number("deg", str(deg), "a non-negative integer", record.location)
        self.degrees = degrees
        self._mark("deg", record)

    def _body(self, record: Record) -> None:
        needed = DOMAIN_FIELDS[self.kind]
        if len(record.tokens) < needed:
            raise error_incomplete_record(record.keyword, needed, len(record.tokens), record.location)
        # domain bounds are checked but discarded; the knot vectors carry them
        for tok in record.tokens[:needed]:
            _parse_float(record, tok)
        self.indices = [_parse_int(record, tok) for tok in record.tokens[needed:]]
        self._mark(self.body_keyword, record)

    def _parm(self, record: Record) -> None:
        if not record.tokens:
            raise error_incomplete_record("parm", 1, 0, record.location)
        axis = record.tokens[0]
        if axis in AXES[self.kind]:
            self.knots[axis] = [_parse_float(record, tok) for tok in record.tokens[1:]]
            self._mark(f"parm {axis}", record)
        self._mark("parm", record)

    # --- validation ---

    def require_sections(self) -> None:
        """Raise :class:`MissingSectionError` for the first absent section."""
        for section in ("cstype", "deg", self.body_keyword, "parm"):
            if section not in self.seen:
                raise error_missing_section(section, self.location())
        for axis in AXES[self.kind]:
            if f"parm {axis}" not in self.seen:
                raise error_missing_section("parm", self.location(), detail=axis)

    def knot_vector(self, axis: str) -> List[float]:
        return list(self.knots[axis])


def accumulate(kind: str, records: Iterable[Record], filename: Optional[str] = None) -> SectionAccumulator:
    """Scan ``records`` and check that every required section was seen."""
    acc = SectionAccumulator(kind, filename=filename).consume(records)
    acc.require_sections()
    return acc


__all__ = [
    'CURVE',
    'SURFACE',
    'SectionAccumulator',
    'accumulate',
]
