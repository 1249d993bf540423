"""
Exceptions raised by the OBJ freeform codec.

Error code ranges:
- E1xx: Record parse errors (malformed numbers, incomplete records)
- E2xx: Missing required sections
- E3xx: Data corruption detected while building geometry
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class RecordLocation:
    """Position of a record in an OBJ stream."""
    line: Optional[int] = None      # 1-indexed physical line
    filename: Optional[str] = None

    def __str__(self) -> str:
        name = self.filename or "<stream>"
        if self.line is None:
            return name
        return f"{name}:{self.line}"


@dataclass
class Diagnostic:
    """A single error message with its code and location."""
    code: str                       # E101, E201, etc.
    message: str                    # Human-readable message
    location: RecordLocation = field(default_factory=RecordLocation)
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic for display."""
        parts = [f"{self.location}: error[{self.code}]: {self.message}"]
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)


class ObjError(ValueError):
    """Base exception for OBJ freeform format errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class ObjParseError(ObjError):
    """A record could not be parsed (E1xx)."""
    pass


class MissingSectionError(ObjError):
    """A required section never appeared in the file (E2xx)."""

    def __init__(self, diagnostic: Diagnostic, section: str):
        self.section = section
        super().__init__(diagnostic)


class CorruptDataError(ObjError):
    """Parsed records are inconsistent with each other (E3xx)."""
    pass


# --- Parse error codes ---

def error_bad_number(keyword: str, token: str, expected: str,
                     location: RecordLocation) -> ObjParseError:
    """E101: Token is not a valid number."""
    diag = Diagnostic(
        code="E101",
        message=f"'{keyword}' record: expected {expected}, found '{token}'",
        location=location,
    )
    return ObjParseError(diag)


def error_incomplete_record(keyword: str, needed: int, found: int,
                            location: RecordLocation) -> ObjParseError:
    """E102: Record has fewer fields than required."""
    diag = Diagnostic(
        code="E102",
        message=f"'{keyword}' line missing/incomplete: expected at least {needed} "
                f"field(s), found {found}",
        location=location,
    )
    return ObjParseError(diag)


# --- Missing section codes ---

_SECTION_HINTS = {
    "cstype": "add a 'cstype bspline' or 'cstype rat bspline' line",
    "deg": "add a 'deg' line giving the degree of each parametric direction",
    "curv": "add a 'curv' line with domain bounds and control point indices",
    "surf": "add a 'surf' line with domain bounds and control point indices",
    "parm": "add 'parm u' (and 'parm v' for surfaces) lines with the knot vectors",
}


def error_missing_section(section: str, location: RecordLocation,
                          detail: Optional[str] = None) -> MissingSectionError:
    """E201: Required section absent."""
    label = f"{section} {detail}" if detail else section
    hints = [_SECTION_HINTS[section]] if section in _SECTION_HINTS else []
    diag = Diagnostic(
        code="E201",
        message=f"missing {label}: '{label}' line missing/incomplete in file",
        location=location,
        hints=hints,
    )
    return MissingSectionError(diag, section)


# --- Corruption codes ---

def error_index_out_of_range(index: int, pool_size: int,
                             location: RecordLocation) -> CorruptDataError:
    """E301: Control point index does not resolve to a vertex."""
    diag = Diagnostic(
        code="E301",
        message=f"control point index {index} out of range (file defines {pool_size} vertices)",
        location=location,
        hints=["indices are 1-based and must refer to a preceding 'v' line"],
    )
    return CorruptDataError(diag)


def error_index_count(found: int, expected: int, detail: str,
                      location: RecordLocation) -> CorruptDataError:
    """E302: Index list length does not match the control point count."""
    diag = Diagnostic(
        code="E302",
        message=f"index list holds {found} entries but {detail} requires {expected}",
        location=location,
    )
    return CorruptDataError(diag)


def error_bad_knot_count(axis: str, knots: int, degree: int,
                         location: RecordLocation) -> CorruptDataError:
    """E303: Knot vector too short for the declared degree."""
    diag = Diagnostic(
        code="E303",
        message=f"knot vector along {axis} has {knots} values, too few for degree {degree}",
        location=location,
        hints=["a knot vector needs at least degree + 1 values"],
    )
    return CorruptDataError(diag)


__all__ = [
    "RecordLocation",
    "Diagnostic",
    "ObjError",
    "ObjParseError",
    "MissingSectionError",
    "CorruptDataError",
    "error_bad_number",
    "error_incomplete_record",
    "error_missing_section",
    "error_index_out_of_range",
    "error_index_count",
    "error_bad_knot_count",
]
