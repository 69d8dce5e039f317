"""
utils/ranges.py

Range header parsing for single byte ranges ("bytes=start-end").
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

# Digits only: int() alone would accept "+5", " 5" and "1_000".
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ByteRange:
    """Closed interval [start, end] inside a resource."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, total_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{total_size}"


@dataclass(frozen=True)
class NoRange:
    """No Range header: serve the whole resource."""


@dataclass(frozen=True)
class Satisfiable:
    byte_range: ByteRange


@dataclass(frozen=True)
class Unsatisfiable:
    reason: str


RangeOutcome = Union[NoRange, Satisfiable, Unsatisfiable]


def _parse_offset(text: str) -> Optional[int]:
    text = text.strip()
    if not _DIGITS.fullmatch(text):
        return None
    return int(text)


def parse_range_header(range_header: Optional[str], total_size: int) -> RangeOutcome:
    """
    Turn a raw Range header and the resource size into a RangeOutcome.

    Only "bytes=<start>-" and "bytes=<start>-<end>" are understood. The
    suffix form ("bytes=-500") and multiple ranges are reported as
    Unsatisfiable, as is any end past the last byte. A header that is
    present but unusable is never downgraded to NoRange.
    """
    if range_header is None:
        return NoRange()
    if total_size <= 0:
        return Unsatisfiable("empty resource")

    unit, sep, spec = range_header.strip().partition("=")
    if not sep or unit.strip().lower() != "bytes":
        return Unsatisfiable("unsupported range unit")
    if "," in spec:
        return Unsatisfiable("multiple ranges")

    start_str, sep, end_str = spec.partition("-")
    if not sep:
        return Unsatisfiable("missing '-' separator")

    start = _parse_offset(start_str)
    if start is None:
        return Unsatisfiable("malformed range start")

    if end_str.strip():
        end = _parse_offset(end_str)
        if end is None:
            return Unsatisfiable("malformed range end")
    else:
        end = total_size - 1

    if start > total_size - 1:
        return Unsatisfiable("range start past end of resource")
    if start > end:
        return Unsatisfiable("range start after end")
    if end > total_size - 1:
        return Unsatisfiable("range past end of resource")

    return Satisfiable(ByteRange(start, end))
