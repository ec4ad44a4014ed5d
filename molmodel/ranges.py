"""Inclusive integer ranges written as ``n1..n2``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

_RANGE = re.compile(r"\s*([+-]?\d+)\s*\.\s*\.\s*([+-]?\d+)\s*")


@dataclass(frozen=True)
class Range:
    """Integers from ``lo`` to ``hi``, both included."""

    lo: int
    hi: int

    def size(self) -> int:
        return self.hi - self.lo + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.lo, self.hi + 1))

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.lo <= value <= self.hi

    def __str__(self) -> str:
        return "%d..%d" % (self.lo, self.hi)


def parse_range(text: str) -> Range:
    """Range from ``"n1..n2"``; the ends are put in order."""
    m = _RANGE.fullmatch(text)
    if not m:
        raise ValueError("Range: expecting n1..n2")
    lo, hi = int(m.group(1)), int(m.group(2))
    if lo > hi:
        lo, hi = hi, lo
    return Range(lo, hi)