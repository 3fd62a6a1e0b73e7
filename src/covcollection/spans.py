from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Position:
    """Line/column position in a source file.

    The column is optional; producers working in line mode leave it unset and
    it then counts as column 0.
    """

    line: int
    column: Optional[int] = None

    @property
    def column_or_zero(self) -> int:
        return self.column or 0

    def __str__(self) -> str:
        if self.column is None:
            return str(self.line)
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class FlatSpan:
    """Inclusive range [start, end] of flat offsets.

    A span with end < start is empty. Offsets may be negative; producers
    decide where the flat coordinate space starts.
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def is_empty(self) -> bool:
        return self.length <= 0

    def overlaps(self, other: FlatSpan) -> bool:
        return not (self.end < other.start or other.end < self.start)

    def merge(self, other: Optional[FlatSpan]) -> FlatSpan:
        if other is None:
            return self
        return FlatSpan(min(self.start, other.start), max(self.end, other.end))

    def __str__(self) -> str:  # debug-friendly
        return f"[{self.start}, {self.end}]"
