from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Optional, Set

from .colors import CoverageColor
from .spans import FlatSpan, Position

if TYPE_CHECKING:
    from .collection import CoverageCollection


@dataclass(frozen=True, slots=True)
class FragmentDump:
    """Structural snapshot of a fragment, without its owner."""

    start: Position
    end: Position
    flat_start: int
    flat_end: int
    color: CoverageColor
    notes: FrozenSet[str] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": {"line": self.start.line, "column": self.start.column},
            "end": {"line": self.end.line, "column": self.end.column},
            "flatStart": self.flat_start,
            "flatEnd": self.flat_end,
            "color": self.color.name,
            "notes": sorted(self.notes),
        }


# Identity equality: fragments are set members whose ranges change in place.
@dataclass(eq=False, slots=True)
class Fragment:
    """One colored range of a source file.

    `flat_start` and `flat_end` are inclusive offsets in the flattened
    coordinate space; `start` and `end` keep the line/column view of the
    same range for rendering. A fragment with `flat_end < flat_start` is
    degenerate and has no length.
    """

    start: Position
    end: Position
    flat_start: int
    flat_end: int
    color: CoverageColor
    notes: Set[str] = field(default_factory=set)
    collection: Optional[CoverageCollection] = field(default=None, repr=False)

    @property
    def length(self) -> int:
        return self.flat_end - self.flat_start + 1

    @property
    def span(self) -> FlatSpan:
        return FlatSpan(self.flat_start, self.flat_end)

    def clone(self) -> Fragment:
        return Fragment(
            start=self.start,
            end=self.end,
            flat_start=self.flat_start,
            flat_end=self.flat_end,
            color=self.color,
            notes=set(self.notes),
        )

    def is_collision_with(self, other: Fragment) -> bool:
        return not (self.flat_end < other.flat_start or other.flat_end < self.flat_start)

    def add_note_from(self, other: Fragment) -> None:
        self.notes |= other.notes

    def dump(self) -> FragmentDump:
        return FragmentDump(
            start=self.start,
            end=self.end,
            flat_start=self.flat_start,
            flat_end=self.flat_end,
            color=self.color,
            notes=frozenset(self.notes),
        )

    def __str__(self) -> str:
        return f"{self.color.name}[{self.flat_start}, {self.flat_end}]"


def fragment(
    flat_start: int,
    flat_end: int,
    color: CoverageColor,
    *notes: str,
    start: Optional[Position] = None,
    end: Optional[Position] = None,
) -> Fragment:
    return Fragment(
        start=start if start is not None else Position(0),
        end=end if end is not None else Position(0),
        flat_start=flat_start,
        flat_end=flat_end,
        color=color,
        notes=set(notes),
    )
