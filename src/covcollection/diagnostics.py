from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

from .colors import CoverageColor
from .spans import FlatSpan


class Severity(Enum):
    ERROR = auto()
    WARNING = auto()
    INFO = auto()


@dataclass(frozen=True, slots=True)
class Related:
    """Second fragment involved in a finding."""

    message: str
    span: Optional[FlatSpan]
    color: Optional[CoverageColor] = None


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Finding about a collection, located by the flat span of a fragment."""

    code: str
    message: str
    severity: Severity = Severity.ERROR
    span: Optional[FlatSpan] = None
    color: Optional[CoverageColor] = None
    related: Tuple[Related, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def with_related(self, *rels: Related) -> Diagnostic:
        return Diagnostic(
            code=self.code,
            message=self.message,
            severity=self.severity,
            span=self.span,
            color=self.color,
            related=self.related + rels,
        )


def errors(diags: Iterable[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diags if d.is_error]


def _where(span: Optional[FlatSpan], color: Optional[CoverageColor]) -> str:
    if span is None:
        return ""
    if color is None:
        return f" at {span}"
    return f" at {color.name}{span}"


def format_diagnostic(d: Diagnostic) -> str:
    lines = [f"{d.severity.name}: {d.code}{_where(d.span, d.color)}: {d.message}"]
    for r in d.related:
        lines.append(f"  note{_where(r.span, r.color)}: {r.message}")
    return "\n".join(lines)
