from __future__ import annotations

from typing import List

from .collection import CoverageCollection
from .diagnostics import Diagnostic, Related, Severity


def validate(collection: CoverageCollection) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    diags.extend(check_degenerate(collection))
    diags.extend(check_ownership(collection))
    diags.extend(check_collisions(collection))
    diags.extend(check_adjacent_colors(collection))
    return diags


def check_degenerate(collection: CoverageCollection) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for f in collection:
        if f.length <= 0:
            diags.append(Diagnostic(
                code="E100",
                message=f"empty fragment: flat_end {f.flat_end} precedes flat_start {f.flat_start}",
                color=f.color,
            ))
    return diags


def check_ownership(collection: CoverageCollection) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for f in collection:
        if f.collection is not collection:
            diags.append(Diagnostic(
                code="E110",
                message="fragment does not point back to the collection holding it",
                span=f.span if f.length > 0 else None,
                color=f.color,
            ))
    return diags


def check_collisions(collection: CoverageCollection) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    # empty fragments are reported by check_degenerate
    items = [f for f in collection if f.length > 0]
    for i, a in enumerate(items):
        for b in items[i + 1:]:
            if not a.is_collision_with(b):
                continue
            d = Diagnostic(
                code="E120",
                message="overlapping fragments",
                span=a.span,
                color=a.color,
            )
            diags.append(d.with_related(Related("overlaps this fragment", b.span, b.color)))
    return diags


def check_adjacent_colors(collection: CoverageCollection) -> List[Diagnostic]:
    """Report touching fragments of the same color.

    Normalization only joins overlapping fragments, so these are legal but
    could be rendered as one range.
    """
    diags: List[Diagnostic] = []
    items = sorted((f for f in collection if f.length > 0), key=lambda f: f.flat_start)
    for a, b in zip(items, items[1:]):
        if a.color == b.color and a.flat_end + 1 == b.flat_start:
            d = Diagnostic(
                code="I130",
                message="fragment touches a fragment of the same color",
                severity=Severity.INFO,
                span=a.span,
                color=a.color,
            )
            diags.append(d.with_related(Related("adjacent fragment", b.span, b.color)))
    return diags
