"""covcollection: colored coverage fragments and overlap normalization."""

from .colors import CoverageColor
from .spans import Position, FlatSpan
from .fragments import Fragment, FragmentDump, fragment
from .collection import (
    CoverageCollection,
    CollectionStat,
    CollectionState,
    coverage,
)
from .errors import (
    CollectionError,
    FrozenViolation,
    OwnershipConflict,
    PreconditionViolation,
)
from .diagnostics import Diagnostic, Related, Severity, errors, format_diagnostic
from .validation import validate
__all__ = [
    "CoverageColor",
    "Position",
    "FlatSpan",
    "Fragment",
    "FragmentDump",
    "fragment",
    "CoverageCollection",
    "CollectionStat",
    "CollectionState",
    "coverage",
    "CollectionError",
    "FrozenViolation",
    "OwnershipConflict",
    "PreconditionViolation",
    "Diagnostic",
    "Related",
    "Severity",
    "errors",
    "format_diagnostic",
    "validate",
]
