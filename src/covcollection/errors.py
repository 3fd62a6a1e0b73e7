"""Contract violations raised by coverage collections.

These signal programming errors in the caller, not transient faults, so there
is nothing to retry. Every guard runs before any mutation, which leaves the
collection untouched when one of these is raised.
"""
from __future__ import annotations


class CollectionError(RuntimeError):
    """Base exception for coverage collection misuse."""

    error_code: str = "COLLECTION_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FrozenViolation(CollectionError):
    """Structural mutation attempted while the collection is frozen."""

    error_code = "FROZEN"


class OwnershipConflict(CollectionError):
    """Fragment already belongs to a different collection."""

    error_code = "OWNERSHIP"


class PreconditionViolation(CollectionError):
    """View read outside of the state it requires."""

    error_code = "PRECONDITION"
