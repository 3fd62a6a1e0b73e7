from __future__ import annotations

from enum import IntEnum


class CoverageColor(IntEnum):
    """Coverage classification of a fragment.

    Higher values mean worse coverage and win when fragments overlap.
    """

    GREEN = 1  # fully covered
    YELLOW = 2  # partially covered
    RED = 3  # not covered

    @classmethod
    def best(cls) -> CoverageColor:
        return cls.GREEN
