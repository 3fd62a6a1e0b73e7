from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterator, KeysView, List, Optional, Tuple

from .colors import CoverageColor
from .errors import FrozenViolation, OwnershipConflict, PreconditionViolation
from .fragments import Fragment, FragmentDump

logger = logging.getLogger(__name__)


class CollectionState(Enum):
    IDLE = auto()
    FROZEN = auto()


@dataclass(frozen=True, slots=True)
class CollectionStat:
    covered: int
    uncovered: int
    total: int


class CoverageCollection:
    """Set of coverage fragments that can be normalized into a partition.

    Fragments may overlap after `add_item` or `merge`; `normalize` resolves
    every overlap so the worse color wins the shared range and equal colors
    are joined. Notes of discarded fragments move to a surviving neighbour.

    Iteration follows insertion order, which keeps normalization
    deterministic. Cached views are tagged with the mutation epoch they were
    computed at.
    """

    _items: Dict[Fragment, None]
    _state: CollectionState
    _epoch: int
    _stat: Optional[Tuple[int, CollectionStat]]
    _max_column: Optional[Tuple[int, int]]

    def __init__(self) -> None:
        self._items = {}
        self._state = CollectionState.IDLE
        self._epoch = 0
        self._stat = None
        self._max_column = None

    @property
    def state(self) -> CollectionState:
        return self._state

    @property
    def frozen(self) -> bool:
        return self._state is CollectionState.FROZEN

    @property
    def items(self) -> KeysView[Fragment]:
        return self._items.keys()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._items)

    def __contains__(self, fragment: object) -> bool:
        return fragment in self._items

    def __repr__(self) -> str:
        frags = ", ".join(str(f) for f in self._items)
        return f"CoverageCollection({frags})"

    def add_item(self, fragment: Fragment) -> None:
        self._check_frozen()
        self._add_item(fragment)

    def remove_item(self, fragment: Fragment) -> None:
        self._check_frozen()
        self._remove_item(fragment)

    def merge(self, other: CoverageCollection) -> CoverageCollection:
        """Add clones of all fragments of `other`. Overlaps are left for `normalize`."""
        self._check_frozen()
        for f in list(other.items):
            self._add_item(f.clone())
        return self

    def dump(self) -> List[FragmentDump]:
        return [f.dump() for f in self._items]

    def freeze(self) -> None:
        self._check_frozen()
        self._state = CollectionState.FROZEN
        self._max_column = None

    def unfreeze(self) -> None:
        if self.frozen:
            self._state = CollectionState.IDLE
            self._max_column = None

    def normalize(self) -> None:
        """Resolve collisions one pair at a time until none remain.

        Not re-entrant: raises FrozenViolation when the collection is already
        frozen. The collection is unfrozen again on return, also on error.
        """
        self.freeze()
        self._epoch += 1
        steps = 0
        try:
            steps += self._drop_degenerate()
            while True:
                pair = self._find_collision()
                if pair is None:
                    break
                self._fix_collision(*pair)
                steps += 1
        finally:
            self.unfreeze()
        logger.debug("normalized collection: %d steps, %d fragments", steps, len(self._items))

    @property
    def stat(self) -> CollectionStat:
        if self._stat is not None and self._stat[0] == self._epoch:
            return self._stat[1]
        best = CoverageColor.best()
        covered = 0
        uncovered = 0
        for f in self._items:
            if f.color == best:
                covered += 1
            elif f.color > best:
                uncovered += 1
        stat = CollectionStat(covered=covered, uncovered=uncovered, total=len(self._items))
        self._stat = (self._epoch, stat)
        return stat

    @property
    def max_column(self) -> int:
        if not self.frozen:
            raise PreconditionViolation("collection must be frozen before reading max_column")
        if self._max_column is None or self._max_column[0] != self._epoch:
            value = max(
                (max(f.start.column_or_zero, f.end.column_or_zero) for f in self._items),
                default=0,
            )
            self._max_column = (self._epoch, value)
        return self._max_column[1]

    def _check_frozen(self) -> None:
        if self.frozen:
            raise FrozenViolation("collection is frozen")

    def _add_item(self, fragment: Fragment) -> None:
        if fragment.collection is not None and fragment.collection is not self:
            raise OwnershipConflict(f"fragment {fragment} already belongs to another collection")
        fragment.collection = self
        self._items[fragment] = None
        self._epoch += 1

    def _remove_item(self, fragment: Fragment) -> None:
        if fragment not in self._items:
            return
        del self._items[fragment]
        fragment.collection = None
        self._epoch += 1

    def _drop_degenerate(self) -> int:
        empty = [f for f in self._items if f.length <= 0]
        for f in empty:
            self._remove_item(f)
        return len(empty)

    def _find_collision(self) -> Optional[Tuple[Fragment, Fragment]]:
        items = list(self._items)
        # newest fragments first
        for i in range(len(items) - 1, -1, -1):
            new_item = items[i]
            for k in range(len(items) - 1, -1, -1):
                if k == i:
                    continue
                old_item = items[k]
                if new_item.is_collision_with(old_item):
                    return old_item, new_item
        return None

    def _fix_collision(self, old: Fragment, new: Fragment) -> None:
        """Resolve one colliding pair.

        Head and tail pieces split off a fragment keep its original
        start/end positions; only the flat range is truncated.
        """
        # `old` is the longer fragment; which one was added first does not matter
        if old.length < new.length:
            old, new = new, old

        if new.length <= 0:
            self._remove_item(new)
            return
        if old.length <= 0:
            self._remove_item(old)
            return

        if old.color == new.color:
            new.flat_start = min(new.flat_start, old.flat_start)
            new.flat_end = max(new.flat_end, old.flat_end)
            new.add_note_from(old)
            self._remove_item(old)
        elif old.color > new.color:
            # old wins the shared range, keep what is left of new
            if new.flat_start > old.flat_start:
                new.flat_start = old.flat_end + 1
            elif new.flat_end > old.flat_start:
                new.flat_end = old.flat_start - 1
            else:
                # line mode: both sit on the same position
                self._remove_item(new)
                old.add_note_from(new)
                return
            self._epoch += 1
            if new.length <= 0:
                old.add_note_from(new)
                self._remove_item(new)
        else:
            # new wins the shared range, keep what is left of old on each side
            self._remove_item(old)
            kept = False
            if old.flat_start < new.flat_start:
                head = old.clone()
                head.flat_end = new.flat_start - 1
                if head.length > 0:
                    self._add_item(head)
                    kept = True
            if old.flat_end > new.flat_end:
                tail = old.clone()
                tail.flat_start = new.flat_end + 1
                if tail.length > 0:
                    self._add_item(tail)
                    kept = True
            if not kept:
                new.add_note_from(old)


def coverage(*fragments: Fragment) -> CoverageCollection:
    c = CoverageCollection()
    for f in fragments:
        c.add_item(f)
    return c
