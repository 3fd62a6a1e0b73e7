"""Property tests for normalization over random fragment sets."""

from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from covcollection import CoverageColor, coverage, errors, fragment, validate


@composite
def fragments(draw, allow_empty=True):
    start = draw(st.integers(min_value=0, max_value=60))
    min_length = 0 if allow_empty else 1
    length = draw(st.integers(min_value=min_length, max_value=25))
    color = draw(st.sampled_from(CoverageColor))
    notes = draw(st.sets(st.sampled_from(["a", "b", "c", "d", "e"]), max_size=2))
    return fragment(start, start + length - 1, color, *notes)


@composite
def collections(draw, allow_empty=True):
    return coverage(*draw(st.lists(fragments(allow_empty=allow_empty), max_size=10)))


def snapshot(c):
    return [(f.flat_start, f.flat_end, f.color, frozenset(f.notes)) for f in c]


@given(collections())
def test_normalized_collection_has_no_collisions(c):
    c.normalize()
    items = list(c)
    for i, a in enumerate(items):
        assert a.length > 0
        assert a.collection is c
        for b in items[i + 1:]:
            assert not a.is_collision_with(b)
    assert errors(validate(c)) == []


@given(collections())
def test_normalize_twice_changes_nothing(c):
    c.normalize()
    before = snapshot(c)
    c.normalize()
    assert snapshot(c) == before


@given(collections())
def test_stat_matches_items(c):
    c.normalize()
    stat = c.stat
    assert stat.total == len(c)
    assert stat.covered == sum(1 for f in c if f.color is CoverageColor.GREEN)
    assert stat.covered + stat.uncovered == stat.total


@given(collections(allow_empty=False))
def test_notes_survive_normalization(c):
    notes = set().union(*(f.notes for f in c))
    c.normalize()
    assert set().union(*(f.notes for f in c)) == notes


@given(collections(allow_empty=False))
def test_normalization_never_invents_coverage(c):
    original = [(f.flat_start, f.flat_end, f.color) for f in c]
    c.normalize()
    for f in c:
        for offset in range(f.flat_start, f.flat_end + 1):
            assert any(
                start <= offset <= end and color == f.color
                for start, end, color in original
            )


@given(collections(), collections())
def test_merge_never_shares_fragments(left, right):
    theirs = list(right)
    left.merge(right)
    assert all(f not in right for f in left)
    assert list(right) == theirs
    assert all(f.collection is right for f in right)
