"""Tests for the Setsum accumulator: identity, insert/remove, merge."""
from __future__ import annotations

import copy

import pytest

from setsum.accumulator.hasher import LANE_COUNT, LANE_MASK, hash_element
from setsum.accumulator.setsum import Setsum


class TestIdentity:
    """The empty multiset."""

    def test_new_setsum_is_zero(self):
        s = Setsum()
        assert s.lanes == (0,) * LANE_COUNT
        assert s.is_identity()
        assert s.hexdigest() == "0" * 64

    def test_identity_constructor(self):
        assert Setsum.identity() == Setsum()

    def test_identity_merged_with_itself(self):
        assert (Setsum() + Setsum()).hexdigest() == Setsum().hexdigest()

    def test_insert_all_of_nothing(self):
        s = Setsum()
        s.insert_all([])
        assert s.is_identity()


class TestInsertRemove:
    """Single-element updates and their inverses."""

    def test_insert_adds_element_lanes(self):
        s = Setsum()
        s.insert(b"A")
        assert s.lanes == hash_element(b"A")
        assert not s.is_identity()

    def test_remove_undoes_insert(self):
        s = Setsum.of([b"x", b"y"])
        before = s.copy()
        s.insert(b"z")
        s.remove(b"z")
        assert s == before

    def test_insert_seven_remove_seven(self):
        values = [b"this is the %s value" % w for w in (
            b"first", b"second", b"third", b"fourth",
            b"fifth", b"sixth", b"seventh",
        )]
        s = Setsum()
        s.insert_all(values)
        s.remove_all(reversed(values))
        assert s == Setsum()

    def test_remove_before_insert_cancels(self):
        """Removing first leaves a placeholder the later insert consumes."""
        s = Setsum()
        s.remove(b"ghost")
        assert not s.is_identity()
        s.insert(b"ghost")
        assert s.is_identity()

    def test_replace_is_remove_then_insert(self):
        s = Setsum.of([b"old", b"other"])
        s.replace(b"old", b"new")
        assert s == Setsum.of([b"new", b"other"])


class TestMultisetSemantics:
    """Repeated elements are counted, not deduplicated."""

    def test_double_insert_differs_from_single(self):
        once = Setsum.of([b"dup"])
        twice = Setsum.of([b"dup", b"dup"])
        assert once != twice

    def test_double_insert_lanes_are_doubled(self):
        twice = Setsum.of([b"dup", b"dup"])
        expected = tuple((2 * lane) & LANE_MASK for lane in hash_element(b"dup"))
        assert twice.lanes == expected

    def test_one_remove_after_double_insert(self):
        s = Setsum.of([b"dup", b"dup"])
        s.remove(b"dup")
        assert s == Setsum.of([b"dup"])


class TestWraparound:
    """Lane arithmetic wraps modulo 2**64."""

    def test_addition_wraps(self):
        top = Setsum.from_lanes([LANE_MASK] * LANE_COUNT)
        one = Setsum.from_lanes([1] * LANE_COUNT)
        assert (top + one).is_identity()

    def test_subtraction_wraps(self):
        one = Setsum.from_lanes([1, 0, 0, 0])
        assert (Setsum() - one).lanes == (LANE_MASK, 0, 0, 0)

    def test_negation_is_inverse(self):
        s = Setsum.of([b"a", b"b", b"c"])
        assert (s + -s).is_identity()
        assert -Setsum() == Setsum()


class TestFromLanes:
    """Building a setsum from raw lane values."""

    def test_roundtrip(self):
        assert Setsum.from_lanes([1, 2, 3, 4]).lanes == (1, 2, 3, 4)

    def test_wrong_count(self):
        with pytest.raises(ValueError, match="Expected 4 lanes"):
            Setsum.from_lanes([1, 2, 3])

    def test_non_integer_lane(self):
        with pytest.raises(ValueError, match="not an integer"):
            Setsum.from_lanes([1.5, 0, 0, 0])
        with pytest.raises(ValueError, match="not an integer"):
            Setsum.from_lanes(["1", 0, 0, 0])

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            Setsum.from_lanes([0, 0, 0, LANE_MASK + 1])
        with pytest.raises(ValueError):
            Setsum.from_lanes([-1, 0, 0, 0])


class TestMerge:
    """Combining and subtracting whole setsums."""

    def test_merge_in_place(self):
        a = Setsum.of([b"1", b"2"])
        b = Setsum.of([b"3"])
        a.merge(b)
        assert a == Setsum.of([b"1", b"2", b"3"])
        assert b == Setsum.of([b"3"])

    def test_unmerge_in_place(self):
        a = Setsum.of([b"1", b"2", b"3"])
        a.unmerge(Setsum.of([b"2"]))
        assert a == Setsum.of([b"1", b"3"])

    def test_merge_with_self(self):
        a = Setsum.of([b"x"])
        a.merge(a)
        assert a == Setsum.of([b"x", b"x"])

    def test_operators_return_new_values(self):
        a = Setsum.of([b"1"])
        b = Setsum.of([b"2"])
        total = a + b
        assert total == Setsum.of([b"1", b"2"])
        assert a == Setsum.of([b"1"])
        assert total - b == a

    def test_augmented_assignment_mutates(self):
        a = Setsum.of([b"1"])
        alias = a
        a += Setsum.of([b"2"])
        assert alias is a
        assert a == Setsum.of([b"1", b"2"])
        a -= Setsum.of([b"1"])
        assert a == Setsum.of([b"2"])

    def test_remove_two_sets(self):
        first = [b"one", b"two", b"three", b"four"]
        second = [b"five", b"six", b"seven"]
        everything = Setsum.of(first + second)
        assert (everything - Setsum.of(first) - Setsum.of(second)).is_identity()

    def test_add_rejects_other_types(self):
        with pytest.raises(TypeError):
            Setsum() + b"raw bytes"  # type: ignore[operator]


class TestValueSemantics:
    """Setsums behave as mutable values."""

    def test_copy_is_independent(self):
        a = Setsum.of([b"x"])
        b = a.copy()
        b.insert(b"y")
        assert a == Setsum.of([b"x"])
        assert a != b

    def test_copy_module(self):
        a = Setsum.of([b"x"])
        b = copy.copy(a)
        assert a == b and a is not b

    def test_lanes_is_a_snapshot(self):
        a = Setsum.of([b"x"])
        lanes = a.lanes
        a.insert(b"y")
        assert lanes == hash_element(b"x")

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Setsum())

    def test_not_equal_to_other_types(self):
        assert Setsum() != "0" * 64
        assert Setsum() != (0, 0, 0, 0)

    def test_subclass_preserved(self):
        class Tagged(Setsum):
            __slots__ = ()

        t = Tagged.of([b"x"])
        assert type(t.copy()) is Tagged
        assert type(-t) is Tagged
        assert type(t + Setsum()) is Tagged
        assert type(copy.copy(t)) is Tagged

    def test_repr_shows_digest(self):
        s = Setsum.of([b"x"])
        assert repr(s) == f"Setsum('{s.hexdigest()}')"
