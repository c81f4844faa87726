"""Tests for the sorted sparse Neighborhood."""

import numpy as np
import pytest

from bqm_core.exceptions import NotFoundError
from bqm_core.neighborhood import Neighborhood, as_bias_dtype


@pytest.fixture(params=[np.float32, np.float64])
def neighborhood(request):
    """Neighborhood with entries 0 -> .5, 1 -> 1.5, 3 -> -3."""
    nbr = Neighborhood(request.param)
    nbr.emplace_back(0, .5)
    nbr.emplace_back(1, 1.5)
    nbr.emplace_back(3, -3)
    return nbr


class TestLookup:
    """Strict and non-strict lookups."""

    def test_at(self, neighborhood):
        assert len(neighborhood) == 3
        assert neighborhood.at(0) == .5
        assert neighborhood.at(1) == 1.5
        assert neighborhood.at(3) == -3

    def test_at_missing(self, neighborhood):
        with pytest.raises(NotFoundError):
            neighborhood.at(2)
        assert len(neighborhood) == 3

    def test_getitem_is_strict(self, neighborhood):
        assert neighborhood[1] == 1.5
        with pytest.raises(KeyError):
            neighborhood[2]
        assert len(neighborhood) == 3

    def test_get(self, neighborhood):
        assert neighborhood.get(0) == .5
        assert neighborhood.get(1) == 1.5
        assert neighborhood.get(1, 2) == 1.5
        assert neighborhood.get(2) == 0
        assert neighborhood.get(2, 1.5) == 1.5
        assert neighborhood.at(3) == -3
        assert len(neighborhood) == 3

    def test_get_non_numeric_default(self, neighborhood):
        assert neighborhood.get(2, None) is None
        sentinel = object()
        assert neighborhood.get(2, sentinel) is sentinel
        assert neighborhood.get(0, None) == .5
        assert len(neighborhood) == 3

    def test_contains(self, neighborhood):
        assert 3 in neighborhood
        assert 2 not in neighborhood

    def test_biases_use_dtype(self, neighborhood):
        assert neighborhood.at(0).dtype == neighborhood.dtype
        assert neighborhood.get(2).dtype == neighborhood.dtype


class TestMutation:
    """Insertion, accumulation and removal."""

    def test_get_or_insert(self, neighborhood):
        assert neighborhood.get_or_insert(0) == .5
        assert neighborhood.get_or_insert(1) == 1.5
        assert neighborhood.get_or_insert(2) == 0
        assert neighborhood.get_or_insert(3) == -3
        assert len(neighborhood) == 4
        assert list(neighborhood.keys()) == [0, 1, 2, 3]

    def test_add(self, neighborhood):
        neighborhood.add(0, 7)
        neighborhood.add(2, -3)

        assert neighborhood.at(0) == 7.5
        assert neighborhood.at(2) == -3
        assert list(neighborhood.keys()) == [0, 1, 2, 3]

    def test_setitem(self, neighborhood):
        neighborhood[5] = 2
        neighborhood[1] = 0
        neighborhood[2] = 4

        assert list(neighborhood.items()) == [(0, .5), (1, 0), (2, 4), (3, -3), (5, 2)]

    def test_explicit_zero_is_kept(self, neighborhood):
        neighborhood[2] = 0
        assert 2 in neighborhood
        assert neighborhood.at(2) == 0

    def test_erase(self, neighborhood):
        assert neighborhood.erase(1)
        assert not neighborhood.erase(2)
        assert list(neighborhood.keys()) == [0, 3]

    def test_delitem_missing(self, neighborhood):
        with pytest.raises(NotFoundError):
            del neighborhood[2]
        del neighborhood[3]
        assert len(neighborhood) == 2

    def test_truncate(self, neighborhood):
        neighborhood.truncate(2)
        assert list(neighborhood.keys()) == [0, 1]
        neighborhood.truncate(0)
        assert len(neighborhood) == 0

    def test_sort_after_unordered_emplace(self):
        nbr = Neighborhood()
        nbr.emplace_back(4, 1)
        nbr.emplace_back(0, 2)
        nbr.emplace_back(2, 3)
        nbr.sort()

        assert list(nbr) == [(0, 2), (2, 3), (4, 1)]
        assert nbr.at(2) == 3

    def test_clear(self, neighborhood):
        neighborhood.clear()
        assert len(neighborhood) == 0
        assert list(neighborhood) == []


class TestIteration:
    """Ordered iteration, read-only and writable."""

    def test_iter(self, neighborhood):
        assert list(neighborhood) == [(0, .5), (1, 1.5), (3, -3)]

    def test_items(self, neighborhood):
        pairs = list(neighborhood.items())
        assert [key for key, _ in pairs] == [0, 1, 3]
        assert [bias for _, bias in pairs] == [.5, 1.5, -3]

    def test_items_from_start(self, neighborhood):
        assert list(neighborhood.items(1)) == [(1, 1.5), (3, -3)]
        assert list(neighborhood.items(2)) == [(3, -3)]
        assert list(neighborhood.items(4)) == []

    def test_values(self, neighborhood):
        assert list(neighborhood.values()) == [.5, 1.5, -3]

    def test_modify_through_entries(self, neighborhood):
        entries = neighborhood.entries()

        entry = next(entries)
        entry.bias = 18
        assert neighborhood.at(0) == 18

        entry = next(entries)
        entry.bias = -48
        assert neighborhood.at(1) == -48

        entry = next(entries)
        entry.bias += 1
        assert neighborhood.at(3) == -2

    def test_entry_key_is_read_only(self, neighborhood):
        entry = next(neighborhood.entries())
        with pytest.raises(AttributeError):
            entry.key = 5

    def test_entry_unpacks(self, neighborhood):
        assert [tuple(entry) for entry in neighborhood.entries(1)] == [(1, 1.5), (3, -3)]


def test_copy_is_independent(neighborhood):
    """Copies do not share storage."""
    other = neighborhood.copy()
    other[0] = 100
    other.erase(3)

    assert neighborhood.at(0) == .5
    assert 3 in neighborhood
    assert other.dtype == neighborhood.dtype


@pytest.mark.parametrize("dtype", [np.int64, np.bool_, object])
def test_rejects_non_float_dtype(dtype):
    with pytest.raises(TypeError):
        as_bias_dtype(dtype)
    with pytest.raises(TypeError):
        Neighborhood(dtype)
