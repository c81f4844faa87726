"""Sparse, sorted adjacency storage for a single variable.

A :class:`Neighborhood` maps neighbor indices to quadratic biases. Entries are
held in two parallel lists sorted by neighbor index, so lookups are a binary
search and iteration is a linear scan in ascending index order. Insertion and
removal shift the tail of the lists.
"""

import numbers
import operator
from bisect import bisect_left
from itertools import islice
from typing import Iterator, List, Tuple

import numpy as np

from .exceptions import NotFoundError

__all__ = ["Neighborhood", "NeighborEntry", "as_bias_dtype"]


def as_bias_dtype(dtype) -> np.dtype:
    """Return ``dtype`` as a numpy floating dtype.

    Raises:
        TypeError: If ``dtype`` is not a floating point type.
    """
    dtype = np.dtype(dtype)
    if dtype.kind != "f":
        raise TypeError(f"bias dtype must be a floating point type, got {dtype}")
    return dtype


class NeighborEntry:
    """A ``(key, bias)`` entry of a :class:`Neighborhood` with a writable bias.

    The key is read-only. Entries refer to a position in the neighborhood, so
    they are invalidated by any insertion or removal.
    """

    __slots__ = ("_neighborhood", "_index")

    def __init__(self, neighborhood: "Neighborhood", index: int):
        self._neighborhood = neighborhood
        self._index = index

    @property
    def key(self) -> int:
        return self._neighborhood._keys[self._index]

    @property
    def bias(self):
        return self._neighborhood._biases[self._index]

    @bias.setter
    def bias(self, value) -> None:
        nbr = self._neighborhood
        nbr._biases[self._index] = nbr._dtype.type(value)

    def __iter__(self):
        yield self.key
        yield self.bias

    def __repr__(self) -> str:
        return f"NeighborEntry(key={self.key}, bias={self.bias})"


class Neighborhood:
    """Sorted sparse mapping from neighbor index to bias.

    Args:
        dtype: Floating point type used for every stored bias.

    Absence of a key means "no interaction", which is distinct from an
    explicitly stored bias of 0.

    Examples:
        >>> nbr = Neighborhood()
        >>> nbr.emplace_back(0, .5)
        >>> nbr.emplace_back(3, -3)
        >>> float(nbr.get(2)), len(nbr)
        (0.0, 2)
        >>> float(nbr.get_or_insert(2)), len(nbr)
        (0.0, 3)
        >>> [key for key, _ in nbr]
        [0, 2, 3]
    """

    __slots__ = ("_keys", "_biases", "_dtype")

    def __init__(self, dtype=np.float64):
        self._dtype = as_bias_dtype(dtype)
        self._keys: List[int] = []
        self._biases: list = []

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def _find(self, key) -> Tuple[int, bool]:
        i = bisect_left(self._keys, key)
        return i, i < len(self._keys) and self._keys[i] == key

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key) -> bool:
        return self._find(key)[1]

    def __iter__(self) -> Iterator[Tuple[int, "np.floating"]]:
        return self.items()

    def __repr__(self) -> str:
        body = ", ".join(f"{k}: {b}" for k, b in zip(self._keys, self._biases))
        return f"Neighborhood({{{body}}}, dtype={self._dtype})"

    def get(self, key, default=0):
        """Return the bias for ``key``, or ``default`` if there is none.

        A numeric ``default`` is returned as the neighborhood's dtype; any
        other object, such as ``None``, is returned unchanged. Never modifies
        the neighborhood.
        """
        i, found = self._find(key)
        if found:
            return self._biases[i]
        if isinstance(default, numbers.Number):
            return self._dtype.type(default)
        return default

    def at(self, key):
        """Return the bias for ``key``.

        Raises:
            NotFoundError: If ``key`` has no entry.
        """
        i, found = self._find(key)
        if not found:
            raise NotFoundError(f"{key!r} is not in the neighborhood")
        return self._biases[i]

    __getitem__ = at

    def get_or_insert(self, key):
        """Return the bias for ``key``, inserting an entry with bias 0 if absent.

        Unlike :meth:`get` and :meth:`at` this modifies the neighborhood when
        ``key`` is missing.
        """
        i, found = self._find(key)
        if not found:
            self._keys.insert(i, operator.index(key))
            self._biases.insert(i, self._dtype.type(0))
        return self._biases[i]

    def __setitem__(self, key, bias) -> None:
        bias = self._dtype.type(bias)
        i, found = self._find(key)
        if found:
            self._biases[i] = bias
        else:
            self._keys.insert(i, operator.index(key))
            self._biases.insert(i, bias)

    def add(self, key, bias):
        """Add ``bias`` to the entry for ``key``, creating it if absent.

        Returns:
            The accumulated bias.
        """
        i, found = self._find(key)
        if found:
            self._biases[i] = self._dtype.type(self._biases[i] + bias)
        else:
            self._keys.insert(i, operator.index(key))
            self._biases.insert(i, self._dtype.type(bias))
        return self._biases[i]

    def emplace_back(self, key, bias) -> None:
        """Append an entry without searching for its position.

        The caller must append keys in ascending order, or call :meth:`sort`
        afterwards.
        """
        self._keys.append(operator.index(key))
        self._biases.append(self._dtype.type(bias))

    def sort(self) -> None:
        """Restore ascending key order after out-of-order :meth:`emplace_back`."""
        if not self._keys:
            return
        pairs = sorted(zip(self._keys, self._biases), key=operator.itemgetter(0))
        self._keys = [k for k, _ in pairs]
        self._biases = [b for _, b in pairs]

    def erase(self, key) -> bool:
        """Remove the entry for ``key`` if present.

        Returns:
            Whether an entry was removed.
        """
        i, found = self._find(key)
        if found:
            del self._keys[i]
            del self._biases[i]
        return found

    def __delitem__(self, key) -> None:
        if not self.erase(key):
            raise NotFoundError(f"{key!r} is not in the neighborhood")

    def truncate(self, stop) -> None:
        """Remove every entry whose key is ``>= stop``."""
        i = bisect_left(self._keys, stop)
        del self._keys[i:]
        del self._biases[i:]

    def clear(self) -> None:
        self._keys.clear()
        self._biases.clear()

    def items(self, start=0) -> Iterator[Tuple[int, "np.floating"]]:
        """Iterate over ``(key, bias)`` pairs with ``key >= start`` in key order."""
        i = bisect_left(self._keys, start) if start else 0
        return zip(islice(self._keys, i, None), islice(self._biases, i, None))

    def keys(self) -> Iterator[int]:
        return iter(self._keys)

    def values(self) -> Iterator["np.floating"]:
        return iter(self._biases)

    def entries(self, start=0) -> Iterator[NeighborEntry]:
        """Iterate over entries whose ``bias`` can be assigned in place.

        Keys must not be added or removed while iterating.
        """
        i = bisect_left(self._keys, start) if start else 0
        for j in range(i, len(self._keys)):
            yield NeighborEntry(self, j)

    def copy(self) -> "Neighborhood":
        new = type(self)(self._dtype)
        new._keys = list(self._keys)
        new._biases = list(self._biases)
        return new
