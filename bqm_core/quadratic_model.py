"""Binary quadratic model with per-variable sparse adjacency.

The model stores

    E(x) = offset + sum_i a_i x_i + sum_{i<j} b_ij x_i x_j

over variables ``0 .. n-1`` that are either all SPIN (``{-1, +1}``) or all
BINARY (``{0, 1}``). Each interaction is kept in the :class:`Neighborhood` of
both of its endpoints.
"""

import logging
import operator
from typing import Iterator, Tuple

import numpy as np

from .exceptions import (
    DomainMismatchError,
    IndexOutOfRangeError,
    NotFoundError,
    SelfLoopError,
)
from .neighborhood import Neighborhood, as_bias_dtype
from .vartypes import BINARY, Vartype, VartypeLike, as_vartype

__all__ = ["BinaryQuadraticModel"]

logger = logging.getLogger(__name__)


def _as_size(n) -> int:
    try:
        n = operator.index(n)
    except TypeError:
        raise TypeError(f"number of variables must be an integer, got {n!r}") from None
    if n < 0:
        raise ValueError(f"number of variables must be non-negative, got {n}")
    return n


class BinaryQuadraticModel:
    """Sparse quadratic objective over SPIN or BINARY variables.

    Args:
        vartype: Variable domain, see :func:`~bqm_core.vartypes.as_vartype`.
        num_variables: Number of variables to create, all with zero bias.
        dtype: Floating point type of every bias, the offset and energies.

    Examples:
        >>> bqm = BinaryQuadraticModel("BINARY", 3)
        >>> bqm.set_linear(0, 1.5)
        >>> bqm.set_quadratic(0, 2, -2)
        >>> float(bqm.energy([1, 0, 1]))
        -0.5
    """

    def __init__(
        self,
        vartype: VartypeLike,
        num_variables: int = 0,
        dtype=np.float64,
    ) -> None:
        self._vartype = as_vartype(vartype)
        self._dtype = as_bias_dtype(dtype)

        n = _as_size(num_variables)
        self._linear = np.zeros(n, dtype=self._dtype)
        self._adj = [Neighborhood(self._dtype) for _ in range(n)]
        self._offset = self._dtype.type(0)

    @classmethod
    def from_dense(
        cls, Q, vartype: VartypeLike, dtype=None
    ) -> "BinaryQuadraticModel":
        """Build a model from a dense square bias matrix.

        Off-diagonal pairs are combined as ``Q[i, j] + Q[j, i]``; pairs whose
        sum is zero are not stored. Diagonal entries go into the linear biases
        for BINARY models (``x * x == x``) and into the offset for SPIN
        models (``s * s == 1``).

        Args:
            Q: Array-like of shape ``(n, n)``.
            vartype: Variable domain of the new model.
            dtype: Bias type. Defaults to ``Q``'s dtype when it is floating
                point, otherwise ``float64``.

        Returns:
            A new model with ``n`` variables.

        Raises:
            ValueError: If ``Q`` is not square.
        """
        Q = np.asarray(Q)
        if Q.size == 0:
            Q = Q.reshape(0, 0)
        if Q.ndim != 2 or Q.shape[0] != Q.shape[1]:
            raise ValueError(f"Q must be a square 2-D array, got shape {Q.shape}")
        if dtype is None:
            dtype = Q.dtype if Q.dtype.kind == "f" else np.float64

        n = Q.shape[0]
        bqm = cls(vartype, n, dtype=dtype)
        Q = Q.astype(bqm.dtype, copy=False)

        diagonal = np.diagonal(Q)
        if bqm.vartype is BINARY:
            bqm._linear += diagonal
        else:
            bqm._offset = bqm.dtype.type(diagonal.sum())

        # row-major order keeps every neighborhood sorted under emplace_back
        upper = np.triu(Q + Q.T, k=1)
        rows, cols = np.nonzero(upper)
        for u, v in zip(rows.tolist(), cols.tolist()):
            bias = upper[u, v]
            bqm._adj[u].emplace_back(v, bias)
            bqm._adj[v].emplace_back(u, bias)

        logger.debug(
            f"Built {bqm.vartype.name} model from dense {n}x{n} matrix "
            f"with {len(rows)} interactions"
        )
        return bqm

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def vartype(self) -> Vartype:
        return self._vartype

    @property
    def num_variables(self) -> int:
        return len(self._adj)

    @property
    def num_interactions(self) -> int:
        """Number of interactions, each unordered pair counted once."""
        return sum(len(nbr) for nbr in self._adj) // 2

    @property
    def offset(self):
        return self._offset

    @offset.setter
    def offset(self, value) -> None:
        self._offset = self._dtype.type(value)

    def __len__(self) -> int:
        return len(self._adj)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._vartype.name}, "
            f"num_variables={self.num_variables}, "
            f"num_interactions={self.num_interactions}, "
            f"dtype={self._dtype})"
        )

    def _index(self, v) -> int:
        try:
            v = operator.index(v)
        except TypeError:
            raise TypeError(f"variable index must be an integer, got {v!r}") from None
        if not 0 <= v < len(self._adj):
            raise IndexOutOfRangeError(
                f"variable {v} out of range [0, {len(self._adj)})"
            )
        return v

    # linear

    def linear(self, v):
        """Return the linear bias of variable ``v``."""
        return self._linear[self._index(v)]

    def set_linear(self, v, bias) -> None:
        self._linear[self._index(v)] = bias

    def add_linear(self, v, bias) -> None:
        self._linear[self._index(v)] += bias

    # quadratic

    def quadratic(self, u, v):
        """Return the bias between ``u`` and ``v``, or 0 if they do not interact."""
        u, v = self._index(u), self._index(v)
        if u == v:
            return self._dtype.type(0)
        return self._adj[u].get(v)

    def quadratic_at(self, u, v):
        """Return the bias between ``u`` and ``v``.

        Raises:
            NotFoundError: If there is no explicit interaction.
        """
        u, v = self._index(u), self._index(v)
        if u != v and v in self._adj[u]:
            return self._adj[u].at(v)
        raise NotFoundError(f"no interaction between {u} and {v}")

    def _set_edge(self, u: int, v: int, bias) -> None:
        # the only writer of interactions, keeps both neighborhoods identical
        bias = self._dtype.type(bias)
        self._adj[u][v] = bias
        self._adj[v][u] = bias

    def _remove_edge(self, u: int, v: int) -> bool:
        removed = self._adj[u].erase(v)
        self._adj[v].erase(u)
        return removed

    def set_quadratic(self, u, v, bias) -> None:
        """Set the bias between ``u`` and ``v``, creating the interaction if needed.

        Raises:
            SelfLoopError: If ``u == v``.
        """
        u, v = self._index(u), self._index(v)
        if u == v:
            raise SelfLoopError(f"cannot set an interaction of {u} with itself")
        self._set_edge(u, v, bias)

    def add_quadratic(self, u, v, bias) -> None:
        """Add ``bias`` to the interaction between ``u`` and ``v``.

        The interaction is created with ``bias`` if absent. A self-interaction
        ``u == v`` is folded into ``linear(u)`` for BINARY models and into the
        offset for SPIN models.
        """
        u, v = self._index(u), self._index(v)
        if u == v:
            if self._vartype is BINARY:
                self._linear[u] += bias
            else:
                self._offset = self._dtype.type(self._offset + bias)
            return
        self._set_edge(u, v, self._adj[u].get(v) + bias)

    def add_quadratic_from_coo(self, rows, cols, biases) -> None:
        """Add interactions given in coordinate format.

        Args:
            rows: Sequence of variable indices.
            cols: Sequence of variable indices, same length as ``rows``.
            biases: Sequence of biases, same length as ``rows``.

        Raises:
            ValueError: If the sequences differ in length.
            IndexOutOfRangeError: If any index is out of range. The model is
                left unchanged.
        """
        rows = np.asarray(rows).ravel()
        cols = np.asarray(cols).ravel()
        biases = np.asarray(biases, dtype=self._dtype).ravel()
        if not (len(rows) == len(cols) == len(biases)):
            raise ValueError(
                f"rows, cols and biases must have the same length, got "
                f"{len(rows)}, {len(cols)} and {len(biases)}"
            )

        pairs = [(self._index(u), self._index(v)) for u, v in zip(rows, cols)]
        for (u, v), bias in zip(pairs, biases):
            self.add_quadratic(u, v, bias)

    def remove_interaction(self, u, v) -> bool:
        """Remove the interaction between ``u`` and ``v``.

        Returns:
            Whether the interaction existed.
        """
        u, v = self._index(u), self._index(v)
        if u == v:
            return False
        return self._remove_edge(u, v)

    def neighborhood(self, v, start=0) -> Iterator[Tuple[int, "np.floating"]]:
        """Iterate over ``(neighbor, bias)`` pairs of ``v`` in ascending order.

        Args:
            v: Variable index.
            start: Skip neighbors with an index below ``start``.
        """
        return self._adj[self._index(v)].items(start)

    def degree(self, v) -> int:
        return len(self._adj[self._index(v)])

    def is_linear(self) -> bool:
        return not any(self._adj)

    def iter_interactions(self) -> Iterator[Tuple[int, int, "np.floating"]]:
        """Iterate over ``(u, v, bias)`` with ``u < v``, each pair once."""
        for u, nbr in enumerate(self._adj):
            for v, bias in nbr.items(u + 1):
                yield u, v, bias

    def _upper_triangle(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        rows, cols, biases = [], [], []
        for u, v, bias in self.iter_interactions():
            rows.append(u)
            cols.append(v)
            biases.append(bias)
        return (
            np.asarray(rows, dtype=np.intp),
            np.asarray(cols, dtype=np.intp),
            np.asarray(biases, dtype=self._dtype),
        )

    # shape

    def resize(self, n) -> None:
        """Grow or shrink the model to ``n`` variables.

        New variables have zero bias. Shrinking drops every interaction that
        involves a removed variable.
        """
        n = _as_size(n)
        current = len(self._adj)
        if n < current:
            del self._adj[n:]
            for nbr in self._adj:
                nbr.truncate(n)
            self._linear = self._linear[:n].copy()
        elif n > current:
            self._adj.extend(Neighborhood(self._dtype) for _ in range(n - current))
            self._linear = np.concatenate(
                [self._linear, np.zeros(n - current, dtype=self._dtype)]
            )
        logger.debug(f"Resized model from {current} to {n} variables")

    # energy

    def _as_samples(self, samples, ndim: int) -> np.ndarray:
        arr = np.asarray(samples)
        if arr.ndim != ndim:
            raise DomainMismatchError(
                f"expected a {ndim}-D array of samples, got {arr.ndim}-D"
            )
        if arr.shape[-1] != self.num_variables:
            raise DomainMismatchError(
                f"sample length {arr.shape[-1]} does not match "
                f"{self.num_variables} variables"
            )
        if arr.size and not np.isin(arr, sorted(self._vartype.value)).all():
            raise DomainMismatchError(
                f"sample values must be in {sorted(self._vartype.value)} "
                f"for {self._vartype.name} models"
            )
        return arr.astype(self._dtype)

    def energy(self, sample):
        """Evaluate the objective for a single assignment.

        Args:
            sample: Sequence of ``num_variables`` values from the model's
                vartype domain.

        Returns:
            Energy as a scalar of the model's dtype.

        Raises:
            DomainMismatchError: If ``sample`` has the wrong length or values.
        """
        x = self._as_samples(sample, ndim=1)

        en = self._offset + self._linear.dot(x)
        for u, nbr in enumerate(self._adj):
            xu = x[u]
            if not xu:
                continue
            for v, bias in nbr.items(u + 1):
                en += bias * xu * x[v]
        return self._dtype.type(en)

    def energies(self, samples) -> np.ndarray:
        """Evaluate the objective for each row of a 2-D array of samples.

        Returns:
            1-D array of energies with the model's dtype.
        """
        X = self._as_samples(np.atleast_2d(samples), ndim=2)
        rows, cols, biases = self._upper_triangle()
        en = X.dot(self._linear) + (X[:, rows] * X[:, cols]).dot(biases)
        return (en + self._offset).astype(self._dtype, copy=False)

    # transforms

    def change_vartype(self, vartype: VartypeLike) -> None:
        """Convert the model in place to another vartype.

        Uses ``x = (s + 1) / 2`` and ``s = 2x - 1``, so the energy of every
        assignment equals the energy of the mapped assignment afterwards.
        """
        vartype = as_vartype(vartype)
        if vartype is self._vartype:
            return

        linear = self._linear
        offset = self._offset

        # both endpoints of an edge see the same bias, so transforming each
        # neighborhood independently leaves them symmetric
        if vartype is BINARY:
            # h s + J s s'  ->  2h x - h + 4J x x' - 2J x - 2J x' + J
            offset -= linear.sum()
            linear *= 2
            for u, nbr in enumerate(self._adj):
                for entry in nbr.entries():
                    bias = entry.bias
                    linear[u] -= 2 * bias
                    if entry.key > u:
                        offset += bias
                    entry.bias = 4 * bias
        else:
            # a x + b x x'  ->  a/2 (s + 1) + b/4 (s s' + s + s' + 1)
            offset += linear.sum() / 2
            linear /= 2
            for u, nbr in enumerate(self._adj):
                for entry in nbr.entries():
                    bias = entry.bias / 4
                    linear[u] += bias
                    if entry.key > u:
                        offset += bias
                    entry.bias = bias

        self._offset = self._dtype.type(offset)
        logger.debug(
            f"Changed vartype from {self._vartype.name} to {vartype.name} "
            f"({self.num_variables} variables, {self.num_interactions} interactions)"
        )
        self._vartype = vartype

    def scale(self, factor) -> None:
        """Multiply every bias and the offset by ``factor``."""
        self._linear *= factor
        for nbr in self._adj:
            for entry in nbr.entries():
                entry.bias = entry.bias * factor
        self._offset = self._dtype.type(self._offset * factor)

    def copy(self) -> "BinaryQuadraticModel":
        new = type(self)(self._vartype, dtype=self._dtype)
        new._linear = self._linear.copy()
        new._adj = [nbr.copy() for nbr in self._adj]
        new._offset = self._offset
        return new

    __copy__ = copy
