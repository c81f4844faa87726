"""
Sparse binary quadratic models over SPIN and BINARY variables.
"""

from .exceptions import (
    BQMError,
    DomainMismatchError,
    IndexOutOfRangeError,
    NotFoundError,
    SelfLoopError,
)
from .neighborhood import NeighborEntry, Neighborhood
from .quadratic_model import BinaryQuadraticModel
from .vartypes import BINARY, SPIN, Vartype, as_vartype

__all__ = [
    "BinaryQuadraticModel",
    "Neighborhood",
    "NeighborEntry",
    "Vartype",
    "SPIN",
    "BINARY",
    "as_vartype",
    "BQMError",
    "NotFoundError",
    "IndexOutOfRangeError",
    "DomainMismatchError",
    "SelfLoopError",
]
