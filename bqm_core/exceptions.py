"""Exceptions raised by binary quadratic models and their neighborhoods."""

__all__ = [
    "BQMError",
    "NotFoundError",
    "IndexOutOfRangeError",
    "DomainMismatchError",
    "SelfLoopError",
]


class BQMError(Exception):
    """Base class for all errors raised by bqm_core."""


class NotFoundError(BQMError, KeyError):
    """A strict lookup asked for a key or pair with no explicit entry."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message
        return str(self.args[0]) if self.args else ""


class IndexOutOfRangeError(BQMError, IndexError):
    """A variable index fell outside ``[0, num_variables)``."""


class DomainMismatchError(BQMError, ValueError):
    """A sample does not match the model's size or vartype domain."""


class SelfLoopError(BQMError, ValueError):
    """An interaction was set between a variable and itself."""
