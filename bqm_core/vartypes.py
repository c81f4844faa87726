"""Variable domains for binary quadratic models."""

import enum
from typing import Union

__all__ = ["Vartype", "SPIN", "BINARY", "as_vartype"]


class Vartype(enum.Enum):
    """The admissible values of every variable in a model.

    Examples:
        >>> Vartype.SPIN.value == {-1, 1}
        True
        >>> Vartype({0, 1}) is Vartype.BINARY
        True
        >>> Vartype["SPIN"] is Vartype.SPIN
        True
    """

    SPIN = frozenset({-1, 1})
    BINARY = frozenset({0, 1})

    @classmethod
    def _missing_(cls, value):
        # allow plain sets / tuples as well as frozensets
        try:
            value = frozenset(value)
        except TypeError:
            return None
        for member in cls:
            if member.value == value:
                return member
        return None


SPIN = Vartype.SPIN
BINARY = Vartype.BINARY

VartypeLike = Union[Vartype, str, frozenset, set, tuple, list]


def as_vartype(vartype: VartypeLike) -> Vartype:
    """Coerce a vartype-like object to a :class:`Vartype`.

    Args:
        vartype: A ``Vartype``, its name (``"SPIN"``/``"binary"``), or its
            value set (``{-1, 1}`` / ``{0, 1}``).

    Returns:
        The matching ``Vartype`` member.

    Raises:
        TypeError: If ``vartype`` does not name a known domain.
    """
    if isinstance(vartype, Vartype):
        return vartype

    if isinstance(vartype, str):
        try:
            return Vartype[vartype.upper()]
        except KeyError:
            raise TypeError(f"unknown vartype {vartype!r}") from None

    try:
        return Vartype(vartype)
    except (ValueError, TypeError):
        raise TypeError(
            f"expected SPIN, BINARY, {{-1, 1}} or {{0, 1}}, got {vartype!r}"
        ) from None
