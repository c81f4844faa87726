"""Conversion to and from dimod binary quadratic models."""

import logging
from typing import Hashable, List, Tuple

import dimod
import numpy as np

from .quadratic_model import BinaryQuadraticModel
from .vartypes import BINARY, SPIN

__all__ = ["to_dimod", "from_dimod"]

logger = logging.getLogger(__name__)

_TO_DIMOD = {SPIN: dimod.SPIN, BINARY: dimod.BINARY}


def to_dimod(bqm: BinaryQuadraticModel) -> dimod.BinaryQuadraticModel:
    """Build a dimod BQM labelled ``0 .. n-1`` with the same biases.

    Args:
        bqm: Model to convert.

    Returns:
        A ``dimod.BinaryQuadraticModel`` of the same vartype.
    """
    # linear first, in index order, so dimod registers variables as 0 .. n-1
    dbqm = dimod.BinaryQuadraticModel(_TO_DIMOD[bqm.vartype])
    dbqm.add_linear_from((v, float(bqm.linear(v))) for v in range(bqm.num_variables))
    dbqm.add_quadratic_from((u, v, float(bias)) for u, v, bias in bqm.iter_interactions())
    dbqm.offset = float(bqm.offset)

    logger.debug(
        f"Exporting {dbqm.num_variables} variables, {dbqm.num_interactions} couplers to dimod"
    )
    return dbqm


def from_dimod(
    dimod_bqm: dimod.BinaryQuadraticModel, dtype=np.float64
) -> Tuple[BinaryQuadraticModel, List[Hashable]]:
    """Build a model from a dimod BQM.

    Variables are indexed in ``dimod_bqm.variables`` order.

    Args:
        dimod_bqm: Source model, any variable labels.
        dtype: Bias type of the new model.

    Returns:
        Tuple of (model, labels) where ``labels[i]`` is the dimod label of
        variable ``i``.
    """
    labels = list(dimod_bqm.variables)
    index = {label: i for i, label in enumerate(labels)}
    vartype = SPIN if dimod_bqm.vartype is dimod.SPIN else BINARY

    bqm = BinaryQuadraticModel(vartype, len(labels), dtype=dtype)
    for label, bias in dimod_bqm.linear.items():
        bqm.set_linear(index[label], bias)
    for (u, v), bias in dimod_bqm.quadratic.items():
        bqm.set_quadratic(index[u], index[v], bias)
    bqm.offset = dimod_bqm.offset

    logger.debug(f"Imported {bqm!r} from dimod")
    return bqm, labels
