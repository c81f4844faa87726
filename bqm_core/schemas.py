"""Input and output schemas for the command line."""

from typing import List, Literal, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from .quadratic_model import BinaryQuadraticModel

_DTYPES = {"float32": np.float32, "float64": np.float64}


class ModelInput(BaseModel):
    vartype: Literal["SPIN", "BINARY"]
    dtype: Literal["float32", "float64"] = "float64"
    num_variables: Optional[int] = Field(default=None, ge=0)
    dense: Optional[List[List[float]]] = None
    linear: List[float] = Field(default_factory=list)
    quadratic: List[Tuple[int, int, float]] = Field(default_factory=list)
    offset: float = 0.0

    @field_validator("vartype", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("dense")
    @classmethod
    def _square(cls, value):
        if value is not None and any(len(row) != len(value) for row in value):
            raise ValueError("dense matrix must be square")
        return value

    @model_validator(mode="after")
    def _sizes(self):
        n = self.size
        if self.dense is not None and self.num_variables not in (None, len(self.dense)):
            raise ValueError(
                f"num_variables={self.num_variables} disagrees with "
                f"{len(self.dense)}x{len(self.dense)} dense matrix"
            )
        if len(self.linear) > n:
            raise ValueError(f"{len(self.linear)} linear biases for {n} variables")
        return self

    @property
    def size(self) -> int:
        if self.dense is not None:
            return len(self.dense)
        if self.num_variables is not None:
            return self.num_variables
        return len(self.linear)

    def build(self) -> BinaryQuadraticModel:
        """Create the described model.

        A dense matrix, when given, is applied first; linear biases,
        quadratic triples and the offset are then added on top of it.
        """
        dtype = _DTYPES[self.dtype]
        if self.dense is not None:
            bqm = BinaryQuadraticModel.from_dense(self.dense, self.vartype, dtype=dtype)
        else:
            bqm = BinaryQuadraticModel(self.vartype, self.size, dtype=dtype)

        for v, bias in enumerate(self.linear):
            bqm.add_linear(v, bias)
        for u, v, bias in self.quadratic:
            bqm.add_quadratic(u, v, bias)
        bqm.offset += self.offset
        return bqm

    @classmethod
    def from_model(cls, bqm: BinaryQuadraticModel) -> "ModelInput":
        return cls(
            vartype=bqm.vartype.name,
            dtype=bqm.dtype.name,
            num_variables=bqm.num_variables,
            linear=[float(bqm.linear(v)) for v in range(bqm.num_variables)],
            quadratic=[(u, v, float(bias)) for u, v, bias in bqm.iter_interactions()],
            offset=float(bqm.offset),
        )


class ModelReport(BaseModel):
    vartype: str
    dtype: str
    num_variables: int
    num_interactions: int
    offset: float


class EnergyReport(BaseModel):
    sample: List[int]
    energy: float
