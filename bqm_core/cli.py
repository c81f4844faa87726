"""Command line access to binary quadratic models."""

import logging
from typing import List

import typer

from .quadratic_model import BinaryQuadraticModel
from .schemas import EnergyReport, ModelInput, ModelReport
from .vartypes import as_vartype

logger = logging.getLogger(__name__)

app = typer.Typer(help="Inspect, evaluate and convert binary quadratic models")


def _load(input_json: str) -> BinaryQuadraticModel:
    try:
        return ModelInput.model_validate_json(input_json).build()
    except (ValueError, LookupError) as e:
        typer.echo(f"Invalid model: {e}", err=True)
        raise typer.Exit(code=1)


def _parse_sample(sample: str) -> List[int]:
    try:
        return [int(value) for value in sample.split(",") if value.strip()]
    except ValueError:
        typer.echo(f"Invalid sample {sample!r}: expected comma-separated integers", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def info(input_json: str):
    """
    input_json: JSON string matching the ModelInput schema.
    Prints JSON: {"vartype": ..., "num_variables": ..., "num_interactions": ..., ...}
    """
    bqm = _load(input_json)
    logger.info(f"Loaded {bqm!r}")
    report = ModelReport(
        vartype=bqm.vartype.name,
        dtype=bqm.dtype.name,
        num_variables=bqm.num_variables,
        num_interactions=bqm.num_interactions,
        offset=float(bqm.offset),
    )
    typer.echo(report.model_dump_json())


@app.command()
def energy(
    input_json: str,
    sample: str = typer.Option(..., "--sample", "-s", help="Comma-separated values, e.g. 1,-1,1"),
):
    """
    Evaluate a sample on the model.
    Prints JSON: {"sample": [...], "energy": float}
    """
    bqm = _load(input_json)
    values = _parse_sample(sample)
    try:
        en = bqm.energy(values)
    except ValueError as e:
        typer.echo(f"Invalid sample: {e}", err=True)
        raise typer.Exit(code=1)

    logger.info(f"Energy of {values} is {en}")
    typer.echo(EnergyReport(sample=values, energy=float(en)).model_dump_json())


@app.command()
def convert(input_json: str, vartype: str):
    """
    Convert the model to VARTYPE (SPIN or BINARY).
    Prints the converted model as ModelInput JSON.
    """
    bqm = _load(input_json)
    try:
        target = as_vartype(vartype)
    except TypeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    logger.info(f"Converting {bqm.vartype.name} model to {target.name}")
    bqm.change_vartype(target)
    typer.echo(ModelInput.from_model(bqm).model_dump_json(exclude={"dense"}))


if __name__ == "__main__":
    app()
