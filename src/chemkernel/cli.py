"""Command-line entrypoints for chemkernel."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict

import typer

from chemkernel.curve import sample_curve, volume_grid
from chemkernel.equilibrium import classify_shift
from chemkernel.explain import get_formatter
from chemkernel.indicators import suitable_indicators
from chemkernel.models import (
    Analyte,
    Equilibrium,
    GasMoles,
    PolyproticTitration,
    Species,
    Stress,
    Thermodynamics,
    Titrant,
    TitrationSystem,
)
from chemkernel.titration import (
    Titration,
    calculate_ph,
    get_equivalence_volume,
    titration_region,
)

app = typer.Typer(add_completion=False)


def _parse_species(data: Dict[str, Any]) -> Species:
    return Species(
        formula=data["formula"],
        coefficient=data.get("coefficient", 1),
        phase=data.get("phase", "gas"),
    )


def _parse_equilibrium(data: Dict[str, Any]) -> Equilibrium:
    thermo = data["thermodynamics"]
    delta_h = float(thermo.get("delta_h", thermo.get("deltaH")))
    sign = thermo.get("sign", thermo.get("type"))
    thermodynamics = (
        Thermodynamics.from_delta_h(delta_h)
        if sign is None
        else Thermodynamics(delta_h=delta_h, sign=sign)
    )

    gas_moles = None
    if data.get("gas_moles") is not None:
        gas = data["gas_moles"]
        gas_moles = GasMoles(
            reactant_side=gas.get("reactant_side", gas.get("reactants")),
            product_side=gas.get("product_side", gas.get("products")),
        )

    return Equilibrium(
        reactants=[_parse_species(s) for s in data["reactants"]],
        products=[_parse_species(s) for s in data["products"]],
        thermodynamics=thermodynamics,
        gas_moles=gas_moles,
        name=data.get("name", ""),
        equation=data.get("equation", ""),
    )


def _parse_titration(data: Dict[str, Any]) -> Titration:
    t_type = data.get("type", "monoprotic").lower()
    analyte = data["analyte"]
    titrant = data["titrant"]

    if t_type == "monoprotic":
        constant = analyte.get("equilibrium_constant", analyte.get("K"))
        return TitrationSystem(
            analyte=Analyte(
                volume_ml=float(analyte["volume"]),
                molarity=float(analyte["molarity"]),
                strength=analyte.get("strength", "strong"),
                equilibrium_constant=None if constant is None else float(constant),
                formula=analyte.get("formula", ""),
            ),
            titrant=Titrant(molarity=float(titrant["molarity"]), formula=titrant.get("formula", "")),
            direction=data.get("direction", "acid-titrated-by-base"),
        )
    elif t_type == "polyprotic":
        return PolyproticTitration(
            volume_ml=float(analyte["volume"]),
            molarity=float(analyte["molarity"]),
            dissociation_constants=[float(k) for k in analyte["Ka"]],
            titrant_molarity=float(titrant["molarity"]),
            formula=analyte.get("formula", ""),
        )
    else:
        raise ValueError(f"Unknown titration type: {t_type}")


def _load(path: Path, parser):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    try:
        return parser(data)
    except (KeyError, TypeError, ValueError) as exc:
        typer.echo(f"Invalid scenario {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log calculation branches.")] = False,
) -> None:
    """Chemical equilibrium and titration calculators."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def shift(
    scenario: Annotated[Path, typer.Argument(help="Equilibrium JSON file.")],
    stress: Annotated[str, typer.Option(help="Stress type, e.g. increase-pressure.")],
    target: Annotated[str | None, typer.Option(help="Species formula for concentration stresses.")] = None,
    language: Annotated[str, typer.Option(help="Explanation language (en or is).")] = "en",
) -> None:
    """Predict the Le Chatelier shift for a stress."""
    equilibrium = _load(scenario, _parse_equilibrium)
    try:
        applied = Stress.on(equilibrium, stress, target)
        formatter = get_formatter(language)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    result = classify_shift(equilibrium, applied)
    payload = {
        "stress": formatter.describe_stress(applied),
        "direction": result.direction.value,
        "reasoning_tags": [tag.value for tag in result.reasoning_tags],
        "explanation": formatter.explain_shift(equilibrium, applied, result),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def ph(
    scenario: Annotated[Path, typer.Argument(help="Titration JSON file.")],
    volume: Annotated[float, typer.Option(help="Titrant added (mL).")],
) -> None:
    """Calculate the pH after adding a volume of titrant."""
    system = _load(scenario, _parse_titration)
    if volume < 0:
        typer.echo("Volume must be >= 0", err=True)
        raise typer.Exit(code=1)
    payload = {
        "volume": volume,
        "pH": calculate_ph(system, volume),
        "region": titration_region(system, volume).value,
        "equivalence_volume": get_equivalence_volume(system),
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def curve(
    scenario: Annotated[Path, typer.Argument(help="Titration JSON file.")],
    max_volume: Annotated[float | None, typer.Option(help="Last volume sampled (mL).")] = None,
    step: Annotated[float, typer.Option(help="Sampling step (mL).")] = 0.5,
    output: Annotated[Path | None, typer.Option(help="Path to save output JSON.")] = None,
) -> None:
    """Sample a full titration curve."""
    system = _load(scenario, _parse_titration)
    try:
        volumes = volume_grid(system, max_volume=max_volume, step=step)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    points = sample_curve(system, volumes)
    data = {
        "equivalence_volume": get_equivalence_volume(system),
        "indicators": [indicator.key for indicator in suitable_indicators(system)],
        "points": [{"volume": p.volume_ml, "pH": p.ph} for p in points],
    }
    json_output = json.dumps(data, indent=2)
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)
