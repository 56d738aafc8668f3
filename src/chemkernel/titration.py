"""pH of an acid-base titration as a function of titrant volume.

Volumes are in mL and concentrations in mol/L, so amounts are in mmol.

Four classes are covered, keyed on analyte strength and direction:

    strong acid + strong base    strong base + strong acid
    weak acid + strong base      weak base + strong acid

Strong/strong curves follow the excess of whichever species is left over
and sit at exactly pH 7 at equivalence. Weak analytes use the exact
ionization quadratic before any titrant is added, Henderson-Hasselbalch
in the buffer region, conjugate hydrolysis (K' = Kw/K) at equivalence and
the excess strong titrant afterwards. Residual buffering past equivalence
is ignored.
"""

from __future__ import annotations

import logging

import numpy as np

from chemkernel.constants import KW, NEUTRAL_PH, PKW
from chemkernel.ionization import ionized_concentration, p_value, same_amount
from chemkernel.models import (
    PolyproticTitration,
    TitrationDirection,
    TitrationRegion,
    TitrationSystem,
)
from chemkernel.polyprotic import calculate_polyprotic_ph, polyprotic_region

logger = logging.getLogger(__name__)

Titration = TitrationSystem | PolyproticTitration


def get_equivalence_volume(system: Titration) -> float:
    """Titrant volume (mL) at which titrant and analyte amounts match.

    For a polyprotic acid this is the final equivalence point.
    """
    if isinstance(system, PolyproticTitration):
        return system.equivalence_volumes[-1]
    return system.equivalence_volume_ml


def half_equivalence_volume(system: Titration) -> float:
    """Volume where pH equals pKa (pKb for a weak base): half of the first equivalence."""
    if isinstance(system, PolyproticTitration):
        return system.equivalence_volumes[0] / 2.0
    return system.equivalence_volume_ml / 2.0


def titration_region(system: Titration, volume_ml: float) -> TitrationRegion:
    """Name the branch ``calculate_ph`` uses for ``volume_ml``."""
    if isinstance(system, PolyproticTitration):
        return polyprotic_region(system, volume_ml)[0]
    if volume_ml < 0:
        raise ValueError(f"volume_ml must be >= 0, got {volume_ml!r}")

    analyte = system.analyte_millimoles
    titrant = system.titrant.molarity * volume_ml
    if same_amount(titrant, analyte):
        return TitrationRegion.EQUIVALENCE
    if titrant > analyte:
        return TitrationRegion.AFTER_EQUIVALENCE
    if not system.is_weak:
        return TitrationRegion.BEFORE_EQUIVALENCE
    if volume_ml == 0:
        return TitrationRegion.INITIAL
    return TitrationRegion.BUFFER


def _ph_from(p: float, acid_analyte: bool) -> float:
    # p is pH for an acid analyte and pOH for a base analyte.
    return p if acid_analyte else PKW - p


def calculate_ph(system: Titration, volume_ml: float) -> float:
    """Calculate the pH after ``volume_ml`` of titrant has been added.

    Args:
        system: The titration being performed.
        volume_ml: Titrant added so far (mL), must be >= 0.

    Returns:
        The pH. Not clamped to 0-14.
    """
    if isinstance(system, PolyproticTitration):
        return calculate_polyprotic_ph(system, volume_ml)

    region = titration_region(system, volume_ml)
    acid_analyte = system.direction is TitrationDirection.ACID_TITRATED_BY_BASE
    analyte = system.analyte_millimoles
    titrant = system.titrant.molarity * volume_ml
    total_volume = system.analyte.volume_ml + volume_ml
    logger.debug(
        "pH at %.4f mL (%s, %s): %s",
        volume_ml,
        system.analyte.strength.value,
        system.direction.value,
        region.value,
    )

    if region is TitrationRegion.BEFORE_EQUIVALENCE:
        return _ph_from(p_value((analyte - titrant) / total_volume), acid_analyte)

    if region is TitrationRegion.AFTER_EQUIVALENCE:
        # Excess titrant is the opposite species to the analyte.
        return _ph_from(p_value((titrant - analyte) / total_volume), not acid_analyte)

    if region is TitrationRegion.EQUIVALENCE and not system.is_weak:
        return NEUTRAL_PH

    constant = system.analyte.equilibrium_constant

    if region is TitrationRegion.INITIAL:
        ionized = ionized_concentration(constant, system.analyte.molarity)
        return _ph_from(p_value(ionized), acid_analyte)

    if region is TitrationRegion.BUFFER:
        weak_remaining = analyte - titrant
        conjugate = titrant
        return _ph_from(p_value(constant) + float(np.log10(conjugate / weak_remaining)), acid_analyte)

    # Weak analyte at equivalence: only the conjugate is left and it hydrolyses.
    conjugate_concentration = analyte / (system.analyte.volume_ml + system.equivalence_volume_ml)
    hydrolysed = ionized_concentration(KW / constant, conjugate_concentration)
    return _ph_from(p_value(hydrolysed), not acid_analyte)


def equivalence_ph(system: Titration) -> float:
    return calculate_ph(system, get_equivalence_volume(system))


def initial_ph(system: Titration) -> float:
    return calculate_ph(system, 0.0)
