"""Di- and triprotic acids titrated by a strong base.

A teaching approximation: each stage is treated as an independent
Henderson-Hasselbalch buffer, intermediate equivalence points as the
amphoteric midpoint of neighbouring pKa values.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from chemkernel.constants import KW, PKW
from chemkernel.ionization import ionized_concentration, p_value, same_amount
from chemkernel.models import PolyproticTitration, TitrationRegion

logger = logging.getLogger(__name__)


def polyprotic_region(system: PolyproticTitration, volume_ml: float) -> tuple[TitrationRegion, int]:
    """Return the curve region and the stage (0 before any equivalence point).

    At an equivalence point the stage is the number of protons removed.
    """
    if volume_ml < 0:
        raise ValueError(f"volume_ml must be >= 0, got {volume_ml!r}")
    if volume_ml == 0:
        return TitrationRegion.INITIAL, 0

    acid = system.analyte_millimoles
    base = system.titrant_molarity * volume_ml
    for stage in range(1, system.proton_count + 1):
        if same_amount(base, stage * acid):
            return TitrationRegion.EQUIVALENCE, stage
    if base > system.proton_count * acid:
        return TitrationRegion.AFTER_EQUIVALENCE, system.proton_count
    return TitrationRegion.BUFFER, int(math.floor(base / acid))


def calculate_polyprotic_ph(system: PolyproticTitration, volume_ml: float) -> float:
    region, stage = polyprotic_region(system, volume_ml)
    constants = system.dissociation_constants
    pkas = [p_value(ka) for ka in constants]
    acid = system.analyte_millimoles
    base = system.titrant_molarity * volume_ml
    total_volume = system.volume_ml + volume_ml
    logger.debug("Polyprotic pH at %.4f mL: %s (stage %d)", volume_ml, region.value, stage)

    if region is TitrationRegion.INITIAL:
        return p_value(ionized_concentration(constants[0], system.molarity))

    if region is TitrationRegion.BUFFER:
        conjugate = base - stage * acid
        remaining = (stage + 1) * acid - base
        return float(pkas[stage] + np.log10(conjugate / remaining))

    if region is TitrationRegion.EQUIVALENCE:
        if stage < system.proton_count:
            return (pkas[stage - 1] + pkas[stage]) / 2.0
        # Fully deprotonated anion hydrolyses as a weak base.
        hydroxide = ionized_concentration(KW / constants[-1], acid / total_volume)
        return PKW - p_value(hydroxide)

    excess = base - system.proton_count * acid
    return PKW - p_value(excess / total_volume)
