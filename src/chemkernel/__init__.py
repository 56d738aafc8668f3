"""chemkernel core package."""

from chemkernel.curve import sample_curve
from chemkernel.equilibrium import classify_shift
from chemkernel.models import (
    Analyte,
    DataPoint,
    Equilibrium,
    GasMoles,
    PolyproticTitration,
    ShiftDirection,
    ShiftResult,
    Species,
    Stress,
    StressType,
    Thermodynamics,
    Titrant,
    TitrationSystem,
)
from chemkernel.titration import calculate_ph, get_equivalence_volume

__all__ = [
    "Analyte",
    "DataPoint",
    "Equilibrium",
    "GasMoles",
    "PolyproticTitration",
    "ShiftDirection",
    "ShiftResult",
    "Species",
    "Stress",
    "StressType",
    "Thermodynamics",
    "Titrant",
    "TitrationSystem",
    "calculate_ph",
    "classify_shift",
    "get_equivalence_volume",
    "sample_curve",
]
