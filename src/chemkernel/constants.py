"""Physical constants and numeric tolerances."""

KW = 1.0e-14  # ion product of water at 25 °C
PKW = 14.0
NEUTRAL_PH = 7.0

# Equivalence is matched on millimoles (M * mL).
EQUIVALENCE_RTOL = 1.0e-9
EQUIVALENCE_ATOL = 1.0e-12

# Plausible pH span for sampled curves; points outside are logged, not clamped.
PH_LOWER_BOUND = -1.0
PH_UPPER_BOUND = 15.0
