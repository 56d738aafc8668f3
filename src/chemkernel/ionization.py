"""Shared acid-base helpers."""

from __future__ import annotations

import math

import numpy as np

from chemkernel.constants import EQUIVALENCE_ATOL, EQUIVALENCE_RTOL


def ionized_concentration(constant: float, concentration: float) -> float:
    """Positive root of ``x² + K·x − K·C = 0``.

    Evaluated as ``2KC / (K + √(K² + 4KC))``, the same root as
    ``(−K + √(K² + 4KC)) / 2`` without the cancellation for small K.
    """
    root = np.sqrt(constant**2 + 4.0 * constant * concentration)
    return float(2.0 * constant * concentration / (constant + root))


def p_value(concentration: float) -> float:
    """``−log10`` of a strictly positive concentration."""
    return float(-np.log10(concentration))


def same_amount(first: float, second: float) -> bool:
    """Whether two millimole amounts are equal within tolerance."""
    return math.isclose(first, second, rel_tol=EQUIVALENCE_RTOL, abs_tol=EQUIVALENCE_ATOL)
