"""Titration curve sampling."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import numpy as np

from chemkernel.constants import PH_LOWER_BOUND, PH_UPPER_BOUND
from chemkernel.models import DataPoint
from chemkernel.titration import Titration, calculate_ph, get_equivalence_volume

logger = logging.getLogger(__name__)

EQUIVALENCE_MARGINS = (0.1, 0.05, 0.01)


def sample_curve(system: Titration, volumes: Iterable[float]) -> list[DataPoint]:
    """Evaluate the pH at each volume, preserving the given order."""
    points = []
    for volume in volumes:
        volume = float(volume)
        ph = calculate_ph(system, volume)
        if not PH_LOWER_BOUND <= ph <= PH_UPPER_BOUND:
            logger.warning("pH %.3f at %.3f mL is outside [%s, %s]", ph, volume, PH_LOWER_BOUND, PH_UPPER_BOUND)
        points.append(DataPoint(volume_ml=volume, ph=ph))
    return points


def volume_grid(
    system: Titration,
    max_volume: float | None = None,
    step: float = 0.5,
) -> Sequence[float]:
    """Default sampling volumes for plotting a curve.

    Evenly spaced from 0 to ``max_volume`` (twice the equivalence volume
    when omitted), densified just around the equivalence point.
    """
    if step <= 0:
        raise ValueError(f"step must be > 0, got {step!r}")
    equivalence = get_equivalence_volume(system)
    limit = 2.0 * equivalence if max_volume is None else float(max_volume)
    if limit < 0:
        raise ValueError(f"max_volume must be >= 0, got {max_volume!r}")

    count = int(np.floor(limit / step + 1e-9)) + 1
    grid = np.arange(count) * step
    extra = [
        volume
        for margin in EQUIVALENCE_MARGINS
        for volume in (equivalence - margin, equivalence + margin)
        if 0 < volume <= limit
    ]
    volumes = np.unique(np.round(np.concatenate([grid, extra]), 10))
    return volumes.tolist()
