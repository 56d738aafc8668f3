"""Acid-base indicators and their transition ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chemkernel.titration import Titration, equivalence_ph


@dataclass(frozen=True)
class Indicator:
    key: str
    name: str
    low_ph: float
    high_ph: float

    def __post_init__(self) -> None:
        if self.low_ph >= self.high_ph:
            raise ValueError(f"{self.key}: low_ph must be below high_ph")

    def covers(self, ph: float) -> bool:
        return self.low_ph <= ph <= self.high_ph


INDICATORS: Sequence[Indicator] = (
    Indicator("methyl-orange", "Methyl orange", 3.1, 4.4),
    Indicator("methyl-red", "Methyl red", 4.4, 6.2),
    Indicator("bromothymol-blue", "Bromothymol blue", 6.0, 7.6),
    Indicator("phenolphthalein", "Phenolphthalein", 8.3, 10.0),
    Indicator("thymol-blue", "Thymol blue", 8.0, 9.6),
)


def get_indicator(key: str) -> Indicator:
    for indicator in INDICATORS:
        if indicator.key == key:
            return indicator
    raise ValueError(f"Unknown indicator: {key!r}")


def indicator_state(indicator: Indicator, ph: float) -> str:
    """Return ``"acidic"``, ``"transition"`` or ``"basic"`` for ``ph``."""
    if ph < indicator.low_ph:
        return "acidic"
    if ph > indicator.high_ph:
        return "basic"
    return "transition"


def suitable_indicators(
    system: Titration, indicators: Sequence[Indicator] = INDICATORS
) -> list[Indicator]:
    """Indicators whose transition range contains the equivalence pH."""
    ph = equivalence_ph(system)
    return [indicator for indicator in indicators if indicator.covers(ph)]
