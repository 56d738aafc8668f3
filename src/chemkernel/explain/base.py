"""Base interface for explanation formatters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from chemkernel.models import Equilibrium, ShiftResult, Stress, TitrationRegion


class ExplanationFormatter(ABC):
    """Turns classifier output into prose. Never decides chemistry itself."""

    @abstractmethod
    def explain_shift(self, equilibrium: Equilibrium, stress: Stress, result: ShiftResult) -> str:
        """Explain why ``result`` follows from applying ``stress``."""
        pass

    @abstractmethod
    def describe_stress(self, stress: Stress) -> str:
        """Short label for a stress, e.g. for a button."""
        pass

    @abstractmethod
    def describe_region(self, region: TitrationRegion) -> str:
        """Label for a titration curve region."""
        pass
