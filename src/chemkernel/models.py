"""Data structures for equilibrium and titration systems.

Every record is a frozen dataclass validated on construction. A changed
system is a new value; nothing here is mutated after ``__post_init__``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence


def _require_positive(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a finite number > 0, got {value!r}")


def _require_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be an integer >= 0, got {value!r}")


class Phase(str, Enum):
    GAS = "gas"
    LIQUID = "liquid"
    SOLID = "solid"
    AQUEOUS = "aqueous"

    @classmethod
    def parse(cls, value: str | Phase) -> Phase:
        if isinstance(value, Phase):
            return value
        key = str(value).strip().lower()
        aliases = {"g": cls.GAS, "l": cls.LIQUID, "s": cls.SOLID, "aq": cls.AQUEOUS}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown phase: {value!r}") from None


class ThermoSign(str, Enum):
    EXOTHERMIC = "exothermic"
    ENDOTHERMIC = "endothermic"


class ShiftDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


class StressType(str, Enum):
    ADD_REACTANT = "add-reactant"
    ADD_PRODUCT = "add-product"
    REMOVE_REACTANT = "remove-reactant"
    REMOVE_PRODUCT = "remove-product"
    INCREASE_TEMPERATURE = "increase-temperature"
    DECREASE_TEMPERATURE = "decrease-temperature"
    INCREASE_PRESSURE = "increase-pressure"
    DECREASE_PRESSURE = "decrease-pressure"
    ADD_CATALYST = "add-catalyst"

    @classmethod
    def parse(cls, value: str | StressType) -> StressType:
        if isinstance(value, StressType):
            return value
        key = str(value).strip().lower()
        aliases = {
            "increase-temp": cls.INCREASE_TEMPERATURE,
            "decrease-temp": cls.DECREASE_TEMPERATURE,
        }
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown stress type: {value!r}") from None

    @property
    def is_concentration_change(self) -> bool:
        return self in _CONCENTRATION_STRESSES

    @property
    def perturbs_reactants(self) -> bool:
        return self in (StressType.ADD_REACTANT, StressType.REMOVE_REACTANT)


_CONCENTRATION_STRESSES = frozenset(
    {
        StressType.ADD_REACTANT,
        StressType.ADD_PRODUCT,
        StressType.REMOVE_REACTANT,
        StressType.REMOVE_PRODUCT,
    }
)


class ReasonCode(str, Enum):
    """Symbolic reasoning steps emitted by the shift classifier."""

    STRESS_ADDS_REACTANT = "STRESS_ADDS_REACTANT"
    STRESS_ADDS_PRODUCT = "STRESS_ADDS_PRODUCT"
    STRESS_REMOVES_REACTANT = "STRESS_REMOVES_REACTANT"
    STRESS_REMOVES_PRODUCT = "STRESS_REMOVES_PRODUCT"
    STRESS_RAISES_TEMPERATURE = "STRESS_RAISES_TEMPERATURE"
    STRESS_LOWERS_TEMPERATURE = "STRESS_LOWERS_TEMPERATURE"
    STRESS_RAISES_PRESSURE = "STRESS_RAISES_PRESSURE"
    STRESS_LOWERS_PRESSURE = "STRESS_LOWERS_PRESSURE"
    STRESS_ADDS_CATALYST = "STRESS_ADDS_CATALYST"

    CONSUMES_ADDED_SPECIES = "CONSUMES_ADDED_SPECIES"
    REPLACES_REMOVED_SPECIES = "REPLACES_REMOVED_SPECIES"

    REACTION_ENDOTHERMIC = "REACTION_ENDOTHERMIC"
    REACTION_EXOTHERMIC = "REACTION_EXOTHERMIC"
    HEAT_ACTS_AS_REACTANT = "HEAT_ACTS_AS_REACTANT"
    HEAT_ACTS_AS_PRODUCT = "HEAT_ACTS_AS_PRODUCT"

    NO_GAS_SPECIES = "NO_GAS_SPECIES"
    EQUAL_GAS_MOLES = "EQUAL_GAS_MOLES"
    FEWER_GAS_MOLES_SIDE = "FEWER_GAS_MOLES_SIDE"
    MORE_GAS_MOLES_SIDE = "MORE_GAS_MOLES_SIDE"

    RATES_CHANGE_EQUALLY = "RATES_CHANGE_EQUALLY"

    K_INCREASES = "K_INCREASES"
    K_DECREASES = "K_DECREASES"
    K_UNCHANGED = "K_UNCHANGED"

    SHIFT_TOWARD_PRODUCTS = "SHIFT_TOWARD_PRODUCTS"
    SHIFT_TOWARD_REACTANTS = "SHIFT_TOWARD_REACTANTS"
    NO_SHIFT = "NO_SHIFT"

    Q_BELOW_K = "Q_BELOW_K"
    Q_ABOVE_K = "Q_ABOVE_K"
    Q_EQUALS_K = "Q_EQUALS_K"


@dataclass(frozen=True)
class Species:
    formula: str
    coefficient: int = 1
    phase: Phase = Phase.GAS

    def __post_init__(self) -> None:
        if not isinstance(self.formula, str) or not self.formula.strip():
            raise ValueError("Species formula must be a non-empty string")
        if isinstance(self.coefficient, bool) or not isinstance(self.coefficient, int) or self.coefficient <= 0:
            raise ValueError(
                f"Coefficient of {self.formula} must be a positive integer, got {self.coefficient!r}"
            )
        object.__setattr__(self, "phase", Phase.parse(self.phase))


@dataclass(frozen=True)
class GasMoles:
    reactant_side: int
    product_side: int

    def __post_init__(self) -> None:
        _require_count("gas_moles.reactant_side", self.reactant_side)
        _require_count("gas_moles.product_side", self.product_side)

    @classmethod
    def from_species(cls, reactants: Iterable[Species], products: Iterable[Species]) -> GasMoles:
        return cls(
            reactant_side=sum(s.coefficient for s in reactants if s.phase is Phase.GAS),
            product_side=sum(s.coefficient for s in products if s.phase is Phase.GAS),
        )

    @property
    def has_gas(self) -> bool:
        return self.reactant_side > 0 or self.product_side > 0


@dataclass(frozen=True)
class Thermodynamics:
    """Reaction enthalpy (kJ/mol) and its sign. Both must agree."""

    delta_h: float
    sign: ThermoSign

    def __post_init__(self) -> None:
        if isinstance(self.delta_h, bool) or not isinstance(self.delta_h, (int, float)):
            raise ValueError(f"delta_h must be a number, got {self.delta_h!r}")
        if not math.isfinite(self.delta_h) or self.delta_h == 0:
            raise ValueError(f"delta_h must be finite and non-zero, got {self.delta_h!r}")
        sign = ThermoSign(self.sign)
        expected = ThermoSign.EXOTHERMIC if self.delta_h < 0 else ThermoSign.ENDOTHERMIC
        if sign is not expected:
            raise ValueError(
                f"delta_h = {self.delta_h} is {expected.value} but sign says {sign.value}"
            )
        object.__setattr__(self, "sign", sign)

    @classmethod
    def from_delta_h(cls, delta_h: float) -> Thermodynamics:
        sign = ThermoSign.EXOTHERMIC if delta_h < 0 else ThermoSign.ENDOTHERMIC
        return cls(delta_h=delta_h, sign=sign)


@dataclass(frozen=True)
class Equilibrium:
    """A reversible reaction at equilibrium.

    ``gas_moles`` may be omitted and is then derived from the gas-phase
    species. When supplied it must match the derived counts.
    """

    reactants: Sequence[Species]
    products: Sequence[Species]
    thermodynamics: Thermodynamics
    gas_moles: GasMoles | None = None
    name: str = ""
    equation: str = ""

    def __post_init__(self) -> None:
        reactants = tuple(self.reactants)
        products = tuple(self.products)
        if not reactants or not products:
            raise ValueError("An equilibrium needs at least one reactant and one product")
        for side, species in (("reactant", reactants), ("product", products)):
            formulas = [s.formula for s in species]
            duplicates = {f for f in formulas if formulas.count(f) > 1}
            if duplicates:
                raise ValueError(f"Duplicate {side} formulas: {sorted(duplicates)}")
        object.__setattr__(self, "reactants", reactants)
        object.__setattr__(self, "products", products)

        derived = GasMoles.from_species(reactants, products)
        if self.gas_moles is None:
            object.__setattr__(self, "gas_moles", derived)
        elif self.gas_moles != derived:
            raise ValueError(
                f"gas_moles {self.gas_moles.reactant_side}:{self.gas_moles.product_side} "
                f"does not match stoichiometry {derived.reactant_side}:{derived.product_side}"
            )

    def has_reactant(self, formula: str) -> bool:
        return any(s.formula == formula for s in self.reactants)

    def has_product(self, formula: str) -> bool:
        return any(s.formula == formula for s in self.products)

    def validate_stress(self, stress: Stress) -> None:
        """Raise ``ValueError`` if a concentration stress targets the wrong species."""
        if not stress.type.is_concentration_change:
            return
        if stress.type.perturbs_reactants:
            if not self.has_reactant(stress.target):
                raise ValueError(
                    f"{stress.type.value} targets {stress.target!r}, which is not a reactant"
                )
        elif not self.has_product(stress.target):
            raise ValueError(
                f"{stress.type.value} targets {stress.target!r}, which is not a product"
            )


@dataclass(frozen=True)
class Stress:
    type: StressType
    target: str | None = None

    def __post_init__(self) -> None:
        stress_type = StressType.parse(self.type)
        object.__setattr__(self, "type", stress_type)
        if stress_type.is_concentration_change and not self.target:
            raise ValueError(f"{stress_type.value} requires a target species")

    @classmethod
    def on(
        cls,
        equilibrium: Equilibrium,
        stress_type: StressType | str,
        target: str | None = None,
    ) -> Stress:
        """Build a stress checked against ``equilibrium``."""
        stress = cls(type=stress_type, target=target)
        equilibrium.validate_stress(stress)
        return stress


@dataclass(frozen=True)
class ShiftResult:
    direction: ShiftDirection
    reasoning_tags: tuple[ReasonCode, ...] = field(default_factory=tuple)


class AcidBaseStrength(str, Enum):
    STRONG = "strong"
    WEAK = "weak"


class TitrationDirection(str, Enum):
    ACID_TITRATED_BY_BASE = "acid-titrated-by-base"
    BASE_TITRATED_BY_ACID = "base-titrated-by-acid"


class TitrationRegion(str, Enum):
    """Branch of the titration curve a volume falls on."""

    INITIAL = "initial"
    BEFORE_EQUIVALENCE = "before-equivalence"
    BUFFER = "buffer"
    EQUIVALENCE = "equivalence"
    AFTER_EQUIVALENCE = "after-equivalence"


@dataclass(frozen=True)
class Analyte:
    """Solution in the flask.

    ``equilibrium_constant`` is Ka for a weak acid or Kb for a weak base,
    and must be given exactly when the analyte is weak.
    """

    volume_ml: float
    molarity: float
    strength: AcidBaseStrength = AcidBaseStrength.STRONG
    equilibrium_constant: float | None = None
    formula: str = ""

    def __post_init__(self) -> None:
        _require_positive("analyte.volume_ml", self.volume_ml)
        _require_positive("analyte.molarity", self.molarity)
        strength = AcidBaseStrength(self.strength)
        object.__setattr__(self, "strength", strength)
        if strength is AcidBaseStrength.WEAK:
            if self.equilibrium_constant is None:
                raise ValueError("A weak analyte requires an equilibrium_constant")
            _require_positive("analyte.equilibrium_constant", self.equilibrium_constant)
        elif self.equilibrium_constant is not None:
            raise ValueError("A strong analyte must not carry an equilibrium_constant")


@dataclass(frozen=True)
class Titrant:
    molarity: float
    formula: str = ""

    def __post_init__(self) -> None:
        _require_positive("titrant.molarity", self.molarity)


@dataclass(frozen=True)
class TitrationSystem:
    analyte: Analyte
    titrant: Titrant
    direction: TitrationDirection = TitrationDirection.ACID_TITRATED_BY_BASE

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", TitrationDirection(self.direction))

    @property
    def is_weak(self) -> bool:
        return self.analyte.strength is AcidBaseStrength.WEAK

    @property
    def analyte_millimoles(self) -> float:
        return self.analyte.molarity * self.analyte.volume_ml

    @property
    def equivalence_volume_ml(self) -> float:
        return self.analyte_millimoles / self.titrant.molarity


@dataclass(frozen=True)
class PolyproticTitration:
    """A di- or triprotic acid titrated by a strong base."""

    volume_ml: float
    molarity: float
    dissociation_constants: Sequence[float]
    titrant_molarity: float
    formula: str = ""

    def __post_init__(self) -> None:
        _require_positive("volume_ml", self.volume_ml)
        _require_positive("molarity", self.molarity)
        _require_positive("titrant_molarity", self.titrant_molarity)
        constants = tuple(self.dissociation_constants)
        if len(constants) not in (2, 3):
            raise ValueError(
                f"A polyprotic acid needs 2 or 3 dissociation constants, got {len(constants)}"
            )
        for index, ka in enumerate(constants, start=1):
            _require_positive(f"Ka{index}", ka)
        if any(later >= earlier for earlier, later in zip(constants, constants[1:])):
            raise ValueError("Successive dissociation constants must strictly decrease")
        object.__setattr__(self, "dissociation_constants", constants)

    @property
    def proton_count(self) -> int:
        return len(self.dissociation_constants)

    @property
    def analyte_millimoles(self) -> float:
        return self.molarity * self.volume_ml

    @property
    def equivalence_volumes(self) -> tuple[float, ...]:
        first = self.analyte_millimoles / self.titrant_molarity
        return tuple(first * k for k in range(1, self.proton_count + 1))


@dataclass(frozen=True)
class DataPoint:
    volume_ml: float
    ph: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.volume_ml) or self.volume_ml < 0:
            raise ValueError(f"volume_ml must be >= 0, got {self.volume_ml!r}")
