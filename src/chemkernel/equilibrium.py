"""Le Chatelier shift classifier.

Each stress type has exactly one rule. Concentration rules look only at
which side is perturbed, temperature rules only at the enthalpy sign and
pressure rules only at the gas mole counts.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from chemkernel.models import (
    Equilibrium,
    ReasonCode,
    ShiftDirection,
    ShiftResult,
    Stress,
    StressType,
    ThermoSign,
)

logger = logging.getLogger(__name__)

R = ReasonCode

_SHIFT_TAG = {
    ShiftDirection.RIGHT: R.SHIFT_TOWARD_PRODUCTS,
    ShiftDirection.LEFT: R.SHIFT_TOWARD_REACTANTS,
    ShiftDirection.NONE: R.NO_SHIFT,
}

# Right shift means Q fell below K; left means Q rose above it.
_QUOTIENT_TAG = {
    ShiftDirection.RIGHT: R.Q_BELOW_K,
    ShiftDirection.LEFT: R.Q_ABOVE_K,
    ShiftDirection.NONE: R.Q_EQUALS_K,
}

Rule = Callable[[Equilibrium], tuple[ShiftDirection, list[ReasonCode]]]


def _add_reactant(_equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return ShiftDirection.RIGHT, [R.STRESS_ADDS_REACTANT, R.CONSUMES_ADDED_SPECIES, R.K_UNCHANGED]


def _add_product(_equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return ShiftDirection.LEFT, [R.STRESS_ADDS_PRODUCT, R.CONSUMES_ADDED_SPECIES, R.K_UNCHANGED]


def _remove_reactant(_equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return ShiftDirection.LEFT, [R.STRESS_REMOVES_REACTANT, R.REPLACES_REMOVED_SPECIES, R.K_UNCHANGED]


def _remove_product(_equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return ShiftDirection.RIGHT, [R.STRESS_REMOVES_PRODUCT, R.REPLACES_REMOVED_SPECIES, R.K_UNCHANGED]


def _temperature(equilibrium: Equilibrium, raised: bool) -> tuple[ShiftDirection, list[ReasonCode]]:
    endothermic = equilibrium.thermodynamics.sign is ThermoSign.ENDOTHERMIC
    tags = [R.STRESS_RAISES_TEMPERATURE if raised else R.STRESS_LOWERS_TEMPERATURE]
    if endothermic:
        tags += [R.REACTION_ENDOTHERMIC, R.HEAT_ACTS_AS_REACTANT]
    else:
        tags += [R.REACTION_EXOTHERMIC, R.HEAT_ACTS_AS_PRODUCT]

    # Heating an endothermic reaction (or cooling an exothermic one) raises K.
    forward = endothermic == raised
    tags.append(R.K_INCREASES if forward else R.K_DECREASES)
    return (ShiftDirection.RIGHT if forward else ShiftDirection.LEFT), tags


def _increase_temperature(equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return _temperature(equilibrium, raised=True)


def _decrease_temperature(equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return _temperature(equilibrium, raised=False)


def _pressure(equilibrium: Equilibrium, raised: bool) -> tuple[ShiftDirection, list[ReasonCode]]:
    gas = equilibrium.gas_moles
    tags = [R.STRESS_RAISES_PRESSURE if raised else R.STRESS_LOWERS_PRESSURE]
    if not gas.has_gas:
        return ShiftDirection.NONE, tags + [R.NO_GAS_SPECIES, R.K_UNCHANGED]
    if gas.reactant_side == gas.product_side:
        return ShiftDirection.NONE, tags + [R.EQUAL_GAS_MOLES, R.K_UNCHANGED]

    products_fewer = gas.reactant_side > gas.product_side
    if raised:
        tags.append(R.FEWER_GAS_MOLES_SIDE)
        direction = ShiftDirection.RIGHT if products_fewer else ShiftDirection.LEFT
    else:
        tags.append(R.MORE_GAS_MOLES_SIDE)
        direction = ShiftDirection.LEFT if products_fewer else ShiftDirection.RIGHT
    return direction, tags + [R.K_UNCHANGED]


def _increase_pressure(equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return _pressure(equilibrium, raised=True)


def _decrease_pressure(equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return _pressure(equilibrium, raised=False)


def _add_catalyst(_equilibrium: Equilibrium) -> tuple[ShiftDirection, list[ReasonCode]]:
    return ShiftDirection.NONE, [R.STRESS_ADDS_CATALYST, R.RATES_CHANGE_EQUALLY, R.K_UNCHANGED]


RULES: Mapping[StressType, Rule] = {
    StressType.ADD_REACTANT: _add_reactant,
    StressType.ADD_PRODUCT: _add_product,
    StressType.REMOVE_REACTANT: _remove_reactant,
    StressType.REMOVE_PRODUCT: _remove_product,
    StressType.INCREASE_TEMPERATURE: _increase_temperature,
    StressType.DECREASE_TEMPERATURE: _decrease_temperature,
    StressType.INCREASE_PRESSURE: _increase_pressure,
    StressType.DECREASE_PRESSURE: _decrease_pressure,
    StressType.ADD_CATALYST: _add_catalyst,
}

_missing = set(StressType) - set(RULES)
if _missing:
    raise RuntimeError(f"No shift rule for stress types: {sorted(m.value for m in _missing)}")


def classify_shift(equilibrium: Equilibrium, stress: Stress) -> ShiftResult:
    """Predict the direction an equilibrium shifts under ``stress``.

    Args:
        equilibrium: The system at equilibrium.
        stress: The applied change. Concentration stresses must target a
            species on the side they perturb.

    Returns:
        The shift direction and the ordered reason codes leading to it.

    Raises:
        ValueError: If a concentration stress targets a species that is not
            on the perturbed side of ``equilibrium``.
    """
    equilibrium.validate_stress(stress)
    direction, tags = RULES[stress.type](equilibrium)
    tags += [_SHIFT_TAG[direction], _QUOTIENT_TAG[direction]]
    logger.debug(
        "Stress %s on %s -> %s", stress.type.value, equilibrium.name or "equilibrium", direction.value
    )
    return ShiftResult(direction=direction, reasoning_tags=tuple(tags))
