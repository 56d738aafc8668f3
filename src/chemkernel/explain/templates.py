"""Phrase-table explanations in English and Icelandic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from chemkernel.explain.base import ExplanationFormatter
from chemkernel.models import (
    Equilibrium,
    ReasonCode,
    ShiftResult,
    Stress,
    StressType,
    TitrationRegion,
)

R = ReasonCode
S = StressType
T = TitrationRegion


@dataclass(frozen=True)
class PhraseTable:
    language: str
    stresses: Mapping[StressType, str]
    reasons: Mapping[ReasonCode, str]
    regions: Mapping[TitrationRegion, str]

    def __post_init__(self) -> None:
        for label, keys, table in (
            ("stress", StressType, self.stresses),
            ("reason", ReasonCode, self.reasons),
            ("region", TitrationRegion, self.regions),
        ):
            missing = set(keys) - set(table)
            if missing:
                raise ValueError(
                    f"{self.language}: no {label} phrase for {sorted(m.value for m in missing)}"
                )


ENGLISH = PhraseTable(
    language="en",
    stresses={
        S.ADD_REACTANT: "Add {target} (reactant)",
        S.ADD_PRODUCT: "Add {target} (product)",
        S.REMOVE_REACTANT: "Remove {target} (reactant)",
        S.REMOVE_PRODUCT: "Remove {target} (product)",
        S.INCREASE_TEMPERATURE: "Increase temperature",
        S.DECREASE_TEMPERATURE: "Decrease temperature",
        S.INCREASE_PRESSURE: "Increase pressure",
        S.DECREASE_PRESSURE: "Decrease pressure",
        S.ADD_CATALYST: "Add catalyst",
    },
    reasons={
        R.STRESS_ADDS_REACTANT: "Adding {target} (a reactant) increases reactant concentration.",
        R.STRESS_ADDS_PRODUCT: "Adding {target} (a product) increases product concentration.",
        R.STRESS_REMOVES_REACTANT: "Removing {target} (a reactant) decreases reactant concentration.",
        R.STRESS_REMOVES_PRODUCT: "Removing {target} (a product) decreases product concentration.",
        R.STRESS_RAISES_TEMPERATURE: "The temperature is raised.",
        R.STRESS_LOWERS_TEMPERATURE: "The temperature is lowered.",
        R.STRESS_RAISES_PRESSURE: "The pressure is increased.",
        R.STRESS_LOWERS_PRESSURE: "The pressure is decreased.",
        R.STRESS_ADDS_CATALYST: "A catalyst is added.",
        R.CONSUMES_ADDED_SPECIES: "The system responds by consuming the added {target}.",
        R.REPLACES_REMOVED_SPECIES: "The system responds by replacing the removed {target}.",
        R.REACTION_ENDOTHERMIC: "The reaction is endothermic (ΔH = {delta_h:g} kJ/mol > 0).",
        R.REACTION_EXOTHERMIC: "The reaction is exothermic (ΔH = {delta_h:g} kJ/mol < 0).",
        R.HEAT_ACTS_AS_REACTANT: "Heat behaves as a reactant.",
        R.HEAT_ACTS_AS_PRODUCT: "Heat behaves as a product.",
        R.NO_GAS_SPECIES: "No gas-phase species take part, so pressure has no effect.",
        R.EQUAL_GAS_MOLES: (
            "Both sides hold the same number of gas moles "
            "({reactant_gas} ⇌ {product_gas}), so pressure affects them equally."
        ),
        R.FEWER_GAS_MOLES_SIDE: (
            "Higher pressure favours the side with FEWER gas moles "
            "(reactants: {reactant_gas}, products: {product_gas})."
        ),
        R.MORE_GAS_MOLES_SIDE: (
            "Lower pressure favours the side with MORE gas moles "
            "(reactants: {reactant_gas}, products: {product_gas})."
        ),
        R.RATES_CHANGE_EQUALLY: (
            "A catalyst lowers the activation energy of the forward and reverse "
            "reactions equally; equilibrium is reached faster at the same position."
        ),
        R.K_INCREASES: "K increases.",
        R.K_DECREASES: "K decreases.",
        R.K_UNCHANGED: "K is unchanged.",
        R.SHIFT_TOWARD_PRODUCTS: "The equilibrium shifts RIGHT, toward the products.",
        R.SHIFT_TOWARD_REACTANTS: "The equilibrium shifts LEFT, toward the reactants.",
        R.NO_SHIFT: "No shift occurs.",
        R.Q_BELOW_K: "Q < K, so the reaction proceeds forward until Q = K.",
        R.Q_ABOVE_K: "Q > K, so the reaction proceeds in reverse until Q = K.",
        R.Q_EQUALS_K: "Q = K, the system is still at equilibrium.",
    },
    regions={
        T.INITIAL: "Before any titrant is added",
        T.BEFORE_EQUIVALENCE: "Before the equivalence point",
        T.BUFFER: "Buffer region",
        T.EQUIVALENCE: "Equivalence point",
        T.AFTER_EQUIVALENCE: "Past the equivalence point",
    },
)


ICELANDIC = PhraseTable(
    language="is",
    stresses={
        S.ADD_REACTANT: "Bæta við {target} (hvarfefni)",
        S.ADD_PRODUCT: "Bæta við {target} (afurð)",
        S.REMOVE_REACTANT: "Fjarlægja {target} (hvarfefni)",
        S.REMOVE_PRODUCT: "Fjarlægja {target} (afurð)",
        S.INCREASE_TEMPERATURE: "Auka hitastig",
        S.DECREASE_TEMPERATURE: "Lækka hitastig",
        S.INCREASE_PRESSURE: "Auka þrýsting",
        S.DECREASE_PRESSURE: "Minnka þrýsting",
        S.ADD_CATALYST: "Bæta við hvata",
    },
    reasons={
        R.STRESS_ADDS_REACTANT: "Að bæta við {target} (hvarfefni) eykur styrk hvarfefna.",
        R.STRESS_ADDS_PRODUCT: "Að bæta við {target} (afurð) eykur styrk afurða.",
        R.STRESS_REMOVES_REACTANT: "Að fjarlægja {target} (hvarfefni) minnkar styrk hvarfefna.",
        R.STRESS_REMOVES_PRODUCT: "Að fjarlægja {target} (afurð) minnkar styrk afurða.",
        R.STRESS_RAISES_TEMPERATURE: "Hitastig er hækkað.",
        R.STRESS_LOWERS_TEMPERATURE: "Hitastig er lækkað.",
        R.STRESS_RAISES_PRESSURE: "Þrýstingur er aukinn.",
        R.STRESS_LOWERS_PRESSURE: "Þrýstingur er minnkaður.",
        R.STRESS_ADDS_CATALYST: "Hvata er bætt við.",
        R.CONSUMES_ADDED_SPECIES: "Kerfið bregst við með því að neyta {target}.",
        R.REPLACES_REMOVED_SPECIES: "Kerfið bregst við með því að framleiða meira af {target}.",
        R.REACTION_ENDOTHERMIC: "Hvarfið er varmabindandi (ΔH = {delta_h:g} kJ/mól > 0).",
        R.REACTION_EXOTHERMIC: "Hvarfið er varmalosandi (ΔH = {delta_h:g} kJ/mól < 0).",
        R.HEAT_ACTS_AS_REACTANT: "Hiti hegðar sér eins og hvarfefni.",
        R.HEAT_ACTS_AS_PRODUCT: "Hiti hegðar sér eins og afurð.",
        R.NO_GAS_SPECIES: "Jafnvægið inniheldur engin gös, svo þrýstingur hefur ekki áhrif.",
        R.EQUAL_GAS_MOLES: (
            "Jafn fjöldi gasmóla á báðum hliðum ({reactant_gas} ⇌ {product_gas}), "
            "svo þrýstingur hefur jöfn áhrif á báðar hliðar."
        ),
        R.FEWER_GAS_MOLES_SIDE: (
            "Aukinn þrýstingur stuðlar að hliðinni með FÆRRI gasmólum "
            "(hvarfefni: {reactant_gas}, afurðir: {product_gas})."
        ),
        R.MORE_GAS_MOLES_SIDE: (
            "Minni þrýstingur stuðlar að hliðinni með FLEIRI gasmólum "
            "(hvarfefni: {reactant_gas}, afurðir: {product_gas})."
        ),
        R.RATES_CHANGE_EQUALLY: (
            "Hvati lækkar virkniorku fyrir bæði fram- og bakhvarf jafnt; "
            "kerfið nær jafnvægi hraðar en lokastaðan er sú sama."
        ),
        R.K_INCREASES: "K eykst.",
        R.K_DECREASES: "K minnkar.",
        R.K_UNCHANGED: "K er óbreytt.",
        R.SHIFT_TOWARD_PRODUCTS: "Kerfið hliðrast TIL HÆGRI, í átt að afurðum.",
        R.SHIFT_TOWARD_REACTANTS: "Kerfið hliðrast TIL VINSTRI, í átt að hvarfefnum.",
        R.NO_SHIFT: "Engin hliðrun á sér stað.",
        R.Q_BELOW_K: "Q < K, svo kerfið hliðrast til hægri þar til Q = K.",
        R.Q_ABOVE_K: "Q > K, svo kerfið hliðrast til vinstri þar til Q = K.",
        R.Q_EQUALS_K: "Q = K, kerfið er í jafnvægi.",
    },
    regions={
        T.INITIAL: "Áður en títrunarlausn er bætt við",
        T.BEFORE_EQUIVALENCE: "Fyrir jafngildispunkt",
        T.BUFFER: "Jafnalausnarsvæði",
        T.EQUIVALENCE: "Jafngildispunktur",
        T.AFTER_EQUIVALENCE: "Eftir jafngildispunkt",
    },
)

_TABLES = {table.language: table for table in (ENGLISH, ICELANDIC)}


class TemplateFormatter(ExplanationFormatter):
    """Formatter backed by a ``PhraseTable``."""

    def __init__(self, phrases: PhraseTable):
        self.phrases = phrases

    def explain_shift(self, equilibrium: Equilibrium, stress: Stress, result: ShiftResult) -> str:
        context = {
            "target": stress.target or "",
            "delta_h": equilibrium.thermodynamics.delta_h,
            "reactant_gas": equilibrium.gas_moles.reactant_side,
            "product_gas": equilibrium.gas_moles.product_side,
        }
        return " ".join(self.phrases.reasons[tag].format(**context) for tag in result.reasoning_tags)

    def describe_stress(self, stress: Stress) -> str:
        return self.phrases.stresses[stress.type].format(target=stress.target or "")

    def describe_region(self, region: TitrationRegion) -> str:
        return self.phrases.regions[region]


def get_formatter(language: str = "en") -> TemplateFormatter:
    try:
        return TemplateFormatter(_TABLES[language])
    except KeyError:
        raise ValueError(
            f"Unsupported language: {language!r} (expected one of {sorted(_TABLES)})"
        ) from None
