import math
import unittest

from chemkernel.curve import volume_grid
from chemkernel.models import Analyte, Titrant, TitrationRegion, TitrationSystem
from chemkernel.titration import (
    calculate_ph,
    equivalence_ph,
    get_equivalence_volume,
    half_equivalence_volume,
    initial_ph,
    titration_region,
)

ACID_BY_BASE = "acid-titrated-by-base"
BASE_BY_ACID = "base-titrated-by-acid"


def hcl_naoh():
    return TitrationSystem(Analyte(25.0, 0.100, formula="HCl"), Titrant(0.100, "NaOH"))


def acetic_acid():
    return TitrationSystem(
        Analyte(25.0, 0.100, "weak", equilibrium_constant=1.8e-5, formula="CH₃COOH"),
        Titrant(0.100, "NaOH"),
    )


def naoh_hcl():
    return TitrationSystem(Analyte(25.0, 0.100, formula="NaOH"), Titrant(0.100, "HCl"), BASE_BY_ACID)


def ammonia():
    return TitrationSystem(
        Analyte(25.0, 0.100, "weak", equilibrium_constant=1.8e-5, formula="NH₃"),
        Titrant(0.100, "HCl"),
        BASE_BY_ACID,
    )


class TestStrongAcidStrongBase(unittest.TestCase):
    def setUp(self):
        self.system = hcl_naoh()

    def test_equivalence_volume(self):
        self.assertAlmostEqual(get_equivalence_volume(self.system), 25.0)
        self.assertAlmostEqual(half_equivalence_volume(self.system), 12.5)

    def test_initial(self):
        self.assertAlmostEqual(calculate_ph(self.system, 0.0), 1.00, places=6)

    def test_before_equivalence(self):
        # 1.25 mmol H+ left in 37.5 mL
        self.assertAlmostEqual(calculate_ph(self.system, 12.5), -math.log10(1.25 / 37.5), places=9)

    def test_equivalence_is_exactly_neutral(self):
        self.assertEqual(calculate_ph(self.system, 25.0), 7.0)

    def test_after_equivalence(self):
        # 2.5 mmol excess OH- in 75 mL
        ph = calculate_ph(self.system, 50.0)
        self.assertAlmostEqual(ph, 14 + math.log10(0.100 * 25 / 75), places=9)
        self.assertAlmostEqual(ph, 12.52, places=2)

    def test_regions(self):
        self.assertIs(titration_region(self.system, 0.0), TitrationRegion.BEFORE_EQUIVALENCE)
        self.assertIs(titration_region(self.system, 25.0), TitrationRegion.EQUIVALENCE)
        self.assertIs(titration_region(self.system, 25.5), TitrationRegion.AFTER_EQUIVALENCE)

    def test_inexact_equivalence_volume_lands_on_neutral(self):
        system = TitrationSystem(Analyte(15.0, 0.125), Titrant(0.100))
        self.assertAlmostEqual(get_equivalence_volume(system), 18.75)
        self.assertEqual(equivalence_ph(system), 7.0)

    def test_negative_volume_rejected(self):
        with self.assertRaises(ValueError):
            calculate_ph(self.system, -1.0)


class TestWeakAcidStrongBase(unittest.TestCase):
    def setUp(self):
        self.system = acetic_acid()
        self.pka = -math.log10(1.8e-5)

    def test_equivalence_volume(self):
        self.assertAlmostEqual(get_equivalence_volume(self.system), 25.0)

    def test_initial_uses_quadratic(self):
        self.assertAlmostEqual(initial_ph(self.system), 2.875, places=2)
        self.assertIs(titration_region(self.system, 0.0), TitrationRegion.INITIAL)

    def test_half_equivalence_equals_pka(self):
        self.assertAlmostEqual(self.pka, 4.74, places=2)
        self.assertLess(abs(calculate_ph(self.system, 12.5) - self.pka), 0.05)
        self.assertIs(titration_region(self.system, 12.5), TitrationRegion.BUFFER)

    def test_buffer_henderson_hasselbalch(self):
        # 0.5 mmol acetate, 2.0 mmol acetic acid
        self.assertAlmostEqual(calculate_ph(self.system, 5.0), self.pka + math.log10(0.5 / 2.0), places=9)

    def test_equivalence_is_basic(self):
        ph = calculate_ph(self.system, 25.0)
        self.assertGreater(ph, 7.0)
        self.assertAlmostEqual(ph, 8.72, places=2)

    def test_after_equivalence_uses_excess_base(self):
        self.assertAlmostEqual(calculate_ph(self.system, 50.0), calculate_ph(hcl_naoh(), 50.0), places=9)


class TestStrongBaseStrongAcid(unittest.TestCase):
    def setUp(self):
        self.system = naoh_hcl()

    def test_curve_points(self):
        self.assertAlmostEqual(calculate_ph(self.system, 0.0), 13.0, places=6)
        self.assertEqual(calculate_ph(self.system, 25.0), 7.0)
        self.assertAlmostEqual(calculate_ph(self.system, 50.0), -math.log10(2.5 / 75), places=9)

    def test_mirrors_acid_curve(self):
        for volume in (0.0, 5.0, 24.0, 26.0, 40.0):
            self.assertAlmostEqual(
                calculate_ph(self.system, volume), 14.0 - calculate_ph(hcl_naoh(), volume), places=9
            )


class TestWeakBaseStrongAcid(unittest.TestCase):
    def setUp(self):
        self.system = ammonia()
        self.pkb = -math.log10(1.8e-5)

    def test_initial(self):
        self.assertAlmostEqual(calculate_ph(self.system, 0.0), 11.125, places=2)

    def test_half_equivalence(self):
        self.assertAlmostEqual(calculate_ph(self.system, 12.5), 14.0 - self.pkb, places=9)

    def test_equivalence_is_acidic(self):
        ph = calculate_ph(self.system, 25.0)
        self.assertLess(ph, 7.0)
        self.assertAlmostEqual(ph, 5.28, places=2)

    def test_after_equivalence_uses_excess_acid(self):
        self.assertAlmostEqual(calculate_ph(self.system, 50.0), -math.log10(2.5 / 75), places=9)

    def test_mirrors_weak_acid(self):
        for volume in (0.0, 5.0, 12.5, 20.0, 25.0, 30.0):
            self.assertAlmostEqual(
                calculate_ph(self.system, volume), 14.0 - calculate_ph(acetic_acid(), volume), places=9
            )


class TestMonotonicity(unittest.TestCase):
    def test_acid_curves_never_decrease(self):
        for system in (hcl_naoh(), acetic_acid()):
            phs = [calculate_ph(system, v) for v in volume_grid(system)]
            for before, after in zip(phs, phs[1:]):
                self.assertLessEqual(before, after + 1e-12)

    def test_base_curves_never_increase(self):
        for system in (naoh_hcl(), ammonia()):
            phs = [calculate_ph(system, v) for v in volume_grid(system)]
            for before, after in zip(phs, phs[1:]):
                self.assertGreaterEqual(before, after - 1e-12)

    def test_deterministic(self):
        system = acetic_acid()
        self.assertEqual(calculate_ph(system, 17.3), calculate_ph(system, 17.3))


if __name__ == "__main__":
    unittest.main()
