import unittest

from chemkernel.indicators import INDICATORS, Indicator, get_indicator, indicator_state, suitable_indicators
from chemkernel.models import Analyte, Titrant, TitrationSystem


class TestIndicators(unittest.TestCase):
    def test_catalogue(self):
        self.assertEqual(len(INDICATORS), 5)
        phenolphthalein = get_indicator("phenolphthalein")
        self.assertEqual((phenolphthalein.low_ph, phenolphthalein.high_ph), (8.3, 10.0))
        with self.assertRaises(ValueError):
            get_indicator("litmus")

    def test_invalid_range(self):
        with self.assertRaises(ValueError):
            Indicator("broken", "Broken", 7.0, 6.0)

    def test_state(self):
        bromothymol = get_indicator("bromothymol-blue")
        self.assertEqual(indicator_state(bromothymol, 4.0), "acidic")
        self.assertEqual(indicator_state(bromothymol, 7.0), "transition")
        self.assertEqual(indicator_state(bromothymol, 9.0), "basic")

    def test_suitable_for_strong_acid(self):
        system = TitrationSystem(Analyte(25.0, 0.1), Titrant(0.1))
        self.assertEqual([i.key for i in suitable_indicators(system)], ["bromothymol-blue"])

    def test_suitable_for_weak_acid(self):
        system = TitrationSystem(Analyte(25.0, 0.1, "weak", equilibrium_constant=1.8e-5), Titrant(0.1))
        self.assertEqual([i.key for i in suitable_indicators(system)], ["phenolphthalein", "thymol-blue"])

    def test_suitable_for_weak_base(self):
        system = TitrationSystem(
            Analyte(25.0, 0.1, "weak", equilibrium_constant=1.8e-5),
            Titrant(0.1),
            "base-titrated-by-acid",
        )
        self.assertEqual([i.key for i in suitable_indicators(system)], ["methyl-red"])


if __name__ == "__main__":
    unittest.main()
