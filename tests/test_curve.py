import unittest

from chemkernel.curve import sample_curve, volume_grid
from chemkernel.models import Analyte, DataPoint, PolyproticTitration, Titrant, TitrationSystem
from chemkernel.titration import calculate_ph


class TestSampleCurve(unittest.TestCase):
    def setUp(self):
        self.system = TitrationSystem(Analyte(25.0, 0.1, "weak", equilibrium_constant=1.8e-5), Titrant(0.1))

    def test_preserves_order(self):
        volumes = [30.0, 0.0, 12.5, 25.0]
        points = sample_curve(self.system, volumes)
        self.assertEqual([p.volume_ml for p in points], volumes)
        for point in points:
            self.assertIsInstance(point, DataPoint)
            self.assertEqual(point.ph, calculate_ph(self.system, point.volume_ml))

    def test_empty(self):
        self.assertEqual(sample_curve(self.system, []), [])

    def test_accepts_generator(self):
        points = sample_curve(self.system, (v for v in (1.0, 2.0)))
        self.assertEqual(len(points), 2)

    def test_negative_volume_rejected(self):
        with self.assertRaises(ValueError):
            sample_curve(self.system, [0.0, -1.0])

    def test_out_of_range_logged_not_clamped(self):
        concentrated = TitrationSystem(Analyte(10.0, 12.0), Titrant(12.0))
        with self.assertLogs("chemkernel.curve", level="WARNING"):
            points = sample_curve(concentrated, [0.0])
        self.assertLess(points[0].ph, -1.0)

    def test_polyprotic(self):
        system = PolyproticTitration(25.0, 0.1, [1.3e-2, 6.3e-8], 0.1)
        points = sample_curve(system, [0.0, 25.0, 50.0])
        self.assertEqual(len(points), 3)


class TestVolumeGrid(unittest.TestCase):
    def setUp(self):
        self.system = TitrationSystem(Analyte(25.0, 0.1), Titrant(0.1))

    def test_default_grid(self):
        volumes = volume_grid(self.system)
        self.assertEqual(volumes[0], 0.0)
        self.assertEqual(volumes[-1], 50.0)
        self.assertEqual(volumes, sorted(volumes))
        self.assertEqual(len(volumes), len(set(volumes)))
        # 101 evenly spaced points plus six around equivalence
        self.assertEqual(len(volumes), 107)
        for target in (24.9, 24.95, 24.99, 25.01, 25.05, 25.1):
            self.assertTrue(any(abs(v - target) < 1e-9 for v in volumes), target)

    def test_custom_range(self):
        volumes = volume_grid(self.system, max_volume=10.0, step=2.5)
        self.assertEqual(volumes, [0.0, 2.5, 5.0, 7.5, 10.0])

    def test_invalid_step(self):
        with self.assertRaises(ValueError):
            volume_grid(self.system, step=0.0)


if __name__ == "__main__":
    unittest.main()
