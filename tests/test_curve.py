import unittest

from g935_battery.core.curve import estimate_battery_level


class EstimateBatteryLevelTest(unittest.TestCase):
    def test_linear_region_boundary(self) -> None:
        self.assertEqual(estimate_battery_level(3525), 0.03 * 3525.0 - 101.0)
        self.assertAlmostEqual(estimate_battery_level(3525), 4.75)

    def test_linear_region_goes_negative_when_disconnected(self) -> None:
        self.assertEqual(estimate_battery_level(0), -101.0)
        self.assertLess(estimate_battery_level(3300), 0)

    def test_saturates_above_4030(self) -> None:
        self.assertEqual(estimate_battery_level(4031), 100.0)
        self.assertEqual(estimate_battery_level(0xFFFF), 100.0)

    def test_polynomial_region_upper_boundary(self) -> None:
        v = 4030.0
        expected = (
            3.7268473047e-9 * v ** 4
            - 5.605626214573775e-5 * v ** 3
            + 0.3156051902814949 * v ** 2
            - 788.0937250298629 * v
            + 736315.3077118985
        )
        self.assertEqual(estimate_battery_level(4030), expected)

    def test_polynomial_region_starts_just_above_linear(self) -> None:
        v = 3526.0
        expected = (
            3.7268473047e-9 * v ** 4
            - 5.605626214573775e-5 * v ** 3
            + 0.3156051902814949 * v ** 2
            - 788.0937250298629 * v
            + 736315.3077118985
        )
        self.assertEqual(estimate_battery_level(3526), expected)
        self.assertNotEqual(estimate_battery_level(3526), 0.03 * 3526.0 - 101.0)


if __name__ == "__main__":
    unittest.main()
