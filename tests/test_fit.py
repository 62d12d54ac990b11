"""Scale-to-fit tests."""

import unittest

from slidecraft.layout.fit import MIN_SCALE, FitToContainer, compute_scale, fit_ratio, fit_transform


class TestComputeScale(unittest.TestCase):
    def test_container_smaller_than_padding_clamps(self) -> None:
        self.assertEqual(compute_scale(10, 10, 40), 0.1)

    def test_scenario_half_size_container(self) -> None:
        self.assertAlmostEqual(compute_scale(960, 600, 40), 920 / 1920)
        self.assertAlmostEqual(compute_scale(960, 600, 40), 0.4792, places=4)

    def test_height_bound(self) -> None:
        self.assertAlmostEqual(compute_scale(4000, 580, 40), 540 / 1080)

    def test_custom_canvas(self) -> None:
        self.assertAlmostEqual(compute_scale(748, 288, 48, 700, 240), 1.0)

    def test_zero_dimension_keeps_previous(self) -> None:
        self.assertEqual(compute_scale(0, 600), 1.0)
        self.assertEqual(compute_scale(800, 0, previous=0.3), 0.3)

    def test_never_below_minimum(self) -> None:
        for width, height, padding in ((1, 1, 0), (50, 5000, 40), (41, 41, 40), (39, 39, 40)):
            with self.subTest(width=width, height=height):
                self.assertGreaterEqual(compute_scale(width, height, padding), MIN_SCALE)

    def test_fit_ratio_is_unclamped(self) -> None:
        self.assertAlmostEqual(fit_ratio(1805, 720, 48, 1000, 20000), 672 / 20000)
        self.assertLess(fit_ratio(1805, 720, 48, 1000, 20000), MIN_SCALE)
        self.assertAlmostEqual(fit_ratio(960, 600, 40), compute_scale(960, 600, 40))


class TestFitTransform(unittest.TestCase):
    def test_centers_canvas(self) -> None:
        transform = fit_transform(1960, 1120, 40)
        self.assertEqual(transform.scale, 1.0)
        self.assertEqual((transform.offset_x, transform.offset_y), (20, 20))

    def test_letterbox_offsets(self) -> None:
        transform = fit_transform(2000, 600, 40)
        self.assertAlmostEqual(transform.scale, 560 / 1080)
        self.assertAlmostEqual(transform.offset_x, (2000 - 1920 * transform.scale) / 2)


class TestFitToContainer(unittest.TestCase):
    def test_observe_tracks_resizes(self) -> None:
        fit = FitToContainer()
        self.assertEqual(fit.scale, 1.0)
        self.assertAlmostEqual(fit.observe(960, 600), 920 / 1920)
        # Host not laid out yet: keep the last good scale.
        self.assertAlmostEqual(fit.observe(0, 600), 920 / 1920)
        self.assertEqual(fit.observe(1960, 1120), 1.0)


if __name__ == "__main__":
    unittest.main()
