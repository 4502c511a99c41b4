from unittest import TestCase

import numpy as np


class TestDividedDifference(TestCase):
    def test_divided_difference_table(self):
        from pyzero.numeric import divided_difference_table
        from numpy.testing import assert_allclose

        table = divided_difference_table([1, 2, 3], [1, 4, 9])
        assert_allclose(table, [[1, 3, 1],
                                [4, 5, 0],
                                [9, 0, 0]])

        # Single point.
        assert_allclose(divided_difference_table([2.0], [7.0]), [[7.0]])

        # Order of points doesn't change the highest difference.
        table = divided_difference_table([3, 1, 2], [9, 1, 4])
        self.assertAlmostEqual(table[0, 2], 1.0)

    def test_divided_difference_table_illegal(self):
        from pyzero.numeric import divided_difference_table

        with self.assertRaises(ValueError):
            divided_difference_table([1, 2, 3], [1, 4])  # Mismatched.
        with self.assertRaises(ValueError):
            divided_difference_table([], [])
        with self.assertRaises(ValueError):
            divided_difference_table([1, 2, 2], [1, 4, 4])  # Not distinct.

    def test_newton_poly(self):
        from pyzero.numeric import newton_poly, newton_poly_coeff
        from numpy.testing import assert_allclose

        x_pts = [-5, -1, 0, 2, 4]
        y_pts = [-2, 6, 1, 3, -2]
        assert_allclose(newton_poly_coeff([1, 2, 3], [1, 4, 9]), [1, 3, 1])

        # Passes through the points.
        assert_allclose(newton_poly(x_pts, y_pts, x_pts), y_pts,
                        atol=1e-12)

        # Exact for polynomials of the same degree.
        x = np.linspace(-2, 2, 9)
        assert_allclose(newton_poly([0, 1, 2, 3], [0, 1, 8, 27], x), x ** 3,
                        atol=1e-12)

        # Output follows the shape of x.
        self.assertAlmostEqual(float(newton_poly([1, 2, 3], [1, 4, 9], 2.5)),
                               6.25)
        x_grid = np.array([[0.0, 1.0], [2.0, 3.0]])
        assert_allclose(newton_poly([1, 2, 3], [1, 4, 9], x_grid),
                        x_grid ** 2, atol=1e-12)

        # Single point gives a constant.
        assert_allclose(newton_poly([2.0], [7.0], [0.0, 5.0]), [7.0, 7.0])

        with self.assertRaises(ValueError):
            newton_poly([1, 2, 3], [1, 4], [0.0])
        with self.assertRaises(ValueError):
            newton_poly([1, 1, 3], [1, 4, 9], [0.0])
