import math
from unittest import TestCase


# ======================================================================

def f_xsinx(x):
    return x * math.sin(x) - 1


XSINX_ROOT = 1.114157141


# ======================================================================

class TestBisectRoot(TestCase):
    def test_bisect_root(self):
        from pyzero.numeric.solve import bisect_root

        # Check normal operation.
        res = list(bisect_root(f_xsinx, 0.0, 2.0))
        self.assertTrue(res[-1].converged)
        self.assertAlmostEqual(res[-1].x, XSINX_ROOT, delta=1e-6)
        self.assertLess(abs(f_xsinx(res[-1].x)), 1e-6)
        self.assertFalse(any(r.converged for r in res[:-1]))

        # Number of steps is limited by the interval size.
        self.assertLessEqual(len(res), math.ceil(math.log2(2.0 / 1e-6)))

    def test_bisect_root_reference(self):
        from scipy.optimize import brentq
        from pyzero.numeric.solve import bisect_root, final_root

        x_ref = brentq(f_xsinx, 0.0, 2.0, xtol=1e-14)
        x = final_root(bisect_root(f_xsinx, 0.0, 2.0))
        self.assertAlmostEqual(x, x_ref, delta=1e-6)

    def test_bisect_root_illegal(self):
        from pyzero.numeric.solve import bisect_root

        # Errors are raised by the call, before iterating.
        with self.assertRaises(ValueError):
            bisect_root(f_xsinx, 2.0, 0.0)
        with self.assertRaises(ValueError):
            bisect_root(f_xsinx, 1.0, 1.0)
        with self.assertRaises(ValueError):
            bisect_root(lambda x: x ** 2 + 1, -1.0, 1.0)
        with self.assertRaises(ValueError):
            bisect_root(f_xsinx, 0.0, 2.0, residual=0.0)

    def test_bisect_root_non_convergence(self):
        from pyzero.numeric.solve import bisect_root, NonConvergenceError

        # Steep function can't meet |f(x)| < residual within the
        # iteration limit (20 its for this interval).
        results = []
        with self.assertRaises(NonConvergenceError) as cm:
            for r in bisect_root(lambda x: 1e6 * (x - 0.3), 0.0, 1.0):
                results.append(r)

        self.assertEqual(len(results), 20)
        self.assertFalse(any(r.converged for r in results))
        self.assertEqual(cm.exception.flag, 1)
        self.assertAlmostEqual(cm.exception.x, 0.3, delta=1e-5)

        # Slope > 1 at the root: the interval limit is reached first.
        with self.assertRaises(NonConvergenceError) as cm:
            list(bisect_root(lambda x: x * x - 2, 0.0, 2.0))
        self.assertEqual(cm.exception.max_its, 21)
        self.assertAlmostEqual(cm.exception.x, math.sqrt(2), delta=1e-6)

    def test_bisect_root_end_point(self):
        from pyzero.numeric.solve import bisect_root

        res = list(bisect_root(lambda x: x - 1, 1.0, 3.0))
        self.assertEqual(res, [(1.0, True)])

        res = list(bisect_root(lambda x: x - 3, 1.0, 3.0))
        self.assertEqual(res, [(3.0, True)])

    def test_bisect_root_lost_bracket(self):
        from pyzero.numeric.solve import bisect_root, SolverError

        def f_nan(x):
            return math.nan if 0.4 < x < 0.6 else x - 0.55

        with self.assertRaises(SolverError) as cm:
            list(bisect_root(f_nan, 0.0, 1.0))
        self.assertEqual(cm.exception.flag, 2)

    def test_bisect_root_lazy(self):
        from pyzero.numeric.solve import bisect_root

        calls = []

        def f_count(x):
            calls.append(x)
            return f_xsinx(x)

        gen = bisect_root(f_count, 0.0, 2.0)
        self.assertEqual(len(calls), 2)  # End points only.

        first = next(gen)
        self.assertEqual(len(calls), 3)
        self.assertEqual(first, (1.0, False))

    def test_bisect_root_repeatable(self):
        from pyzero.numeric.solve import bisect_root

        self.assertEqual(list(bisect_root(f_xsinx, 0.0, 2.0)),
                         list(bisect_root(f_xsinx, 0.0, 2.0)))

    def test_bisect_root_cancel(self):
        from pyzero.numeric.solve import (bisect_root, CancelToken,
                                          SearchCancelled)

        # Cancel before starting.
        token = CancelToken()
        token.cancel()
        with self.assertRaises(SearchCancelled):
            list(bisect_root(f_xsinx, 0.0, 2.0, cancel=token))

        # Cancel part way.
        token = CancelToken()
        gen = bisect_root(f_xsinx, 0.0, 2.0, cancel=token)
        self.assertFalse(next(gen).converged)
        token.cancel()
        with self.assertRaises(SearchCancelled) as cm:
            next(gen)
        self.assertEqual(cm.exception.its, 2)


# ----------------------------------------------------------------------

class TestRegulaFalsi(TestCase):
    def test_regula_falsi(self):
        from pyzero.numeric.solve import regula_falsi

        res = list(regula_falsi(f_xsinx, 0.0, 2.0))
        self.assertTrue(res[-1].converged)
        self.assertAlmostEqual(res[-1].x, XSINX_ROOT, delta=1e-6)
        self.assertLess(abs(f_xsinx(res[-1].x)), 1e-6)
        self.assertFalse(any(r.converged for r in res[:-1]))

        # All points stay inside the original interval.
        self.assertTrue(all(0.0 <= r.x <= 2.0 for r in res))

    def test_regula_falsi_matches_bisection(self):
        from pyzero.numeric.solve import (bisect_root, regula_falsi,
                                          final_root)

        x_bisect = final_root(bisect_root(f_xsinx, 0.0, 2.0))
        x_rf = final_root(regula_falsi(f_xsinx, 0.0, 2.0))
        self.assertAlmostEqual(x_bisect, x_rf, delta=1e-6)

    def test_regula_falsi_illegal(self):
        from pyzero.numeric.solve import regula_falsi

        with self.assertRaises(ValueError):
            regula_falsi(lambda x: 1 / (x - 2), 8.0, 7.0)
        with self.assertRaises(ValueError):
            regula_falsi(lambda x: x ** 2 + 1, -1.0, 1.0)
        with self.assertRaises(ValueError):
            regula_falsi(f_xsinx, 0.0, 2.0, f_residual=-1.0)
        with self.assertRaises(ValueError):
            regula_falsi(f_xsinx, 0.0, 2.0, max_its=0)

    def test_regula_falsi_non_convergence(self):
        from pyzero.numeric.solve import regula_falsi, NonConvergenceError

        gen = regula_falsi(f_xsinx, 0.0, 2.0, max_its=1)
        self.assertFalse(next(gen).converged)
        with self.assertRaises(NonConvergenceError):
            next(gen)

    def test_regula_falsi_exact_root(self):
        from pyzero.numeric.solve import regula_falsi

        # Straight line: the first false position is exact.
        res = list(regula_falsi(lambda x: 2 * x - 1, 0.0, 2.0))
        self.assertEqual(res, [(0.5, True)])

    def test_regula_falsi_repeatable(self):
        from pyzero.numeric.solve import regula_falsi

        self.assertEqual(list(regula_falsi(f_xsinx, 0.0, 2.0)),
                         list(regula_falsi(f_xsinx, 0.0, 2.0)))

    def test_regula_falsi_cancel(self):
        from pyzero.numeric.solve import (regula_falsi, CancelToken,
                                          SearchCancelled)

        # Cancel before starting.
        token = CancelToken()
        token.cancel()
        with self.assertRaises(SearchCancelled) as cm:
            list(regula_falsi(f_xsinx, 0.0, 2.0, cancel=token))
        self.assertEqual(cm.exception.its, 1)

        # Cancel part way, earlier results are unaffected.
        token = CancelToken()
        gen = regula_falsi(f_xsinx, 0.0, 2.0, cancel=token)
        first = next(gen)
        self.assertEqual(first, next(regula_falsi(f_xsinx, 0.0, 2.0)))
        token.cancel()
        with self.assertRaises(SearchCancelled) as cm:
            next(gen)
        self.assertEqual(cm.exception.its, 2)
