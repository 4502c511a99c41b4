import math
from unittest import TestCase


# ======================================================================

def f_cubic(x):
    return x ** 3 - 13 * x - 12  # Roots at -3, -1, 4.


# ======================================================================

class TestMuller(TestCase):
    def test_muller(self):
        from pyzero.numeric.solve import muller

        # Check normal operation.
        res = list(muller(f_cubic, 4.5, 5.5, 5.0))
        self.assertTrue(res[-1].converged)
        self.assertAlmostEqual(res[-1].x, 4.0, delta=1e-6)
        self.assertLess(abs(f_cubic(res[-1].x)), 1e-6)
        self.assertFalse(any(r.converged for r in res[:-1]))

        # First step from the standard worked example.
        self.assertAlmostEqual(res[0].x, 3.976487, places=5)

    def test_muller_transcendental(self):
        from scipy.optimize import brentq
        from pyzero.numeric.solve import muller, final_root

        def g(x):
            return math.cos(x) - x

        x_ref = brentq(g, 0.0, 1.0, xtol=1e-14)
        x = final_root(muller(g, 0.0, 0.5, 1.0))
        self.assertAlmostEqual(x, x_ref, delta=1e-6)

    def test_muller_not_distinct(self):
        from pyzero.numeric.solve import muller, DegenerateStepError

        with self.assertRaises(DegenerateStepError) as cm:
            list(muller(f_cubic, 4.5, 4.5, 5.0))
        self.assertEqual(cm.exception.flag, 2)

    def test_muller_no_real_root(self):
        from pyzero.numeric.solve import muller, DegenerateStepError

        # Negative discriminant is taken as zero, giving z = -2c / b = -2
        # from x = 1.  This lands on the existing point x = -1.
        gen = muller(lambda x: x ** 2 + 1, -1.0, 0.0, 1.0)
        self.assertEqual(next(gen), (-1.0, False))
        with self.assertRaises(DegenerateStepError):
            next(gen)

    def test_muller_non_convergence(self):
        from pyzero.numeric.solve import muller, NonConvergenceError

        results = []
        with self.assertRaises(NonConvergenceError):
            for r in muller(f_cubic, 4.5, 5.5, 5.0, max_its=1):
                results.append(r)
        self.assertEqual(len(results), 1)

    def test_muller_illegal(self):
        from pyzero.numeric.solve import muller

        with self.assertRaises(ValueError):
            muller(f_cubic, 4.5, 5.5, 5.0, f_residual=0.0)

    def test_muller_function_evaluations(self):
        from pyzero.numeric.solve import muller

        calls = []

        def f_count(x):
            calls.append(x)
            return f_cubic(x)

        res = list(muller(f_count, 4.5, 5.5, 5.0))
        self.assertEqual(len(calls), 3 + len(res))

    def test_muller_repeatable(self):
        from pyzero.numeric.solve import muller

        self.assertEqual(list(muller(f_cubic, 4.5, 5.5, 5.0)),
                         list(muller(f_cubic, 4.5, 5.5, 5.0)))

    def test_muller_cancel(self):
        from pyzero.numeric.solve import muller, CancelToken, SearchCancelled

        # Cancel before starting.
        token = CancelToken()
        token.cancel()
        with self.assertRaises(SearchCancelled) as cm:
            list(muller(f_cubic, 4.5, 5.5, 5.0, cancel=token))
        self.assertEqual(cm.exception.its, 1)

        # Cancel part way.
        token = CancelToken()
        gen = muller(f_cubic, 4.5, 5.5, 5.0, cancel=token)
        self.assertFalse(next(gen).converged)
        token.cancel()
        with self.assertRaises(SearchCancelled) as cm:
            next(gen)
        self.assertEqual(cm.exception.its, 2)
