#!usr/bin/env python3

# Examples of finding the roots of a scalar function, starting with a
# coarse scan then refining each candidate with different methods.

import math

from pyzero.numeric.solve import (bisect_root, final_root, locate_roots,
                                  muller, newton_raphson, regula_falsi,
                                  secant, SolverError)


def f(x):
    """Simple root at x = -1 and a double root at x = 1."""
    return x ** 3 - x ** 2 - x + 1


def df_dx(x):
    return 3 * x ** 2 - 2 * x - 1


lower, upper, n_sub = -1.2, 2.0, 1000
h = (upper - lower) / n_sub

for i, x_approx in locate_roots(f, lower, upper, n_sub, verbose=True):
    print(f"\nCandidate {i} at x ≈ {x_approx:.5f}:")

    # Only a sign change can be bisected.
    if f(x_approx - h) * f(x_approx + h) < 0:
        x = final_root(bisect_root(f, x_approx - h, x_approx + h,
                                   verbose=True))
        print(f"Bisection:    {x:.9f}")
        x = final_root(regula_falsi(f, x_approx - h, x_approx + h))
        print(f"Regula Falsi: {x:.9f}")

    x = final_root(newton_raphson(f, df_dx, x_approx + h))
    print(f"Newton:       {x:.9f}")
    x = final_root(secant(f, x_approx - h, x_approx + h))
    print(f"Secant:       {x:.9f}")
    try:
        x = final_root(muller(f, x_approx - h, x_approx + h, x_approx))
        print(f"Muller:       {x:.9f}")
    except SolverError as e:
        print(f"Muller:       failed, {e.details}")

# Show convergence of a single search.
print()
for its, (x, converged) in enumerate(secant(math.cos, 1.0, 2.0), 1):
    print(f"{its}: x = {x:.12f} {'*' if converged else ''}")
