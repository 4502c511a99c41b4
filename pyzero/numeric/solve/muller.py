from __future__ import annotations

import math
from collections.abc import Callable, Iterator

from pyzero.numeric.solve.control import (CancelToken, ErrorMode,
                                          IterationResult, SearchConfig)
from pyzero.numeric.solve.exception import DegenerateStepError


# ======================================================================

def muller(func: Callable[[float], float], a0: float, a1: float,
           a2: float, residual: float = 1e-6, f_residual: float = 1e-6,
           max_its: int = 200, *, cancel: CancelToken = None,
           verbose: bool = False) -> Iterator[IterationResult]:
    r"""
    Find a zero of `func` using Muller's method.  A quadratic is fitted
    through the three points :math:`(a_0, f_0)`, :math:`(a_1, f_1)`,
    :math:`(a_2, f_2)`, written relative to :math:`a_2`:

    .. math:: p(x) = a(x - a_2)^2 + b(x - a_2) + c

    The next estimate is the root of :math:`p(x)` nearest :math:`a_2`,
    :math:`a_2 + z`, computed in the numerically stable form:

    .. math:: z = \frac{-2c}{b \pm \sqrt{b^2 - 4ac}}

    Where the sign is chosen to match :math:`b`, giving the denominator
    of largest magnitude.

    Examples
    --------
    Equation :math:`x^3 - 13x - 12 = 0` has roots at -3, -1 and 4 [1]_:

    >>> from pyzero.numeric.solve import final_root
    >>> x = final_root(muller(lambda x: x**3 - 13*x - 12, 4.5, 5.5, 5.0))
    >>> round(x, 6)
    4.0

    Parameters
    ----------
    func : Callable[[float], float]
        Function which we are searching for root.
    a0, a1, a2 : float
        Three distinct starting points.  `a2` is taken as the current
        estimate.
    residual : float, default = 1e-6
        Converged when :math:`|z| / |a_2 + z| < residual`...
    f_residual : float, default = 1e-6
        ... and :math:`|f(a_2 + z)| < f_{residual}`.
    max_its : int, default = 200
        Maximum number of iterations.
    cancel : CancelToken, optional
        Checked at the start of each iteration.
    verbose : bool, default = False
        If True, print progress statements.

    Returns
    -------
    Iterator[IterationResult]
        One `(x, False)` result per iteration, ending with the accepted
        root `(x, True)`.

    Raises
    ------
    ValueError
        Immediately, for illegal tolerances.
    DegenerateStepError
        During iteration, if the three points are not distinct or the
        quadratic gives no step (:math:`b \pm \sqrt{b^2 - 4ac} = 0`).
    NonConvergenceError
        During iteration, if `max_its` is reached.
    SearchCancelled
        During iteration, if `cancel` was set.

    Notes
    -----
    - Complex roots are not pursued.  If :math:`b^2 < 4ac` the
      discriminant is taken as zero, so the step reduces to
      :math:`z = -2c / b`, i.e. twice the Newton step of the fitted
      parabola at :math:`a_2`.
    - After each step the old point farthest from the new estimate is
      dropped.  Function values are carried with their points so `func`
      is evaluated only once per iteration.

    References
    ----------
    .. [1] Chapra, S. C. and Canale, R. P. *Numerical Methods for
       Engineers*, 6th ed. McGraw-Hill, 2010.  Section 7.4: "Muller's
       Method".
    """
    config = SearchConfig(residual=residual, f_residual=f_residual,
                          max_its=max_its, error_mode=ErrorMode.RELATIVE,
                          cancel=cancel)
    return _muller(func, a0, a1, a2, config, verbose)


def _muller(func, a0, a1, a2, config: SearchConfig,
            verbose: bool) -> Iterator[IterationResult]:
    if verbose:
        print(f"Muller Root:")

    pts = [(x, func(x)) for x in (1.0 * a0, 1.0 * a1, 1.0 * a2)]
    fevals = 3
    x_new = pts[2][0]
    for its in range(1, config.max_its + 1):
        config.check_cancelled('muller', its)
        (x0, f0), (x1, f1), (x2, f2) = pts

        # Solve for the coefficients of the quadratic.
        d0, d1 = x0 - x2, x1 - x2
        det = d0 * d1 * (x0 - x1)
        if det == 0:
            raise DegenerateStepError(
                "muller() points were not distinct:", flag=2,
                details="Zero determinant.", x0=x0, x1=x1, x2=x2, its=its,
                fevals=fevals)

        e0, e1 = f0 - f2, f1 - f2
        a = (d1 * e0 - d0 * e1) / det
        b = (d0 ** 2 * e1 - d1 ** 2 * e0) / det
        c = f2

        # Real roots only.  Sign of the discriminant matches b.
        disc_sq = b ** 2 - 4 * a * c
        disc = math.sqrt(disc_sq) if disc_sq >= 0 else 0.0
        if b < 0:
            disc = -disc

        if b + disc == 0:
            raise DegenerateStepError(
                "muller() quadratic gave no step:", flag=3,
                details="Zero denominator (b ± discriminant).", x0=x0,
                x1=x1, x2=x2, a=a, b=b, c=c, its=its, fevals=fevals)

        z = -2 * c / (b + disc)
        x_new = x2 + z
        f_new = func(x_new)
        fevals += 1
        step = config.step_error(x_new, x2)

        if verbose:
            print(f"... Iteration {its}: x = {x_new:.6G}, "
                  f"f(x) = {f_new:.5G}, step = {step:.5G}")

        if config.converged(step, f_new):
            if verbose:
                print(f"... Converged.")
            yield IterationResult(x_new, True)
            return

        # Keep the two old points nearest to the new estimate; the
        # nearer one becomes a1.
        near = sorted(pts, key=lambda p: abs(p[0] - x_new))[:2]
        pts = [near[1], near[0], (x_new, f_new)]
        yield IterationResult(x_new, False)

    raise config.non_convergence('muller', x=x_new, its=config.max_its,
                                 fevals=fevals)
