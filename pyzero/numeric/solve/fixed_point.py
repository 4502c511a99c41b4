from collections.abc import Callable
from enum import Enum

import numpy as np

from pyzero.numeric.solve.control import ErrorMode, SearchConfig


# ======================================================================

class SequenceClass(Enum):
    """Local behaviour of a fixed-point iteration."""
    CONVERGING = 'converging'
    DIVERGING = 'diverging'


# ----------------------------------------------------------------------

def classify_fixed_point(func: Callable[[float], float], x0: float,
                         tol: float = 1e-6, max_its: int = 200,
                         error_mode: ErrorMode = ErrorMode.RELATIVE,
                         verbose: bool = False) -> SequenceClass:
    r"""
    Estimate whether the fixed-point iteration :math:`x_{n+1} = g(x_n)`
    converges or diverges near `x0`.

    The iteration is run until the step size (normalised per
    `error_mode`) falls below `tol` or `max_its` iterations have been
    done.  The local slope of `g` is then estimated from the last two
    iterates:

    .. math:: g' \approx \frac{g(x_n) - g(x_{n-1})}{x_n - x_{n-1}}

    The sequence is classified as diverging if :math:`|g'| > 1`.

    Examples
    --------
    >>> import math
    >>> classify_fixed_point(math.cos, 1.0)
    <SequenceClass.CONVERGING: 'converging'>
    >>> classify_fixed_point(lambda x: 2 * x + 1, 0.0)
    <SequenceClass.DIVERGING: 'diverging'>

    Parameters
    ----------
    func : Callable[[float], float]
        The mapping :math:`g(x)`.
    x0 : float
        Starting value.
    tol : float, default = 1e-6
        Stop iterating when the normalised step is less than `tol`.
    max_its : int, default = 200
        Iteration limit.  Reaching this is not an error, the slope is
        simply estimated from the final iterates.
    error_mode : ErrorMode, default = ErrorMode.RELATIVE
        Normalisation of the step size.
    verbose : bool, default = False
        If True, print progress statements.

    Returns
    -------
    SequenceClass
        ``CONVERGING`` or ``DIVERGING``.  If the iterates become exactly
        stationary the sequence is ``CONVERGING``; a non-finite slope
        or an `OverflowError` from `func` is ``DIVERGING``.
    """
    config = SearchConfig(residual=tol, max_its=max_its,
                          error_mode=error_mode)
    if verbose:
        print(f"Classifying Fixed Point Iteration:")

    # Convert to float so integer seeds overflow rather than growing.
    x = 1.0 * x0
    x_next = func(x)
    for its in range(1, config.max_its + 1):
        x_prev, x = x, x_next
        try:
            x_next = func(x)
        except OverflowError:
            if verbose:
                print(f"... Iteration {its}: Overflow.")
            return SequenceClass.DIVERGING

        if verbose:
            print(f"... Iteration {its}: x = {x:.6G}")

        if config.converged(config.step_error(x_next, x)):
            break

    dx = x - x_prev
    if dx == 0:
        # Iterates are stationary.
        return SequenceClass.CONVERGING

    with np.errstate(over='ignore', invalid='ignore'):
        slope = np.float64(x_next - x) / dx

    if verbose:
        print(f"... Slope estimate = {slope:.6G}")

    if not np.isfinite(slope) or abs(slope) > 1:
        return SequenceClass.DIVERGING
    return SequenceClass.CONVERGING
