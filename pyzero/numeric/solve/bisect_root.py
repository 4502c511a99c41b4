"""
Bracketing root searches: bisection and regula falsi (false position).
Both require an interval over which the function changes sign, and keep
that property as the interval is narrowed.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import replace

import numpy as np

from pyzero.numeric.solve.control import (CancelToken, IterationResult,
                                          SearchConfig)
from pyzero.numeric.solve.exception import SolverError


# ======================================================================

def bisect_root(func: Callable[[float], float], lower: float,
                upper: float, residual: float = 1e-6, *,
                cancel: CancelToken = None,
                verbose: bool = False) -> Iterator[IterationResult]:
    # noinspection PyUnresolvedReferences
    r"""
    Approximate solution of :math:`f(x) = 0` on interval :math:`x \in
    [x_{lower}, x_{upper}]` by the bisection method.  For bisection to
    work :math:`f(x)` must change sign across the interval, i.e.
    ``func(lower)`` and ``func(upper)`` must have opposite sign (or one
    of them must be exactly zero).

    The search is lazy:  each midpoint is computed only when the next
    result is requested.

    Examples
    --------
    >>> from pyzero.numeric.solve import final_root
    >>> f = lambda x: (2*x - 1)*(x - 3)
    >>> list(bisect_root(f, 0, 1))  # Soln was in centre.
    [IterationResult(x=0.5, converged=True)]
    >>> round(final_root(bisect_root(lambda x: x**2 - x - 1, 1, 2)), 5)
    1.61803

    Parameters
    ----------
    func : Callable[[float], float]
        Function which we are searching for root.
    lower, upper : float
        Ends of the search interval, with `lower` < `upper`.
    residual : float, default = 1e-6
        End search when :math:`|f(x)| < residual`.  Also sets the
        iteration limit to :math:`\lceil \log_2((x_{upper} - x_{lower})
        / residual) \rceil`.
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
        Immediately, if ``lower >= upper`` or there is no sign change
        over the interval.
    NonConvergenceError
        During iteration, if the iteration limit is reached before a
        solution is found.  The limit bounds the interval width while
        convergence is tested on :math:`|f(x)|`, so a function steeper
        than unit slope near the root may still fail (e.g.
        :math:`x^2 - 2` on [0, 2]).
    SearchCancelled
        During iteration, if `cancel` was set.
    """
    f_lower, f_upper = _initial_bracket(func, lower, upper)
    config = SearchConfig(residual=residual, cancel=cancel)
    max_its = math.ceil(math.log2((upper - lower) / residual))
    config = replace(config, max_its=max(max_its, 1))
    return _bisect(func, lower, upper, f_lower, f_upper, config, verbose)


def _bisect(func, lower, upper, f_lower, f_upper, config: SearchConfig,
            verbose: bool) -> Iterator[IterationResult]:
    if verbose:
        print(f"Bisecting Root:")

    yield from _zero_end_point(lower, upper, f_lower, f_upper, verbose)
    if f_lower == 0 or f_upper == 0:
        return

    x_m = None
    for its in range(1, config.max_its + 1):
        config.check_cancelled('bisect_root', its)
        _check_bracket('bisect_root', lower, upper, f_lower, f_upper, its)

        # Compute midpoint.
        x_m = 0.5 * (lower + upper)
        f_m = func(x_m)

        if verbose:
            print(f"... Iteration {its}: x = [{lower}, {x_m}, {upper}], "
                  f"f = [{f_lower}, {f_m}, {f_upper}]")

        # Check stopping criteria.
        if abs(f_m) < config.residual:
            if verbose:
                print(f"... Converged.")
            yield IterationResult(x_m, True)
            return

        # Check which side root is on, narrow interval.
        if np.sign(f_m) == np.sign(f_lower):
            lower, f_lower = x_m, f_m
        else:
            upper, f_upper = x_m, f_m

        yield IterationResult(x_m, False)

    raise config.non_convergence('bisect_root', x=x_m, lower=lower,
                                 upper=upper, its=config.max_its,
                                 fevals=config.max_its + 2)


# ----------------------------------------------------------------------

def regula_falsi(func: Callable[[float], float], lower: float,
                 upper: float, residual: float = 1e-6,
                 f_residual: float = 1e-6, max_its: int = 200, *,
                 cancel: CancelToken = None,
                 verbose: bool = False) -> Iterator[IterationResult]:
    r"""
    Approximate solution of :math:`f(x) = 0` on interval :math:`x \in
    [x_{lower}, x_{upper}]` by the regula falsi (false position)
    method.  Each new point is where the chord joining the ends of the
    interval crosses zero:

    .. math:: x_{fp} = x_{upper} - f(x_{upper})\frac{x_{upper} -
              x_{lower}}{f(x_{upper}) - f(x_{lower})}

    The end of the interval having the same sign as :math:`f(x_{fp})` is
    then replaced, so the root stays bracketed.

    Parameters
    ----------
    func : Callable[[float], float]
        Function which we are searching for root.
    lower, upper : float
        Ends of the search interval, with `lower` < `upper`.
    residual : float, default = 1e-6
        Converged when the distance between successive false positions is
        less than `residual`...
    f_residual : float, default = 1e-6
        ... and :math:`|f(x_{fp})| < f_{residual}`.
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
        Immediately, for an illegal interval or tolerances.
    NonConvergenceError
        During iteration, if `max_its` is reached.
    SearchCancelled
        During iteration, if `cancel` was set.
    """
    config = SearchConfig(residual=residual, f_residual=f_residual,
                          max_its=max_its, cancel=cancel)
    f_lower, f_upper = _initial_bracket(func, lower, upper)
    return _regula_falsi(func, lower, upper, f_lower, f_upper, config,
                         verbose)


def _regula_falsi(func, lower, upper, f_lower, f_upper,
                  config: SearchConfig,
                  verbose: bool) -> Iterator[IterationResult]:
    if verbose:
        print(f"Regula Falsi Root:")

    yield from _zero_end_point(lower, upper, f_lower, f_upper, verbose)
    if f_lower == 0 or f_upper == 0:
        return

    x_fp, x_fp_prev = None, None
    for its in range(1, config.max_its + 1):
        config.check_cancelled('regula_falsi', its)
        _check_bracket('regula_falsi', lower, upper, f_lower, f_upper, its)

        x_fp = upper - f_upper * (upper - lower) / (f_upper - f_lower)
        f_fp = func(x_fp)
        if x_fp_prev is None:
            step = np.inf
        else:
            step = config.step_error(x_fp, x_fp_prev)

        if verbose:
            print(f"... Iteration {its}: x = [{lower}, {x_fp}, {upper}], "
                  f"f = [{f_lower}, {f_fp}, {f_upper}]")

        if f_fp == 0 or config.converged(step, f_fp):
            if verbose:
                print(f"... Converged.")
            yield IterationResult(x_fp, True)
            return

        if np.sign(f_fp) == np.sign(f_lower):
            lower, f_lower = x_fp, f_fp
        else:
            upper, f_upper = x_fp, f_fp

        x_fp_prev = x_fp
        yield IterationResult(x_fp, False)

    raise config.non_convergence('regula_falsi', x=x_fp, lower=lower,
                                 upper=upper, its=config.max_its,
                                 fevals=config.max_its + 2)


# ======================================================================

def _initial_bracket(func, lower, upper) -> tuple[float, float]:
    """Check the starting interval, returning `f(lower)`, `f(upper)`."""
    if not lower < upper:
        raise ValueError(f"Require lower < upper, got [{lower}, "
                         f"{upper}].")

    f_lower, f_upper = func(lower), func(upper)
    if not np.sign(f_lower) * np.sign(f_upper) <= 0:
        raise ValueError(f"f(lower) and f(upper) must have opposite "
                         f"sign, got {f_lower} and {f_upper}.")

    return f_lower, f_upper


def _check_bracket(method: str, lower, upper, f_lower, f_upper,
                   its: int):
    # NaN from `func` ends up here.
    if not (lower < upper and np.sign(f_lower) * np.sign(f_upper) <= 0):
        raise SolverError(f"{method}() lost the bracket:", flag=2,
                          details="Interval no longer brackets a root.",
                          lower=lower, upper=upper, f_lower=f_lower,
                          f_upper=f_upper, its=its)


def _zero_end_point(lower, upper, f_lower, f_upper,
                    verbose: bool) -> Iterator[IterationResult]:
    """Yield the end point which is exactly a root, if any."""
    for x, fx in ((lower, f_lower), (upper, f_upper)):
        if fx == 0:
            if verbose:
                print(f"... Converged (end point x = {x}).")
            yield IterationResult(x, True)
            return
