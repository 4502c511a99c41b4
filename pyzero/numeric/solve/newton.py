"""
Open root searches:  Newton-Raphson (requires the derivative) and the
secant method (derivative free, two starting points).  Neither method
keeps a bracket, so a zero denominator at any step is fatal.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator

from pyzero.numeric.solve.control import (CancelToken, ErrorMode,
                                          IterationResult, SearchConfig)
from pyzero.numeric.solve.exception import DegenerateStepError


# ======================================================================

def newton_raphson(func: Callable[[float], float],
                   fprime: Callable[[float], float], x0: float,
                   residual: float = 1e-6, max_its: int = 200, *,
                   error_mode: ErrorMode = ErrorMode.ABSOLUTE,
                   cancel: CancelToken = None,
                   verbose: bool = False) -> Iterator[IterationResult]:
    r"""
    Find a zero of `func` using the Newton-Raphson method:

    .. math:: x_{n+1} = x_n - \frac{f(x_n)}{f'(x_n)}

    Examples
    --------
    >>> res = list(newton_raphson(lambda x: x**2 - 4, lambda x: 2*x, 1.0))
    >>> res[0]
    IterationResult(x=2.5, converged=False)
    >>> round(res[-1].x, 9), res[-1].converged
    (2.0, True)

    Parameters
    ----------
    func : Callable[[float], float]
        Function which we are searching for root.
    fprime : Callable[[float], float]
        Derivative of `func`.
    x0 : float
        Starting estimate.
    residual : float, default = 1e-6
        Converged when :math:`|x_{n+1} - x_n| < residual` (normalised per
        `error_mode`).
    max_its : int, default = 200
        Maximum number of iterations.
    error_mode : ErrorMode, default = ErrorMode.ABSOLUTE
        Normalisation of the step size.
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
        During iteration, if :math:`f'(x_n) = 0`.
    NonConvergenceError
        During iteration, if `max_its` is reached.
    SearchCancelled
        During iteration, if `cancel` was set.
    """
    config = SearchConfig(residual=residual, max_its=max_its,
                          error_mode=error_mode, cancel=cancel)
    return _newton_raphson(func, fprime, x0, config, verbose)


def _newton_raphson(func, fprime, x0, config: SearchConfig,
                    verbose: bool) -> Iterator[IterationResult]:
    if verbose:
        print(f"Newton-Raphson Root:")

    # Convert to float (don't use float(x0) so user types still work).
    x = 1.0 * x0
    fevals = 0
    for its in range(1, config.max_its + 1):
        config.check_cancelled('newton_raphson', its)

        fx, dfx = func(x), fprime(x)
        fevals += 2
        if dfx == 0:
            # Reached a level state -> df/dx = 0.
            raise DegenerateStepError(
                "newton_raphson() derivative was zero:", flag=2,
                details="Zero derivative, no step possible.", x=x, fx=fx,
                its=its, fevals=fevals)

        x_next = x - fx / dfx
        step = config.step_error(x_next, x)

        if verbose:
            print(f"... Iteration {its}: x = {x_next:.6G}, "
                  f"f(x_prev) = {fx:.5G}, step = {step:.5G}")

        if config.converged(step):
            if verbose:
                print(f"... Converged.")
            yield IterationResult(x_next, True)
            return

        x = x_next
        yield IterationResult(x, False)

    raise config.non_convergence('newton_raphson', x=x,
                                 its=config.max_its, fevals=fevals)


# ----------------------------------------------------------------------

def secant(func: Callable[[float], float], x0: float, x1: float,
           residual: float = 1e-6, max_its: int = 200, *,
           error_mode: ErrorMode = ErrorMode.ABSOLUTE,
           cancel: CancelToken = None,
           verbose: bool = False) -> Iterator[IterationResult]:
    r"""
    Find a zero of `func` using the secant method, which replaces the
    derivative in Newton-Raphson with the slope through the two most
    recent points:

    .. math:: x_{n+1} = x_n - f(x_n)\frac{x_n - x_{n-1}}{f(x_n) -
              f(x_{n-1})}

    Parameters
    ----------
    func : Callable[[float], float]
        Function which we are searching for root.
    x0, x1 : float
        Starting points, taken as :math:`x_{n-1}` and :math:`x_n`
        respectively.
    residual : float, default = 1e-6
        Converged when :math:`|x_{n+1} - x_n| < residual` (normalised per
        `error_mode`).
    max_its : int, default = 200
        Maximum number of iterations.
    error_mode : ErrorMode, default = ErrorMode.ABSOLUTE
        Normalisation of the step size.
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
        During iteration, if :math:`f(x_n) = f(x_{n-1})`.  This includes
        ``x0 == x1``.
    NonConvergenceError
        During iteration, if `max_its` is reached.
    SearchCancelled
        During iteration, if `cancel` was set.
    """
    config = SearchConfig(residual=residual, max_its=max_its,
                          error_mode=error_mode, cancel=cancel)
    return _secant(func, x0, x1, config, verbose)


def _secant(func, x0, x1, config: SearchConfig,
            verbose: bool) -> Iterator[IterationResult]:
    if verbose:
        print(f"Secant Root:")

    x_prev, x = 1.0 * x0, 1.0 * x1
    f_prev = func(x_prev)
    fevals = 1
    for its in range(1, config.max_its + 1):
        config.check_cancelled('secant', its)

        fx = func(x)
        fevals += 1
        if fx == f_prev:
            # Reached a level state: f(x_n) = f(x_n-1) -> df/dx = 0.
            raise DegenerateStepError(
                "secant() function values were equal:", flag=2,
                details="Zero secant denominator.", x=x, x_prev=x_prev,
                fx=fx, its=its, fevals=fevals)

        x_next = x - fx * (x - x_prev) / (fx - f_prev)
        step = config.step_error(x_next, x)

        if verbose:
            print(f"... Iteration {its}: x = {x_next:.6G}, "
                  f"f(x_prev) = {fx:.5G}, step = {step:.5G}")

        if config.converged(step):
            if verbose:
                print(f"... Converged.")
            yield IterationResult(x_next, True)
            return

        x_prev, f_prev, x = x, fx, x_next
        yield IterationResult(x, False)

    raise config.non_convergence('secant', x=x, its=config.max_its,
                                 fevals=fevals)
