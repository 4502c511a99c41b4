from __future__ import annotations

import operator
from collections import namedtuple
from collections.abc import Callable, Iterator

import numpy as np

from pyzero.numeric.solve.control import Bracket, CancelToken, SearchConfig
from pyzero.numeric.solve.exception import NonConvergenceError

RootCandidate = namedtuple('RootCandidate', ('index', 'x'))


# ======================================================================

def locate_roots(func: Callable[[float], float], lower: float,
                 upper: float, n_sub: int = 100, f_residual: float = 1e-2,
                 *, verbose: bool = False) -> Iterator[RootCandidate]:
    """
    Find the approximate locations of the roots of `func` on the
    interval [`lower`, `upper`] by scanning `n_sub` equal subintervals.
    The results are suitable as brackets or starting points for the
    other root searches.

    Parameters
    ----------
    func : Callable[[float], float]
        Scalar function to scan.
    lower, upper : float
        Ends of the interval, with `lower` < `upper`.
    n_sub : int, default = 100
        Number of equal subintervals.
    f_residual : float, default = 1e-2
        Points where ``|f(x)| < f_residual`` are also checked for a
        tangent root (see Notes).
    verbose : bool, default = False
        If True, print each candidate found.

    Returns
    -------
    Iterator[RootCandidate]
        Candidate roots `(index, x)` in increasing order of `x`, with
        `index` counting from 1.

    Raises
    ------
    ValueError
        Immediately, if `func` is `None`, ``lower >= upper``, `n_sub`
        is not an integer >= 1 or ``f_residual <= 0``.

    Notes
    -----
    At each subinterval boundary :math:`x_i` a candidate is reported
    if any of these is true (only one candidate per boundary):

    - :math:`f(x_i) = 0` exactly.  The candidate is :math:`x_i`.
    - :math:`f(x_{i-1})` and :math:`f(x_i)` have opposite signs.  The
      candidate is the midpoint of the subinterval.
    - :math:`x_i` is an interior point with :math:`|f(x_i)| <
      f_{residual}` where the slope changes sign on either side, i.e.
      :math:`f` touches (or nearly touches) zero without crossing.  The
      candidate is :math:`x_i`.

    Examples
    --------
    Equation :math:`x^3 - x^2 - x + 1 = (x - 1)^2(x + 1)` has a simple
    root at -1 and a double root at 1:

    >>> f = lambda x: x**3 - x**2 - x + 1
    >>> [(i, round(x, 2)) for i, x in locate_roots(f, -1.2, 2.0, 1000)]
    [(1, -1.0), (2, 1.0)]
    """
    if func is None or not callable(func):
        raise ValueError(f"'func' must be callable, got {func!r}.")

    if not lower < upper:
        raise ValueError(f"Require lower < upper, got [{lower}, "
                         f"{upper}].")

    try:
        n_sub = operator.index(n_sub)
    except TypeError:
        raise ValueError(f"'n_sub' must be an integer, got "
                         f"{n_sub!r}.") from None
    if n_sub < 1:
        raise ValueError(f"Require n_sub > 0, got {n_sub}.")

    if not f_residual > 0:
        raise ValueError(f"Require f_residual > 0, got {f_residual}.")

    return _scan_roots(func, lower, upper, n_sub, f_residual, verbose)


def _scan_roots(func, lower, upper, n_sub, f_residual,
                verbose) -> Iterator[RootCandidate]:
    if verbose:
        print(f"Locating Roots on [{lower}, {upper}] ({n_sub} "
              f"subintervals):")

    x = np.linspace(lower, upper, num=n_sub + 1)
    y = np.fromiter((func(x_i) for x_i in x.tolist()), dtype=float,
                    count=n_sub + 1)

    # Classify every boundary in one pass.  NaN never matches.
    exact = y == 0
    crossing = np.zeros_like(exact)
    crossing[1:] = y[:-1] * y[1:] < 0
    dy = np.diff(y)
    touching = np.zeros_like(exact)
    touching[1:-1] = (np.abs(y[1:-1]) < f_residual) & (dy[:-1] * dy[1:] < 0)

    index = 0
    for i in range(n_sub + 1):
        if exact[i]:
            x_root = x[i]
        elif crossing[i]:
            x_root = 0.5 * (x[i - 1] + x[i])
        elif touching[i]:
            x_root = x[i]
        else:
            continue

        index += 1
        if verbose:
            print(f"... Root {index}: x ≈ {x_root:.6G}")
        yield RootCandidate(index, float(x_root))




# ----------------------------------------------------------------------

def bracket_root(func: Callable[[float], float], lower: float,
                 upper: float, grow_factor: float = 0.5,
                 max_its: int = 50, *,
                 x_limits: tuple[float, float] = (-np.inf, np.inf),
                 dx_max: float = np.inf, cancel: CancelToken = None,
                 verbose: bool = False) -> Bracket:
    r"""
    Widen the interval [`lower`, `upper`] outward until it brackets a
    root of `func`.  Use this where no finite search interval is known
    in advance, otherwise `locate_roots` is preferred.

    At each iteration one end is moved outward by

    .. math:: \Delta x = \min(k_{grow}(x_{upper} - x_{lower}),
              \Delta x_{max})

    The end with the smaller :math:`|f(x)|` is moved (it is presumably
    closer to a root), unless it already sits on its limit in
    `x_limits`, in which case the other end is moved.

    Examples
    --------
    Equation :math:`x^2 - 3x + 2 = 0` has roots at 1 and 2:

    >>> def example_fn(x):
    ...     return x**2 - 3 * x + 2
    >>> bracket_root(example_fn, -2, -1)  # Grows upward.
    Bracket(lower=-2, upper=1.375)
    >>> bracket_root(example_fn, 3, 4)  # Grows downward.
    Bracket(lower=1.75, upper=4)

    Parameters
    ----------
    func : Callable[[float], float]
        Scalar function to bracket.
    lower, upper : float
        Initial interval, with `lower` < `upper`.
    grow_factor : float, default = 0.5
        Fraction of the current width added to one end per iteration.
    max_its : int, default = 50
        Maximum number of iterations (i.e. moves of an end).
    x_limits : tuple[float, float], default = (-∞, +∞)
        The interval is never widened beyond these values.  The initial
        interval must lie within them.
    dx_max : float, default = ∞
        Largest single move of an end.
    cancel : CancelToken, optional
        Checked at the start of each iteration.
    verbose : bool, default = False
        If True, print progress statements.

    Returns
    -------
    Bracket
        Interval over which `func` changes sign, or where `func` is
        exactly zero at one end.

    Raises
    ------
    ValueError
        For an illegal initial interval, `grow_factor`, `dx_max` or
        `max_its`.
    NonConvergenceError
        With ``flag == 1`` if `max_its` is reached, or ``flag == 2`` if
        both ends have reached `x_limits`.  Attributes `lower`,
        `upper`, `f_lower`, `f_upper`, `its` and `fevals` give the final
        state.
    SearchCancelled
        If `cancel` was set.
    """
    config = SearchConfig(max_its=max_its, cancel=cancel)
    x_min, x_max = x_limits
    if not lower < upper:
        raise ValueError(f"Require lower < upper, got [{lower}, "
                         f"{upper}].")
    if not x_min <= lower or not upper <= x_max:
        raise ValueError(f"Interval [{lower}, {upper}] is outside "
                         f"x_limits {x_limits}.")
    if not grow_factor > 0 or not dx_max > 0:
        raise ValueError("Require grow_factor > 0 and dx_max > 0.")

    if verbose:
        print(f"Bracketing Root:")

    f_lower, f_upper = func(lower), func(upper)
    fevals = 2
    its = 0
    while np.sign(f_lower) * np.sign(f_upper) > 0:
        its += 1
        if its > config.max_its:
            raise config.non_convergence(
                'bracket_root', lower=lower, upper=upper, f_lower=f_lower,
                f_upper=f_upper, its=config.max_its, fevals=fevals)
        config.check_cancelled('bracket_root', its)

        can_lower, can_upper = lower > x_min, upper < x_max
        if not (can_lower or can_upper):
            raise NonConvergenceError(
                "bracket_root() failed to converge:", flag=2,
                details="Reached x_limits.", lower=lower, upper=upper,
                f_lower=f_lower, f_upper=f_upper, its=its - 1,
                fevals=fevals)

        dx = min(grow_factor * (upper - lower), dx_max)
        if can_lower and (abs(f_lower) < abs(f_upper) or not can_upper):
            lower = max(lower - dx, x_min)
            f_lower = func(lower)
        else:
            upper = min(upper + dx, x_max)
            f_upper = func(upper)
        fevals += 1

        if verbose:
            print(f"... Iteration {its}: x = [{lower}, {upper}], "
                  f"f = [{f_lower}, {f_upper}]")

    if verbose:
        print(f"... Bracketed.")
    return Bracket(lower, upper)
