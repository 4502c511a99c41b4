"""
Shared iteration control used by every root search: tolerances, the
iteration budget, cooperative cancellation and the result types emitted
by each search.
"""
from __future__ import annotations

import operator
import threading
from collections import namedtuple
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from pyzero.numeric.solve.exception import (NonConvergenceError,
                                            SearchCancelled, SolverError,
                                            UnsupportedModeError)

# Guards the relative step size against division by a zero estimate.
ZERO_GUARD = 1e-6

IterationResult = namedtuple('IterationResult', ('x', 'converged'))
IterationResult.__doc__ = """
Single result from a root search: the current estimate `x` and whether
it was accepted (`converged`).  Only the final result of a successful
search has ``converged == True``."""

Bracket = namedtuple('Bracket', ('lower', 'upper'))
Bracket.__doc__ = """
Interval ``lower < upper`` where ``f(lower)`` and ``f(upper)`` have
opposite signs (or either is exactly zero)."""


# ======================================================================

class ErrorMode(Enum):
    """How the size of a step (or error) is normalised."""
    ABSOLUTE = 'absolute'
    RELATIVE = 'relative'


def _check_mode(mode) -> ErrorMode:
    if not isinstance(mode, ErrorMode):
        raise UnsupportedModeError(f"Unsupported error mode: {mode!r}.",
                                   details="Use an ErrorMode member.")
    return mode


# ----------------------------------------------------------------------

class CancelToken:
    """
    Cooperative cancellation flag.  A search holding the token checks it
    once at the top of every iteration and raises `SearchCancelled` if
    it has been set.  The token may be set from any thread.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """Request cancellation of every search holding this token."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


# ----------------------------------------------------------------------

@dataclass(frozen=True, kw_only=True)
class SearchConfig:
    """
    Read-only settings for a single search call.  A new `SearchConfig`
    is made for each call and is not shared between searches.

    Parameters
    ----------
    residual : float, default = 1e-6
        Tolerance on the step size between successive estimates.
    f_residual : float, optional
        Tolerance on ``|f(x)|``.  If `None` the function value is not
        tested.
    max_its : int, default = 200
        Maximum number of iterations.
    error_mode : ErrorMode, default = ErrorMode.ABSOLUTE
        Normalisation of the step size compared to `residual`.
    cancel : CancelToken, optional
        Cancellation token checked once per iteration.
    """
    residual: float = 1e-6
    f_residual: float | None = None
    max_its: int = 200
    error_mode: ErrorMode = ErrorMode.ABSOLUTE
    cancel: CancelToken | None = None

    def __post_init__(self):
        """Check certain values"""
        if not self.residual > 0:
            raise ValueError(f"Require 'residual' > 0, got "
                             f"{self.residual}.")
        if self.f_residual is not None and not self.f_residual > 0:
            raise ValueError(f"Require 'f_residual' > 0, got "
                             f"{self.f_residual}.")
        if operator.index(self.max_its) < 1:
            raise ValueError("Require 'max_its' >= 1.")
        _check_mode(self.error_mode)

    # -- Public Methods ------------------------------------------------

    def check_cancelled(self, method: str, its: int):
        """Raise `SearchCancelled` if the token has been set."""
        if self.cancel is not None and self.cancel.cancelled:
            raise SearchCancelled(f"{method}() was cancelled.", its=its)

    def converged(self, step: float, fx: float = None) -> bool:
        """
        Returns `True` if `step` (already normalised, see `step_error`)
        is below `residual` and, where both `f_residual` and `fx` are
        given, ``|fx| < f_residual``.
        """
        if not step < self.residual:
            return False
        if self.f_residual is not None and fx is not None:
            return abs(fx) < self.f_residual
        return True

    def non_convergence(self, method: str, **details
                        ) -> NonConvergenceError:
        """Make the exception raised once `max_its` is exhausted."""
        return NonConvergenceError(f"{method}() failed to converge:",
                                   flag=1, details="Reached max_its.",
                                   max_its=self.max_its, **details)

    def step_error(self, x_new: float, x_old: float) -> float:
        """
        Size of the step from `x_old` to `x_new`, normalised according
        to `error_mode`.
        """
        delta = abs(x_new - x_old)
        if self.error_mode is ErrorMode.ABSOLUTE:
            return delta
        elif self.error_mode is ErrorMode.RELATIVE:
            return delta / (abs(x_new) + ZERO_GUARD)

        raise UnsupportedModeError(f"Unsupported error mode: "
                                   f"{self.error_mode!r}.")


# ======================================================================

def approximation_error(exact: float, approx: float,
                        mode: ErrorMode = ErrorMode.ABSOLUTE) -> float:
    """
    Signed error of an approximate root compared to the exact root.

    Parameters
    ----------
    exact, approx : float
        Exact and approximate values.
    mode : ErrorMode, default = ErrorMode.ABSOLUTE
        ``ABSOLUTE`` gives ``exact - approx``, ``RELATIVE`` gives
        ``(exact - approx) / exact``.

    Raises
    ------
    ValueError
        Relative error requested with ``exact == 0``.
    UnsupportedModeError
        `mode` is not an `ErrorMode`.

    Examples
    --------
    >>> approximation_error(2.0, 1.5)
    0.5
    >>> approximation_error(2.0, 1.5, ErrorMode.RELATIVE)
    0.25
    """
    mode = _check_mode(mode)
    if mode is ErrorMode.ABSOLUTE:
        return exact - approx

    if exact == 0:
        raise ValueError("Relative error is undefined for exact == 0.")
    return (exact - approx) / exact


def final_root(results: Iterable[IterationResult]) -> float:
    """
    Run a root search to completion and return the accepted root, i.e.
    the `x` value of the last (converged) result.

    Raises
    ------
    SolverError
        If `results` is empty or the last result is not converged.  Any
        exception raised by the search itself propagates unchanged.

    Examples
    --------
    >>> from pyzero.numeric.solve import newton_raphson
    >>> x = final_root(newton_raphson(lambda x_: x_**2 - 4,
    ...                               lambda x_: 2 * x_, 1.0))
    >>> round(x, 9)
    2.0
    """
    last = None
    for last in results:
        pass

    if last is None:
        raise SolverError("No results were produced.")
    if not last.converged:
        raise SolverError("Final result was not converged.", x=last.x)
    return last.x
