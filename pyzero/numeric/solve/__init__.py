"""
=====================================
Solvers (:mod:`pyzero.numeric.solve`)
=====================================

.. currentmodule:: pyzero.numeric.solve

Iterative searches for the zeros of scalar functions.  Each search
returns a lazy iterator of `IterationResult` values, so iterations are
only computed as they are requested.  The last result of a successful
search is the accepted root.

Functions
---------

.. autosummary::
    :toctree:

    bisect_root
    bracket_root
    classify_fixed_point
    locate_roots
    muller
    newton_raphson
    regula_falsi
    secant
    approximation_error
    final_root

Classes
-------

.. autosummary::
    :toctree:

    Bracket
    CancelToken
    ErrorMode
    IterationResult
    RootCandidate
    SearchConfig
    SequenceClass

Exceptions
----------

.. autosummary::
    :toctree:

    SolverError
    DegenerateStepError
    NonConvergenceError
    SearchCancelled
    UnsupportedModeError

"""

from .exception import (SolverError, DegenerateStepError,
                        NonConvergenceError, SearchCancelled,
                        UnsupportedModeError)
from .control import (Bracket, CancelToken, ErrorMode, IterationResult,
                      SearchConfig, approximation_error, final_root)
from .fixed_point import SequenceClass, classify_fixed_point
from .bisect_root import bisect_root, regula_falsi
from .newton import newton_raphson, secant
from .muller import muller
from .bracket import RootCandidate, bracket_root, locate_roots
