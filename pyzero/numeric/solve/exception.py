
# ======================================================================

class SolverError(RuntimeError):
    """
    This exception is raised when a root search fails to produce an
    accepted root.  Additional information (optional) is included to
    allow the reason for the failure to be determined.

    Notes
    -----
    `SolverError` may also have additional attributes not listed here
    depending on the specific search being used, typically `x` (most
    recent estimate), `its` (iterations completed) and `fevals`
    (function evaluations).
    """

    def __init__(self, *args, flag: int = None, details: str = None,
                 **kwargs):
        """
        Parameters
        ----------
        args :
            Passed to `RuntimeError`.
        flag : int, default = None
            Numeric status code giving some information about the
            result.  Where given, `flag` != 0.
        details : str, default = None
            Additional text relating to the specific type of failure.
        kwargs :
            Additional attributes can be added to the object using
            keyword arguments.
        """
        super().__init__(*args)
        self.flag, self.details = flag, details
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __str__(self):
        """Add additional details below the main failure notice."""
        error_str = super().__str__()
        for k, v in self.__dict__.items():
            if v is not None:
                error_str += f"\n{k} -> {v}"
        return error_str


# ----------------------------------------------------------------------

class NonConvergenceError(SolverError):
    """
    The iteration budget was exhausted before the convergence test was
    satisfied.  Results yielded before this was raised remain valid.
    """
    pass


class DegenerateStepError(SolverError, ZeroDivisionError):
    """
    A step could not be computed because of a zero denominator, e.g.
    zero derivative (Newton-Raphson), equal function values (secant) or
    coincident points (Muller).
    """
    pass


class SearchCancelled(SolverError):
    """The search was cancelled via its `CancelToken`."""
    pass


class UnsupportedModeError(SolverError, ValueError):
    """An error normalisation mode was requested that is not handled."""
    pass
