"""
Polynomials (:mod:`pyzero.numeric.polynomial`)
==============================================

.. currentmodule:: pyzero.numeric.polynomial

Divided differences and the interpolating polynomial in Newton form.
"""

import numpy as np
import numpy.typing as npt


# ======================================================================

def divided_difference_table(x: npt.ArrayLike,
                             y: npt.ArrayLike) -> np.ndarray:
    """
    Build the complete table of divided differences for the points
    `(x, y)`.

    Parameters
    ----------
    x, y : array_like of float, shape (n,)
        Arrays of `x` and `y` values.  All `x` values must be distinct.

    Returns
    -------
    np.ndarray of float, shape (n, n)
        Table `T` where column 0 holds the `y` values and ``T[i, j] =
        f[x_i, ..., x_{i+j}]``.  Entries with ``i + j >= n`` are zero,
        so the table is upper-left triangular.

    Raises
    ------
    ValueError
        If `x` and `y` are not 1D arrays of equal length >= 1, or if the
        `x` values are not distinct.

    Notes
    -----
    - Divided differences are arranged as follows [1]_::

        Points      1st Div. Diff.  2nd Div. Diff. ...
        (x0, y0)    f[x0, x1]       f[x0, x1, x2]
        (x1, y1)    f[x1, x2]       f[x1, x2, x3]
        (x2, y2)    f[x2, x3]
        (x3, y3)
        ...

      Where :math:`f[x_i, x_j] = (y_j - y_i) / (x_j - x_i)`, and so on.

    - Working values are cast to `float` as purely integer parameters
      may result in integer division giving incorrect results.

    References
    ----------
    .. [1] Divided Differences: https://en.wikipedia.org/wiki/Divided_differences

    Examples
    --------
    >>> divided_difference_table([1, 2, 3], [1, 4, 9])
    array([[1., 3., 1.],
           [4., 5., 0.],
           [9., 0., 0.]])
    """
    x, y = np.asarray(x, dtype=float), np.asarray(y, dtype=float)
    n = len(x)
    if n < 1 or np.ndim(x) != 1 or x.shape != y.shape:
        raise ValueError("'x' and 'y' must be 1D arrays of equal "
                         "length >= 1.")

    if len(np.unique(x)) != n:
        raise ValueError("'x' values must be distinct.")

    table = np.zeros((n, n))
    table[:, 0] = y
    for j in range(1, n):
        table[:n - j, j] = ((table[1:n - j + 1, j - 1] -
                             table[:n - j, j - 1]) / (x[j:] - x[:n - j]))

    return table


# ----------------------------------------------------------------------

def newton_poly_coeff(x: npt.ArrayLike, y: npt.ArrayLike) -> np.ndarray:
    """
    Coefficients of the interpolating polynomial in Newton form, i.e.
    the top row of the divided difference table:
    `[f[x0], f[x0, x1], f[x0, x1, x2], ...]`.

    See `divided_difference_table` for parameters and exceptions.
    """
    return divided_difference_table(x, y)[0, :]


def newton_poly(x_pts: npt.ArrayLike, y_pts: npt.ArrayLike,
                x: npt.ArrayLike) -> np.ndarray:
    r"""
    Evaluate the polynomial interpolating points `(x_pts, y_pts)` at `x`,
    summing the Newton form term by term:

    .. math:: P(x) = \sum_{k=0}^{n} f[x_0, ..., x_k]
              \prod_{j=0}^{k-1}(x - x_j)

    Parameters
    ----------
    x_pts, y_pts : array_like of float, shape (n + 1,)
        Points to interpolate, as for `divided_difference_table`.
    x : array_like of float
        Value/s at which to evaluate.  Any shape is accepted.

    Returns
    -------
    np.ndarray of float
        Interpolated values with the same shape as `x`.

    Examples
    --------
    >>> newton_poly([1, 2, 3], [1, 4, 9], [0, 1.5, 4])
    array([ 0.  ,  2.25, 16.  ])
    """
    coeffs = newton_poly_coeff(x_pts, y_pts)
    x_pts = np.asarray(x_pts, dtype=float)
    x = np.asarray(x, dtype=float)

    # Column k of 'basis' is (x - x_0)...(x - x_k), trailing axis.
    basis = np.cumprod(x[..., np.newaxis] - x_pts[:-1], axis=-1)
    return coeffs[0] + np.sum(coeffs[1:] * basis, axis=-1)
