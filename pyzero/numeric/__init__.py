"""
Numeric (:mod:`pyzero.numeric`)
===============================

.. currentmodule:: pyzero.numeric

Root finding and the supporting interpolation functions.

.. autosummary::
    :toctree:

    solve
    polynomial

"""
from .polynomial import (divided_difference_table, newton_poly_coeff,
                         newton_poly)
