"""
.. This module acts as the top-level API documentation.

.. module: pyzero

.. autosummary::
    :toctree: generated/

    numeric

"""

__version__ = "0.1.0"

import sys

# ======================================================================

assert sys.version_info >= (3, 10)
