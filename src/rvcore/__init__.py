"""
rvcore
======

Probability distributions usable across an open set of output types
(floats of several widths, booleans, fixed-width integers and distributions
themselves): output type contracts, support membership, sampling, log-space
densities, conjugate composition, and parametric family management.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .composition import *
from .composition import __all__ as _composition_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .families import *
from .families import __all__ as _family_all
from .outputs import *
from .outputs import __all__ as _outputs_all
from .rng import *
from .rng import __all__ as _rng_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("rvcore")
__all__ = [
    "__version__",
    *_composition_all,
    *_distr_all,
    *_errors_all,
    *_family_all,
    *_outputs_all,
    *_rng_all,
    *_types_all,
]

del _composition_all
del _distr_all
del _errors_all
del _family_all
del _outputs_all
del _rng_all
del _types_all
