"""
Distribution Families Configuration
====================================

This module configures the built-in parametric distribution families of rvcore:

- Beta — continuous, on (0, 1); sampled as floats or as Bernoulli distributions.
- Normal — continuous, on the real line.
- Bernoulli — discrete, sampled as booleans or integers.
- BetaBinomial — discrete, sampled as integers.

Notes
-----
- All families are registered in the global ParametricFamilyRegister.
- Their output types are registered in the global OutputTypeRegister.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from rvcore.families.builtins import (
    configure_bernoulli_family,
    configure_beta_binomial_family,
    configure_beta_family,
    configure_normal_family,
)
from rvcore.families.registry import ParametricFamilyRegister
from rvcore.outputs import configure_output_types


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    This function initializes all parametric families with their respective
    parameterizations, characteristics, and output types. It should be
    called during application startup to make distributions available.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_output_types()
    configure_bernoulli_family()
    configure_beta_family()
    configure_normal_family()
    configure_beta_binomial_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
