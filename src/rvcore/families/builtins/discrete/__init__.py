"""
Built-in discrete distribution families.

This module contains implementations of discrete parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from rvcore.families.builtins.discrete.bernoulli import (
    BernoulliOutput,
    configure_bernoulli_family,
)
from rvcore.families.builtins.discrete.beta_binomial import configure_beta_binomial_family

__all__ = [
    "BernoulliOutput",
    "configure_bernoulli_family",
    "configure_beta_binomial_family",
]
