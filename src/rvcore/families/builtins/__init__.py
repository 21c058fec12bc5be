"""
Built-in distribution families for rvcore.

This package contains implementations of the distribution families that are
available by default in rvcore.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from rvcore.families.builtins.continuous import (
    configure_beta_family,
    configure_normal_family,
)
from rvcore.families.builtins.discrete import (
    BernoulliOutput,
    configure_bernoulli_family,
    configure_beta_binomial_family,
)

__all__ = [
    "configure_beta_family",
    "configure_normal_family",
    "configure_bernoulli_family",
    "configure_beta_binomial_family",
    "BernoulliOutput",
]
