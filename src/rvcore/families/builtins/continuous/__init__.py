"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from rvcore.families.builtins.continuous.beta import configure_beta_family
from rvcore.families.builtins.continuous.normal import configure_normal_family

__all__ = [
    "configure_beta_family",
    "configure_normal_family",
]
