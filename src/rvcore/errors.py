"""
Error Taxonomy
==============

Exceptions raised by rvcore.

- :class:`DomainError` — parameters violate a family's mathematical domain.
  Raised only while constructing a distribution (including the inner
  distribution of a composition).
- :class:`CapabilityError` — a characteristic is requested for a family,
  kind or output type that does not provide it. Raised before any
  computation starts.

Evaluating a density outside the support is not an error: it yields ``-inf``.
Failures of the randomness source are propagated unchanged.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class DomainError(ValueError):
    """Distribution parameters do not satisfy the family's constraints."""


class CapabilityError(TypeError):
    """Requested capability is not implemented for the given output type."""


__all__ = [
    "DomainError",
    "CapabilityError",
]
