"""
Computation Primitives
======================

This module defines the building blocks used to compute distribution
characteristics:

- :class:`Computation` — protocol of a callable for a single characteristic.
- :class:`AnalyticalComputation` — an analytical callable provided by a
  distribution directly, bound to its parameters.

Notes
-----
- Analytical callables work on canonical float64 values (scalars or arrays);
  conversion from and to output types happens in the caller.
- ``**options`` are free-form and forwarded unchanged to the callable.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from mypy_extensions import KwArg

from rvcore.types import (
    GenericCharacteristicName,
)


@runtime_checkable
class Computation[In, Out](Protocol):
    """Callable for a single characteristic.

    Attributes
    ----------
    target : str
        The characteristic name this computation represents.

    Methods
    -------
    __call__(data, **options)
        Evaluate the characteristic at ``data``.
    """

    @property
    def target(self) -> GenericCharacteristicName: ...
    def __call__(self, data: In, **options: Any) -> Out: ...


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"ln_pdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the analytical function."""
        return self.func(data, **options)


__all__ = [
    "Computation",
    "AnalyticalComputation",
]
