"""
Sampling Interfaces
===================

This module defines protocols and implementations for sample containers
returned by distribution sampling.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt

    from rvcore.outputs import OutputType


@runtime_checkable
class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    output_type : OutputType
        Representation of the sampled values.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[Any]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...
    @property
    def output_type(self) -> OutputType: ...


class ArraySample:
    """
    Array-backed sample container.

    Stores ``n`` univariate draws, in draw order, as a 1D array whose dtype is
    the output type's dtype (``object`` for distribution-valued outputs).

    Parameters
    ----------
    data : numpy.ndarray
        1D array of shape (n,).
    output_type : OutputType
        Representation of the draws.

    Raises
    ------
    ValueError
        If data is not 1D.
    """

    data: npt.NDArray[Any]

    def __init__(self, data: npt.NDArray[Any], output_type: OutputType) -> None:
        if data.ndim != 1:
            raise ValueError("ArraySample expects 1D array of shape (n,).")
        self.data = data
        self._output_type = output_type

    def __len__(self) -> int:
        """Return the number of samples (n)."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[Any]:
        """Iterate over draws as values of the output type."""
        for value in self.data:
            yield self._output_type.scalar(value)

    def __getitem__(self, index: int) -> Any:
        """Return a single draw as a value of the output type."""
        return self._output_type.scalar(self.data[index])

    @property
    def array(self) -> npt.NDArray[Any]:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n,)."""
        return (len(self),)

    @property
    def output_type(self) -> OutputType:
        """Return the output type of the draws."""
        return self._output_type

    def tolist(self) -> list[Any]:
        """Return the draws as a list of output type values."""
        return list(self)

    def __repr__(self) -> str:
        return f"ArraySample(n={len(self)}, output_type={self._output_type})"


__all__ = [
    "Sample",
    "ArraySample",
]
