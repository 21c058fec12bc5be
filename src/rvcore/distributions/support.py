"""
Support Primitives
==================

Membership tests for the domain a distribution can produce. Supports operate
on the canonical real form of values (see :mod:`rvcore.outputs`), so one
support object serves every output type a family is instantiated for.

- :class:`Support` — protocol with a total, side-effect free ``contains``.
- :class:`ContinuousSupport` — interval with configurable closure.
- :class:`DiscreteSupport` — protocol adding ordered traversal.
- :class:`ExplicitTableDiscreteSupport` — finite table of points.
- :class:`IntegerLatticeDiscreteSupport` — ``residue + k * modulus``,
  optionally bounded.

Notes
-----
NaN and infinite values are never contained in a discrete support, and NaN is
never contained in a continuous one.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from rvcore.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


def _verdict(mask: BoolArray, ndim: int) -> bool | BoolArray:
    if ndim == 0:
        return bool(mask)
    return cast(BoolArray, mask)


@runtime_checkable
class Support(Protocol):
    """Domain of a distribution over canonical values."""

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support):
    """Interval support; open endpoints are excluded from sampled values."""


@runtime_checkable
class DiscreteSupport(Support, Protocol):
    """Support with ordered enumeration of its points."""

    def iter_points(self) -> Iterator[Number]: ...

    def first(self) -> Number | None: ...

    def last(self) -> Number | None: ...


class ExplicitTableDiscreteSupport(DiscreteSupport):
    """
    Finite, sorted table of support points.

    Parameters
    ----------
    points : Iterable[Number]
        Support points; duplicates are dropped. NaN and infinite points are
        rejected.

    Raises
    ------
    ValueError
        If the table is empty or holds a non-finite point.
    """

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Number]) -> None:
        table = np.unique(np.asarray(list(points), dtype=np.float64))
        if table.size == 0:
            raise ValueError("Points must be non-empty")
        if not np.all(np.isfinite(table)):
            raise ValueError("Points must be finite")
        self._points = table

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=np.float64)
        return _verdict(np.isin(arr, self._points), arr.ndim)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def __len__(self) -> int:
        return int(self._points.size)

    def iter_points(self) -> Iterator[Number]:
        return iter(self._points.tolist())

    def first(self) -> Number:
        return float(self._points[0])

    def last(self) -> Number:
        return float(self._points[-1])

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, self._points.copy())

    __iter__ = iter_points


@dataclass(frozen=True, slots=True)
class IntegerLatticeDiscreteSupport(DiscreteSupport):
    """
    Integers ``residue + k * modulus`` within optional bounds.

    Parameters
    ----------
    residue : int
        Offset of the lattice.
    modulus : int
        Lattice step, a positive integer.
    min_k, max_k : int, optional
        Inclusive bounds on the points (not on ``k``). ``None`` leaves the
        lattice unbounded on that side.

    Examples
    --------
    Outcomes of a Bernoulli trial:

    >>> IntegerLatticeDiscreteSupport(residue=0, modulus=1, min_k=0, max_k=1)
    """

    residue: int
    modulus: int
    min_k: int | None = None
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.modulus <= 0:
            raise ValueError("modulus must be a positive integer.")

    def _align_up(self, k: int) -> int:
        return k + (-(k - self.residue)) % self.modulus

    def _align_down(self, k: int) -> int:
        return k - (k - self.residue) % self.modulus

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=np.float64)
        finite = np.isfinite(arr)
        safe = np.where(finite, arr, 0.0)
        mask = finite & (safe == np.floor(safe))
        if self.min_k is not None:
            mask &= safe >= self.min_k
        if self.max_k is not None:
            mask &= safe <= self.max_k
        mask &= np.mod(safe - self.residue, self.modulus) == 0
        return _verdict(mask, arr.ndim)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def first(self) -> int | None:
        """Smallest point, ``None`` if unbounded below or empty."""
        if self.min_k is None:
            return None
        first = self._align_up(self.min_k)
        if self.max_k is not None and first > self.max_k:
            return None
        return first

    def last(self) -> int | None:
        """Largest point, ``None`` if unbounded above or empty."""
        if self.max_k is None:
            return None
        last = self._align_down(self.max_k)
        if self.min_k is not None and last < self.min_k:
            return None
        return last

    @property
    def is_left_bounded(self) -> bool:
        return self.min_k is not None

    @property
    def is_right_bounded(self) -> bool:
        return self.max_k is not None

    def iter_points(self) -> Iterator[int]:
        """
        Points in increasing order, or decreasing from ``max_k`` when the
        lattice is only bounded above.

        Raises
        ------
        RuntimeError
            If the lattice is unbounded on both sides.
        """
        if self.min_k is None and self.max_k is None:
            raise RuntimeError(
                "Cannot iterate points for an unbounded IntegerLatticeDiscreteSupport "
                "(both min_k and max_k are None). Provide at least one bound to enable enumeration."
            )
        if self.min_k is not None:
            return self._walk(self.first(), self.last(), self.modulus)
        return self._walk(self.last(), None, -self.modulus)

    @staticmethod
    def _walk(start: int | None, stop: int | None, step: int) -> Iterator[int]:
        if start is None:
            return iter(())
        if stop is None:

            def _endless() -> Iterator[int]:
                current = start
                while True:
                    yield current
                    current += step

            return _endless()
        if (step > 0 and start > stop) or (step < 0 and start < stop):
            return iter(())
        return iter(range(start, stop + (1 if step > 0 else -1), step))

    __iter__ = iter_points


__all__ = [
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "ExplicitTableDiscreteSupport",
    "IntegerLatticeDiscreteSupport",
]
