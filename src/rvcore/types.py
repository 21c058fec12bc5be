"""
Core Type Definitions
=====================

Kinds, distribution type descriptors, characteristic and family names, the
1D interval behind continuous supports, and the array aliases shared by the
rest of rvcore.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import operator
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, StrEnum, auto
from math import inf, isnan
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray

Number = np.floating[Any] | np.integer[Any] | int | float
"""Real scalar accepted by supports."""

NumericArray = NDArray[np.floating[Any] | np.integer[Any]]
"""Array of real values."""

FloatArray = NDArray[np.float64]
"""Canonical (float64) values."""

BoolArray = NDArray[np.bool_]
"""Element-wise verdicts."""

type GenericCharacteristicName = str
"""Characteristic names, built-in (:class:`CharacteristicName`) or family specific."""

type ParametrizationName = str


class Kind(StrEnum):
    """
    Kind of a distribution, and compatibility class of an output type.

    An output type is either continuous-compatible or discrete-compatible,
    never both; a family only declares output types of its own kind.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"

    @property
    def density(self) -> "CharacteristicName":
        """Log-density characteristic of this kind (``ln_pmf`` or ``ln_pdf``)."""
        return DENSITY_BY_KIND[self]


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType:
    """
    Kind and dimension of a distribution over a Euclidean space.

    Raises
    ------
    ValueError
        If ``dimension`` is not positive.
    """

    kind: Kind
    dimension: int

    def __post_init__(self) -> None:
        if self.dimension < 1:
            raise ValueError(f"Dimension must be positive, got {self.dimension}.")

    @property
    def is_univariate(self) -> bool:
        return self.dimension == 1

    def __str__(self) -> str:
        if self.is_univariate:
            return f"univariate {self.kind}"
        return f"{self.dimension}-dimensional {self.kind}"


type DistributionType = EuclideanDistributionType

UnivariateContinuous = EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=1)
UnivariateDiscrete = EuclideanDistributionType(kind=Kind.DISCRETE, dimension=1)


class ContinuousSupportShape1D(Enum):
    """Topological shape of a 1D interval."""

    REAL_LINE = auto()
    RAY_LEFT = auto()  # (-inf, b] or (-inf, b)
    RAY_RIGHT = auto()  # [a, inf) or (a, inf)
    BOUNDED_INTERVAL = auto()
    EMPTY = auto()
    SINGLE_POINT = auto()


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    Interval of the extended real line with configurable closure.

    Infinite endpoints are always open: ``Interval1D()`` is the real line and
    contains neither infinity.

    Parameters
    ----------
    left, right : float
        Endpoints (default ``-inf`` and ``inf``). NaN endpoints are rejected.
    left_closed, right_closed : bool
        Whether the finite endpoints belong to the interval.

    Raises
    ------
    ValueError
        If an endpoint is NaN.
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        if isnan(self.left) or isnan(self.right):
            raise ValueError("Interval endpoints must not be NaN.")
        if self.left == -inf:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Element-wise membership; NaN is never contained.

        Returns
        -------
        bool or BoolArray
            ``bool`` for a scalar, a mask of the input shape otherwise.
        """
        arr = np.asarray(x, dtype=np.float64)
        above = operator.ge if self.left_closed else operator.gt
        below = operator.le if self.right_closed else operator.lt
        mask = above(arr, self.left) & below(arr, self.right)
        if arr.ndim == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def is_empty(self) -> bool:
        if self.left != self.right:
            return self.left > self.right
        return not (self.left_closed and self.right_closed)

    @property
    def is_bounded(self) -> bool:
        return self.left > -inf and self.right < inf

    @property
    def shape(self) -> ContinuousSupportShape1D:
        if self.is_empty:
            return ContinuousSupportShape1D.EMPTY
        if self.left == self.right:
            return ContinuousSupportShape1D.SINGLE_POINT
        if self.is_bounded:
            return ContinuousSupportShape1D.BOUNDED_INTERVAL
        if self.left > -inf:
            return ContinuousSupportShape1D.RAY_RIGHT
        if self.right < inf:
            return ContinuousSupportShape1D.RAY_LEFT
        return ContinuousSupportShape1D.REAL_LINE


class CharacteristicName(StrEnum):
    """
    Names of the built-in characteristics.

    Densities are always provided in log space (``ln_pdf`` / ``ln_pmf``);
    linear-space values are derived explicitly by the caller-facing API.
    Families may provide characteristics beyond this list, they are resolved
    by name.
    """

    LN_PDF = "ln_pdf"
    LN_PMF = "ln_pmf"
    CDF = "cdf"
    PPF = "ppf"
    DRAW = "draw"
    MEAN = "mean"
    MEDIAN = "median"
    MODE = "mode"
    VAR = "var"
    ENTROPY = "entropy"
    SKEW = "skewness"
    KURT = "kurtosis"
    KL = "kl"


DENSITY_BY_KIND: Mapping[Kind, CharacteristicName] = {
    Kind.CONTINUOUS: CharacteristicName.LN_PDF,
    Kind.DISCRETE: CharacteristicName.LN_PMF,
}
"""Log-density characteristic matching each distribution kind."""


class FamilyName(StrEnum):
    BETA = "Beta"
    NORMAL = "Normal"
    BERNOULLI = "Bernoulli"
    BETA_BINOMIAL = "BetaBinomial"


__all__ = [
    "Kind",
    "EuclideanDistributionType",
    "DistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "GenericCharacteristicName",
    "ParametrizationName",
    "Interval1D",
    "ContinuousSupportShape1D",
    "BoolArray",
    "FloatArray",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "DENSITY_BY_KIND",
    "FamilyName",
]
