"""
Beta-binomial distribution family implementation.

The number of successes in n Bernoulli trials whose common weight is drawn
once from Beta(α, β).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from functools import lru_cache
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import betaln, gammaln

from rvcore.distributions.support import IntegerLatticeDiscreteSupport
from rvcore.families.parametric_family import ParametricFamily
from rvcore.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from rvcore.families.registry import ParametricFamilyRegister
from rvcore.outputs import INTEGER_OUTPUT_TYPES
from rvcore.types import (
    CharacteristicName,
    FamilyName,
    FloatArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any

    from rvcore.outputs import OutputType
    from rvcore.rng import RandomSource


def _ln_binom(n: float, k: FloatArray) -> FloatArray:
    return cast(FloatArray, gammaln(n + 1.0) - gammaln(k + 1.0) - gammaln(n - k + 1.0))


def configure_beta_binomial_family() -> None:
    """
    Configure and register the Beta-binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BETA_BINOMIAL):
        return

    BETA_BINOMIAL_DOC = """
    Beta-binomial distribution.

    Probability mass function on k = 0, ..., n:
        P(X = k) = C(n, k) B(k + α, n - k + β) / B(α, β)

    Sampled as any fixed-width integer type.
    """

    def ln_pmf(parameters: Parametrization, k: FloatArray) -> FloatArray:
        """
        Log-probability of k successes.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - n: int (number of trials)
            - alpha: float
            - beta: float
        k : FloatArray
            In-support counts

        Returns
        -------
        FloatArray
            Log-probabilities at k
        """
        parameters = cast(_Trials, parameters)
        n, a, b = float(parameters.n), parameters.alpha, parameters.beta
        return cast(
            FloatArray, _ln_binom(n, k) + betaln(k + a, n - k + b) - betaln(a, b)
        )

    @lru_cache(maxsize=64)
    def _cumulative(parameters: _Trials) -> FloatArray:
        # one table per parameter set, shared by cdf, ppf and draw
        ks = np.fromiter(_lattice(parameters).iter_points(), dtype=np.float64)
        table = np.cumsum(np.exp(ln_pmf(parameters, ks)))
        table.flags.writeable = False
        return table

    def cdf(parameters: Parametrization, x: FloatArray) -> FloatArray:
        """P(X ≤ x), accumulated from the mass function."""
        parameters = cast(_Trials, parameters)
        cumulative = _cumulative(parameters)
        k = np.floor(np.clip(x, -1.0, parameters.n)).astype(np.int64)
        return cast(FloatArray, np.where(k < 0, 0.0, cumulative[np.maximum(k, 0)]))

    def ppf(parameters: Parametrization, p: FloatArray) -> FloatArray:
        """
        Smallest k with cdf(k) >= p.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")
        parameters = cast(_Trials, parameters)
        idx = np.searchsorted(_cumulative(parameters), p, side="left")
        return np.minimum(idx, parameters.n).astype(np.float64)

    def draw(parameters: Parametrization, size: int, rng: RandomSource) -> FloatArray:
        """Inverse transform sampling over the cumulative mass table."""
        return ppf(parameters, rng.random(size))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Trials, parameters)
        return parameters.n * parameters.alpha / (parameters.alpha + parameters.beta)

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Trials, parameters)
        n, a, b = parameters.n, parameters.alpha, parameters.beta
        s = a + b
        return n * a * b * (s + n) / (s * s * (s + 1.0))

    def _lattice(parameters: _Trials) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(residue=0, modulus=1, min_k=0, max_k=int(parameters.n))

    def _support(parameters: Parametrization, _: OutputType) -> IntegerLatticeDiscreteSupport:
        return _lattice(cast(_Trials, parameters))

    BetaBinomial = ParametricFamily(
        name=FamilyName.BETA_BINOMIAL,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["trials"],
        distr_characteristics={
            CharacteristicName.LN_PMF: ln_pmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.DRAW: draw,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        output_types=INTEGER_OUTPUT_TYPES,
        support_by_parametrization=_support,
    )
    BetaBinomial.__doc__ = BETA_BINOMIAL_DOC

    @parametrization(family=BetaBinomial, name="trials")
    class _Trials(Parametrization):
        """
        Trials parametrization of beta-binomial distribution.

        Parameters
        ----------
        n : int
            Number of trials
        alpha : float
            First shape parameter of the beta weight
        beta : float
            Second shape parameter of the beta weight
        """

        n: int
        alpha: float
        beta: float

        @constraint(description="n is an integer >= 1")
        def check_n_positive_integer(self) -> bool:
            if isinstance(self.n, (bool, np.bool_)):
                return False
            return math.isfinite(self.n) and float(self.n).is_integer() and self.n >= 1

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="alpha is finite")
        def check_alpha_finite(self) -> bool:
            return math.isfinite(self.alpha)

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

        @constraint(description="beta is finite")
        def check_beta_finite(self) -> bool:
            return math.isfinite(self.beta)

    ParametricFamilyRegister.register(BetaBinomial)
