"""
Bernoulli distribution family implementation.

Contains the Bernoulli family and :data:`BernoulliOutput`, the output type
through which a distribution over a weight in [0, 1] (e.g. Beta) samples
whole Bernoulli distributions.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import entr, rel_entr

from rvcore.distributions.support import IntegerLatticeDiscreteSupport
from rvcore.families.parametric_family import ParametricFamily
from rvcore.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from rvcore.families.registry import ParametricFamilyRegister
from rvcore.outputs import INTEGER_OUTPUT_TYPES, Bool, DistributionOutputType
from rvcore.types import (
    CharacteristicName,
    FamilyName,
    FloatArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any

    from rvcore.distributions.distribution import Distribution
    from rvcore.outputs import OutputType
    from rvcore.rng import RandomSource


BernoulliOutput = DistributionOutputType(FamilyName.BERNOULLI, "p")
"""Bernoulli distributions as values, carried by their success probability."""


def configure_bernoulli_family() -> None:
    """
    Configure and register the Bernoulli distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BERNOULLI):
        return

    BERNOULLI_DOC = """
    Bernoulli distribution.

    A single trial succeeding with probability p:
        P(X = 1) = p,  P(X = 0) = q = 1 - p

    Outcomes are sampled as booleans (True is success) or as any fixed-width
    integer type (1 is success). Degenerate weights p = 0 and p = 1 are
    allowed; the support then holds the single outcome with non-zero mass.
    """

    def ln_pmf(parameters: Parametrization, x: FloatArray) -> FloatArray:
        """
        Log-probability of the outcomes x (canonical 0.0 or 1.0).

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - p: float (success probability)
        x : FloatArray
            In-support outcomes

        Returns
        -------
        FloatArray
            ln p for successes, ln q for failures
        """
        p = cast(_P, parameters).p
        return cast(FloatArray, np.log(np.where(x == 1.0, p, 1.0 - p)))

    def cdf(parameters: Parametrization, x: FloatArray) -> FloatArray:
        """Cumulative distribution function: 0 below 0, q on [0, 1), 1 from 1."""
        q = 1.0 - cast(_P, parameters).p
        return cast(FloatArray, np.where(x < 0.0, 0.0, np.where(x < 1.0, q, 1.0)))

    def ppf(parameters: Parametrization, prob: FloatArray) -> FloatArray:
        """
        Smallest outcome k with cdf(k) >= prob.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        if np.any((prob < 0) | (prob > 1)):
            raise ValueError("Probability must be in [0, 1]")
        q = 1.0 - cast(_P, parameters).p
        return cast(FloatArray, np.where((prob <= q) & (q > 0.0), 0.0, 1.0))

    def draw(parameters: Parametrization, n: int, rng: RandomSource) -> FloatArray:
        """Draw ``n`` canonical outcomes, success when U < p."""
        p = cast(_P, parameters).p
        return (rng.random(n) < p).astype(np.float64)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        return cast(_P, parameters).p

    def median_func(parameters: Parametrization, _: Any) -> float:
        """0 if p < 1/2, 1 if p > 1/2, 1/2 otherwise."""
        p = cast(_P, parameters).p
        if p < 0.5:
            return 0.0
        if p > 0.5:
            return 1.0
        return 0.5

    def mode_func(parameters: Parametrization, _: Any) -> float | None:
        """Most likely outcome; undefined (None) for a fair trial."""
        p = cast(_P, parameters).p
        if p < 0.5:
            return 0.0
        if p > 0.5:
            return 1.0
        return None

    def var_func(parameters: Parametrization, _: Any) -> float:
        p = cast(_P, parameters).p
        return p * (1.0 - p)

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        p = cast(_P, parameters).p
        return float(entr(p) + entr(1.0 - p))

    def skew_func(parameters: Parametrization, _: Any) -> float | None:
        p = cast(_P, parameters).p
        q = 1.0 - p
        if p * q == 0.0:
            return None
        return (q - p) / math.sqrt(p * q)

    def kurt_func(parameters: Parametrization, _: Any) -> float | None:
        """Excess kurtosis, (1 - 6pq) / (pq)."""
        p = cast(_P, parameters).p
        pq = p * (1.0 - p)
        if pq == 0.0:
            return None
        return (1.0 - 6.0 * pq) / pq

    def kl_func(parameters: Parametrization, other: Distribution) -> float:
        """KL(P‖Q) = p ln(p/p') + q ln(q/q'); infinite if Q misses mass of P."""
        p = cast(_P, parameters).p
        p_other = cast(_P, getattr(other, "base_parametrization")).p
        return float(rel_entr(p, p_other) + rel_entr(1.0 - p, 1.0 - p_other))

    def _support(parameters: Parametrization, _: OutputType) -> IntegerLatticeDiscreteSupport:
        """Outcomes with non-zero mass."""
        p = cast(_P, parameters).p
        return IntegerLatticeDiscreteSupport(
            residue=0,
            modulus=1,
            min_k=0 if p < 1.0 else 1,
            max_k=1 if p > 0.0 else 0,
        )

    Bernoulli = ParametricFamily(
        name=FamilyName.BERNOULLI,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["p"],
        distr_characteristics={
            CharacteristicName.LN_PMF: ln_pmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.DRAW: draw,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.KL: kl_func,
        },
        output_types=(Bool, *INTEGER_OUTPUT_TYPES),
        support_by_parametrization=_support,
    )
    Bernoulli.__doc__ = BERNOULLI_DOC

    @parametrization(family=Bernoulli, name="p")
    class _P(Parametrization):
        """
        Success probability parametrization.

        Parameters
        ----------
        p : float
            Probability of success
        """

        p: float

        @constraint(description="0 <= p <= 1")
        def check_p_in_unit_interval(self) -> bool:
            return 0.0 <= self.p <= 1.0

    ParametricFamilyRegister.register(Bernoulli)
