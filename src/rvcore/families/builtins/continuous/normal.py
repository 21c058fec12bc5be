"""
Normal distribution family implementation.

Contains the Normal family with the mean/standard deviation (base) and
mean/precision parametrizations. Distribution functions go through
``scipy.special.ndtr`` / ``ndtri`` to stay accurate in the tails.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

from scipy.special import ndtr, ndtri

from rvcore.distributions.support import ContinuousSupport
from rvcore.families.parametric_family import ParametricFamily
from rvcore.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from rvcore.families.registry import ParametricFamilyRegister
from rvcore.outputs import Float32, Float64
from rvcore.types import (
    CharacteristicName,
    FamilyName,
    FloatArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from rvcore.distributions.distribution import Distribution
    from rvcore.outputs import OutputType
    from rvcore.rng import RandomSource

_LN_SQRT_2PI = 0.5 * math.log(2 * math.pi)


def configure_normal_family() -> None:
    """
    Configure and register the Normal distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    NORMAL_DOC = """
    Normal (Gaussian) distribution N(μ, σ²) on the real line.

    Log-density:
        ln f(x) = -(x-μ)²/(2σ²) - ln σ - ln √(2π)

    Sampled as 64-bit or 32-bit floats; no value is ever outside the support,
    so the open endpoints at ±∞ need no adjustment.
    """

    def _standardize(parameters: Parametrization, x: FloatArray) -> FloatArray:
        p = cast(_MeanStd, parameters)
        return cast(FloatArray, (x - p.mu) / p.sigma)

    def ln_pdf(parameters: Parametrization, x: FloatArray) -> FloatArray:
        """
        Log-density, evaluated without exponentiation so that it stays
        finite far in the tails.
        """
        z = _standardize(parameters, x)
        return cast(
            FloatArray, -0.5 * z * z - math.log(cast(_MeanStd, parameters).sigma) - _LN_SQRT_2PI
        )

    def cdf(parameters: Parametrization, x: FloatArray) -> FloatArray:
        return cast(FloatArray, ndtr(_standardize(parameters, x)))

    def ppf(parameters: Parametrization, p: FloatArray) -> FloatArray:
        """Quantiles; ``p = 0`` and ``p = 1`` map to ``-inf`` and ``inf``."""
        params = cast(_MeanStd, parameters)
        return cast(FloatArray, params.mu + params.sigma * ndtri(p))

    def draw(parameters: Parametrization, n: int, rng: RandomSource) -> FloatArray:
        params = cast(_MeanStd, parameters)
        return rng.normal(params.mu, params.sigma, size=n)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean, which is also the median and the mode."""
        return cast(_MeanStd, parameters).mu

    def var_func(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanStd, parameters).sigma ** 2

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        """Differential entropy, 1/2 ln(2πeσ²)."""
        return 0.5 + _LN_SQRT_2PI + math.log(cast(_MeanStd, parameters).sigma)

    def zero(_1: Parametrization, _2: Any) -> float:
        """Skewness and excess kurtosis."""
        return 0.0

    def kl_func(parameters: Parametrization, other: Distribution) -> float:
        """
        KL divergence between two normal distributions.

        KL(P‖Q) = ln(σ_q/σ_p) + (σ_p² + (μ_p - μ_q)²) / (2σ_q²) - 1/2
        """
        p = cast(_MeanStd, parameters)
        q = cast(_MeanStd, getattr(other, "base_parametrization"))
        ratio = (p.sigma / q.sigma) ** 2
        return 0.5 * (ratio - 1.0 - math.log(ratio)) + (p.mu - q.mu) ** 2 / (2 * q.sigma**2)

    def _support(_1: Parametrization, _2: OutputType) -> ContinuousSupport:
        return ContinuousSupport()

    Normal = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["meanStd", "meanPrec"],
        distr_characteristics={
            CharacteristicName.LN_PDF: ln_pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.DRAW: draw,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.MEDIAN: mean_func,
            CharacteristicName.MODE: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.SKEW: zero,
            CharacteristicName.KURT: zero,
            CharacteristicName.KL: kl_func,
        },
        output_types=(Float64, Float32),
        support_by_parametrization=_support,
    )
    Normal.__doc__ = NORMAL_DOC

    @parametrization(family=Normal, name="meanStd")
    class _MeanStd(Parametrization):
        """
        Mean and standard deviation.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        sigma : float
            Standard deviation of the distribution
        """

        mu: float
        sigma: float

        @constraint(description="mu is finite")
        def check_mu_finite(self) -> bool:
            return math.isfinite(self.mu)

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

        @constraint(description="sigma is finite")
        def check_sigma_finite(self) -> bool:
            return math.isfinite(self.sigma)

    @parametrization(family=Normal, name="meanPrec")
    class _MeanPrec(Parametrization):
        """Mean and precision ``tau = 1 / sigma²``."""

        mu: float
        tau: float

        @constraint(description="tau > 0")
        def check_tau_positive(self) -> bool:
            return self.tau > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _MeanStd(mu=self.mu, sigma=1.0 / math.sqrt(self.tau))

    ParametricFamilyRegister.register(Normal)
