"""
Beta distribution family implementation.

Contains the Beta family with shape and mean-concentration parameterizations.
Besides floats of both widths, a Beta distribution samples Bernoulli
distributions: its draw is used as the Bernoulli success probability.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import betainc, betaincinv, betaln, digamma

from rvcore.distributions.support import ContinuousSupport
from rvcore.families.builtins.discrete.bernoulli import (
    BernoulliOutput,
    configure_bernoulli_family,
)
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


def configure_beta_family() -> None:
    """
    Configure and register the Beta distribution family.

    The Bernoulli family is configured first, as Beta samples Bernoulli
    distributions.
    """

    if ParametricFamilyRegister.contains(FamilyName.BETA):
        return
    configure_bernoulli_family()

    BETA_DOC = """
    Beta distribution.

    A continuous distribution on the open unit interval with two positive
    shape parameters α and β:
        f(x) = x^(α-1) (1-x)^(β-1) / B(α, β)

    Beta(1/2, 1/2) is the Jeffreys prior of a Bernoulli weight. Sampled as
    64-bit or 32-bit floats strictly inside (0, 1), or as Bernoulli
    distributions with the drawn weight.
    """

    def ln_pdf(parameters: Parametrization, x: FloatArray) -> FloatArray:
        """
        Log-density of the beta distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float
            - beta: float
        x : FloatArray
            Points in (0, 1)

        Returns
        -------
        FloatArray
            Log-density values at points x
        """
        parameters = cast(_Shape, parameters)
        a, b = parameters.alpha, parameters.beta
        return cast(
            FloatArray, (a - 1.0) * np.log(x) + (b - 1.0) * np.log1p(-x) - betaln(a, b)
        )

    def cdf(parameters: Parametrization, x: FloatArray) -> FloatArray:
        """Regularized incomplete beta function I_x(α, β)."""
        parameters = cast(_Shape, parameters)
        return cast(FloatArray, betainc(parameters.alpha, parameters.beta, np.clip(x, 0.0, 1.0)))

    def ppf(parameters: Parametrization, p: FloatArray) -> FloatArray:
        """
        Inverse of the regularized incomplete beta function.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")
        parameters = cast(_Shape, parameters)
        return cast(FloatArray, betaincinv(parameters.alpha, parameters.beta, p))

    def draw(parameters: Parametrization, n: int, rng: RandomSource) -> FloatArray:
        """Draw ``n`` canonical values."""
        parameters = cast(_Shape, parameters)
        return rng.beta(parameters.alpha, parameters.beta, size=n)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Shape, parameters)
        return parameters.alpha / (parameters.alpha + parameters.beta)

    def median_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Shape, parameters)
        return float(betaincinv(parameters.alpha, parameters.beta, 0.5))

    def mode_func(parameters: Parametrization, _: Any) -> float | None:
        """(α - 1) / (α + β - 2) when both shapes exceed 1, undefined otherwise."""
        parameters = cast(_Shape, parameters)
        a, b = parameters.alpha, parameters.beta
        if a <= 1.0 or b <= 1.0:
            return None
        return (a - 1.0) / (a + b - 2.0)

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Shape, parameters)
        a, b = parameters.alpha, parameters.beta
        s = a + b
        return a * b / (s * s * (s + 1.0))

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Shape, parameters)
        a, b = parameters.alpha, parameters.beta
        return float(
            betaln(a, b)
            - (a - 1.0) * digamma(a)
            - (b - 1.0) * digamma(b)
            + (a + b - 2.0) * digamma(a + b)
        )

    def skew_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Shape, parameters)
        a, b = parameters.alpha, parameters.beta
        return 2.0 * (b - a) * math.sqrt(a + b + 1.0) / ((a + b + 2.0) * math.sqrt(a * b))

    def kurt_func(parameters: Parametrization, _: Any) -> float:
        """Excess kurtosis."""
        parameters = cast(_Shape, parameters)
        a, b = parameters.alpha, parameters.beta
        num = 6.0 * ((a - b) ** 2 * (a + b + 1.0) - a * b * (a + b + 2.0))
        return num / (a * b * (a + b + 2.0) * (a + b + 3.0))

    def kl_func(parameters: Parametrization, other: Distribution) -> float:
        """
        KL divergence between two beta distributions.

        KL(P‖Q) = ln B(α_q, β_q) - ln B(α_p, β_p) + (α_p - α_q) ψ(α_p)
                  + (β_p - β_q) ψ(β_p) + (α_q - α_p + β_q - β_p) ψ(α_p + β_p)
        """
        p = cast(_Shape, parameters)
        q = cast(_Shape, getattr(other, "base_parametrization"))
        return float(
            betaln(q.alpha, q.beta)
            - betaln(p.alpha, p.beta)
            + (p.alpha - q.alpha) * digamma(p.alpha)
            + (p.beta - q.beta) * digamma(p.beta)
            + (q.alpha - p.alpha + q.beta - p.beta) * digamma(p.alpha + p.beta)
        )

    def _support(_1: Parametrization, _2: OutputType) -> ContinuousSupport:
        """Open unit interval, for floats and for Bernoulli weights alike."""
        return ContinuousSupport(0.0, 1.0, left_closed=False, right_closed=False)

    Beta = ParametricFamily(
        name=FamilyName.BETA,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["shape", "meanConcentration"],
        distr_characteristics={
            CharacteristicName.LN_PDF: ln_pdf,
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
        output_types=(Float64, Float32, BernoulliOutput),
        support_by_parametrization=_support,
    )
    Beta.__doc__ = BETA_DOC

    @parametrization(family=Beta, name="shape")
    class _Shape(Parametrization):
        """
        Shape parametrization of beta distribution.

        Parameters
        ----------
        alpha : float
            First shape parameter
        beta : float
            Second shape parameter
        """

        alpha: float
        beta: float

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

    @parametrization(family=Beta, name="meanConcentration")
    class _MeanConcentration(Parametrization):
        """
        Mean-concentration parametrization of beta distribution.

        Parameters
        ----------
        mu : float
            Mean, in (0, 1)
        kappa : float
            Concentration α + β
        """

        mu: float
        kappa: float

        @constraint(description="0 < mu < 1")
        def check_mu_in_unit_interval(self) -> bool:
            return 0 < self.mu < 1

        @constraint(description="kappa > 0")
        def check_kappa_positive(self) -> bool:
            return self.kappa > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            """
            Transform to shape parametrization.

            Returns
            -------
            Parametrization
                alpha = mu * kappa, beta = (1 - mu) * kappa
            """
            return _Shape(alpha=self.mu * self.kappa, beta=(1.0 - self.mu) * self.kappa)

    ParametricFamilyRegister.register(Beta)
