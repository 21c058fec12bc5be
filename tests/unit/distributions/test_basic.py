from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np

from rvcore.distributions.computation import AnalyticalComputation
from rvcore.distributions.support import (
    ContinuousSupport,
    ExplicitTableDiscreteSupport,
)
from rvcore.outputs import Bool, Int64, UInt8
from rvcore.types import CharacteristicName, Kind
from tests.utils.mocks import StandaloneUnivariateDistribution, uniform_computations


class DistributionTestBase:
    LN_PDF = CharacteristicName.LN_PDF
    LN_PMF = CharacteristicName.LN_PMF
    CDF = CharacteristicName.CDF
    PPF = CharacteristicName.PPF
    DRAW = CharacteristicName.DRAW

    def make_uniform_ppf_distribution(self) -> StandaloneUnivariateDistribution:
        """U(0, 1) sampled by inverse transform only."""
        return StandaloneUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=uniform_computations(),
            support=ContinuousSupport(0, 1),
        )

    def make_logistic_cdf_distribution(self) -> StandaloneUnivariateDistribution:
        def logistic_cdf(x: Any, **_: Any) -> Any:
            return 1.0 / (1.0 + np.exp(-x))

        return StandaloneUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[Any, Any](target=self.CDF, func=logistic_cdf),
            ],
            support=ContinuousSupport(),
        )

    def make_discrete_point_pmf_distribution(
        self, is_with_support: bool = True
    ) -> StandaloneUnivariateDistribution:
        masses = {0.0: 0.2, 1.0: 0.5, 2.0: 0.3}

        def ln_pmf(x: Any, **_: Any) -> Any:
            return np.log([masses.get(float(v), 0.0) for v in np.ravel(x)]).reshape(np.shape(x))

        support = ExplicitTableDiscreteSupport([0, 1, 2]) if is_with_support else None

        return StandaloneUnivariateDistribution(
            kind=Kind.DISCRETE,
            analytical_computations=[
                AnalyticalComputation[Any, Any](target=self.LN_PMF, func=ln_pmf),
            ],
            output_types=(Int64, UInt8, Bool),
            support=support,
        )

