from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from rvcore.distributions.computation import AnalyticalComputation
from rvcore.distributions.density import evaluate_at, evaluate_masked, in_support
from rvcore.errors import CapabilityError
from rvcore.outputs import Bool, Float32, Float64, Int64, UInt8
from tests.unit.distributions.test_basic import DistributionTestBase


class TestInSupport(DistributionTestBase):
    def test_scalar_values(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        assert in_support(distr, 1) is True
        assert in_support(distr, 5) is False
        assert in_support(distr, True) is True

    def test_array_values(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        mask = in_support(distr, np.array([0, 2, 3, -1], dtype=np.int64))
        np.testing.assert_array_equal(mask, [True, True, False, False])

    def test_values_of_undeclared_type_are_not_contained(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        assert in_support(distr, 1.5) is False
        assert in_support(distr, "1") is False
        np.testing.assert_array_equal(in_support(distr, [0.5, 1.5]), [False, False])

    def test_explicit_undeclared_output_type_raises(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        with pytest.raises(CapabilityError):
            in_support(distr, 1, Float32)

    def test_explicit_output_type_masks_unrepresentable_values(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        np.testing.assert_array_equal(
            in_support(distr, np.array([1, 2, 300]), UInt8), [True, True, False]
        )

    def test_without_support_everything_accepted_is_contained(self) -> None:
        distr = self.make_discrete_point_pmf_distribution(is_with_support=False)

        assert in_support(distr, 7) is True
        assert in_support(distr, 1.5) is False


class TestEvaluateMasked(DistributionTestBase):
    def test_inside_and_outside_support(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        out = evaluate_masked(distr, self.LN_PMF, np.array([0, 1, 2, 3], dtype=np.int64))
        np.testing.assert_allclose(out, [math.log(0.2), math.log(0.5), math.log(0.3), -math.inf])

    def test_scalar_input_gives_float(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        result = evaluate_masked(distr, self.LN_PMF, 1)
        assert isinstance(result, float)
        assert result == pytest.approx(math.log(0.5))

    def test_bool_values(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        assert evaluate_masked(distr, self.LN_PMF, False, Bool) == pytest.approx(math.log(0.2))

    def test_custom_fill(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        assert evaluate_masked(distr, self.LN_PMF, 9, Int64, fill=0.0) == 0.0

    def test_function_sees_only_in_support_values(self) -> None:
        seen: list[np.ndarray] = []
        distr = self.make_uniform_ppf_distribution()
        inner = distr.analytical_computations[self.LN_PDF].func

        def recording(x, **options):
            seen.append(np.asarray(x))
            return inner(x, **options)

        distr._analytical[self.LN_PDF] = AnalyticalComputation(self.LN_PDF, recording)
        evaluate_masked(distr, self.LN_PDF, np.array([-1.0, 0.5, 2.0, 0.25]))

        assert len(seen) == 1
        np.testing.assert_array_equal(seen[0], [0.5, 0.25])

    def test_nothing_in_support_skips_evaluation(self) -> None:
        distr = self.make_uniform_ppf_distribution()

        out = evaluate_masked(distr, self.LN_PDF, np.array([-1.0, 2.0]))
        np.testing.assert_array_equal(out, [-math.inf, -math.inf])


class TestEvaluateAt(DistributionTestBase):
    def test_defined_outside_support(self) -> None:
        distr = self.make_uniform_ppf_distribution()

        out = evaluate_at(distr, self.CDF, np.array([-1.0, 0.5, 2.0]))
        np.testing.assert_allclose(out, [0.0, 0.5, 1.0])

    def test_rejected_values_are_nan(self) -> None:
        distr = self.make_uniform_ppf_distribution()

        out = evaluate_at(distr, self.CDF, [0.5, "half"], Float64)
        assert out[0] == pytest.approx(0.5)
        assert math.isnan(out[1])

    def test_scalar_input_gives_float(self) -> None:
        distr = self.make_logistic_cdf_distribution()

        result = evaluate_at(distr, self.CDF, 0.0)
        assert isinstance(result, float)
        assert result == pytest.approx(0.5)
