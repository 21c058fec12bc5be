from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from rvcore.distributions.sampling import ArraySample
from rvcore.outputs import Float64, UInt8
from rvcore.rng import random_source
from tests.unit.distributions.test_basic import DistributionTestBase


class TestLogLikelihood(DistributionTestBase):
    def test_uniform_all_in_support_is_zero(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        sample = ArraySample(np.array([0.1, 0.9, 0.3]), Float64)
        # log L = sum log(1) = 0
        assert distr.log_likelihood(sample) == pytest.approx(0.0, abs=1e-12)

    def test_uniform_out_of_support_is_minus_inf(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        sample = ArraySample(np.array([0.1, 1.5, 0.3]), Float64)
        assert np.isneginf(distr.log_likelihood(sample))

    def test_plain_arrays_and_lists(self) -> None:
        distr = self.make_uniform_ppf_distribution()

        assert distr.log_likelihood([0.2, 0.4]) == 0.0
        assert distr.log_likelihood(np.array([0.2, -0.4])) == -math.inf

    def test_discrete_masses_sum_in_log_space(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        expected = math.log(0.2) + 2 * math.log(0.5) + math.log(0.3)
        assert distr.log_likelihood([0, 1, 1, 2]) == pytest.approx(expected)
        assert distr.log_likelihood(np.array([0, 1, 3], dtype=np.int64)) == -math.inf

    def test_sample_output_type_is_used(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()
        sample = ArraySample(np.array([1, 2], dtype=np.uint8), UInt8)

        assert distr.log_likelihood(sample) == pytest.approx(math.log(0.5 * 0.3))

    def test_likelihood_of_own_sample_is_finite(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        sample = distr.sample_many(50, random_source(4))

        assert math.isfinite(distr.log_likelihood(sample))

    def test_empty_sample(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        assert distr.log_likelihood(np.array([], dtype=np.float64)) == 0.0
