"""
Tests for Normal Distribution Family

This module tests the functionality of the normal distribution family,
including parameterizations, characteristics, and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import norm

from rvcore.distributions.support import ContinuousSupport
from rvcore.errors import CapabilityError, DomainError
from rvcore.families.configuration import configure_families_register
from rvcore.outputs import Bool, Float32, Float64, Int64
from rvcore.types import (
    CharacteristicName,
    ContinuousSupportShape1D,
    FamilyName,
    UnivariateContinuous,
)

from ..base import BaseDistributionTest


class TestNormalFamily(BaseDistributionTest):
    """Test suite for Normal distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.normal_family = registry.get(FamilyName.NORMAL)
        self.normal_dist_example = self.normal_family(mu=2.0, sigma=1.5)

    def test_family_properties(self):
        """Test basic properties of normal family."""
        assert self.normal_family.name == FamilyName.NORMAL

        expected_parametrizations = {"meanStd", "meanPrec"}
        assert set(self.normal_family.parametrization_names) == expected_parametrizations
        assert self.normal_family.base_parametrization_name == "meanStd"
        assert self.normal_family.output_types == (Float64, Float32)

    def test_mean_std_parametrization_creation(self):
        """Test creation of distribution with standard parametrization."""
        dist = self.normal_family(mu=2.0, sigma=1.5)

        assert dist.family_name == FamilyName.NORMAL
        assert dist.distribution_type == UnivariateContinuous
        assert dist.parameters == {"mu": 2.0, "sigma": 1.5}
        assert dist.parametrization_name == "meanStd"

    def test_mean_prec_parametrization_creation(self):
        """Test creation of distribution with mean-precision parametrization."""
        dist = self.normal_family(mu=2.0, tau=0.25, parametrization_name="meanPrec")

        assert dist.parameters == {"mu": 2.0, "tau": 0.25}
        assert dist.parametrization_name == "meanPrec"
        assert dist.base_parameters == {"mu": 2.0, "sigma": 2.0}

    @pytest.mark.parametrize(
        "params, message",
        [
            ({"mu": 0.0, "sigma": -1.0}, "sigma > 0"),
            ({"mu": 0.0, "sigma": 0.0}, "sigma > 0"),
            ({"mu": 0.0, "sigma": math.inf}, "sigma is finite"),
            ({"mu": math.nan, "sigma": 1.0}, "mu is finite"),
        ],
    )
    def test_parametrization_constraints(self, params, message):
        """Test parameter constraints validation."""
        with pytest.raises(DomainError, match=message):
            self.normal_family(**params)

    def test_mean_prec_constraints(self):
        with pytest.raises(ValueError, match="tau > 0"):
            self.normal_family(mu=0, tau=-1.0, parametrization_name="meanPrec")

    @pytest.mark.parametrize(
        "char_func_getter, expected",
        [
            (lambda distr: distr.mean(), 2.0),
            (lambda distr: distr.median(), 2.0),
            (lambda distr: distr.variance(), 2.25),
            (lambda distr: distr.skewness(), 0.0),
            (lambda distr: distr.kurtosis(), 0.0),
            (lambda distr: distr.entropy(), norm(loc=2.0, scale=1.5).entropy()),
        ],
    )
    def test_moments(self, char_func_getter, expected):
        """Test moment calculations using parameterized tests."""
        actual = char_func_getter(self.normal_dist_example)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    def test_mode_in_output_types(self):
        assert self.normal_dist_example.mode() == 2.0
        mode32 = self.normal_dist_example.mode(Float32)
        assert isinstance(mode32, np.float32)

    @pytest.mark.parametrize(
        "parametrization_name, params, expected_mu, expected_sigma",
        [
            ("meanStd", {"mu": 2.0, "sigma": 1.5}, 2.0, 1.5),
            ("meanPrec", {"mu": 2.0, "tau": 0.25}, 2.0, math.sqrt(1 / 0.25)),
        ],
    )
    def test_parametrization_conversions(
        self, parametrization_name, params, expected_mu, expected_sigma
    ):
        """Test conversions between different parameterizations."""
        base_params = self.normal_family.to_base(
            self.normal_family.get_parametrization(parametrization_name)(**params)
        )

        assert abs(base_params.parameters["mu"] - expected_mu) < self.CALCULATION_PRECISION
        assert abs(base_params.parameters["sigma"] - expected_sigma) < self.CALCULATION_PRECISION

    def test_analytical_computations_availability(self):
        """Test that analytical computations are available for normal distribution."""
        comp = self.normal_family(mu=0.0, sigma=1.0).analytical_computations

        expected_chars = {
            CharacteristicName.LN_PDF,
            CharacteristicName.CDF,
            CharacteristicName.PPF,
            CharacteristicName.DRAW,
            CharacteristicName.MEAN,
            CharacteristicName.MEDIAN,
            CharacteristicName.MODE,
            CharacteristicName.VAR,
            CharacteristicName.ENTROPY,
            CharacteristicName.SKEW,
            CharacteristicName.KURT,
            CharacteristicName.KL,
        }
        assert set(comp.keys()) == expected_chars

    def test_mean_prec_uses_base_characteristics(self):
        dist = self.normal_family(mu=2.0, tau=1 / 2.25, parametrization_name="meanPrec")
        x = np.array([-1.0, 0.0, 2.0, 4.0])

        self.assert_arrays_almost_equal(dist.ln_pdf(x), self.normal_dist_example.ln_pdf(x))

    @pytest.mark.parametrize(
        "method_name, test_data, scipy_func",
        [
            ("ln_pdf", [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.logpdf),
            ("pdf", [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.pdf),
            ("cdf", [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.cdf),
            ("sf", [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.sf),
            ("ppf", [0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999], norm.ppf),
        ],
    )
    def test_array_input_for_characteristics(self, method_name, test_data, scipy_func):
        """Test that characteristics support array inputs."""
        dist = self.normal_dist_example

        input_array = np.array(test_data)
        result_array = getattr(dist, method_name)(input_array)

        assert result_array.shape == input_array.shape

        expected_array = scipy_func(input_array, loc=2.0, scale=1.5)

        self.assert_arrays_almost_equal(result_array, expected_array)

    def test_scalar_input_returns_float(self):
        value = self.normal_dist_example.ln_pdf(2.0)
        assert isinstance(value, float)
        assert abs(value - norm.logpdf(2.0, loc=2.0, scale=1.5)) < self.CALCULATION_PRECISION

    def test_ln_pdf_far_in_the_tail_is_finite(self):
        value = self.normal_dist_example.ln_pdf(1e6)
        assert math.isfinite(value)
        assert value < -1e10

    def test_ppf_endpoints(self):
        assert self.normal_dist_example.ppf(0.0) == -math.inf
        assert self.normal_dist_example.ppf(1.0) == math.inf

    @pytest.mark.parametrize("p", [-0.1, 1.1, math.nan])
    def test_ppf_invalid_probability(self, p):
        with pytest.raises(ValueError, match="Probability must be in"):
            self.normal_dist_example.ppf(p)

    def test_interval(self):
        lower, upper = self.normal_dist_example.interval(0.95)
        expected_lower, expected_upper = norm.interval(0.95, loc=2.0, scale=1.5)
        assert abs(lower - expected_lower) < 1e-8
        assert abs(upper - expected_upper) < 1e-8

    def test_normal_support(self):
        """Test that normal distribution has correct support (entire real line)."""
        support = self.normal_dist_example.support

        assert isinstance(support, ContinuousSupport)
        assert support.shape == ContinuousSupportShape1D.REAL_LINE
        assert self.normal_dist_example.contains(-1e300)
        assert not self.normal_dist_example.contains(math.nan)

    def test_kl_divergence(self):
        other = self.normal_family(mu=0.0, sigma=1.0)
        p, q = self.normal_dist_example, other

        expected = math.log(1.0 / 1.5) + (1.5**2 + 2.0**2) / 2.0 - 0.5
        assert abs(p.kl(q) - expected) < self.CALCULATION_PRECISION
        assert abs(p.kl(p)) < self.CALCULATION_PRECISION
        assert abs(p.kl_sym(q) - (p.kl(q) + q.kl(p))) < self.CALCULATION_PRECISION

    def test_kl_with_other_family_raises(self):
        beta = configure_families_register().get(FamilyName.BETA)(alpha=2.0, beta=2.0)
        with pytest.raises(CapabilityError):
            self.normal_dist_example.kl(beta)

    def test_sampling_moments(self):
        sample = self.normal_dist_example.sample_many(20_000, self.rng())

        assert len(sample) == 20_000
        assert sample.output_type is Float64
        assert abs(np.mean(sample.array) - 2.0) < 0.05
        assert abs(np.std(sample.array) - 1.5) < 0.05

    def test_float32_sampling(self):
        sample = self.normal_dist_example.sample_many(100, self.rng(), Float32)

        assert sample.array.dtype == np.float32
        assert all(isinstance(value, np.float32) for value in sample)

    def test_float32_sampling_beyond_its_range_stays_in_support(self):
        wide = self.normal_family(mu=0.0, sigma=1e39)

        sample = wide.sample_many(100, self.rng(), Float32)

        assert np.isfinite(sample.array).all()
        assert wide.contains(sample.array, Float32).all()
        assert np.abs(sample.array).max() == np.finfo(np.float32).max

    @pytest.mark.parametrize("output_type", [Int64, Bool])
    def test_discrete_output_types_are_rejected(self, output_type):
        with pytest.raises(CapabilityError):
            self.normal_dist_example.sample_many(10, self.rng(), output_type)
        with pytest.raises(CapabilityError):
            self.normal_dist_example.ln_pdf(1, output_type)

    def test_discrete_density_is_rejected(self):
        with pytest.raises(CapabilityError):
            self.normal_dist_example.query_method(CharacteristicName.LN_PMF)
