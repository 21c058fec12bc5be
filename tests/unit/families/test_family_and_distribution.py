from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
import math

import numpy as np
import pytest

from rvcore.distributions import ContinuousDistribution, DiscreteDistribution, Distribution
from rvcore.errors import CapabilityError
from rvcore.families import (
    ContinuousParametricDistribution,
    DiscreteParametricDistribution,
    ParametricFamilyRegister,
    configure_families_register,
)
from rvcore.outputs import Bool, Float32, Float64, FloatOutputType, Int64, OutputTypeRegister
from rvcore.rng import random_source
from rvcore.types import FamilyName
from tests.unit.families.test_basic import TestBaseFamily


class TestFamilyRegistrationAndSampling(TestBaseFamily):
    def test_family_registration_and_distribution_sampling(self) -> None:
        fam = self.make_default_family(
            distr_characteristics={
                self.LN_PDF: {"base": lambda p, x: np.zeros_like(x)},
                self.CDF: {"base": lambda p, x: np.clip(x, 0.0, 1.0)},
                self.PPF: {"base": lambda p, q: q},
            },
        )

        ParametricFamilyRegister.register(fam)

        distr = fam.distribution("base", value=0.0)

        n = 128
        sample = distr.sample_many(n, random_source(0))
        assert sample.shape == (n,)
        arr = sample.array
        assert (arr >= 0.0).all() and (arr <= 1.0).all()

        computations = distr.analytical_computations
        assert set(computations) == {self.LN_PDF, self.CDF, self.PPF}
        assert computations[self.CDF](0.25) == pytest.approx(0.25)
        assert computations[self.PPF](0.75) == pytest.approx(0.75)

    def test_registering_same_name_twice_raises(self) -> None:
        ParametricFamilyRegister.register(self.make_default_family())

        with pytest.raises(ValueError, match="already found"):
            ParametricFamilyRegister.register(self.make_default_family())

    def test_distribution_class_follows_family_kind(self) -> None:
        registry = configure_families_register()
        beta = registry.get(FamilyName.BETA)(alpha=1.0, beta=1.0)
        coin = registry.get(FamilyName.BERNOULLI)(p=0.5)

        assert isinstance(beta, ContinuousParametricDistribution)
        assert isinstance(coin, DiscreteParametricDistribution)
        assert isinstance(beta, Distribution) and isinstance(coin, Distribution)
        assert isinstance(beta, ContinuousDistribution)
        assert isinstance(coin, DiscreteDistribution)
        assert not hasattr(beta, "ln_pmf")
        assert not hasattr(coin, "ln_pdf")


class TestOutputTypeDeclaration(TestBaseFamily):
    def test_default_output_type_is_first_declared(self) -> None:
        fam = self.make_default_family(output_types=(Float32, Float64))
        ParametricFamilyRegister.register(fam)

        distr = fam.distribution(value=0.0)
        assert distr.resolve_output_type() is Float32
        assert distr.sample_many(4, random_source(1)).output_type is Float32

    def test_discrete_output_type_on_continuous_family_raises(self) -> None:
        with pytest.raises(CapabilityError):
            self.make_default_family(output_types=(Float64, Int64))

        fam = self.make_default_family()
        with pytest.raises(CapabilityError):
            fam.register_output_type(Bool)
        assert fam.output_types == (Float64,)

    def test_duplicate_output_type_warns(self) -> None:
        fam = self.make_default_family()

        with pytest.warns(UserWarning, match="already registered"):
            fam.register_output_type(Float64)
        assert fam.output_types == (Float64,)

    def test_undeclared_output_type_raises(self) -> None:
        fam = self.make_default_family()
        ParametricFamilyRegister.register(fam)
        distr = fam.distribution(value=0.0)

        with pytest.raises(CapabilityError):
            distr.sample_many(3, random_source(2), Float32)
        with pytest.raises(CapabilityError):
            distr.support_for(Float32)

    def test_new_output_type_extends_existing_family(self) -> None:
        float16 = FloatOutputType("float16", np.float16)
        normal = configure_families_register().get(FamilyName.NORMAL)
        normal.register_output_type(float16)

        distr = normal(mu=0.0, sigma=1.0)
        sample = distr.sample_many(50, random_source(3), float16)

        assert sample.array.dtype == np.float16
        assert OutputTypeRegister.infer(np.float16(0.5)) is float16
        assert math.isfinite(distr.ln_pdf(np.float16(0.5)))
        assert distr.ln_pdf(np.float16(0.5)) == pytest.approx(distr.ln_pdf(0.5))


class TestDistributionValues:
    def setup_method(self) -> None:
        self.normal = configure_families_register().get(FamilyName.NORMAL)

    def test_equal_parameters_compare_equal(self) -> None:
        first = self.normal(mu=0.0, sigma=1.0)
        second = self.normal(mu=0.0, sigma=1.0)

        assert first == second
        assert hash(first) == hash(second)
        assert first != self.normal(mu=0.0, sigma=2.0)
        assert len({first, second}) == 1

    def test_distributions_are_immutable(self) -> None:
        distr = self.normal(mu=0.0, sigma=1.0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            distr.parametrization = distr.parametrization  # type: ignore[misc]

    def test_repr(self) -> None:
        assert repr(self.normal(mu=1.0, sigma=2.0)) == "Normal(mu=1.0, sigma=2.0)"
        assert repr(self.normal) == "ParametricFamily(Normal)"
