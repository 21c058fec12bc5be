"""
Tests for Distribution Families Configuration

This module tests the configuration and registration of distribution families
in the global ParametricFamilyRegister.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from rvcore.families import BernoulliOutput
from rvcore.families.configuration import (
    configure_families_register,
    reset_families_register,
)
from rvcore.families.registry import ParametricFamilyRegister
from rvcore.outputs import Bool, Float32, OutputTypeRegister, UInt8
from rvcore.types import FamilyName, Kind


class TestConfiguration:
    """Test suite for configuration functionality."""

    def setup_method(self):
        """Setup before each test method."""
        self.registry = configure_families_register()

    def test_configure_families_register_returns_registry(self):
        """Test that configure_families_register returns a ParametricFamilyRegister."""
        assert isinstance(self.registry, ParametricFamilyRegister)

    def test_configure_families_register_is_singleton(self):
        """Test that configure_families_register returns the same instance."""
        registry2 = configure_families_register()
        assert self.registry is registry2

    def test_families_registered(self):
        """Test that all expected families are registered."""
        expected_families = {
            FamilyName.BETA,
            FamilyName.NORMAL,
            FamilyName.BERNOULLI,
            FamilyName.BETA_BINOMIAL,
        }

        registered_families = set(self.registry.names())
        assert registered_families == expected_families

    def test_reset_families_register(self):
        """Test that reset_families_register clears the cache."""
        registry1 = configure_families_register()
        reset_families_register()
        registry2 = configure_families_register()

        # They should be different instances after reset
        assert registry1 is not registry2

    def test_registry_singleton_pattern(self):
        """Test that ParametricFamilyRegister itself follows singleton pattern."""
        registry1 = ParametricFamilyRegister()
        registry2 = ParametricFamilyRegister()
        assert registry1 is registry2

    def test_registry_get_family_method(self):
        """Test the get method of ParametricFamilyRegister."""
        # Test getting existing family
        normal_family = self.registry.get(FamilyName.NORMAL)
        assert normal_family is not None
        assert normal_family.name == FamilyName.NORMAL

        # Test getting non-existent family
        with pytest.raises(ValueError, match="known: Bernoulli, Beta"):
            self.registry.get("NonExistentFamily")

    def test_registry_names(self):
        """Test the names method of ParametricFamilyRegister."""
        families_list = ParametricFamilyRegister.names()

        assert isinstance(families_list, list)
        assert families_list[0] == FamilyName.BERNOULLI
        assert FamilyName.NORMAL in families_list
        assert "NonExistentFamily" not in families_list

    def test_contains(self):
        assert ParametricFamilyRegister.contains(FamilyName.BETA)
        assert not ParametricFamilyRegister.contains("NonExistentFamily")

    def test_output_types_registered_with_families(self):
        """Families register their output types for value inference."""
        output_types = OutputTypeRegister.output_types()

        assert BernoulliOutput in output_types
        assert OutputTypeRegister.infer(self.registry.get(FamilyName.BERNOULLI)(p=0.5)) is BernoulliOutput

    def test_reset_rebuilds_families(self):
        beta = self.registry.get(FamilyName.BETA)
        reset_families_register()
        assert configure_families_register().get(FamilyName.BETA) is not beta

    def test_families_by_kind(self):
        continuous = [f.name for f in ParametricFamilyRegister.of_kind(Kind.CONTINUOUS)]
        discrete = [f.name for f in ParametricFamilyRegister.of_kind(Kind.DISCRETE)]

        assert continuous == [FamilyName.BETA, FamilyName.NORMAL]
        assert discrete == [FamilyName.BERNOULLI, FamilyName.BETA_BINOMIAL]

    @pytest.mark.parametrize(
        "output_type, expected",
        [
            (Bool, [FamilyName.BERNOULLI]),
            (UInt8, [FamilyName.BERNOULLI, FamilyName.BETA_BINOMIAL]),
            (Float32, [FamilyName.BETA, FamilyName.NORMAL]),
            (BernoulliOutput, [FamilyName.BETA]),
        ],
    )
    def test_families_instantiated_for_output_type(self, output_type, expected):
        families = ParametricFamilyRegister.instantiated_for(output_type)
        assert [f.name for f in families] == expected
