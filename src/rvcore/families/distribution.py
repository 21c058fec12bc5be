"""
Concrete distribution instances with specific parameter values.

This module provides the implementation for individual distribution instances
created from parametric families. Instances are immutable value objects: two
distributions of the same family with equal parameters compare equal, and
they can be shared freely between threads.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rvcore.distributions.distribution import (
    ContinuousDistribution,
    DiscreteDistribution,
    Distribution,
)
from rvcore.errors import CapabilityError
from rvcore.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from typing import Any

    from rvcore.distributions.computation import AnalyticalComputation
    from rvcore.distributions.strategies import ComputationStrategy, SamplingStrategy
    from rvcore.distributions.support import Support
    from rvcore.families.parametric_family import ParametricFamily
    from rvcore.families.parametrizations import Parametrization
    from rvcore.outputs import OutputType
    from rvcore.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(frozen=True, slots=True, repr=False)
class ParametricFamilyDistribution(Distribution):
    """
    A specific distribution instance from a parametric family.

    Represents a concrete distribution with specific parameter values,
    providing methods for computation and sampling.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    _distribution_type : DistributionType
        Type of this distribution.
    parametrization : Parametrization
        Validated parameter values for this distribution.

    Notes
    -----
    Analytical computations are bound to the parameters once, at
    construction.
    """

    family_name: str
    _distribution_type: DistributionType
    parametrization: Parametrization
    _analytical: Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_analytical", self.family._build_analytical_computations(self.parametrization)
        )

    @property
    def distribution_type(self) -> DistributionType:
        """Get the distribution type."""
        return self._distribution_type

    @property
    def family(self) -> ParametricFamily:
        """
        Get the parametric family this distribution belongs to.

        Returns
        -------
        ParametricFamily
            The parametric family of this distribution.
        """
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def parameters(self) -> dict[str, Any]:
        """Parameter values in the parametrization used at construction."""
        return self.parametrization.parameters

    @property
    def parametrization_name(self) -> str:
        return self.parametrization.name

    @property
    def base_parametrization(self) -> Parametrization:
        """Parameters converted to the family's base parametrization."""
        return self.family.to_base(self.parametrization)

    @property
    def base_parameters(self) -> dict[str, Any]:
        return self.base_parametrization.parameters

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Get analytical computations for this distribution."""
        return self._analytical

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        """Get the sampling strategy for this distribution."""
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        """Get the computation strategy for this distribution."""
        return self.family.computation_strategy

    @property
    def output_types(self) -> Sequence[OutputType]:
        """Output types the family is instantiated for; the first is the default."""
        return self.family.output_types

    def support_for(self, output_type: OutputType | None = None) -> Support | None:
        """
        Support of this distribution for an output type.

        Raises
        ------
        CapabilityError
            If the family is not instantiated for ``output_type``.
        """
        resolved = self.resolve_output_type(output_type)
        return self.family.support_resolver(self.base_parametrization, resolved)

    def kl(self, other: Distribution) -> float:
        """
        Kullback-Leibler divergence ``KL(self || other)``.

        Raises
        ------
        CapabilityError
            If ``other`` is not a member of the same family.
        """
        if getattr(other, "family_name", None) != self.family_name:
            raise CapabilityError(
                f"KL divergence between {self.family_name} and "
                f"{getattr(other, 'family_name', type(other).__name__)} is not provided."
            )
        return Distribution.kl(self, other)

    def __repr__(self) -> str:
        params = ", ".join(f"{key}={value!r}" for key, value in self.parameters.items())
        return f"{self.family_name}({params})"


@dataclass(frozen=True, slots=True, repr=False)
class ContinuousParametricDistribution(ParametricFamilyDistribution, ContinuousDistribution):
    """Member of a continuous family; evaluates ``ln_pdf``."""


@dataclass(frozen=True, slots=True, repr=False)
class DiscreteParametricDistribution(ParametricFamilyDistribution, DiscreteDistribution):
    """Member of a discrete family; evaluates ``ln_pmf``."""


__all__ = [
    "ParametricFamilyDistribution",
    "ContinuousParametricDistribution",
    "DiscreteParametricDistribution",
]
