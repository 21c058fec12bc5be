"""
Parametric Families
===================

A :class:`ParametricFamily` is the pluggable implementation of the
distribution contract: it owns the parametrizations of a family, the
analytical characteristics written once over canonical float64 values, the
output types the family is instantiated for and the resolver giving the
support for each of them. Calling the family builds a validated, immutable
distribution.

Adding a family never touches existing code: build a
:class:`ParametricFamily`, attach parametrizations with
:meth:`ParametricFamily.parametrization` and register it in
:class:`~rvcore.families.registry.ParametricFamilyRegister`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import warnings
from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from rvcore.distributions.computation import AnalyticalComputation
from rvcore.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from rvcore.errors import CapabilityError
from rvcore.families.distribution import (
    ContinuousParametricDistribution,
    DiscreteParametricDistribution,
    ParametricFamilyDistribution,
)
from rvcore.outputs import OutputTypeRegister
from rvcore.types import Kind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from typing import Any

    from rvcore.distributions.strategies import ComputationStrategy, SamplingStrategy
    from rvcore.distributions.support import Support
    from rvcore.families.parametrizations import Parametrization
    from rvcore.outputs import OutputType
    from rvcore.types import (
        EuclideanDistributionType,
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[[Parametrization, Any], Any]
    type SupportResolver = Callable[[Parametrization, OutputType], Support | None]
    type CharacteristicForms = Mapping[ParametrizationName, ParametrizedFunction]


def _no_support(_parameters: Parametrization, _output_type: OutputType) -> None:
    return None


class ParametricFamily:
    """
    A family of distributions sharing characteristics and output types.

    Parameters
    ----------
    name : str
        Family name, the key in the family register.
    distr_type : EuclideanDistributionType
        Kind and dimension of the family's distributions. The kind decides
        the density (``ln_pdf`` or ``ln_pmf``), the distribution class built
        by :meth:`distribution` and the output types that can be declared.
    distr_parametrizations : list[ParametrizationName]
        Parametrization names; the first one is the base parametrization.
    distr_characteristics : dict
        Characteristic name to either one function, defined for the base
        parametrization, or a mapping from parametrization name to function.
        Functions take ``(parameters, data, **options)``.
    output_types : Iterable[OutputType]
        Declared output types; the first is the default.
    sampling_strategy, computation_strategy : optional
        Strategies shared by the family's distributions.
    support_by_parametrization : Callable, optional
        ``(base_parameters, output_type) -> Support``; without it the
        distributions have no support restriction.

    Notes
    -----
    For every parametrization the family precomputes which parametrization
    provides each characteristic: its own form if there is one, the base
    form otherwise (evaluated on the parameters converted to the base).
    """

    def __init__(
        self,
        name: str,
        distr_type: EuclideanDistributionType,
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            CharacteristicForms | ParametrizedFunction,
        ],
        output_types: Iterable[OutputType] = (),
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportResolver | None = None,
    ):
        if not distr_parametrizations:
            raise ValueError(f"Family {name} needs at least one parametrization.")

        self._name = name
        self._distr_type = distr_type
        self.parametrization_names: list[ParametrizationName] = list(distr_parametrizations)
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        self.sampling_strategy: SamplingStrategy = (
            sampling_strategy or DefaultSamplingUnivariateStrategy()
        )
        self.computation_strategy: ComputationStrategy[Any, Any] = (
            computation_strategy or DefaultComputationStrategy()
        )
        self._support_resolver: SupportResolver = support_by_parametrization or _no_support

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {
            characteristic: (
                dict(forms) if isinstance(forms, dict) else {self.base_parametrization_name: forms}
            )
            for characteristic, forms in distr_characteristics.items()
        }
        self._analytical_plan = {
            pname: self._provider_plan(pname) for pname in self.parametrization_names
        }

        self._output_types: list[OutputType] = []
        for output_type in output_types:
            self.register_output_type(output_type)

    def _provider_plan(
        self, pname: ParametrizationName
    ) -> dict[GenericCharacteristicName, ParametrizationName]:
        plan: dict[GenericCharacteristicName, ParametrizationName] = {}
        for characteristic, forms in self.distr_characteristics.items():
            if pname in forms:
                plan[characteristic] = pname
            elif self.base_parametrization_name in forms:
                plan[characteristic] = self.base_parametrization_name
        return plan

    # ------------------------------------------------------------------ #
    # Description
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> Kind:
        return self._distr_type.kind

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return self._distr_type

    @property
    def characteristics(self) -> tuple[GenericCharacteristicName, ...]:
        """Names of the characteristics the family provides analytically."""
        return tuple(self.distr_characteristics)

    @property
    def support_resolver(self) -> SupportResolver:
        return self._support_resolver

    # ------------------------------------------------------------------ #
    # Output types
    # ------------------------------------------------------------------ #

    @property
    def output_types(self) -> tuple[OutputType, ...]:
        """Declared output types, the default one first."""
        return tuple(self._output_types)

    def register_output_type(self, output_type: OutputType) -> None:
        """
        Instantiate the family for an additional output type.

        The output type is also registered in
        :class:`~rvcore.outputs.OutputTypeRegister` so that its values are
        recognised when passed to density functions. Declaring an output type
        twice emits a ``UserWarning`` and changes nothing.

        Raises
        ------
        CapabilityError
            If the output type's kind does not match the family kind
            (e.g. a discrete output type on a continuous family).
        """
        if output_type.kind != self.kind:
            raise CapabilityError(
                f"{output_type.kind} output type '{output_type}' cannot be used "
                f"with the {self.kind} family {self.name}."
            )
        if output_type in self._output_types:
            warnings.warn(
                f"Output type '{output_type}' is already registered for family {self.name}.",
                UserWarning,
                stacklevel=2,
            )
            return
        OutputTypeRegister.register(output_type)
        self._output_types.append(output_type)

    # ------------------------------------------------------------------ #
    # Parametrizations
    # ------------------------------------------------------------------ #

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Base parametrization class.

        Raises
        ------
        ValueError
            If the base parametrization has not been attached yet.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from None

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Attach a parametrization class under ``name``.

        Raises
        ------
        ValueError
            If ``name`` is already taken.
        """
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """Parametrization class called ``name``; ``KeyError`` if unknown."""
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Class decorator attaching a parametrization to this family.

        Equivalent to :func:`rvcore.families.parametrizations.parametrization`
        with ``family=self``. Mypy does not apply ``dataclass_transform`` to
        decorators returned by methods, so annotate the class as a dataclass
        when type checking matters.
        """
        from rvcore.families.parametrizations import parametrization

        return parametrization(family=self, name=name)

    # ------------------------------------------------------------------ #
    # Distributions
    # ------------------------------------------------------------------ #

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Bind every characteristic to ``parameters`` (or their base form)."""
        plan = self._analytical_plan.get(parameters.name, {})
        base: Parametrization | None = None
        bound: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}

        for characteristic, provider in plan.items():
            if provider == parameters.name:
                target = parameters
            else:
                base = base or self.to_base(parameters)
                target = base
            func = self.distr_characteristics[characteristic][provider]
            bound[characteristic] = AnalyticalComputation(characteristic, partial(func, target))
        return bound

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Build a distribution of this family.

        Parameters
        ----------
        parametrization_name : str, optional
            Parametrization the values are given in (default: base).
        **parameters_values
            Parameter values.

        Returns
        -------
        ParametricFamilyDistribution
            A :class:`ContinuousParametricDistribution` or a
            :class:`DiscreteParametricDistribution` depending on the family
            kind.

        Raises
        ------
        KeyError
            If the parametrization is unknown.
        TypeError
            If parameters are missing or unknown.
        DomainError
            If the parameters, or their base form, violate a constraint.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(**parameters_values)
        parameters.validate()
        self.to_base(parameters).validate()

        if self.kind == Kind.CONTINUOUS:
            return ContinuousParametricDistribution(self.name, self._distr_type, parameters)
        return DiscreteParametricDistribution(self.name, self._distr_type, parameters)

    __call__ = distribution

    def __repr__(self) -> str:
        return f"ParametricFamily({self.name})"
