"""
Conjugate Composition
=====================

Hierarchical sampling where a draw from one distribution (the *prior*) becomes
a parameter of another family (the *likelihood*):

    p ~ Beta(α, β)
    x ~ Bernoulli(p)

Composition is plain functional composition: sample the prior, validate the
parameters, construct the inner distribution, sample it. Nothing is cached
between calls; to reuse one parameter draw, keep the distribution returned by
:meth:`ConjugateComposition.draw_likelihood`.

Notes
-----
- A sampled parameter outside the inner family's domain raises
  :class:`~rvcore.errors.DomainError`; it is never clamped.
- The same composition is available through distribution-valued output
  types, e.g. ``beta.sample_many(n, rng, BernoulliOutput)``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from rvcore.distributions.sampling import ArraySample
from rvcore.errors import CapabilityError
from rvcore.outputs import Float64

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from typing import Any

    from rvcore.distributions.distribution import Distribution
    from rvcore.families.distribution import ParametricFamilyDistribution
    from rvcore.families.parametric_family import ParametricFamily
    from rvcore.outputs import OutputType
    from rvcore.rng import RandomSource


@dataclass(frozen=True, slots=True)
class ConjugateComposition:
    """
    A prior over one parameter of a parametric family.

    Parameters
    ----------
    prior : Distribution
        Distribution the parameter is drawn from.
    family : ParametricFamily
        Family of the inner (likelihood) distribution.
    parameter : str
        Name of the parameter receiving the prior draw.
    parametrization_name : str, optional
        Parametrization ``parameter`` belongs to (default: the family base).
    output_type : OutputType
        Output type the prior is sampled in (default: ``Float64``).
    fixed : Mapping[str, Any]
        Values of the remaining parameters of the parametrization.

    Raises
    ------
    KeyError
        If the parametrization is not registered on the family.
    ValueError
        If ``parameter`` is not a parameter of the parametrization, or other
        parameters are neither fixed nor known.
    CapabilityError
        If the prior is not instantiated for ``output_type``.

    Examples
    --------
    >>> rng = random_source(7)
    >>> beta = Beta(alpha=0.5, beta=0.5)
    >>> coin = ConjugateComposition(beta, Bernoulli, "p")
    >>> flips = coin.sample_many(100, rng)
    """

    prior: Distribution
    family: ParametricFamily
    parameter: str
    parametrization_name: str | None = None
    output_type: OutputType = Float64
    fixed: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        name = self.parametrization_name or self.family.base_parametrization_name
        fields = self.family.get_parametrization(name).field_names()

        if self.parameter not in fields:
            raise ValueError(
                f"'{self.parameter}' is not a parameter of {self.family.name} "
                f"parametrization '{name}' (parameters: {', '.join(fields)})."
            )
        unknown = set(self.fixed) - set(fields)
        if unknown:
            raise ValueError(f"Unknown fixed parameters: {', '.join(sorted(unknown))}.")
        if self.parameter in self.fixed:
            raise ValueError(f"'{self.parameter}' cannot be both sampled and fixed.")
        missing = [f for f in fields if f != self.parameter and f not in self.fixed]
        if missing:
            raise ValueError(f"Parameters must be fixed: {', '.join(missing)}.")

        self.prior.resolve_output_type(self.output_type)

    def draw_likelihood(self, rng: RandomSource) -> ParametricFamilyDistribution:
        """
        Draw a parameter from the prior and build the inner distribution.

        Raises
        ------
        DomainError
            If the drawn parameter violates the family's constraints.
        """
        value = self.prior.sample(rng, self.output_type)
        return self.family.distribution(
            self.parametrization_name, **{self.parameter: value}, **self.fixed
        )

    def _resolve_inner(self, output_type: OutputType | None) -> OutputType:
        declared = self.family.output_types
        if output_type is None:
            return declared[0]
        if output_type not in declared:
            raise CapabilityError(
                f"{self.family.name} is not instantiated for output type '{output_type}'."
            )
        return output_type

    def sample(self, rng: RandomSource, output_type: OutputType | None = None) -> Any:
        """One prior-predictive draw: a fresh parameter, then one value."""
        resolved = self._resolve_inner(output_type)
        return self.draw_likelihood(rng).sample(rng, resolved)

    def sample_many(
        self, n: int, rng: RandomSource, output_type: OutputType | None = None
    ) -> ArraySample:
        """
        ``n`` prior-predictive draws, each with its own parameter draw.

        Raises
        ------
        ValueError
            If ``n`` is negative.
        """
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}.")
        resolved = self._resolve_inner(output_type)

        data = np.empty(n, dtype=resolved.dtype)
        for i in range(n):
            data[i] = self.draw_likelihood(rng).sample_many(1, rng, resolved).array[0]
        return ArraySample(data, resolved)

    def sample_conditional(
        self, n: int, rng: RandomSource, output_type: OutputType | None = None
    ) -> tuple[ParametricFamilyDistribution, ArraySample]:
        """
        Draw one parameter and ``n`` values conditional on it.

        Returns
        -------
        tuple[ParametricFamilyDistribution, ArraySample]
            The inner distribution and its sample.
        """
        resolved = self._resolve_inner(output_type)
        likelihood = self.draw_likelihood(rng)
        return likelihood, likelihood.sample_many(n, rng, resolved)

    def sample_stream(
        self, rng: RandomSource, output_type: OutputType | None = None
    ) -> Iterator[Any]:
        """Endless iterator of prior-predictive draws."""
        while True:
            yield self.sample(rng, output_type)


__all__ = [
    "ConjugateComposition",
]
