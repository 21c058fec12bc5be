"""
Distribution Interfaces
=======================

This module defines the public :class:`Distribution` protocol and its
continuous and discrete refinements:

- :class:`Distribution` protocol – capability interface used throughout the
  core: support membership, sampling into any declared output type, and
  characteristic evaluation.
- :class:`ContinuousDistribution` – adds the log-density ``ln_pdf``.
- :class:`DiscreteDistribution` – adds the log-mass ``ln_pmf``.

Notes
-----
- A distribution declares the output types it is instantiated for; requests
  for any other output type raise :class:`~rvcore.errors.CapabilityError`.
- All density APIs are log-domain. ``pdf`` / ``pmf`` are the explicit
  linear-space conversions.
- Sampling never stores the randomness source: it is passed to every call.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from rvcore.errors import CapabilityError
from rvcore.types import CharacteristicName

from .density import evaluate_at, evaluate_masked, in_support
from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence
    from typing import Any

    from rvcore.distributions.computation import Computation
    from rvcore.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from rvcore.distributions.support import Support
    from rvcore.outputs import OutputType
    from rvcore.rng import RandomSource
    from rvcore.types import (
        BoolArray,
        DistributionType,
        FloatArray,
        GenericCharacteristicName,
    )


def _exp(value: float | FloatArray) -> float | FloatArray:
    if isinstance(value, np.ndarray):
        return np.exp(value)
    return float(np.exp(value))


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies and compositions."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, Computation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def output_types(self) -> Sequence[OutputType]: ...

    def support_for(self, output_type: OutputType | None = None) -> Support | None: ...

    @property
    def support(self) -> Support | None:
        """Support for the default output type."""
        return self.support_for(None)

    # ------------------------------------------------------------------ #
    # Capability resolution
    # ------------------------------------------------------------------ #

    def resolve_output_type(
        self, output_type: OutputType | None = None, value: Any = None
    ) -> OutputType:
        """
        Resolve the output type a request is made in.

        Resolution order
        ----------------
        1. ``output_type`` if given (it must be declared).
        2. Without a value, the first declared output type.
        3. The type inferred from ``value`` by the global
           :class:`~rvcore.outputs.OutputTypeRegister`, if declared.
        4. The first declared output type accepting ``value``.

        Raises
        ------
        CapabilityError
            If the distribution is not instantiated for the output type.
        """
        from rvcore.outputs import OutputTypeRegister

        declared = self.output_types
        if output_type is not None:
            if output_type not in declared:
                raise CapabilityError(
                    f"{self} is not instantiated for output type '{output_type}'."
                )
            return output_type

        if value is None:
            return declared[0]

        try:
            inferred = OutputTypeRegister.infer(value)
        except CapabilityError:
            inferred = None
        if inferred is not None and inferred in declared:
            return inferred

        for candidate in declared:
            if np.all(candidate.accepts(value)):
                return candidate

        raise CapabilityError(
            f"{self} is not instantiated for values of type {type(value).__name__}."
        )

    def query_method(
        self,
        characteristic_name: GenericCharacteristicName,
        output_type: OutputType | None = None,
        **options: Any,
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(
            characteristic_name, self, output_type, **options
        )

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name, **options)(value)

    # ------------------------------------------------------------------ #
    # Support
    # ------------------------------------------------------------------ #

    def contains(self, x: Any, output_type: OutputType | None = None) -> bool | BoolArray:
        """
        Whether ``x`` lies in the support.

        Returns ``False`` for values of a type the distribution is not
        instantiated for.
        """
        return in_support(self, x, output_type)

    # ------------------------------------------------------------------ #
    # Density
    # ------------------------------------------------------------------ #

    def ln_f(
        self, x: Any, output_type: OutputType | None = None, **options: Any
    ) -> float | FloatArray:
        """Log-density (continuous) or log-mass (discrete) at ``x``."""
        density = self.distribution_type.kind.density
        return evaluate_masked(self, density, x, output_type, **options)

    def f(self, x: Any, output_type: OutputType | None = None, **options: Any) -> float | FloatArray:
        """Density or mass at ``x`` in linear space."""
        return _exp(self.ln_f(x, output_type, **options))

    def log_likelihood(
        self, values: Any, output_type: OutputType | None = None, **options: Any
    ) -> float:
        """
        Log-likelihood of independent observations.

        ``values`` may be a :class:`~rvcore.distributions.sampling.Sample`,
        in which case its array and output type are used.

        Returns
        -------
        float
            ``sum(ln_f(values))``; ``-inf`` if any value is outside the support.
        """
        if isinstance(values, Sample):
            output_type = output_type or values.output_type
            values = values.array
        return float(np.sum(self.ln_f(values, output_type, **options)))

    # ------------------------------------------------------------------ #
    # Distribution functions
    # ------------------------------------------------------------------ #

    def cdf(self, x: Any, output_type: OutputType | None = None, **options: Any) -> float | FloatArray:
        """Cumulative distribution function ``P(X <= x)``."""
        return evaluate_at(self, CharacteristicName.CDF, x, output_type, **options)

    def sf(self, x: Any, output_type: OutputType | None = None, **options: Any) -> float | FloatArray:
        """Survival function ``P(X > x)``."""
        return 1.0 - self.cdf(x, output_type, **options)

    def ppf(self, p: Any, output_type: OutputType | None = None, **options: Any) -> Any:
        """
        Percent point function (inverse of ``cdf``).

        Parameters
        ----------
        p : float or array_like
            Probabilities in [0, 1].
        output_type : OutputType, optional
            Representation of the result (default: first declared).

        Returns
        -------
        Any
            A value of the output type for scalar ``p``, an array otherwise.

        Raises
        ------
        ValueError
            If a probability is outside [0, 1].
        CapabilityError
            If a quantile cannot be represented in the output type.
        """
        resolved = self.resolve_output_type(output_type)
        method = self.query_method(CharacteristicName.PPF, resolved, **options)

        probs = np.asarray(p, dtype=np.float64)
        if np.any(np.isnan(probs) | (probs < 0) | (probs > 1)):
            raise ValueError("Probability must be in [0, 1]")

        canonical = np.asarray(method(probs.reshape(-1), **options), dtype=np.float64)
        values = resolved.from_canonical(canonical.reshape(-1), self.support_for(resolved))
        if probs.ndim == 0:
            return resolved.scalar(values[0])
        return values.reshape(probs.shape)

    quantile = ppf

    def interval(
        self, p: float, output_type: OutputType | None = None, **options: Any
    ) -> tuple[Any, Any]:
        """
        Central interval containing probability mass ``p``.

        Returns
        -------
        tuple
            ``(ppf((1 - p) / 2), ppf((1 + p) / 2))``.
        """
        if not 0.0 <= p <= 1.0:
            raise ValueError("Probability must be in [0, 1]")
        lower = self.ppf((1.0 - p) / 2.0, output_type, **options)
        upper = self.ppf((1.0 + p) / 2.0, output_type, **options)
        return lower, upper

    # ------------------------------------------------------------------ #
    # Summary characteristics
    # ------------------------------------------------------------------ #

    def mean(self) -> float | None:
        return _optional_float(self.query_method(CharacteristicName.MEAN)(None))

    def median(self) -> float | None:
        return _optional_float(self.query_method(CharacteristicName.MEDIAN)(None))

    def mode(self, output_type: OutputType | None = None) -> Any:
        """
        Mode as a value of the output type.

        Returns
        -------
        Any
            ``None`` if the mode is undefined or not unique.
        """
        resolved = self.resolve_output_type(output_type)
        value = self.query_method(CharacteristicName.MODE, resolved)(None)
        if value is None:
            return None
        converted = resolved.from_canonical(
            np.array([value], dtype=np.float64), self.support_for(resolved)
        )
        return resolved.scalar(converted[0])

    def variance(self) -> float | None:
        return _optional_float(self.query_method(CharacteristicName.VAR)(None))

    def entropy(self) -> float:
        return float(self.query_method(CharacteristicName.ENTROPY)(None))

    def skewness(self) -> float | None:
        return _optional_float(self.query_method(CharacteristicName.SKEW)(None))

    def kurtosis(self) -> float | None:
        """Excess kurtosis."""
        return _optional_float(self.query_method(CharacteristicName.KURT)(None))

    def kl(self, other: Distribution) -> float:
        """Kullback-Leibler divergence ``KL(self || other)``."""
        return float(self.query_method(CharacteristicName.KL)(other))

    def kl_sym(self, other: Distribution) -> float:
        """Symmetrised divergence ``KL(self || other) + KL(other || self)``."""
        return self.kl(other) + other.kl(self)

    # ------------------------------------------------------------------ #
    # Sampling
    # ------------------------------------------------------------------ #

    def sample_many(
        self,
        n: int,
        rng: RandomSource,
        output_type: OutputType | None = None,
        **options: Any,
    ) -> ArraySample:
        """
        Draw ``n`` values in draw order.

        Raises
        ------
        ValueError
            If ``n`` is negative.
        CapabilityError
            If the distribution is not instantiated for ``output_type``.
        """
        return self.sampling_strategy.sample(
            n, distr=self, rng=rng, output_type=output_type, **options
        )

    def sample(self, rng: RandomSource, output_type: OutputType | None = None, **options: Any) -> Any:
        """Draw a single value of the output type."""
        return self.sample_many(1, rng, output_type, **options)[0]

    def sample_stream(
        self, rng: RandomSource, output_type: OutputType | None = None, **options: Any
    ) -> Iterator[Any]:
        """Endless iterator of single draws sharing ``rng``."""
        while True:
            yield self.sample(rng, output_type, **options)


@runtime_checkable
class ContinuousDistribution(Distribution, Protocol):
    """Distribution with a probability density over continuous output types."""

    def ln_pdf(
        self, x: Any, output_type: OutputType | None = None, **options: Any
    ) -> float | FloatArray:
        """
        Natural logarithm of the density at ``x``.

        Returns ``-inf`` for values outside the support.
        """
        return evaluate_masked(self, CharacteristicName.LN_PDF, x, output_type, **options)

    def pdf(self, x: Any, output_type: OutputType | None = None, **options: Any) -> float | FloatArray:
        return _exp(self.ln_pdf(x, output_type, **options))


@runtime_checkable
class DiscreteDistribution(Distribution, Protocol):
    """Distribution with a probability mass over discrete output types."""

    def ln_pmf(
        self, x: Any, output_type: OutputType | None = None, **options: Any
    ) -> float | FloatArray:
        """
        Natural logarithm of the mass at ``x`` (at most ``0``).

        Returns ``-inf`` for values outside the support.
        """
        return evaluate_masked(self, CharacteristicName.LN_PMF, x, output_type, **options)

    def pmf(self, x: Any, output_type: OutputType | None = None, **options: Any) -> float | FloatArray:
        return _exp(self.ln_pmf(x, output_type, **options))


__all__ = [
    "Distribution",
    "ContinuousDistribution",
    "DiscreteDistribution",
]
