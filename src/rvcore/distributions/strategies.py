"""
Computation and Sampling Strategies
===================================

This module defines the pluggable strategy interfaces and default implementations:

- :class:`ComputationStrategy` — resolves characteristic methods for an
  output type.
- :class:`DefaultComputationStrategy` — checks the requested capability
  (output type declared by the distribution, density matching the kind)
  and returns the analytical implementation.
- :class:`SamplingStrategy` — draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy` — draws ``n`` canonical values
  through the ``draw`` characteristic (or ``ppf`` applied to i.i.d. uniform
  variates) and converts them to the requested output type.

Notes
-----
- Strategies are stateless; the randomness source is passed to every call.
- Capability mismatches raise :class:`~rvcore.errors.CapabilityError` before
  any characteristic is evaluated.
"""

__author__ = "Leonid Elkin, Mikhail, Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from rvcore.distributions.computation import Computation
from rvcore.errors import CapabilityError
from rvcore.types import (
    DENSITY_BY_KIND,
    CharacteristicName,
    GenericCharacteristicName,
)

from .sampling import ArraySample

if TYPE_CHECKING:
    from rvcore.outputs import OutputType
    from rvcore.rng import RandomSource

    from .distribution import Distribution

type Method[In, Out] = Computation[In, Out]


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    def query_method(
        self,
        state: GenericCharacteristicName,
        distr: "Distribution",
        output_type: "OutputType | None" = None,
        **options: Any,
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If ``output_type`` is given, the distribution must be instantiated
       for it.
    2. A log-density request must match the distribution kind
       (``ln_pdf`` for continuous, ``ln_pmf`` for discrete) and the kind of
       the output type.
    3. The distribution's analytical implementation is returned.

    Raises
    ------
    CapabilityError
        If any of the checks fails or no analytical implementation exists.
    """

    def query_method(
        self,
        state: GenericCharacteristicName,
        distr: "Distribution",
        output_type: "OutputType | None" = None,
        **options: Any,
    ) -> Method[In, Out]:
        """
        Resolve the analytical method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical computations.
        output_type : OutputType, optional
            Output type the characteristic is requested for.
        **options
            Unused; accepted for protocol compatibility.

        Returns
        -------
        Method
            Analytical callable implementing ``state``.
        """
        kind = distr.distribution_type.kind

        if output_type is not None:
            if output_type not in distr.output_types:
                raise CapabilityError(
                    f"{distr} is not instantiated for output type '{output_type}'."
                )
            if state in DENSITY_BY_KIND.values() and output_type.kind != kind:
                raise CapabilityError(
                    f"Output type '{output_type}' is {output_type.kind}, "
                    f"'{state}' requires a {kind} output type."
                )

        if state in DENSITY_BY_KIND.values() and DENSITY_BY_KIND[kind] != state:
            raise CapabilityError(f"'{state}' is not defined for {kind} distributions.")

        if state in distr.analytical_computations:
            return distr.analytical_computations[state]

        raise CapabilityError(f"{distr} provides no '{state}' characteristic.")


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`ArraySample`)."""

    def sample(
        self,
        n: int,
        distr: "Distribution",
        rng: "RandomSource",
        output_type: "OutputType | None" = None,
        **options: Any,
    ) -> ArraySample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Default univariate sampler.

    Canonical draws come from the distribution's ``draw`` characteristic,
    called as ``draw(n, rng=rng)``. Without one, inverse transform sampling is
    used: ``ppf`` applied to i.i.d. uniforms ``U ~ U[0, 1)`` taken from the
    randomness source. The draws are then represented in the output type
    using the support resolved for it.

    Returns
    -------
    ArraySample
        A 1D sample of length ``n``, in draw order.
    """

    def sample(
        self,
        n: int,
        distr: "Distribution",
        rng: "RandomSource",
        output_type: "OutputType | None" = None,
        **options: Any,
    ) -> ArraySample:
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}.")

        if not distr.distribution_type.is_univariate:
            raise CapabilityError(f"{distr} is {distr.distribution_type}, not univariate.")

        resolved = distr.resolve_output_type(output_type)
        support = distr.support_for(resolved)
        if not resolved.represents(support):
            raise CapabilityError(
                f"{distr} has support points that output type '{resolved}' cannot represent."
            )
        analytical = distr.analytical_computations

        if CharacteristicName.DRAW in analytical:
            draw = distr.query_method(CharacteristicName.DRAW, resolved)
            canonical = np.asarray(draw(n, rng=rng, **options), dtype=np.float64)
        elif CharacteristicName.PPF in analytical:
            ppf = distr.query_method(CharacteristicName.PPF, resolved)
            U = rng.random(n)
            canonical = np.asarray(ppf(U, **options), dtype=np.float64)
        else:
            raise CapabilityError(f"{distr} provides neither 'draw' nor 'ppf' to sample from.")

        canonical = canonical.reshape(n)
        values = resolved.from_canonical(canonical, support)
        return ArraySample(values, resolved)


__all__ = [
    "Method",
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
]
