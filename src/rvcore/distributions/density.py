"""
Evaluation at Points
====================

Helpers evaluating value-taking characteristics (log-densities, ``cdf``) of a
distribution at values of an output type.

The value is converted to canonical float64 form, masked against the type
(:meth:`~rvcore.outputs.OutputType.accepts`) and against the support resolved
for the output type. Family functions only ever see in-support canonical
values; every other element evaluates to the ``fill`` value (``-inf`` for
log-densities).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from rvcore.errors import CapabilityError

if TYPE_CHECKING:
    from typing import Any

    from rvcore.outputs import OutputType
    from rvcore.types import BoolArray, FloatArray, GenericCharacteristicName

    from .distribution import Distribution


def _as_result(out: FloatArray) -> float | FloatArray:
    if out.ndim == 0:
        return float(out)
    return out


def support_mask(
    distr: Distribution, output_type: OutputType, x: Any, canonical: FloatArray
) -> BoolArray:
    """
    Element-wise mask of values accepted by ``output_type`` and inside the
    distribution's support for it.
    """
    accepted = np.asarray(output_type.accepts(x), dtype=bool)
    support = distr.support_for(output_type)
    if support is None:
        inside = ~np.isnan(canonical)
    else:
        inside = np.asarray(support.contains(canonical), dtype=bool)
    return np.broadcast_to(accepted, canonical.shape) & inside


def in_support(
    distr: Distribution, x: Any, output_type: OutputType | None = None
) -> bool | BoolArray:
    """
    Whether ``x`` is in the support of ``distr``.

    Total: values of an undeclared or unknown type are simply not contained.
    """
    if output_type is None:
        try:
            output_type = distr.resolve_output_type(value=x)
        except CapabilityError:
            shape = np.shape(x) if isinstance(x, (np.ndarray, list, tuple)) else ()
            result = np.zeros(shape, dtype=bool)
            return bool(result) if result.ndim == 0 else result
    elif output_type not in distr.output_types:
        raise CapabilityError(f"{distr} is not instantiated for output type '{output_type}'.")

    canonical = output_type.to_canonical(x)
    mask = support_mask(distr, output_type, x, canonical)
    if mask.ndim == 0:
        return bool(mask)
    return mask


def evaluate_masked(
    distr: Distribution,
    characteristic: GenericCharacteristicName,
    x: Any,
    output_type: OutputType | None = None,
    fill: float = -math.inf,
    **options: Any,
) -> float | FloatArray:
    """
    Evaluate ``characteristic`` at in-support values, ``fill`` elsewhere.

    Parameters
    ----------
    distr : Distribution
        Distribution to evaluate.
    characteristic : str
        Characteristic name (``ln_pdf``, ``ln_pmf``, ...).
    x : Any
        Scalar, array or sequence of output type values.
    output_type : OutputType, optional
        Representation of ``x``; inferred when omitted.
    fill : float
        Result for values outside the support.

    Returns
    -------
    float or FloatArray
        ``float`` for scalar input, an array of the input shape otherwise.

    Raises
    ------
    CapabilityError
        If the characteristic is not available for the (inferred) output type.
    """
    resolved = distr.resolve_output_type(output_type, value=x)
    method = distr.query_method(characteristic, resolved, **options)

    canonical = resolved.to_canonical(x)
    mask = support_mask(distr, resolved, x, canonical)

    out = np.full(canonical.shape, fill, dtype=np.float64)
    if np.any(mask):
        out[mask] = np.asarray(method(canonical[mask], **options), dtype=np.float64)
    return _as_result(out)


def evaluate_at(
    distr: Distribution,
    characteristic: GenericCharacteristicName,
    x: Any,
    output_type: OutputType | None = None,
    **options: Any,
) -> float | FloatArray:
    """
    Evaluate ``characteristic`` at every value of ``x``.

    Used for characteristics defined on the whole real line such as ``cdf``.
    Values the output type rejects evaluate to ``NaN``.
    """
    resolved = distr.resolve_output_type(output_type, value=x)
    method = distr.query_method(characteristic, resolved, **options)

    canonical = resolved.to_canonical(x)
    out = np.full(canonical.shape, np.nan, dtype=np.float64)
    valid = ~np.isnan(canonical)
    if np.any(valid):
        out[valid] = np.asarray(method(canonical[valid], **options), dtype=np.float64)
    return _as_result(out)


__all__ = [
    "support_mask",
    "in_support",
    "evaluate_masked",
    "evaluate_at",
]
