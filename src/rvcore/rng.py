"""
Randomness Source
=================

Sampling consumes an injected :class:`numpy.random.Generator`. Distributions
never create, own or store a generator: the caller builds one (for example via
:func:`random_source`) and passes it to every sampling call. Advancing the
generator is a mutation, so concurrent callers must each use their own.

Notes
-----
- Only the generator's public drawing methods are used; the bit generator
  behind it (PCG64, Philox, ...) is irrelevant to the core.
- Exceptions raised by the generator propagate unchanged.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np

type RandomSource = np.random.Generator
"""Type alias for the injected source of uniform entropy."""

type SeedLike = int | np.random.SeedSequence | np.random.BitGenerator | np.random.Generator | None
"""Anything :func:`random_source` accepts."""


def random_source(seed: SeedLike = None) -> RandomSource:
    """
    Build a randomness source.

    Parameters
    ----------
    seed : SeedLike, optional
        Integer seed, seed sequence or bit generator. An existing generator
        is returned unchanged. ``None`` draws fresh OS entropy.

    Returns
    -------
    RandomSource
        Generator whose state advances deterministically with every draw.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


__all__ = [
    "RandomSource",
    "SeedLike",
    "random_source",
]
