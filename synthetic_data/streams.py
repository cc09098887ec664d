"""
Seed splitting for reproducible generator runs.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)

_UINT64_MASK = 2 ** 64 - 1
_UINT64_MAX = np.iinfo(np.uint64).max


class RandomStreams(NamedTuple):
    """Independent random streams owned by one generator instance.

    Field order is the derivation order and must not change.
    """
    weight: np.random.Generator
    example: np.random.Generator
    noise: np.random.Generator
    direction: np.random.Generator
    update_index: np.random.Generator


def derive_streams(seed: int) -> RandomStreams:
    """
    Derive five independently seeded streams from one seed.

    A parent generator is seeded with ``seed`` and five successive 64-bit
    values are drawn from it, in field order of ``RandomStreams``; each
    value seeds one dedicated stream.

    Parameters
    ----------
    seed : int
        Signed 64-bit seed. Negative values are mapped to their unsigned
        two's-complement form, so distinct seeds stay distinct.

    Returns
    -------
    RandomStreams
    """
    parent = np.random.default_rng(int(seed) & _UINT64_MASK)

    child_seeds = []
    for _ in RandomStreams._fields:
        child_seeds.append(int(parent.integers(0, _UINT64_MAX, dtype=np.uint64, endpoint=True)))

    logger.debug("Derived %d stream seeds from seed=%d", len(child_seeds), seed)

    return RandomStreams(*(np.random.default_rng(child) for child in child_seeds))
