"""
Hyperplane state and drift updates.

The hyperplane is the set of points ``x`` with ``sum(w_i * x_i) == sum(w_i) / 2``.
After every example a subset of the weights moves by a fixed step in its
current direction, and each moved weight has a 10% chance of reversing
direction for the following rounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Set

import numpy as np

logger = logging.getLogger(__name__)

DIRECTION_SPLIT = 0.5
DIRECTION_FLIP_PROBABILITY = 0.1


def init_directions(dimensions: int, rng: np.random.Generator) -> np.ndarray:
    """Draw a direction of -1 or +1 for every dimension."""
    draws = rng.random(dimensions)
    return np.where(draws < DIRECTION_SPLIT, -1, 1).astype(np.int64)


def init_weights(dimensions: int, rng: np.random.Generator) -> np.ndarray:
    """Draw ``dimensions`` uniform weights in [0, 1)."""
    return rng.random(dimensions)


def compute_threshold(weights: np.ndarray) -> float:
    """Half the sum of the weights."""
    return float(np.sum(weights)) / 2


@dataclass
class HyperplaneState:
    """
    Mutable hyperplane owned by a single generator.

    ``threshold`` is kept equal to ``compute_threshold(weights)``; use
    ``set_weights`` rather than assigning ``weights`` directly.
    """
    weights: np.ndarray
    directions: np.ndarray
    threshold: float

    @classmethod
    def initial(cls, dimensions: int, weight_rng: np.random.Generator,
                direction_rng: np.random.Generator) -> HyperplaneState:
        """Build the starting state; directions are drawn before weights."""
        directions = init_directions(dimensions, direction_rng)
        weights = init_weights(dimensions, weight_rng)
        return cls(weights=weights, directions=directions, threshold=compute_threshold(weights))

    @property
    def dimensions(self) -> int:
        return len(self.weights)

    def set_weights(self, weights: np.ndarray) -> None:
        self.weights = weights
        self.threshold = compute_threshold(weights)

    def classify(self, point: np.ndarray) -> bool:
        """True if ``point`` lies on or above the hyperplane."""
        return float(np.dot(point, self.weights)) >= self.threshold

    def copy(self) -> HyperplaneState:
        return HyperplaneState(
            weights=self.weights.copy(),
            directions=self.directions.copy(),
            threshold=self.threshold,
        )


def select_update_indices(
    dimensions: int,
    update_count: int,
    rng: np.random.Generator
) -> np.ndarray:
    """
    Choose the distinct dimensions whose weights move this round.

    If ``update_count >= dimensions`` every index is returned and ``rng`` is
    not used. Otherwise uniform indices are drawn, rejecting duplicates,
    until ``update_count`` distinct ones are collected.

    Returns
    -------
    np.ndarray
        Selected indices in ascending order.
    """
    if update_count >= dimensions:
        return np.arange(dimensions)

    selected: Set[int] = set()
    while len(selected) < update_count:
        selected.add(int(rng.integers(dimensions)))

    return np.array(sorted(selected), dtype=np.int64)


def update_weights(
    weights: np.ndarray,
    directions: np.ndarray,
    indices: np.ndarray,
    step_size: float
) -> np.ndarray:
    """Return new weights with ``weights[i] += directions[i] * step_size`` for each selected i."""
    new_weights = weights.copy()
    new_weights[indices] += directions[indices] * step_size
    return new_weights


def update_directions(
    directions: np.ndarray,
    indices: np.ndarray,
    rng: np.random.Generator
) -> np.ndarray:
    """
    Return new directions where each selected entry reverses with 10% probability.

    One draw is consumed per selected index, in the order of ``indices``.
    """
    new_directions = directions.copy()
    for index in indices:
        if rng.random() <= DIRECTION_FLIP_PROBABILITY:
            new_directions[index] = -new_directions[index]
            logger.debug("Direction of dimension %d reversed to %+d", index, new_directions[index])
    return new_directions
