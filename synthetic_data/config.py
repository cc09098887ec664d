"""
Configuration for the moving hyperplane stream generator.

Two layers are provided:

- ``GeneratorConfig``: the immutable, validated parameters consumed by the
  generator core.
- ``GeneratorSettings``: the user-facing settings (noise as a percentage,
  optional random seed) that are converted into a ``GeneratorConfig``.
"""

from __future__ import annotations

import math
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, TypedDict

import numpy as np

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

DEFAULT_COUNT = 5000
DEFAULT_DIMENSIONALITY = 5
DEFAULT_NOISE_PERCENTAGE = 5
DEFAULT_WEIGHT_UPDATE_COUNT = 5
DEFAULT_MAGNITUDE = 0.01
MIN_DIMENSIONALITY = 3


class ConfigurationError(ValueError):
    """Raised when generator parameters are invalid."""


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _is_real(value: Any) -> bool:
    return _is_int(value) or isinstance(value, (float, np.floating))


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Immutable generator parameters.

    Parameters
    ----------
    seed : int
        Signed 64-bit seed from which all random streams are derived.
    example_count : int
        Normalizer for the drift speed (not an iteration bound).
    dimensions : int
        Dimensionality of the generated points.
    noise_fraction : float
        Probability in [0, 1] of flipping a label.
    weights_updated_per_round : int
        Number of hyperplane weights moved after each example.
    drift_magnitude : float
        Magnitude of the weight change per round, before normalization.
    update_sampled_only : bool
        Move only the sampled weights (default). When False every weight
        moves each round although the sample is still drawn.
    """
    seed: int
    example_count: int = DEFAULT_COUNT
    dimensions: int = DEFAULT_DIMENSIONALITY
    noise_fraction: float = DEFAULT_NOISE_PERCENTAGE / 100
    weights_updated_per_round: int = DEFAULT_WEIGHT_UPDATE_COUNT
    drift_magnitude: float = DEFAULT_MAGNITUDE
    update_sampled_only: bool = True

    def __post_init__(self):
        if not _is_int(self.seed) or not INT64_MIN <= self.seed <= INT64_MAX:
            raise ConfigurationError(f"seed must be a signed 64-bit integer, got {self.seed!r}")

        if not _is_int(self.example_count) or self.example_count < 1:
            raise ConfigurationError(f"example_count must be a positive integer, got {self.example_count!r}")

        if not _is_int(self.dimensions) or self.dimensions < 1:
            raise ConfigurationError(f"dimensions must be >= 1, got {self.dimensions!r}")

        if not _is_real(self.noise_fraction) or not 0 <= self.noise_fraction <= 1:
            raise ConfigurationError(f"noise_fraction must be in [0, 1], got {self.noise_fraction!r}")

        if not _is_int(self.weights_updated_per_round) or self.weights_updated_per_round < 0:
            raise ConfigurationError(
                f"weights_updated_per_round must be non-negative, got {self.weights_updated_per_round!r}"
            )

        if (not _is_real(self.drift_magnitude) or not math.isfinite(self.drift_magnitude)
                or self.drift_magnitude < 0):
            raise ConfigurationError(
                f"drift_magnitude must be a finite non-negative number, got {self.drift_magnitude!r}"
            )

        if not isinstance(self.update_sampled_only, (bool, np.bool_)):
            raise ConfigurationError(
                f"update_sampled_only must be a bool, got {self.update_sampled_only!r}"
            )

    @property
    def effective_update_count(self) -> int:
        """Number of weights sampled per round, clamped to the dimensionality."""
        return min(self.weights_updated_per_round, self.dimensions)

    @property
    def step_size(self) -> float:
        """Absolute change applied to a moved weight in one round."""
        return self.drift_magnitude / self.example_count


class GeneratorSettings(TypedDict):
    """User-facing settings of the generator."""
    seed: int
    use_random_seed: bool
    example_count: int
    dimensionality: int
    noise_percentage: int
    weight_update_count: int
    magnitude: float


def default_settings() -> GeneratorSettings:
    """Return the default settings; a fresh random seed is drawn on conversion."""
    return GeneratorSettings(
        seed=0,
        use_random_seed=True,
        example_count=DEFAULT_COUNT,
        dimensionality=DEFAULT_DIMENSIONALITY,
        noise_percentage=DEFAULT_NOISE_PERCENTAGE,
        weight_update_count=DEFAULT_WEIGHT_UPDATE_COUNT,
        magnitude=DEFAULT_MAGNITUDE,
    )


def validate_settings(settings: Mapping[str, Any]) -> None:
    """
    Check settings against the bounds of the user-facing layer.

    Raises
    ------
    ConfigurationError
        If a key is missing or a value is out of bounds.
    """
    missing = [key for key in GeneratorSettings.__annotations__ if key not in settings]
    if missing:
        raise ConfigurationError(f"Missing settings: {missing}")

    if not settings['use_random_seed']:
        seed = settings['seed']
        if not _is_int(seed) or not INT64_MIN <= seed <= INT64_MAX:
            raise ConfigurationError(f"seed must be a signed 64-bit integer, got {seed!r}")

    count = settings['example_count']
    if not _is_int(count) or count < 1:
        raise ConfigurationError(f"example_count must be a positive integer, got {count!r}")

    dims = settings['dimensionality']
    if not _is_int(dims) or dims < MIN_DIMENSIONALITY:
        raise ConfigurationError(f"dimensionality must be >= {MIN_DIMENSIONALITY}, got {dims!r}")

    noise = settings['noise_percentage']
    if not _is_int(noise) or not 0 <= noise <= 100:
        raise ConfigurationError(f"noise_percentage must be an integer in [0, 100], got {noise!r}")

    updates = settings['weight_update_count']
    if not _is_int(updates) or updates < 0:
        raise ConfigurationError(f"weight_update_count must be non-negative, got {updates!r}")

    magnitude = settings['magnitude']
    if not _is_real(magnitude) or not math.isfinite(magnitude) or magnitude < 0:
        raise ConfigurationError(f"magnitude must be a finite non-negative number, got {magnitude!r}")


def random_seed(rng: Optional[np.random.Generator] = None) -> int:
    """Draw a fresh signed 64-bit seed."""
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.integers(INT64_MIN, INT64_MAX, dtype=np.int64, endpoint=True))


def settings_to_config(
    settings: Mapping[str, Any],
    rng: Optional[np.random.Generator] = None,
    update_sampled_only: bool = True
) -> GeneratorConfig:
    """
    Validate settings and convert them into a ``GeneratorConfig``.

    Parameters
    ----------
    settings : Mapping
        Keys of ``GeneratorSettings``.
    rng : np.random.Generator | None
        Source for the seed when ``use_random_seed`` is set; a fresh
        OS-seeded generator is used if omitted.
    update_sampled_only : bool
        Forwarded to ``GeneratorConfig``.

    Returns
    -------
    GeneratorConfig
    """
    validate_settings(settings)

    if settings['use_random_seed']:
        seed = random_seed(rng)
        logger.info(f"Using random seed {seed}")
    else:
        seed = int(settings['seed'])

    return GeneratorConfig(
        seed=seed,
        example_count=int(settings['example_count']),
        dimensions=int(settings['dimensionality']),
        noise_fraction=settings['noise_percentage'] / 100,
        weights_updated_per_round=int(settings['weight_update_count']),
        drift_magnitude=float(settings['magnitude']),
        update_sampled_only=update_sampled_only,
    )
