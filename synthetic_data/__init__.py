"""
Synthetic concept-drift stream generators.

This package provides a deterministic moving hyperplane generator for
benchmarking streaming classifiers, plus diagnostics for the produced streams.
"""

from .config import (
    ConfigurationError,
    GeneratorConfig,
    GeneratorSettings,
    default_settings,
    settings_to_config,
    validate_settings,
)
from .streams import RandomStreams, derive_streams
from .hyperplane import HyperplaneState, compute_threshold
from .moving_hyperplane import (
    Example,
    Label,
    MovingHyperplane,
    generate_examples,
    iter_examples,
    output_columns,
)
from .evaluation import label_balance, windowed_positive_rate, prequential_accuracy

__all__ = [
    # Configuration
    'ConfigurationError',
    'GeneratorConfig',
    'GeneratorSettings',
    'default_settings',
    'settings_to_config',
    'validate_settings',

    # Generator core
    'RandomStreams',
    'derive_streams',
    'HyperplaneState',
    'compute_threshold',
    'Example',
    'Label',
    'MovingHyperplane',
    'generate_examples',
    'iter_examples',
    'output_columns',

    # Diagnostics
    'label_balance',
    'windowed_positive_rate',
    'prequential_accuracy',
]
