"""
pytest configuration with shared generator configs.
"""

import pytest

from synthetic_data.config import GeneratorConfig


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def reference_config():
    """Small noiseless config where every weight moves each round."""
    return GeneratorConfig(
        seed=42,
        example_count=100,
        dimensions=3,
        noise_fraction=0.0,
        weights_updated_per_round=3,
        drift_magnitude=0.01,
    )


@pytest.fixture
def partial_update_config():
    """Config where only two of six weights move each round."""
    return GeneratorConfig(
        seed=7,
        example_count=50,
        dimensions=6,
        noise_fraction=0.0,
        weights_updated_per_round=2,
        drift_magnitude=0.5,
    )
