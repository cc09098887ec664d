"""Unit tests for stream diagnostics."""

from __future__ import annotations

import pytest
import numpy as np
import pandas as pd
from sklearn.linear_model import Perceptron

from synthetic_data.config import GeneratorConfig
from synthetic_data.moving_hyperplane import generate_examples
from synthetic_data.evaluation import label_balance, windowed_positive_rate, prequential_accuracy


@pytest.fixture
def stream_df():
    cfg = GeneratorConfig(seed=11, example_count=2000, dimensions=5, noise_fraction=0.0,
                          weights_updated_per_round=2, drift_magnitude=0.1)
    return generate_examples(cfg)


class TestLabelBalance:
    """Test label fractions."""

    def test_fractions_sum_to_one(self, stream_df):
        balance = label_balance(stream_df)

        assert set(balance) == {'Positive', 'Negative'}
        assert balance['Positive'] + balance['Negative'] == pytest.approx(1.0)

    def test_known_counts(self):
        df = pd.DataFrame({'Label': ['Positive', 'Positive', 'Positive', 'Negative'],
                           'Column 1': [0.1, 0.2, 0.3, 0.4]})

        balance = label_balance(df)

        assert balance['Positive'] == pytest.approx(0.75)
        assert balance['Negative'] == pytest.approx(0.25)

    def test_single_class(self):
        df = pd.DataFrame({'Label': ['Negative'] * 3, 'Column 1': [0.1, 0.2, 0.3]})
        assert label_balance(df)['Positive'] == 0.0

    def test_empty(self):
        df = pd.DataFrame({'Label': [], 'Column 1': []})
        balance = label_balance(df)
        assert np.isnan(balance['Positive'])

    def test_missing_label_column(self):
        with pytest.raises(ValueError, match="Label column"):
            label_balance(pd.DataFrame({'Column 1': [0.1]}))


class TestWindowedPositiveRate:
    """Test rolling class prior."""

    def test_window(self):
        df = pd.DataFrame({'Label': ['Positive', 'Negative', 'Positive', 'Positive']})

        rate = windowed_positive_rate(df, window=2)

        assert np.isnan(rate.iloc[0])
        np.testing.assert_allclose(rate.iloc[1:].to_numpy(), [0.5, 0.5, 1.0])

    def test_length_matches(self, stream_df):
        rate = windowed_positive_rate(stream_df, window=100)

        assert len(rate) == len(stream_df)
        assert rate.iloc[99:].between(0.0, 1.0).all()

    def test_invalid_window(self, stream_df):
        with pytest.raises(ValueError, match="window"):
            windowed_positive_rate(stream_df, window=0)


class TestPrequentialAccuracy:
    """Test test-then-train evaluation."""

    def test_output_structure(self, stream_df):
        result = prequential_accuracy(stream_df.iloc[:300], window=50)

        assert list(result.columns) == ['correct', 'rolling_acc']
        assert len(result) == 299
        assert result.index[0] == 'Row 1'
        assert set(np.unique(result['correct'])) <= {0.0, 1.0}
        assert result['rolling_acc'].between(0.0, 1.0).all()

    def test_default_model_learns_boundary(self, stream_df):
        """A linear model beats chance on a noiseless, slowly drifting stream."""
        result = prequential_accuracy(stream_df)

        assert result['correct'].iloc[-1000:].mean() > 0.6

    def test_custom_model(self, stream_df):
        model = Perceptron(random_state=0)

        result = prequential_accuracy(stream_df.iloc[:200], model=model)

        assert len(result) == 199
        assert hasattr(model, 'coef_')

    def test_reproducible(self, stream_df):
        a = prequential_accuracy(stream_df.iloc[:200])
        b = prequential_accuracy(stream_df.iloc[:200])
        pd.testing.assert_frame_equal(a, b)

    def test_too_few_rows(self, stream_df):
        with pytest.raises(ValueError, match="two rows"):
            prequential_accuracy(stream_df.iloc[:1])

    def test_no_feature_columns(self):
        df = pd.DataFrame({'Label': ['Positive', 'Negative']})
        with pytest.raises(ValueError, match="feature columns"):
            prequential_accuracy(df)
