"""
Diagnostics for generated streams, for benchmarking streaming classifiers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from sklearn.linear_model import SGDClassifier

from .moving_hyperplane import LABEL_COLUMN, Label

logger = logging.getLogger(__name__)


def _feature_columns(df: pd.DataFrame, label_col: str) -> list:
    if label_col not in df.columns:
        raise ValueError(f"Label column '{label_col}' not found")

    feature_cols = [col for col in df.columns if col != label_col]
    if not feature_cols:
        raise ValueError("No feature columns found")

    return feature_cols


def label_balance(df: pd.DataFrame, label_col: str = LABEL_COLUMN) -> Dict[str, float]:
    """
    Fraction of each label in a generated table.

    Returns
    -------
    dict
        {'Positive': float, 'Negative': float}; both NaN for an empty table.
    """
    if label_col not in df.columns:
        raise ValueError(f"Label column '{label_col}' not found")

    if len(df) == 0:
        return {label.value: np.nan for label in Label}

    counts = df[label_col].value_counts()
    return {label.value: float(counts.get(label.value, 0)) / len(df) for label in Label}


def windowed_positive_rate(
    df: pd.DataFrame,
    window: int = 500,
    label_col: str = LABEL_COLUMN
) -> pd.Series:
    """
    Rolling share of Positive labels over the last ``window`` rows.

    The first ``window - 1`` entries are NaN.
    """
    if window < 1:
        raise ValueError(f"window must be positive, got {window}")

    if label_col not in df.columns:
        raise ValueError(f"Label column '{label_col}' not found")

    positive = (df[label_col] == Label.POSITIVE.value).astype(float)
    return positive.rolling(window=window, min_periods=window).mean()


def prequential_accuracy(
    df: pd.DataFrame,
    model: Optional[Any] = None,
    window: int = 500,
    label_col: str = LABEL_COLUMN,
    random_state: Optional[int] = 42
) -> pd.DataFrame:
    """
    Test-then-train evaluation of an incremental classifier over a stream.

    For every row after the first: predict, score, then ``partial_fit`` on
    the row. The first row only initializes the model.

    Parameters
    ----------
    df : pd.DataFrame
        Generated table (label column plus feature columns).
    model : estimator | None
        Any classifier with ``partial_fit`` and ``predict``; defaults to
        ``SGDClassifier(loss="log_loss")``.
    window : int
        Window of the rolling accuracy.
    label_col : str
        Name of the label column.
    random_state : int | None
        Seed of the default model.

    Returns
    -------
    pd.DataFrame
        Columns ['correct', 'rolling_acc'], indexed like ``df`` minus its first row.
    """
    if window < 1:
        raise ValueError(f"window must be positive, got {window}")

    feature_cols = _feature_columns(df, label_col)
    if len(df) < 2:
        raise ValueError("At least two rows are required for prequential evaluation")

    if model is None:
        model = SGDClassifier(loss="log_loss", alpha=1e-4, random_state=random_state)

    X = df[feature_cols].to_numpy(dtype=np.float64)
    y = np.array(df[label_col].astype(str).tolist())
    classes = np.array([label.value for label in Label])

    model.partial_fit(X[:1], y[:1], classes=classes)

    correct = np.empty(len(df) - 1, dtype=float)
    for t in range(1, len(df)):
        x_t = X[t:t + 1]
        correct[t - 1] = float(model.predict(x_t)[0] == y[t])
        model.partial_fit(x_t, y[t:t + 1])

    result = pd.DataFrame({'correct': correct}, index=df.index[1:])
    result['rolling_acc'] = result['correct'].rolling(window=window, min_periods=1).mean()

    logger.info(f"Prequential accuracy over {len(result)} rows: {result['correct'].mean():.4f}")

    return result
