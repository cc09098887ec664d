"""
Moving hyperplane stream generator.

Generates labeled points in the unit hypercube whose decision boundary, a
hyperplane, slowly drifts between successive examples. Based on the
"Streaming Data" setup of Wang et al., "Mining Concept-Drifting Data
Streams using Ensemble Classifiers" (KDD 2003).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .config import GeneratorConfig
from .hyperplane import (
    HyperplaneState,
    select_update_indices,
    update_directions,
    update_weights,
)
from .streams import RandomStreams, derive_streams

logger = logging.getLogger(__name__)

LABEL_COLUMN = "Label"


class Label(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"

    def flipped(self) -> Label:
        return Label.NEGATIVE if self is Label.POSITIVE else Label.POSITIVE


def output_columns(dimensions: int) -> List[str]:
    """
    Column names of a generated table: the label first, then one column per dimension.

    Examples
    --------
    >>> output_columns(3)
    ['Label', 'Column 1', 'Column 2', 'Column 3']
    """
    return [LABEL_COLUMN] + [f"Column {i}" for i in range(1, dimensions + 1)]


@dataclass(frozen=True)
class Example:
    """One generated example."""
    row_index: int
    label: Label
    features: Tuple[float, ...]

    @property
    def key(self) -> str:
        """Stable row identifier."""
        return f"Row {self.row_index}"

    def to_record(self) -> Dict[str, Union[str, float]]:
        """Ordered mapping in the column order of ``output_columns``."""
        columns = output_columns(len(self.features))
        return dict(zip(columns, (self.label.value,) + self.features))


class MovingHyperplane:
    """
    Pull-based generator of a concept-drifting binary classification stream.

    Each call to ``next_example`` labels a fresh random point against the
    current hyperplane and then moves the hyperplane for the next call. The
    instance owns its random streams and hyperplane exclusively; it is not
    safe to call from several threads at once.

    Parameters
    ----------
    config : GeneratorConfig
        Validated generator parameters.

    Notes
    -----
    Two instances built from equal configs produce identical sequences.
    """

    def __init__(self, config: GeneratorConfig):
        self._config = config
        self._streams: RandomStreams = derive_streams(config.seed)
        self._state = HyperplaneState.initial(
            config.dimensions,
            weight_rng=self._streams.weight,
            direction_rng=self._streams.direction,
        )
        self._rows_emitted = 0

        logger.info(
            f"Initialized moving hyperplane: dimensions={config.dimensions}, "
            f"noise_fraction={config.noise_fraction}, "
            f"updates_per_round={config.effective_update_count}, "
            f"step_size={config.step_size:.3g}, seed={config.seed}"
        )

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def rows_emitted(self) -> int:
        return self._rows_emitted

    @property
    def weights(self) -> np.ndarray:
        """Copy of the current hyperplane weights."""
        return self._state.weights.copy()

    @property
    def directions(self) -> np.ndarray:
        """Copy of the current drift directions."""
        return self._state.directions.copy()

    @property
    def threshold(self) -> float:
        return self._state.threshold

    def snapshot(self) -> HyperplaneState:
        """Detached copy of the full hyperplane state."""
        return self._state.copy()

    def next_example(self, row_index: Optional[int] = None) -> Example:
        """
        Produce one example, then advance the hyperplane.

        Parameters
        ----------
        row_index : int | None
            Row identifier of the example; defaults to the number of
            examples emitted so far.

        Returns
        -------
        Example
            Labeled against the hyperplane as it was before this call.
        """
        if row_index is None:
            row_index = self._rows_emitted

        example = self._draw_example(row_index)
        self._advance()
        self._rows_emitted += 1

        return example

    def _draw_example(self, row_index: int) -> Example:
        cfg = self._config
        point = self._streams.example.random(cfg.dimensions)

        label = Label.POSITIVE if self._state.classify(point) else Label.NEGATIVE

        # the noise draw is consumed even when noise is disabled
        noise_draw = self._streams.noise.random()
        if cfg.noise_fraction > 0 and noise_draw <= cfg.noise_fraction:
            label = label.flipped()

        return Example(row_index=row_index, label=label, features=tuple(float(x) for x in point))

    def _advance(self) -> None:
        cfg = self._config
        indices = select_update_indices(
            cfg.dimensions, cfg.weights_updated_per_round, self._streams.update_index
        )
        if not cfg.update_sampled_only:
            indices = np.arange(cfg.dimensions)

        state = self._state
        state.set_weights(update_weights(state.weights, state.directions, indices, cfg.step_size))
        state.directions = update_directions(state.directions, indices, self._streams.direction)

        logger.debug("Moved %d weights, threshold=%.6f", len(indices), state.threshold)


def iter_examples(generator: MovingHyperplane, n_examples: int) -> Iterator[Example]:
    """Pull ``n_examples`` consecutive examples from ``generator``."""
    for _ in range(n_examples):
        yield generator.next_example()


def generate_examples(config: GeneratorConfig, n_examples: Optional[int] = None) -> pd.DataFrame:
    """
    Generate a table of examples from a fresh generator.

    Parameters
    ----------
    config : GeneratorConfig
        Generator parameters.
    n_examples : int | None
        Number of rows; defaults to ``config.example_count``.

    Returns
    -------
    pd.DataFrame
        Index ``'Row i'``; columns ``output_columns(config.dimensions)`` with
        the label as a string and features as float64.
    """
    if n_examples is None:
        n_examples = config.example_count

    if n_examples < 0:
        raise ValueError(f"n_examples must be non-negative, got {n_examples}")

    generator = MovingHyperplane(config)

    labels = []
    keys = []
    features = np.empty((n_examples, config.dimensions), dtype=np.float64)
    for i, example in enumerate(iter_examples(generator, n_examples)):
        keys.append(example.key)
        labels.append(example.label.value)
        features[i] = example.features

    columns = output_columns(config.dimensions)
    df = pd.DataFrame(features, columns=columns[1:], index=pd.Index(keys, dtype=object))
    df.insert(0, LABEL_COLUMN, pd.Series(labels, index=df.index, dtype=object))

    n_positive = labels.count(Label.POSITIVE.value)
    logger.info(f"Generated {n_examples} examples ({n_positive} positive) with {config.dimensions} dimensions")

    return df
