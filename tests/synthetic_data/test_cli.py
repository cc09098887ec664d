"""Tests for the command-line entry point."""

from __future__ import annotations

import pytest
import pandas as pd

from synthetic_data.cli import main
from synthetic_data.config import GeneratorConfig
from synthetic_data.moving_hyperplane import generate_examples


class TestMain:
    """Test CSV generation from the command line."""

    def test_writes_csv(self, tmp_path):
        out = tmp_path / "nested" / "stream.csv"

        code = main(["--seed", "42", "--count", "30", "--dimensions", "4", "--output", str(out)])

        assert code == 0
        df = pd.read_csv(out, index_col="Row ID")
        assert len(df) == 30
        assert list(df.columns) == ['Label', 'Column 1', 'Column 2', 'Column 3', 'Column 4']
        assert df.index[0] == 'Row 0'

    def test_matches_library_output(self, tmp_path):
        out = tmp_path / "stream.csv"
        main(["--seed", "-7", "--count", "20", "--noise", "10", "--update-count", "2",
              "--magnitude", "0.2", "--output", str(out)])

        expected = generate_examples(GeneratorConfig(
            seed=-7, example_count=20, dimensions=5, noise_fraction=0.1,
            weights_updated_per_round=2, drift_magnitude=0.2,
        ))
        df = pd.read_csv(out, index_col="Row ID")

        assert list(df['Label']) == list(expected['Label'])
        pd.testing.assert_frame_equal(
            df.iloc[:, 1:].reset_index(drop=True),
            expected.iloc[:, 1:].reset_index(drop=True),
            check_exact=False,
        )

    def test_random_seed_when_omitted(self, tmp_path):
        out = tmp_path / "stream.csv"
        assert main(["--count", "5", "--output", str(out)]) == 0
        assert len(pd.read_csv(out)) == 5

    @pytest.mark.parametrize("args", [
        ["--dimensions", "2"],
        ["--noise", "150"],
        ["--count", "0"],
        ["--update-count", "-1"],
    ])
    def test_invalid_settings_exit(self, tmp_path, args):
        out = tmp_path / "stream.csv"

        with pytest.raises(SystemExit) as excinfo:
            main(args + ["--output", str(out)])

        assert excinfo.value.code == 2
        assert not out.exists()
