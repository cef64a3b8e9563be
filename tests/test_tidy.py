from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from cmsaf_reader.core.core_types import Region
from cmsaf_reader.core.exceptions import VariableNotFoundError
from cmsaf_reader.io.dataset_loader import open_dataset
from cmsaf_reader.processing.tidy import tidy_head, to_tidy_dataframe


def test_tidy_columns_and_rows(sample_file: Path):
    df = to_tidy_dataframe(sample_file)
    assert list(df.columns) == ["SDU", "lon", "lat", "time"]
    assert len(df) == 94
    assert df["SDU"].notna().all()
    assert df["time"].iloc[0] == pd.Timestamp("2018-08-01")


def test_tidy_longitude_varies_fastest(sample_file: Path):
    df = to_tidy_dataframe(sample_file, dropna=False)
    assert len(df) == 96
    assert list(df["lon"].iloc[:3]) == [-10.0, -8.0, -6.0]
    assert df["lat"].iloc[:12].nunique() == 1


def test_tidy_values_match_grid(sample_file: Path, expected_values):
    df = to_tidy_dataframe(sample_file)
    row = df[(df["lon"] == -4.0) & (df["lat"] == 42.0)]
    assert row["SDU"].item() == expected_values[2, 3]


def test_tidy_region_filter(sample_file: Path):
    df = to_tidy_dataframe(sample_file, region=Region(lon_range=(0, 4), lat_range=(40, 46)))
    assert set(df["lon"]) == {0.0, 2.0, 4.0}
    assert set(df["lat"]) == {42.0, 45.0}
    assert len(df) == 6


def test_tidy_from_dataset(sample_file: Path):
    with open_dataset(sample_file) as ds:
        df = to_tidy_dataframe(ds, variables=["SDU"])
    assert len(df) == 94


def test_tidy_unknown_variable(sample_file: Path):
    with pytest.raises(VariableNotFoundError):
        to_tidy_dataframe(sample_file, variables=["time_bnds"])


def test_tidy_head(sample_file: Path):
    head = tidy_head(to_tidy_dataframe(sample_file))
    assert len(head) == 6
    assert np.isfinite(head["SDU"]).all()
