"""Tests for batch filtering over pandas data."""
import numpy as np
import pandas as pd
import pytest

from grubbs_filter import ConfidenceLevel, InvalidSampleCount, filter_frame, rolling_filter


class TestFilterFrame:
    """Test suite for filter_frame."""

    @pytest.fixture
    def readings(self):
        """Three sensors, rows padded with NaN."""
        return pd.DataFrame(
            [
                [8.2, 5.4, 5.0, 5.2, 15.1, 5.3, 5.5, 6.0],
                [5.0, 5.0, 5.0, np.nan, np.nan, np.nan, np.nan, np.nan],
                [1.0, 2.0, np.nan, np.nan, np.nan, np.nan, np.nan, np.nan],
            ],
            index=["s1", "s2", "s3"],
        )

    def test_rows(self, readings):
        result = filter_frame(readings, ConfidenceLevel.P95)

        assert list(result.index) == ["s1", "s2", "s3"]
        assert result["s1"] == pytest.approx(5.4, abs=1e-5)
        assert result["s2"] == 5.0
        assert np.isnan(result["s3"])

    def test_columns(self, readings):
        result = filter_frame(readings.T, "95", axis=0)

        assert result["s1"] == pytest.approx(5.4, abs=1e-5)
        assert np.isnan(result["s3"])


class TestRollingFilter:
    """Test suite for rolling_filter."""

    def test_spike_removed_from_every_window(self):
        series = pd.Series([1.0] * 10)
        series[5] = 10.0

        result = rolling_filter(series, window=5, confidence=ConfidenceLevel.P99)

        assert result.iloc[:4].isna().all()
        assert result.iloc[4:].tolist() == [1.0] * 6

    def test_nan_window_is_nan(self):
        series = pd.Series([1.0, 2.0, np.nan, 1.5, 1.2, 1.1, 1.3])

        result = rolling_filter(series, window=3)

        assert result.iloc[2:5].isna().all()
        assert result.iloc[5] == pytest.approx((1.5 + 1.2 + 1.1) / 3)

    @pytest.mark.parametrize("window", [2, 21])
    def test_invalid_window(self, window):
        with pytest.raises(InvalidSampleCount):
            rolling_filter(pd.Series(np.arange(30.0)), window=window)
