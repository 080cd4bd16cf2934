"""Apply the Grubbs filter to tabular sensor data."""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .critical_values import MAX_SAMPLE_NUM, MIN_SAMPLE_NUM, ConfidenceLevel
from .engine import GrubbsFilter
from .models import GrubbsConfig, InvalidSampleCount

logger = logging.getLogger(__name__)


def _build_filter(confidence: ConfidenceLevel | str | int | float) -> GrubbsFilter:
    return GrubbsFilter(GrubbsConfig(ConfidenceLevel.parse(confidence)))


def filter_frame(
    frame: pd.DataFrame,
    confidence: ConfidenceLevel | str | int | float = ConfidenceLevel.P80,
    axis: int = 1,
) -> pd.Series:
    """Filter every row (``axis=1``) or column (``axis=0``) of ``frame``.

    NaN readings are dropped before filtering. Rows or columns left with a
    sample count outside [MIN_SAMPLE_NUM, MAX_SAMPLE_NUM] produce NaN.
    """
    grubbs = _build_filter(confidence)

    def _apply(samples: pd.Series) -> float:
        result, ok = grubbs.process(samples.dropna().to_numpy())
        return result if ok else np.nan

    return frame.apply(_apply, axis=axis)


def rolling_filter(
    series: pd.Series,
    window: int,
    confidence: ConfidenceLevel | str | int | float = ConfidenceLevel.P80,
) -> pd.Series:
    """Rolling Grubbs mean over the last ``window`` readings of ``series``.

    The first ``window - 1`` entries, and windows containing NaN, are NaN.
    """
    if window < MIN_SAMPLE_NUM or window > MAX_SAMPLE_NUM:
        raise InvalidSampleCount(window)
    grubbs = _build_filter(confidence)
    logger.debug("Rolling Grubbs filter, window=%d, confidence=%d%%", window, grubbs.confidence.percent)
    return series.astype(float).rolling(window, min_periods=window).apply(grubbs.filter, raw=True)
