"""Grubbs' test outlier filter for small sample sets."""
from .batch import filter_frame, rolling_filter
from .cli import main
from .critical_values import (
    GRUBBS_CRITICAL_VALUES,
    MAX_SAMPLE_NUM,
    MIN_SAMPLE_NUM,
    ConfidenceLevel,
    critical_value,
)
from .engine import GrubbsFilter, grubbs_filter
from .models import GrubbsConfig, GrubbsResult, InvalidSampleCount, RejectedSample

__all__ = [
    "main",
    "filter_frame",
    "rolling_filter",
    "GRUBBS_CRITICAL_VALUES",
    "MAX_SAMPLE_NUM",
    "MIN_SAMPLE_NUM",
    "ConfidenceLevel",
    "critical_value",
    "GrubbsFilter",
    "grubbs_filter",
    "GrubbsConfig",
    "GrubbsResult",
    "InvalidSampleCount",
    "RejectedSample",
]
