"""Data models for the Grubbs filter package."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .critical_values import MAX_SAMPLE_NUM, MIN_SAMPLE_NUM, ConfidenceLevel


class InvalidSampleCount(ValueError):
    """Raised when a sample set is too small or too large to filter."""

    def __init__(self, count: int, minimum: int = MIN_SAMPLE_NUM, maximum: int = MAX_SAMPLE_NUM) -> None:
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Invalid sample count {count}: expected between {minimum} and {maximum}")


@dataclass
class GrubbsConfig:
    """Configuration for the Grubbs filter.

    A higher confidence level makes the test stricter: fewer points are
    flagged as outliers.
    """

    confidence: ConfidenceLevel = ConfidenceLevel.P80


@dataclass
class RejectedSample:
    """A point removed by one pass of the rejection loop."""

    index: int  # position in the sorted working buffer
    value: float
    g_statistic: float
    critical_value: float
    remaining: int  # valid count when the point was tested


@dataclass
class GrubbsResult:
    """Outcome of filtering a single sample set.

    Attributes
    ----------
    value:
        Mean of the samples that survived rejection. ``0.0`` when every
        sample was rejected, see :attr:`all_rejected`.
    confidence:
        Confidence level the test ran with.
    num_samples:
        Number of input samples.
    kept:
        Surviving values in ascending order.
    rejected:
        Rejected points in the order they were removed.
    """

    value: float
    confidence: ConfidenceLevel
    num_samples: int
    kept: List[float] = field(default_factory=list)
    rejected: List[RejectedSample] = field(default_factory=list)

    @property
    def num_kept(self) -> int:
        return len(self.kept)

    @property
    def num_rejected(self) -> int:
        return len(self.rejected)

    @property
    def all_rejected(self) -> bool:
        return self.num_kept == 0

    def to_json(self) -> Dict[str, object]:
        """Return a JSON serialisable dictionary."""
        return {
            "value": round(self.value, 6),
            "confidence": self.confidence.percent,
            "num_samples": self.num_samples,
            "num_kept": self.num_kept,
            "num_rejected": self.num_rejected,
            "kept": [round(v, 6) for v in self.kept],
            "rejected": [
                {
                    "index": r.index,
                    "value": round(r.value, 6),
                    "g_statistic": round(r.g_statistic, 4),
                    "critical_value": round(r.critical_value, 4),
                    "remaining": r.remaining,
                }
                for r in self.rejected
            ],
        }
