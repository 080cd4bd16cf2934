"""Iterative outlier rejection using Grubbs' test.

Samples are sorted, then the loop repeatedly computes the mean and sample
standard deviation of the points still considered valid and removes the first
point (in sorted order) whose deviation exceeds the tabulated critical value.
The loop restarts after every removal and stops when a full scan finds nothing,
when the standard deviation is zero, or when fewer than ``MIN_SAMPLE_NUM``
points remain. All arithmetic is single precision.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .critical_values import MAX_SAMPLE_NUM, MIN_SAMPLE_NUM, ConfidenceLevel, critical_value
from .models import GrubbsConfig, GrubbsResult, InvalidSampleCount, RejectedSample

logger = logging.getLogger(__name__)


class GrubbsFilter:
    """Removes outliers from small sample sets and averages the rest.

    Usage:
        grubbs = GrubbsFilter()
        grubbs.init(ConfidenceLevel.P95)

        # Cleaned average
        value = grubbs.filter([8.2, 5.4, 5.0, 5.2, 15.1, 5.3, 5.5, 6.0])

        # Full diagnostics
        result = grubbs.analyze(samples)
        print(result.rejected)
    """

    def __init__(self, config: GrubbsConfig | None = None) -> None:
        self.config = config or GrubbsConfig()

    @property
    def confidence(self) -> ConfidenceLevel:
        return self.config.confidence

    def init(self, confidence: ConfidenceLevel | str | int | float) -> None:
        """Select the confidence level used by subsequent calls."""
        self.config = replace(self.config, confidence=ConfidenceLevel.parse(confidence))

    def reset(self) -> None:
        """Restore the default confidence level."""
        self.config = GrubbsConfig()

    def filter(self, samples: Sequence[float], count: int | None = None) -> float:
        """Return the mean of ``samples`` after outlier rejection.

        Raises:
            InvalidSampleCount: if ``count`` is outside
                [MIN_SAMPLE_NUM, MAX_SAMPLE_NUM] or ``samples`` is shorter
                than ``count``.
        """
        return self.analyze(samples, count).value

    def process(self, samples: Sequence[float], count: int | None = None) -> Tuple[float, bool]:
        """Filter ``samples`` and report success instead of raising.

        Returns:
            ``(result, True)`` on success, ``(nan, False)`` when the sample
            count is invalid.
        """
        try:
            return self.filter(samples, count), True
        except InvalidSampleCount as exc:
            logger.warning("Grubbs filter skipped: %s", exc)
            return float("nan"), False

    def analyze(self, samples: Sequence[float], count: int | None = None) -> GrubbsResult:
        """Run the rejection loop and return the full :class:`GrubbsResult`.

        Raises:
            InvalidSampleCount: on a sample count outside the supported range
            ValueError: if ``samples`` is not one-dimensional
            TypeError: if ``count`` is not an integer
        """
        data = np.asarray(samples, dtype=np.float32)
        if data.ndim != 1:
            raise ValueError(f"samples must be one-dimensional, got shape {data.shape}")
        if count is None:
            num = len(data)
        elif isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise TypeError(f"count must be an integer, got {count!r}")
        else:
            num = int(count)
        if num < MIN_SAMPLE_NUM or num > MAX_SAMPLE_NUM:
            raise InvalidSampleCount(num)
        if len(data) < num:
            raise InvalidSampleCount(len(data))

        confidence = self.confidence
        values = np.zeros(MAX_SAMPLE_NUM, dtype=np.float32)
        valid = np.zeros(MAX_SAMPLE_NUM, dtype=bool)
        values[:num] = np.sort(data[:num])
        valid[:num] = True

        rejected: List[RejectedSample] = []
        while True:
            left_num = int(valid.sum())
            if left_num < MIN_SAMPLE_NUM:
                break

            average = values[valid].sum(dtype=np.float32) / np.float32(left_num)
            deviations = values - average
            variance = np.square(deviations[valid]).sum(dtype=np.float32) / np.float32(left_num - 1)
            std_deviation = np.sqrt(variance)
            if std_deviation == 0:
                break

            g_values = np.abs(deviations) / std_deviation
            threshold = critical_value(confidence, left_num)
            candidates = np.flatnonzero(valid & (g_values > threshold))
            if candidates.size == 0:
                break

            index = int(candidates[0])
            valid[index] = False
            rejected.append(RejectedSample(
                index=index,
                value=float(values[index]),
                g_statistic=float(g_values[index]),
                critical_value=float(threshold),
                remaining=left_num,
            ))
            logger.debug(
                "Rejected sample %d = %.6g (G=%.4f > %.3f, n=%d)",
                index, values[index], g_values[index], threshold, left_num,
            )

        left_num = int(valid.sum())
        if left_num > 0:
            value = float(values[valid].sum(dtype=np.float32) / np.float32(left_num))
        else:
            value = 0.0
        logger.debug(
            "Grubbs filter kept %d/%d samples at %d%% confidence, result %.6g",
            left_num, num, confidence.percent, value,
        )

        return GrubbsResult(
            value=value,
            confidence=confidence,
            num_samples=num,
            kept=[float(v) for v in values[valid]],
            rejected=rejected,
        )

    def get_summary_stats(self, results: List[GrubbsResult]) -> Dict[str, float]:
        """Get summary statistics over several filter runs.

        Returns:
            Dict with summary metrics, empty when ``results`` is empty
        """
        if not results:
            return {}

        values = [r.value for r in results]
        total_samples = sum(r.num_samples for r in results)
        total_rejected = sum(r.num_rejected for r in results)

        return {
            'total_runs': len(results),
            'total_samples': total_samples,
            'total_rejected': total_rejected,
            'runs_with_rejections': sum(r.num_rejected > 0 for r in results),
            'rejection_rate': total_rejected / total_samples,
            'result_mean': float(np.mean(values)),
            'result_min': float(np.min(values)),
            'result_max': float(np.max(values)),
        }

    def generate_report(self, results: List[GrubbsResult]) -> str:
        """Generate a human-readable report of several filter runs."""
        if not results:
            return "No Grubbs filter results available."

        stats = self.get_summary_stats(results)

        report_lines = [
            "=" * 70,
            "GRUBBS FILTER REPORT",
            "=" * 70,
            "",
            "SUMMARY STATISTICS:",
            f"   Runs: {stats['total_runs']}",
            f"   Samples: {stats['total_samples']}",
            f"   Rejected: {stats['total_rejected']} ({stats['rejection_rate']:.1%})",
            f"   Runs with rejections: {stats['runs_with_rejections']}",
            "",
            "   Results:",
            f"      Mean: {stats['result_mean']:.4f}",
            f"      Min: {stats['result_min']:.4f}",
            f"      Max: {stats['result_max']:.4f}",
            "",
            "FIRST 10 RUNS:",
            "",
        ]

        report_lines.append(
            f"{'Run':<5} {'Conf':>5} {'Samples':>8} {'Kept':>5} {'Result':>12}  {'Rejected':<30}"
        )
        report_lines.append("-" * 70)

        for i, result in enumerate(results[:10]):
            rejected = ", ".join(f"{r.value:.4g}" for r in result.rejected) or "-"
            report_lines.append(
                f"{i:<5} {result.confidence.percent:>4}% {result.num_samples:>8} "
                f"{result.num_kept:>5} {result.value:>12.4f}  {rejected:<30}"
            )

        report_lines.append("")
        report_lines.append("=" * 70)

        return "\n".join(report_lines)


def grubbs_filter(
    samples: Sequence[float],
    confidence: ConfidenceLevel | str | int | float = ConfidenceLevel.P80,
    count: int | None = None,
) -> float:
    """Filter ``samples`` once at ``confidence`` and return the cleaned mean."""
    return GrubbsFilter(GrubbsConfig(ConfidenceLevel.parse(confidence))).filter(samples, count)
