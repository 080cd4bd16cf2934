"""Grubbs critical value table.

The critical value G_crit depends on two parameters: the significance level
alpha (through the confidence P = 1 - alpha) and the number of measurements n.
A strict test uses a small alpha (P = 0.99), a loose one a large alpha
(P = 0.80). P = 0.95 is the usual choice.

Columns are indexed by ``n - 1``. The first three columns (n = 1, 2, 3) all
hold the n = 3 value, as the published table does.
"""
from __future__ import annotations

from enum import Enum

import numpy as np

MIN_SAMPLE_NUM = 3
MAX_SAMPLE_NUM = 20


class ConfidenceLevel(Enum):
    """Confidence level of the test, valued by its table row."""

    P99 = 0
    P95 = 1
    P90 = 2
    P80 = 3

    @property
    def alpha(self) -> float:
        return _ALPHAS[self]

    @property
    def percent(self) -> int:
        return int(round((1 - self.alpha) * 100))

    @classmethod
    def parse(cls, value: "ConfidenceLevel | str | int | float") -> "ConfidenceLevel":
        """Resolve a member, a name (``"P95"``), a percentage (``95``, ``"95%"``)
        or an alpha (``0.05``) to a :class:`ConfidenceLevel`.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().upper()
            if text in cls.__members__:
                return cls[text]
            try:
                value = float(text.rstrip("%"))
            except ValueError as exc:
                raise ValueError(f"Unknown confidence level: {value!r}") from exc
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Unknown confidence level: {value!r}")
        for level, alpha in _ALPHAS.items():
            if np.isclose(value, alpha) or np.isclose(value, (1 - alpha) * 100):
                return level
        raise ValueError(f"Unknown confidence level: {value!r}")


_ALPHAS = {
    ConfidenceLevel.P99: 0.01,
    ConfidenceLevel.P95: 0.05,
    ConfidenceLevel.P90: 0.10,
    ConfidenceLevel.P80: 0.20,
}

GRUBBS_CRITICAL_VALUES = np.array(
    [
        [1.155, 1.155, 1.155, 1.492, 1.749, 1.944, 2.097, 2.220, 2.323, 2.410,
         2.485, 2.550, 2.607, 2.659, 2.705, 2.747, 2.785, 2.821, 2.854, 2.884],
        [1.153, 1.153, 1.153, 1.463, 1.672, 1.822, 1.938, 2.032, 2.110, 2.176,
         2.234, 2.285, 2.331, 2.371, 2.409, 2.443, 2.475, 2.501, 2.532, 2.557],
        [1.148, 1.148, 1.148, 1.425, 1.602, 1.729, 1.828, 1.909, 1.977, 2.036,
         2.088, 2.134, 2.175, 2.213, 2.247, 2.279, 2.309, 2.335, 2.361, 2.385],
        [1.148, 1.148, 1.148, 1.156, 1.252, 1.329, 1.428, 1.509, 1.577, 1.636,
         1.688, 1.734, 1.775, 1.813, 1.847, 1.879, 1.909, 1.935, 1.961, 1.985],
    ],
    dtype=np.float32,
)
GRUBBS_CRITICAL_VALUES.setflags(write=False)


def critical_value(confidence: ConfidenceLevel, n: int) -> np.float32:
    """Return G_crit for ``confidence`` and ``n`` valid samples."""
    if not 1 <= n <= MAX_SAMPLE_NUM:
        raise ValueError(f"Sample count {n} outside table range 1..{MAX_SAMPLE_NUM}")
    return GRUBBS_CRITICAL_VALUES[confidence.value, n - 1]
