"""
Numeric helper functions.

Provides utilities for:
- Half-up and half-away-from-zero decimal rounding
- Means that ignore empty input
- Pearson correlation with a zero-variance convention
"""
import math
import logging
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 1) -> float:
    """
    Round a value half away from zero for positives (``2.25 -> 2.3``).

    Python's built-in ``round`` uses banker's rounding, which would turn
    ``2.25`` into ``2.2``.

    Args:
        value: Value to round
        digits: Number of decimal places

    Returns:
        Rounded value
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_half_away(value: float, digits: int = 2) -> float:
    """
    Round halves away from zero on both sides of zero (``-0.125 -> -0.13``).

    Args:
        value: Value to round
        digits: Number of decimal places

    Returns:
        Rounded value; never negative zero
    """
    rounded = round_half_up(abs(value), digits)
    if value < 0 and rounded:
        return -rounded
    return rounded


def mean_or_zero(values: Sequence[float]) -> float:
    """
    Arithmetic mean of the values, or 0 for an empty sequence.

    Args:
        values: Numbers to average

    Returns:
        Mean as a plain float
    """
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient between two equal-length series.

    Uses the raw-sum form::

        r = (nΣxy − ΣxΣy) / sqrt((nΣx² − (Σx)²)(nΣy² − (Σy)²))

    An empty series or a zero denominator (no variance in either series)
    yields 0.

    Args:
        x: First series
        y: Second series

    Returns:
        Correlation coefficient in [-1, 1]

    Raises:
        ValueError: If the series lengths differ
    """
    if len(x) != len(y):
        raise ValueError(f"Series lengths differ: {len(x)} != {len(y)}")

    n = len(x)
    if n == 0:
        return 0.0

    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)

    # A constant series has no variance even when the raw sums carry float noise
    if np.ptp(xs) == 0 or np.ptp(ys) == 0:
        return 0.0

    sum_x = float(np.sum(xs))
    sum_y = float(np.sum(ys))
    sum_xy = float(np.sum(xs * ys))
    sum_x2 = float(np.sum(xs * xs))
    sum_y2 = float(np.sum(ys * ys))

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)

    if variance_product <= 0:
        return 0.0

    r = numerator / math.sqrt(variance_product)
    # Clamp float drift just outside [-1, 1]
    return max(-1.0, min(1.0, r))
