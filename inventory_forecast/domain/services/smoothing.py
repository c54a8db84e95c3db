"""Exponential smoothing."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

DEFAULT_ALPHA = 0.3


def exponential_smoothing(
    values: Sequence[float], alpha: float = DEFAULT_ALPHA
) -> List[float]:
    """
    Simple exponential smoothing.

    ``s[0] = v[0]`` and ``s[i] = alpha * v[i] + (1 - alpha) * s[i - 1]``.
    The output has the same length as the input.
    """
    if not 0.0 < alpha <= 1.0:
        raise ValueError(f"alpha must be in (0, 1], got {alpha}")
    if len(values) == 0:
        return []

    smoothed = pd.Series(values, dtype="float64").ewm(alpha=alpha, adjust=False).mean()
    return smoothed.tolist()
