"""
Fourier Regressors for LoadCast
===============================
Sinusoidal exogenous terms approximating seasonal effects.

For every seasonal period p and harmonic k = 1..K_p:
- S{k}-{p} = sin(2*pi*k*t / p)
- C{k}-{p} = cos(2*pi*k*t / p)

t runs 1..n over the training sample and continues (n+1, n+2, ...) over the
forecast horizon, so future regressors stay in phase with the fitted ones.

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
import pandas as pd
from typing import Optional, Sequence


def _period_label(period: float) -> str:
    return f"{period:g}"


def fourier_terms(
    n_obs: int,
    periods: Sequence[float],
    harmonics: Sequence[int],
    offset: int = 0,
    index: Optional[pd.Index] = None
) -> pd.DataFrame:
    """
    Build Fourier regressors for `n_obs` consecutive time steps.

    Args:
        n_obs: Number of rows
        periods: Seasonal periods (e.g. (7, 365.25))
        harmonics: Number of sin/cos pairs per period
        offset: Time steps already elapsed (training length for future terms)
        index: Optional index for the returned frame

    Returns:
        DataFrame with one column per non-degenerate sin/cos term
    """
    if len(periods) != len(harmonics):
        raise ValueError(
            f"periods and harmonics must have the same length ({len(periods)} != {len(harmonics)})"
        )
    if n_obs < 0:
        raise ValueError(f"n_obs must be >= 0, got {n_obs}")

    t = np.arange(offset + 1, offset + n_obs + 1, dtype=float)
    columns = {}

    for period, k_max in zip(periods, harmonics):
        if k_max < 1:
            raise ValueError(f"Harmonic order must be >= 1 for period {period}")
        if k_max > period / 2:
            raise ValueError(f"Harmonic order {k_max} too large for period {period} (max {int(period // 2)})")

        label = _period_label(period)
        for k in range(1, k_max + 1):
            angle = 2 * np.pi * k * t / period
            # sin(pi * t) is identically zero
            if not np.isclose(2 * k, period):
                columns[f"S{k}-{label}"] = np.sin(angle)
            columns[f"C{k}-{label}"] = np.cos(angle)

    return pd.DataFrame(columns, index=index if index is not None else pd.RangeIndex(n_obs))
