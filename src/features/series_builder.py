"""
Seasonal Series Builder for LoadCast
====================================
Wraps the daily load into a multi-seasonal time series.

Declared seasonalities:
- weekly (7 days)
- yearly (365.25 days)

The builder only tags the series; it enforces that the modeled range is
made of contiguous daily observations with no missing values.

Author: LoadCast Team
Date: January 2011
"""

import hashlib
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Optional, Tuple, Union
import logging

SERIES_START = '2006-01-01'
SEASONAL_PERIODS = (7, 365.25)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SeasonalSeries:
    """Contiguous daily series annotated with its seasonal periods."""

    data: pd.Series
    seasonal_periods: Tuple[float, ...] = SEASONAL_PERIODS

    def __post_init__(self):
        validate_contiguous(self.data)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def values(self) -> np.ndarray:
        return self.data.to_numpy(dtype=float)

    @property
    def index(self) -> pd.DatetimeIndex:
        return self.data.index

    @property
    def start(self) -> pd.Timestamp:
        return self.data.index[0]

    @property
    def end(self) -> pd.Timestamp:
        return self.data.index[-1]

    @property
    def integer_periods(self) -> Tuple[int, ...]:
        """Seasonal periods rounded for libraries that need whole numbers."""
        return tuple(int(round(p)) for p in self.seasonal_periods)

    def future_index(self, horizon: int) -> pd.DatetimeIndex:
        """Daily dates of the `horizon` days following the series end."""
        if horizon < 1:
            raise ValueError(f"horizon must be >= 1, got {horizon}")
        return pd.date_range(self.end + pd.Timedelta(days=1), periods=horizon, freq='D', name=self.index.name)

    def head(self, n: int) -> 'SeasonalSeries':
        return SeasonalSeries(self.data.iloc[:n], self.seasonal_periods)

    def tail(self, n: int) -> 'SeasonalSeries':
        return SeasonalSeries(self.data.iloc[len(self.data) - n:], self.seasonal_periods)

    def fingerprint(self) -> str:
        """
        Content hash of dates, values and declared periods.

        Returns:
            16-character hex string
        """
        digest = hashlib.sha256()
        digest.update(self.index.asi8.tobytes())
        digest.update(np.ascontiguousarray(self.values).tobytes())
        digest.update(repr(self.seasonal_periods).encode())
        return digest.hexdigest()[:16]


def validate_contiguous(data: pd.Series) -> None:
    """Raise ValueError unless `data` is a non-empty gap-free daily series."""
    if not isinstance(data.index, pd.DatetimeIndex):
        raise ValueError("Series index must be a DatetimeIndex")
    if data.empty:
        raise ValueError("Series is empty")
    if not data.index.is_monotonic_increasing or not data.index.is_unique:
        raise ValueError("Series index must be strictly increasing")

    expected = pd.date_range(data.index[0], data.index[-1], freq='D')
    if len(expected) != len(data.index):
        missing = expected.difference(data.index)
        raise ValueError(f"Series has {len(missing)} missing days, first: {missing[0].date()}")

    n_missing = int(data.isna().sum())
    if n_missing:
        first = data.index[data.isna().to_numpy()][0]
        raise ValueError(f"Series has {n_missing} missing values, first: {first.date()}")


def build_series(
    daily_load: pd.Series,
    start: Optional[Union[str, pd.Timestamp]] = SERIES_START,
    seasonal_periods: Tuple[float, ...] = SEASONAL_PERIODS
) -> SeasonalSeries:
    """
    Wrap daily load values into a SeasonalSeries anchored at `start`.

    Args:
        daily_load: Daily load indexed by date
        start: Calendar anchor; earlier observations are dropped (None keeps all)
        seasonal_periods: Declared seasonal periods in days

    Returns:
        SeasonalSeries with a daily-frequency index
    """
    data = daily_load.sort_index().astype(float)
    if start is not None:
        data = data.loc[pd.Timestamp(start):]
        if data.empty or data.index[0] != pd.Timestamp(start):
            raise ValueError(f"Load series does not start at anchor {start}")

    validate_contiguous(data)
    data = data.copy()
    data.index = pd.DatetimeIndex(data.index, freq='D', name='date')
    data.name = daily_load.name or 'load'

    series = SeasonalSeries(data, tuple(seasonal_periods))
    logger.info(
        f"Built series: {len(series)} days ({series.start.date()} to {series.end.date()}), "
        f"periods={series.seasonal_periods}"
    )
    return series
