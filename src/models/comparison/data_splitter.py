"""
Train/Test Splitter for the Load Forecast Comparison
====================================================
Holds out the last `horizon` days of the series as the test window.

Author: LoadCast Team
Date: January 2011
"""

from typing import Tuple
import logging

from src.features.series_builder import SeasonalSeries

logger = logging.getLogger(__name__)


def train_test_split(
    series: SeasonalSeries,
    horizon: int = 365
) -> Tuple[SeasonalSeries, SeasonalSeries]:
    """
    Split a series temporally into a training prefix and a test suffix.

    Args:
        series: Full series of length N
        horizon: Test length H (0 < H < N)

    Returns:
        Tuple of (train, test) with len(train) = N - H, len(test) = H
    """
    n_obs = len(series)
    if not 0 < horizon < n_obs:
        raise ValueError(f"horizon must satisfy 0 < horizon < {n_obs}, got {horizon}")

    train = series.head(n_obs - horizon)
    test = series.tail(horizon)

    logger.info(f"\n{'='*80}")
    logger.info("DATA SPLIT (Temporal)")
    logger.info(f"{'='*80}")
    logger.info(f"Train: {len(train):6d} days ({train.start.date()} to {train.end.date()})")
    logger.info(f"Test:  {len(test):6d} days ({test.start.date()} to {test.end.date()})")
    logger.info(f"{'='*80}\n")

    return train, test
