"""
Seasonal Naive Baseline for LoadCast
====================================
Repeats the last observed seasonal cycle:

    forecast[k] = y[n - m + (k mod m)]

so each forecast day takes the actual value exactly one cycle (m days)
earlier whenever that value lies inside the training sample.

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
import logging

from src.features.series_builder import SeasonalSeries
from src.models.base import BaseForecaster

logger = logging.getLogger(__name__)


class SeasonalNaiveForecaster(BaseForecaster):
    """Seasonal naive forecaster with period `season_length` (default 365)."""

    model_type = 'snaive'

    @property
    def season_length(self) -> int:
        return int(self.params.get('season_length', 365))

    def _fit(self, series: SeasonalSeries) -> np.ndarray:
        m = self.season_length
        if m < 1:
            raise ValueError(f"season_length must be >= 1, got {m}")
        if len(series) < m:
            raise ValueError(f"Not enough data for a full season ({len(series)} < {m})")

        logger.info(f"Seasonal naive: repeating last {m} days")
        return series.values[-m:].copy()

    def _predict(self, horizon: int):
        m = len(self.fitted_model)
        mean = self.fitted_model[np.arange(horizon) % m]
        return mean, None, None
