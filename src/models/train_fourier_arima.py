"""
ARIMA with Fourier Regressors for LoadCast
==========================================
Non-seasonal ARIMA whose errors are regressed on Fourier terms for the
weekly and yearly periods (dynamic harmonic regression).

Features:
- K sin/cos pairs per seasonal period, e.g. (2, 4) = 2 weekly + 4 yearly
- Automatic order selection by information criterion (AutoARIMA)
- Log transform to stabilise variance; forecasts are back-transformed
- 95% prediction intervals

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
from typing import Tuple
import logging
import warnings
warnings.filterwarnings('ignore')

from statsforecast.models import AutoARIMA

from src.features.fourier_features import fourier_terms
from src.features.series_builder import SeasonalSeries
from src.models.base import BaseForecaster

logger = logging.getLogger(__name__)


class FourierARIMAForecaster(BaseForecaster):
    """AutoARIMA on log(load) with Fourier exogenous regressors."""

    model_type = 'fourier_arima'

    @property
    def harmonics(self) -> Tuple[int, ...]:
        return tuple(self.params.get('harmonics', (2, 4)))

    @property
    def log_transform(self) -> bool:
        return bool(self.params.get('log_transform', True))

    def _regressors(self, n_obs: int, offset: int = 0) -> np.ndarray:
        X = fourier_terms(
            n_obs,
            periods=self.train_periods,
            harmonics=self.harmonics,
            offset=offset
        )
        return X.to_numpy()

    def _fit(self, series: SeasonalSeries) -> AutoARIMA:
        self.train_periods = series.seasonal_periods
        y = series.values
        if self.log_transform:
            if np.any(y <= 0):
                raise ValueError("Log transform requires strictly positive load values")
            y = np.log(y)

        X = self._regressors(len(series))

        logger.info(f"Fourier ARIMA: harmonics={self.harmonics}, periods={self.train_periods}")
        logger.info(f"  Regressors: {X.shape[1]} columns, train samples: {len(y)}")

        model = AutoARIMA(
            seasonal=False,
            ic=self.params.get('ic', 'aicc'),
            stepwise=self.params.get('stepwise', True),
            max_p=self.params.get('max_p', 5),
            max_q=self.params.get('max_q', 5),
        )
        model.fit(y, X=X)
        return model

    def _predict(self, horizon: int):
        level = int(self.params.get('level', 95))
        X_future = self._regressors(horizon, offset=len(self.train_series))
        result = self.fitted_model.predict(h=horizon, X=X_future, level=[level])

        mean = np.asarray(result['mean'])
        lower = np.asarray(result[f'lo-{level}'])
        upper = np.asarray(result[f'hi-{level}'])

        if self.log_transform:
            mean, lower, upper = np.exp(mean), np.exp(lower), np.exp(upper)

        return mean, lower, upper
