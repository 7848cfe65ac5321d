"""
SARIMA Model for LoadCast
=========================
Seasonal ARIMA with an explicit (p,d,q)(P,D,Q)[s] order plus drift.

Fitting over five years of daily load takes minutes, so this model is
marked cacheable: the fitted result is stored under a key derived from
order, data fingerprint and configuration (see model_cache).

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
from statsmodels.tsa.statespace.sarimax import SARIMAX
from typing import Tuple
import logging
import warnings
warnings.filterwarnings('ignore')

from src.features.series_builder import SeasonalSeries
from src.models.base import BaseForecaster

logger = logging.getLogger(__name__)


class SARIMAForecaster(BaseForecaster):
    """SARIMAX wrapper without exogenous variables."""

    model_type = 'sarima'

    @property
    def order(self) -> Tuple[int, int, int]:
        return tuple(self.params.get('order', (2, 0, 1)))

    @property
    def seasonal_order(self) -> Tuple[int, int, int, int]:
        return tuple(self.params.get('seasonal_order', (0, 1, 1, 7)))

    def _fit(self, series: SeasonalSeries):
        """
        Train SARIMAX model.

        Drift enters as a constant on the differenced equation (trend='c'),
        which integrates to a linear trend in the load level.
        """
        logger.info("Training SARIMA model...")
        logger.info(f"Order: {self.order}")
        logger.info(f"Seasonal order: {self.seasonal_order}")

        model = SARIMAX(
            series.data,
            order=self.order,
            seasonal_order=self.seasonal_order,
            trend='c' if self.params.get('drift', True) else 'n',
            enforce_stationarity=self.params.get('enforce_stationarity', False),
            enforce_invertibility=self.params.get('enforce_invertibility', False)
        )
        fitted = model.fit(disp=False, maxiter=self.params.get('maxiter', 200))

        logger.info(f"✓ AIC: {fitted.aic:.2f}")
        logger.info(f"✓ BIC: {fitted.bic:.2f}")
        return fitted

    def _predict(self, horizon: int):
        alpha = 1 - self.params.get('level', 95) / 100
        prediction = self.fitted_model.get_forecast(steps=horizon)
        conf_int = np.asarray(prediction.conf_int(alpha=alpha))
        return (
            np.asarray(prediction.predicted_mean),
            conf_int[:, 0],
            conf_int[:, 1]
        )
