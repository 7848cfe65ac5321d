"""
TBATS Model for LoadCast
========================
Trigonometric multi-seasonal exponential smoothing with Box-Cox
transform, ARMA errors, trend and damping, all selected automatically.

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
import logging
import warnings
warnings.filterwarnings('ignore')

from statsforecast.models import AutoTBATS

from src.features.series_builder import SeasonalSeries
from src.models.base import BaseForecaster

logger = logging.getLogger(__name__)


class TBATSForecaster(BaseForecaster):
    """Fully automatic TBATS over the series' seasonal periods."""

    model_type = 'tbats'

    def _fit(self, series: SeasonalSeries) -> AutoTBATS:
        periods = [int(p) for p in np.atleast_1d(self.params.get('season_length') or series.integer_periods)]
        logger.info(f"TBATS: seasonal periods {periods}, train samples: {len(series)}")

        model = AutoTBATS(
            season_length=periods,
            use_boxcox=self.params.get('use_boxcox'),
            use_trend=self.params.get('use_trend'),
            use_damped_trend=self.params.get('use_damped_trend'),
            use_arma_errors=self.params.get('use_arma_errors', True)
        )
        model.fit(series.values)
        return model

    def _predict(self, horizon: int):
        result = self.fitted_model.predict(h=horizon)
        return np.asarray(result['mean']), None, None
