"""
STL + ETS Model for LoadCast
============================
Multi-seasonal STL decomposition (weekly + yearly) followed by an
automatically selected non-seasonal ETS model on the seasonally adjusted
series. Seasonal components are projected forward naively and added back.

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
import logging
import warnings
warnings.filterwarnings('ignore')

from statsforecast.models import MSTL, AutoETS

from src.features.series_builder import SeasonalSeries
from src.models.base import BaseForecaster

logger = logging.getLogger(__name__)


class STLETSForecaster(BaseForecaster):
    """MSTL decomposition with an AutoETS trend forecaster."""

    model_type = 'stl_ets'

    def _fit(self, series: SeasonalSeries) -> MSTL:
        periods = [int(p) for p in np.atleast_1d(self.params.get('season_length') or series.integer_periods)]
        usable = [p for p in periods if len(series) >= 2 * p]
        if not usable:
            raise ValueError(f"Series too short ({len(series)}) for seasonal periods {periods}")
        if usable != periods:
            logger.warning(f"Dropping seasonal periods longer than half the series: {sorted(set(periods) - set(usable))}")

        logger.info(f"STL+ETS: seasonal periods {usable}, ETS model {self.params.get('ets_model', 'ZZN')}")

        model = MSTL(
            season_length=usable,
            trend_forecaster=AutoETS(model=self.params.get('ets_model', 'ZZN'))
        )
        model.fit(series.values)
        return model

    def _predict(self, horizon: int):
        level = int(self.params.get('level', 95))
        result = self.fitted_model.predict(h=horizon, level=[level])
        return (
            np.asarray(result['mean']),
            np.asarray(result[f'lo-{level}']),
            np.asarray(result[f'hi-{level}'])
        )
