"""
Neural Network Autoregression (NNAR) for LoadCast
=================================================
Feed-forward network on lagged load values, in the spirit of NNAR(p, P)[m].

Inputs:
- lags 1..p
- seasonal lags m, 2m, ..., P*m
- optional Fourier regressors (used instead of seasonal lags)

Inputs are standardised with the training mean/std, a single hidden layer
is trained `repeats` times with different seeds and the networks are
averaged. Multi-step forecasts are produced recursively, feeding each
prediction back as the newest lag.

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
from sklearn.neural_network import MLPRegressor
from typing import List, Optional
import logging
import warnings
warnings.filterwarnings('ignore')

from src.features.fourier_features import fourier_terms
from src.features.series_builder import SeasonalSeries
from src.models.base import BaseForecaster

logger = logging.getLogger(__name__)


def build_lag_set(p: int, P: int = 0, season_length: int = 7) -> List[int]:
    """Sorted unique lags 1..p plus seasonal lags m..P*m."""
    lags = set(range(1, p + 1)) | {season_length * i for i in range(1, P + 1)}
    if not lags:
        raise ValueError("NNAR needs at least one lag (p >= 1 or P >= 1)")
    return sorted(lags)


class NNARForecaster(BaseForecaster):
    """Averaged MLP autoregression with optional Fourier inputs."""

    model_type = 'nnar'

    @property
    def lags(self) -> List[int]:
        return build_lag_set(
            int(self.params.get('p', 7)),
            int(self.params.get('P', 0)),
            int(self.params.get('season_length', 7))
        )

    @property
    def fourier_harmonics(self) -> Optional[tuple]:
        harmonics = self.params.get('fourier_harmonics')
        return tuple(harmonics) if harmonics else None

    def _exog(self, n_obs: int, offset: int = 0) -> Optional[np.ndarray]:
        if self.fourier_harmonics is None:
            return None
        return fourier_terms(
            n_obs,
            periods=self.periods_,
            harmonics=self.fourier_harmonics,
            offset=offset
        ).to_numpy()

    def _fit(self, series: SeasonalSeries) -> List[MLPRegressor]:
        lags = self.lags
        max_lag = lags[-1]
        if len(series) <= max_lag + 1:
            raise ValueError(f"Series too short ({len(series)}) for maximum lag {max_lag}")

        self.periods_ = series.seasonal_periods
        y = series.values
        self.mean_ = float(y.mean())
        self.scale_ = float(y.std()) or 1.0
        z = (y - self.mean_) / self.scale_

        rows = np.arange(max_lag, len(z))
        X = np.column_stack([z[rows - lag] for lag in lags])
        exog = self._exog(len(z))
        if exog is not None:
            X = np.hstack([X, exog[rows]])
        target = z[rows]

        n_inputs = X.shape[1]
        size = int(self.params.get('size') or max(1, round((n_inputs + 1) / 2)))
        repeats = int(self.params.get('repeats', 20))
        seed = int(self.params.get('random_state', 42))

        logger.info(f"NNAR: lags={lags}, inputs={n_inputs}, hidden={size}, repeats={repeats}")

        networks = []
        for i in range(repeats):
            net = MLPRegressor(
                hidden_layer_sizes=(size,),
                activation='logistic',
                solver='lbfgs',
                alpha=float(self.params.get('decay', 1e-4)),
                max_iter=int(self.params.get('max_iter', 500)),
                random_state=seed + i
            )
            net.fit(X, target)
            networks.append(net)

        self.history_ = z.copy()
        return networks

    def _predict(self, horizon: int):
        lags = self.lags
        history = list(self.history_)
        n_train = len(history)
        exog = self._exog(horizon, offset=n_train)

        predictions = []
        for step in range(horizon):
            x = [history[-lag] for lag in lags]
            if exog is not None:
                x.extend(exog[step])
            x = np.asarray(x, dtype=float).reshape(1, -1)
            z_hat = float(np.mean([net.predict(x)[0] for net in self.fitted_model]))
            history.append(z_hat)
            predictions.append(z_hat)

        mean = np.asarray(predictions) * self.scale_ + self.mean_
        return mean, None, None
