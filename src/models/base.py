"""
Forecaster Base Classes for LoadCast
====================================
Common contract shared by every model in the bank:

- fit(series) -> self
- forecast(horizon) -> Forecast

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
import pandas as pd
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.features.series_builder import SeasonalSeries


@dataclass
class Forecast:
    """Point forecast with optional prediction interval, indexed by target date."""

    model_name: str
    index: pd.DatetimeIndex
    mean: np.ndarray
    lower: Optional[np.ndarray] = None
    upper: Optional[np.ndarray] = None

    def __post_init__(self):
        self.mean = np.asarray(self.mean, dtype=float)
        if len(self.mean) != len(self.index):
            raise ValueError(
                f"Forecast length {len(self.mean)} does not match {len(self.index)} target dates"
            )
        for bound in ('lower', 'upper'):
            values = getattr(self, bound)
            if values is not None:
                setattr(self, bound, np.asarray(values, dtype=float))

    def __len__(self) -> int:
        return len(self.mean)

    @property
    def horizon(self) -> int:
        return len(self.mean)

    def to_series(self) -> pd.Series:
        return pd.Series(self.mean, index=self.index, name=self.model_name)

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame({'y_pred': self.mean}, index=self.index)
        if self.lower is not None and self.upper is not None:
            df['lower'] = self.lower
            df['upper'] = self.upper
        return df


class BaseForecaster(ABC):
    """
    Wrapper around one statistical model configuration.

    Subclasses set `model_type` and implement `_fit` and `_predict`.
    """

    model_type: str = 'base'

    def __init__(self, **params: Any):
        self.params: Dict[str, Any] = params
        self.train_series: Optional[SeasonalSeries] = None
        self.fitted_model: Any = None

    @property
    def name(self) -> str:
        return self.params.get('name', self.model_type)

    def fit(self, series: SeasonalSeries) -> 'BaseForecaster':
        """
        Fit the model on a training series.

        Args:
            series: Training series

        Returns:
            self
        """
        self.fitted_model = self._fit(series)
        self.train_series = series
        return self

    def forecast(self, horizon: int) -> Forecast:
        """
        Forecast `horizon` days after the end of the training series.

        Args:
            horizon: Number of days

        Returns:
            Forecast dated from the day after training ends
        """
        if self.train_series is None:
            raise ValueError("Model must be trained before prediction")
        if horizon < 1:
            raise ValueError(f"horizon must be >= 1, got {horizon}")

        mean, lower, upper = self._predict(horizon)
        return Forecast(
            model_name=self.name,
            index=self.train_series.future_index(horizon),
            mean=mean,
            lower=lower,
            upper=upper
        )

    @abstractmethod
    def _fit(self, series: SeasonalSeries) -> Any:
        """Fit and return the underlying library model."""

    @abstractmethod
    def _predict(self, horizon: int):
        """Return (mean, lower, upper); bounds may be None."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params})"
