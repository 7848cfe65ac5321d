"""
Model Bank for the Load Forecast Comparison
===========================================
Uniform fit/forecast entry points over every forecaster type.

Supports:
- stl_ets
- fourier_arima
- tbats
- nnar
- snaive
- sarima

Author: LoadCast Team
Date: January 2011
"""

from typing import Any, Dict, Optional, Type
import logging

from src.features.series_builder import SeasonalSeries
from src.models.base import BaseForecaster, Forecast
from src.models.model_cache import ModelCache
from src.models.train_fourier_arima import FourierARIMAForecaster
from src.models.train_nnar import NNARForecaster
from src.models.train_sarima import SARIMAForecaster
from src.models.train_snaive import SeasonalNaiveForecaster
from src.models.train_stl_ets import STLETSForecaster
from src.models.train_tbats import TBATSForecaster

logger = logging.getLogger(__name__)

FORECASTERS: Dict[str, Type[BaseForecaster]] = {
    cls.model_type: cls
    for cls in (
        STLETSForecaster,
        FourierARIMAForecaster,
        TBATSForecaster,
        NNARForecaster,
        SeasonalNaiveForecaster,
        SARIMAForecaster,
    )
}


def create_forecaster(model_type: str, config: Optional[Dict[str, Any]] = None, name: Optional[str] = None) -> BaseForecaster:
    """
    Instantiate an unfitted forecaster.

    Args:
        model_type: One of FORECASTERS
        config: Model parameters ('model_type' entry is ignored)
        name: Run name carried into forecasts

    Returns:
        Forecaster instance
    """
    model_type = model_type.lower()
    if model_type not in FORECASTERS:
        raise ValueError(f"Unknown model type: {model_type}. Available: {sorted(FORECASTERS)}")

    params = {k: v for k, v in (config or {}).items() if k != 'model_type'}
    if name is not None:
        params['name'] = name
    return FORECASTERS[model_type](**params)


def fit(
    training_series: SeasonalSeries,
    model_type: str,
    config: Optional[Dict[str, Any]] = None,
    name: Optional[str] = None,
    cache: Optional[ModelCache] = None
) -> BaseForecaster:
    """
    Fit one model configuration on a training series.

    Configurations with `cache: True` go through `cache` when one is given:
    a stored fit for the same type, configuration and data is reused.

    Args:
        training_series: Training series
        model_type: Model type
        config: Model parameters
        name: Run name
        cache: Optional fitted-model cache

    Returns:
        Fitted forecaster
    """
    config = config or {}
    forecaster = create_forecaster(model_type, config, name=name)

    if cache is not None and config.get('cache', False):
        fitted = cache.get_or_fit(
            model_type,
            config,
            training_series,
            lambda: forecaster.fit(training_series)
        )
        # The cached object keeps its original run name
        if name is not None:
            fitted.params['name'] = name
        return fitted

    return forecaster.fit(training_series)


def forecast(fitted_model: BaseForecaster, horizon: int) -> Forecast:
    """
    Forecast `horizon` days after the model's training data.

    Returns:
        Forecast with exactly `horizon` dated points
    """
    result = fitted_model.forecast(horizon)
    logger.info(f"{result.model_name}: {horizon}-day forecast ({result.index[0].date()} to {result.index[-1].date()})")
    return result
