"""
Diagnostics for LoadCast
========================
Seasonal decomposition of the load series and forecast plots. These are
for inspection only and do not feed any model.

Author: LoadCast Team
Date: January 2011
"""

import pandas as pd
import matplotlib.pyplot as plt
from pathlib import Path
from statsmodels.tsa.seasonal import MSTL
from typing import Dict, Optional, Union
import logging

from src.features.series_builder import SeasonalSeries
from src.models.base import Forecast

logger = logging.getLogger(__name__)


def decompose_series(series: SeasonalSeries) -> pd.DataFrame:
    """
    MSTL decomposition over the series' (rounded) seasonal periods.

    Periods longer than half the series are skipped.

    Returns:
        DataFrame with observed, trend, seasonal_<p> and resid columns
    """
    periods = [p for p in series.integer_periods if len(series) >= 2 * p]
    if not periods:
        raise ValueError(f"Series too short ({len(series)}) to decompose")

    result = MSTL(series.data, periods=periods).fit()

    seasonal = result.seasonal
    if isinstance(seasonal, pd.Series):
        seasonal = seasonal.to_frame(f"seasonal_{periods[0]}")

    components = pd.concat(
        [result.observed.rename('observed'), result.trend.rename('trend'), seasonal, result.resid.rename('resid')],
        axis=1
    )
    logger.info(f"Decomposed {len(series)} days with periods {periods}")
    return components


def plot_decomposition(components: pd.DataFrame, output_path: Optional[Union[str, Path]] = None):
    fig, axes = plt.subplots(len(components.columns), 1, figsize=(12, 2.5 * len(components.columns)), sharex=True)
    for ax, column in zip(axes, components.columns):
        ax.plot(components.index, components[column], linewidth=0.8)
        ax.set_ylabel(column)
    axes[0].set_title("Daily Load Decomposition")
    fig.tight_layout()
    if output_path is not None:
        fig.savefig(output_path, dpi=120)
        logger.info(f"Saved decomposition plot: {output_path}")
    return fig


def plot_forecasts(
    series: SeasonalSeries,
    forecasts: Dict[str, Forecast],
    history_days: int = 365,
    output_path: Optional[Union[str, Path]] = None
):
    """
    Plot the last `history_days` of actuals with each model's forecast.

    Args:
        series: Actual series (may extend over the forecast window)
        forecasts: run name -> Forecast
        history_days: Days of history shown before the first forecast date
        output_path: Save the figure here when given

    Returns:
        matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=(14, 6))

    actual = series.data.iloc[-min(len(series), history_days + max((len(f) for f in forecasts.values()), default=0)):]
    ax.plot(actual.index, actual.values, color='black', linewidth=1.2, label='Actual')

    for name, forecast in forecasts.items():
        ax.plot(forecast.index, forecast.mean, linewidth=1, label=name)
        if forecast.lower is not None and forecast.upper is not None:
            ax.fill_between(forecast.index, forecast.lower, forecast.upper, alpha=0.15)

    ax.set_title("Daily Load Forecasts")
    ax.set_xlabel("Date")
    ax.set_ylabel("Load")
    ax.legend(loc='upper left', fontsize='small')
    ax.grid(True)
    fig.tight_layout()

    if output_path is not None:
        fig.savefig(output_path, dpi=120)
        logger.info(f"Saved forecast plot: {output_path}")
    return fig
