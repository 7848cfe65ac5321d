"""
Evaluation Metrics for Forecasting Models
==========================================
Point-forecast accuracy metrics and model ranking.

Metrics:
- ME (Mean Error)
- MAE (Mean Absolute Error)
- RMSE (Root Mean Squared Error)
- MAPE (Mean Absolute Percentage Error)
- sMAPE (Symmetric Mean Absolute Percentage Error)
- MASE (Mean Absolute Scaled Error)

Forecasts and actuals are aligned by position.

Author: LoadCast Team
Date: January 2011
"""

import numpy as np
import pandas as pd
from typing import Any, Dict, Optional, Tuple
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

METRIC_COLUMNS = ['ME', 'MAE', 'RMSE', 'MAPE', 'sMAPE', 'MASE']


def _aligned(y_true, y_pred) -> Tuple[np.ndarray, np.ndarray]:
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)
    if y_true.shape != y_pred.shape:
        raise ValueError(f"Length mismatch: {y_true.shape} actuals vs {y_pred.shape} forecasts")
    if y_true.size == 0:
        raise ValueError("Cannot evaluate an empty forecast")
    return y_true, y_pred


def mean_error(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean of (actual - forecast); sign shows bias."""
    y_true, y_pred = _aligned(y_true, y_pred)
    return float(np.mean(y_true - y_pred))


def mean_absolute_error(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate Mean Absolute Error.

    Args:
        y_true: True values
        y_pred: Predicted values

    Returns:
        MAE value
    """
    y_true, y_pred = _aligned(y_true, y_pred)
    return float(np.mean(np.abs(y_true - y_pred)))


def root_mean_squared_error(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate Root Mean Squared Error.

    Args:
        y_true: True values
        y_pred: Predicted values

    Returns:
        RMSE value
    """
    y_true, y_pred = _aligned(y_true, y_pred)
    return float(np.sqrt(np.mean((y_true - y_pred) ** 2)))


def mean_absolute_percentage_error(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate Mean Absolute Percentage Error.

    Args:
        y_true: True values
        y_pred: Predicted values

    Returns:
        MAPE value in percentage
    """
    y_true, y_pred = _aligned(y_true, y_pred)
    # Avoid division by zero
    mask = y_true != 0
    if not np.any(mask):
        return np.nan

    return float(100 * np.mean(np.abs((y_true[mask] - y_pred[mask]) / y_true[mask])))


def symmetric_mean_absolute_percentage_error(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate Symmetric Mean Absolute Percentage Error.

    Args:
        y_true: True values
        y_pred: Predicted values

    Returns:
        sMAPE value in percentage
    """
    y_true, y_pred = _aligned(y_true, y_pred)
    denominator = (np.abs(y_true) + np.abs(y_pred)) / 2
    # Avoid division by zero
    mask = denominator != 0
    if not np.any(mask):
        return np.nan

    return float(100 * np.mean(np.abs(y_true[mask] - y_pred[mask]) / denominator[mask]))


def mean_absolute_scaled_error(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_train: np.ndarray,
    seasonality: int = 1
) -> float:
    """
    Calculate Mean Absolute Scaled Error.

    MASE scales the MAE by the MAE of the naive seasonal forecast on the training set.
    A value < 1 indicates the forecast is better than the naive seasonal forecast.

    Args:
        y_true: True values
        y_pred: Predicted values
        y_train: Training data for scaling
        seasonality: Seasonal period for naive forecast (1 for non-seasonal)

    Returns:
        MASE value
    """
    y_true, y_pred = _aligned(y_true, y_pred)
    y_train = np.asarray(y_train, dtype=float)

    mae_forecast = np.mean(np.abs(y_true - y_pred))

    # Naive forecast: y_t = y_{t-seasonality}
    if len(y_train) <= seasonality:
        naive_errors = np.abs(np.diff(y_train))
    else:
        naive_errors = np.abs(y_train[seasonality:] - y_train[:-seasonality])

    if naive_errors.size == 0:
        return np.nan

    mae_naive = np.mean(naive_errors)
    if mae_naive == 0:
        return np.nan

    return float(mae_forecast / mae_naive)


def evaluate_forecast(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_train: np.ndarray,
    seasonality: int = 1,
    model_name: Optional[str] = None
) -> Dict[str, float]:
    """
    Evaluate forecast with comprehensive metrics.

    Args:
        y_true: True values
        y_pred: Predicted values
        y_train: Training data for MASE calculation
        seasonality: Seasonal period for MASE (default: 1)
        model_name: Optional model name for logging

    Returns:
        Dictionary with all metrics
    """
    metrics = {
        'ME': mean_error(y_true, y_pred),
        'MAE': mean_absolute_error(y_true, y_pred),
        'RMSE': root_mean_squared_error(y_true, y_pred),
        'MAPE': mean_absolute_percentage_error(y_true, y_pred),
        'sMAPE': symmetric_mean_absolute_percentage_error(y_true, y_pred),
        'MASE': mean_absolute_scaled_error(y_true, y_pred, y_train, seasonality)
    }

    if model_name:
        logger.info(f"\nEvaluation Metrics for {model_name}:")
        logger.info(f"  ME:    {metrics['ME']:.4f}")
        logger.info(f"  MAE:   {metrics['MAE']:.4f}")
        logger.info(f"  RMSE:  {metrics['RMSE']:.4f}")
        logger.info(f"  MAPE:  {metrics['MAPE']:.4f}%")
        logger.info(f"  sMAPE: {metrics['sMAPE']:.4f}%")
        logger.info(f"  MASE:  {metrics['MASE']:.4f}")

    return metrics


def rank_models(
    results: Dict[str, Dict[str, Any]],
    primary: str = 'RMSE',
    secondary: str = 'MAPE'
) -> pd.DataFrame:
    """
    Rank models by a primary metric, keeping the secondary ranking visible.

    Args:
        results: model name -> metrics dict (entries with 'error' are skipped)
        primary: Metric used for ordering (lower is better)
        secondary: Alternate metric whose rank is reported alongside

    Returns:
        DataFrame sorted by `primary`, with rank_<primary> and rank_<secondary>
    """
    rows = []
    for model_name, metrics in results.items():
        if 'error' in metrics:
            logger.warning(f"{model_name}: FAILED - {metrics['error']}")
            continue
        row = {'Model': model_name}
        for column in METRIC_COLUMNS:
            row[column] = metrics.get(column, np.nan)
        if 'training_time_seconds' in metrics:
            row['Training Time (s)'] = metrics['training_time_seconds']
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=['Model'] + METRIC_COLUMNS)

    table = pd.DataFrame(rows)
    for metric in (primary, secondary):
        table[f'rank_{metric}'] = table[metric].rank(method='min', na_option='bottom').astype(int)

    return table.sort_values([primary, 'Model'], na_position='last').reset_index(drop=True)


def metric_disagreement(
    table: pd.DataFrame,
    primary: str = 'RMSE',
    secondary: str = 'MAPE'
) -> Dict[str, Any]:
    """
    Report the best model under each metric without choosing between them.

    Returns:
        Dict with best_<primary>, best_<secondary> and a 'disagree' flag
    """
    if table.empty:
        return {f'best_{primary}': None, f'best_{secondary}': None, 'disagree': False}

    best_primary = table.loc[table[primary].idxmin(), 'Model'] if table[primary].notna().any() else None
    best_secondary = table.loc[table[secondary].idxmin(), 'Model'] if table[secondary].notna().any() else None
    disagree = bool(best_primary != best_secondary)

    if disagree:
        logger.warning(
            f"⚠ Metrics disagree: best by {primary} is {best_primary}, "
            f"best by {secondary} is {best_secondary}"
        )

    return {
        f'best_{primary}': best_primary,
        f'best_{secondary}': best_secondary,
        'disagree': disagree
    }
