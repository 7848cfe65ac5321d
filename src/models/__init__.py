"""
LoadCast Model Module
=====================
Forecasters for daily electricity load.

Models:
-------
- STL + ETS: multi-seasonal decomposition with automatic ETS on the adjusted series
- Fourier ARIMA: AutoARIMA on log load with weekly/yearly Fourier regressors
- TBATS: automatic trigonometric multi-seasonal exponential smoothing
- NNAR: averaged feed-forward networks on lagged load
- Seasonal naive: yearly and weekly baselines
- SARIMA: seasonal ARIMA with drift (cached fit)

All models:
- Compared on the last 365 days of the series (RMSE ranking, MAPE alongside)
- Log to MLflow (ME, MAE, RMSE, MAPE, sMAPE, MASE)
- Refit on the full series for the 31-day submission

Author: LoadCast Team
Date: January 2011
Version: 1.0.0
"""

__version__ = "1.0.0"
