"""
Load Forecast Comparison Package for LoadCast
=============================================
Model bank, evaluation sweep and submission writing for the daily load
forecast of January 2011.

Models:
- Decomposition: STL + ETS
- ARIMA family: ARIMA + Fourier regressors, SARIMA with drift
- Exponential smoothing: TBATS
- Neural: NNAR
- Baseline: seasonal naive

Author: LoadCast Team
Date: January 2011
"""

from .model_trainer import create_forecaster, fit, forecast
from .data_splitter import train_test_split
from .hyperparameter_configs import ModelConfigs
from .pipeline_runner import ComparisonPipeline
from .submission_writer import SubmissionWriter, write_submission

__all__ = [
    'create_forecaster',
    'fit',
    'forecast',
    'train_test_split',
    'ModelConfigs',
    'ComparisonPipeline',
    'SubmissionWriter',
    'write_submission'
]
