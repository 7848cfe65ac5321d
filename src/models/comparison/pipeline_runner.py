"""
Comparison Pipeline Runner
==========================
Fits every configured model on the training prefix, forecasts the
held-out year, evaluates against actuals and ranks the models.

Each model run is logged to MLflow (parameters, metrics, predictions).
A failing model is recorded as an error and the sweep continues.

Author: LoadCast Team
Date: January 2011
"""

import os
import sys
import json
import tempfile
import time
import numpy as np
import pandas as pd
import mlflow
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(PROJECT_ROOT))

from src.features.series_builder import SeasonalSeries
from src.models.base import Forecast
from src.models.comparison.data_splitter import train_test_split
from src.models.comparison.hyperparameter_configs import ModelConfigs, TEST_HORIZON
from src.models.comparison import model_trainer
from src.models.evaluate import evaluate_forecast, metric_disagreement, rank_models
from src.models.model_cache import ModelCache

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_REPORT_DIR = PROJECT_ROOT / 'reports' / 'comparison'


def resolve_tracking_uri(mlflow_uri: Optional[str] = None) -> str:
    """Argument, else MLFLOW_TRACKING_URI, else a local file store under PROJECT_ROOT."""
    if mlflow_uri:
        return mlflow_uri
    env_uri = os.getenv('MLFLOW_TRACKING_URI')
    if env_uri:
        return env_uri
    mlflow_dir = PROJECT_ROOT / 'mlruns'
    mlflow_dir.mkdir(exist_ok=True)
    return f"file://{mlflow_dir}"


class ComparisonPipeline:
    """
    Orchestrates the fit/forecast/evaluate sweep over model configurations.
    """

    def __init__(
        self,
        mlflow_uri: Optional[str] = None,
        experiment_name: str = "LoadCast-Comparison",
        track: bool = True,
        cache: Optional[ModelCache] = None,
        report_dir: Union[str, Path] = DEFAULT_REPORT_DIR
    ):
        """
        Initialize comparison pipeline.

        Args:
            mlflow_uri: MLflow tracking URI (default: env var or local file store)
            experiment_name: MLflow experiment name
            track: Log runs to MLflow
            cache: Fitted-model cache for cacheable configurations
            report_dir: Where the ranked report is written
        """
        self.track = track
        self.cache = cache
        self.report_dir = Path(report_dir)
        self.experiment_name = experiment_name
        self.results: Dict[str, Dict[str, Any]] = {}
        self.forecasts: Dict[str, Forecast] = {}
        self.ranking: Optional[pd.DataFrame] = None

        if self.track:
            self.mlflow_uri = resolve_tracking_uri(mlflow_uri)
            mlflow.set_tracking_uri(self.mlflow_uri)
            mlflow.set_experiment(self.experiment_name)
        else:
            self.mlflow_uri = None

    def _fit_and_evaluate(
        self,
        name: str,
        model_type: str,
        config: Dict[str, Any],
        train: SeasonalSeries,
        test: SeasonalSeries
    ) -> Dict[str, Any]:
        start_time = time.time()
        fitted = model_trainer.fit(train, model_type, config, name=name, cache=self.cache)
        prediction = model_trainer.forecast(fitted, len(test))

        if not prediction.index.equals(test.index):
            raise ValueError(f"{name}: forecast dates do not match the test window")

        metrics = evaluate_forecast(
            y_true=test.values,
            y_pred=prediction.mean,
            y_train=train.values,
            seasonality=7,
            model_name=name
        )
        metrics['training_time_seconds'] = time.time() - start_time
        self.forecasts[name] = prediction
        return metrics

    def _log_run(self, name: str, model_type: str, config: Dict[str, Any], train, test, metrics):
        with mlflow.start_run(run_name=name) as run:
            mlflow.log_param("model_type", model_type)
            mlflow.log_param("train_samples", len(train))
            mlflow.log_param("test_samples", len(test))
            for key, value in config.items():
                if key != 'model_type':
                    mlflow.log_param(key, str(value))

            for metric_name, metric_value in metrics.items():
                if isinstance(metric_value, (int, float)) and np.isfinite(metric_value):
                    mlflow.log_metric(metric_name, metric_value)

            pred_df = self.forecasts[name].to_frame()
            pred_df.insert(0, 'y_true', test.values)
            with tempfile.TemporaryDirectory() as tmp_dir:
                pred_path = Path(tmp_dir) / f"{name}_predictions.csv"
                pred_df.to_csv(pred_path, index_label='date')
                mlflow.log_artifact(str(pred_path))

            logger.info(f"  MLflow run ID: {run.info.run_id}")

    def run_model(
        self,
        name: str,
        model_type: str,
        config: Dict[str, Any],
        train: SeasonalSeries,
        test: SeasonalSeries
    ) -> Dict[str, Any]:
        """
        Run a single model configuration.

        Args:
            name: Run name
            model_type: Model type
            config: Model parameters
            train: Training series
            test: Test series

        Returns:
            Dictionary with metrics, or {'error': message} on failure
        """
        logger.info(f"\n{'='*80}")
        logger.info(f"TRAINING {name.upper()} ({model_type})")
        logger.info(f"{'='*80}")

        try:
            metrics = self._fit_and_evaluate(name, model_type, config, train, test)
        except Exception as e:
            logger.error(f"✗ {name} failed: {e}", exc_info=True)
            self.forecasts.pop(name, None)
            self.results[name] = {'error': str(e)}
            return self.results[name]

        if self.track:
            # A tracking failure keeps the computed metrics
            try:
                self._log_run(name, model_type, config, train, test, metrics)
            except Exception as e:
                logger.warning(f"⚠ MLflow logging failed for {name}: {e}", exc_info=True)

        logger.info(f"✓ {name} completed in {metrics['training_time_seconds']:.2f}s")
        logger.info(f"  RMSE: {metrics['RMSE']:.2f} | MAPE: {metrics['MAPE']:.2f}%")

        self.results[name] = metrics
        return metrics

    def run_all_models(
        self,
        series: SeasonalSeries,
        configs: Optional[Dict[str, Dict[str, Any]]] = None,
        horizon: int = TEST_HORIZON
    ) -> pd.DataFrame:
        """
        Split once and run every configuration.

        Args:
            series: Full series
            configs: run name -> configuration (default: all configurations)
            horizon: Held-out test length

        Returns:
            Ranked comparison table
        """
        configs = configs if configs is not None else ModelConfigs.get_all_configs()
        self.results = {}
        self.forecasts = {}

        logger.info(f"\n{'='*80}")
        logger.info("LOADCAST MODEL COMPARISON")
        logger.info(f"{'='*80}")
        logger.info(f"Models: {', '.join(configs)}")
        logger.info(f"Test horizon: {horizon} days")
        logger.info(f"MLflow: {self.mlflow_uri or 'disabled'}")

        train, test = train_test_split(series, horizon)

        for name, config in configs.items():
            self.run_model(name, config['model_type'], config, train, test)

        return self.report()

    def report(self) -> pd.DataFrame:
        """Rank results by RMSE, flag metric disagreement, and save CSV + JSON."""
        table = rank_models(self.results, primary='RMSE', secondary='MAPE')
        self.ranking = table

        logger.info(f"\n{'='*80}")
        logger.info("MODEL COMPARISON REPORT")
        logger.info(f"{'='*80}")

        if table.empty:
            logger.warning("No successful models to rank")
            return table

        logger.info("\n" + table.to_string(index=False))
        selection = metric_disagreement(table, primary='RMSE', secondary='MAPE')
        logger.info(f"\n🏆 BEST MODEL (RMSE): {selection['best_RMSE']}")

        self.report_dir.mkdir(parents=True, exist_ok=True)
        report_path = self.report_dir / 'model_comparison.csv'
        table.to_csv(report_path, index=False)
        logger.info(f"✓ Comparison report saved to: {report_path}")

        json_path = self.report_dir / 'model_results.json'
        with open(json_path, 'w') as f:
            json.dump({'results': self.results, 'selection': selection}, f, indent=2, default=str)
        logger.info(f"✓ Results JSON saved to: {json_path}")

        return table
