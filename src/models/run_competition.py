"""
Competition Workflow for LoadCast
=================================
End-to-end run for the January 2011 daily load forecast:

1. Load load/humidity/temperature tables and aggregate to daily values
2. Build the weekly + yearly seasonal load series
3. Hold out the last 365 days and compare every model configuration
4. Refit the selected models on the full series
5. Write one 31-day submission file per model

Usage:
    python src/models/run_competition.py
    python src/models/run_competition.py --models fourier_arima snaive --no-tracking

Author: LoadCast Team
Date: January 2011
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging
from datetime import datetime

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT))

import matplotlib.pyplot as plt

from src.analysis.plot_forecasts import decompose_series, plot_decomposition, plot_forecasts
from src.data.load_data import (
    DEFAULT_DATA_DIR,
    LOAD_FILE,
    TEMPLATE_FILE,
    load_daily_load,
    load_daily_observations
)
from src.features.series_builder import build_series
from src.models.comparison.hyperparameter_configs import (
    ModelConfigs,
    SUBMISSION_HORIZON,
    TEST_HORIZON,
    select_configs
)
from src.models.comparison.pipeline_runner import DEFAULT_REPORT_DIR, ComparisonPipeline
from src.models.comparison.submission_writer import DEFAULT_OUTPUT_DIR, SubmissionWriter, read_template
from src.models.model_cache import DEFAULT_CACHE_DIR, ModelCache

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _attach_log_file(log_dir: Path) -> Path:
    """Mirror all module output to a timestamped log file."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"competition_run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    handler = logging.FileHandler(log_file)
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logging.getLogger().addHandler(handler)
    return log_file


def run_competition(
    data_dir: Union[str, Path] = DEFAULT_DATA_DIR,
    output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR,
    models: Optional[List[str]] = None,
    test_horizon: int = TEST_HORIZON,
    submission_horizon: int = SUBMISSION_HORIZON,
    mlflow_uri: Optional[str] = None,
    track: bool = True,
    cache_dir: Union[str, Path] = DEFAULT_CACHE_DIR,
    log_dir: Optional[Union[str, Path]] = PROJECT_ROOT / 'reports' / 'logs',
    plot: bool = True,
    report_dir: Union[str, Path] = DEFAULT_REPORT_DIR
) -> Dict[str, Any]:
    """
    Run the complete comparison and submission workflow.

    Args:
        data_dir: Directory with load/humidity/temperature/template files
        output_dir: Directory for submission CSVs
        models: Model types or run names to include (default: all)
        test_horizon: Held-out evaluation length (days)
        submission_horizon: Competition horizon (days)
        mlflow_uri: MLflow tracking URI
        track: Log runs to MLflow
        cache_dir: Fitted-model cache directory
        log_dir: Directory for the run log (None disables the file log)
        plot: Save decomposition and test-window forecast plots
        report_dir: Directory for the comparison report and plots

    Returns:
        Dictionary with 'ranking' (DataFrame), 'results' and 'submissions'
    """
    data_dir = Path(data_dir)
    if log_dir is not None:
        log_file = _attach_log_file(Path(log_dir))
        logger.info(f"Run log: {log_file}")

    logger.info("=" * 80)
    logger.info("LOADCAST DAILY LOAD FORECAST")
    logger.info("=" * 80)

    observations = load_daily_observations(data_dir=data_dir)
    logger.info(f"Exploratory frame: {observations.shape[0]} days x {observations.shape[1]} variables")
    if not observations.empty:
        logger.info("\n" + observations.describe().to_string())

    series = build_series(load_daily_load(data_dir / LOAD_FILE))
    cache = ModelCache(cache_dir)

    configs = select_configs(models)
    pipeline = ComparisonPipeline(mlflow_uri=mlflow_uri, track=track, cache=cache, report_dir=report_dir)
    ranking = pipeline.run_all_models(series, configs=configs, horizon=test_horizon)

    if plot:
        report_dir = Path(report_dir)
        report_dir.mkdir(parents=True, exist_ok=True)
        plt.close(plot_decomposition(decompose_series(series), report_dir / 'decomposition.png'))
        plt.close(plot_forecasts(series, pipeline.forecasts, output_path=report_dir / 'test_forecasts.png'))

    submission_configs = {
        name: config for name, config in ModelConfigs.get_submission_configs().items()
        if name in configs
    }
    writer = SubmissionWriter(read_template(data_dir / TEMPLATE_FILE), output_dir=output_dir, cache=cache)
    submissions = writer.write_all(series, submission_configs, horizon=submission_horizon)

    logger.info("=" * 80)
    logger.info(f"✓ Wrote {len(submissions)} submission files to {output_dir}")
    logger.info("=" * 80)

    return {
        'ranking': ranking,
        'results': pipeline.results,
        'submissions': submissions
    }


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Compare load forecasting models and write submissions')
    parser.add_argument('--data-dir', type=str, default=str(DEFAULT_DATA_DIR),
                        help='Directory with the input spreadsheets')
    parser.add_argument('--output-dir', type=str, default=str(DEFAULT_OUTPUT_DIR),
                        help='Directory for submission files')
    parser.add_argument('--models', nargs='+',
                        help='Model types or run names (default: all)')
    parser.add_argument('--test-horizon', type=int, default=TEST_HORIZON,
                        help='Held-out evaluation window in days')
    parser.add_argument('--submission-horizon', type=int, default=SUBMISSION_HORIZON,
                        help='Forecast horizon for the submission in days')
    parser.add_argument('--mlflow-uri', type=str, default=None,
                        help='MLflow tracking URI')
    parser.add_argument('--no-tracking', action='store_true',
                        help='Disable MLflow tracking')

    args = parser.parse_args()

    outcome = run_competition(
        data_dir=args.data_dir,
        output_dir=args.output_dir,
        models=args.models,
        test_horizon=args.test_horizon,
        submission_horizon=args.submission_horizon,
        mlflow_uri=args.mlflow_uri,
        track=not args.no_tracking
    )

    # Exit with error if all models failed
    successful_models = [m for m, r in outcome['results'].items() if 'error' not in r]
    if not successful_models:
        logger.error("All models failed!")
        sys.exit(1)
    else:
        logger.info(f"\n✓ Successfully evaluated {len(successful_models)} models")
        sys.exit(0)
