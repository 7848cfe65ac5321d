"""
Competition Submission Writer
=============================
Refits the selected models on the full series, forecasts the target month
and writes one CSV per model, following the submission template's rows.

Every file is written from its own model's forecast: the returned mapping
binds each run name to the file it produced.

Author: LoadCast Team
Date: January 2011
"""

import pandas as pd
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from src.data.load_data import read_table
from src.features.series_builder import SeasonalSeries
from src.models.base import Forecast
from src.models.comparison import model_trainer
from src.models.comparison.hyperparameter_configs import ModelConfigs, SUBMISSION_HORIZON
from src.models.model_cache import ModelCache

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / 'submissions'

logger = logging.getLogger(__name__)


def read_template(path: Union[str, Path]) -> pd.DataFrame:
    """Read the submission template (xlsx or csv)."""
    return read_table(path)


def write_submission(
    forecast: Forecast,
    template: pd.DataFrame,
    output_path: Union[str, Path],
    value_col: str = 'load',
    date_col: str = 'date'
) -> Path:
    """
    Write one forecast into the template's row order as CSV.

    Args:
        forecast: Forecast whose horizon equals the template row count
        template: Submission template
        output_path: CSV destination
        value_col: Column receiving the forecast values
        date_col: Template date column, overwritten with forecast dates if present

    Returns:
        Path to the written file
    """
    if len(template) != len(forecast):
        raise ValueError(
            f"Template has {len(template)} rows but forecast '{forecast.model_name}' "
            f"has {len(forecast)} values"
        )

    submission = template.copy()
    if date_col in submission.columns:
        submission[date_col] = forecast.index.strftime('%Y-%m-%d')
    submission[value_col] = forecast.mean

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    submission.to_csv(output_path, index=False)

    logger.info(f"✓ Submission for {forecast.model_name} saved to: {output_path}")
    return output_path


class SubmissionWriter:
    """Refit-on-full-series and write-per-model workflow."""

    def __init__(
        self,
        template: pd.DataFrame,
        output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR,
        cache: Optional[ModelCache] = None,
        value_col: str = 'load'
    ):
        self.template = template
        self.output_dir = Path(output_dir)
        self.cache = cache
        self.value_col = value_col

    def write_model(
        self,
        series: SeasonalSeries,
        name: str,
        config: Dict[str, Any],
        horizon: int = SUBMISSION_HORIZON
    ) -> Path:
        fitted = model_trainer.fit(series, config['model_type'], config, name=name, cache=self.cache)
        prediction = model_trainer.forecast(fitted, horizon)
        return write_submission(
            prediction,
            self.template,
            self.output_dir / f"submission_{name}.csv",
            value_col=self.value_col
        )

    def write_all(
        self,
        series: SeasonalSeries,
        configs: Optional[Dict[str, Dict[str, Any]]] = None,
        horizon: int = SUBMISSION_HORIZON
    ) -> Dict[str, Path]:
        """
        Refit each selected model on the whole series and write its submission.

        Args:
            series: Full series (no held-out test)
            configs: run name -> configuration (default: submission configs)
            horizon: Target horizon (31 days for January)

        Returns:
            run name -> written file
        """
        configs = configs if configs is not None else ModelConfigs.get_submission_configs()

        logger.info(f"\n{'='*80}")
        logger.info(f"WRITING SUBMISSIONS ({horizon} days from {series.future_index(1)[0].date()})")
        logger.info(f"{'='*80}")

        return {
            name: self.write_model(series, name, config, horizon)
            for name, config in configs.items()
        }
