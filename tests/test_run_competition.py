import matplotlib
matplotlib.use('Agg')
import numpy as np
import pandas as pd
import pytest

from src.data.load_data import HUMIDITY_FILE, LOAD_FILE, TEMPERATURE_FILE, TEMPLATE_FILE
from src.models.run_competition import run_competition


@pytest.fixture
def data_dir(tmp_path, daily_load):
    data_dir = tmp_path / 'raw'
    data_dir.mkdir()

    hours = {f'h{h + 1}': daily_load.values + h - 11.5 for h in range(24)}
    load = pd.DataFrame({'date': daily_load.index, **hours})
    load.to_excel(data_dir / LOAD_FILE, index=False)

    for file_name, level in ((HUMIDITY_FILE, 70.0), (TEMPERATURE_FILE, 12.0)):
        weather = pd.DataFrame({
            'station': np.repeat([1, 2], len(daily_load)),
            'date': np.tile(daily_load.index, 2),
            'h1': level,
            'h2': level + 2,
        })
        weather.to_excel(data_dir / file_name, index=False)

    template = pd.DataFrame({'date': pd.date_range(daily_load.index[-1] + pd.Timedelta(days=1), periods=31)})
    template['load'] = np.nan
    template.to_excel(data_dir / TEMPLATE_FILE, index=False)
    return data_dir


def test_end_to_end_writes_ranked_report_and_submissions(tmp_path, data_dir, daily_load):
    outcome = run_competition(
        data_dir=data_dir,
        output_dir=tmp_path / 'submissions',
        models=['snaive', 'sarima'],
        track=False,
        cache_dir=tmp_path / 'cache',
        log_dir=None,
        report_dir=tmp_path / 'reports'
    )

    assert set(outcome['ranking']['Model']) == {'snaive_yearly', 'snaive_weekly', 'sarima'}
    assert (tmp_path / 'reports' / 'model_comparison.csv').exists()
    assert (tmp_path / 'reports' / 'test_forecasts.png').exists()

    # only sarima is among the submission models
    assert list(outcome['submissions']) == ['sarima']
    submission = pd.read_csv(outcome['submissions']['sarima'])
    assert len(submission) == 31
    assert submission['date'].iloc[0] == (daily_load.index[-1] + pd.Timedelta(days=1)).strftime('%Y-%m-%d')
    assert submission['load'].notna().all()

    # test-window and full-series SARIMA fits are both cached
    assert len(list((tmp_path / 'cache').glob('sarima-*.joblib'))) == 2
