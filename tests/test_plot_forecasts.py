import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from src.analysis.plot_forecasts import decompose_series, plot_decomposition, plot_forecasts
from src.models.comparison import model_trainer


def test_decomposition_adds_back_to_observed(series):
    components = decompose_series(series)

    assert {'observed', 'trend', 'resid'} <= set(components.columns)
    seasonal_cols = [c for c in components.columns if c.startswith('seasonal')]
    assert len(seasonal_cols) == 2

    rebuilt = components['trend'] + components[seasonal_cols].sum(axis=1) + components['resid']
    np.testing.assert_allclose(rebuilt, components['observed'], rtol=1e-8)


def test_short_series_skips_yearly_period(short_series):
    components = decompose_series(short_series)
    assert [c for c in components.columns if c.startswith('seasonal')] == ['seasonal_7']


def test_plots_are_saved(tmp_path, series):
    fitted = model_trainer.fit(series.head(700), 'snaive', {'season_length': 7}, name='weekly')
    forecasts = {'weekly': model_trainer.forecast(fitted, 100)}

    fig = plot_forecasts(series, forecasts, output_path=tmp_path / 'forecasts.png')
    plt.close(fig)
    fig = plot_decomposition(decompose_series(series), tmp_path / 'decomposition.png')
    plt.close(fig)

    assert (tmp_path / 'forecasts.png').exists()
    assert (tmp_path / 'decomposition.png').exists()
