import numpy as np
import pytest

from src.models.evaluate import (
    evaluate_forecast,
    mean_absolute_percentage_error,
    mean_absolute_scaled_error,
    metric_disagreement,
    rank_models,
    root_mean_squared_error
)


def test_perfect_forecast_has_zero_error():
    actual = [10, 12, 11, 13, 14]
    forecast = [10, 12, 11, 13, 14]

    assert root_mean_squared_error(actual, forecast) == 0.0
    assert mean_absolute_percentage_error(actual, forecast) == 0.0


def test_known_values():
    actual = np.array([10.0, 20.0, 40.0])
    forecast = np.array([12.0, 18.0, 44.0])

    metrics = evaluate_forecast(actual, forecast, y_train=np.array([1.0, 2.0, 3.0, 4.0]))
    assert metrics['ME'] == pytest.approx(-4 / 3)
    assert metrics['MAE'] == pytest.approx(8 / 3)
    assert metrics['RMSE'] == pytest.approx(np.sqrt(24 / 3))
    assert metrics['MAPE'] == pytest.approx(100 * (0.2 + 0.1 + 0.1) / 3)
    # naive in-sample MAE is 1
    assert metrics['MASE'] == pytest.approx(8 / 3)


def test_metrics_are_non_negative():
    rng = np.random.default_rng(3)
    actual = rng.uniform(50, 150, 60)
    forecast = actual + rng.normal(0, 5, 60)

    metrics = evaluate_forecast(actual, forecast, y_train=rng.uniform(50, 150, 100), seasonality=7)
    for name in ('MAE', 'RMSE', 'MAPE', 'sMAPE', 'MASE'):
        assert metrics[name] >= 0
    assert metrics['RMSE'] > 0


def test_mape_ignores_zero_actuals():
    assert mean_absolute_percentage_error([0.0, 10.0], [5.0, 11.0]) == pytest.approx(10.0)
    assert np.isnan(mean_absolute_percentage_error([0.0, 0.0], [1.0, 1.0]))


def test_mase_uses_seasonal_naive_scale():
    y_train = np.array([1.0, 2.0, 3.0, 1.0, 2.0, 3.0, 2.0, 3.0, 4.0])
    # seasonal (m=3) naive errors: 0,0,0,1,1,1 -> MAE 0.5
    assert mean_absolute_scaled_error([1.0], [2.0], y_train, seasonality=3) == pytest.approx(2.0)


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        root_mean_squared_error([1.0, 2.0], [1.0])


def test_rank_models_orders_by_rmse_and_skips_failures():
    results = {
        'a': {'ME': 0, 'MAE': 3, 'RMSE': 5.0, 'MAPE': 2.0, 'sMAPE': 2, 'MASE': 1},
        'b': {'ME': 0, 'MAE': 2, 'RMSE': 4.0, 'MAPE': 3.0, 'sMAPE': 3, 'MASE': 1},
        'c': {'error': 'did not converge'},
    }
    table = rank_models(results)

    assert list(table['Model']) == ['b', 'a']
    assert list(table['rank_RMSE']) == [1, 2]
    assert list(table['rank_MAPE']) == [2, 1]


def test_metric_disagreement_is_reported_not_resolved():
    results = {
        'a': {'RMSE': 5.0, 'MAPE': 2.0},
        'b': {'RMSE': 4.0, 'MAPE': 3.0},
    }
    selection = metric_disagreement(rank_models(results))

    assert selection['best_RMSE'] == 'b'
    assert selection['best_MAPE'] == 'a'
    assert selection['disagree'] is True


def test_metric_agreement():
    results = {
        'a': {'RMSE': 5.0, 'MAPE': 4.0},
        'b': {'RMSE': 4.0, 'MAPE': 3.0},
    }
    selection = metric_disagreement(rank_models(results))
    assert selection['disagree'] is False
