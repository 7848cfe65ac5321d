import numpy as np
import pandas as pd
import pytest

from src.features.series_builder import build_series


def make_daily_load(n_days: int = 800, start: str = '2006-01-01', seed: int = 0) -> pd.Series:
    idx = pd.date_range(start, periods=n_days, freq='D', name='date')
    t = np.arange(n_days)
    rng = np.random.default_rng(seed)
    values = (
        1000
        + 80 * np.sin(2 * np.pi * t / 7)
        + 200 * np.cos(2 * np.pi * t / 365.25)
        + 0.05 * t
        + rng.normal(0, 10, n_days)
    )
    return pd.Series(values, index=idx, name='load')


@pytest.fixture
def daily_load():
    return make_daily_load()


@pytest.fixture
def series(daily_load):
    return build_series(daily_load)


@pytest.fixture
def short_series():
    return build_series(make_daily_load(n_days=140, seed=1))


@pytest.fixture
def load_factory():
    return make_daily_load
