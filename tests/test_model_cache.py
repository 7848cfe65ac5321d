import pytest

from src.features.series_builder import build_series
from src.models.comparison import model_trainer
from src.models.model_cache import ModelCache, make_cache_key
from src.models.train_snaive import SeasonalNaiveForecaster


CONFIG = {'model_type': 'snaive', 'season_length': 7, 'cache': True}


def test_cache_hit_skips_fitting(tmp_path, series):
    cache = ModelCache(tmp_path)
    calls = []

    def fit_fn():
        calls.append(1)
        return {'fitted': True}

    first = cache.get_or_fit('snaive', CONFIG, series, fit_fn)
    second = cache.get_or_fit('snaive', CONFIG, series, fit_fn)

    assert first == second == {'fitted': True}
    assert len(calls) == 1


def test_key_depends_on_config_and_data(series, load_factory):
    base = make_cache_key('snaive', CONFIG, series)
    assert base == make_cache_key('snaive', dict(CONFIG), series)
    assert base.startswith('snaive-')

    assert base != make_cache_key('snaive', dict(CONFIG, season_length=365), series)
    assert base != make_cache_key('sarima', CONFIG, series)
    assert base != make_cache_key('snaive', CONFIG, build_series(load_factory(seed=7)))


def test_key_ignores_labels(series):
    labelled = dict(CONFIG, description='weekly naive', name='snaive_weekly')
    assert make_cache_key('snaive', CONFIG, series) == make_cache_key('snaive', labelled, series)


def test_invalidate_and_clear(tmp_path, series):
    cache = ModelCache(tmp_path)
    key = make_cache_key('snaive', CONFIG, series)
    cache.save(key, [1, 2, 3])
    cache.save(make_cache_key('sarima', CONFIG, series), [4])

    assert cache.contains(key)
    assert cache.invalidate(key) is True
    assert cache.invalidate(key) is False
    with pytest.raises(FileNotFoundError):
        cache.load(key)

    assert cache.clear('sarima') == 1
    assert cache.clear() == 0


def test_trainer_reuses_cached_fit(tmp_path, series, monkeypatch):
    calls = []
    original = SeasonalNaiveForecaster._fit

    def counting_fit(self, s):
        calls.append(1)
        return original(self, s)

    monkeypatch.setattr(SeasonalNaiveForecaster, '_fit', counting_fit)
    cache = ModelCache(tmp_path)

    first = model_trainer.fit(series, 'snaive', CONFIG, name='first', cache=cache)
    second = model_trainer.fit(series, 'snaive', CONFIG, name='second', cache=cache)

    assert len(calls) == 1
    assert second.name == 'second'
    assert model_trainer.forecast(second, 14).mean.tolist() == model_trainer.forecast(first, 14).mean.tolist()


def test_uncacheable_config_always_fits(tmp_path, series):
    cache = ModelCache(tmp_path)
    model_trainer.fit(series, 'snaive', {'model_type': 'snaive', 'season_length': 7}, cache=cache)
    assert not list(tmp_path.glob('*.joblib'))
