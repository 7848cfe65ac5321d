import pandas as pd
import pytest

from src.data.load_data import (
    aggregate_daily,
    load_daily_load,
    load_daily_observations,
    load_daily_weather,
    read_table
)


def _hourly_frame(dates, base):
    rows = []
    for i, d in enumerate(dates):
        rows.append([d] + [base + i + h for h in range(24)])
    return pd.DataFrame(rows, columns=['date'] + [f'h{h + 1}' for h in range(24)])


def test_aggregate_daily_averages_hourly_columns():
    df = _hourly_frame(['2006-01-02', '2006-01-01'], base=0)
    daily = aggregate_daily(df, name='load')

    # Row mean of base+i+0..23 is base+i+11.5
    assert list(daily.index) == [pd.Timestamp('2006-01-01'), pd.Timestamp('2006-01-02')]
    assert daily.loc['2006-01-02'] == pytest.approx(11.5)
    assert daily.loc['2006-01-01'] == pytest.approx(12.5)
    assert daily.name == 'load'


def test_aggregate_daily_averages_across_stations():
    df = pd.DataFrame({
        'station': [1, 2, 1, 2],
        'date': ['2006-01-01', '2006-01-01', '2006-01-02', '2006-01-02'],
        'h1': [10.0, 20.0, 0.0, 4.0],
        'h2': [30.0, 40.0, 2.0, 6.0],
    })
    daily = aggregate_daily(df, id_cols=['station'])

    assert daily.loc['2006-01-01'] == pytest.approx(25.0)
    assert daily.loc['2006-01-02'] == pytest.approx(3.0)


def test_aggregate_daily_drops_unparseable_dates():
    df = pd.DataFrame({'date': ['2006-01-01', 'not a date'], 'h1': [1.0, 2.0]})
    daily = aggregate_daily(df)
    assert len(daily) == 1


def test_aggregate_daily_missing_date_column():
    with pytest.raises(KeyError):
        aggregate_daily(pd.DataFrame({'day': ['2006-01-01'], 'h1': [1.0]}))


def test_read_table_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_table(tmp_path / 'load.xlsx')


def test_read_table_unsupported_extension(tmp_path):
    path = tmp_path / 'load.json'
    path.write_text('{}')
    with pytest.raises(ValueError):
        read_table(path)


def test_load_daily_load_from_excel(tmp_path):
    path = tmp_path / 'load.xlsx'
    _hourly_frame(['2006-01-01', '2006-01-02', '2006-01-03'], base=100).to_excel(path, index=False)

    daily = load_daily_load(path)
    assert len(daily) == 3
    assert daily.iloc[0] == pytest.approx(111.5)


def test_load_daily_observations_inner_join(tmp_path):
    _hourly_frame(['2006-01-01', '2006-01-02', '2006-01-03'], base=100).to_csv(tmp_path / 'load.csv', index=False)

    humidity = pd.DataFrame({
        'station': [1, 2, 1, 2],
        'date': ['2006-01-02', '2006-01-02', '2006-01-03', '2006-01-03'],
        'h1': [50.0, 60.0, 70.0, 80.0],
    })
    humidity.to_csv(tmp_path / 'humidity.csv', index=False)

    temperature = pd.DataFrame({
        'station': [1, 1],
        'date': ['2006-01-01', '2006-01-03'],
        'h1': [-5.0, 2.0],
    })
    temperature.to_csv(tmp_path / 'temperature.csv', index=False)

    obs = load_daily_observations(
        load_path=tmp_path / 'load.csv',
        humidity_path=tmp_path / 'humidity.csv',
        temperature_path=tmp_path / 'temperature.csv'
    )

    assert list(obs.columns) == ['load', 'humidity', 'temperature']
    assert list(obs.index) == [pd.Timestamp('2006-01-03')]
    assert obs.loc['2006-01-03', 'humidity'] == pytest.approx(75.0)
    assert obs.loc['2006-01-03', 'temperature'] == pytest.approx(2.0)


def test_load_daily_weather_ignores_station_ids(tmp_path):
    pd.DataFrame({
        'station': [7, 9],
        'date': ['2006-01-01', '2006-01-01'],
        'h1': [1.0, 3.0],
    }).to_csv(tmp_path / 'temperature.csv', index=False)

    daily = load_daily_weather(tmp_path / 'temperature.csv', 'temperature')
    assert daily.loc['2006-01-01'] == pytest.approx(2.0)
    assert daily.name == 'temperature'


def test_aggregate_daily_skips_hour_column():
    df = pd.DataFrame({
        'date': ['2006-01-01', '2006-01-01'],
        'hr': [1, 24],
        's1': [50.0, 50.0],
        's2': [50.0, 50.0],
    })
    assert aggregate_daily(df).loc['2006-01-01'] == pytest.approx(50.0)


def test_load_daily_load_skips_identifier_columns(tmp_path):
    pd.DataFrame({
        'meter_id': [101, 101],
        'date': ['2006-01-01', '2006-01-02'],
        'hour': [1, 1],
        'h1': [900.0, 1000.0],
        'h2': [1100.0, 1000.0],
    }).to_csv(tmp_path / 'load.csv', index=False)

    daily = load_daily_load(tmp_path / 'load.csv')
    assert daily.tolist() == pytest.approx([1000.0, 1000.0])

    with_meter = load_daily_load(tmp_path / 'load.csv', id_cols=['hour'])
    assert with_meter.loc['2006-01-01'] == pytest.approx((101 + 900 + 1100) / 3)
