"""
Daily Load & Weather Loader for LoadCast
========================================
Reads the raw load, humidity and temperature spreadsheets and aggregates
them to daily granularity.

Sources:
--------
- load.xlsx:        date + 24 hourly load columns (one row per day)
- humidity.xlsx:    date + station/hourly humidity columns
- temperature.xlsx: date + station/hourly temperature columns

Aggregation:
------------
1. Average the intra-day columns of every row into one figure
2. Average rows sharing a date (one row per station) into one daily value

Author: LoadCast Team
Date: January 2011
"""

import pandas as pd
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DATA_DIR = PROJECT_ROOT / 'data' / 'raw'

LOAD_FILE = 'load.xlsx'
HUMIDITY_FILE = 'humidity.xlsx'
TEMPERATURE_FILE = 'temperature.xlsx'
TEMPLATE_FILE = 'submission_template.xlsx'

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Numeric columns that identify a reading rather than measure it
DEFAULT_ID_COLUMNS = ('hr', 'hour', 'meter_id', 'station')


def read_table(path: PathLike) -> pd.DataFrame:
    """
    Read a spreadsheet or CSV table.

    Args:
        path: .xlsx/.xls/.csv file

    Returns:
        Raw DataFrame
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in ('.xlsx', '.xls'):
        df = pd.read_excel(path)
    elif suffix == '.csv':
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported file type '{suffix}' for {path.name}")

    logger.info(f"Read {path.name}: {df.shape[0]} rows x {df.shape[1]} columns")
    return df


def _value_columns(
    df: pd.DataFrame,
    date_col: str,
    id_cols: Iterable[str]
) -> List[str]:
    excluded = {date_col, *id_cols}
    return [
        col for col in df.select_dtypes(include='number').columns
        if col not in excluded
    ]


def aggregate_daily(
    df: pd.DataFrame,
    date_col: str = 'date',
    value_cols: Optional[List[str]] = None,
    id_cols: Iterable[str] = DEFAULT_ID_COLUMNS,
    name: Optional[str] = None
) -> pd.Series:
    """
    Collapse intra-day (and per-station) columns into one value per date.

    Args:
        df: Raw table with a date column
        date_col: Name of the date column
        value_cols: Intra-day columns to average (default: every numeric
            column except the date and id columns)
        id_cols: Identifier columns (hour, meter or station id) excluded from averaging
        name: Name of the returned series

    Returns:
        Daily series indexed by a sorted DatetimeIndex
    """
    if date_col not in df.columns:
        raise KeyError(f"Column '{date_col}' missing. Available columns: {df.columns.tolist()}")

    if value_cols is None:
        value_cols = _value_columns(df, date_col, id_cols)
    if not value_cols:
        raise ValueError("No numeric value columns to aggregate")

    missing = [col for col in value_cols if col not in df.columns]
    if missing:
        raise KeyError(f"Value columns missing: {missing}")

    dates = pd.to_datetime(df[date_col], errors='coerce').dt.normalize()
    row_means = df[value_cols].apply(pd.to_numeric, errors='coerce').mean(axis=1)

    frame = pd.DataFrame({'date': dates, 'value': row_means}).dropna(subset=['date'])
    n_dropped = len(df) - len(frame)
    if n_dropped:
        logger.warning(f"Dropped {n_dropped} rows with unparseable dates")

    daily = frame.groupby('date')['value'].mean().sort_index()
    daily.index = pd.DatetimeIndex(daily.index, name='date')
    daily.name = name or 'value'
    return daily


def load_daily_load(
    path: PathLike,
    date_col: str = 'date',
    id_cols: Iterable[str] = DEFAULT_ID_COLUMNS
) -> pd.Series:
    """Daily mean load from the hourly load table."""
    daily = aggregate_daily(read_table(path), date_col=date_col, id_cols=id_cols, name='load')
    logger.info(f"Daily load: {len(daily)} days ({daily.index.min().date()} to {daily.index.max().date()})")
    return daily


def load_daily_weather(
    path: PathLike,
    name: str,
    date_col: str = 'date',
    id_cols: Iterable[str] = DEFAULT_ID_COLUMNS
) -> pd.Series:
    """Daily mean of a weather variable averaged across stations."""
    df = read_table(path)
    id_cols = [col for col in id_cols if col in df.columns]
    daily = aggregate_daily(df, date_col=date_col, id_cols=id_cols, name=name)
    logger.info(f"Daily {name}: {len(daily)} days")
    return daily


def load_daily_observations(
    load_path: Optional[PathLike] = None,
    humidity_path: Optional[PathLike] = None,
    temperature_path: Optional[PathLike] = None,
    data_dir: PathLike = DEFAULT_DATA_DIR
) -> pd.DataFrame:
    """
    Load the three sources and inner-join them on date.

    Only dates present in all three sources are kept. This frame is for
    exploration; the modeled load series comes from load_daily_load alone.

    Args:
        load_path: Load table (default: data_dir / load.xlsx)
        humidity_path: Humidity table (default: data_dir / humidity.xlsx)
        temperature_path: Temperature table (default: data_dir / temperature.xlsx)
        data_dir: Directory holding the default files

    Returns:
        DataFrame with columns load, humidity, temperature
    """
    data_dir = Path(data_dir)
    load = load_daily_load(load_path or data_dir / LOAD_FILE)
    humidity = load_daily_weather(humidity_path or data_dir / HUMIDITY_FILE, 'humidity')
    temperature = load_daily_weather(temperature_path or data_dir / TEMPERATURE_FILE, 'temperature')

    observations = pd.concat([load, humidity, temperature], axis=1, join='inner')

    logger.info(f"Joined observations: {len(observations)} days")
    if not observations.empty:
        logger.info(f"Date range: {observations.index.min().date()} to {observations.index.max().date()}")

    return observations
