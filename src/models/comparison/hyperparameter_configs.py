"""
Model Configurations for the Load Forecast Comparison
=====================================================
Fixed parameter combinations for every model in the bank. Each entry is
a plain dict carrying the model type, its knobs and a description; the
entry name doubles as the run name and the submission file suffix.

Models:
- stl_ets: MSTL decomposition + automatic ETS
- fourier_arima: AutoARIMA with K Fourier pairs per period (log scale)
- tbats: automatic TBATS
- nnar: neural network autoregression (seasonal lags or Fourier inputs)
- snaive: seasonal naive (yearly / weekly)
- sarima: explicit seasonal ARIMA with drift (cached)

Author: LoadCast Team
Date: January 2011
"""

from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

TEST_HORIZON = 365
SUBMISSION_HORIZON = 31

# Harmonic pairs (weekly, yearly) tried for the Fourier ARIMA sweep
FOURIER_HARMONICS = [(2, 2), (2, 4), (2, 6), (2, 12)]


class ModelConfigs:
    """
    Pre-defined configurations for the comparison sweep.
    """

    @staticmethod
    def get_stl_ets_configs() -> Dict[str, Dict[str, Any]]:
        return {
            'stl_ets': {
                'model_type': 'stl_ets',
                'ets_model': 'ZZN',
                'description': 'MSTL (7, 365) + AutoETS on the seasonally adjusted series'
            }
        }

    @staticmethod
    def get_fourier_arima_configs() -> Dict[str, Dict[str, Any]]:
        """
        ARIMA + Fourier configurations, one per harmonic pair.

        Returns:
            Dictionary with one configuration per entry of FOURIER_HARMONICS
        """
        return {
            f'fourier_arima_k{weekly}_{yearly}': {
                'model_type': 'fourier_arima',
                'harmonics': (weekly, yearly),
                'log_transform': True,
                'ic': 'aicc',
                'description': f'AutoARIMA on log load, K=({weekly}, {yearly}) Fourier pairs'
            }
            for weekly, yearly in FOURIER_HARMONICS
        }

    @staticmethod
    def get_tbats_configs() -> Dict[str, Dict[str, Any]]:
        return {
            'tbats': {
                'model_type': 'tbats',
                'use_arma_errors': True,
                'description': 'Automatic TBATS (Box-Cox, trend, ARMA errors chosen by AIC)'
            }
        }

    @staticmethod
    def get_nnar_configs() -> Dict[str, Dict[str, Any]]:
        """
        Neural network autoregression configurations.

        nnar_lags uses seasonal lags; nnar_fourier replaces them with
        Fourier regressors.
        """
        return {
            'nnar_lags': {
                'model_type': 'nnar',
                'p': 7,
                'P': 2,
                'season_length': 7,
                'repeats': 20,
                'random_state': 42,
                'description': 'NNAR(7, 2)[7]: lags 1-7 and 14'
            },
            'nnar_fourier': {
                'model_type': 'nnar',
                'p': 7,
                'P': 0,
                'fourier_harmonics': (2, 4),
                'repeats': 20,
                'random_state': 42,
                'description': 'NNAR(7) with K=(2, 4) Fourier inputs'
            }
        }

    @staticmethod
    def get_snaive_configs() -> Dict[str, Dict[str, Any]]:
        return {
            'snaive_yearly': {
                'model_type': 'snaive',
                'season_length': 365,
                'description': 'Same day one year earlier'
            },
            'snaive_weekly': {
                'model_type': 'snaive',
                'season_length': 7,
                'description': 'Same weekday one week earlier'
            }
        }

    @staticmethod
    def get_sarima_configs() -> Dict[str, Dict[str, Any]]:
        return {
            'sarima': {
                'model_type': 'sarima',
                'order': (2, 0, 1),
                'seasonal_order': (0, 1, 1, 7),
                'drift': True,
                'cache': True,
                'description': 'SARIMA(2,0,1)(0,1,1)[7] with drift (cached fit)'
            }
        }

    @staticmethod
    def get_all_configs() -> Dict[str, Dict[str, Any]]:
        """Every configuration, keyed by run name."""
        configs: Dict[str, Dict[str, Any]] = {}
        configs.update(ModelConfigs.get_stl_ets_configs())
        configs.update(ModelConfigs.get_fourier_arima_configs())
        configs.update(ModelConfigs.get_tbats_configs())
        configs.update(ModelConfigs.get_nnar_configs())
        configs.update(ModelConfigs.get_snaive_configs())
        configs.update(ModelConfigs.get_sarima_configs())
        return configs

    @staticmethod
    def get_submission_configs() -> Dict[str, Dict[str, Any]]:
        """Models refit on the full series for the competition submission."""
        all_configs = ModelConfigs.get_all_configs()
        selected = [
            'stl_ets',
            'fourier_arima_k2_4',
            'fourier_arima_k2_12',
            'tbats',
            'nnar_fourier',
            'sarima',
        ]
        return {name: all_configs[name] for name in selected}


def select_configs(
    model_types: Optional[List[str]] = None,
    configs: Optional[Dict[str, Dict[str, Any]]] = None
) -> Dict[str, Dict[str, Any]]:
    """
    Filter configurations by model type or run name.

    Args:
        model_types: Model types or run names to keep (default: all)
        configs: Configurations to filter (default: get_all_configs())

    Returns:
        Filtered configurations, preserving order
    """
    configs = configs if configs is not None else ModelConfigs.get_all_configs()
    if not model_types:
        return dict(configs)

    wanted = {m.lower() for m in model_types}
    selected = {
        name: cfg for name, cfg in configs.items()
        if name in wanted or cfg['model_type'] in wanted
    }
    unknown = wanted - set(selected) - {cfg['model_type'] for cfg in selected.values()}
    if unknown:
        raise ValueError(f"Unknown models: {sorted(unknown)}")

    logger.info(f"Selected {len(selected)} of {len(configs)} configurations")
    return selected
