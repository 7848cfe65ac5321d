"""
Fitted Model Cache for LoadCast
===============================
Content-addressed store for expensive fitted models (joblib).

Cache key = sha256 of:
- model type
- canonical JSON of the model configuration
- training-data fingerprint (dates + values + seasonal periods)
- cache format version

Any change to the configuration or to the training data produces a new
key, so an artifact is only ever reused for the exact inputs it was fitted
on. Old artifacts can be removed with invalidate() or clear().

Author: LoadCast Team
Date: January 2011
"""

import hashlib
import json
import joblib
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union
import logging

from src.features.series_builder import SeasonalSeries

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CACHE_DIR = PROJECT_ROOT / 'models' / 'cache'
CACHE_VERSION = 'v1'

# Keys that label a configuration without changing the fitted model
NON_FIT_KEYS = {'description', 'name', 'cache'}

logger = logging.getLogger(__name__)


def config_fingerprint(config: Dict[str, Any]) -> str:
    """Canonical JSON of the fit-relevant configuration entries."""
    relevant = {k: v for k, v in config.items() if k not in NON_FIT_KEYS}
    return json.dumps(relevant, sort_keys=True, default=str)


def make_cache_key(model_type: str, config: Dict[str, Any], series: SeasonalSeries) -> str:
    """
    Compute the cache key for a (model type, config, training data) triple.

    Returns:
        Key of the form '<model_type>-<24 hex chars>'
    """
    content = {
        'version': CACHE_VERSION,
        'model_type': model_type,
        'config': config_fingerprint(config),
        'data': series.fingerprint(),
    }
    digest = hashlib.sha256(json.dumps(content, sort_keys=True).encode()).hexdigest()[:24]
    return f"{model_type}-{digest}"


class ModelCache:
    """Directory of joblib artifacts keyed by make_cache_key."""

    def __init__(self, cache_dir: Union[str, Path] = DEFAULT_CACHE_DIR):
        self.cache_dir = Path(cache_dir)

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.joblib"

    def contains(self, key: str) -> bool:
        return self.path_for(key).exists()

    def load(self, key: str) -> Any:
        path = self.path_for(key)
        if not path.exists():
            raise FileNotFoundError(f"No cached model for key {key}: {path}")
        obj = joblib.load(path)
        logger.info(f"✓ Loaded cached model: {path.name}")
        return obj

    def save(self, key: str, obj: Any) -> Path:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        joblib.dump(obj, path, compress=3)
        logger.info(f"✓ Cached fitted model: {path.name}")
        return path

    def get_or_fit(
        self,
        model_type: str,
        config: Dict[str, Any],
        series: SeasonalSeries,
        fit_fn: Callable[[], Any]
    ) -> Any:
        """
        Return the cached model for these inputs, fitting and storing it on a miss.

        Args:
            model_type: Model type name
            config: Model configuration
            series: Training series
            fit_fn: Zero-argument callable producing the fitted model

        Returns:
            Fitted model
        """
        key = make_cache_key(model_type, config, series)
        if self.contains(key):
            return self.load(key)

        logger.info(f"Cache miss for {key}, fitting...")
        fitted = fit_fn()
        self.save(key, fitted)
        return fitted

    def invalidate(self, key: str) -> bool:
        """Delete one artifact. Returns True if it existed."""
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            logger.info(f"Invalidated cached model: {path.name}")
            return True
        return False

    def clear(self, model_type: Optional[str] = None) -> int:
        """Delete all artifacts (or those of one model type). Returns the count."""
        if not self.cache_dir.exists():
            return 0
        pattern = f"{model_type}-*.joblib" if model_type else '*.joblib'
        removed = 0
        for path in self.cache_dir.glob(pattern):
            path.unlink()
            removed += 1
        logger.info(f"Cleared {removed} cached models from {self.cache_dir}")
        return removed
