"""
Series Features for LoadCast
============================
Series construction and exogenous regressors.

Modules:
--------
- series_builder: SeasonalSeries wrapper (weekly + yearly periods)
- fourier_features: Fourier sin/cos regressors for seasonal periods

Author: LoadCast Team
Date: January 2011
"""

__version__ = "1.0.0"
