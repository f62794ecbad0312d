"""
PyRadSnow: point-scale radiation and snow toolkit with switchable models.

Chains clear-sky shortwave, measured-shortwave decomposition, longwave
budget, rain-snow separation and a two-reservoir snowpack for a single
location.

Usage
-----
>>> from pyradsnow import PointModel, PointConfig
>>>
>>> # Configure model
>>> config = PointConfig(
...     latitude=46.5, elevation=1800.0, skyview=0.9,
...     emissivity_model='dilley_obrien',   # 'brunt', 'idso_jackson', 'idso', 'monteith_unsworth'
...     decomposition_model='reindl',       # 'erbs', 'boland'
...     melt_model='hoock',                 # 'classical', 'cazorzi'
... )
>>>
>>> # Create and run model
>>> model = PointModel(config)
>>> outputs = model.run(forcing)   # pandas DataFrame indexed by UTC timestamps

Available Methods
-----------------
Clear-sky emissivity (numeric code in brackets):
    - 'brunt' [1]: Brunt (1932)
    - 'idso_jackson' [2]: Idso and Jackson (1969)
    - 'idso' [3]: Idso (1981)
    - 'monteith_unsworth' [4]: Monteith and Unsworth (1990)
    - 'dilley_obrien' [5]: Dilley and O'Brien (1998)

Shortwave decomposition:
    - 'erbs': Erbs et al. (1982)
    - 'reindl': Reindl et al. (1990)
    - 'boland': Boland et al. (2008)

Melt:
    - 'classical': Temperature index
    - 'cazorzi': Temperature index with energy index
    - 'hoock': Temperature index with shortwave term

Missing inputs are NaN and give NaN outputs; use is_missing() to test.
"""

from .model import PointModel, PointConfig, PointFluxes, is_missing
from .snowpack import SnowState, SnowParams, SnowFluxes
from .exceptions import ConfigurationError, ModelNotSupportedError

__version__ = '0.1.0'
__all__ = ['PointModel', 'PointConfig', 'PointFluxes', 'SnowState', 'SnowParams',
           'SnowFluxes', 'ConfigurationError', 'ModelNotSupportedError',
           'is_missing']
