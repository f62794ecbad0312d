"""
Decomposition of measured global shortwave into direct and diffuse
parts, and all-sky shortwave at the surface.

Available methods:
- 'erbs': Piecewise polynomial (Erbs et al. 1982)
- 'reindl': Piecewise linear, clearness-index only (Reindl et al. 1990)
- 'boland': Logistic function (Boland et al. 2008)

References:
- Erbs et al. (1982) Solar Energy, doi:10.1016/0038-092X(82)90302-4
- Reindl et al. (1990) Solar Energy, doi:10.1016/0038-092X(90)90060-P
- Boland et al. (2008) Environmetrics, doi:10.1002/env.893
- Helbig et al. (2010) Remote Sensing of Environment,
  doi:10.1016/j.rse.2010.03.010
"""

from dataclasses import dataclass

import numpy as np

from .exceptions import ConfigurationError

METHODS = ('erbs', 'reindl', 'boland')


@dataclass
class DecompositionResult:
    kd: float = np.nan            # Diffuse-sky fraction [-]
    sw_all_sky: float = np.nan    # All-sky shortwave [W/m²]


def calc_diffuse_fraction(kt, method='erbs'):
    """
    Diffuse-sky fraction from the clearness index.

    Parameters
    ----------
    kt : float
        Clearness index [0-1]
    method : str
        Decomposition model

    Returns
    -------
    kd : float
        Diffuse-sky fraction, at most 1. NaN when kt is missing.
    """
    method = method.lower()
    if method == 'erbs':
        fn = _erbs
    elif method == 'reindl':
        fn = _reindl
    elif method == 'boland':
        fn = _boland
    else:
        raise ConfigurationError(f"Unknown decomposition method: {method}")

    if np.isnan(kt):
        return np.nan

    return min(fn(kt), 1.0)


def _erbs(kt):
    """
    Erbs et al. (1982) piecewise polynomial.
    Linear below kt = 0.22, quartic up to 0.8, constant 0.165 above.

    Parameters
    ----------
    kt : float
        Clearness index [0-1]
    """
    if kt <= 0.22:
        return 1.0 - 0.09 * kt
    elif kt <= 0.80:
        return (0.9511 - 0.1604 * kt + 4.388 * kt ** 2
                - 16.638 * kt ** 3 + 12.336 * kt ** 4)
    else:
        return 0.165


def _reindl(kt):
    """
    Reindl et al. (1990), clearness-index-only form.
    Piecewise linear with breaks at kt = 0.3 and 0.78.

    Parameters
    ----------
    kt : float
        Clearness index [0-1]
    """
    if kt <= 0.3:
        return 1.020 - 0.248 * kt
    elif kt < 0.78:
        return 1.45 - 1.67 * kt
    else:
        return 0.147


def _boland(kt):
    """
    Boland et al. (2008) logistic: 1 / (1 + exp(-5 + 8.6 kt)).

    Parameters
    ----------
    kt : float
        Clearness index [0-1]
    """
    return 1.0 / (1.0 + np.exp(-5.0 + 8.6 * kt))


def calc_all_sky_shortwave(kd, sw_measured, direct, diffuse, swap=True):
    """
    Rescale clear-sky direct and diffuse to the measured global shortwave.

    Parameters
    ----------
    kd : float
        Diffuse-sky fraction
    sw_measured : float
        Measured global shortwave [W/m²]
    direct, diffuse : float
        Clear-sky direct and diffuse shortwave [W/m²]
    swap : bool
        If True the diffuse correction multiplies the direct part and
        vice versa, reproducing the outputs of the established model.
        If False, cs * direct + cd * diffuse equals the measured value.

    Returns
    -------
    float
        All-sky shortwave [W/m²]
    """
    # Direct correction
    cs = (1.0 - kd) * sw_measured / direct if direct > 0 else 0.0
    # Diffuse correction
    cd = kd * sw_measured / diffuse if diffuse > 0 else 0.0

    if swap:
        return cd * direct + cs * diffuse
    return cs * direct + cd * diffuse


class Decomposition:
    """Decomposition component with a fixed model choice."""

    def __init__(self, method='erbs', swap=True):
        if method.lower() not in METHODS:
            raise ConfigurationError(f"Unknown decomposition method: {method}")
        self.method = method.lower()
        self.swap = swap

    def step(self, kt, sw_measured, direct, diffuse):
        kd = calc_diffuse_fraction(kt, self.method)
        return DecompositionResult(
            kd=kd,
            sw_all_sky=calc_all_sky_shortwave(kd, sw_measured, direct, diffuse,
                                              swap=self.swap),
        )
