"""
Clearness index: ratio of measured global shortwave to the shortwave
at the top of the atmosphere.
"""

import numpy as np


def calc_clearness_index(sw_measured, sw_toa):
    """
    Calculate the clearness index.

    Parameters
    ----------
    sw_measured : float
        Measured global shortwave at the surface [W/m²]
    sw_toa : float
        Shortwave at the top of the atmosphere [W/m²]

    Returns
    -------
    kt : float
        Clearness index [0-1], NaN when the top-of-atmosphere value is
        zero or either input is missing
    """
    if sw_toa == 0 or np.isnan(sw_toa) or np.isnan(sw_measured):
        return np.nan

    return float(np.clip(sw_measured / sw_toa, 0.0, 1.0))
