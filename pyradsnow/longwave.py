"""
Longwave radiation budget.

Upwelling longwave from the soil surface and all-sky downwelling
longwave from a clear-sky emissivity model, a skyview correction for
sloping terrain and a cloud correction driven by the clearness index.

Clear-sky emissivity models (selectable by name or by numeric code):
- 'brunt' (1): Brunt (1932)
- 'idso_jackson' (2): Idso and Jackson (1969)
- 'idso' (3): Idso (1981)
- 'monteith_unsworth' (4): Monteith and Unsworth (1990)
- 'dilley_obrien' (5): Dilley and O'Brien (1998)

Code 6 is reserved and raises ModelNotSupportedError.

References:
- Formetta et al. (2016) Geosci. Model Dev., doi:10.5194/gmd-9-2835-2016
- Dilley and O'Brien (1998) Q. J. R. Meteorol. Soc.,
  doi:10.1002/qj.49712454706
"""

from dataclasses import dataclass

import numpy as np

from .constants import STEFAN_BOLTZMANN, TFRZ, DEFAULT_RH
from .exceptions import ConfigurationError, ModelNotSupportedError

METHOD_CODES = {
    '1': 'brunt',
    '2': 'idso_jackson',
    '3': 'idso',
    '4': 'monteith_unsworth',
    '5': 'dilley_obrien',
    '6': 'not_implemented',
}

# Literature coefficients, e in kPa
DEFAULT_COEFFICIENTS = {
    'brunt': {'X': 0.52, 'Y': 0.065, 'Z': 0.0},
    'idso_jackson': {'X': 0.261, 'Y': 7.77e-4, 'Z': 0.0},
    'idso': {'X': 0.70, 'Y': 5.95e-5, 'Z': 0.0},
    'monteith_unsworth': {'X': -119.0, 'Y': 1.06, 'Z': 0.0},
    'dilley_obrien': {'X': 59.38, 'Y': 113.7, 'Z': 96.96},
}


@dataclass
class LongwaveFluxes:
    """Longwave outputs for a timestep [W/m²]."""
    upwelling: float = np.nan
    downwelling: float = np.nan


def resolve_method(method):
    """
    Canonical name of a clear-sky emissivity model.

    Parameters
    ----------
    method : str or int
        Model name or numeric code

    Raises
    ------
    ModelNotSupportedError
        For the reserved slot
    ConfigurationError
        For any other unknown selector
    """
    name = str(method).strip().lower()
    name = METHOD_CODES.get(name, name)

    if name == 'not_implemented':
        raise ModelNotSupportedError(
            f"Clear-sky emissivity model {method!r} is not supported")
    if name not in DEFAULT_COEFFICIENTS:
        raise ConfigurationError(f"Unknown clear-sky emissivity model: {method}")
    return name


def calc_vapour_pressure(t_air, rh):
    """
    Screen-level water vapour pressure [kPa].

    Parameters
    ----------
    t_air : float
        Air temperature [°C]
    rh : float
        Relative humidity [%]
    """
    return (rh / 100.0) * 6.11 * 10 ** (7.5 * t_air / (237.3 + t_air)) / 10.0


def calc_clear_sky_emissivity(t_air_k, e, method='brunt', X=None, Y=None, Z=None):
    """
    Clear-sky atmospheric emissivity.

    Parameters
    ----------
    t_air_k : float
        Air temperature [K]
    e : float
        Water vapour pressure [kPa]
    method : str
        Emissivity model name or code
    X, Y, Z : float, optional
        Model coefficients, literature values when omitted

    Returns
    -------
    float
        Clear-sky emissivity [-]
    """
    name = resolve_method(method)
    coeffs = DEFAULT_COEFFICIENTS[name]
    X = coeffs['X'] if X is None else X
    Y = coeffs['Y'] if Y is None else Y
    Z = coeffs['Z'] if Z is None else Z

    if name == 'brunt':
        return _brunt(e, X, Y)
    elif name == 'idso_jackson':
        return _idso_jackson(t_air_k, X, Y)
    elif name == 'idso':
        return _idso(t_air_k, e, X, Y)
    elif name == 'monteith_unsworth':
        return _monteith_unsworth(t_air_k, X, Y)
    else:
        return _dilley_obrien(t_air_k, e, X, Y, Z)


def _brunt(e, X, Y):
    """
    Brunt (1932): X + Y * sqrt(e).

    Parameters
    ----------
    e : float
        Vapour pressure [kPa]
    X, Y : float
        Model coefficients
    """
    return X + Y * np.sqrt(e)


def _idso_jackson(t_air_k, X, Y):
    """
    Idso and Jackson (1969): 1 - X * exp(-Y * (273 - T)^2).

    Parameters
    ----------
    t_air_k : float
        Air temperature [K]
    X, Y : float
        Model coefficients
    """
    return 1.0 - X * np.exp(-Y * (273.0 - t_air_k) ** 2)


def _idso(t_air_k, e, X, Y):
    """
    Idso (1981): X + Y * e * exp(1500 / T).

    Parameters
    ----------
    t_air_k : float
        Air temperature [K]
    e : float
        Vapour pressure [kPa]
    X, Y : float
        Model coefficients
    """
    return X + Y * e * np.exp(1500.0 / t_air_k)


def _monteith_unsworth(t_air_k, X, Y):
    """Clear-sky downwelling X + Y·σT⁴ expressed as an emissivity."""
    blackbody = STEFAN_BOLTZMANN * t_air_k ** 4
    return (X + Y * blackbody) / blackbody


def _dilley_obrien(t_air_k, e, X, Y, Z):
    """Clear-sky downwelling of Dilley and O'Brien expressed as an emissivity."""
    # Precipitable water [kg/m²]
    w = 4650.0 * e / t_air_k
    downwelling = X + Y * (t_air_k / 273.16) ** 6 + Z * np.sqrt(w / 25.0)
    return downwelling / (STEFAN_BOLTZMANN * t_air_k ** 4)


def calc_upwelling(t_soil, emissivity):
    """
    Upwelling longwave from the surface [W/m²].

    Parameters
    ----------
    t_soil : float
        Soil surface temperature [°C]
    emissivity : float
        Soil emissivity [0-1]
    """
    return emissivity * STEFAN_BOLTZMANN * (t_soil + TFRZ) ** 4


def calc_downwelling(t_air, rh, kt, upwelling, skyview=1.0, method='brunt',
                     X=None, Y=None, Z=None, cloud_a=0.0, cloud_b=1.0):
    """
    All-sky downwelling longwave [W/m²].

    Parameters
    ----------
    t_air : float
        Air temperature [°C]
    rh : float
        Relative humidity [%], 70 % when missing
    kt : float
        Clearness index, 1 when missing
    upwelling : float
        Upwelling longwave [W/m²], emitted by the surrounding slopes
    skyview : float
        Skyview factor [0-1]
    method : str
        Clear-sky emissivity model
    X, Y, Z : float, optional
        Emissivity model coefficients
    cloud_a, cloud_b : float
        Cloud correction coefficient and exponent; 0 and 1 for clear sky

    Returns
    -------
    float
        NaN when the air temperature is missing
    """
    if np.isnan(t_air):
        return np.nan
    if np.isnan(rh):
        rh = DEFAULT_RH
    if np.isnan(kt):
        kt = 1.0

    t_air_k = t_air + TFRZ
    e = calc_vapour_pressure(t_air, rh)
    eps_cs = calc_clear_sky_emissivity(t_air_k, e, method, X, Y, Z)

    dw_cs = eps_cs * STEFAN_BOLTZMANN * t_air_k ** 4

    # Sloping terrain sees the surrounding surface instead of the sky
    dw_cs = dw_cs * skyview + upwelling * (1.0 - skyview)

    cloud_factor = 1.0 + cloud_a * kt ** cloud_b
    return dw_cs * cloud_factor


class LongwaveRadiation:
    """
    Longwave component with fixed surface and model parameters.

    Examples
    --------
    >>> lw = LongwaveRadiation(method='dilley_obrien', soil_emissivity=0.98)
    >>> fluxes = lw.step(t_air=5.0, rh=80.0, t_soil=2.0, kt=0.6)
    """

    def __init__(self, method='brunt', X=None, Y=None, Z=None,
                 soil_emissivity=0.98, skyview=1.0, cloud_a=0.0, cloud_b=1.0):
        self.method = resolve_method(method)

        if not 0.0 <= soil_emissivity <= 1.0:
            raise ConfigurationError(
                f"Soil emissivity must be in [0, 1]: {soil_emissivity}")
        if not 0.0 <= skyview <= 1.0:
            raise ConfigurationError(f"Skyview factor must be in [0, 1]: {skyview}")

        coeffs = DEFAULT_COEFFICIENTS[self.method]
        self.X = coeffs['X'] if X is None else X
        self.Y = coeffs['Y'] if Y is None else Y
        self.Z = coeffs['Z'] if Z is None else Z
        self.soil_emissivity = soil_emissivity
        self.skyview = skyview
        self.cloud_a = cloud_a
        self.cloud_b = cloud_b

    def step(self, t_air, rh, t_soil, kt):
        upwelling = (np.nan if np.isnan(t_soil)
                     else calc_upwelling(t_soil, self.soil_emissivity))

        downwelling = calc_downwelling(
            t_air, rh, kt, upwelling, skyview=self.skyview, method=self.method,
            X=self.X, Y=self.Y, Z=self.Z,
            cloud_a=self.cloud_a, cloud_b=self.cloud_b
        )
        return LongwaveFluxes(upwelling=upwelling, downwelling=downwelling)
