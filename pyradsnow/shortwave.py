"""
Clear-sky shortwave radiation.

Direct, diffuse and top-of-atmosphere irradiance at a point following
Corripio (2002, 2003): parametric transmittances for Rayleigh
scattering, ozone, mixed gases, water vapour and aerosols, then
multiple reflections between ground and atmosphere.

Values that fall outside the plausible range (0, 3000] W/m² are
returned as NaN rather than clipped.

References:
- Corripio (2002) PhD thesis, University of Edinburgh
- Corripio (2003) Int. J. Geographical Information Science,
  doi:10.1080/13658810210157796
- Iqbal (1983) An Introduction to Solar Radiation
- Prata (1996) Q. J. R. Meteorol. Soc., doi:10.1002/qj.49712253306
"""

from dataclasses import dataclass

import numpy as np

from .constants import (ATM, SOLAR_CONSTANT, SW_PLAUSIBLE_MAX, OMEGA_0,
                        FORWARD_SCATTER, BETA_S_MAX_ELEVATION, T_OFFSET_SW)
from .exceptions import ConfigurationError
from .solar import solar_geometry


@dataclass
class ShortwaveFluxes:
    """Clear-sky shortwave outputs for a timestep [W/m²]."""
    direct: float = 0.0
    diffuse: float = 0.0
    toa: float = 0.0


# =============================================================================
# Atmosphere
# =============================================================================

def calc_air_mass(cos_zenith, elevation):
    """
    Relative and pressure-corrected optical air mass.

    Parameters
    ----------
    cos_zenith : float
        Vertical component of the sun vector
    elevation : float
        Elevation above sea level [m]

    Returns
    -------
    mr : float
        Relative optical air mass [-]
    ma : float
        Absolute (pressure-corrected) air mass [-]
    """
    zenith_deg = np.degrees(np.arccos(cos_zenith))
    mr = 1.0 / (cos_zenith + 0.15 * (93.885 - zenith_deg) ** (-1.253))

    pressure = ATM * np.exp(-0.0001184 * elevation)
    ma = mr * pressure / ATM
    return mr, ma


def calc_precipitable_water(t_air, rh):
    """
    Precipitable water [cm] after Prata (1996).

    Parameters
    ----------
    t_air : float
        Air temperature [°C]
    rh : float
        Relative humidity [%]
    """
    t_k = t_air + T_OFFSET_SW
    e_sat = np.exp(26.23 - 5416.0 / t_k)
    return 0.493 * (rh / 100.0) * e_sat / t_k


def calc_aerosol_base(visibility):
    """
    Aerosol transmittance for a unit air mass, 0.97 - 1.265 * vis^-0.66.

    Non-positive below roughly 1.5 km of visibility, where the
    parameterization no longer applies.
    """
    return 0.97 - 1.265 * visibility ** (-0.66)


def calc_transmittances(mr, ma, t_air, rh, ozone, visibility):
    """
    Broadband transmittances of the cloudless atmosphere.

    Parameters
    ----------
    mr, ma : float
        Relative and absolute optical air mass
    t_air : float
        Air temperature [°C]
    rh : float
        Relative humidity [%]
    ozone : float
        Ozone layer thickness [cm]
    visibility : float
        Visibility [km]

    Returns
    -------
    dict with tau_r, tau_o, tau_g, tau_w, tau_a
    """
    tau_r = np.exp((-0.0903 * ma ** 0.84) * (1.0 + ma - ma ** 1.01))

    w = calc_precipitable_water(t_air, rh)
    wm = w * mr
    tau_w = 1.0 - 2.4959 * wm / ((1.0 + 79.034 * wm) ** 0.6828 + 6.385 * wm)

    om = ozone * mr
    tau_o = 1.0 - (0.1611 * om * (1.0 + 139.48 * om) ** (-0.3035)
                   - 0.002715 * om / (1.0 + 0.044 * om + 0.0003 * om ** 2))

    tau_g = np.exp(-0.0127 * ma ** 0.26)

    tau_a = calc_aerosol_base(visibility) ** (ma ** 0.9)

    return {
        'tau_r': tau_r,
        'tau_o': tau_o,
        'tau_g': tau_g,
        'tau_w': tau_w,
        'tau_a': tau_a,
    }


def _plausible(value):
    if value > SW_PLAUSIBLE_MAX or value <= 0:
        return np.nan
    return value


# =============================================================================
# Irradiance
# =============================================================================

def calc_direct_normal(e0, tau, elevation):
    """
    Direct normal irradiance [W/m²] with the elevation correction of
    Corripio (2002).
    """
    beta_s = 2.2e-5 * min(elevation, BETA_S_MAX_ELEVATION)
    transmittance = (tau['tau_r'] * tau['tau_o'] * tau['tau_g']
                     * tau['tau_w'] * tau['tau_a'])
    return 0.9571 * SOLAR_CONSTANT * e0 * (transmittance + beta_s)


def calc_direct(direct_normal, cos_zenith, skyview):
    """Direct irradiance at the surface [W/m²], NaN if implausible."""
    return _plausible(direct_normal * cos_zenith * skyview)


def calc_diffuse(direct_normal, cos_zenith, e0, ma, tau, albedo, skyview):
    """
    Diffuse irradiance at the surface [W/m²], NaN if implausible.

    Sum of Rayleigh-scattered, aerosol-scattered and multiply reflected
    components.

    Parameters
    ----------
    direct_normal : float
        Direct normal irradiance [W/m²]
    cos_zenith : float
        Vertical component of the sun vector
    e0 : float
        Eccentricity correction factor
    ma : float
        Absolute optical air mass
    tau : dict
        Transmittances from calc_transmittances
    albedo : float
        Ground albedo [0-1]
    skyview : float
        Skyview factor [0-1]
    """
    tau_r = tau['tau_r']
    tau_a = tau['tau_a']

    # Transmittance of direct radiation due to aerosol absorptance
    tau_aa = 1.0 - (1.0 - OMEGA_0) * (1.0 - ma + ma ** 1.06) * (1.0 - tau_a)

    tau_rest = tau['tau_o'] * tau['tau_g'] * tau['tau_w'] * tau_aa
    top = 0.79 * e0 * SOLAR_CONSTANT * cos_zenith
    mass_term = 1.0 - ma + ma ** 1.02

    i_dr = top * (1.0 - tau_r) * tau_rest * 0.5 / mass_term
    i_da = top * tau_rest * FORWARD_SCATTER * (1.0 - tau_a / tau_aa) / mass_term

    alpha_a = 0.0685 + (1.0 - FORWARD_SCATTER) * (1.0 - tau_a / tau_aa)
    i_dm = ((direct_normal * cos_zenith + i_dr + i_da) * alpha_a * albedo
            / (1.0 - albedo * alpha_a))

    return _plausible((i_dr + i_da + i_dm) * skyview)


def calc_top_of_atmosphere(e0, cos_zenith):
    """Irradiance at the top of the atmosphere [W/m²], never negative."""
    return max(e0 * SOLAR_CONSTANT * cos_zenith, 0.0)


def calc_clear_sky_shortwave(date, latitude, elevation, skyview, t_air, rh,
                             ozone=0.5, visibility=80.0, albedo=0.9):
    """
    Clear-sky shortwave at a point.

    Parameters
    ----------
    date : datetime or str
        Instant, UTC
    latitude : float
        Latitude [rad]
    elevation : float
        Elevation [m]
    skyview : float
        Skyview factor [0-1]
    t_air : float
        Air temperature [°C]
    rh : float
        Relative humidity [%]
    ozone : float
        Ozone layer thickness [cm]
    visibility : float
        Visibility [km]
    albedo : float
        Ground albedo [0-1]

    Returns
    -------
    ShortwaveFluxes
        All zero outside daylight hours.
    """
    geom = solar_geometry(date, latitude)
    if not geom.is_daylight:
        return ShortwaveFluxes()

    cos_zenith = geom.sun_vector[2]
    mr, ma = calc_air_mass(cos_zenith, elevation)
    tau = calc_transmittances(mr, ma, t_air, rh, ozone, visibility)

    direct_normal = calc_direct_normal(geom.e0, tau, elevation)

    return ShortwaveFluxes(
        direct=calc_direct(direct_normal, cos_zenith, skyview),
        diffuse=calc_diffuse(direct_normal, cos_zenith, geom.e0, ma, tau,
                             albedo, skyview),
        toa=calc_top_of_atmosphere(geom.e0, cos_zenith),
    )


class ShortwaveRadiation:
    """
    Clear-sky shortwave component for one location.

    Examples
    --------
    >>> sw = ShortwaveRadiation(latitude=np.radians(46.0), elevation=1500.0)
    >>> fluxes = sw.step('2015-06-21 12:00', t_air=15.0, rh=60.0)
    """

    def __init__(self, latitude, elevation, skyview=1.0, ozone=0.5,
                 visibility=80.0, albedo=0.9):
        if not 0.0 <= skyview <= 1.0:
            raise ConfigurationError(f"Skyview factor must be in [0, 1]: {skyview}")
        if not 0.0 <= albedo <= 1.0:
            raise ConfigurationError(f"Ground albedo must be in [0, 1]: {albedo}")
        if ozone < 0:
            raise ConfigurationError(f"Ozone thickness must be non-negative: {ozone}")
        if visibility <= 0:
            raise ConfigurationError(f"Visibility must be positive: {visibility}")
        if calc_aerosol_base(visibility) <= 0:
            raise ConfigurationError(
                f"Visibility too low for the aerosol transmittance: {visibility} km")

        self.latitude = latitude
        self.elevation = elevation
        self.skyview = skyview
        self.ozone = ozone
        self.visibility = visibility
        self.albedo = albedo

    def step(self, date, t_air, rh):
        return calc_clear_sky_shortwave(
            date, self.latitude, self.elevation, self.skyview, t_air, rh,
            ozone=self.ozone, visibility=self.visibility, albedo=self.albedo
        )
