"""
Two-reservoir snowpack.

Solid and liquid water contents are advanced with explicit mass
balances: snowfall and refreezing feed the solid reservoir, rainfall
and melt feed the liquid reservoir, and liquid water above the holding
capacity of the pack leaves as melt discharge.

Melt models:
- 'classical': Temperature index
- 'cazorzi': Temperature index with an energy index (Cazorzi and Dalla Fontana 1996)
- 'hoock': Temperature index with a shortwave term (Hock 1999)

References:
- Cazorzi and Dalla Fontana (1996) Annals of Glaciology,
  doi:10.3189/S0260305500013367
- Hock (1999) Journal of Glaciology, doi:10.3189/S0022143000003087
- Formetta et al. (2014) Geosci. Model Dev., doi:10.5194/gmd-7-725-2014
"""

from dataclasses import dataclass

import numpy as np

from .constants import DT_SNOW
from .exceptions import ConfigurationError

METHODS = ('classical', 'cazorzi', 'hoock')


@dataclass
class SnowState:
    """Snowpack reservoirs carried between timesteps."""
    solid: float = 0.0    # Solid water content [mm]
    liquid: float = 0.0   # Liquid water content [mm]

    @property
    def swe(self):
        return self.solid + self.liquid


@dataclass
class SnowParams:
    """Parameters of the snowpack and melt model."""
    melt_model: str = 'classical'
    t_melt: float = 0.0                     # Melting temperature [°C]
    combined_melting_factor: float = 2.0    # [mm/(°C·step)]
    radiation_factor: float = 0.005         # [mm/(°C·step)] per unit EI, or per W/m² (hoock)
    freezing_factor: float = 0.5            # [mm/(°C·step)]
    alpha_l: float = 0.1                    # Liquid holding capacity [-]

    def __post_init__(self):
        self.melt_model = self.melt_model.lower()
        if self.melt_model not in METHODS:
            raise ConfigurationError(f"Unknown melt model: {self.melt_model}")
        if not 0.0 <= self.alpha_l <= 1.0:
            raise ConfigurationError(f"alpha_l must be in [0, 1]: {self.alpha_l}")
        for name in ('combined_melting_factor', 'radiation_factor', 'freezing_factor'):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative")


@dataclass
class SnowFluxes:
    """Snowpack outputs for a timestep [mm]."""
    freezing: float = np.nan
    melt: float = np.nan
    melt_discharge: float = np.nan
    swe: float = np.nan


def calc_freezing(t_air, t_melt, freezing_factor):
    """Refreezing rate [mm/step], zero at or above the melting temperature."""
    if t_air < t_melt:
        return freezing_factor * (t_melt - t_air)
    return 0.0


def calc_melt_rate(t_air, method='classical', t_melt=0.0, combined_melting_factor=2.0,
                   radiation_factor=0.0, skyview=1.0, sw=0.0, energy_index=1.0):
    """
    Potential melt rate [mm/step].

    Parameters
    ----------
    t_air : float
        Air temperature [°C]
    method : str
        Melt model
    t_melt : float
        Melting temperature [°C]
    combined_melting_factor : float
        Temperature-index factor
    radiation_factor : float
        Weight of the radiative term
    skyview : float
        Skyview factor [0-1] ('hoock')
    sw : float
        Shortwave at the surface [W/m²] ('hoock')
    energy_index : float
        Topographic energy index of the cell ('cazorzi')

    Returns
    -------
    float
        Zero at or below the melting temperature
    """
    if method == 'classical':
        melt = _classical(t_air, t_melt, combined_melting_factor)
    elif method == 'cazorzi':
        melt = _cazorzi(t_air, t_melt, combined_melting_factor, radiation_factor,
                        energy_index)
    elif method == 'hoock':
        melt = _hoock(t_air, t_melt, combined_melting_factor, radiation_factor,
                      skyview, sw)
    else:
        raise ConfigurationError(f"Unknown melt model: {method}")

    if t_air > t_melt:
        return melt
    return 0.0


def _classical(t_air, t_melt, cmf):
    """
    Temperature index: cmf * (T - T_melt).

    Parameters
    ----------
    t_air : float
        Air temperature [°C]
    t_melt : float
        Melting temperature [°C]
    cmf : float
        Combined melting factor
    """
    return cmf * (t_air - t_melt)


def _cazorzi(t_air, t_melt, cmf, rf, energy_index):
    """
    Cazorzi and Dalla Fontana (1996): (cmf + rf * EI) * (T - T_melt).

    Parameters
    ----------
    t_air : float
        Air temperature [°C]
    t_melt : float
        Melting temperature [°C]
    cmf, rf : float
        Combined melting and radiation factors
    energy_index : float
        Topographic energy index of the cell
    """
    return (cmf + rf * energy_index) * (t_air - t_melt)


def _hoock(t_air, t_melt, cmf, rf, skyview, sw):
    """
    Hock (1999): cmf * (T - T_melt) + rf * skyview * SW above T_melt.

    Parameters
    ----------
    t_air : float
        Air temperature [°C]
    t_melt : float
        Melting temperature [°C]
    cmf, rf : float
        Combined melting and radiation factors
    skyview : float
        Skyview factor [0-1]
    sw : float
        Shortwave at the surface [W/m²]
    """
    above = 1.0 if t_air > t_melt else 0.0
    return cmf * (t_air - t_melt) + rf * skyview * sw * above


def step_snowpack(state, rainfall, snowfall, t_air, params, sw=0.0, skyview=1.0,
                  energy_index=1.0, dt=DT_SNOW):
    """
    Advance the snowpack by one timestep.

    The state is updated in place. When a required input is missing the
    state is left unchanged and all outputs are NaN.

    Parameters
    ----------
    state : SnowState
        Reservoirs at the end of the previous step
    rainfall, snowfall : float
        [mm]
    t_air : float
        Air temperature [°C]
    params : SnowParams
    sw : float
        Shortwave at the surface [W/m²]
    skyview : float
        Skyview factor [0-1]
    energy_index : float
        Energy index of the cell
    dt : float
        Integration step

    Returns
    -------
    SnowFluxes
    """
    freezing = calc_freezing(t_air, params.t_melt, params.freezing_factor)

    melt = calc_melt_rate(
        t_air, method=params.melt_model, t_melt=params.t_melt,
        combined_melting_factor=params.combined_melting_factor,
        radiation_factor=params.radiation_factor,
        skyview=skyview, sw=sw, energy_index=energy_index
    )
    # Cannot melt more snow than present
    melt = min(melt, state.solid)

    if np.isnan([t_air, rainfall, snowfall, melt]).any():
        return SnowFluxes()

    solid = state.solid + dt * (snowfall + freezing - melt)
    if solid < 0:
        solid = 0.0
        melt = 0.0

    liquid = max(state.liquid + dt * (rainfall - freezing + melt), 0.0)

    # Liquid water above the holding capacity drains
    max_liquid = params.alpha_l * solid
    discharge = 0.0
    if liquid > max_liquid:
        discharge = liquid - max_liquid
        liquid = max_liquid

    state.solid = solid
    state.liquid = liquid

    return SnowFluxes(
        freezing=freezing,
        melt=melt,
        melt_discharge=discharge,
        swe=state.swe,
    )


class Snowpack:
    """
    Stateful snowpack component.

    Examples
    --------
    >>> pack = Snowpack(SnowParams(melt_model='hoock'), initial=SnowState(solid=50.0))
    >>> fluxes = pack.step(rainfall=0.0, snowfall=2.0, t_air=-3.0, sw=150.0)
    >>> pack.state.swe
    """

    def __init__(self, params=None, initial=None, skyview=1.0):
        self.params = params if params else SnowParams()
        initial = initial if initial else SnowState()

        if initial.solid < 0 or initial.liquid < 0:
            raise ConfigurationError("Initial snow reservoirs must be non-negative")
        if not 0.0 <= skyview <= 1.0:
            raise ConfigurationError(f"Skyview factor must be in [0, 1]: {skyview}")

        self.initial = SnowState(initial.solid, initial.liquid)
        self.skyview = skyview
        self.state = SnowState(initial.solid, initial.liquid)

    def reset(self):
        """Restore the initial reservoirs."""
        self.state = SnowState(self.initial.solid, self.initial.liquid)

    def step(self, rainfall, snowfall, t_air, sw=0.0, energy_index=1.0):
        return step_snowpack(
            self.state, rainfall, snowfall, t_air, self.params,
            sw=sw, skyview=self.skyview, energy_index=energy_index
        )
