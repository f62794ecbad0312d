"""
PyRadSnow: point-scale radiation and snow pipeline.

Main model driver that chains the radiation and snow components for
one location.
"""

import logging
from dataclasses import dataclass, field, fields, asdict
from typing import Dict, Any, Optional

import numpy as np
import pandas as pd

from .exceptions import ConfigurationError
from .shortwave import ShortwaveRadiation
from .clearness import calc_clearness_index
from .decomposition import Decomposition
from .longwave import LongwaveRadiation
from .rain_snow import RainSnowSeparation
from .snowpack import Snowpack, SnowParams, SnowState
from .solar import to_utc

logger = logging.getLogger(__name__)

FORCING_COLUMNS = ('t_air', 'rh', 't_soil', 'sw_measured', 'precip')

PROGRESS_EVERY = 1000


def is_missing(value):
    """True when a scalar output carries no result."""
    return value is None or bool(np.isnan(value))


@dataclass
class PointConfig:
    """Configuration for one point: location, atmosphere, models, snow."""

    # Location
    latitude: float = 46.0         # [degrees]
    elevation: float = 0.0         # [m]
    skyview: float = 1.0           # [0-1]

    # Atmosphere
    ozone: float = 0.5             # Ozone layer thickness [cm]
    visibility: float = 80.0       # [km]
    ground_albedo: float = 0.9
    soil_emissivity: float = 0.98

    # Longwave
    emissivity_model: str = 'brunt'
    lw_coefficients: Dict[str, float] = field(default_factory=dict)
    cloud_a: float = 0.0
    cloud_b: float = 1.0

    # Shortwave decomposition
    decomposition_model: str = 'erbs'
    swap_decomposition: bool = True

    # Rain-snow separation
    melting_temperature: float = 0.0   # [°C]
    m1: float = 1.0
    alpha_r: float = 1.0
    alpha_s: float = 1.0

    # Snowpack
    melt_model: str = 'classical'
    combined_melting_factor: float = 2.0
    radiation_factor: float = 0.005
    freezing_factor: float = 0.5
    alpha_l: float = 0.1
    energy_index: float = 1.0

    # Initial conditions [mm]
    initial_solid: float = 0.0
    initial_liquid: float = 0.0

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ConfigurationError(f"Latitude out of range: {self.latitude}")
        unknown = set(self.lw_coefficients) - {'X', 'Y', 'Z'}
        if unknown:
            raise ConfigurationError(f"Unknown longwave coefficients: {sorted(unknown)}")
        if self.initial_solid < 0 or self.initial_liquid < 0:
            raise ConfigurationError("Initial snow reservoirs must be non-negative")

    @property
    def latitude_radians(self):
        return np.radians(self.latitude)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'PointConfig':
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PointFluxes:
    """Outputs of the pipeline for a timestep."""
    direct: float = np.nan           # Clear-sky direct shortwave [W/m²]
    diffuse: float = np.nan          # Clear-sky diffuse shortwave [W/m²]
    toa: float = np.nan              # Top-of-atmosphere shortwave [W/m²]
    clearness_index: float = np.nan
    kd: float = np.nan               # Diffuse-sky fraction
    sw_all_sky: float = np.nan       # All-sky shortwave [W/m²]
    lw_up: float = np.nan            # [W/m²]
    lw_down: float = np.nan          # All-sky downwelling [W/m²]
    rainfall: float = np.nan         # [mm]
    snowfall: float = np.nan         # [mm]
    freezing: float = np.nan         # [mm]
    melt: float = np.nan             # [mm]
    solid_water: float = np.nan      # [mm]
    liquid_water: float = np.nan     # [mm]
    swe: float = np.nan              # [mm]
    melt_discharge: float = np.nan   # [mm]


OUTPUT_COLUMNS = tuple(f.name for f in fields(PointFluxes))


class PointModel:
    """
    Radiation and snow pipeline for a single point.

    Examples
    --------
    >>> config = PointConfig(latitude=46.5, elevation=1800.0,
    ...                      emissivity_model='dilley_obrien', melt_model='hoock')
    >>> model = PointModel(config)
    >>> outputs = model.run(forcing)
    """

    def __init__(self, config: Optional[PointConfig] = None):
        """
        Initialize the pipeline.

        Parameters
        ----------
        config : PointConfig, optional
            Model configuration. Uses defaults if not provided.

        Raises
        ------
        ConfigurationError
            On invalid parameters or unknown model selectors
        """
        self.config = config if config else PointConfig()
        cfg = self.config

        self.shortwave = ShortwaveRadiation(
            cfg.latitude_radians, cfg.elevation, skyview=cfg.skyview,
            ozone=cfg.ozone, visibility=cfg.visibility, albedo=cfg.ground_albedo
        )
        self.decomposition = Decomposition(cfg.decomposition_model,
                                           swap=cfg.swap_decomposition)
        self.longwave = LongwaveRadiation(
            method=cfg.emissivity_model,
            soil_emissivity=cfg.soil_emissivity, skyview=cfg.skyview,
            cloud_a=cfg.cloud_a, cloud_b=cfg.cloud_b,
            **cfg.lw_coefficients
        )
        self.rain_snow = RainSnowSeparation(
            t_melt=cfg.melting_temperature, m1=cfg.m1,
            alpha_r=cfg.alpha_r, alpha_s=cfg.alpha_s
        )
        self.snowpack = Snowpack(
            SnowParams(
                melt_model=cfg.melt_model,
                t_melt=cfg.melting_temperature,
                combined_melting_factor=cfg.combined_melting_factor,
                radiation_factor=cfg.radiation_factor,
                freezing_factor=cfg.freezing_factor,
                alpha_l=cfg.alpha_l,
            ),
            initial=SnowState(cfg.initial_solid, cfg.initial_liquid),
            skyview=cfg.skyview,
        )

    @property
    def state(self) -> SnowState:
        return self.snowpack.state

    def reset(self):
        """Reset the snowpack to the configured initial conditions."""
        self.snowpack.reset()

    def step(self, date, forcing: Dict[str, float]) -> PointFluxes:
        """
        Advance the pipeline by one timestep.

        Parameters
        ----------
        date : datetime or str
            Instant, UTC
        forcing : dict
            Meteo sample with keys (any may be absent or NaN):
            - t_air: Air temperature [°C]
            - rh: Relative humidity [%]
            - t_soil: Soil temperature [°C]
            - sw_measured: Measured global shortwave [W/m²]
            - precip: Precipitation [mm]
            - energy_index: Energy index of the cell (defaults to config)

        Returns
        -------
        PointFluxes
        """
        t_air = _get(forcing, 't_air')
        rh = _get(forcing, 'rh')
        t_soil = _get(forcing, 't_soil')
        sw_measured = _get(forcing, 'sw_measured')
        precip = _get(forcing, 'precip')
        energy_index = _get(forcing, 'energy_index')
        if np.isnan(energy_index):
            energy_index = self.config.energy_index

        out = PointFluxes()

        # 1. Clear-sky shortwave
        sw = self.shortwave.step(date, t_air, rh)
        out.direct, out.diffuse, out.toa = sw.direct, sw.diffuse, sw.toa

        # 2. Clearness index
        out.clearness_index = calc_clearness_index(sw_measured, sw.toa)

        # 3. All-sky shortwave
        dec = self.decomposition.step(out.clearness_index, sw_measured,
                                      sw.direct, sw.diffuse)
        out.kd, out.sw_all_sky = dec.kd, dec.sw_all_sky

        # 4. Longwave
        lw = self.longwave.step(t_air, rh, t_soil, out.clearness_index)
        out.lw_up, out.lw_down = lw.upwelling, lw.downwelling

        # 5. Rain-snow separation
        prec = self.rain_snow.step(precip, t_air)
        out.rainfall, out.snowfall = prec.rainfall, prec.snowfall

        # 6. Snowpack
        snow = self.snowpack.step(prec.rainfall, prec.snowfall, t_air,
                                  sw=out.sw_all_sky, energy_index=energy_index)
        out.freezing = snow.freezing
        out.melt = snow.melt
        out.melt_discharge = snow.melt_discharge
        out.swe = snow.swe
        out.solid_water = self.state.solid
        out.liquid_water = self.state.liquid

        return out

    def run(self, forcing: pd.DataFrame) -> pd.DataFrame:
        """
        Run the pipeline over a time series.

        Parameters
        ----------
        forcing : pd.DataFrame
            Indexed by timestamps (naive timestamps are UTC), with any of
            the columns accepted by step(). Absent columns are missing
            for every step.

        Returns
        -------
        pd.DataFrame
            One column per PointFluxes field, same index as the forcing
        """
        if not isinstance(forcing.index, pd.DatetimeIndex):
            raise ValueError("Forcing must be indexed by timestamps")

        n_steps = len(forcing)
        outputs = {name: np.full(n_steps, np.nan) for name in OUTPUT_COLUMNS}

        columns = [c for c in FORCING_COLUMNS + ('energy_index',) if c in forcing.columns]
        absent = [c for c in FORCING_COLUMNS if c not in forcing.columns]
        if absent:
            logger.warning("Forcing columns missing, treated as no data: %s", absent)

        logger.info("Running %d steps from %s to %s", n_steps,
                    forcing.index[0] if n_steps else None,
                    forcing.index[-1] if n_steps else None)

        self.reset()

        records = forcing[columns].to_dict('records')
        for i, (date, sample) in enumerate(zip(forcing.index, records)):
            if i % PROGRESS_EVERY == 0:
                logger.debug("Step %d/%d", i, n_steps)

            fluxes = self.step(to_utc(date.to_pydatetime()), sample)
            for name in OUTPUT_COLUMNS:
                outputs[name][i] = getattr(fluxes, name)

        result = pd.DataFrame(outputs, index=forcing.index)

        n_missing_sw = int(result['sw_all_sky'].isna().sum())
        n_missing_swe = int(result['swe'].isna().sum())
        if n_missing_sw or n_missing_swe:
            logger.warning("Missing outputs: %d all-sky shortwave, %d SWE",
                           n_missing_sw, n_missing_swe)
        logger.info("Finished run, final SWE %.2f mm", self.state.swe)

        return result


def _get(forcing, key, default=np.nan):
    value = forcing.get(key, default)
    if value is None:
        return np.nan
    return float(value)
