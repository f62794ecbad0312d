"""Shared fixtures for the radiation and snow tests."""

import numpy as np
import pandas as pd
import pytest

from pyradsnow import PointConfig


@pytest.fixture
def config() -> PointConfig:
    """Mid-latitude alpine point with default models."""
    return PointConfig(latitude=46.0, elevation=1000.0, skyview=0.9,
                       ozone=0.35, visibility=40.0, initial_solid=50.0)


@pytest.fixture
def forcing() -> pd.DataFrame:
    """Two days of hourly samples with a diurnal cycle and early precipitation."""
    index = pd.date_range('2015-03-01 00:00', periods=48, freq='h')
    hours = index.hour.to_numpy()
    day_shape = np.clip(np.sin((hours - 6) / 12.0 * np.pi), 0.0, None)

    return pd.DataFrame({
        't_air': 1.0 + 6.0 * day_shape,
        'rh': np.full(48, 70.0),
        't_soil': np.zeros(48),
        'sw_measured': 500.0 * day_shape,
        'precip': np.where(np.arange(48) < 12, 1.0, 0.0),
    }, index=index)


@pytest.fixture
def ridge_dem() -> np.ndarray:
    """Flat 20x20 grid crossed north-south by a 100 m wall at column 10."""
    dem = np.zeros((20, 20))
    dem[:, 10] = 100.0
    return dem
