"""Tests for the rain-snow separation."""

import numpy as np
import pytest

from pyradsnow.exceptions import ConfigurationError
from pyradsnow.rain_snow import RainSnowSeparation, partition_rain_snow


class TestPartitionRainSnow:
    """Tests for partition_rain_snow (Kavetski et al. 2006)."""

    def test_even_split_at_melting_temperature(self) -> None:
        rain, snow = partition_rain_snow(10.0, 0.0, t_melt=0.0)
        assert rain == pytest.approx(5.0)
        assert snow == pytest.approx(5.0)

    def test_mostly_rain_when_warm(self) -> None:
        rain, snow = partition_rain_snow(10.0, 101.0, t_melt=1.0, m1=1.0)
        assert rain == pytest.approx(10.0 * (np.arctan(100.0) / np.pi + 0.5))
        assert rain == pytest.approx(9.97, abs=0.01)
        assert snow == pytest.approx(0.03, abs=0.01)

    def test_mostly_snow_when_cold(self) -> None:
        rain, snow = partition_rain_snow(10.0, -20.0)
        assert snow > 9.8
        assert rain < 0.2

    @pytest.mark.parametrize("t_air", [-15.0, -2.0, -0.5, 0.0, 0.3, 1.0, 4.0, 25.0])
    def test_conserves_precipitation(self, t_air: float) -> None:
        rain, snow = partition_rain_snow(7.5, t_air, t_melt=0.5)
        assert rain >= 0.0
        assert snow >= 0.0
        assert rain + snow == pytest.approx(7.5)

    def test_undercatch_corrections(self) -> None:
        rain, snow = partition_rain_snow(10.0, 0.0, alpha_r=1.1, alpha_s=1.3)
        assert rain == pytest.approx(5.5)
        assert snow == pytest.approx(1.3 * 4.5)

    def test_snowfall_never_negative(self) -> None:
        _, snow = partition_rain_snow(10.0, 30.0, alpha_r=2.5)
        assert snow == 0.0

    def test_sharper_transition_with_smaller_m1(self) -> None:
        smooth, _ = partition_rain_snow(10.0, 1.0, m1=1.0)
        sharp, _ = partition_rain_snow(10.0, 1.0, m1=0.1)
        assert sharp > smooth

    def test_no_precipitation(self) -> None:
        assert partition_rain_snow(0.0, -3.0) == (0.0, 0.0)

    @pytest.mark.parametrize("precip, t_air", [(np.nan, 0.0), (5.0, np.nan)])
    def test_missing_inputs(self, precip: float, t_air: float) -> None:
        rain, snow = partition_rain_snow(precip, t_air)
        assert np.isnan(rain)
        assert np.isnan(snow)


class TestRainSnowSeparation:
    """Tests for the RainSnowSeparation component."""

    def test_step(self) -> None:
        result = RainSnowSeparation(t_melt=0.0, m1=1.0).step(10.0, 0.0)
        assert result.rainfall == pytest.approx(5.0)
        assert result.snowfall == pytest.approx(5.0)

    @pytest.mark.parametrize("kwargs", [
        {'m1': 0.0},
        {'m1': -1.0},
        {'alpha_r': -0.1},
        {'alpha_s': -0.1},
    ])
    def test_invalid_parameters(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            RainSnowSeparation(**kwargs)
