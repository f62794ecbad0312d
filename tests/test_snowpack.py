"""Tests for the two-reservoir snowpack."""

import numpy as np
import pytest

from pyradsnow.exceptions import ConfigurationError
from pyradsnow.snowpack import (
    METHODS,
    SnowParams,
    Snowpack,
    SnowState,
    calc_freezing,
    calc_melt_rate,
    step_snowpack,
)


class TestFreezing:
    """Tests for calc_freezing."""

    def test_below_melting_temperature(self) -> None:
        assert calc_freezing(-2.0, 0.0, 0.5) == pytest.approx(1.0)

    def test_zero_at_or_above_melting_temperature(self) -> None:
        assert calc_freezing(0.0, 0.0, 0.5) == 0.0
        assert calc_freezing(3.0, 0.0, 0.5) == 0.0


class TestMeltRate:
    """Tests for calc_melt_rate."""

    def test_classical(self) -> None:
        assert calc_melt_rate(3.0, 'classical', t_melt=0.0,
                              combined_melting_factor=2.0) == pytest.approx(6.0)

    def test_cazorzi(self) -> None:
        melt = calc_melt_rate(3.0, 'cazorzi', t_melt=0.0, combined_melting_factor=2.0,
                              radiation_factor=0.5, energy_index=2.0)
        assert melt == pytest.approx((2.0 + 0.5 * 2.0) * 3.0)

    def test_hoock(self) -> None:
        melt = calc_melt_rate(3.0, 'hoock', t_melt=0.0, combined_melting_factor=2.0,
                              radiation_factor=0.01, skyview=0.8, sw=500.0)
        assert melt == pytest.approx(6.0 + 0.01 * 0.8 * 500.0)

    @pytest.mark.parametrize("method", METHODS)
    def test_no_melt_when_cold(self, method: str) -> None:
        assert calc_melt_rate(-1.0, method, t_melt=0.0, combined_melting_factor=2.0,
                              radiation_factor=0.01, sw=800.0) == 0.0

    def test_hoock_ignores_missing_shortwave_when_cold(self) -> None:
        assert calc_melt_rate(-1.0, 'hoock', sw=np.nan) == 0.0

    def test_unknown(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown melt model"):
            calc_melt_rate(3.0, 'enhanced')


class TestStepSnowpack:
    """Tests for step_snowpack."""

    def test_melt_capped_at_solid_water(self) -> None:
        """All snow melts and drains when the pack has no holding capacity left."""
        state = SnowState(solid=5.0, liquid=0.0)
        params = SnowParams(melt_model='classical', combined_melting_factor=1.0)

        fluxes = step_snowpack(state, 0.0, 0.0, 10.0, params)

        assert fluxes.melt == pytest.approx(5.0)
        assert state.solid == 0.0
        assert state.liquid == 0.0
        assert fluxes.melt_discharge == pytest.approx(5.0)
        assert fluxes.swe == 0.0

    def test_partial_melt_retained(self) -> None:
        state = SnowState(solid=100.0, liquid=0.0)
        params = SnowParams(combined_melting_factor=2.0, alpha_l=0.1)

        fluxes = step_snowpack(state, 0.0, 0.0, 2.0, params)

        assert state.solid == pytest.approx(96.0)
        assert state.liquid == pytest.approx(4.0)
        assert fluxes.melt_discharge == 0.0
        assert fluxes.swe == pytest.approx(100.0)

    def test_refreezing_and_spill(self) -> None:
        state = SnowState(solid=10.0, liquid=4.0)
        params = SnowParams(freezing_factor=0.5, alpha_l=0.1)

        fluxes = step_snowpack(state, 0.0, 0.0, -2.0, params)

        assert fluxes.freezing == pytest.approx(1.0)
        assert state.solid == pytest.approx(11.0)
        assert state.liquid == pytest.approx(1.1)
        assert fluxes.melt_discharge == pytest.approx(1.9)
        assert fluxes.swe == pytest.approx(12.1)

    def test_snowfall_accumulates(self) -> None:
        state = SnowState()
        params = SnowParams(freezing_factor=0.0)

        for _ in range(5):
            step_snowpack(state, 0.0, 2.0, -5.0, params)

        assert state.solid == pytest.approx(10.0)
        assert state.liquid == 0.0

    def test_rain_on_bare_ground_drains(self) -> None:
        state = SnowState()
        fluxes = step_snowpack(state, 3.0, 0.0, 5.0, SnowParams())
        assert fluxes.melt_discharge == pytest.approx(3.0)
        assert state.swe == 0.0

    def test_missing_input_leaves_state(self) -> None:
        state = SnowState(solid=20.0, liquid=1.0)
        fluxes = step_snowpack(state, 0.0, 0.0, np.nan, SnowParams())
        assert np.isnan(fluxes.swe)
        assert np.isnan(fluxes.melt_discharge)
        assert (state.solid, state.liquid) == (20.0, 1.0)

    def test_hoock_missing_shortwave_while_melting(self) -> None:
        state = SnowState(solid=20.0, liquid=1.0)
        fluxes = step_snowpack(state, 0.0, 0.0, 4.0, SnowParams(melt_model='hoock'),
                               sw=np.nan)
        assert np.isnan(fluxes.swe)
        assert (state.solid, state.liquid) == (20.0, 1.0)

    @pytest.mark.parametrize("method", METHODS)
    def test_invariants_over_random_forcing(self, method: str) -> None:
        rng = np.random.default_rng(42)
        params = SnowParams(melt_model=method, combined_melting_factor=3.0,
                            radiation_factor=0.01, freezing_factor=0.8, alpha_l=0.15)
        state = SnowState(solid=30.0, liquid=2.0)

        for _ in range(500):
            fluxes = step_snowpack(
                state,
                rainfall=rng.uniform(0.0, 3.0) * (rng.random() < 0.3),
                snowfall=rng.uniform(0.0, 5.0) * (rng.random() < 0.3),
                t_air=rng.uniform(-10.0, 10.0),
                params=params,
                sw=rng.uniform(0.0, 800.0),
                skyview=0.9,
                energy_index=rng.uniform(0.5, 1.5),
            )
            assert state.solid >= 0.0
            assert state.liquid >= 0.0
            assert state.liquid <= params.alpha_l * state.solid + 1e-12
            assert fluxes.swe == pytest.approx(state.solid + state.liquid)
            assert fluxes.melt_discharge >= 0.0


class TestSnowParams:
    """Tests for SnowParams validation."""

    @pytest.mark.parametrize("kwargs", [
        {'melt_model': 'degree_day'},
        {'alpha_l': 1.5},
        {'alpha_l': -0.1},
        {'freezing_factor': -1.0},
        {'combined_melting_factor': -1.0},
    ])
    def test_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            SnowParams(**kwargs)

    def test_selector_case_insensitive(self) -> None:
        assert SnowParams(melt_model='Hoock').melt_model == 'hoock'


class TestSnowpack:
    """Tests for the Snowpack component."""

    def test_step_updates_state(self) -> None:
        pack = Snowpack(SnowParams(), initial=SnowState(solid=50.0))
        fluxes = pack.step(rainfall=0.0, snowfall=2.0, t_air=-3.0)
        assert pack.state.solid == pytest.approx(52.0 + 1.5)
        assert fluxes.swe == pytest.approx(pack.state.swe)

    def test_reset(self) -> None:
        pack = Snowpack(initial=SnowState(solid=50.0, liquid=2.0))
        pack.step(0.0, 0.0, 8.0)
        pack.reset()
        assert (pack.state.solid, pack.state.liquid) == (50.0, 2.0)

    def test_initial_state_not_shared(self) -> None:
        initial = SnowState(solid=10.0)
        pack = Snowpack(initial=initial)
        pack.step(0.0, 5.0, -1.0)
        assert initial.solid == 10.0

    def test_negative_initial_state(self) -> None:
        with pytest.raises(ConfigurationError):
            Snowpack(initial=SnowState(solid=-1.0))

    def test_invalid_skyview(self) -> None:
        with pytest.raises(ConfigurationError):
            Snowpack(skyview=2.0)
