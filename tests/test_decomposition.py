"""Tests for the shortwave decomposition models."""

import numpy as np
import pytest

from pyradsnow.decomposition import (
    METHODS,
    Decomposition,
    calc_all_sky_shortwave,
    calc_diffuse_fraction,
)
from pyradsnow.exceptions import ConfigurationError


class TestDiffuseFraction:
    """Tests for calc_diffuse_fraction."""

    @pytest.mark.parametrize("kt, expected", [
        (0.1, 0.991),
        (0.5, 0.9511 - 0.1604 * 0.5 + 4.388 * 0.25 - 16.638 * 0.125 + 12.336 * 0.0625),
        (0.9, 0.165),
    ])
    def test_erbs(self, kt: float, expected: float) -> None:
        assert calc_diffuse_fraction(kt, 'erbs') == pytest.approx(expected)

    @pytest.mark.parametrize("kt, expected", [
        (0.1, 0.9952),
        (0.5, 0.615),
        (0.9, 0.147),
    ])
    def test_reindl(self, kt: float, expected: float) -> None:
        assert calc_diffuse_fraction(kt, 'reindl') == pytest.approx(expected)

    def test_reindl_clamped_at_one(self) -> None:
        """1.02 - 0.248 * kt exceeds one for very overcast skies."""
        assert calc_diffuse_fraction(0.0, 'reindl') == 1.0

    @pytest.mark.parametrize("kt", [0.0, 0.3, 0.5, 0.8])
    def test_boland(self, kt: float) -> None:
        expected = 1.0 / (1.0 + np.exp(-5.0 + 8.6 * kt))
        assert calc_diffuse_fraction(kt, 'boland') == pytest.approx(expected)

    @pytest.mark.parametrize("method", METHODS)
    def test_bounded_and_decreasing(self, method: str) -> None:
        kts = np.linspace(0.0, 1.0, 51)
        kds = [calc_diffuse_fraction(kt, method) for kt in kts]
        assert all(0.0 < kd <= 1.0 for kd in kds)
        assert kds[0] > kds[-1]

    @pytest.mark.parametrize("method", METHODS)
    def test_missing_clearness(self, method: str) -> None:
        assert np.isnan(calc_diffuse_fraction(np.nan, method))

    def test_case_insensitive(self) -> None:
        assert calc_diffuse_fraction(0.5, 'Erbs') == calc_diffuse_fraction(0.5, 'erbs')

    def test_unknown_method(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown decomposition method"):
            calc_diffuse_fraction(0.5, 'perez')


class TestAllSkyShortwave:
    """Tests for calc_all_sky_shortwave."""

    def test_established_combination(self) -> None:
        # cs = 0.7 * 500 / 600, cd = 0.3 * 500 / 100
        result = calc_all_sky_shortwave(0.3, 500.0, 600.0, 100.0)
        assert result == pytest.approx(1.5 * 600.0 + (0.7 * 500.0 / 600.0) * 100.0)

    def test_derived_combination_recovers_measurement(self) -> None:
        result = calc_all_sky_shortwave(0.3, 500.0, 600.0, 100.0, swap=False)
        assert result == pytest.approx(500.0)

    @pytest.mark.parametrize("kd", [0.1, 0.5, 0.9])
    def test_round_trip_with_equal_components(self, kd: float) -> None:
        """The two combinations coincide when direct equals diffuse."""
        assert calc_all_sky_shortwave(kd, 420.0, 250.0, 250.0) == pytest.approx(420.0)

    def test_night(self) -> None:
        """No clear-sky radiation: zero, even with a missing diffuse fraction."""
        assert calc_all_sky_shortwave(np.nan, 0.0, 0.0, 0.0) == 0.0

    def test_missing_measurement_propagates(self) -> None:
        assert np.isnan(calc_all_sky_shortwave(0.3, np.nan, 600.0, 100.0))


class TestDecomposition:
    """Tests for the Decomposition component."""

    def test_step(self) -> None:
        result = Decomposition('boland').step(0.6, 500.0, 700.0, 120.0)
        kd = calc_diffuse_fraction(0.6, 'boland')
        assert result.kd == pytest.approx(kd)
        assert result.sw_all_sky == pytest.approx(
            calc_all_sky_shortwave(kd, 500.0, 700.0, 120.0))

    def test_swap_flag(self) -> None:
        result = Decomposition('erbs', swap=False).step(0.6, 500.0, 700.0, 120.0)
        assert result.sw_all_sky == pytest.approx(500.0)

    def test_unknown_method_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            Decomposition('liu_jordan')
