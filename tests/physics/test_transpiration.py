"""
Tests for the canopy conductance transpiration model.
"""
import numpy as np
import pytest

from oliveflux.core.config import TranspirationConfig
from oliveflux.physics.interception import compute_fapar
from oliveflux.physics.transpiration import (
    TranspirationParameters,
    air_density,
    par_irradiance,
    canopy_conductance,
    calculate_transpiration,
    compute_transpiration,
)


class TestTranspiration:
    """Reference case: fPAR=0.5, Rs=25, Td=25, VPD=2, Lat=38, DOY=214"""

    @pytest.fixture
    def result(self):
        return calculate_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214)

    def test_reference_value(self):
        assert compute_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214) == pytest.approx(
            2.43041808467865, rel=1e-9)

    def test_intermediates(self, result):
        assert result.air_density == pytest.approx(1.17709090909091, rel=1e-12)
        assert result.daytime_length_h == pytest.approx(13.9157611211637, rel=1e-9)
        assert result.par_w_m2 == pytest.approx(224.56551048777, rel=1e-9)
        assert result.canopy_conductance == pytest.approx(3.34265762361046, rel=1e-9)
        assert result.canopy_resistance == pytest.approx(299.163154771407, rel=1e-9)
        assert result.latent_heat_w_m2 == pytest.approx(118.860514739306, rel=1e-9)

    def test_latent_heat_identity(self, result):
        p = TranspirationParameters()
        expected = (result.air_density * p.specific_heat_air / p.psychrometric_constant
                    * 2.0 / (1000 / result.canopy_conductance))
        assert result.latent_heat_w_m2 == pytest.approx(expected, rel=1e-12)

    def test_mm_conversion_identity(self, result):
        expected = result.latent_heat_w_m2 * 3600 * result.daytime_length_h / 1000000 / 2.45
        assert result.transpiration_mm == pytest.approx(expected, rel=1e-12)

    def test_doubling_vpd_leaves_transpiration_unchanged(self):
        # Gc scales with 1/VPD, which cancels the VPD in LE
        base = calculate_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214)
        doubled = calculate_transpiration(0.5, 25.0, 25.0, 4.0, 38.0, 214)

        assert doubled.canopy_conductance == pytest.approx(base.canopy_conductance / 2, rel=1e-12)
        assert doubled.latent_heat_w_m2 == pytest.approx(base.latent_heat_w_m2, rel=1e-12)

    def test_scales_linearly_with_fpar(self):
        half = compute_transpiration(0.25, 25.0, 25.0, 2.0, 38.0, 214)
        full = compute_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214)
        assert full == pytest.approx(2 * half, rel=1e-12)

    def test_chained_with_fapar(self):
        fapar = compute_fapar(1.88, 15.25, 24.5, 214, 38.0)
        value = compute_transpiration(fapar, 27.5, 28.0, 2.4, 38.0, 214)
        assert value == pytest.approx(2.10509054411218, rel=1e-9)
        assert type(fapar) is float
        assert type(value) is float

    def test_idempotent(self):
        first = compute_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214)
        second = compute_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214)
        assert first == second


class TestPassThrough:

    def test_cold_day_gives_negative_transpiration(self):
        # a * Td - b < 0 below about 3.19 °C
        result = calculate_transpiration(0.5, 10.0, 2.0, 0.5, 38.0, 30)
        assert result.canopy_conductance < 0
        assert result.transpiration_mm < 0

    def test_zero_fpar_gives_zero(self):
        result = calculate_transpiration(0.0, 25.0, 25.0, 2.0, 38.0, 214)
        assert result.canopy_conductance == 0.0
        assert np.isinf(result.canopy_resistance)
        assert result.transpiration_mm == 0.0

    def test_zero_vpd_diverges_without_raising(self):
        result = calculate_transpiration(0.5, 25.0, 25.0, 0.0, 38.0, 214)
        assert np.isinf(result.canopy_conductance)
        assert not np.isfinite(result.transpiration_mm)

    def test_polar_day_is_nan(self):
        assert np.isnan(compute_transpiration(0.5, 25.0, 10.0, 1.0, 80.0, 172))


class TestComponents:

    def test_air_density(self):
        assert air_density(25.0) == pytest.approx(3.486 * 101.4 / 300.3, rel=1e-12)

    def test_par_irradiance(self):
        assert par_irradiance(25.0, 12.0) == pytest.approx(25.0 * 0.45 * 1e6 / 3600 / 12.0, rel=1e-12)

    def test_canopy_conductance(self):
        assert canopy_conductance(1.0, 200.0, 20.0, 1.0) == pytest.approx(
            200.0 * (2.73 * 20.0 - 8.71) / 1000, rel=1e-12)

    def test_threshold_temperature(self):
        assert TranspirationParameters().conductance_threshold_temperature == pytest.approx(
            8.71 / 2.73, rel=1e-12)

    def test_parameters_from_config(self):
        params = TranspirationParameters.from_config(TranspirationConfig(atmospheric_pressure_kpa=95.0))
        assert params.atmospheric_pressure_kpa == 95.0
        assert params.specific_heat_air == 1012.0

        low = calculate_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214, params)
        ref = calculate_transpiration(0.5, 25.0, 25.0, 2.0, 38.0, 214)
        assert low.transpiration_mm == pytest.approx(ref.transpiration_mm * 95.0 / 101.4, rel=1e-12)
