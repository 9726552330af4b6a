# File: tests/unit/test_fluids.py
"""
Unit tests for fluid descriptors and the fluid library
"""

import pytest
import math
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import CoolProp.CoolProp as CP

from helmholtz_eos.fluids import (
    HelmholtzFluid,
    SimpleState,
    available_fluids,
    get_fluid,
    load_coolprop_fluid,
)


@pytest.fixture
def water():
    return get_fluid("Water")


@pytest.fixture
def methane():
    return get_fluid("Methane")


# ============================================================================
# LIBRARY
# ============================================================================

class TestLibrary:
    """Test bundled fluid lookup"""

    def test_available_fluids(self):
        """Test the bundled fluids are listed"""
        names = available_fluids()
        assert "Water" in names
        assert "Methane" in names

    def test_aliases_and_case(self, water):
        """Test aliases and case-insensitive names return the shared descriptor"""
        assert get_fluid("water") is water
        assert get_fluid("H2O") is water
        assert get_fluid("R718") is water
        assert get_fluid("  WATER ") is water

    def test_unknown_fluid(self):
        """Test unknown fluids raise ValueError"""
        with pytest.raises(ValueError, match="not available"):
            get_fluid("Unobtainium")

    def test_descriptor_type(self, methane):
        """Test descriptors are HelmholtzFluid instances"""
        assert isinstance(methane, HelmholtzFluid)
        assert methane.name == "Methane"
        assert methane.CAS == "74-82-8"


# ============================================================================
# DESCRIPTOR CONSTANTS
# ============================================================================

class TestWaterDescriptor:
    """Test IAPWS-95 water constants"""

    def test_critical_point(self, water):
        """Test critical constants"""
        assert water.crit.T == 647.096
        assert water.crit.p == pytest.approx(22.064e6, rel=1e-12)
        assert water.crit.rhomolar * water.molar_mass == pytest.approx(322.0, rel=1e-9)

    def test_constants(self, water):
        """Test gas constant, molar mass and limits"""
        assert water.gas_constant == pytest.approx(8.314371357587, rel=1e-9)
        assert water.molar_mass == pytest.approx(0.018015268, rel=1e-12)
        assert water.Ttriple == pytest.approx(273.16, rel=1e-12)
        assert water.Tmax > water.crit.T

    def test_critical_caloric_values_filled(self, water):
        """Test h, s, u at the critical point are evaluated on load"""
        for value in (water.crit.hmolar, water.crit.smolar, water.crit.umolar):
            assert math.isfinite(value)
        assert water.crit.umolar == pytest.approx(
            water.crit.hmolar - water.crit.p / water.crit.rhomolar, rel=1e-6)

    def test_pressure_at_critical_point(self, water):
        """Test the EOS reproduces the critical pressure"""
        assert water.pressure(water.crit.T, water.crit.rhomolar) == pytest.approx(
            water.crit.p, rel=1e-4)

    def test_reduced_variables(self, water):
        """Test tau and delta use the reducing state"""
        tau, delta = water.reduced(323.548, 2 * water.reducing.rhomolar)
        assert tau == pytest.approx(2.0, rel=1e-12)
        assert delta == pytest.approx(2.0, rel=1e-12)


class TestCaloric:
    """Test uncached caloric properties"""

    def test_reference_state(self, water):
        """Test IAPWS-95 reference: u = s = 0 for saturated liquid at the triple point"""
        h, s, u = water.caloric(273.16, water.triple_liquid.rhomolar)
        assert abs(u / water.molar_mass) < 1.0
        assert abs(s / water.molar_mass) < 1e-2

    def test_against_coolprop(self, water):
        """Test enthalpy and entropy against CoolProp (same IAPWS reference state)"""
        T, rho = 500.0, 200.0
        h, s, u = water.caloric(T, rho)
        assert h == pytest.approx(CP.PropsSI("Hmolar", "T", T, "Dmolar", rho, "Water"), rel=1e-6)
        assert s == pytest.approx(CP.PropsSI("Smolar", "T", T, "Dmolar", rho, "Water"), rel=1e-6)

    def test_methane_pressure_against_coolprop(self, methane):
        """Test the methane EOS pressure against CoolProp"""
        T, rho = 250.0, 500.0
        assert methane.pressure(T, rho) == pytest.approx(
            CP.PropsSI("P", "T", T, "Dmolar", rho, "Methane"), rel=1e-6)


class TestSimpleState:
    """Test the reference-state record"""

    def test_missing_fields_are_nan(self):
        """Test absent values default to NaN"""
        state = SimpleState.from_dict({"T": 300.0})
        assert state.T == 300.0
        assert math.isnan(state.p)
        assert math.isnan(state.hmolar)

    def test_none(self):
        """Test a missing block gives an all-NaN record"""
        assert math.isnan(SimpleState.from_dict(None).T)


# ============================================================================
# COOLPROP LOADING
# ============================================================================

class TestCoolPropLoading:
    """Test descriptors built from CoolProp's fluid JSON"""

    def test_load_water(self, water):
        """Test the CoolProp water EOS matches the bundled one"""
        fluid = load_coolprop_fluid("Water")
        assert fluid.crit.T == pytest.approx(water.crit.T, rel=1e-12)
        tau, delta = 1.3, 0.8
        assert fluid.alphar_deriv(0, 0, tau, delta) == pytest.approx(
            water.alphar_deriv(0, 0, tau, delta), rel=1e-10)
        assert fluid.alphar_deriv(0, 1, tau, delta) == pytest.approx(
            water.alphar_deriv(0, 1, tau, delta), rel=1e-10)

    def test_bundled_methane_matches_coolprop(self, methane):
        """Test the bundled methane data agrees with CoolProp's copy of the EOS"""
        fluid = load_coolprop_fluid("Methane")
        assert methane.reducing.rhomolar == pytest.approx(fluid.reducing.rhomolar, rel=1e-12)
        assert methane.reducing.T == pytest.approx(fluid.reducing.T, rel=1e-12)
        assert methane.molar_mass == pytest.approx(fluid.molar_mass, rel=1e-10)
        for tau, delta in ((1.2, 0.5), (0.8, 2.1)):
            for n_tau, n_delta in ((0, 0), (0, 1), (2, 0)):
                assert methane.alphar_deriv(n_tau, n_delta, tau, delta) == pytest.approx(
                    fluid.alphar_deriv(n_tau, n_delta, tau, delta), rel=1e-10)
        T, rho = 250.0, 3000.0
        assert methane.pressure(T, rho) == pytest.approx(
            CP.PropsSI("P", "T", T, "Dmolar", rho, "Methane"), rel=1e-9)

    @pytest.mark.parametrize("name, T, rho", [
        ("Nitrogen", 300.0, 5000.0),
        ("CarbonDioxide", 350.0, 8000.0),
        ("Argon", 200.0, 10000.0),
    ])
    def test_load_other_fluids(self, name, T, rho):
        """Test non-bundled fluids load and reproduce CoolProp's pressure"""
        fluid = load_coolprop_fluid(name)
        assert fluid.crit.T == pytest.approx(CP.PropsSI("Tcrit", name), rel=1e-10)
        assert fluid.molar_mass == pytest.approx(CP.PropsSI("molar_mass", name), rel=1e-10)
        assert fluid.pressure(T, rho) == pytest.approx(
            CP.PropsSI("P", "T", T, "Dmolar", rho, name), rel=1e-9)

    def test_coolprop_fluid_in_state(self):
        """Test a CoolProp-loaded descriptor drives a full PT update"""
        from helmholtz_eos.state import ThermodynamicState

        state = ThermodynamicState(load_coolprop_fluid("Nitrogen"))
        state.update("PT", 1e6, 300.0)
        assert state.rhomolar == pytest.approx(
            CP.PropsSI("Dmolar", "T", 300.0, "P", 1e6, "Nitrogen"), rel=1e-8)
        assert state.cvmolar == pytest.approx(
            CP.PropsSI("Cvmolar", "T", 300.0, "P", 1e6, "Nitrogen"), rel=1e-6)
        assert state.speed_sound == pytest.approx(
            CP.PropsSI("speed_of_sound", "T", 300.0, "P", 1e6, "Nitrogen"), rel=1e-6)

    def test_unknown_coolprop_fluid(self):
        """Test unknown CoolProp names raise ValueError"""
        with pytest.raises(ValueError, match="not available in CoolProp"):
            load_coolprop_fluid("NotAFluid123")


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
