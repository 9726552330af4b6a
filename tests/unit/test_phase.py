# File: tests/unit/test_phase.py
"""
Unit tests for phase determination of pure fluids
Phases are checked through ThermodynamicState.update
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import CoolProp.CoolProp as CP

from helmholtz_eos.core import Phase, Q_GAS, Q_LIQUID, Q_SUPERCRITICAL
from helmholtz_eos.core.exceptions import BelowTriplePoint
from helmholtz_eos.state import ThermodynamicState, saturation_P, saturation_T


@pytest.fixture
def water():
    return ThermodynamicState("Water")


# ============================================================================
# TEMPERATURE GIVEN
# ============================================================================

class TestTemperatureGiven:
    """Test phase determination with T as one input"""

    def test_compressed_liquid(self, water):
        """Test 300 K, 1 bar is liquid"""
        water.update("PT", 1e5, 300.0)
        assert water.phase == Phase.LIQUID
        assert water.Q == Q_LIQUID

    def test_superheated_vapor(self, water):
        """Test 500 K, 1 bar is gas"""
        water.update("PT", 1e5, 500.0)
        assert water.phase == Phase.GAS
        assert water.Q == Q_GAS

    def test_supercritical(self, water):
        """Test T > Tc and p > pc is supercritical"""
        water.update("PT", 30e6, 700.0)
        assert water.phase == Phase.SUPERCRITICAL
        assert water.Q == Q_SUPERCRITICAL

    def test_above_critical_temperature_low_pressure(self, water):
        """Test T > Tc with p < pc is labelled gas"""
        water.update("PT", 1e6, 700.0)
        assert water.phase == Phase.GAS

    def test_near_saturation_liquid_side(self, water):
        """Test pressures just above psat (inside the ancillary band) resolve to liquid"""
        psat = saturation_T(water, 400.0).pL
        water.update("PT", psat * 1.001, 400.0)
        assert water.phase == Phase.LIQUID

    def test_near_saturation_gas_side(self, water):
        """Test pressures just below psat resolve to gas"""
        psat = saturation_T(water, 400.0).pL
        water.update("PT", psat * 0.999, 400.0)
        assert water.phase == Phase.GAS

    def test_exactly_at_saturation_pressure(self, water):
        """Test p == psat resolves to the saturated liquid"""
        sat = saturation_T(water, 373.124)
        water.update("PT", sat.pL, 373.124)
        assert water.phase == Phase.LIQUID
        assert water.rhomolar == pytest.approx(sat.rhoL, rel=1e-6)

    def test_liquid_density_just_above_saturation(self, water):
        """Test 298.15 K at the 1 atm liquid density is liquid, not two-phase"""
        # rhoL_sat(298.15 K) = 55342.13 mol/m^3
        water.update("DmolarT", 55344.59, 298.15)
        assert water.phase == Phase.LIQUID
        assert water.p == pytest.approx(101325, abs=500)

    def test_liquid_density_1atm_against_coolprop(self, water):
        """Test h, s and cp at 298.15 K, 1 atm through DmolarT"""
        T = 298.15
        rho = CP.PropsSI("Dmolar", "T", T, "P", 101325, "Water")
        water.update("DmolarT", rho, T)
        assert water.phase == Phase.LIQUID
        assert water.p == pytest.approx(101325, rel=1e-6)
        for key, value in (("Hmolar", water.hmolar), ("Smolar", water.smolar),
                           ("Cpmolar", water.cpmolar)):
            assert value == pytest.approx(CP.PropsSI(key, "T", T, "Dmolar", rho, "Water"),
                                          rel=1e-6), key

    def test_density_just_below_saturated_liquid(self, water):
        """Test 298.15 K below the saturated liquid density is two-phase"""
        water.update("DmolarT", 55341.0, 298.15)
        assert water.phase == Phase.TWOPHASE
        assert water.p == pytest.approx(3169.9, rel=1e-3)

    def test_density_inside_dome(self, water):
        """Test a density between the saturated values is two-phase"""
        sat = saturation_T(water, 373.124)
        water.update("DmolarT", 1000.0, 373.124)
        assert water.phase == Phase.TWOPHASE
        assert water.Q == pytest.approx(sat.quality_from_density(1000.0), rel=1e-10)
        assert water.p == pytest.approx(sat.pL, rel=1e-10)

    def test_enthalpy_inside_dome(self, water):
        """Test the mean of saturated enthalpies gives Q = 0.5"""
        T = 400.0
        sat = saturation_T(water, T)
        fluid = water.components[0]
        hL = fluid.caloric(T, sat.rhoL)[0]
        hV = fluid.caloric(T, sat.rhoV)[0]
        water.update("HmolarT", 0.5 * (hL + hV), T)
        assert water.phase == Phase.TWOPHASE
        assert water.Q == pytest.approx(0.5, rel=1e-9)

    def test_entropy_above_vapor(self, water):
        """Test an entropy above the saturated vapor value is gas"""
        T = 400.0
        sat = saturation_T(water, T)
        sV = water.components[0].caloric(T, sat.rhoV)[1]
        water.update("SmolarT", sV + 5.0, T)
        assert water.phase == Phase.GAS

    def test_at_critical_temperature(self, water):
        """Test T == Tc is handled without the saturation solver"""
        fluid = water.components[0]
        water.update("DmolarT", 1.2 * fluid.crit.rhomolar, fluid.crit.T)
        assert water.phase == Phase.SUPERCRITICAL
        water.update("DmolarT", 0.8 * fluid.crit.rhomolar, fluid.crit.T)
        assert water.phase == Phase.GAS

    def test_below_triple_point(self, water):
        """Test T < Ttriple raises BelowTriplePoint"""
        with pytest.raises(BelowTriplePoint):
            water.update("PT", 1e5, 250.0)


# ============================================================================
# PRESSURE GIVEN
# ============================================================================

class TestPressureGiven:
    """Test phase determination with p as one input"""

    def test_liquid_enthalpy(self, water):
        """Test a subcooled enthalpy is liquid"""
        h = water.components[0].caloric(300.0, 55320.0)[0]
        water.update("HmolarP", h, 101325)
        assert water.phase == Phase.LIQUID

    def test_gas_entropy(self, water):
        """Test a superheated entropy is gas"""
        water.update("PT", 101325, 500.0)
        s = water.smolar
        water.update("PSmolar", 101325, s)
        assert water.phase == Phase.GAS
        assert water.T == pytest.approx(500.0, rel=1e-8)

    def test_two_phase_enthalpy(self, water):
        """Test an enthalpy between hL and hV is two-phase"""
        sat = saturation_P(water, 101325)
        fluid = water.components[0]
        hL = fluid.caloric(sat.T, sat.rhoL)[0]
        hV = fluid.caloric(sat.T, sat.rhoV)[0]
        water.update("HmolarP", hL + 0.25 * (hV - hL), 101325)
        assert water.phase == Phase.TWOPHASE
        assert water.Q == pytest.approx(0.25, rel=1e-8)
        assert water.T == pytest.approx(sat.T, rel=1e-10)

    def test_supercritical_pressure(self, water):
        """Test p > pc: high enthalpy is supercritical, low enthalpy liquid"""
        fluid = water.components[0]
        water.update("PT", 30e6, 800.0)
        h_hot = water.hmolar
        water.update("PT", 30e6, 400.0)
        h_cold = water.hmolar
        assert h_hot > fluid.crit.hmolar > h_cold

        water.update("HmolarP", h_hot, 30e6)
        assert water.phase == Phase.SUPERCRITICAL
        assert water.T == pytest.approx(800.0, rel=1e-8)
        water.update("HmolarP", h_cold, 30e6)
        assert water.phase == Phase.LIQUID
        assert water.T == pytest.approx(400.0, rel=1e-8)

    def test_two_phase_density(self, water):
        """Test a density inside the dome at fixed p is two-phase"""
        sat = saturation_P(water, 2e5)
        rho = sat.rhomolar(0.4)
        water.update("DmolarP", rho, 2e5)
        assert water.phase == Phase.TWOPHASE
        assert water.Q == pytest.approx(0.4, rel=1e-7)

    def test_below_triple_point(self, water):
        """Test p < ptriple raises BelowTriplePoint"""
        with pytest.raises(BelowTriplePoint):
            water.update("HmolarP", 1000.0, 100.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
