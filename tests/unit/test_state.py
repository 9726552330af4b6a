# File: tests/unit/test_state.py
"""
Unit tests for ThermodynamicState property evaluation
Validates against IAPWS-95 reference values and CoolProp
"""

import pytest
import math
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import CoolProp.CoolProp as CP

from helmholtz_eos.core import Param, Phase
from helmholtz_eos.core.exceptions import InvalidPhase, UnsupportedDerivative, UnsupportedInput
from helmholtz_eos.state import ThermodynamicState


@pytest.fixture
def water():
    return ThermodynamicState("Water")


@pytest.fixture
def methane():
    return ThermodynamicState("Methane")


# ============================================================================
# IAPWS-95 REFERENCE VALUES
# ============================================================================

# (T K, rho kg/m^3, p MPa, cv kJ/kg/K, w m/s, s kJ/kg/K)
IAPWS95_SINGLE_PHASE = [
    (300.0, 996.556, 0.0992418352, 4.13018112, 1501.51914, 0.393062643),
    (300.0, 1005.308, 20.0022515, 4.06798347, 1534.92501, 0.387405401),
    (300.0, 1188.202, 700.004704, 3.46135580, 2443.57992, 0.132609616),
    (500.0, 0.435, 0.0999679423, 1.50817541, 548.314253, 7.94488271),
    (500.0, 4.532, 0.999938125, 1.66991025, 535.739001, 6.82502725),
    (500.0, 838.025, 10.0003858, 3.22106219, 1271.28441, 2.56690919),
    (900.0, 0.241, 0.100062559, 1.75890657, 724.027147, 9.16653194),
]


class TestIAPWS95:
    """Test water against the IAPWS-95 single-phase verification table"""

    @pytest.mark.parametrize("T, rho, p, cv, w, s", IAPWS95_SINGLE_PHASE)
    def test_reference_values(self, water, T, rho, p, cv, w, s):
        """Test p, cv, w and s at tabulated (T, rho)"""
        water.update("DmassT", rho, T)
        assert water.p / 1e6 == pytest.approx(p, rel=1e-6)
        assert water.cvmass / 1e3 == pytest.approx(cv, rel=1e-6)
        assert water.speed_sound == pytest.approx(w, rel=1e-6)
        assert water.smass / 1e3 == pytest.approx(s, rel=1e-6)


# ============================================================================
# CALORIC PROPERTIES
# ============================================================================

class TestCaloric:
    """Test caloric properties against CoolProp"""

    @pytest.mark.parametrize("T, p", [(300.0, 101325), (500.0, 1e5), (700.0, 30e6)])
    def test_water_against_coolprop(self, water, T, p):
        """Test h, s, cp, cv and w"""
        water.update("PT", p, T)
        for key, value in (("Hmass", water.hmass), ("Smass", water.smass),
                           ("Cpmass", water.cpmass), ("Cvmass", water.cvmass),
                           ("speed_of_sound", water.speed_sound)):
            assert value == pytest.approx(CP.PropsSI(key, "T", T, "P", p, "Water"), rel=1e-6), key

    def test_methane_against_coolprop(self, methane):
        """Test methane density, cp and speed of sound"""
        T, p = 250.0, 5e6
        methane.update("PT", p, T)
        assert methane.rhomolar == pytest.approx(
            CP.PropsSI("Dmolar", "T", T, "P", p, "Methane"), rel=1e-7)
        assert methane.cpmolar == pytest.approx(
            CP.PropsSI("Cpmolar", "T", T, "P", p, "Methane"), rel=1e-6)
        assert methane.speed_sound == pytest.approx(
            CP.PropsSI("speed_of_sound", "T", T, "P", p, "Methane"), rel=1e-6)

    def test_internal_energy_identity(self, water):
        """Test u = h - p / rho"""
        water.update("PT", 2e6, 450.0)
        assert water.umolar == pytest.approx(water.hmolar - water.p / water.rhomolar, rel=1e-12)

    def test_mass_units(self, water):
        """Test mass-based properties divide by the molar mass"""
        water.update("PT", 1e5, 500.0)
        M = water.molar_mass
        assert water.hmass == pytest.approx(water.hmolar / M)
        assert water.cpmass == pytest.approx(water.cpmolar / M)
        assert water.rhomass == pytest.approx(water.rhomolar * M)

    def test_ideal_gas_limit(self, water):
        """Test cp approaches cp0 at very low density"""
        water.update("DmolarT", 1e-3, 600.0)
        assert water.cpmolar == pytest.approx(water.cp0molar, rel=1e-6)

    @pytest.mark.parametrize("T, p", [(600.0, 1e5), (300.0, 101325)])
    def test_ideal_gas_cp_against_coolprop(self, water, T, p):
        """Test cp0 = R (1 - tau^2 d2alpha0/dtau2) matches CoolProp, liquid included"""
        water.update("PT", p, T)
        assert water.cp0molar == pytest.approx(
            CP.PropsSI("Cp0molar", "T", T, "P", p, "Water"), rel=1e-8)

    def test_two_phase_average(self, water):
        """Test two-phase s is the quality-weighted mean"""
        water.update("QT", 0.25, 380.0)
        expected = 0.75 * water.SatL.smolar + 0.25 * water.SatV.smolar
        assert water.smolar == pytest.approx(expected, rel=1e-12)

    def test_two_phase_without_children(self):
        """Test two-phase averages work without SatL and SatV"""
        plain = ThermodynamicState("Water", generate_saturation_states=False)
        full = ThermodynamicState("Water")
        plain.update("QT", 0.5, 400.0)
        full.update("QT", 0.5, 400.0)
        assert plain.SatL is None
        assert plain.hmolar == pytest.approx(full.hmolar, rel=1e-12)


# ============================================================================
# CACHING
# ============================================================================

class TestCache:
    """Test the per-update property cache"""

    def test_values_refresh_after_update(self, water):
        """Test cached values are dropped by the next update"""
        water.update("PT", 1e5, 500.0)
        h1 = water.hmolar
        assert water.hmolar == h1
        water.update("PT", 1e5, 600.0)
        assert water.hmolar > h1

    def test_not_updated(self, water):
        """Test accessors on a fresh state raise InvalidPhase"""
        assert water.phase == Phase.UNKNOWN
        with pytest.raises(InvalidPhase):
            water.hmolar
        with pytest.raises(InvalidPhase):
            water.p

    def test_repr(self, water):
        """Test the repr names the fluid and phase"""
        water.update("PT", 1e5, 500.0)
        assert "Water" in repr(water)
        assert "gas" in repr(water)


# ============================================================================
# HELMHOLTZ DERIVATIVES AND VIRIAL COEFFICIENTS
# ============================================================================

class TestDerivatives:
    """Test alpha derivatives exposed on the state"""

    def test_reduced_variables(self, water):
        """Test tau = Tc / T and delta = rho / rhoc for a pure fluid"""
        water.update("DmolarT", 20000.0, 700.0)
        assert water.tau == pytest.approx(647.096 / 700.0, rel=1e-12)
        assert water.delta == pytest.approx(20000.0 / water.reducing.rhomolar, rel=1e-12)

    def test_pressure_from_dalphar_dDelta(self, water):
        """Test p = rho R T (1 + delta dalphar/ddelta)"""
        water.update("DmolarT", 20000.0, 700.0)
        expected = 20000.0 * water.gas_constant * 700.0 * (1 + water.delta * water.dalphar_dDelta)
        assert water.p == pytest.approx(expected, rel=1e-12)

    def test_tau_derivative_finite_difference(self, methane):
        """Test dalphar/dtau against a central difference"""
        methane.update("DmolarT", 5000.0, 200.0)
        tau, delta, h = methane.tau, methane.delta, 1e-6
        x = methane.mole_fractions
        fd = (methane.calc_alphar_deriv_nocache(0, 0, x, tau + h, delta)
              - methane.calc_alphar_deriv_nocache(0, 0, x, tau - h, delta)) / (2 * h)
        assert methane.dalphar_dTau == pytest.approx(fd, rel=1e-6)

    def test_third_order_methane(self, methane):
        """Test third-order derivatives are available for methane"""
        methane.update("DmolarT", 5000.0, 200.0)
        for value in (methane.d3alphar_dTau3, methane.d3alphar_dDelta_dTau2,
                      methane.d3alphar_dDelta2_dTau, methane.d3alphar_dDelta3):
            assert math.isfinite(value)

    def test_third_order_water(self, water):
        """Test water's non-analytic terms stop at second order"""
        water.update("DmolarT", 5000.0, 700.0)
        with pytest.raises(UnsupportedDerivative):
            water.d3alphar_dDelta3

    def test_ideal_gas_derivatives(self, water):
        """Test dalpha0/ddelta = 1 / delta"""
        water.update("DmolarT", 5000.0, 700.0)
        assert water.dalpha0_dDelta == pytest.approx(1 / water.delta, rel=1e-12)
        assert water.d2alpha0_dDelta2 == pytest.approx(-1 / water.delta**2, rel=1e-12)
        assert water.d2alpha0_dDelta_dTau == pytest.approx(0.0, abs=1e-15)


class TestVirial:
    """Test virial coefficients"""

    def test_B_from_compressibility(self, methane):
        """Test B ~ (Z - 1) / rho at low density"""
        T, rho = 300.0, 1.0
        methane.update("DmolarT", rho, T)
        Z = methane.p / (rho * methane.gas_constant * T)
        assert methane.Bvirial == pytest.approx((Z - 1) / rho, rel=1e-3)

    def test_B_against_coolprop(self, methane):
        """Test B at 300 K against CoolProp"""
        methane.update("DmolarT", 1.0, 300.0)
        assert methane.Bvirial == pytest.approx(
            CP.PropsSI("Bvirial", "T", 300.0, "Dmolar", 1.0, "Methane"), rel=1e-6)

    def test_dB_dT_finite_difference(self, methane):
        """Test dB/dT against a central difference in T"""
        h = 1e-3
        methane.update("DmolarT", 1.0, 300.0 + h)
        B_plus = methane.Bvirial
        methane.update("DmolarT", 1.0, 300.0 - h)
        B_minus = methane.Bvirial
        methane.update("DmolarT", 1.0, 300.0)
        assert methane.dBvirial_dT == pytest.approx((B_plus - B_minus) / (2 * h), rel=1e-6)

    def test_C_and_dC_dT(self, methane):
        """Test C is finite and dC/dT matches a central difference"""
        h = 1e-3
        methane.update("DmolarT", 1.0, 300.0 + h)
        C_plus = methane.Cvirial
        methane.update("DmolarT", 1.0, 300.0 - h)
        C_minus = methane.Cvirial
        methane.update("DmolarT", 1.0, 300.0)
        assert math.isfinite(methane.Cvirial)
        assert methane.dCvirial_dT == pytest.approx((C_plus - C_minus) / (2 * h), rel=1e-5)


# ============================================================================
# FIRST PARTIAL DERIVATIVES
# ============================================================================

class TestFirstPartialDeriv:
    """Test first_partial_deriv identities"""

    @pytest.fixture
    def state(self, water):
        water.update("PT", 2e6, 500.0)
        return water

    def test_cp(self, state):
        """Test (dh/dT)_p = cp"""
        assert state.first_partial_deriv(Param.HMOLAR, Param.T, Param.P) == pytest.approx(
            state.cpmolar, rel=1e-10)

    def test_cv(self, state):
        """Test (du/dT)_rho = cv"""
        assert state.first_partial_deriv("Umolar", "T", "Dmolar") == pytest.approx(
            state.cvmolar, rel=1e-10)

    def test_dpdT_constant_density(self, state):
        """Test (dp/dT)_rho = rho R (1 + delta ar_d - delta tau ar_dt)"""
        delta, tau = state.delta, state.tau
        expected = state.rhomolar * state.gas_constant * (
            1 + delta * state.dalphar_dDelta - delta * tau * state.d2alphar_dDelta_dTau)
        assert state.first_partial_deriv(Param.P, Param.T, Param.DMOLAR) == pytest.approx(
            expected, rel=1e-10)

    def test_dpdT_finite_difference(self, state):
        """Test (dp/dT)_rho against the uncached pressure"""
        T, rho, h = state.T, state.rhomolar, 1e-4
        fd = (state.calc_pressure_nocache(T + h, rho) - state.calc_pressure_nocache(T - h, rho)) / (2 * h)
        assert state.first_partial_deriv(Param.P, Param.T, Param.DMOLAR) == pytest.approx(
            fd, rel=1e-6)

    def test_dsdT_constant_pressure(self, state):
        """Test (ds/dT)_p = cp / T"""
        assert state.first_partial_deriv(Param.SMOLAR, Param.T, Param.P) == pytest.approx(
            state.cpmolar / state.T, rel=1e-10)

    def test_unsupported_parameter(self, state):
        """Test Q is not a valid derivative variable"""
        with pytest.raises(UnsupportedInput):
            state.first_partial_deriv(Param.Q, Param.T, Param.P)


# ============================================================================
# FUGACITY AND CHEMICAL POTENTIAL (PURE)
# ============================================================================

class TestPureFugacity:
    """Test fugacity and chemical potential of a pure fluid"""

    def test_fugacity_coefficient(self, methane):
        """Test ln phi = alphar + delta ar_d - ln(1 + delta ar_d)"""
        methane.update("PT", 5e6, 250.0)
        d_ar = methane.delta * methane.dalphar_dDelta
        expected = math.exp(methane.alphar + d_ar - math.log(1 + d_ar))
        assert methane.fugacity_coefficient(0) == pytest.approx(expected, rel=1e-10)
        assert methane.fugacity(0) == pytest.approx(5e6 * expected, rel=1e-10)

    def test_chemical_potential_is_gibbs_energy(self, water):
        """Test mu = h - T s for a pure fluid"""
        water.update("PT", 1e5, 500.0)
        expected = water.hmolar - water.T * water.smolar
        assert water.chemical_potential(0) == pytest.approx(expected, rel=1e-9)

    def test_saturation_equal_fugacity(self, water):
        """Test saturated liquid and vapor have equal fugacity"""
        water.update("QT", 0.5, 450.0)
        assert water.SatL.fugacity(0) == pytest.approx(water.SatV.fugacity(0), rel=1e-7)

    def test_bad_index(self, water):
        """Test out-of-range component indices raise IndexError"""
        water.update("PT", 1e5, 500.0)
        with pytest.raises(IndexError):
            water.fugacity_coefficient(1)


# ============================================================================
# LIMITS, NAMES AND PHASE CONTROL
# ============================================================================

class TestLimits:
    """Test fluid limits and constants"""

    def test_water_limits(self, water):
        """Test critical and triple-point values"""
        assert water.T_critical == pytest.approx(647.096)
        assert water.p_critical == pytest.approx(22.064e6, rel=1e-6)
        assert water.Ttriple == pytest.approx(273.16)
        assert water.Tmax == pytest.approx(2000.0)
        assert water.Tmax_sat == water.T_critical
        assert water.pmin_sat == pytest.approx(611.65, rel=1e-3)

    def test_mixture_name_and_limits(self):
        """Test mixture names and component-wise limits"""
        mix = ThermodynamicState(["Methane", "Water"], [0.5, 0.5])
        assert mix.name == "Methane&Water"
        assert mix.Ttriple == pytest.approx(273.16)
        assert mix.Tmax == pytest.approx(625.0)
        with pytest.raises(UnsupportedInput, match="pure"):
            mix.Tmax_sat

    def test_molar_mass_mixture(self):
        """Test the molar mass is mole-fraction weighted"""
        mix = ThermodynamicState(["Methane", "Water"], [0.25, 0.75])
        expected = 0.25 * mix.components[0].molar_mass + 0.75 * mix.components[1].molar_mass
        assert mix.molar_mass == pytest.approx(expected, rel=1e-14)


class TestPhaseControl:
    """Test imposing and clearing phases"""

    def test_specify_and_unspecify(self, water):
        """Test imposed_phase follows specify_phase and unspecify_phase"""
        water.specify_phase("phase_gas")
        assert water.imposed_phase == Phase.GAS
        assert water.phase_for_solver == Phase.GAS
        water.unspecify_phase()
        assert water.imposed_phase is None

    def test_two_phase_cannot_be_imposed(self, water):
        """Test twophase is rejected"""
        with pytest.raises(UnsupportedInput):
            water.specify_phase("twophase")

    def test_unknown_phase_name(self, water):
        """Test unknown labels raise UnsupportedInput"""
        with pytest.raises(UnsupportedInput, match="not available"):
            water.specify_phase("plasma")

    def test_mixture_pseudo_critical_phase(self):
        """Test the pseudo-critical classification of a mixture"""
        mix = ThermodynamicState(["Methane", "Water"], [0.5, 0.5])
        Tr, pc = mix.reducing.T, mix.crit.p
        assert mix.mixture_phase_PT(Tr + 50, 2 * pc) == Phase.SUPERCRITICAL
        assert mix.mixture_phase_PT(Tr + 50, 0.5 * pc) == Phase.GAS
        assert mix.mixture_phase_PT(Tr - 50, 2 * pc) == Phase.LIQUID
        assert mix.mixture_phase_PT(Tr - 50, 0.5 * pc) == Phase.GAS


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
