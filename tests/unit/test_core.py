# File: tests/unit/test_core.py
"""
Unit tests for core definitions: exceptions, tags, input conversion and
solver options
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from helmholtz_eos.core import (
    AmbiguousPhase,
    BelowTriplePoint,
    DEFAULT_OPTIONS,
    DensitySolveFailed,
    DomainError,
    InputPair,
    InvalidComposition,
    InvalidDerivative,
    MissingComposition,
    OutOfRange,
    Param,
    Phase,
    SaturationFailed,
    SolverOptions,
    ThermoException,
    UnsupportedDerivative,
    UnsupportedInput,
    mass_to_molar_inputs,
)


def test_imports():
    """Test the top-level package exposes the public API"""
    import helmholtz_eos

    for name in helmholtz_eos.__all__:
        assert hasattr(helmholtz_eos, name)
    assert "Water" in helmholtz_eos.available_fluids()


# ============================================================================
# EXCEPTIONS
# ============================================================================

class TestExceptions:
    """Test the exception hierarchy"""

    @pytest.mark.parametrize("exc", [
        InvalidComposition("x"),
        MissingComposition(2),
        UnsupportedInput("x"),
        UnsupportedDerivative(3, 0),
        BelowTriplePoint("Temperature", 200.0, 273.16),
        OutOfRange("x"),
        InvalidDerivative("Residual", 0, 1, 1.0, 0.5),
        DensitySolveFailed(300.0, 1e5, 50000.0),
        SaturationFailed(400.0),
        AmbiguousPhase(373.0, 101325, 101325),
    ])
    def test_all_derive_from_thermo_exception(self, exc):
        """Test every package error is a ThermoException"""
        assert isinstance(exc, ThermoException)

    def test_builtin_bases(self):
        """Test domain and input errors are ValueErrors, derivative errors ArithmeticErrors"""
        assert isinstance(BelowTriplePoint("Pressure", 1.0, 611.655), (DomainError, ValueError))
        assert isinstance(UnsupportedInput("x"), ValueError)
        assert isinstance(InvalidDerivative("Residual", 0, 0, 1.0, 1.0), ArithmeticError)
        assert isinstance(SaturationFailed(300.0), DensitySolveFailed)

    def test_messages(self):
        """Test messages carry the offending values"""
        assert "below the triple point value" in str(BelowTriplePoint("Temperature", 200.0, 273.16))
        assert "n_tau=3" in str(UnsupportedDerivative(3, 0))
        msg = str(DensitySolveFailed(300.0, 1e5, 50000.0, "did not converge"))
        assert "T=300 K" in msg
        assert "did not converge" in msg
        assert "p=100000 Pa" in str(SaturationFailed(400.0, p=1e5))

    def test_attributes(self):
        """Test exceptions keep their inputs as attributes"""
        exc = BelowTriplePoint("Temperature", 200.0, 273.16)
        assert exc.value == 200.0
        assert exc.limit == 273.16
        assert MissingComposition(3).n_components == 3
        assert OutOfRange("x", T=300.0, value=5.0).T == 300.0


# ============================================================================
# TAGS
# ============================================================================

class TestInputPair:
    """Test input pair parsing and mass conversion"""

    def test_parse_forms(self):
        """Test members, names and short tags are accepted"""
        assert InputPair.parse(InputPair.PT_INPUTS) is InputPair.PT_INPUTS
        assert InputPair.parse("PT_INPUTS") is InputPair.PT_INPUTS
        assert InputPair.parse("HmassP") is InputPair.HmassP_INPUTS

    def test_parse_unknown(self):
        """Test unknown pairs raise UnsupportedInput"""
        with pytest.raises(UnsupportedInput, match="not yet supported"):
            InputPair.parse("HS")

    def test_mass_based(self):
        """Test mass-based flags"""
        assert InputPair.DmassT_INPUTS.is_mass_based
        assert not InputPair.DmolarT_INPUTS.is_mass_based
        assert not InputPair.QT_INPUTS.is_mass_based

    def test_mass_to_molar_density(self):
        """Test densities divide by the molar mass"""
        pair, v1, v2 = mass_to_molar_inputs(InputPair.DmassT_INPUTS, 1000.0, 300.0, 0.018)
        assert pair is InputPair.DmolarT_INPUTS
        assert v1 == pytest.approx(1000.0 / 0.018)
        assert v2 == 300.0

    def test_mass_to_molar_energy(self):
        """Test energies and entropies multiply by the molar mass"""
        pair, v1, v2 = mass_to_molar_inputs(InputPair.DmassHmass_INPUTS, 500.0, 2e6, 0.02)
        assert pair is InputPair.DmolarHmolar_INPUTS
        assert v1 == pytest.approx(25000.0)
        assert v2 == pytest.approx(40000.0)

        pair, v1, v2 = mass_to_molar_inputs(InputPair.PSmass_INPUTS, 1e5, 7000.0, 0.02)
        assert pair is InputPair.PSmolar_INPUTS
        assert v1 == 1e5
        assert v2 == pytest.approx(140.0)

    def test_molar_pair_passes_through(self):
        """Test molar pairs are returned unchanged"""
        assert mass_to_molar_inputs(InputPair.PT_INPUTS, 1e5, 300.0, 0.018) == (
            InputPair.PT_INPUTS, 1e5, 300.0)


class TestPhaseAndParam:
    """Test phase and parameter parsing"""

    @pytest.mark.parametrize("text, phase", [
        ("liquid", Phase.LIQUID),
        ("GAS", Phase.GAS),
        ("phase_supercritical", Phase.SUPERCRITICAL),
        (" twophase ", Phase.TWOPHASE),
    ])
    def test_phase_parse(self, text, phase):
        """Test case, padding and the phase_ prefix are ignored"""
        assert Phase.parse(text) is phase

    def test_phase_parse_unknown(self):
        """Test unknown labels raise UnsupportedInput"""
        with pytest.raises(UnsupportedInput, match="Phase 'solid' not available"):
            Phase.parse("solid")

    def test_homogeneous(self):
        """Test only single-phase labels are homogeneous"""
        assert Phase.LIQUID.is_homogeneous
        assert Phase.SUPERCRITICAL_GAS.is_homogeneous
        assert not Phase.TWOPHASE.is_homogeneous
        assert not Phase.UNKNOWN.is_homogeneous

    def test_param_parse(self):
        """Test parameters parse by value or member name"""
        assert Param.parse("Hmolar") is Param.HMOLAR
        assert Param.parse("dmolar") is Param.DMOLAR
        assert Param.parse("tau") is Param.TAU
        with pytest.raises(UnsupportedInput):
            Param.parse("Gmolar")


# ============================================================================
# SOLVER OPTIONS
# ============================================================================

class TestSolverOptions:
    """Test the solver policy dataclass"""

    def test_defaults(self):
        """Test default tolerances and bands"""
        assert DEFAULT_OPTIONS.max_iterations == 100
        assert DEFAULT_OPTIONS.density_band == 0.05
        assert DEFAULT_OPTIONS.pressure_band == 0.02

    def test_with_overrides(self):
        """Test overrides return a modified copy"""
        options = DEFAULT_OPTIONS.with_overrides(max_iterations=200, brent_rtol=1e-10)
        assert options.max_iterations == 200
        assert options.brent_rtol == 1e-10
        assert DEFAULT_OPTIONS.max_iterations == 100

    def test_frozen(self):
        """Test options are immutable"""
        with pytest.raises(Exception):  # FrozenInstanceError
            SolverOptions().max_iterations = 5

    def test_unknown_override(self):
        """Test unknown fields raise TypeError"""
        with pytest.raises(TypeError):
            DEFAULT_OPTIONS.with_overrides(not_an_option=1)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
