# File: helmholtz_eos/state/phase.py
"""
Phase determination for pure and pseudo-pure fluids

Given the state's temperature (or pressure) and one other input, decide
whether the state is liquid, gas, supercritical or two-phase. Ancillary
curves give a cheap answer away from the saturation curve; otherwise the
saturation solver is called and the quality decides.

On return the state's phase and Q are set. For two-phase states p, rho and
the saturation children are set as well.
"""

from ..core.constants import Param, Phase, Q_GAS, Q_LIQUID, Q_SUPERCRITICAL
from ..core.exceptions import AmbiguousPhase, BelowTriplePoint, UnsupportedInput
from .saturation import SaturationResult, saturation_P, saturation_T


_HSU = (Param.HMOLAR, Param.SMOLAR, Param.UMOLAR)


def _set_single_phase(state, phase: Phase) -> None:
    state._phase = phase
    state._Q = Q_LIQUID if phase == Phase.LIQUID else Q_GAS


def _critical_value(fluid, other: Param) -> float:
    crit = fluid.crit
    values = {
        Param.T: crit.T,
        Param.P: crit.p,
        Param.DMOLAR: crit.rhomolar,
        Param.HMOLAR: crit.hmolar,
        Param.SMOLAR: crit.smolar,
        Param.UMOLAR: crit.umolar,
    }
    if other not in values:
        raise UnsupportedInput(f"Phase determination with {other.value} is not supported")
    return values[other]


def _apply_quality(state, sat: SaturationResult, Q: float) -> None:
    """Classify from the quality: liquid, gas or two-phase (clamped to [0, 1])"""
    eps = state.options.quality_eps
    if Q < -eps:
        _set_single_phase(state, Phase.LIQUID)
    elif Q > 1 + eps:
        _set_single_phase(state, Phase.GAS)
    else:
        state._load_two_phase(sat, min(max(Q, 0.0), 1.0))


def _quality(state, sat: SaturationResult, other: Param, value: float) -> float:
    if other == Param.DMOLAR:
        return sat.quality_from_density(value)
    yL = state.calc_hsu_nocache(sat.T, sat.rhoL, other)
    yV = state.calc_hsu_nocache(sat.T, sat.rhoV, other)
    return (value - yL) / (yV - yL)


# ============================================================================
# TEMPERATURE GIVEN
# ============================================================================

def T_phase_determination(state, other: Param, value: float) -> None:
    """
    Phase of a pure fluid at the state's temperature

    Args:
        state: ThermodynamicState with _T set
        other: Param.P, DMOLAR, HMOLAR, SMOLAR or UMOLAR
        value: Value of other (molar units)

    Raises:
        BelowTriplePoint: T below the triple point
        AmbiguousPhase: p equals the saturation pressure within tolerance
        UnsupportedInput: unsupported other
    """
    fluid = state.components[0]
    options = state.options
    T = state._T

    if T < fluid.Ttriple:
        raise BelowTriplePoint("Temperature", T, fluid.Ttriple)

    if T >= fluid.crit.T:
        state._Q = Q_SUPERCRITICAL
        above = value > _critical_value(fluid, other)
        state._phase = Phase.SUPERCRITICAL if above else Phase.GAS
        return

    anc = fluid.ancillaries
    eps = options.quality_eps

    if other == Param.P:
        if value < (1 - options.pressure_band) * anc.pV(T):
            return _set_single_phase(state, Phase.GAS)
        if value > (1 + options.pressure_band) * anc.pL(T):
            return _set_single_phase(state, Phase.LIQUID)

        sat = saturation_T(state, T)
        if value > sat.pL * (1 + eps):
            return _set_single_phase(state, Phase.LIQUID)
        if value < sat.pV * (1 - eps):
            return _set_single_phase(state, Phase.GAS)
        raise AmbiguousPhase(T, value, sat.pL)

    rhoV, rhoL = anc.rhoV(T), anc.rhoL(T)
    band = options.density_band

    if other == Param.DMOLAR:
        if value < (1 - band) * rhoV:
            return _set_single_phase(state, Phase.GAS)
        if value > (1 + band) * rhoL:
            return _set_single_phase(state, Phase.LIQUID)
    elif other in _HSU:
        vapor = [state.calc_hsu_nocache(T, rho, other)
                 for rho in ((1 - band) * rhoV, rhoV / (1 - band))]
        liquid = [state.calc_hsu_nocache(T, rho, other)
                  for rho in ((1 + band) * rhoL, rhoL / (1 + band))]
        if value > max(vapor):
            return _set_single_phase(state, Phase.GAS)
        if value < min(liquid):
            return _set_single_phase(state, Phase.LIQUID)
    else:
        raise UnsupportedInput(f"Phase determination with T and {other.value} is not supported")

    sat = saturation_T(state, T)
    _apply_quality(state, sat, _quality(state, sat, other, value))


# ============================================================================
# PRESSURE GIVEN
# ============================================================================

def _caloric_bands(state, other: Param, TL: float, TV: float):
    """
    Saturated liquid and vapor values of h, s or u from the caloric
    ancillaries, with their error bands

    Returns:
        (y_liq, y_vap, band_liq, band_vap), or None if the ancillaries are missing
    """
    fluid = state.components[0]
    anc = fluid.ancillaries
    anchor = fluid.hs_anchor
    p = state._p

    if other in (Param.HMOLAR, Param.UMOLAR) and anc.has_enthalpy:
        y_liq = anc.hL(TL) + anchor.hmolar
        y_vap = y_liq + anc.hLV(TL)
        band_liq = anc.hL.max_abs_error
        band_vap = band_liq + anc.hLV.max_abs_error
        if other == Param.UMOLAR:
            factor = state.options.internal_energy_band_factor
            y_liq -= p / anc.rhoL(TL)
            y_vap -= p / anc.rhoV(TV)
            band_liq, band_vap = factor * band_liq, factor * band_vap
        return y_liq, y_vap, band_liq, band_vap

    if other == Param.SMOLAR and anc.has_entropy:
        y_liq = anc.sL(TL) + anchor.smolar
        y_vap = y_liq + anc.sLV(TV)
        band_liq = anc.sL.max_abs_error
        return y_liq, y_vap, band_liq, band_liq + anc.sLV.max_abs_error

    return None


def p_phase_determination(state, other: Param, value: float) -> None:
    """
    Phase of a pure fluid at the state's pressure

    Args:
        state: ThermodynamicState with _p set
        other: Param.T, DMOLAR, HMOLAR, SMOLAR or UMOLAR
        value: Value of other (molar units)

    Raises:
        BelowTriplePoint: p below the triple point
        AmbiguousPhase: T equals the saturation temperature within tolerance
        UnsupportedInput: unsupported other
    """
    fluid = state.components[0]
    options = state.options
    p = state._p

    if p > fluid.crit.p:
        state._Q = Q_SUPERCRITICAL
        if other == Param.DMOLAR:
            above = value < fluid.crit.rhomolar
        else:
            above = value > _critical_value(fluid, other)
        state._phase = Phase.SUPERCRITICAL if above else Phase.LIQUID
        return

    if p < fluid.ptriple:
        raise BelowTriplePoint("Pressure", p, fluid.ptriple)

    anc = fluid.ancillaries
    TL, TV = anc.pL.invert(p), anc.pV.invert(p)
    eps = options.quality_eps

    if other == Param.T:
        if value > (1 + options.pressure_band) * TV:
            return _set_single_phase(state, Phase.GAS)
        if value < (1 - options.pressure_band) * TL:
            return _set_single_phase(state, Phase.LIQUID)

        sat = saturation_P(state, p)
        if value > sat.T * (1 + eps):
            return _set_single_phase(state, Phase.GAS)
        if value < sat.T * (1 - eps):
            return _set_single_phase(state, Phase.LIQUID)
        raise AmbiguousPhase(value, p, sat.T)

    if other in _HSU:
        bands = _caloric_bands(state, other, TL, TV)
        if bands is not None:
            y_liq, y_vap, band_liq, band_vap = bands
            if value > y_vap + band_vap:
                return _set_single_phase(state, Phase.GAS)
            if value < y_liq - band_liq:
                return _set_single_phase(state, Phase.LIQUID)
    elif other != Param.DMOLAR:
        raise UnsupportedInput(f"Phase determination with p and {other.value} is not supported")

    if other == Param.DMOLAR:
        band = options.density_band
        if value < (1 - band) * anc.rhoV(TV):
            return _set_single_phase(state, Phase.GAS)
        if value > (1 + band) * anc.rhoL(TL):
            return _set_single_phase(state, Phase.LIQUID)

    sat = saturation_P(state, p)
    _apply_quality(state, sat, _quality(state, sat, other, value))
