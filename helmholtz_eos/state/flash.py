# File: helmholtz_eos/state/flash.py
"""
Flash routines: from a pair of molar inputs to (T, p, rho, phase, Q)

Each routine fills the state's input fields and phase; ThermodynamicState
.update runs the post-flash checks. The DISPATCH table maps every molar
input pair to its routine.
"""

from ..core.constants import InputPair, Param, Phase, Q_GAS, Q_LIQUID, Q_SUPERCRITICAL
from ..core.exceptions import AmbiguousPhase, OutOfRange, UnsupportedInput
from ..core.numerics import SOLVER_ERRORS, bounded_minimum, brent
from .phase import T_phase_determination, p_phase_determination
from .saturation import saturation_D, saturation_P, saturation_T
from .solvers import solver_for_rho_given_T_oneof_HSU, solver_rho_Tp


def _sentinel_Q(phase: Phase) -> float:
    if phase == Phase.LIQUID:
        return Q_LIQUID
    if phase in (Phase.SUPERCRITICAL, Phase.SUPERCRITICAL_GAS, Phase.SUPERCRITICAL_LIQUID):
        return Q_SUPERCRITICAL
    return Q_GAS


def _phase_from_T_rho(T: float, rho: float, Tc: float, rhoc: float) -> Phase:
    """Single-phase label from the position relative to the (pseudo-)critical point"""
    if T >= Tc:
        return Phase.SUPERCRITICAL if rho > rhoc else Phase.GAS
    return Phase.LIQUID if rho > rhoc else Phase.GAS


def _require_pure(state, what: str) -> None:
    if not state.is_pure:
        raise UnsupportedInput(f"{what} inputs are not supported for mixtures; "
                               f"use PT or DmolarT")


def _brent_T(state, resid, T_low: float, T_high: float, what: str) -> float:
    """Brent on temperature; bracketing or convergence failures become OutOfRange"""
    try:
        return brent(resid, T_low, T_high, state.options)
    except SOLVER_ERRORS as e:
        raise OutOfRange(f"Unable to solve for T given {what} in [{T_low:g}, {T_high:g}] K: {e}") from e


def _brent_T_turning(state, resid, T_low: float, T_high: float, what: str) -> float:
    """
    Brent on temperature for a residual that may turn once inside the bracket

    Liquid water at fixed density has a pressure minimum near its density
    maximum, so (rho, p) can have two roots. When the ends share a sign the
    bracket is split at the turning point and the lower-temperature root is
    returned.
    """
    r_low, r_high = resid(T_low), resid(T_high)
    if r_low * r_high <= 0:
        return _brent_T(state, resid, T_low, T_high, what)

    sign = 1.0 if r_low > 0 else -1.0
    try:
        T_turn = bounded_minimum(lambda T: sign * resid(T), T_low, T_high, state.options)
    except SOLVER_ERRORS as e:
        raise OutOfRange(f"Unable to solve for T given {what} in [{T_low:g}, {T_high:g}] K: "
                         f"no sign change and no turning point ({e})") from e
    if sign * resid(T_turn) > 0:
        raise OutOfRange(f"Unable to solve for T given {what} in [{T_low:g}, {T_high:g}] K: "
                         f"no sign change")
    return _brent_T(state, resid, T_low, T_turn, what)


def _y_of(state, other: Param):
    """y(T, rho) evaluated with the EOS, for other in {P, H, S, U}"""
    if other == Param.P:
        return state.calc_pressure_nocache
    return lambda T, rho: state.calc_hsu_nocache(T, rho, other)


# ============================================================================
# PT
# ============================================================================

def PT_flash(state, p: float, T: float) -> None:
    state._T, state._p = T, p

    if state.imposed_phase is not None:
        state._phase = state.imposed_phase
    elif state.is_pure:
        try:
            T_phase_determination(state, Param.P, p)
        except AmbiguousPhase as e:
            state._phase = Phase.LIQUID if p >= e.saturation_value else Phase.GAS
    else:
        state._phase = state.mixture_phase_PT(T, p)

    state._Q = _sentinel_Q(state._phase)
    state._rhomolar = solver_rho_Tp(state, T, p)


# ============================================================================
# DHSU_T: temperature and one of density, enthalpy, entropy, internal energy
# ============================================================================

def DHSU_T_flash(state, T: float, other: Param, value: float) -> None:
    if not state.is_pure and other != Param.DMOLAR:
        raise UnsupportedInput(f"T and {other.value} inputs are not supported for mixtures")
    state._T = T

    if state.imposed_phase is not None:
        state._phase = state.imposed_phase
    elif state.is_pure:
        T_phase_determination(state, other, value)
        if state._phase == Phase.TWOPHASE:
            return
    else:
        state._phase = _phase_from_T_rho(T, value, state.reducing.T, state.reducing.rhomolar)

    state._Q = _sentinel_Q(state._phase)
    if other == Param.DMOLAR:
        state._rhomolar = value
    else:
        state._rhomolar = solver_for_rho_given_T_oneof_HSU(state, T, value, other)
    state._p = state.calc_pressure_nocache(T, state._rhomolar)


# ============================================================================
# PHSU_D: density and one of pressure, enthalpy, entropy, internal energy
# ============================================================================

def _two_phase_at_density(state, rho: float, other: Param, value: float, Tsat: float) -> None:
    """Two-phase solve with rho fixed below the saturation temperature Tsat"""
    if other == Param.P:
        sat = saturation_P(state, value)
        Q = sat.quality_from_density(rho)
        if not 0 <= Q <= 1:
            raise OutOfRange(f"p [{value:g} Pa] and rho [{rho:g} mol/m^3] are not a "
                             f"two-phase state", T=sat.T, value=value)
        state._load_two_phase(sat, Q)
        return

    def resid(T):
        sat = saturation_T(state, T)
        yL = state.calc_hsu_nocache(T, sat.rhoL, other)
        yV = state.calc_hsu_nocache(T, sat.rhoV, other)
        return sat.quality_from_density(rho) - (value - yL) / (yV - yL)

    fluid = state.components[0]
    T = _brent_T(state, resid, fluid.Ttriple, Tsat, f"{other.value} and Dmolar (two-phase)")
    sat = saturation_T(state, T)
    state._load_two_phase(sat, min(max(sat.quality_from_density(rho), 0.0), 1.0))


def PHSU_D_flash(state, rho: float, other: Param, value: float) -> None:
    _require_pure(state, f"Dmolar and {other.value}")
    fluid = state.components[0]
    y = _y_of(state, other)
    T_high = state.options.Tmax_factor * fluid.Tmax
    T_low = fluid.Ttriple
    state._rhomolar = rho

    def resid(T):
        return y(T, rho) - value

    in_dome = fluid.triple_vapor.rhomolar < rho < fluid.triple_liquid.rhomolar
    if state.imposed_phase is None and in_dome:
        sat = saturation_D(state, rho)
        if value <= y(sat.T, rho):
            _two_phase_at_density(state, rho, other, value, sat.T)
            return
        T_low = sat.T

    T = _brent_T_turning(state, resid, T_low, T_high, f"{other.value} and Dmolar")
    state._T = T
    if state.imposed_phase is not None:
        state._phase = state.imposed_phase
    else:
        state._phase = _phase_from_T_rho(T, rho, fluid.crit.T, fluid.crit.rhomolar)
    state._Q = _sentinel_Q(state._phase)
    state._p = value if other == Param.P else state.calc_pressure_nocache(T, rho)


# ============================================================================
# HSU_P: pressure and one of enthalpy, entropy, internal energy
# ============================================================================

def HSU_P_flash(state, p: float, other: Param, value: float) -> None:
    _require_pure(state, f"P and {other.value}")
    fluid = state.components[0]
    state._p = p

    if state.imposed_phase is not None:
        state._phase = state.imposed_phase
    else:
        p_phase_determination(state, other, value)
        if state._phase == Phase.TWOPHASE:
            return

    T_high = state.options.Tmax_factor * fluid.Tmax
    if p > fluid.crit.p:
        T_low = fluid.Ttriple
    elif state._phase == Phase.LIQUID:
        T_low, T_high = fluid.Ttriple, saturation_P(state, p).T
    elif state._phase == Phase.GAS:
        T_low = saturation_P(state, p).T
    else:
        T_low = fluid.Ttriple

    def resid(T):
        rho = solver_rho_Tp(state, T, p)
        return state.calc_hsu_nocache(T, rho, other) - value

    T = _brent_T(state, resid, T_low, T_high, f"P and {other.value}")
    state._T = T
    state._rhomolar = solver_rho_Tp(state, T, p)
    state._Q = _sentinel_Q(state._phase)


# ============================================================================
# QT and PQ
# ============================================================================

def _check_quality(Q: float) -> None:
    if not 0 <= Q <= 1:
        raise OutOfRange(f"Quality [{Q:g}] must be in [0, 1]", value=Q)


def QT_flash(state, Q: float, T: float) -> None:
    _require_pure(state, "QT")
    _check_quality(Q)
    state._load_two_phase(saturation_T(state, T), Q)


def PQ_flash(state, p: float, Q: float) -> None:
    _require_pure(state, "PQ")
    _check_quality(Q)
    state._load_two_phase(saturation_P(state, p, Q), Q)


# ============================================================================
# DISPATCH TABLE
# ============================================================================

DISPATCH = {
    InputPair.PT_INPUTS: lambda s, v1, v2: PT_flash(s, p=v1, T=v2),
    InputPair.DmolarT_INPUTS: lambda s, v1, v2: DHSU_T_flash(s, v2, Param.DMOLAR, v1),
    InputPair.SmolarT_INPUTS: lambda s, v1, v2: DHSU_T_flash(s, v2, Param.SMOLAR, v1),
    InputPair.HmolarT_INPUTS: lambda s, v1, v2: DHSU_T_flash(s, v2, Param.HMOLAR, v1),
    InputPair.TUmolar_INPUTS: lambda s, v1, v2: DHSU_T_flash(s, v1, Param.UMOLAR, v2),
    InputPair.DmolarP_INPUTS: lambda s, v1, v2: PHSU_D_flash(s, v1, Param.P, v2),
    InputPair.DmolarHmolar_INPUTS: lambda s, v1, v2: PHSU_D_flash(s, v1, Param.HMOLAR, v2),
    InputPair.DmolarSmolar_INPUTS: lambda s, v1, v2: PHSU_D_flash(s, v1, Param.SMOLAR, v2),
    InputPair.DmolarUmolar_INPUTS: lambda s, v1, v2: PHSU_D_flash(s, v1, Param.UMOLAR, v2),
    InputPair.HmolarP_INPUTS: lambda s, v1, v2: HSU_P_flash(s, v2, Param.HMOLAR, v1),
    InputPair.PSmolar_INPUTS: lambda s, v1, v2: HSU_P_flash(s, v1, Param.SMOLAR, v2),
    InputPair.PUmolar_INPUTS: lambda s, v1, v2: HSU_P_flash(s, v1, Param.UMOLAR, v2),
    InputPair.QT_INPUTS: lambda s, v1, v2: QT_flash(s, v1, v2),
    InputPair.PQ_INPUTS: lambda s, v1, v2: PQ_flash(s, v1, v2),
}


def flash(state, pair: InputPair, value1: float, value2: float) -> None:
    """
    Route a molar input pair to its flash routine

    Raises:
        UnsupportedInput: for pairs with no routine (mass pairs must be
            converted first)
    """
    try:
        routine = DISPATCH[pair]
    except KeyError:
        raise UnsupportedInput(f"This pair of inputs [{pair.value}] is not yet supported") from None
    routine(state, value1, value2)
