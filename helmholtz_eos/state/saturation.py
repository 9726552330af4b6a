# File: helmholtz_eos/state/saturation.py
"""
Pure-fluid vapor-liquid equilibrium

saturation_T solves the equal-pressure and equal-Gibbs-energy conditions
at fixed temperature with Newton's method in (delta_L, delta_V), written
in the reduced functions

    J(delta) = delta (1 + delta dalphar/ddelta)
    K(delta) = delta dalphar/ddelta + alphar + ln(delta)

so that equilibrium is J_L = J_V and K_L = K_V.

Reference:
    Akasaka, R. (2008). J. Therm. Sci. Tech. 3, 442-451
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from scipy import optimize

from ..core.config import SolverOptions
from ..core.exceptions import (
    BelowTriplePoint,
    DensitySolveFailed,
    OutOfRange,
    SaturationFailed,
    UnsupportedInput,
)
from ..core.numerics import SOLVER_ERRORS, brent, secant
from ..fluids.descriptor import HelmholtzFluid
from .solvers import solver_rho_Tp


@dataclass(frozen=True)
class SaturationResult:
    """Saturated liquid and vapor at one temperature"""
    T: float        # Temperature (K)
    pL: float       # Bubble pressure (Pa)
    pV: float       # Dew pressure (Pa)
    rhoL: float     # Saturated liquid molar density (mol/m^3)
    rhoV: float     # Saturated vapor molar density (mol/m^3)

    def pressure(self, Q: float) -> float:
        return Q * self.pV + (1 - Q) * self.pL

    def rhomolar(self, Q: float) -> float:
        return 1 / (Q / self.rhoV + (1 - Q) / self.rhoL)

    def quality_from_density(self, rhomolar: float) -> float:
        return (1 / rhomolar - 1 / self.rhoL) / (1 / self.rhoV - 1 / self.rhoL)


def _pure_fluid(state) -> HelmholtzFluid:
    if not state.is_pure:
        raise UnsupportedInput("Saturation calculations are only available for pure "
                               "and pseudo-pure fluids")
    return state.components[0]


def _check_temperature(fluid: HelmholtzFluid, T: float) -> None:
    if T < fluid.Ttriple:
        raise BelowTriplePoint("Temperature", T, fluid.Ttriple)
    if T >= fluid.crit.T:
        raise OutOfRange(f"Saturation temperature [{T:g} K] must be below the critical "
                         f"temperature [{fluid.crit.T:g} K]", T=T, value=T)


# ============================================================================
# Saturation at given temperature
# ============================================================================

def _JK(fluid: HelmholtzFluid, tau: float, delta: float) -> Tuple[float, float, float, float]:
    """J, K and their delta derivatives"""
    ar = fluid.alphar_deriv(0, 0, tau, delta)
    ar_d = fluid.alphar_deriv(0, 1, tau, delta)
    ar_dd = fluid.alphar_deriv(0, 2, tau, delta)
    J = delta * (1 + delta * ar_d)
    K = delta * ar_d + ar + math.log(delta)
    dJ = 1 + 2 * delta * ar_d + delta**2 * ar_dd
    dK = 2 * ar_d + delta * ar_dd + 1 / delta
    return J, K, dJ, dK


def _newton_JK(fluid: HelmholtzFluid, tau: float, deltaL: float, deltaV: float,
               options: SolverOptions) -> Optional[Tuple[float, float]]:
    """Newton iteration on J and K; None if it does not converge"""
    for _ in range(options.max_iterations):
        try:
            JL, KL, dJL, dKL = _JK(fluid, tau, deltaL)
            JV, KV, dJV, dKV = _JK(fluid, tau, deltaV)
        except SOLVER_ERRORS:
            return None

        if abs(JL - JV) + abs(KL - KV) < options.saturation_tol:
            return deltaL, deltaV

        det = dJV * dKL - dJL * dKV
        if det == 0 or not math.isfinite(det):
            return None
        deltaL += ((KV - KL) * dJV - (JV - JL) * dKV) / det
        deltaV += ((KV - KL) * dJL - (JV - JL) * dKL) / det
        if not (deltaL > 0 and deltaV > 0):
            return None
    return None


def _hybr_JK(fluid: HelmholtzFluid, tau: float, deltaL: float, deltaV: float,
             options: SolverOptions) -> Optional[Tuple[float, float]]:
    """Same equations through scipy's hybrid Powell solver"""

    def residual(d):
        dL, dV = d
        if dL <= 0 or dV <= 0:
            return [1e10, 1e10]
        JL, KL, _, _ = _JK(fluid, tau, dL)
        JV, KV, _, _ = _JK(fluid, tau, dV)
        return [JV - JL, KV - KL]

    try:
        sol = optimize.root(residual, [deltaL, deltaV], method='hybr',
                            options={'xtol': 1e-12, 'maxfev': 20 * options.max_iterations})
    except SOLVER_ERRORS:
        return None
    if not sol.success or not np.all(np.isfinite(sol.x)):
        return None
    if np.sum(np.abs(residual(sol.x))) > 10 * options.saturation_tol:
        return None
    return float(sol.x[0]), float(sol.x[1])


def _saturation_T_pseudo_pure(state, fluid: HelmholtzFluid, T: float) -> SaturationResult:
    """Pseudo-pure fluids take pressures from the ancillaries"""
    anc = fluid.ancillaries
    pL, pV = anc.pL(T), anc.pV(T)
    rhoL = solver_rho_Tp(state, T, pL, rho_guess=anc.rhoL(T))
    rhoV = solver_rho_Tp(state, T, pV, rho_guess=anc.rhoV(T))
    return SaturationResult(T=T, pL=pL, pV=pV, rhoL=rhoL, rhoV=rhoV)


def saturation_T(state, T: float, options: Optional[SolverOptions] = None) -> SaturationResult:
    """
    Saturated liquid and vapor states at temperature T

    Args:
        state: ThermodynamicState of a pure or pseudo-pure fluid (not modified)
        T: Temperature (K), Ttriple <= T < Tc
        options: Solver options (default: the state's)

    Returns:
        SaturationResult

    Raises:
        BelowTriplePoint: T < Ttriple
        OutOfRange: T >= Tc
        SaturationFailed: no converged, distinct pair of densities
    """
    fluid = _pure_fluid(state)
    options = options or state.options
    _check_temperature(fluid, T)

    if fluid.pseudo_pure:
        return _saturation_T_pseudo_pure(state, fluid, T)

    rhor = fluid.reducing.rhomolar
    tau = fluid.reducing.T / T
    deltaL0 = fluid.ancillaries.rhoL(T) / rhor
    deltaV0 = fluid.ancillaries.rhoV(T) / rhor

    deltas = _newton_JK(fluid, tau, deltaL0, deltaV0, options)
    if deltas is None:
        deltas = _hybr_JK(fluid, tau, deltaL0, deltaV0, options)
    if deltas is None:
        raise SaturationFailed(T, "Maxwell criteria did not converge")

    deltaL, deltaV = deltas
    if abs(deltaL - deltaV) < options.saturation_min_separation:
        raise SaturationFailed(T, "liquid and vapor densities collapsed "
                                  f"(deltaL={deltaL:g}, deltaV={deltaV:g})")
    if deltaL < deltaV:
        deltaL, deltaV = deltaV, deltaL

    rhoL, rhoV = deltaL * rhor, deltaV * rhor
    return SaturationResult(T=T, pL=fluid.pressure(T, rhoL), pV=fluid.pressure(T, rhoV),
                            rhoL=rhoL, rhoV=rhoV)


# ============================================================================
# Saturation at given pressure or density
# ============================================================================

def _solve_for_T(state, fluid: HelmholtzFluid, resid: Callable[[float], float],
                 T0: float, target: str, options: SolverOptions) -> float:
    """
    Secant from the ancillary guess, then Brent on [Ttriple, Tc(1 - 1e-9)]

    resid must handle T at the top of the bracket itself, where the
    saturation solver is not usable.
    """
    T_low, T_high = fluid.Ttriple, fluid.crit.T * (1 - 1e-9)
    try:
        T = secant(resid, T0, T0 * (1 - 1e-4), options)
        if T_low <= T <= T_high:
            return T
        detail = f"secant left [{T_low:g}, {T_high:g}] K at {T:g} K"
    except (*SOLVER_ERRORS, DensitySolveFailed) as e:
        detail = f"secant failed: {e}"

    try:
        return brent(resid, T_low, T_high, options)
    except (*SOLVER_ERRORS, DensitySolveFailed) as e:
        raise SaturationFailed(
            math.nan, f"unable to find saturation temperature for {target}: {detail}; "
                      f"Brent failed: {e}") from e


def saturation_P(state, p: float, Q: float = 0.0,
                 options: Optional[SolverOptions] = None) -> SaturationResult:
    """
    Saturated liquid and vapor states at pressure p

    Args:
        state: ThermodynamicState of a pure or pseudo-pure fluid (not modified)
        p: Pressure (Pa), ptriple <= p < pc
        Q: Quality used to weight bubble and dew pressures (pseudo-pure fluids)

    Raises:
        BelowTriplePoint: p < ptriple
        OutOfRange: p >= pc
        SaturationFailed: saturation temperature not found
    """
    fluid = _pure_fluid(state)
    options = options or state.options
    if p < fluid.ptriple:
        raise BelowTriplePoint("Pressure", p, fluid.ptriple)
    if p >= fluid.crit.p:
        raise OutOfRange(f"Saturation pressure [{p:g} Pa] must be below the critical "
                         f"pressure [{fluid.crit.p:g} Pa]", value=p)

    T_high = fluid.crit.T * (1 - 1e-9)

    def resid(T):
        if T >= T_high:
            return (fluid.crit.p - p) / p
        return (saturation_T(state, T, options).pressure(Q) - p) / p

    anc = fluid.ancillaries
    T0 = (anc.pL if Q < 0.5 else anc.pV).invert(p)
    T = _solve_for_T(state, fluid, resid, T0, f"p={p:g} Pa", options)
    return saturation_T(state, T, options)


def saturation_D(state, rhomolar: float,
                 options: Optional[SolverOptions] = None) -> SaturationResult:
    """
    Saturation state whose liquid (rho > rhoc) or vapor (rho < rhoc)
    density equals rhomolar

    Raises:
        OutOfRange: rhomolar outside the triple-point densities
        SaturationFailed: saturation temperature not found
    """
    fluid = _pure_fluid(state)
    options = options or state.options
    if not fluid.triple_vapor.rhomolar < rhomolar < fluid.triple_liquid.rhomolar:
        raise OutOfRange(f"Density [{rhomolar:g} mol/m^3] is outside the saturation dome",
                         value=rhomolar)

    liquid_side = rhomolar > fluid.crit.rhomolar
    T_high = fluid.crit.T * (1 - 1e-9)

    def resid(T):
        if T >= T_high:
            return (fluid.crit.rhomolar - rhomolar) / rhomolar
        sat = saturation_T(state, T, options)
        return ((sat.rhoL if liquid_side else sat.rhoV) - rhomolar) / rhomolar

    anc = fluid.ancillaries.rhoL if liquid_side else fluid.ancillaries.rhoV
    try:
        T0 = anc.invert(rhomolar)
    except OutOfRange:
        T0 = 0.5 * (fluid.Ttriple + fluid.crit.T)
    T = _solve_for_T(state, fluid, resid, T0, f"rho={rhomolar:g} mol/m^3", options)
    return saturation_T(state, T, options)
