# File: helmholtz_eos/state/solvers.py
"""
Density solvers

- solver_rho_Tp: rho(T, p) by Newton with the analytic dp/drho, then secant,
  then Brent on a density bracket
- solver_rho_Tp_SRK: Soave-Redlich-Kwong starting guess
- solver_for_rho_given_T_oneof_HSU: rho(T, y) with y one of h, s, u

None of these mutate the state they are given.
"""

import math
import warnings
from typing import Optional

import numpy as np

from ..core.constants import Param, Phase
from ..core.exceptions import DensitySolveFailed, OutOfRange, UnsupportedInput
from ..core.numerics import SOLVER_ERRORS, brent, is_in_closed_range, newton, secant, solve_cubic


# ============================================================================
# SRK GUESS
# ============================================================================

def solver_rho_Tp_SRK(state, T: float, p: float, phase: Phase) -> float:
    """
    Molar density from the Soave-Redlich-Kwong cubic, k_ij = 0

    Args:
        state: ThermodynamicState (components and mole fractions are used)
        T: Temperature (K)
        p: Pressure (Pa)
        phase: Selects the root when the cubic has three real roots

    Returns:
        Molar density (mol/m^3)

    Raises:
        UnsupportedInput: multiple roots and a phase with no root rule
    """
    R = state.gas_constant
    x = np.asarray(state.mole_fractions, dtype=float)

    a_i = np.empty(state.N)
    b_i = np.empty(state.N)
    for k, fluid in enumerate(state.components):
        Tc, pc, omega = fluid.crit.T, fluid.crit.p, fluid.acentric
        m = 0.480 + 1.574 * omega - 0.176 * omega**2
        b_i[k] = 0.08664 * R * Tc / pc
        a_i[k] = 0.42747 * (R * Tc)**2 / pc * (1 + m * (1 - math.sqrt(T / Tc)))**2

    a = float(x @ np.sqrt(np.outer(a_i, a_i)) @ x)
    b = float(x @ b_i)
    A = a * p / (R * T)**2
    B = b * p / (R * T)

    Z = solve_cubic(1, -1, A - B - B**2, -A * B)
    rhos = [p / (z * R * T) for z in Z]
    positive = [rho for rho in rhos if rho > 0]

    if len(rhos) == 1:
        rho = rhos[0]
    elif len(positive) == 1:
        rho = positive[0]
    elif phase in (Phase.LIQUID, Phase.SUPERCRITICAL, Phase.SUPERCRITICAL_LIQUID):
        rho = max(rhos)
    elif phase in (Phase.GAS, Phase.SUPERCRITICAL_GAS):
        rho = min(rhos)
    else:
        raise UnsupportedInput(f"Cubic has multiple roots and phase '{phase.value}' "
                               f"does not select one")

    if phase in (Phase.GAS, Phase.SUPERCRITICAL_GAS) and rho <= 0:
        rho = p / (R * T)

    if state.is_pure and phase == Phase.LIQUID:
        fluid = state.components[0]
        if T < fluid.crit.T:
            rho = max(rho, fluid.ancillaries.rhoL(T))
    return rho


# ============================================================================
# RHO(T, P)
# ============================================================================

def solver_rho_Tp(state, T: float, p: float, rho_guess: Optional[float] = None) -> float:
    """
    Molar density at given temperature and pressure

    Newton with the analytic derivative of p with respect to rho, falling
    back to the secant method and finally to Brent on a density bracket.
    The SRK root for the state's phase is the starting point unless
    rho_guess is given.

    Args:
        state: ThermodynamicState (imposed phase, else current phase)
        T: Temperature (K)
        p: Pressure (Pa)
        rho_guess: Optional starting density (mol/m^3)

    Returns:
        Molar density (mol/m^3)

    Raises:
        DensitySolveFailed: no stage gave a positive finite root
    """
    R = state.gas_constant
    Tr, rhor = state.reducing.T, state.reducing.rhomolar
    tau = Tr / T
    options = state.options

    if rho_guess is None:
        rho_guess = solver_rho_Tp_SRK(state, T, p, state.phase_for_solver)

    def alphar(n_tau, n_delta, delta):
        return state.calc_alphar_deriv_nocache(n_tau, n_delta, state.mole_fractions, tau, delta)

    def resid(rho):
        delta = rho / rhor
        return (rho * R * T * (1 + delta * alphar(0, 1, delta)) - p) / p

    def dresid_drho(rho):
        delta = rho / rhor
        return R * T * (1 + 2 * delta * alphar(0, 1, delta)
                        + delta**2 * alphar(0, 2, delta)) / p

    try:
        rho = newton(resid, rho_guess, dresid_drho, options)
        if rho > 0:
            return rho
        detail = f"Newton converged to a non-positive density ({rho:g})"
    except SOLVER_ERRORS as e:
        detail = f"Newton failed: {e}"

    warnings.warn(f"solver_rho_Tp at T={T:g} K, p={p:g} Pa: {detail}; trying secant",
                  RuntimeWarning)

    try:
        rho = secant(resid, rho_guess, 1.0001 * rho_guess, options)
        if rho > 0:
            return rho
        detail += f"; secant converged to {rho:g}"
    except SOLVER_ERRORS as e:
        detail += f"; secant failed: {e}"

    warnings.warn(f"solver_rho_Tp at T={T:g} K, p={p:g} Pa: {detail}; trying Brent",
                  RuntimeWarning)

    rho_low, rho_high, open_top = _rho_Tp_bracket(state, T)
    r_low, r_high = resid(rho_low), resid(rho_high)
    # Compressed liquid can be denser than the triple-point liquid
    for _ in range(4 if open_top else 0):
        if not (math.isfinite(r_high) and r_high < 0 and r_low < 0):
            break
        rho_high *= 1.25
        r_high = resid(rho_high)
    if not (math.isfinite(r_low) and math.isfinite(r_high)) or r_low * r_high > 0:
        raise DensitySolveFailed(
            T, p, rho_guess,
            f"{detail}; no sign change on [{rho_low:g}, {rho_high:g}] mol/m^3")
    try:
        return brent(resid, rho_low, rho_high, options)
    except SOLVER_ERRORS as e:
        raise DensitySolveFailed(T, p, rho_guess, f"{detail}; Brent failed: {e}") from e


def _rho_Tp_bracket(state, T: float):
    """
    Density bracket for the last-resort Brent stage of solver_rho_Tp

    Below Tc a pure fluid's gas or liquid phase is confined to its side of
    the ancillary saturation densities; otherwise the bracket spans a small
    gas density to the densest triple-point liquid of the components.

    Returns:
        (rho_low, rho_high, open_top); open_top is False when rho_high is
        the saturated vapor bound and must not be widened
    """
    options = state.options
    rho_low = options.rho_min_gas
    rho_high = max(fluid.triple_liquid.rhomolar for fluid in state.components)

    if state.is_pure:
        fluid = state.components[0]
        phase = state.phase_for_solver
        if T < fluid.crit.T and phase == Phase.GAS:
            return rho_low, (1 + options.density_band) * fluid.ancillaries.rhoV(T), False
        if T < fluid.crit.T and phase == Phase.LIQUID:
            rho_low = (1 - options.density_band) * fluid.ancillaries.rhoL(T)
    return rho_low, rho_high, True


# ============================================================================
# RHO(T, Y), Y ONE OF H, S, U
# ============================================================================

def solver_for_rho_given_T_oneof_HSU(state, T: float, value: float, other: Param) -> float:
    """
    Molar density at given temperature and molar enthalpy, entropy or
    internal energy (pure fluids)

    Above the critical temperature the density is bracketed by Brent's
    method between 1e-10, rhoc and the triple-point liquid density. Below
    it, the state's phase selects the branch: secant from an interpolated
    guess for liquid, Brent up to the saturated vapor density for gas.

    Args:
        state: ThermodynamicState of a pure fluid (phase must be set)
        T: Temperature (K)
        value: Target value of other (J/mol or J/mol/K)
        other: Param.HMOLAR, Param.SMOLAR or Param.UMOLAR

    Raises:
        UnsupportedInput: other is not h, s or u
        OutOfRange: value cannot be bracketed above Tc
        DensitySolveFailed: the root finder failed
    """
    if other not in (Param.HMOLAR, Param.SMOLAR, Param.UMOLAR):
        raise UnsupportedInput(f"Cannot solve for density given T and {other.value}")

    fluid = state.components[0]
    options = state.options

    def y(rho):
        return state.calc_hsu_nocache(T, rho, other)

    def resid(rho):
        return y(rho) - value

    rho_melt = fluid.triple_liquid.rhomolar
    rhoc = fluid.crit.rhomolar

    try:
        if T >= fluid.crit.T:
            rho_min = options.rho_min_supercritical
            y_melt, y_c, y_min = y(rho_melt), y(rhoc), y(rho_min)
            if is_in_closed_range(y_melt, y_c, value):
                return brent(resid, rhoc, rho_melt, options)
            if is_in_closed_range(y_c, y_min, value):
                return brent(resid, rho_min, rhoc, options)
            raise OutOfRange(f"{other.value} [{value:g}] is out of range at T={T:g} K: "
                             f"[{min(y_melt, y_min):g}, {max(y_melt, y_min):g}]",
                             T=T, value=value)

        phase = state.phase_for_solver
        if phase == Phase.LIQUID:
            rhoL = fluid.ancillaries.rhoL(T)
            yL, y_melt = y(rhoL), y(rho_melt)
            rho0 = (rho_melt - rhoL) / (y_melt - yL) * (value - yL) + rhoL
            rho = secant(resid, rho0, 1.0001 * rho0, options)
        elif phase == Phase.GAS:
            rho = brent(resid, options.rho_min_gas, fluid.ancillaries.rhoV(T), options)
        else:
            raise UnsupportedInput(f"Phase '{phase.value}' is not valid for a subcritical "
                                   f"density solve given T and {other.value}")
    except (OutOfRange, UnsupportedInput):
        raise
    except SOLVER_ERRORS as e:
        raise DensitySolveFailed(T, math.nan, math.nan,
                                 f"{other.value}={value:g}: {e}") from e

    if rho <= 0:
        raise DensitySolveFailed(T, math.nan, math.nan,
                                 f"{other.value}={value:g}: non-positive density {rho:g}")
    return rho
