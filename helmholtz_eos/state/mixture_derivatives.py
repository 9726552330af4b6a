# File: helmholtz_eos/state/mixture_derivatives.py
"""
Composition derivatives of the residual Helmholtz energy

Functions take a flashed single-phase ThermodynamicState and the component
indices. Naming follows the quantity and what is held constant, e.g.
ndpdni__constT_V_nj is n (dp/dn_i) at constant T, V and n_j.

All mole fractions are treated as independent variables. A pure fluid is
handled as a one-component mixture, for which every composition derivative
of the reducing state vanishes.

Reference:
    Kunz, O. & Wagner, W. (2012). J. Chem. Eng. Data 57, 3032-3091
    Gernert, J. & Span, R. (2016). J. Chem. Thermodyn. 93, 274-293
"""

import math


# ============================================================================
# Composition derivatives at constant tau, delta
# ============================================================================

def dalphar_dxi(state, i: int) -> float:
    """d alphar / d x_i at constant tau, delta, x_j"""
    tau, delta, x = state.tau, state.delta, state.mole_fractions
    return (state.components[i].alphar_deriv(0, 0, tau, delta)
            + state.excess.dalphar_dxi(tau, delta, x, i))


def d2alphar_dxi_dTau(state, i: int) -> float:
    tau, delta, x = state.tau, state.delta, state.mole_fractions
    return (state.components[i].alphar_deriv(1, 0, tau, delta)
            + state.excess.d2alphar_dxi_dTau(tau, delta, x, i))


def d2alphar_dxi_dDelta(state, i: int) -> float:
    tau, delta, x = state.tau, state.delta, state.mole_fractions
    return (state.components[i].alphar_deriv(0, 1, tau, delta)
            + state.excess.d2alphar_dxi_dDelta(tau, delta, x, i))


def d2alphardxidxj(state, i: int, j: int) -> float:
    """d2 alphar / dx_i dx_j; only the excess term depends on x twice"""
    return state.excess.d2alphardxidxj(state.tau, state.delta, state.mole_fractions, i, j)


def _x_weighted(state, func) -> float:
    return sum(xk * func(state, k) for k, xk in enumerate(state.mole_fractions))


# ============================================================================
# Mole-number derivatives at constant T, V
# ============================================================================

def _reducing_terms(state, i: int):
    """(1 - n drhor/dn_i / rhor, n dTr/dn_i / Tr)"""
    x = state.mole_fractions
    red = state.reducing_function
    rho_term = 1 - red.ndrhorbardni(x, i) / red.rhormolar(x)
    T_term = red.ndTrdni(x, i) / red.Tr(x)
    return rho_term, T_term


def ndalphar_dni__constT_V_nj(state, i: int) -> float:
    """n (d alphar / d n_i) at constant T, V, n_j"""
    rho_term, T_term = _reducing_terms(state, i)
    return (state.delta * state.dalphar_dDelta * rho_term
            + state.tau * state.dalphar_dTau * T_term
            + dalphar_dxi(state, i) - _x_weighted(state, dalphar_dxi))


def dnalphar_dni__constT_V_nj(state, i: int) -> float:
    """d (n alphar) / d n_i at constant T, V, n_j"""
    return state.alphar + ndalphar_dni__constT_V_nj(state, i)


def d_ndalphardni_dDelta(state, i: int) -> float:
    rho_term, T_term = _reducing_terms(state, i)
    delta, tau = state.delta, state.tau
    return ((delta * state.d2alphar_dDelta2 + state.dalphar_dDelta) * rho_term
            + tau * state.d2alphar_dDelta_dTau * T_term
            + d2alphar_dxi_dDelta(state, i) - _x_weighted(state, d2alphar_dxi_dDelta))


def d_ndalphardni_dTau(state, i: int) -> float:
    rho_term, T_term = _reducing_terms(state, i)
    delta, tau = state.delta, state.tau
    return (delta * state.d2alphar_dDelta_dTau * rho_term
            + (tau * state.d2alphar_dTau2 + state.dalphar_dTau) * T_term
            + d2alphar_dxi_dTau(state, i) - _x_weighted(state, d2alphar_dxi_dTau))


def nd2alphar_dni_dDelta(state, i: int) -> float:
    rho_term, T_term = _reducing_terms(state, i)
    return (state.delta * state.d2alphar_dDelta2 * rho_term
            + state.tau * state.d2alphar_dDelta_dTau * T_term
            + d2alphar_dxi_dDelta(state, i) - _x_weighted(state, d2alphar_dxi_dDelta))


def d2nalphar_dni_dT(state, i: int) -> float:
    """d2 (n alphar) / dn_i dT at constant V, n_j"""
    return -state.tau / state.T * (state.dalphar_dTau + d_ndalphardni_dTau(state, i))


def nddeltadni__constT_V_nj(state, i: int) -> float:
    red = state.reducing_function
    x = state.mole_fractions
    delta = state.delta
    return delta - delta / red.rhormolar(x) * red.ndrhorbardni(x, i)


def ndtaudni__constT_V_nj(state, i: int) -> float:
    red = state.reducing_function
    x = state.mole_fractions
    return state.tau / red.Tr(x) * red.ndTrdni(x, i)


# ============================================================================
# Pressure derivatives
# ============================================================================

def dpdT__constV_n(state) -> float:
    R, rho, delta = state.gas_constant, state.rhomolar, state.delta
    return rho * R * (1 + delta * state.dalphar_dDelta
                      - delta * state.tau * state.d2alphar_dDelta_dTau)


def dpdrho__constT_n(state) -> float:
    delta = state.delta
    return state.gas_constant * state.T * (1 + 2 * delta * state.dalphar_dDelta
                                           + delta**2 * state.d2alphar_dDelta2)


def ndpdV__constT_n(state) -> float:
    return -state.rhomolar**2 * dpdrho__constT_n(state)


def ndpdni__constT_V_nj(state, i: int) -> float:
    red = state.reducing_function
    x = state.mole_fractions
    delta = state.delta
    rho_ratio = red.ndrhorbardni(x, i) / red.rhormolar(x)
    return state.rhomolar * state.gas_constant * state.T * (
        1 + delta * state.dalphar_dDelta * (2 - rho_ratio)
        + delta * nd2alphar_dni_dDelta(state, i)
    )


def partial_molar_volume(state, i: int) -> float:
    """v_i = -(n dp/dn_i) / (n dp/dV) in m^3/mol"""
    return -ndpdni__constT_V_nj(state, i) / ndpdV__constT_n(state)


# ============================================================================
# Mole-fraction derivatives at constant T, V
# ============================================================================

def ddelta_dxj__constT_V_xi(state, j: int) -> float:
    red = state.reducing_function
    x = state.mole_fractions
    return -state.delta / red.rhormolar(x) * red.drhormolar_dxi(x, j)


def dtau_dxj__constT_V_xi(state, j: int) -> float:
    return 1 / state.T * state.reducing_function.dTr_dxi(state.mole_fractions, j)


def d_dalpharddelta_dxj__constT_V_xi(state, j: int) -> float:
    return (state.d2alphar_dDelta2 * ddelta_dxj__constT_V_xi(state, j)
            + state.d2alphar_dDelta_dTau * dtau_dxj__constT_V_xi(state, j)
            + d2alphar_dxi_dDelta(state, j))


def dalphar_dxj__constT_V_xi(state, j: int) -> float:
    return (state.dalphar_dDelta * ddelta_dxj__constT_V_xi(state, j)
            + state.dalphar_dTau * dtau_dxj__constT_V_xi(state, j)
            + dalphar_dxi(state, j))


def dpdxj__constT_V_xi(state, j: int) -> float:
    return state.rhomolar * state.gas_constant * state.T * (
        ddelta_dxj__constT_V_xi(state, j) * state.dalphar_dDelta
        + state.delta * d_dalpharddelta_dxj__constT_V_xi(state, j)
    )


def d_ndalphardni_dxj__constdelta_tau_xi(state, i: int, j: int) -> float:
    """d/dx_j of n (d alphar / d n_i) at constant tau, delta, x_i"""
    red = state.reducing_function
    x = state.mole_fractions
    delta, tau = state.delta, state.tau
    rhor, Tr = red.rhormolar(x), red.Tr(x)
    ndrhor_i, ndTr_i = red.ndrhorbardni(x, i), red.ndTrdni(x, i)

    line1 = delta * d2alphar_dxi_dDelta(state, j) * (1 - ndrhor_i / rhor)
    line2 = -delta * state.dalphar_dDelta / rhor * (
        red.d_ndrhorbardni_dxj(x, i, j) - red.drhormolar_dxi(x, j) / rhor * ndrhor_i)
    line3 = tau * d2alphar_dxi_dTau(state, j) * ndTr_i / Tr
    line4 = tau * state.dalphar_dTau / Tr * (
        red.d_ndTrdni_dxj(x, i, j) - red.dTr_dxi(x, j) / Tr * ndTr_i)
    line5 = (d2alphardxidxj(state, i, j) - dalphar_dxi(state, j)
             - sum(xm * d2alphardxidxj(state, j, m) for m, xm in enumerate(x)))
    return line1 + line2 + line3 + line4 + line5


def d_ndalphardni_dxj__constT_V_xi(state, i: int, j: int) -> float:
    return (d_ndalphardni_dxj__constdelta_tau_xi(state, i, j)
            + ddelta_dxj__constT_V_xi(state, j) * d_ndalphardni_dDelta(state, i)
            + dtau_dxj__constT_V_xi(state, j) * d_ndalphardni_dTau(state, i))


def d2nalphar_dni_dxj__constT_V(state, i: int, j: int) -> float:
    return dalphar_dxj__constT_V_xi(state, j) + d_ndalphardni_dxj__constT_V_xi(state, i, j)


def nd2nalphardnidnj__constT_V(state, i: int, j: int) -> float:
    """n d2 (n alphar) / dn_i dn_j at constant T, V"""
    x = state.mole_fractions
    return (ndalphar_dni__constT_V_nj(state, j)
            + d_ndalphardni_dDelta(state, i) * nddeltadni__constT_V_nj(state, j)
            + d_ndalphardni_dTau(state, i) * ndtaudni__constT_V_nj(state, j)
            + d_ndalphardni_dxj__constdelta_tau_xi(state, i, j)
            - sum(xk * d_ndalphardni_dxj__constdelta_tau_xi(state, i, k)
                  for k, xk in enumerate(x)))


# ============================================================================
# Fugacity coefficient
# ============================================================================

def ln_fugacity_coefficient(state, i: int) -> float:
    return (state.alphar + ndalphar_dni__constT_V_nj(state, i)
            - math.log(1 + state.delta * state.dalphar_dDelta))


def dln_fugacity_coefficient_dT__constrho_n(state, i: int) -> float:
    delta = state.delta
    return (state.dalphar_dTau + d_ndalphardni_dTau(state, i)
            - delta * state.d2alphar_dDelta_dTau / (1 + delta * state.dalphar_dDelta)
            ) * (-state.tau / state.T)


def dln_fugacity_coefficient_drho__constT_n(state, i: int) -> float:
    delta = state.delta
    rhor = state.reducing_function.rhormolar(state.mole_fractions)
    return (state.dalphar_dDelta + d_ndalphardni_dDelta(state, i)
            - (delta * state.d2alphar_dDelta2 + state.dalphar_dDelta)
            / (1 + delta * state.dalphar_dDelta)) / rhor


def dln_fugacity_coefficient_dT__constp_n(state, i: int) -> float:
    RT = state.gas_constant * state.T
    return (d2nalphar_dni_dT(state, i) + 1 / state.T
            - partial_molar_volume(state, i) / RT * dpdT__constV_n(state))


def dln_fugacity_coefficient_dp__constT_n(state, i: int) -> float:
    RT = state.gas_constant * state.T
    return partial_molar_volume(state, i) / RT - 1 / state.p


def dln_fugacity_coefficient_dxj__constT_p_xi(state, i: int, j: int) -> float:
    RT = state.gas_constant * state.T
    return (d2nalphar_dni_dxj__constT_V(state, i, j)
            - partial_molar_volume(state, i) / RT * dpdxj__constT_V_xi(state, j))


def ndln_fugacity_coefficient_dnj__constT_p(state, i: int, j: int) -> float:
    RT = state.gas_constant * state.T
    return (nd2nalphardnidnj__constT_V(state, j, i) + 1
            - partial_molar_volume(state, j) / RT * ndpdni__constT_V_nj(state, i))
