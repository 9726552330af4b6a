# File: helmholtz_eos/state/derivatives.py
"""
Reduced-variable derivative evaluator

Evaluates derivatives of the residual and ideal-gas reduced Helmholtz
energy of a pure fluid or a mixture at given (tau, delta), without
touching any state cache.
"""

import math
from typing import Sequence

from ..core.exceptions import InvalidDerivative, UnsupportedDerivative
from ..fluids.descriptor import HelmholtzFluid
from ..mixtures.excess import ExcessTerm


PURE_MAX_ORDER = 3
MIXTURE_MAX_ORDER = 2


def _check_order(n_tau: int, n_delta: int, max_order: int, where: str) -> None:
    if n_tau < 0 or n_delta < 0 or n_tau + n_delta > max_order:
        raise UnsupportedDerivative(n_tau, n_delta, where)


def _checked(value: float, part: str, n_tau: int, n_delta: int,
             tau: float, delta: float) -> float:
    if not math.isfinite(value):
        raise InvalidDerivative(part, n_tau, n_delta, tau, delta)
    return value


def calc_alphar_deriv_nocache(components: Sequence[HelmholtzFluid], excess: ExcessTerm,
                              n_tau: int, n_delta: int, x: Sequence[float],
                              tau: float, delta: float) -> float:
    """
    d^(n_tau+n_delta) alphar / d tau^n_tau d delta^n_delta

    Pure fluids support total order <= 3 (less if a term family is
    limited); mixtures support total order <= 2.

    Args:
        components: Fluid descriptors
        excess: Excess term (ignored for a single component)
        n_tau, n_delta: Derivative orders
        x: Mole fractions
        tau, delta: Reduced temperature and density

    Raises:
        UnsupportedDerivative: for orders that cannot be evaluated
        InvalidDerivative: if the result is not finite
    """
    if len(components) == 1:
        _check_order(n_tau, n_delta, PURE_MAX_ORDER, components[0].name)
        value = components[0].alphar_deriv(n_tau, n_delta, tau, delta)
    else:
        _check_order(n_tau, n_delta, MIXTURE_MAX_ORDER, "mixtures")
        value = sum(xi * c.alphar_deriv(n_tau, n_delta, tau, delta)
                    for xi, c in zip(x, components))
        value += excess.alphar_deriv(n_tau, n_delta, tau, delta, x)
    return _checked(float(value), "Residual", n_tau, n_delta, tau, delta)


def calc_alpha0_deriv_nocache(components: Sequence[HelmholtzFluid],
                              n_tau: int, n_delta: int, x: Sequence[float],
                              tau: float, delta: float, Tr: float, rhor: float) -> float:
    """
    d^(n_tau+n_delta) alpha0 / d tau^n_tau d delta^n_delta

    For mixtures each component is evaluated at its own reduced variables,
    tau_i = tau Tc_i / Tr and delta_i = delta rhor / rhoc_i, and the ideal
    mixing term sum x_i ln x_i is added to the zeroth-order value.

    Args:
        Tr, rhor: Reducing temperature and molar density of the mixture
    """
    if len(components) == 1:
        _check_order(n_tau, n_delta, PURE_MAX_ORDER, components[0].name)
        value = components[0].alpha0_deriv(n_tau, n_delta, tau, delta)
    else:
        _check_order(n_tau, n_delta, MIXTURE_MAX_ORDER, "mixtures")
        value = 0.0
        for xi, c in zip(x, components):
            Tci, rhoci = c.reducing.T, c.reducing.rhomolar
            tau_i = tau * Tci / Tr
            delta_i = delta * rhor / rhoci
            scale = (Tci / Tr)**n_tau * (rhor / rhoci)**n_delta
            value += xi * scale * c.alpha0_deriv(n_tau, n_delta, tau_i, delta_i)
            if n_tau == 0 and n_delta == 0 and xi > 0:
                value += xi * math.log(xi)
    return _checked(float(value), "Ideal-gas", n_tau, n_delta, tau, delta)
