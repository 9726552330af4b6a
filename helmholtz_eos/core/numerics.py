# File: helmholtz_eos/core/numerics.py
"""
Numerical helpers: closed-form cubic roots and thin wrappers around
scipy.optimize root finders

The wrappers only enforce the package's tolerance policy and reject
non-finite roots. Library exceptions propagate; callers convert them into
typed errors (see SOLVER_ERRORS).
"""

import math
from typing import Callable, List

from scipy import optimize

from .config import DEFAULT_OPTIONS, SolverOptions


# Exceptions a numerical solve may raise (scipy failures plus EOS
# evaluation failures, which subclass ValueError or ArithmeticError)
SOLVER_ERRORS = (RuntimeError, ValueError, ArithmeticError)


def is_in_closed_range(x1: float, x2: float, x: float) -> bool:
    """True if x lies between x1 and x2 inclusive, in either order"""
    return min(x1, x2) <= x <= max(x1, x2)


def solve_cubic(a: float, b: float, c: float, d: float) -> List[float]:
    """
    Real roots of a*x^3 + b*x^2 + c*x + d = 0 in closed form

    Uses the trigonometric form for three real roots and the hyperbolic
    form for a single real root.

    Args:
        a, b, c, d: Polynomial coefficients, a != 0

    Returns:
        Real roots in ascending order (one or three entries; repeated
        roots are listed with multiplicity)
    """
    if a == 0:
        raise ValueError("Leading coefficient of the cubic must be non-zero")

    # Depressed cubic t^3 + p t + q = 0 with x = t - b/(3a)
    p = (3 * a * c - b**2) / (3 * a**2)
    q = (2 * b**3 - 9 * a * b * c + 27 * a**2 * d) / (27 * a**3)
    shift = -b / (3 * a)
    discriminant = -(4 * p**3 + 27 * q**2)

    if discriminant >= 0 and p < 0:
        # Three real roots
        r = 2 * math.sqrt(-p / 3)
        arg = 3 * q / (2 * p) * math.sqrt(-3 / p)
        arg = max(-1.0, min(1.0, arg))
        phi = math.acos(arg) / 3
        roots = [r * math.cos(phi - 2 * math.pi * k / 3) + shift for k in range(3)]
        return sorted(roots)

    if p < 0:
        t0 = (-2 * math.copysign(1.0, q) * math.sqrt(-p / 3)
              * math.cosh(math.acosh(-3 * abs(q) / (2 * p) * math.sqrt(-3 / p)) / 3))
    elif p > 0:
        t0 = -2 * math.sqrt(p / 3) * math.sinh(math.asinh(3 * q / (2 * p) * math.sqrt(3 / p)) / 3)
    else:
        t0 = math.copysign(abs(q)**(1.0 / 3.0), -q)
    return [t0 + shift]


def _check_finite(x: float, method: str) -> float:
    if not math.isfinite(x):
        raise ValueError(f"{method} returned a non-finite root ({x})")
    return float(x)


def newton(func: Callable[[float], float], x0: float,
           fprime: Callable[[float], float],
           options: SolverOptions = DEFAULT_OPTIONS) -> float:
    """Newton's method with analytic derivative"""
    x = optimize.newton(func, x0, fprime=fprime, tol=options.xtol,
                        rtol=options.newton_rtol, maxiter=options.max_iterations)
    return _check_finite(x, "Newton")


def secant(func: Callable[[float], float], x0: float, x1: float,
           options: SolverOptions = DEFAULT_OPTIONS) -> float:
    """Derivative-free secant method started from x0 and x1"""
    x = optimize.newton(func, x0, x1=x1, tol=options.xtol,
                        rtol=options.secant_rtol, maxiter=options.max_iterations)
    return _check_finite(x, "Secant")


def brent(func: Callable[[float], float], a: float, b: float,
          options: SolverOptions = DEFAULT_OPTIONS) -> float:
    """
    Brent's method on the bracket [a, b]

    Raises:
        ValueError: if func(a) and func(b) have the same sign
        RuntimeError: if the iteration cap is reached
    """
    x = optimize.brentq(func, a, b, xtol=options.xtol,
                        rtol=options.brent_rtol, maxiter=options.max_iterations)
    return _check_finite(x, "Brent")


def bounded_minimum(func: Callable[[float], float], a: float, b: float,
                    options: SolverOptions = DEFAULT_OPTIONS) -> float:
    """Abscissa of the minimum of a unimodal func on [a, b]"""
    result = optimize.minimize_scalar(func, bounds=(a, b), method='bounded',
                                      options={'maxiter': options.max_iterations})
    if not result.success:
        raise RuntimeError(f"Bounded minimization failed: {result.message}")
    return _check_finite(result.x, "Bounded minimization")
