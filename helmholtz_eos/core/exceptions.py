# File: helmholtz_eos/core/exceptions.py
"""
Exception hierarchy for Helmholtz EOS state evaluation

All failures raised by the package derive from ThermoException so callers
can catch a single type. Subclasses also derive from the closest builtin
(ValueError, ArithmeticError) to keep ordinary ``except ValueError`` code
working.
"""

import math
from typing import Optional


def _fmt(value) -> str:
    """Compact number formatting for error messages"""
    if value is None:
        return "None"
    try:
        return f"{value:.10g}"
    except (TypeError, ValueError):
        return str(value)


class ThermoException(Exception):
    """Exception raised when thermodynamic property calculation fails"""
    pass


# ============================================================================
# Composition and input errors
# ============================================================================

class InvalidComposition(ThermoException, ValueError):
    """Mole-fraction vector is missing, has the wrong size or does not sum to 1"""
    pass


class MissingComposition(InvalidComposition):
    """Mixture was flashed before set_mole_fractions was called"""

    def __init__(self, n_components: int):
        self.n_components = n_components
        super().__init__(
            f"Mole fractions must be set before update for a mixture of "
            f"{n_components} components"
        )


class UnsupportedInput(ThermoException, ValueError):
    """Input pair, parameter or derivative order is not implemented"""
    pass


class UnsupportedDerivative(UnsupportedInput):
    """Derivative order (n_tau, n_delta) cannot be evaluated"""

    def __init__(self, n_tau: int, n_delta: int, where: str = ""):
        self.n_tau = n_tau
        self.n_delta = n_delta
        suffix = f" for {where}" if where else ""
        super().__init__(
            f"Derivative order (n_tau={n_tau}, n_delta={n_delta}) is not supported{suffix}"
        )


class InvalidDerivative(ThermoException, ArithmeticError):
    """A derivative of alpha evaluated to a non-finite number"""

    def __init__(self, part: str, n_tau: int, n_delta: int, tau: float, delta: float):
        self.part = part
        self.n_tau = n_tau
        self.n_delta = n_delta
        self.tau = tau
        self.delta = delta
        super().__init__(
            f"{part} derivative returned invalid number with inputs "
            f"n_tau: {n_tau}, n_delta: {n_delta} (tau={_fmt(tau)}, delta={_fmt(delta)})"
        )


# ============================================================================
# Domain errors
# ============================================================================

class DomainError(ThermoException, ValueError):
    """Base class for inputs outside the range of the equation of state"""
    pass


class BelowTriplePoint(DomainError):
    """Temperature or pressure below the triple point"""

    def __init__(self, name: str, value: float, limit: float):
        self.name = name
        self.value = value
        self.limit = limit
        super().__init__(
            f"{name} [{_fmt(value)}] is below the triple point value [{_fmt(limit)}]"
        )


class OutOfRange(DomainError):
    """Target value cannot be bracketed by the solver"""

    def __init__(self, message: str, T: Optional[float] = None,
                 value: Optional[float] = None):
        self.T = T
        self.value = value
        super().__init__(message)


# ============================================================================
# State and solver errors
# ============================================================================

class InvalidState(ThermoException):
    """Post-flash sanity check failed"""

    def __init__(self, field: str, value: float, reason: str = "is not a valid number"):
        self.field = field
        self.value = value
        super().__init__(f"{field} {reason} ({_fmt(value)})")


class InvalidPhase(ThermoException):
    """Property requested for a phase where it is not defined"""
    pass


class DensitySolveFailed(ThermoException):
    """Root-finding cascade exhausted without a valid density"""

    def __init__(self, T: float, p: float, guess: float, detail: str = ""):
        self.T = T
        self.p = p
        self.guess = guess
        msg = (f"unable to find a density for T={_fmt(T)} K, p={_fmt(p)} Pa, "
               f"with guess value {_fmt(guess)} mol/m^3")
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class SaturationFailed(DensitySolveFailed):
    """Saturation (phase equilibrium) solve did not converge"""

    def __init__(self, T: float, detail: str = "", p: float = math.nan,
                 guess: float = math.nan):
        self.T = T
        self.p = p
        self.guess = guess
        msg = f"saturation solver failed at T={_fmt(T)} K"
        if not math.isnan(p):
            msg += f", p={_fmt(p)} Pa"
        if detail:
            msg += f": {detail}"
        ThermoException.__init__(self, msg)


class AmbiguousPhase(ThermoException):
    """
    Inputs sit on the saturation curve within floating-point tolerance

    Raised inside phase determination only; flash routines resolve it
    before returning to the caller.
    """

    def __init__(self, T: float, p: float, saturation_value: float):
        self.T = T
        self.p = p
        self.saturation_value = saturation_value
        super().__init__(
            f"Inputs T={_fmt(T)} K, p={_fmt(p)} Pa lie on the saturation curve "
            f"(saturation value {_fmt(saturation_value)})"
        )
