# File: helmholtz_eos/state/state.py
"""
Thermodynamic state of a pure fluid or mixture described by a Helmholtz
energy equation of state

    alpha(tau, delta) = alpha0(tau, delta) + alphar(tau, delta)
    tau = Tr / T,  delta = rho / rhor

A state is flashed with update(pair, value1, value2); every property is
then computed on first read from the derivatives of alpha and cached until
the next flash.
"""

import math
from dataclasses import replace
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from ..core.config import DEFAULT_OPTIONS, SolverOptions
from ..core.constants import InputPair, Param, Phase, mass_to_molar_inputs
from ..core.exceptions import (
    InvalidComposition,
    InvalidPhase,
    InvalidState,
    MissingComposition,
    UnsupportedInput,
)
from ..fluids.descriptor import HelmholtzFluid, SimpleState
from ..fluids.library import get_fluid
from ..mixtures.excess import ExcessTerm
from ..mixtures.reducing import ReducingFunction
from ..mixtures.registry import get_mixing_rule, get_reducing_function
from . import mixture_derivatives as mixderiv
from .derivatives import calc_alpha0_deriv_nocache, calc_alphar_deriv_nocache
from .flash import flash
from .saturation import SaturationResult


ComponentLike = Union[str, HelmholtzFluid]

# Reduced density at which the virial coefficients are evaluated
_VIRIAL_DELTA = 1e-12


class ThermodynamicState:
    """
    Cached thermodynamic state

    Args:
        components: Fluid name, descriptor, or a sequence of them
        mole_fractions: Optional composition (required before update for mixtures)
        generate_saturation_states: Create the SatL and SatV child states
        options: Solver tolerances and bands
        mixing_rule: Optional (ReducingFunction, ExcessTerm) replacing the
            registry lookup for mixtures

    Attributes:
        components: Tuple of HelmholtzFluid descriptors
        SatL, SatV: Saturated liquid and vapor states (two-phase only), or
            None if generate_saturation_states is False
        reducing, crit: SimpleState records of the reducing and
            (pseudo-)critical states

    Example:
        >>> state = ThermodynamicState("Water")
        >>> state.update("PT_INPUTS", 101325, 300)
        >>> state.rhomass
        996.5...
    """

    def __init__(self, components: Union[ComponentLike, Sequence[ComponentLike]],
                 mole_fractions: Optional[Sequence[float]] = None,
                 generate_saturation_states: bool = True,
                 options: SolverOptions = DEFAULT_OPTIONS,
                 mixing_rule: Optional[Tuple[ReducingFunction, ExcessTerm]] = None):
        if isinstance(components, (str, HelmholtzFluid)):
            components = [components]
        self.components = tuple(get_fluid(c) if isinstance(c, str) else c for c in components)
        if not self.components:
            raise InvalidComposition("At least one component is required")

        self.N = len(self.components)
        self.is_pure = self.N == 1
        self.options = options

        if mixing_rule is None:
            if self.is_pure:
                mixing_rule = (get_reducing_function('Lorentz-Berthelot', self.components),
                               ExcessTerm(1))
            else:
                mixing_rule = get_mixing_rule(self.components)
        self.reducing_function, self.excess = mixing_rule

        self._imposed_phase: Optional[Phase] = None
        self._generation = 0
        self._cache = {}
        self.mole_fractions: Optional[np.ndarray] = None
        self.reducing: Optional[SimpleState] = None
        self.crit: Optional[SimpleState] = None

        self.SatL: Optional["ThermodynamicState"] = None
        self.SatV: Optional["ThermodynamicState"] = None
        if generate_saturation_states:
            self.SatL = self._child(Phase.LIQUID)
            self.SatV = self._child(Phase.GAS)

        self._clear()
        if self.is_pure:
            self.set_mole_fractions([1.0])
        elif mole_fractions is not None:
            self.set_mole_fractions(mole_fractions)

    def _child(self, phase: Phase) -> "ThermodynamicState":
        child = ThermodynamicState(self.components, generate_saturation_states=False,
                                   options=self.options,
                                   mixing_rule=(self.reducing_function, self.excess))
        child.specify_phase(phase)
        return child

    def __repr__(self) -> str:
        return (f"ThermodynamicState({self.name}, phase={self._phase.value}, "
                f"T={self._T:.6g} K, p={self._p:.6g} Pa)")

    # ========================================================================
    # Composition
    # ========================================================================

    def set_mole_fractions(self, mole_fractions: Sequence[float]) -> None:
        """
        Set the composition and recompute the reducing state

        Raises:
            InvalidComposition: wrong length, negative entries, or the sum
                differs from 1 by more than 1e-10
        """
        x = np.asarray(mole_fractions, dtype=float)
        if x.shape != (self.N,):
            raise InvalidComposition(
                f"Mole fraction vector has length {x.size}; expected {self.N}")
        if np.any(x < 0):
            raise InvalidComposition(f"Mole fractions must be non-negative: {x.tolist()}")
        if abs(x.sum() - 1) > 1e-10:
            raise InvalidComposition(f"Mole fractions must sum to 1 (sum = {x.sum():.12g})")

        self.mole_fractions = x
        if self.is_pure:
            fluid = self.components[0]
            self.reducing = replace(fluid.reducing)
            self.crit = replace(fluid.crit)
        else:
            Tr = self.reducing_function.Tr(x)
            rhor = self.reducing_function.rhormolar(x)
            self.reducing = SimpleState(T=Tr, rhomolar=rhor)
            self.crit = SimpleState(T=Tr, rhomolar=rhor, p=self.calc_pressure_nocache(Tr, rhor))

        if self.SatL is not None:
            self.SatL.set_mole_fractions(x)
            self.SatV.set_mole_fractions(x)
        self._clear()

    @property
    def molar_mass(self) -> float:
        """kg/mol"""
        return float(self._x() @ [c.molar_mass for c in self.components])

    @property
    def gas_constant(self) -> float:
        """J/mol/K, mole-fraction weighted for mixtures"""
        return float(self._x() @ [c.gas_constant for c in self.components])

    def _x(self) -> np.ndarray:
        if self.mole_fractions is None:
            raise MissingComposition(self.N)
        return self.mole_fractions

    # ========================================================================
    # Phase control
    # ========================================================================

    def specify_phase(self, phase: Union[Phase, str]) -> None:
        """Impose a single-phase label; flashes skip phase determination"""
        phase = Phase.parse(phase)
        if not phase.is_homogeneous:
            raise UnsupportedInput(f"Only single-phase labels can be imposed, not '{phase.value}'")
        self._imposed_phase = phase

    def unspecify_phase(self) -> None:
        self._imposed_phase = None

    @property
    def imposed_phase(self) -> Optional[Phase]:
        return self._imposed_phase

    @property
    def phase_for_solver(self) -> Phase:
        """Imposed phase if any, else the current phase"""
        return self._imposed_phase or self._phase

    @property
    def phase(self) -> Phase:
        return self._phase

    def mixture_phase_PT(self, T: float, p: float) -> Phase:
        """Pseudo-critical phase classification of a mixture"""
        above_pc = p > self.crit.p
        if T >= self.reducing.T:
            return Phase.SUPERCRITICAL if above_pc else Phase.GAS
        return Phase.LIQUID if above_pc else Phase.GAS

    # ========================================================================
    # Flash
    # ========================================================================

    def _clear(self) -> None:
        """Drop all cached values and inputs"""
        self._generation += 1
        self._T = self._p = self._rhomolar = self._Q = math.nan
        self._tau = self._delta = math.nan
        self._phase = self._imposed_phase or Phase.UNKNOWN
        self._sat: Optional[SaturationResult] = None

    def _fail(self) -> None:
        self._clear()
        self._phase = Phase.UNKNOWN
        if self.SatL is not None:
            self.SatL._fail()
            self.SatV._fail()

    def update(self, input_pair: Union[InputPair, str], value1: float, value2: float) -> None:
        """
        Flash the state to a new pair of inputs

        Args:
            input_pair: InputPair member, its name ("PT_INPUTS") or tag ("PT")
            value1, value2: Input values in the order of the pair name, SI units

        Raises:
            ThermoException subclasses; the state is left cleared (phase
            UNKNOWN, inputs NaN) after any failure
        """
        self._clear()
        try:
            pair = InputPair.parse(input_pair)
            if not self.is_pure and self.mole_fractions is None:
                raise MissingComposition(self.N)
            pair, value1, value2 = mass_to_molar_inputs(pair, float(value1), float(value2),
                                                        self.molar_mass)
            flash(self, pair, value1, value2)
            self._post_flash_check()
        except Exception:
            self._fail()
            raise

        self._tau = self.reducing.T / self._T
        self._delta = self._rhomolar / self.reducing.rhomolar

    def _post_flash_check(self) -> None:
        for field, value in (("T", self._T), ("p", self._p),
                             ("rhomolar", self._rhomolar), ("Q", self._Q)):
            if not math.isfinite(value):
                raise InvalidState(field, value)
        if self._rhomolar < 0:
            raise InvalidState("rhomolar", self._rhomolar, "is negative")
        if self._phase == Phase.UNKNOWN:
            raise InvalidState("phase", math.nan, "is unknown after the flash")

    def _load_two_phase(self, sat: SaturationResult, Q: float) -> None:
        """Set a two-phase state of quality Q and update SatL and SatV"""
        self._phase = Phase.TWOPHASE
        self._Q = Q
        self._T = sat.T
        self._p = sat.pressure(Q)
        self._rhomolar = sat.rhomolar(Q)
        self._sat = sat
        if self.SatL is not None:
            self.SatL.update(InputPair.DmolarT_INPUTS, sat.rhoL, sat.T)
            self.SatV.update(InputPair.DmolarT_INPUTS, sat.rhoV, sat.T)

    # ========================================================================
    # Cache helpers
    # ========================================================================

    def _cached(self, key, compute):
        entry = self._cache.get(key)
        if entry is not None and entry[0] == self._generation:
            return entry[1]
        value = compute()
        self._cache[key] = (self._generation, value)
        return value

    def _require_known(self) -> None:
        if self._phase == Phase.UNKNOWN or math.isnan(self._T):
            raise InvalidPhase("The state has not been updated (phase is unknown)")

    def _require_single_phase(self, what: str) -> None:
        self._require_known()
        if self._phase == Phase.TWOPHASE:
            raise InvalidPhase(f"{what} is not defined for two-phase states")

    def _alphar(self, n_tau: int, n_delta: int) -> float:
        return self._cached(("alphar", n_tau, n_delta), lambda: self.calc_alphar_deriv_nocache(
            n_tau, n_delta, self.mole_fractions, self._tau, self._delta))

    def _alpha0(self, n_tau: int, n_delta: int) -> float:
        return self._cached(("alpha0", n_tau, n_delta), lambda: self.calc_alpha0_deriv_nocache(
            n_tau, n_delta, self.mole_fractions, self._tau, self._delta))

    # ========================================================================
    # Uncached evaluation
    # ========================================================================

    def calc_alphar_deriv_nocache(self, n_tau: int, n_delta: int, x, tau: float,
                                  delta: float) -> float:
        return calc_alphar_deriv_nocache(self.components, self.excess, n_tau, n_delta,
                                         x, tau, delta)

    def calc_alpha0_deriv_nocache(self, n_tau: int, n_delta: int, x, tau: float,
                                  delta: float, Tr: Optional[float] = None,
                                  rhor: Optional[float] = None) -> float:
        Tr = self.reducing.T if Tr is None else Tr
        rhor = self.reducing.rhomolar if rhor is None else rhor
        return calc_alpha0_deriv_nocache(self.components, n_tau, n_delta, x, tau, delta,
                                         Tr, rhor)

    def calc_pressure_nocache(self, T: float, rhomolar: float) -> float:
        """p = rho R T (1 + delta dalphar/ddelta) at the current composition"""
        tau = self.reducing.T / T
        delta = rhomolar / self.reducing.rhomolar
        dar_dd = self.calc_alphar_deriv_nocache(0, 1, self.mole_fractions, tau, delta)
        return rhomolar * self.gas_constant * T * (1 + delta * dar_dd)

    def calc_hsu_nocache(self, T: float, rhomolar: float, param: Param) -> float:
        """Molar enthalpy, entropy or internal energy at (T, rho)"""
        x = self.mole_fractions
        tau = self.reducing.T / T
        delta = rhomolar / self.reducing.rhomolar
        R = self.gas_constant
        a0_t = self.calc_alpha0_deriv_nocache(1, 0, x, tau, delta)
        ar_t = self.calc_alphar_deriv_nocache(1, 0, x, tau, delta)

        if param == Param.HMOLAR:
            ar_d = self.calc_alphar_deriv_nocache(0, 1, x, tau, delta)
            return R * T * (1 + tau * (a0_t + ar_t) + delta * ar_d)
        if param == Param.SMOLAR:
            a0 = self.calc_alpha0_deriv_nocache(0, 0, x, tau, delta)
            ar = self.calc_alphar_deriv_nocache(0, 0, x, tau, delta)
            return R * (tau * (a0_t + ar_t) - a0 - ar)
        if param == Param.UMOLAR:
            return R * T * tau * (a0_t + ar_t)
        raise UnsupportedInput(f"Parameter {param.value} is not a caloric property")

    # ========================================================================
    # Inputs and reduced variables
    # ========================================================================

    @property
    def T(self) -> float:
        self._require_known()
        return self._T

    @property
    def p(self) -> float:
        self._require_known()
        return self._p

    @property
    def rhomolar(self) -> float:
        self._require_known()
        return self._rhomolar

    @property
    def rhomass(self) -> float:
        return self.rhomolar * self.molar_mass

    @property
    def Q(self) -> float:
        """Vapor quality, or a sentinel (-1000, 1000, 1e9) for single-phase states"""
        self._require_known()
        return self._Q

    @property
    def tau(self) -> float:
        self._require_known()
        return self._tau

    @property
    def delta(self) -> float:
        self._require_known()
        return self._delta

    # ========================================================================
    # Caloric properties
    # ========================================================================

    def _two_phase_average(self, attr: str, param: Param) -> float:
        Q = self._Q
        if self.SatL is not None:
            yL, yV = getattr(self.SatL, attr), getattr(self.SatV, attr)
        else:
            yL = self.calc_hsu_nocache(self._T, self._sat.rhoL, param)
            yV = self.calc_hsu_nocache(self._T, self._sat.rhoV, param)
        return Q * yV + (1 - Q) * yL

    def _caloric(self, attr: str, param: Param) -> float:
        self._require_known()
        if self._phase == Phase.TWOPHASE:
            return self._cached(attr, lambda: self._two_phase_average(attr, param))
        return self._cached(attr, lambda: self._single_phase_caloric(param))

    def _single_phase_caloric(self, param: Param) -> float:
        R, T, tau, delta = self.gas_constant, self._T, self._tau, self._delta
        tau_terms = tau * (self._alpha0(1, 0) + self._alphar(1, 0))
        if param == Param.HMOLAR:
            return R * T * (1 + tau_terms + delta * self._alphar(0, 1))
        if param == Param.SMOLAR:
            return R * (tau_terms - self._alpha0(0, 0) - self._alphar(0, 0))
        return R * T * tau_terms

    @property
    def hmolar(self) -> float:
        """J/mol"""
        return self._caloric("hmolar", Param.HMOLAR)

    @property
    def smolar(self) -> float:
        """J/mol/K"""
        return self._caloric("smolar", Param.SMOLAR)

    @property
    def umolar(self) -> float:
        """J/mol"""
        return self._caloric("umolar", Param.UMOLAR)

    @property
    def hmass(self) -> float:
        return self.hmolar / self.molar_mass

    @property
    def smass(self) -> float:
        return self.smolar / self.molar_mass

    @property
    def umass(self) -> float:
        return self.umolar / self.molar_mass

    @property
    def cvmolar(self) -> float:
        """Isochoric heat capacity, J/mol/K"""
        self._require_single_phase("cv")
        return self._cached("cvmolar", lambda: -self.gas_constant * self._tau**2
                            * (self._alpha0(2, 0) + self._alphar(2, 0)))

    @property
    def cpmolar(self) -> float:
        """Isobaric heat capacity, J/mol/K"""
        self._require_single_phase("cp")

        def compute():
            delta, tau = self._delta, self._tau
            num = 1 + delta * self._alphar(0, 1) - delta * tau * self._alphar(1, 1)
            den = 1 + 2 * delta * self._alphar(0, 1) + delta**2 * self._alphar(0, 2)
            return self.cvmolar + self.gas_constant * num**2 / den

        return self._cached("cpmolar", compute)

    @property
    def cp0molar(self) -> float:
        """Ideal-gas isobaric heat capacity, J/mol/K"""
        self._require_known()
        return self._cached("cp0molar", lambda: self.gas_constant
                            * (1 - self._tau**2 * self._alpha0(2, 0)))

    @property
    def cvmass(self) -> float:
        return self.cvmolar / self.molar_mass

    @property
    def cpmass(self) -> float:
        return self.cpmolar / self.molar_mass

    @property
    def speed_sound(self) -> float:
        """m/s"""
        self._require_single_phase("Speed of sound")

        def compute():
            delta, tau = self._delta, self._tau
            ar_d, ar_dd, ar_dt = self._alphar(0, 1), self._alphar(0, 2), self._alphar(1, 1)
            a_tt = self._alpha0(2, 0) + self._alphar(2, 0)
            w2 = (self.gas_constant * self._T / self.molar_mass
                  * (1 + 2 * delta * ar_d + delta**2 * ar_dd
                     - (1 + delta * ar_d - delta * tau * ar_dt)**2 / (tau**2 * a_tt)))
            return math.sqrt(w2)

        return self._cached("speed_sound", compute)

    # ========================================================================
    # Derivatives of the reduced Helmholtz energy
    # ========================================================================

    def _public_alphar(self, n_tau: int, n_delta: int) -> float:
        self._require_single_phase("Helmholtz energy derivative")
        return self._alphar(n_tau, n_delta)

    def _public_alpha0(self, n_tau: int, n_delta: int) -> float:
        self._require_single_phase("Helmholtz energy derivative")
        return self._alpha0(n_tau, n_delta)

    alphar = property(lambda self: self._public_alphar(0, 0))
    dalphar_dTau = property(lambda self: self._public_alphar(1, 0))
    dalphar_dDelta = property(lambda self: self._public_alphar(0, 1))
    d2alphar_dTau2 = property(lambda self: self._public_alphar(2, 0))
    d2alphar_dDelta_dTau = property(lambda self: self._public_alphar(1, 1))
    d2alphar_dDelta2 = property(lambda self: self._public_alphar(0, 2))
    d3alphar_dTau3 = property(lambda self: self._public_alphar(3, 0))
    d3alphar_dDelta_dTau2 = property(lambda self: self._public_alphar(2, 1))
    d3alphar_dDelta2_dTau = property(lambda self: self._public_alphar(1, 2))
    d3alphar_dDelta3 = property(lambda self: self._public_alphar(0, 3))

    alpha0 = property(lambda self: self._public_alpha0(0, 0))
    dalpha0_dTau = property(lambda self: self._public_alpha0(1, 0))
    dalpha0_dDelta = property(lambda self: self._public_alpha0(0, 1))
    d2alpha0_dTau2 = property(lambda self: self._public_alpha0(2, 0))
    d2alpha0_dDelta_dTau = property(lambda self: self._public_alpha0(1, 1))
    d2alpha0_dDelta2 = property(lambda self: self._public_alpha0(0, 2))

    # ========================================================================
    # Virial coefficients
    # ========================================================================

    def _virial_alphar(self, n_tau: int, n_delta: int) -> float:
        self._require_known()
        return self.calc_alphar_deriv_nocache(n_tau, n_delta, self.mole_fractions,
                                              self._tau, _VIRIAL_DELTA)

    @property
    def Bvirial(self) -> float:
        """Second virial coefficient, m^3/mol"""
        return self._virial_alphar(0, 1) / self.reducing.rhomolar

    @property
    def dBvirial_dT(self) -> float:
        dtau_dT = -self.reducing.T / self._T**2
        return self._virial_alphar(1, 1) / self.reducing.rhomolar * dtau_dT

    @property
    def Cvirial(self) -> float:
        """Third virial coefficient, m^6/mol^2"""
        return self._virial_alphar(0, 2) / self.reducing.rhomolar**2

    @property
    def dCvirial_dT(self) -> float:
        dtau_dT = -self.reducing.T / self._T**2
        return self._virial_alphar(1, 2) / self.reducing.rhomolar**2 * dtau_dT

    # ========================================================================
    # First partial derivatives
    # ========================================================================

    def _dtau_ddelta(self, param: Param) -> Tuple[float, float]:
        """(d param / d tau at constant delta, d param / d delta at constant tau)"""
        R, T, rho = self.gas_constant, self._T, self._rhomolar
        tau, delta, rhor = self._tau, self._delta, self.reducing.rhomolar
        dT_dtau = -T**2 / self.reducing.T
        ar_d, ar_dd, ar_dt = self._alphar(0, 1), self._alphar(0, 2), self._alphar(1, 1)
        a_tt = self._alpha0(2, 0) + self._alphar(2, 0)

        if param == Param.T:
            return dT_dtau, 0.0
        if param == Param.DMOLAR:
            return 0.0, rhor
        if param == Param.P:
            return (dT_dtau * rho * R * (1 + delta * ar_d - tau * delta * ar_dt),
                    rhor * R * T * (1 + 2 * delta * ar_d + delta**2 * ar_dd))
        if param == Param.HMOLAR:
            return (dT_dtau * R * (-tau**2 * a_tt + 1 + delta * ar_d - tau * delta * ar_dt),
                    rhor * T * R / rho * (tau * delta * ar_dt + delta * ar_d + delta**2 * ar_dd))
        if param == Param.SMOLAR:
            return (dT_dtau * R / T * (-tau**2 * a_tt),
                    rhor * R / rho * (-(1 + delta * ar_d - tau * delta * ar_dt)))
        if param == Param.UMOLAR:
            return (dT_dtau * R * (-tau**2 * a_tt),
                    rhor * T * R / rho * (tau * delta * ar_dt))
        if param == Param.TAU:
            return 1.0, 0.0
        if param == Param.DELTA:
            return 0.0, 1.0
        raise UnsupportedInput(f"Parameter {param.value} is not supported in first_partial_deriv")

    def first_partial_deriv(self, of: Union[Param, str], wrt: Union[Param, str],
                            constant: Union[Param, str]) -> float:
        """
        (d of / d wrt) at constant `constant`, in molar SI units

        Example:
            >>> state.first_partial_deriv(Param.P, Param.T, Param.DMOLAR)  # (dp/dT)_rho
        """
        self._require_single_phase("first_partial_deriv")
        of, wrt, constant = Param.parse(of), Param.parse(wrt), Param.parse(constant)
        dOf_dtau, dOf_ddelta = self._dtau_ddelta(of)
        dWrt_dtau, dWrt_ddelta = self._dtau_ddelta(wrt)
        dC_dtau, dC_ddelta = self._dtau_ddelta(constant)
        return ((dOf_dtau * dC_ddelta - dOf_ddelta * dC_dtau)
                / (dWrt_dtau * dC_ddelta - dWrt_ddelta * dC_dtau))

    # ========================================================================
    # Fugacity and chemical potential
    # ========================================================================

    def _check_index(self, i: int) -> None:
        if not 0 <= i < self.N:
            raise IndexError(f"Component index {i} out of range for {self.N} components")

    def fugacity_coefficient(self, i: int) -> float:
        self._require_single_phase("Fugacity coefficient")
        self._check_index(i)
        return math.exp(mixderiv.ln_fugacity_coefficient(self, i))

    def fugacity(self, i: int) -> float:
        """Pa"""
        return self.mole_fractions[i] * self._p * self.fugacity_coefficient(i)

    def chemical_potential(self, i: int) -> float:
        """
        J/mol

        mu_i / RT = alpha0_i(T, rho) + ln x_i + sum_k x_k delta_k dalpha0_k/ddelta_k
                    + d(n alphar)/dn_i
        """
        self._require_single_phase("Chemical potential")
        self._check_index(i)
        x = self.mole_fractions
        T, rho = self._T, self._rhomolar

        ideal = 0.0
        for k, (xk, fluid) in enumerate(zip(x, self.components)):
            tau_k, delta_k = fluid.reduced(T, rho)
            if k == i:
                ideal += fluid.alpha0_deriv(0, 0, tau_k, delta_k)
                if xk > 0:
                    ideal += math.log(xk)
            ideal += xk * delta_k * fluid.alpha0_deriv(0, 1, tau_k, delta_k)

        residual = mixderiv.dnalphar_dni__constT_V_nj(self, i)
        return self.gas_constant * T * (ideal + residual)

    # ========================================================================
    # Limits and constants
    # ========================================================================

    def _pure_fluid(self, what: str) -> HelmholtzFluid:
        if not self.is_pure:
            raise UnsupportedInput(f"{what} is only defined for pure fluids")
        return self.components[0]

    @property
    def name(self) -> str:
        return "&".join(c.name for c in self.components)

    @property
    def T_critical(self) -> float:
        return self.crit.T

    @property
    def p_critical(self) -> float:
        return self.crit.p

    @property
    def rhomolar_critical(self) -> float:
        return self.crit.rhomolar

    @property
    def Ttriple(self) -> float:
        return max(c.Ttriple for c in self.components)

    @property
    def Tmin(self) -> float:
        return self.Ttriple

    @property
    def Tmax(self) -> float:
        return min(c.Tmax for c in self.components)

    @property
    def pmax(self) -> float:
        return min(c.pmax for c in self.components)

    @property
    def Tmax_sat(self) -> float:
        return self._pure_fluid("Tmax_sat").crit.T

    @property
    def pmax_sat(self) -> float:
        return self._pure_fluid("pmax_sat").crit.p

    @property
    def Tmin_sat(self) -> float:
        return self._pure_fluid("Tmin_sat").Ttriple

    @property
    def pmin_sat(self) -> float:
        return self._pure_fluid("pmin_sat").ptriple
