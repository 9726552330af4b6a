# File: helmholtz_eos/fluids/descriptor.py
"""
Pure-fluid descriptor: EOS terms, characteristic states and ancillaries

A HelmholtzFluid is built once from a CoolProp-style fluid dictionary and is
shared by reference between thermodynamic states; nothing mutates it after
construction.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .ancillaries import Ancillaries
from .terms import HelmholtzSum, build_alpha0, build_alphar


@dataclass
class SimpleState:
    """
    Characteristic state of a fluid (reducing, critical, triple, anchor)

    Caloric values are NaN until evaluated with the EOS.
    """
    T: float = math.nan          # Temperature (K)
    p: float = math.nan          # Pressure (Pa)
    rhomolar: float = math.nan   # Molar density (mol/m^3)
    hmolar: float = math.nan     # Molar enthalpy (J/mol)
    smolar: float = math.nan     # Molar entropy (J/mol-K)
    umolar: float = math.nan     # Molar internal energy (J/mol)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "SimpleState":
        if not data:
            return cls()
        return cls(
            T=float(data.get("T", math.nan)),
            p=float(data.get("p", math.nan)),
            rhomolar=float(data.get("rhomolar", math.nan)),
            hmolar=float(data.get("hmolar", math.nan)),
            smolar=float(data.get("smolar", math.nan)),
            umolar=float(data.get("umolar", math.nan)),
        )


@dataclass(eq=False)
class HelmholtzFluid:
    """
    Multiparameter Helmholtz-energy equation of state for one fluid

    Reduced variables are tau = reducing.T / T and
    delta = rhomolar / reducing.rhomolar.
    """
    name: str
    alpha0: HelmholtzSum = field(repr=False)
    alphar: HelmholtzSum = field(repr=False)
    reducing: SimpleState
    crit: SimpleState
    triple_liquid: SimpleState
    triple_vapor: SimpleState
    hs_anchor: SimpleState
    gas_constant: float              # J/mol-K
    molar_mass: float                # kg/mol
    acentric: float
    Ttriple: float                   # K
    ptriple: float                   # Pa
    Tmax: float                      # K
    pmax: float                      # Pa
    ancillaries: Ancillaries = field(repr=False)
    CAS: str = ""
    aliases: Tuple[str, ...] = ()
    pseudo_pure: bool = False

    # ========================================================================
    # Reduced Helmholtz energy
    # ========================================================================

    def alphar_deriv(self, n_tau: int, n_delta: int, tau: float, delta: float) -> float:
        """d^(n_tau+n_delta) alphar / d tau^n_tau d delta^n_delta"""
        return self.alphar.deriv(n_tau, n_delta, tau, delta)

    def alpha0_deriv(self, n_tau: int, n_delta: int, tau: float, delta: float) -> float:
        """d^(n_tau+n_delta) alpha0 / d tau^n_tau d delta^n_delta"""
        return self.alpha0.deriv(n_tau, n_delta, tau, delta)

    def reduced(self, T: float, rhomolar: float) -> Tuple[float, float]:
        """(tau, delta) for the fluid's own reducing state"""
        return self.reducing.T / T, rhomolar / self.reducing.rhomolar

    # ========================================================================
    # Uncached single-phase properties
    # ========================================================================

    def pressure(self, T: float, rhomolar: float) -> float:
        """p = rho R T (1 + delta dalphar/ddelta)"""
        tau, delta = self.reduced(T, rhomolar)
        return rhomolar * self.gas_constant * T * (1 + delta * self.alphar_deriv(0, 1, tau, delta))

    def caloric(self, T: float, rhomolar: float) -> Tuple[float, float, float]:
        """
        Molar enthalpy, entropy and internal energy at (T, rho)

        Returns:
            (hmolar, smolar, umolar)
        """
        tau, delta = self.reduced(T, rhomolar)
        R = self.gas_constant
        a0 = self.alpha0_deriv(0, 0, tau, delta)
        a0_t = self.alpha0_deriv(1, 0, tau, delta)
        ar = self.alphar_deriv(0, 0, tau, delta)
        ar_t = self.alphar_deriv(1, 0, tau, delta)
        ar_d = self.alphar_deriv(0, 1, tau, delta)

        hmolar = R * T * (1 + tau * (a0_t + ar_t) + delta * ar_d)
        smolar = R * (tau * (a0_t + ar_t) - a0 - ar)
        umolar = R * T * tau * (a0_t + ar_t)
        return hmolar, smolar, umolar

    def _fill_caloric(self, state: SimpleState) -> None:
        if math.isnan(state.T) or math.isnan(state.rhomolar) or state.rhomolar <= 0:
            return
        state.hmolar, state.smolar, state.umolar = self.caloric(state.T, state.rhomolar)
        if math.isnan(state.p):
            state.p = self.pressure(state.T, state.rhomolar)

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def from_dict(cls, data: dict) -> "HelmholtzFluid":
        """
        Build a descriptor from a CoolProp fluid JSON dictionary

        Args:
            data: Dictionary with "INFO", "EOS" and "ANCILLARIES" blocks

        Returns:
            HelmholtzFluid with critical and anchor caloric values evaluated

        Raises:
            UnsupportedInput: if a Helmholtz term type is not implemented
            KeyError: if a required block is missing
        """
        info = data.get("INFO", {})
        name = info.get("NAME", "")
        eos = data["EOS"][0]

        # Characteristic states may live in EOS[0]["STATES"] or at top level
        states = dict(data.get("STATES", {}))
        states.update(eos.get("STATES", {}))

        reducing = SimpleState.from_dict(states["reducing"])
        crit = SimpleState.from_dict(states.get("critical", states["reducing"]))
        triple_liquid = SimpleState.from_dict(
            states.get("triple_liquid", states.get("sat_min_liquid")))
        triple_vapor = SimpleState.from_dict(
            states.get("triple_vapor", states.get("sat_min_vapor")))
        hs_anchor = SimpleState.from_dict(states.get("hs_anchor"))

        Ttriple = float(eos.get("Ttriple", triple_liquid.T))
        ptriple = float(eos.get("ptriple", triple_liquid.p))

        fluid = cls(
            name=name,
            alpha0=build_alpha0(eos["alpha0"]),
            alphar=build_alphar(eos["alphar"]),
            reducing=reducing,
            crit=crit,
            triple_liquid=triple_liquid,
            triple_vapor=triple_vapor,
            hs_anchor=hs_anchor,
            gas_constant=float(eos["gas_constant"]),
            molar_mass=float(eos["molar_mass"]),
            acentric=float(eos.get("acentric", 0.0)),
            Ttriple=Ttriple,
            ptriple=ptriple,
            Tmax=float(eos["T_max"]),
            pmax=float(eos["p_max"]),
            ancillaries=Ancillaries.from_dict(data["ANCILLARIES"], name),
            CAS=info.get("CAS", ""),
            aliases=tuple(info.get("ALIASES", ())),
            pseudo_pure=bool(eos.get("pseudo_pure", False)),
        )

        # Absolute h, s, u at the critical point and the reference anchor
        fluid._fill_caloric(fluid.crit)
        fluid._fill_caloric(fluid.hs_anchor)
        return fluid
