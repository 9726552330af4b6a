# File: helmholtz_eos/mixtures/registry.py
"""
Binary interaction parameters and mixing-rule selection

Parameters are looked up per binary pair, in order:
1. the in-package registry (keyed on the sorted pair of fluid names)
2. CoolProp's binary interaction database (keyed on CAS numbers)
3. Lorentz-Berthelot with no departure function (with a UserWarning)
"""

import warnings
from dataclasses import dataclass, replace
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
import CoolProp.CoolProp as CP

from ..fluids.descriptor import HelmholtzFluid
from ..fluids.terms import build_alphar
from .excess import ExcessTerm
from .reducing import (
    GERG2008ReducingFunction,
    LorentzBerthelotReducingFunction,
    ReducingFunction,
)


@dataclass(frozen=True)
class BinaryPair:
    """
    GERG-2008 interaction parameters for an ordered pair (first, second)

    departure holds CoolProp-style residual term dictionaries for
    alphar_ij; it is only used when F != 0.
    """
    beta_T: float = 1.0
    gamma_T: float = 1.0
    beta_v: float = 1.0
    gamma_v: float = 1.0
    F: float = 0.0
    departure: Tuple[dict, ...] = ()

    def reversed(self) -> "BinaryPair":
        """Parameters for the pair in the opposite component order"""
        return replace(self, beta_T=1 / self.beta_T, beta_v=1 / self.beta_v)


# Keys are sorted, lower-cased names; parameters refer to that order
_BINARY_PAIRS: Dict[Tuple[str, str], BinaryPair] = {
    # Kunz & Wagner (2012), Table A6
    ("methane", "water"): BinaryPair(
        beta_T=1.0, gamma_T=1.585018334, beta_v=1.0, gamma_v=1.012783169,
    ),
}


def _key(name1: str, name2: str) -> Tuple[str, str]:
    return tuple(sorted((name1.lower(), name2.lower())))


def register_binary_pair(name1: str, name2: str, parameters) -> None:
    """
    Add or replace the interaction parameters of a binary pair

    Args:
        name1, name2: Fluid names; the parameters refer to the order (name1, name2)
        parameters: BinaryPair or dict with keys beta_T, gamma_T, beta_v,
            gamma_v and optionally F and departure
    """
    if isinstance(parameters, dict):
        params = dict(parameters)
        params["departure"] = tuple(params.get("departure", ()))
        parameters = BinaryPair(**params)
    if name1.lower() > name2.lower():
        parameters = parameters.reversed()
    _BINARY_PAIRS[_key(name1, name2)] = parameters


def _registered_pair(fluid1: HelmholtzFluid, fluid2: HelmholtzFluid) -> Optional[BinaryPair]:
    pair = _BINARY_PAIRS.get(_key(fluid1.name, fluid2.name))
    if pair is None:
        return None
    if fluid1.name.lower() > fluid2.name.lower():
        return pair.reversed()
    return pair


def _coolprop_pair(fluid1: HelmholtzFluid, fluid2: HelmholtzFluid) -> Optional[BinaryPair]:
    """Look the pair up in CoolProp by CAS number, trying both orders"""
    if not fluid1.CAS or not fluid2.CAS:
        return None

    def fetch(cas1, cas2):
        values = {key: float(CP.get_mixture_binary_pair_data(cas1, cas2, key))
                  for key in ("betaT", "gammaT", "betaV", "gammaV", "F")}
        return BinaryPair(beta_T=values["betaT"], gamma_T=values["gammaT"],
                          beta_v=values["betaV"], gamma_v=values["gammaV"],
                          F=values["F"])

    try:
        pair = fetch(fluid1.CAS, fluid2.CAS)
    except (ValueError, RuntimeError):
        try:
            pair = fetch(fluid2.CAS, fluid1.CAS).reversed()
        except (ValueError, RuntimeError):
            return None

    if pair.F != 0:
        warnings.warn(
            f"Departure function for {fluid1.name}-{fluid2.name} is not available "
            f"from CoolProp's binary database; using F = 0"
        )
        pair = replace(pair, F=0.0)
    return pair


# ============================================================================
# MIXING RULE REGISTRY
# ============================================================================

AVAILABLE_MIXING_RULES = {
    'GERG-2008': GERG2008ReducingFunction,
    'Lorentz-Berthelot': LorentzBerthelotReducingFunction,
}


def get_reducing_function(name: str, components: Sequence[HelmholtzFluid],
                          **kwargs) -> ReducingFunction:
    """
    Factory function for reducing functions

    Args:
        name: Key of AVAILABLE_MIXING_RULES
        components: Mixture components (their reducing states are used)
        **kwargs: beta_T, gamma_T, beta_v, gamma_v matrices for GERG-2008

    Raises:
        ValueError: If name not recognized
    """
    if name not in AVAILABLE_MIXING_RULES:
        available = ', '.join(AVAILABLE_MIXING_RULES.keys())
        raise ValueError(f"Mixing rule '{name}' not available. Choose from: {available}")

    Tc = [c.reducing.T for c in components]
    rhoc = [c.reducing.rhomolar for c in components]
    return AVAILABLE_MIXING_RULES[name](Tc, rhoc, **kwargs)


def get_mixing_rule(components: Sequence[HelmholtzFluid]) -> Tuple[ReducingFunction, ExcessTerm]:
    """
    Reducing function and excess term for a list of components

    Every binary pair is filled from the registry, then CoolProp, then
    Lorentz-Berthelot (with a warning).
    """
    N = len(components)
    beta_T, gamma_T = np.ones((N, N)), np.ones((N, N))
    beta_v, gamma_v = np.ones((N, N)), np.ones((N, N))
    F = np.zeros((N, N))
    departure = {}
    n_found = 0

    for i in range(N):
        for j in range(i + 1, N):
            pair = _registered_pair(components[i], components[j])
            if pair is None:
                pair = _coolprop_pair(components[i], components[j])
            if pair is None:
                warnings.warn(
                    f"No interaction parameters for {components[i].name}-"
                    f"{components[j].name}; using Lorentz-Berthelot", UserWarning
                )
                continue

            n_found += 1
            beta_T[i, j], gamma_T[i, j] = pair.beta_T, pair.gamma_T
            beta_v[i, j], gamma_v[i, j] = pair.beta_v, pair.gamma_v
            if pair.F != 0 and pair.departure:
                F[i, j] = pair.F
                departure[(i, j)] = build_alphar(pair.departure)

    if n_found == 0:
        reducing = get_reducing_function('Lorentz-Berthelot', components)
    else:
        reducing = get_reducing_function('GERG-2008', components,
                                         beta_T=beta_T, gamma_T=gamma_T,
                                         beta_v=beta_v, gamma_v=gamma_v)
    return reducing, ExcessTerm(N, F, departure)
