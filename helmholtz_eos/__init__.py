# File: helmholtz_eos/__init__.py
"""
Thermodynamic properties from multiparameter Helmholtz energy equations of state
"""

__version__ = "0.1.0"

from helmholtz_eos.core import (
    InputPair,
    Param,
    Phase,
    SolverOptions,
    ThermoException,
)
from helmholtz_eos.fluids import HelmholtzFluid, available_fluids, get_fluid, load_coolprop_fluid
from helmholtz_eos.mixtures import register_binary_pair
from helmholtz_eos.state import ThermodynamicState, saturation_P, saturation_T
from helmholtz_eos.core.thermodynamics import Fluid, FluidState

__all__ = [
    # State
    "ThermodynamicState",
    "saturation_T",
    "saturation_P",

    # Fluids and mixtures
    "HelmholtzFluid",
    "available_fluids",
    "get_fluid",
    "load_coolprop_fluid",
    "register_binary_pair",

    # Tags and options
    "InputPair",
    "Param",
    "Phase",
    "SolverOptions",
    "ThermoException",

    # Convenience interface
    "Fluid",
    "FluidState",
]
