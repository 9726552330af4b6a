# File: helmholtz_eos/state/__init__.py
"""
Thermodynamic state: cached properties, flash routines, phase
determination, density and saturation solvers
"""

from .state import ThermodynamicState
from .flash import DISPATCH, flash
from .phase import T_phase_determination, p_phase_determination
from .saturation import SaturationResult, saturation_D, saturation_P, saturation_T
from .solvers import (
    solver_for_rho_given_T_oneof_HSU,
    solver_rho_Tp,
    solver_rho_Tp_SRK,
)
from . import mixture_derivatives

__all__ = [
    'ThermodynamicState',
    'DISPATCH',
    'flash',
    'T_phase_determination',
    'p_phase_determination',
    'SaturationResult',
    'saturation_D',
    'saturation_P',
    'saturation_T',
    'solver_for_rho_given_T_oneof_HSU',
    'solver_rho_Tp',
    'solver_rho_Tp_SRK',
    'mixture_derivatives',
]
