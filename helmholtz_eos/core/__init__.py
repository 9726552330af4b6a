# File: helmholtz_eos/core/__init__.py

"""
Core definitions shared by the whole package

This module provides:
- The exception hierarchy (ThermoException and subclasses)
- Input pairs, parameter tags, phase labels and quality sentinels
- Solver options (tolerances, iteration caps, ancillary bands)
- Numerical helpers (closed-form cubic, scipy root-finder wrappers)

The mass-based Fluid / FluidState interface lives in
helmholtz_eos.core.thermodynamics and is re-exported by the top-level package.

Usage:
    from helmholtz_eos.core import InputPair, Phase, SolverOptions

    options = SolverOptions().with_overrides(max_iterations=200)
"""

# ============================================================================
# Exceptions - from exceptions.py
# ============================================================================
from .exceptions import (
    ThermoException,
    InvalidComposition,
    MissingComposition,
    UnsupportedInput,
    UnsupportedDerivative,
    InvalidDerivative,
    DomainError,
    BelowTriplePoint,
    OutOfRange,
    InvalidState,
    InvalidPhase,
    DensitySolveFailed,
    SaturationFailed,
    AmbiguousPhase,
)

# ============================================================================
# Tags and sentinels - from constants.py
# ============================================================================
from .constants import (
    DBL_EPSILON,
    Q_LIQUID,
    Q_GAS,
    Q_SUPERCRITICAL,
    Phase,
    Param,
    InputPair,
    mass_to_molar_inputs,
)

# ============================================================================
# Configuration and numerics - from config.py, numerics.py
# ============================================================================
from .config import SolverOptions, DEFAULT_OPTIONS
from .numerics import solve_cubic, is_in_closed_range

# ============================================================================
# Public API
# ============================================================================
__all__ = [
    # Exceptions
    'ThermoException',
    'InvalidComposition',
    'MissingComposition',
    'UnsupportedInput',
    'UnsupportedDerivative',
    'InvalidDerivative',
    'DomainError',
    'BelowTriplePoint',
    'OutOfRange',
    'InvalidState',
    'InvalidPhase',
    'DensitySolveFailed',
    'SaturationFailed',
    'AmbiguousPhase',

    # Tags
    'DBL_EPSILON',
    'Q_LIQUID',
    'Q_GAS',
    'Q_SUPERCRITICAL',
    'Phase',
    'Param',
    'InputPair',
    'mass_to_molar_inputs',

    # Configuration and numerics
    'SolverOptions',
    'DEFAULT_OPTIONS',
    'solve_cubic',
    'is_in_closed_range',
]
