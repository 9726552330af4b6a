# File: helmholtz_eos/fluids/__init__.py
"""
Fluid descriptors: Helmholtz term families, ancillaries and the fluid library
"""

# ============================================================================
# TERMS
# ============================================================================

from .terms import (
    BaseHelmholtzTerm,
    HelmholtzSum,
    ResidualHelmholtzPower,
    ResidualHelmholtzExponential,
    ResidualHelmholtzLemmon2005,
    ResidualHelmholtzGaussian,
    ResidualHelmholtzGERG2008,
    ResidualHelmholtzNonAnalytic,
    IdealGasHelmholtzLead,
    IdealGasHelmholtzEnthalpyEntropyOffset,
    IdealGasHelmholtzLogTau,
    IdealGasHelmholtzPower,
    IdealGasHelmholtzPlanckEinstein,
    IdealGasHelmholtzPlanckEinsteinGeneralized,
    IdealGasHelmholtzCP0Constant,
    IdealGasHelmholtzCP0PolyT,
    build_alpha0,
    build_alphar,
)

# ============================================================================
# DESCRIPTORS AND LIBRARY
# ============================================================================

from .ancillaries import Ancillaries, RationalPolynomialAncillary, SaturationAncillary
from .descriptor import HelmholtzFluid, SimpleState
from .library import available_fluids, get_fluid, load_coolprop_fluid

__all__ = [
    # Terms
    'BaseHelmholtzTerm',
    'HelmholtzSum',
    'ResidualHelmholtzPower',
    'ResidualHelmholtzExponential',
    'ResidualHelmholtzLemmon2005',
    'ResidualHelmholtzGaussian',
    'ResidualHelmholtzGERG2008',
    'ResidualHelmholtzNonAnalytic',
    'IdealGasHelmholtzLead',
    'IdealGasHelmholtzEnthalpyEntropyOffset',
    'IdealGasHelmholtzLogTau',
    'IdealGasHelmholtzPower',
    'IdealGasHelmholtzPlanckEinstein',
    'IdealGasHelmholtzPlanckEinsteinGeneralized',
    'IdealGasHelmholtzCP0Constant',
    'IdealGasHelmholtzCP0PolyT',
    'build_alpha0',
    'build_alphar',

    # Descriptors
    'Ancillaries',
    'RationalPolynomialAncillary',
    'SaturationAncillary',
    'HelmholtzFluid',
    'SimpleState',
    'available_fluids',
    'get_fluid',
    'load_coolprop_fluid',
]
