# File: helmholtz_eos/core/config.py
"""
Numerical policy for flash and saturation solvers
"""

from dataclasses import dataclass, replace

from .constants import DBL_EPSILON


@dataclass(frozen=True)
class SolverOptions:
    """
    Tolerances, iteration caps and ancillary bands

    Every solver in the package terminates after max_iterations; nothing
    loops unbounded.
    """
    # Root finding
    newton_rtol: float = 1e-12        # Relative step tolerance, Newton
    secant_rtol: float = 1e-12        # Relative step tolerance, secant
    brent_rtol: float = 1e-12         # Relative bracket tolerance, Brent
    xtol: float = 1e-14               # Absolute step or bracket tolerance
    max_iterations: int = 100

    # Saturation
    saturation_tol: float = 1e-10     # |dJ| + |dK| at convergence
    saturation_min_separation: float = 1e-6   # Minimum |deltaL - deltaV|

    # Phase determination
    quality_eps: float = 100 * DBL_EPSILON
    pressure_band: float = 0.02       # Fractional band on ancillary pressures
    density_band: float = 0.05        # Fractional band on ancillary densities
    internal_energy_band_factor: float = 1.5

    # Density brackets (mol/m^3)
    rho_min_supercritical: float = 1e-10
    rho_min_gas: float = 1e-14

    # Temperature bracket upper bound, as a multiple of Tmax
    Tmax_factor: float = 1.5

    def with_overrides(self, **kwargs) -> "SolverOptions":
        """Return a copy with selected fields replaced"""
        return replace(self, **kwargs)


DEFAULT_OPTIONS = SolverOptions()
