# File: helmholtz_eos/core/thermodynamics.py
"""
Mass-based convenience interface over ThermodynamicState

Fluid.thermo_prop takes a two-letter mode and returns an immutable
FluidState snapshot in SI mass units.
"""

import math
from dataclasses import dataclass, field

from .constants import InputPair, Phase
from .exceptions import ThermoException
from ..state.state import ThermodynamicState


@dataclass(frozen=True)
class FluidState:
    """
    Thermodynamic state properties

    Properties with no two-phase definition (A, cp, cv) are NaN for
    two-phase states.
    """
    P: float = math.nan      # Pressure (Pa)
    T: float = math.nan      # Temperature (K)
    D: float = math.nan      # Density (kg/m³)
    H: float = math.nan      # Specific enthalpy (J/kg)
    S: float = math.nan      # Specific entropy (J/kg-K)
    A: float = math.nan      # Speed of sound (m/s)
    cp: float = math.nan     # Specific heat for constant pressure mass based
    cv: float = math.nan     # Specific heat for constant volume mass based
    Q: float = math.nan      # Vapor quality (sentinel outside [0, 1] if single-phase)
    phase: str = ""          # Phase description
    fluid: 'Fluid' = field(default=None, repr=False)  # Reference to fluid

    @property
    def is_valid(self) -> bool:
        """Check if state has valid pressure"""
        return not math.isnan(self.P)

    def is_two_phase(self) -> bool:
        """
        Check if state is in two-phase region

        Returns:
            True if phase == 'twophase', False otherwise
        """
        return self.phase.lower() == Phase.TWOPHASE.value


# Mode -> (input pair, True if val1/val2 must be swapped for the pair's order)
MODES = {
    "PT": (InputPair.PT_INPUTS, False),
    "PH": (InputPair.HmassP_INPUTS, True),
    "PS": (InputPair.PSmass_INPUTS, False),
    "PD": (InputPair.DmassP_INPUTS, True),
    "DT": (InputPair.DmassT_INPUTS, False),
    "HT": (InputPair.HmassT_INPUTS, False),
    "ST": (InputPair.SmassT_INPUTS, False),
    "QT": (InputPair.QT_INPUTS, False),
    "PQ": (InputPair.PQ_INPUTS, False),
}


class Fluid:
    """
    Fluid property calculator backed by the package's Helmholtz EOS
    """

    def __init__(self, fluid_name: str = "Water"):
        """
        Initialize fluid calculator

        Args:
            fluid_name: Bundled fluid name or alias (e.g., "Water", "CH4")

        Raises:
            ValueError: if the fluid is not available
        """
        self.name = fluid_name
        self.state = ThermodynamicState(fluid_name)

    def thermo_prop(self, mode: str, val1: float, val2: float) -> FluidState:
        """
        Calculate thermodynamic properties

        Args:
            mode: Property pair identifier ("PT", "PH", "PS", "PD", "DT",
                "HT", "ST", "QT", "PQ"); values in the order of the mode
            val1: First property value (SI, mass based)
            val2: Second property value (SI, mass based)

        Returns:
            FluidState object

        Example:
            >>> fluid = Fluid("Water")
            >>> state = fluid.thermo_prop("PT", 101325, 300)
        """
        try:
            if mode not in MODES:
                raise ValueError(f"Unknown mode: {mode}. Use {', '.join(MODES)}")
            pair, swap = MODES[mode]
            values = (val2, val1) if swap else (val1, val2)

            state = self.state
            state.update(pair, *values)
            single_phase = state.phase != Phase.TWOPHASE
            return FluidState(
                P=state.p,
                T=state.T,
                D=state.rhomass,
                H=state.hmass,
                S=state.smass,
                A=state.speed_sound if single_phase else math.nan,
                cp=state.cpmass if single_phase else math.nan,
                cv=state.cvmass if single_phase else math.nan,
                Q=state.Q,
                phase=state.phase.value,
                fluid=self
            )

        except Exception as e:
            raise ThermoException(f"Property calculation failed for {mode}({val1}, {val2}): {e}") from e
