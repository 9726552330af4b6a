# File: helmholtz_eos/core/constants.py
"""
Input pairs, parameter tags and phase labels

The set of input pairs is closed: adding a pair means extending the
dispatch table in helmholtz_eos.state.flash as well.
"""

import sys
from enum import Enum
from typing import Dict, Tuple, Union

from .exceptions import UnsupportedInput


DBL_EPSILON = sys.float_info.epsilon

# Quality sentinels for single-phase states
Q_LIQUID = -1000.0
Q_GAS = 1000.0
Q_SUPERCRITICAL = 1e9


class Phase(Enum):
    """Phase labels (values match CoolProp's PhaseSI strings)"""
    LIQUID = "liquid"
    SUPERCRITICAL = "supercritical"
    SUPERCRITICAL_GAS = "supercritical_gas"
    SUPERCRITICAL_LIQUID = "supercritical_liquid"
    GAS = "gas"
    TWOPHASE = "twophase"
    UNKNOWN = "unknown"

    @property
    def is_homogeneous(self) -> bool:
        return self not in (Phase.TWOPHASE, Phase.UNKNOWN)

    @classmethod
    def parse(cls, value: Union["Phase", str]) -> "Phase":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key.startswith("phase_"):
            key = key[len("phase_"):]
        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedInput(f"Phase '{value}' not available. "
                               f"Choose from: {', '.join(m.value for m in cls)}")


class Param(Enum):
    """State variables understood by phase determination and partial derivatives"""
    T = "T"
    P = "P"
    DMOLAR = "Dmolar"
    HMOLAR = "Hmolar"
    SMOLAR = "Smolar"
    UMOLAR = "Umolar"
    TAU = "Tau"
    DELTA = "Delta"
    Q = "Q"

    @classmethod
    def parse(cls, value: Union["Param", str]) -> "Param":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == key or member.name.lower() == key:
                return member
        raise UnsupportedInput(f"Parameter '{value}' is not supported")


class InputPair(Enum):
    """Tagged pairs of flash inputs, value order as in the member name"""
    # Molar pairs
    PT_INPUTS = "PT"
    DmolarT_INPUTS = "DmolarT"
    SmolarT_INPUTS = "SmolarT"
    HmolarT_INPUTS = "HmolarT"
    TUmolar_INPUTS = "TUmolar"
    DmolarP_INPUTS = "DmolarP"
    DmolarHmolar_INPUTS = "DmolarHmolar"
    DmolarSmolar_INPUTS = "DmolarSmolar"
    DmolarUmolar_INPUTS = "DmolarUmolar"
    HmolarP_INPUTS = "HmolarP"
    PSmolar_INPUTS = "PSmolar"
    PUmolar_INPUTS = "PUmolar"
    QT_INPUTS = "QT"
    PQ_INPUTS = "PQ"
    # Mass pairs (converted to molar before dispatch)
    DmassT_INPUTS = "DmassT"
    HmassT_INPUTS = "HmassT"
    SmassT_INPUTS = "SmassT"
    TUmass_INPUTS = "TUmass"
    DmassP_INPUTS = "DmassP"
    DmassHmass_INPUTS = "DmassHmass"
    DmassSmass_INPUTS = "DmassSmass"
    DmassUmass_INPUTS = "DmassUmass"
    HmassP_INPUTS = "HmassP"
    PSmass_INPUTS = "PSmass"
    PUmass_INPUTS = "PUmass"

    @property
    def is_mass_based(self) -> bool:
        return self in MASS_TO_MOLAR

    @classmethod
    def parse(cls, value: Union["InputPair", str]) -> "InputPair":
        """Accept an InputPair, its name ("PT_INPUTS") or its short tag ("PT")"""
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        if key in cls.__members__:
            return cls.__members__[key]
        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedInput(f"This pair of inputs [{value}] is not yet supported")


# Mass pair -> (molar pair, exponent of M applied to value1, exponent for value2)
# Densities divide by M, energies and entropies multiply by M
MASS_TO_MOLAR: Dict[InputPair, Tuple[InputPair, int, int]] = {
    InputPair.DmassT_INPUTS: (InputPair.DmolarT_INPUTS, -1, 0),
    InputPair.HmassT_INPUTS: (InputPair.HmolarT_INPUTS, 1, 0),
    InputPair.SmassT_INPUTS: (InputPair.SmolarT_INPUTS, 1, 0),
    InputPair.TUmass_INPUTS: (InputPair.TUmolar_INPUTS, 0, 1),
    InputPair.DmassP_INPUTS: (InputPair.DmolarP_INPUTS, -1, 0),
    InputPair.DmassHmass_INPUTS: (InputPair.DmolarHmolar_INPUTS, -1, 1),
    InputPair.DmassSmass_INPUTS: (InputPair.DmolarSmolar_INPUTS, -1, 1),
    InputPair.DmassUmass_INPUTS: (InputPair.DmolarUmolar_INPUTS, -1, 1),
    InputPair.HmassP_INPUTS: (InputPair.HmolarP_INPUTS, 1, 0),
    InputPair.PSmass_INPUTS: (InputPair.PSmolar_INPUTS, 0, 1),
    InputPair.PUmass_INPUTS: (InputPair.PUmolar_INPUTS, 0, 1),
}


def mass_to_molar_inputs(pair: InputPair, value1: float, value2: float,
                         molar_mass: float) -> Tuple[InputPair, float, float]:
    """
    Convert a mass-based input pair to its molar form

    Args:
        pair: Input pair tag (molar pairs pass through unchanged)
        value1: First value in the units of the pair
        value2: Second value in the units of the pair
        molar_mass: Molar mass of the fluid or mixture (kg/mol)

    Returns:
        (molar pair, value1, value2)
    """
    if pair not in MASS_TO_MOLAR:
        return pair, value1, value2
    molar_pair, k1, k2 = MASS_TO_MOLAR[pair]
    return molar_pair, value1 * molar_mass**k1, value2 * molar_mass**k2
