# File: helmholtz_eos/fluids/library.py
"""
Fluid library: bundled descriptors and CoolProp-backed loading
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, List

import CoolProp.CoolProp as CP

from ..core.exceptions import UnsupportedInput
from .descriptor import HelmholtzFluid


DATA_DIR = Path(__file__).parent / "data"


@lru_cache(maxsize=None)
def _bundled_files() -> Dict[str, Path]:
    """Map of lower-cased names and aliases to bundled JSON files"""
    index = {}
    for path in sorted(DATA_DIR.glob("*.json")):
        with open(path, encoding="utf-8") as f:
            info = json.load(f).get("INFO", {})
        for key in [info.get("NAME", path.stem), *info.get("ALIASES", ())]:
            index[key.lower()] = path
    return index


def available_fluids() -> List[str]:
    """Names of the bundled fluids"""
    return sorted(path.stem for path in DATA_DIR.glob("*.json"))


@lru_cache(maxsize=None)
def _load_bundled(path: Path) -> HelmholtzFluid:
    with open(path, encoding="utf-8") as f:
        return HelmholtzFluid.from_dict(json.load(f))


def get_fluid(name: str) -> HelmholtzFluid:
    """
    Bundled fluid descriptor by name or alias (case-insensitive)

    Descriptors are built once per process and shared.

    Raises:
        ValueError: if the fluid is not bundled
    """
    path = _bundled_files().get(name.strip().lower())
    if path is None:
        raise ValueError(f"Fluid '{name}' not available. "
                         f"Choose from: {', '.join(available_fluids())}")
    return _load_bundled(path)


@lru_cache(maxsize=None)
def load_coolprop_fluid(name: str) -> HelmholtzFluid:
    """
    Build a descriptor from CoolProp's fluid library

    Args:
        name: CoolProp fluid identifier (e.g., "Nitrogen", "R134a")

    Raises:
        ValueError: if CoolProp does not know the fluid
        UnsupportedInput: if the EOS uses a term family not implemented here
    """
    try:
        raw = CP.get_fluid_param_string(name, "JSON")
    except (ValueError, RuntimeError) as e:
        raise ValueError(f"Fluid '{name}' not available in CoolProp") from e

    data = json.loads(raw)
    # CoolProp wraps the fluid in a one-element list
    if isinstance(data, list):
        data = data[0]
    try:
        return HelmholtzFluid.from_dict(data)
    except KeyError as e:
        raise UnsupportedInput(f"CoolProp data for '{name}' is missing {e}") from e
