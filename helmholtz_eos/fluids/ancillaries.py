# File: helmholtz_eos/fluids/ancillaries.py
"""
Ancillary correlations for saturated-phase properties

Ancillaries are fast approximate fits used to bound and seed the exact
saturation solves. They are never used as final property values.
"""

import math
import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import optimize

from ..core.exceptions import OutOfRange


class SaturationAncillary:
    """
    Saturation pressure or density correlation in theta = 1 - T/T_r

    Types:
        "pL", "pV", "rhoL", "rhoV": y = y_r exp(f * sum n theta^t),
            with f = T_r/T when using_tau_r, else 1
        "rhoLnoexp", "rhoVnoexp": y = y_r (1 + sum n theta^t)
    """

    TYPES = ("pL", "pV", "rhoL", "rhoV", "rhoLnoexp", "rhoVnoexp")

    def __init__(self, kind: str, n, t, reducing_value: float, T_r: float,
                 Tmin: float, Tmax: float, using_tau_r: bool = False,
                 max_abs_error: float = 0.0):
        if kind not in self.TYPES:
            raise ValueError(f"Ancillary type '{kind}' not available. "
                             f"Choose from: {', '.join(self.TYPES)}")
        self.kind = kind
        self.n = np.asarray(n, dtype=float)
        self.t = np.asarray(t, dtype=float)
        self.reducing_value = float(reducing_value)
        self.T_r = float(T_r)
        self.Tmin = float(Tmin)
        self.Tmax = float(Tmax)
        self.using_tau_r = bool(using_tau_r)
        self.max_abs_error = float(max_abs_error)

    @property
    def noexp(self) -> bool:
        return self.kind.endswith("noexp")

    def evaluate(self, T: float) -> float:
        theta = max(1.0 - T / self.T_r, 0.0)
        summer = float(np.sum(self.n * theta**self.t))
        if self.noexp:
            return self.reducing_value * (1 + summer)
        if self.using_tau_r:
            summer *= self.T_r / T
        return self.reducing_value * math.exp(summer)

    def invert(self, value: float) -> float:
        """
        Temperature at which the ancillary equals value

        Raises:
            OutOfRange: if value cannot be bracketed between 0.8*Tmin and T_r
        """
        T_low = 0.8 * self.Tmin
        T_high = min(self.Tmax, self.T_r)

        def resid(T):
            return self.evaluate(T) - value

        try:
            return optimize.brentq(resid, T_low, T_high, xtol=1e-12, rtol=1e-12, maxiter=100)
        except (ValueError, RuntimeError) as e:
            raise OutOfRange(
                f"Unable to invert {self.kind} ancillary for value {value:g} "
                f"in [{T_low:g}, {T_high:g}] K: {e}", value=value
            ) from e

    def __call__(self, T: float) -> float:
        return self.evaluate(T)


class RationalPolynomialAncillary:
    """
    y = sum A_i T^i / sum B_i T^i

    Caloric ancillaries (hL, hLV, sL, sLV) are relative to the fluid's
    hs_anchor state.
    """

    def __init__(self, A, B, Tmin: float, Tmax: float, max_abs_error: float = 0.0):
        self.A = np.asarray(A, dtype=float)
        self.B = np.asarray(B, dtype=float)
        self.Tmin = float(Tmin)
        self.Tmax = float(Tmax)
        self.max_abs_error = float(max_abs_error)

    def evaluate(self, T: float) -> float:
        num = float(np.polyval(self.A[::-1], T))
        den = float(np.polyval(self.B[::-1], T))
        return num / den

    def __call__(self, T: float) -> float:
        return self.evaluate(T)


def _saturation_from_dict(kind_hint: str, data: dict) -> SaturationAncillary:
    kind = data.get("type", kind_hint)
    return SaturationAncillary(
        kind=kind,
        n=data["n"],
        t=data["t"],
        reducing_value=data["reducing_value"],
        T_r=data["T_r"],
        Tmin=data.get("Tmin", 0.0),
        Tmax=data.get("Tmax", data["T_r"]),
        using_tau_r=data.get("using_tau_r", False),
        max_abs_error=data.get("max_abs_error", 0.0),
    )


def _caloric_from_dict(data: dict) -> RationalPolynomialAncillary:
    if data.get("type") != "rational_polynomial":
        raise ValueError(f"Caloric ancillary type '{data.get('type')}' not available. "
                         f"Choose from: rational_polynomial")
    return RationalPolynomialAncillary(
        A=data["A"], B=data["B"],
        Tmin=data.get("Tmin", 0.0), Tmax=data.get("Tmax", math.inf),
        max_abs_error=data.get("max_abs_error", 0.0),
    )


@dataclass
class Ancillaries:
    """Set of ancillary curves for one fluid; caloric curves are optional"""
    pL: SaturationAncillary
    pV: SaturationAncillary
    rhoL: SaturationAncillary
    rhoV: SaturationAncillary
    hL: Optional[RationalPolynomialAncillary] = None
    hLV: Optional[RationalPolynomialAncillary] = None
    sL: Optional[RationalPolynomialAncillary] = None
    sLV: Optional[RationalPolynomialAncillary] = None

    @property
    def has_enthalpy(self) -> bool:
        return self.hL is not None and self.hLV is not None

    @property
    def has_entropy(self) -> bool:
        return self.sL is not None and self.sLV is not None

    @classmethod
    def from_dict(cls, data: dict, fluid_name: str = "") -> "Ancillaries":
        """
        Build from the "ANCILLARIES" block of a CoolProp-style fluid file

        A single "pS" curve serves as both pL and pV. Caloric curves that
        cannot be interpreted are skipped with a warning.
        """
        if "pS" in data:
            pL = pV = _saturation_from_dict("pL", data["pS"])
        else:
            pL = _saturation_from_dict("pL", data["pL"])
            pV = _saturation_from_dict("pV", data["pV"])

        caloric = {}
        for key in ("hL", "hLV", "sL", "sLV"):
            if key not in data:
                continue
            try:
                caloric[key] = _caloric_from_dict(data[key])
            except (KeyError, ValueError) as e:
                warnings.warn(f"Skipping ancillary '{key}' of {fluid_name or 'fluid'}: {e}")

        return cls(
            pL=pL,
            pV=pV,
            rhoL=_saturation_from_dict("rhoL", data["rhoL"]),
            rhoV=_saturation_from_dict("rhoV", data["rhoV"]),
            **caloric,
        )
