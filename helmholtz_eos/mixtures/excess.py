# File: helmholtz_eos/mixtures/excess.py
"""
Excess (departure) contribution to the residual Helmholtz energy

    alphar_E = sum_{i<j} x_i x_j F_ij alphar_ij(tau, delta)

alphar_ij is a binary departure function built from the same term
families as the pure-fluid EOS (power and GERG-2008 exponential terms).
"""

from typing import Dict, Tuple

import numpy as np

from ..fluids.terms import HelmholtzSum


class ExcessTerm:
    """
    Args:
        N: Number of components
        F: N x N matrix of departure-function weights (upper triangle used)
        departure: Map of (i, j), i < j, to the departure function alphar_ij
    """

    def __init__(self, N: int, F=None, departure: Dict[Tuple[int, int], HelmholtzSum] = None):
        self.N = N
        self.F = np.zeros((N, N)) if F is None else np.asarray(F, dtype=float)
        self.departure = {}
        for (i, j), func in (departure or {}).items():
            if i > j:
                i, j = j, i
            if self.F[i, j] != 0 and len(func) > 0:
                self.departure[(i, j)] = func

    @property
    def is_empty(self) -> bool:
        return not self.departure

    def _pair(self, i: int, j: int, n_tau: int, n_delta: int, tau: float, delta: float) -> float:
        key = (i, j) if i < j else (j, i)
        func = self.departure.get(key)
        if func is None:
            return 0.0
        return self.F[key] * func.deriv(n_tau, n_delta, tau, delta)

    def alphar_deriv(self, n_tau: int, n_delta: int, tau: float, delta: float, x) -> float:
        """Tau/delta derivative of alphar_E at fixed composition"""
        total = 0.0
        for i, j in self.departure:
            total += x[i] * x[j] * self._pair(i, j, n_tau, n_delta, tau, delta)
        return total

    def dalphar_dxi_deriv(self, n_tau: int, n_delta: int, tau: float, delta: float,
                          x, i: int) -> float:
        """d/dx_i of a tau/delta derivative of alphar_E"""
        return sum(x[j] * self._pair(i, j, n_tau, n_delta, tau, delta)
                   for j in range(self.N) if j != i)

    def dalphar_dxi(self, tau: float, delta: float, x, i: int) -> float:
        return self.dalphar_dxi_deriv(0, 0, tau, delta, x, i)

    def d2alphar_dxi_dTau(self, tau: float, delta: float, x, i: int) -> float:
        return self.dalphar_dxi_deriv(1, 0, tau, delta, x, i)

    def d2alphar_dxi_dDelta(self, tau: float, delta: float, x, i: int) -> float:
        return self.dalphar_dxi_deriv(0, 1, tau, delta, x, i)

    def d2alphardxidxj(self, tau: float, delta: float, x, i: int, j: int) -> float:
        if i == j:
            return 0.0
        return self._pair(i, j, 0, 0, tau, delta)
