# File: helmholtz_eos/mixtures/reducing.py
"""
Reducing functions for mixtures: Tr(x) and rhor(x)

Both functions are quadratic mixing rules of the GERG-2008 form

    Y(x) = sum_i x_i^2 Y_c,i
           + sum_{i<j} 2 beta_ij gamma_ij Y_ij f_ij(x_i, x_j)
    f_ij = x_i x_j (x_i + x_j) / (beta_ij^2 x_i + x_j)

with Y = Tr (Y_ij = sqrt(Tc_i Tc_j)) and Y = 1/rhor
(Y_ij = (1/8)(vc_i^(1/3) + vc_j^(1/3))^3). All mole fractions are treated
as independent variables; derivatives at constant n_j follow from
n dY/dn_i = dY/dx_i - sum_k x_k dY/dx_k.

Reference:
    Kunz, O., Wagner, W. (2012). J. Chem. Eng. Data 57, 3032-3091
"""

from typing import Sequence, Tuple

import numpy as np


def _gerg_f(xi: float, xj: float, beta: float) -> Tuple[float, ...]:
    """
    f_ij and its first and second derivatives in (x_i, x_j)

    Returns:
        (f, f_i, f_j, f_ii, f_ij, f_jj)
    """
    den = beta**2 * xi + xj
    if den == 0:
        # Both fractions zero; with beta = 1, f reduces to x_i x_j
        return (0.0, 0.0, 0.0, 0.0, 1.0 if beta == 1 else 0.0, 0.0)
    num = xi * xj * (xi + xj)
    f = num / den

    # den is linear in x, so f_ab = (num_ab - f_a den_b - f_b den_a) / den
    den_i, den_j = beta**2, 1.0
    f_i = (xj * (2 * xi + xj) - f * den_i) / den
    f_j = (xi * (xi + 2 * xj) - f * den_j) / den
    f_ii = (2 * xj - 2 * f_i * den_i) / den
    f_jj = (2 * xi - 2 * f_j * den_j) / den
    f_ij = (2 * (xi + xj) - f_i * den_j - f_j * den_i) / den
    return f, f_i, f_j, f_ii, f_ij, f_jj


class ReducingFunction:
    """
    Base class for mixture reducing functions

    Args:
        Tc: Critical (reducing) temperatures of the components (K)
        rhoc: Critical (reducing) molar densities of the components (mol/m^3)
        beta_T, gamma_T, beta_v, gamma_v: N x N interaction matrices; only
            the upper triangle (i < j) is used
    """

    name = "base"

    def __init__(self, Tc: Sequence[float], rhoc: Sequence[float],
                 beta_T, gamma_T, beta_v, gamma_v):
        self.Tc = np.asarray(Tc, dtype=float)
        self.vc = 1.0 / np.asarray(rhoc, dtype=float)
        self.N = len(self.Tc)
        self.beta_T = np.asarray(beta_T, dtype=float)
        self.gamma_T = np.asarray(gamma_T, dtype=float)
        self.beta_v = np.asarray(beta_v, dtype=float)
        self.gamma_v = np.asarray(gamma_v, dtype=float)

        Tij = np.sqrt(np.outer(self.Tc, self.Tc))
        cbrt_v = np.cbrt(self.vc)
        vij = (cbrt_v[:, None] + cbrt_v[None, :])**3 / 8
        self._cT = 2 * self.beta_T * self.gamma_T * Tij
        self._cv = 2 * self.beta_v * self.gamma_v * vij

        self._last_x = None
        self._cache = None

    # ========================================================================
    # Core evaluation
    # ========================================================================

    def _quadratic(self, Yc, c, beta, x) -> Tuple[float, np.ndarray, np.ndarray]:
        Y = float(np.dot(x**2, Yc))
        grad = 2 * x * Yc
        hess = np.diag(2 * Yc)
        for i in range(self.N):
            for j in range(i + 1, self.N):
                f, f_i, f_j, f_ii, f_ij, f_jj = _gerg_f(x[i], x[j], beta[i, j])
                Y += c[i, j] * f
                grad[i] += c[i, j] * f_i
                grad[j] += c[i, j] * f_j
                hess[i, i] += c[i, j] * f_ii
                hess[j, j] += c[i, j] * f_jj
                hess[i, j] += c[i, j] * f_ij
                hess[j, i] += c[i, j] * f_ij
        return Y, grad, hess

    def _evaluate(self, x):
        """(Tr, dTr/dx, d2Tr/dx2, rhor, drhor/dx, d2rhor/dx2) for composition x"""
        x = np.asarray(x, dtype=float)
        key = tuple(x)
        if key == self._last_x:
            return self._cache

        Tr, dTr, d2Tr = self._quadratic(self.Tc, self._cT, self.beta_T, x)
        vr, dvr, d2vr = self._quadratic(self.vc, self._cv, self.beta_v, x)
        rhor = 1 / vr
        drhor = -dvr / vr**2
        d2rhor = 2 * np.outer(dvr, dvr) / vr**3 - d2vr / vr**2

        self._last_x = key
        self._cache = (Tr, dTr, d2Tr, rhor, drhor, d2rhor)
        return self._cache

    # ========================================================================
    # Reducing temperature
    # ========================================================================

    def Tr(self, x) -> float:
        return self._evaluate(x)[0]

    def dTr_dxi(self, x, i: int) -> float:
        """dTr/dx_i at constant x_j"""
        return float(self._evaluate(x)[1][i])

    def d2Tr_dxidxj(self, x, i: int, j: int) -> float:
        return float(self._evaluate(x)[2][i, j])

    def ndTrdni(self, x, i: int) -> float:
        """n dTr/dn_i at constant n_j"""
        dTr = self._evaluate(x)[1]
        return float(dTr[i] - np.dot(x, dTr))

    def d_ndTrdni_dxj(self, x, i: int, j: int) -> float:
        """d(n dTr/dn_i)/dx_j at constant x_i"""
        _, dTr, d2Tr = self._evaluate(x)[:3]
        return float(d2Tr[i, j] - dTr[j] - np.dot(x, d2Tr[:, j]))

    # ========================================================================
    # Reducing molar density
    # ========================================================================

    def rhormolar(self, x) -> float:
        return self._evaluate(x)[3]

    def drhormolar_dxi(self, x, i: int) -> float:
        """drhor/dx_i at constant x_j"""
        return float(self._evaluate(x)[4][i])

    def d2rhormolar_dxidxj(self, x, i: int, j: int) -> float:
        return float(self._evaluate(x)[5][i, j])

    def ndrhorbardni(self, x, i: int) -> float:
        """n drhor/dn_i at constant n_j"""
        drhor = self._evaluate(x)[4]
        return float(drhor[i] - np.dot(x, drhor))

    def d_ndrhorbardni_dxj(self, x, i: int, j: int) -> float:
        """d(n drhor/dn_i)/dx_j at constant x_i"""
        drhor, d2rhor = self._evaluate(x)[4:]
        return float(d2rhor[i, j] - drhor[j] - np.dot(x, d2rhor[:, j]))


class GERG2008ReducingFunction(ReducingFunction):
    """GERG-2008 reducing function with binary beta and gamma parameters"""
    name = "GERG-2008"


class LorentzBerthelotReducingFunction(ReducingFunction):
    """Lorentz-Berthelot combining rules (all beta and gamma equal to 1)"""
    name = "Lorentz-Berthelot"

    def __init__(self, Tc: Sequence[float], rhoc: Sequence[float]):
        ones = np.ones((len(Tc), len(Tc)))
        super().__init__(Tc, rhoc, ones, ones, ones, ones)
