# ruff: noqa: E741  # Allow ambiguous variable names (l, I, O) due to physics notation
"""
Molecular integrals over Cartesian contracted Gaussians (McMurchie-Davidson scheme).

Products of two Gaussians are expanded in Hermite Gaussians with coefficients E^{ij}_t;
Coulomb-type integrals reduce to the Hermite integrals R_{tuv}, built from the Boys function.
"""

import itertools
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Sequence, Tuple

import numpy as np
from scipy.special import gamma, gammainc

from .basis import ContractedGaussian
from .molecule import Molecule


def gaussian_product_center(alpha1: float, center1: np.ndarray, alpha2: float, center2: np.ndarray) -> np.ndarray:
	"""Compute the Gaussian product center of two primitive Gaussians."""
	return (alpha1 * center1 + alpha2 * center2) / (alpha1 + alpha2)


def boys(n: Sequence[int], x: float) -> np.ndarray:
	"""
	Boys function F_n(x) = ∫_0^1 t^{2n} exp(-x t^2) dt for each order in n.
	"""
	n = np.asarray(n, dtype=float)
	if x < 1e-10:
		return 1.0 / (2.0 * n + 1.0) - x / (2.0 * n + 3.0)
	return gamma(n + 0.5) * gammainc(n + 0.5, x) / (2.0 * x ** (n + 0.5))


def hermite_expansion(i: int, j: int, t: int, Qx: float, a: float, b: float) -> float:
	"""
	Hermite expansion coefficient E^{ij}_t for one Cartesian direction.

	Args:
		i, j: Cartesian powers of the two Gaussians
		t: Hermite order
		Qx: Distance between the two centers (A - B)
		a, b: Exponents
	"""
	p = a + b
	q = a * b / p
	if i < 0 or j < 0 or t < 0 or t > i + j:
		return 0.0
	if i == j == t == 0:
		return np.exp(-q * Qx * Qx)
	if j == 0:
		return (
			(1 / (2 * p)) * hermite_expansion(i - 1, j, t - 1, Qx, a, b)
			- (q * Qx / a) * hermite_expansion(i - 1, j, t, Qx, a, b)
			+ (t + 1) * hermite_expansion(i - 1, j, t + 1, Qx, a, b)
		)
	return (
		(1 / (2 * p)) * hermite_expansion(i, j - 1, t - 1, Qx, a, b)
		+ (q * Qx / b) * hermite_expansion(i, j - 1, t, Qx, a, b)
		+ (t + 1) * hermite_expansion(i, j - 1, t + 1, Qx, a, b)
	)


def hermite_coulomb_table(L: int, p: float, PC: np.ndarray) -> np.ndarray:
	"""
	Hermite Coulomb integrals R_{tuv} (order n = 0) for all t + u + v <= L.

	Args:
		L: Highest total Hermite order needed
		p: Exponent of the Hermite Gaussian
		PC: Vector from the charge center C to the Hermite center P
	"""
	X, Y, Z = (float(x) for x in PC)
	F = boys(np.arange(L + 1), p * (X * X + Y * Y + Z * Z))

	@lru_cache(maxsize=None)
	def R(t: int, u: int, v: int, n: int) -> float:
		if t < 0 or u < 0 or v < 0:
			return 0.0
		if t == u == v == 0:
			return (-2.0 * p) ** n * F[n]
		if t > 0:
			return (t - 1) * R(t - 2, u, v, n + 1) + X * R(t - 1, u, v, n + 1)
		if u > 0:
			return (u - 1) * R(t, u - 2, v, n + 1) + Y * R(t, u - 1, v, n + 1)
		return (v - 1) * R(t, u, v - 2, n + 1) + Z * R(t, u, v - 1, n + 1)

	table = np.zeros((L + 1, L + 1, L + 1))
	for t in range(L + 1):
		for u in range(L + 1 - t):
			for v in range(L + 1 - t - u):
				table[t, u, v] = R(t, u, v, 0)
	return table


@dataclass
class PrimitivePair:
	"""Product of two primitives expanded in Hermite Gaussians."""

	p: float
	P: np.ndarray
	coefficient: float
	E: np.ndarray  # E[t, u, v] = E^x_t E^y_u E^z_v
	L: int


def primitive_pairs(f1: ContractedGaussian, f2: ContractedGaussian) -> List[PrimitivePair]:
	"""Hermite expansions for every primitive pair of two contracted functions."""
	A, B = f1.center, f2.center
	AB = A - B
	pairs = []
	for prim1 in f1.primitives:
		for prim2 in f2.primitives:
			a, b = prim1.exponent, prim2.exponent
			expansions = []
			for dim in range(3):
				i, j = f1.angular_momentum[dim], f2.angular_momentum[dim]
				expansions.append(np.array([hermite_expansion(i, j, t, AB[dim], a, b) for t in range(i + j + 1)]))
			Ex, Ey, Ez = expansions
			pairs.append(
				PrimitivePair(
					p=a + b,
					P=gaussian_product_center(a, A, b, B),
					coefficient=prim1.coefficient * prim2.coefficient,
					E=np.einsum("i,j,k->ijk", Ex, Ey, Ez),
					L=sum(f1.angular_momentum) + sum(f2.angular_momentum),
				)
			)
	return pairs


def overlap_primitive(
	a: float, lmn1: Tuple[int, int, int], A: np.ndarray, b: float, lmn2: Tuple[int, int, int], B: np.ndarray
) -> float:
	"""Overlap of two unnormalized Cartesian primitives."""
	p = a + b
	result = (np.pi / p) ** 1.5
	for dim in range(3):
		result *= hermite_expansion(lmn1[dim], lmn2[dim], 0, A[dim] - B[dim], a, b)
	return result


def kinetic_primitive(
	a: float, lmn1: Tuple[int, int, int], A: np.ndarray, b: float, lmn2: Tuple[int, int, int], B: np.ndarray
) -> float:
	"""Kinetic energy integral -1/2 <a|∇²|b> of two unnormalized Cartesian primitives."""
	l2, m2, n2 = lmn2
	term0 = b * (2 * (l2 + m2 + n2) + 3) * overlap_primitive(a, lmn1, A, b, lmn2, B)
	term1 = -2 * b**2 * (
		overlap_primitive(a, lmn1, A, b, (l2 + 2, m2, n2), B)
		+ overlap_primitive(a, lmn1, A, b, (l2, m2 + 2, n2), B)
		+ overlap_primitive(a, lmn1, A, b, (l2, m2, n2 + 2), B)
	)
	term2 = -0.5 * (
		l2 * (l2 - 1) * overlap_primitive(a, lmn1, A, b, (l2 - 2, m2, n2), B)
		+ m2 * (m2 - 1) * overlap_primitive(a, lmn1, A, b, (l2, m2 - 2, n2), B)
		+ n2 * (n2 - 1) * overlap_primitive(a, lmn1, A, b, (l2, m2, n2 - 2), B)
	)
	return term0 + term1 + term2


def overlap(f1: ContractedGaussian, f2: ContractedGaussian) -> float:
	return sum(
		p1.coefficient * p2.coefficient
		* overlap_primitive(p1.exponent, f1.angular_momentum, f1.center, p2.exponent, f2.angular_momentum, f2.center)
		for p1 in f1.primitives
		for p2 in f2.primitives
	)


def kinetic(f1: ContractedGaussian, f2: ContractedGaussian) -> float:
	return sum(
		p1.coefficient * p2.coefficient
		* kinetic_primitive(p1.exponent, f1.angular_momentum, f1.center, p2.exponent, f2.angular_momentum, f2.center)
		for p1 in f1.primitives
		for p2 in f2.primitives
	)


def nuclear_attraction(pairs: List[PrimitivePair], charges: np.ndarray, coordinates: np.ndarray) -> float:
	"""Attraction of a charge distribution (given as primitive pairs) to all nuclei."""
	result = 0.0
	for pair in pairs:
		nx, ny, nz = pair.E.shape
		for Z, C in zip(charges, coordinates):
			R = hermite_coulomb_table(pair.L, pair.p, pair.P - C)
			result -= Z * pair.coefficient * (2 * np.pi / pair.p) * np.sum(pair.E * R[:nx, :ny, :nz])
	return result


def electron_repulsion(bra: List[PrimitivePair], ket: List[PrimitivePair]) -> float:
	"""Two-electron integral (ab|cd) from the primitive pairs of ab and cd."""
	result = 0.0
	for pair1 in bra:
		nx, ny, nz = pair1.E.shape
		for pair2 in ket:
			p, q = pair1.p, pair2.p
			alpha = p * q / (p + q)
			R = hermite_coulomb_table(pair1.L + pair2.L, alpha, pair1.P - pair2.P)
			value = 0.0
			for tau, nu, phi in itertools.product(*(range(n) for n in pair2.E.shape)):
				e = pair2.E[tau, nu, phi]
				if e == 0.0:
					continue
				sign = -1.0 if (tau + nu + phi) % 2 else 1.0
				value += sign * e * np.sum(pair1.E * R[tau : tau + nx, nu : nu + ny, phi : phi + nz])
			result += pair1.coefficient * pair2.coefficient * value * 2 * np.pi**2.5 / (p * q * np.sqrt(p + q))
	return result


def overlap_matrix(functions: List[ContractedGaussian]) -> np.ndarray:
	n = len(functions)
	S = np.zeros((n, n))
	for i in range(n):
		for j in range(i + 1):
			S[i, j] = S[j, i] = overlap(functions[i], functions[j])
	return S


def kinetic_matrix(functions: List[ContractedGaussian]) -> np.ndarray:
	n = len(functions)
	T = np.zeros((n, n))
	for i in range(n):
		for j in range(i + 1):
			T[i, j] = T[j, i] = kinetic(functions[i], functions[j])
	return T


def nuclear_attraction_matrix(functions: List[ContractedGaussian], molecule: Molecule) -> np.ndarray:
	n = len(functions)
	charges = molecule.atomic_numbers.astype(float)
	coordinates = molecule.coordinates
	V = np.zeros((n, n))
	for i in range(n):
		for j in range(i + 1):
			pairs = primitive_pairs(functions[i], functions[j])
			V[i, j] = V[j, i] = nuclear_attraction(pairs, charges, coordinates)
	return V


def electron_repulsion_tensor(functions: List[ContractedGaussian]) -> np.ndarray:
	"""
	Full (ij|kl) tensor in chemists' notation.

	Only the unique quartets are computed; the rest is filled by permutational symmetry.
	"""
	n = len(functions)
	pairs = {}
	for i in range(n):
		for j in range(i + 1):
			pairs[i, j] = primitive_pairs(functions[i], functions[j])

	eri = np.zeros((n, n, n, n))
	index_pairs = sorted(pairs)
	for ij_index, (i, j) in enumerate(index_pairs):
		for k, l in index_pairs[: ij_index + 1]:
			value = electron_repulsion(pairs[i, j], pairs[k, l])
			eri[i, j, k, l] = eri[j, i, k, l] = eri[i, j, l, k] = eri[j, i, l, k] = value
			eri[k, l, i, j] = eri[l, k, i, j] = eri[k, l, j, i] = eri[l, k, j, i] = value

	logging.debug(f"Computed {len(index_pairs) * (len(index_pairs) + 1) // 2} unique two-electron integrals")
	return eri
