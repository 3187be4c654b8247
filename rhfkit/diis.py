from typing import List

import numpy as np


def diis_error(F: np.ndarray, D: np.ndarray, S: np.ndarray) -> np.ndarray:
	"""Commutator FDS - SDF, zero at convergence."""
	return F @ D @ S - S @ D @ F


def diis_extrapolate(fock_list: List[np.ndarray], error_list: List[np.ndarray]) -> np.ndarray:
	"""
	Pulay DIIS extrapolation of the Fock matrix.

	Solves
	    [ B   -1 ] [ c ]   [  0 ]
	    [ -1   0 ] [ λ ] = [ -1 ]
	with B_ij = <e_i|e_j>, and returns sum_i c_i F_i.
	Falls back to the last Fock matrix with fewer than two entries or a singular B.
	"""
	n = len(fock_list)
	if n < 2 or n != len(error_list):
		return fock_list[-1]

	B = np.zeros((n + 1, n + 1))
	for i in range(n):
		for j in range(i, n):
			B[i, j] = B[j, i] = np.vdot(error_list[i], error_list[j])
	B[-1, :] = -1
	B[:, -1] = -1
	B[-1, -1] = 0

	resid = np.zeros(n + 1)
	resid[-1] = -1

	try:
		c = np.linalg.solve(B, resid)
	except np.linalg.LinAlgError:
		return fock_list[-1]
	if not np.all(np.isfinite(c)):
		return fock_list[-1]

	F = sum(c[i] * fock_list[i] for i in range(n))
	return 0.5 * (F + F.T)
