import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .basis import Basis, basis_functions
from .config import SCFConfig
from .diis import diis_error, diis_extrapolate
from .errors import SCFConvergenceError
from .integrals import electron_repulsion_tensor, kinetic_matrix, nuclear_attraction_matrix, overlap_matrix
from .molecule import Molecule


@dataclass
class Wavefunction:
	"""Converged RHF wavefunction."""

	energy: float
	electronic_energy: float
	nuclear_repulsion: float
	fock: np.ndarray
	density: np.ndarray
	coefficients: np.ndarray
	orbital_energies: np.ndarray
	iterations: int
	converged: bool


class HartreeFock:
	"""
	Restricted closed-shell Hartree-Fock on an assembled basis.
	"""

	def __init__(self, molecule: Molecule, basis: Basis, config: Optional[SCFConfig] = None):
		self.molecule = molecule
		self.basis = basis
		self.config = config or SCFConfig()

		self.basis_functions = basis_functions(basis)
		self.n_basis = len(self.basis_functions)
		self.n_electrons = basis.n_electrons

		if self.n_electrons % 2 != 0:
			raise ValueError(f"RHF needs an even number of electrons, got {self.n_electrons}")
		self.n_occupied = self.n_electrons // 2
		if self.n_occupied > self.n_basis:
			raise ValueError(f"{self.n_electrons} electrons do not fit in {self.n_basis} basis functions")

		self._eri: Optional[np.ndarray] = None

	def compute_overlap_matrix(self) -> np.ndarray:
		return overlap_matrix(self.basis_functions)

	def compute_kinetic_matrix(self) -> np.ndarray:
		return kinetic_matrix(self.basis_functions)

	def compute_nuclear_attraction_matrix(self) -> np.ndarray:
		return nuclear_attraction_matrix(self.basis_functions, self.molecule)

	def compute_electron_repulsion_integrals(self) -> np.ndarray:
		return electron_repulsion_tensor(self.basis_functions)

	def load_electron_repulsion_integrals(self, eri: np.ndarray) -> None:
		"""Use a precomputed (ij|kl) tensor instead of computing one."""
		n = self.n_basis
		self._eri = np.asarray(eri, dtype=float).reshape(n, n, n, n)

	def electron_repulsion_integrals(self) -> np.ndarray:
		"""ERIs for one Fock build: recomputed every call in direct mode, otherwise kept."""
		if self.config.direct:
			return self.compute_electron_repulsion_integrals()
		if self._eri is None:
			self._eri = self.compute_electron_repulsion_integrals()
		return self._eri

	def compute_fock_matrix(self, D: np.ndarray, h_core: np.ndarray) -> np.ndarray:
		"""F = H + J - K/2 for the total density D."""
		eri = self.electron_repulsion_integrals()
		J = np.einsum("kl,ijkl->ij", D, eri)
		K = np.einsum("kl,ikjl->ij", D, eri)
		return h_core + J - 0.5 * K

	def orthogonalizer(self, S: np.ndarray) -> np.ndarray:
		"""Canonical orthogonalization matrix X with X^T S X = 1, dropping near-linear dependencies."""
		try:
			s_eigenvalues, s_eigenvectors = np.linalg.eigh(S)
		except np.linalg.LinAlgError:
			raise RuntimeError("Failed to diagonalize overlap matrix. Matrix may be singular.")

		threshold = np.max(s_eigenvalues) * 1e-10
		valid_mask = s_eigenvalues > threshold
		n_removed = int(np.sum(~valid_mask))
		if n_removed > 0:
			logging.warning(f"Removed {n_removed} overlap eigenvalues below {threshold:.2e}")
			if self.n_occupied > int(np.sum(valid_mask)):
				raise RuntimeError(
					f"Too many electrons ({self.n_electrons}) for the reduced basis set "
					f"(remaining functions: {int(np.sum(valid_mask))})"
				)
		return s_eigenvectors[:, valid_mask] / np.sqrt(s_eigenvalues[valid_mask])

	def density_matrix(self, C: np.ndarray) -> np.ndarray:
		C_occ = C[:, : self.n_occupied]
		return 2.0 * C_occ @ C_occ.T

	def compute(self) -> Wavefunction:
		"""
		Perform the SCF calculation.

		Returns:
		    Wavefunction with energies, Fock, density and MO coefficient matrices
		"""
		S = self.compute_overlap_matrix()
		if np.any(np.isnan(S)) or np.any(np.isinf(S)):
			raise RuntimeError("Overlap matrix contains NaN or Inf values. Check basis set parameters.")

		h_core = self.compute_kinetic_matrix() + self.compute_nuclear_attraction_matrix()
		X = self.orthogonalizer(S)
		E_nuc = self.molecule.nuclear_repulsion_energy()

		def diagonalize(F):
			orbital_energies, C_prime = np.linalg.eigh(X.T @ F @ X)
			return orbital_energies, X @ C_prime

		# core Hamiltonian guess
		orbital_energies, C = diagonalize(h_core)
		D = self.density_matrix(C)

		F_list = []
		e_list = []
		E_old = 0.0
		converged = False

		for iteration in range(1, self.config.max_iterations + 1):
			F = self.compute_fock_matrix(D, h_core)
			E_electronic = 0.5 * np.sum(D * (h_core + F))
			E_total = E_electronic + E_nuc

			F_solve = F
			if self.config.diis:
				F_list.append(F)
				e_list.append(diis_error(F, D, S))
				if len(F_list) > self.config.diis_size:
					F_list.pop(0)
					e_list.pop(0)
				if iteration >= self.config.diis_start:
					F_solve = diis_extrapolate(F_list, e_list)

			orbital_energies, C = diagonalize(F_solve)
			D_new = self.density_matrix(C)

			delta_E = abs(E_total - E_old)
			delta_D = np.max(np.abs(D_new - D)) if D.size else 0.0
			logging.info(f"Iteration {iteration:3d}: E = {E_total:15.10f} ΔE = {delta_E:10.3e} ΔD = {delta_D:10.3e}")

			E_old = E_total
			D = D_new
			if delta_E < self.config.energy_threshold and delta_D < self.config.density_threshold:
				converged = True
				break

		if not converged:
			raise SCFConvergenceError(f"SCF failed to converge in {self.config.max_iterations} iterations")

		# Fock matrix and energy consistent with the final density
		F = self.compute_fock_matrix(D, h_core)
		E_electronic = 0.5 * np.sum(D * (h_core + F))
		orbital_energies, C = diagonalize(F)

		logging.info(f"SCF converged in {iteration} iterations. Final Energy: {E_electronic + E_nuc:15.10f} Hartree")

		return Wavefunction(
			energy=E_electronic + E_nuc,
			electronic_energy=E_electronic,
			nuclear_repulsion=E_nuc,
			fock=F,
			density=D,
			coefficients=C,
			orbital_energies=orbital_energies,
			iterations=iteration,
			converged=converged,
		)
