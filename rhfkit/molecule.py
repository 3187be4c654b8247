from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Atom:
	"""A nucleus: atomic number, element symbol and center in bohr."""

	atomic_number: int
	symbol: str
	center: Tuple[float, float, float]


class Molecule:
	"""
	An ordered collection of atoms.

	Atom order is the input order; shells refer back to atoms by their index here.
	"""

	def __init__(self, atoms: Optional[List[Atom]] = None):
		self._atoms: List[Atom] = list(atoms) if atoms else []

	def add_atom(self, atom: Atom) -> int:
		"""Append an atom and return its index."""
		self._atoms.append(atom)
		return len(self._atoms) - 1

	@property
	def atoms(self) -> Tuple[Atom, ...]:
		return tuple(self._atoms)

	@property
	def n_atoms(self) -> int:
		return len(self._atoms)

	@property
	def symbols(self) -> List[str]:
		return [atom.symbol for atom in self._atoms]

	@property
	def atomic_numbers(self) -> np.ndarray:
		return np.array([atom.atomic_number for atom in self._atoms], dtype=int)

	@property
	def coordinates(self) -> np.ndarray:
		"""Array of shape (n_atoms, 3) with the centers in bohr."""
		return np.array([atom.center for atom in self._atoms], dtype=float).reshape(-1, 3)

	def __len__(self) -> int:
		return len(self._atoms)

	def __getitem__(self, index: int) -> Atom:
		return self._atoms[index]

	def __iter__(self):
		return iter(self._atoms)

	def nuclear_repulsion_energy(self) -> float:
		"""
		Calculate the nuclear repulsion energy.

		Returns:
		    Nuclear repulsion energy in atomic units
		"""
		coordinates = self.coordinates
		charges = self.atomic_numbers
		energy = 0.0
		for i in range(self.n_atoms):
			for j in range(i + 1, self.n_atoms):
				r_ij = np.linalg.norm(coordinates[i] - coordinates[j])
				energy += (charges[i] * charges[j]) / r_ij
		return energy
