# ruff: noqa: E741  # Allow ambiguous variable names (l, I, O) due to physics notation
import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .database import RawShellRecord
from .errors import MalformedRecordError
from .tables import ANGULAR_LABELS, L_SHELL, angular_momentum_code_of, cartesian_components, cartesian_count


@dataclass(frozen=True)
class Shell:
	"""
	One contracted Gaussian shell.

	Coefficients multiply normalized primitives when `normalized` is set.
	"""

	id: int
	atom_index: int
	exponents: Tuple[float, ...]
	coefficients: Tuple[float, ...]
	center: Tuple[float, float, float]
	angular_momentum: int
	n_primitives: int
	normalized: bool = True

	def __post_init__(self):
		if self.angular_momentum < 0:
			raise ValueError(f"Shell {self.id} has invalid angular momentum {self.angular_momentum}")
		if not self.exponents or any(a <= 0 for a in self.exponents):
			raise ValueError(f"Shell {self.id} needs positive exponents, got {list(self.exponents)}")
		if not (len(self.exponents) == len(self.coefficients) == self.n_primitives):
			raise ValueError(
				f"Shell {self.id}: {len(self.exponents)} exponents, {len(self.coefficients)} coefficients, "
				f"n_primitives={self.n_primitives}"
			)

	@property
	def n_functions(self) -> int:
		"""Number of Cartesian basis functions in this shell."""
		return cartesian_count(self.angular_momentum)

	@property
	def label(self) -> str:
		return ANGULAR_LABELS[self.angular_momentum] if self.angular_momentum < len(ANGULAR_LABELS) else str(self.angular_momentum)


@dataclass
class Basis:
	"""
	The shells of a molecule together with electron and orbital counts.

	Shells are appended during assembly and sorted by angular momentum once by finalize();
	after that the basis is read-only.
	"""

	name: str
	charge: int = 0
	shells: List[Shell] = field(default_factory=list)
	n_electrons: int = 0
	n_orbitals: int = 0
	finalized: bool = False

	def add_shell(self, shell: Shell) -> None:
		if self.finalized:
			raise RuntimeError(f"Cannot add shell {shell.id} to finalized basis '{self.name}'")
		self.shells.append(shell)
		self.n_orbitals += shell.n_functions

	def add_electrons(self, count: int) -> None:
		if self.finalized:
			raise RuntimeError(f"Cannot change electron count of finalized basis '{self.name}'")
		self.n_electrons += count

	def finalize(self) -> None:
		"""Apply the net charge and order shells by angular momentum (stable)."""
		if self.finalized:
			return
		self.n_electrons -= self.charge
		self.shells = sorted(self.shells, key=lambda shell: shell.angular_momentum)
		self.finalized = True

	@property
	def n_shells(self) -> int:
		return len(self.shells)


def expand_shell(
	record: RawShellRecord, atom_index: int, center: Sequence[float], next_id: int
) -> List[Shell]:
	"""
	Turn one database record into shells, splitting combined-L records into an s and a p shell.

	Args:
		record: Raw shell record from the database
		atom_index: Index of the owning atom in the molecule
		center: Atom center in bohr
		next_id: Id for the first emitted shell; further shells take consecutive ids

	Returns:
		One shell, or two (s then p) for a combined-L record
	"""
	am = angular_momentum_code_of(record.shell_type)
	center = tuple(float(x) for x in center)
	exponents = tuple(record.exponents)
	n_primitives = len(exponents)

	if am == L_SHELL:
		if len(record.coefficient_columns) != 2:
			raise MalformedRecordError(
				f"Combined-L shell {record.index} needs 2 coefficient columns, got {len(record.coefficient_columns)}"
			)
		s_coefficients, p_coefficients = record.coefficient_columns
		return [
			Shell(next_id, atom_index, exponents, tuple(s_coefficients), center, 0, n_primitives, True),
			Shell(next_id + 1, atom_index, exponents, tuple(p_coefficients), center, 1, n_primitives, True),
		]

	if len(record.coefficient_columns) != 1:
		raise MalformedRecordError(
			f"Shell {record.index} of type '{record.shell_type}' needs 1 coefficient column, "
			f"got {len(record.coefficient_columns)}"
		)
	return [Shell(next_id, atom_index, exponents, tuple(record.coefficient_columns[0]), center, am, n_primitives, True)]


@dataclass
class PrimitiveGaussian:
	"""Represents a primitive Gaussian function."""

	exponent: float
	coefficient: float


@dataclass
class ContractedGaussian:
	"""One Cartesian component of a shell, with normalization folded into the coefficients."""

	primitives: List[PrimitiveGaussian]
	angular_momentum: Tuple[int, int, int]  # (l, m, n)
	center: np.ndarray
	shell_id: int


def double_factorial(n: int) -> int:
	"""n!! with the convention (-1)!! = 0!! = 1."""
	result = 1
	for i in range(n, 0, -2):
		result *= i
	return result


def primitive_normalization(alpha: float, l: int, m: int, n: int) -> float:
	"""Normalization constant of x^l y^m z^n exp(-alpha r^2)."""
	L = l + m + n
	numerator = (2.0 * alpha / np.pi) ** 0.75 * (4.0 * alpha) ** (L / 2.0)
	denominator = np.sqrt(double_factorial(2 * l - 1) * double_factorial(2 * m - 1) * double_factorial(2 * n - 1))
	return numerator / denominator


def _contract(shell: Shell, lmn: Tuple[int, int, int]) -> ContractedGaussian:
	l, m, n = lmn
	L = l + m + n
	exponents = np.array(shell.exponents, dtype=float)
	coefficients = np.array(shell.coefficients, dtype=float)
	if shell.normalized:
		coefficients = coefficients * np.array([primitive_normalization(a, l, m, n) for a in exponents])

	# rescale so that <chi|chi> = 1
	angular = double_factorial(2 * l - 1) * double_factorial(2 * m - 1) * double_factorial(2 * n - 1)
	pair_sums = exponents[:, None] + exponents[None, :]
	self_overlap = np.sum(np.outer(coefficients, coefficients) / pair_sums ** (L + 1.5))
	self_overlap *= np.pi**1.5 * angular / 2.0**L
	coefficients = coefficients / np.sqrt(self_overlap)

	primitives = [PrimitiveGaussian(float(a), float(c)) for a, c in zip(exponents, coefficients)]
	return ContractedGaussian(primitives, lmn, np.array(shell.center, dtype=float), shell.id)


def basis_functions(basis: Basis) -> List[ContractedGaussian]:
	"""
	Expand every shell of a basis into its Cartesian basis functions, in shell order.

	Returns:
	    List of normalized ContractedGaussian objects, one per atomic orbital
	"""
	functions = []
	for shell in basis.shells:
		for lmn in cartesian_components(shell.angular_momentum):
			functions.append(_contract(shell, lmn))
	logging.debug(f"Expanded {basis.n_shells} shells into {len(functions)} basis functions")
	return functions
