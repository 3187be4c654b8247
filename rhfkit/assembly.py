"""
Builds the molecule and its basis set from element symbols, coordinates and a basis-set name.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np

from .basis import Basis, Shell, expand_shell
from .database import open_database
from .molecule import Atom, Molecule
from .tables import atomic_number_of

BOHR_IN_ANGSTROM = 0.52917724924
ANGSTROM_TO_BOHR = 1.0 / BOHR_IN_ANGSTROM


def angstrom_to_bohr(coordinates: Sequence[float]) -> np.ndarray:
	return np.asarray(coordinates, dtype=float) * ANGSTROM_TO_BOHR


def bohr_to_angstrom(coordinates: Sequence[float]) -> np.ndarray:
	return np.asarray(coordinates, dtype=float) * BOHR_IN_ANGSTROM


def format_shell_table(shell: Shell) -> str:
	"""Primitive index, exponent and contraction coefficient of a shell, one primitive per row."""
	rows = [f"{'Primitive':>10} {'Exponent':>16} {'Contraction Coefficient':>24}"]
	for i, (exponent, coefficient) in enumerate(zip(shell.exponents, shell.coefficients), start=1):
		rows.append(f"{i:>10d} {exponent:>16.6f} {coefficient:>24.6f}")
	return "\n".join(rows)


def assemble(
	molecule_spec: Mapping[str, Any],
	basis_name: str,
	net_charge: int = 0,
	database_path: Optional[str] = None,
	output: str = "none",
	rank: int = 0,
) -> Tuple[Molecule, Basis]:
	"""
	Assemble the molecule and basis set.

	Args:
		molecule_spec: Mapping with "geometry" (flat x, y, z list in angstrom) and "symbols"
		basis_name: Name of the basis set (e.g., "sto-3g", "6-31g")
		net_charge: Net molecular charge, subtracted once from the electron count
		database_path: Basis set database, defaults to the one shipped with the package
		output: "verbose" logs a table for every shell at INFO level; configure logging
			(e.g. rhfkit.log.setup_logging) to see it
		rank: Process rank; only rank 0 narrates

	Returns:
		Tuple of (Molecule, Basis); the basis shells are sorted by angular momentum
	"""
	if not basis_name:
		raise ValueError("Basis set name must not be empty")
	if isinstance(net_charge, bool) or net_charge != int(net_charge):
		raise ValueError(f"Net charge must be an integer, got {net_charge!r}")

	symbols = list(molecule_spec.get("symbols", []))
	geometry = np.asarray(molecule_spec.get("geometry", []), dtype=float).ravel()
	if geometry.size != 3 * len(symbols):
		raise ValueError(f"Geometry has {geometry.size} values, expected {3 * len(symbols)} for {len(symbols)} atoms")

	centers = angstrom_to_bohr(geometry).reshape(len(symbols), 3)
	verbose = output == "verbose" and rank == 0

	molecule = Molecule()
	basis = Basis(basis_name, int(net_charge))

	with open_database(database_path) as database:
		if verbose:
			logging.info(f"Generating basis set '{basis_name}' for {len(symbols)} atoms")

		next_id = 1
		for atom_index, symbol in enumerate(symbols):
			atomic_number = atomic_number_of(symbol)
			center = tuple(float(x) for x in centers[atom_index])

			molecule.add_atom(Atom(atomic_number, symbol, center))
			basis.add_electrons(atomic_number)

			records = database.read_shells(symbol, basis_name)
			if verbose:
				logging.info(f"ATOM {symbol}:")

			for record in records:
				for shell in expand_shell(record, atom_index, center, next_id):
					if verbose:
						logging.info(f"Shell #{record.index} ({shell.label}):\n{format_shell_table(shell)}")
					basis.add_shell(shell)
					next_id = shell.id + 1

	basis.finalize()
	logging.debug(
		f"Assembled basis '{basis_name}': {basis.n_shells} shells, "
		f"{basis.n_orbitals} orbitals, {basis.n_electrons} electrons"
	)
	return molecule, basis
