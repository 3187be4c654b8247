from typing import Any, Callable, Mapping, Optional, Tuple

from .assembly import assemble
from .basis import Basis
from .config import SCFConfig
from .hartree_fock import Wavefunction
from .log import setup_logging
from .molecule import Molecule
from .rhf import run


def run_calculation(
	molecule: Mapping[str, Any],
	model: Mapping[str, Any],
	keywords: Optional[Mapping[str, Any]] = None,
	database_path: Optional[str] = None,
	log_dir: Optional[str] = None,
	barrier: Optional[Callable[[], None]] = None,
) -> Tuple[Molecule, Basis, Wavefunction]:
	"""
	Assemble the basis and run RHF.

	Args:
		molecule: {"geometry": [x1, y1, z1, ...] (angstrom), "symbols": [...], "molecular_charge": 0}
		model: {"basis": "sto-3g"}
		keywords: Optional {"scf": {...}, "output": "verbose"}
		database_path: Basis set database, defaults to the packaged one
		log_dir: If given, log to <log_dir>/rhfkit.log. Otherwise verbose output goes to stderr
		barrier: Passed to run(); needed on ranks other than 0 when integrals are staged

	Returns:
		Tuple of (Molecule, Basis, Wavefunction)
	"""
	keywords = keywords or {}
	output = keywords.get("output", "none")
	if log_dir is not None:
		setup_logging(log_dir)
	elif output == "verbose":
		setup_logging(None)

	config = SCFConfig.from_keywords(keywords)

	mol, basis = assemble(
		molecule,
		model["basis"],
		net_charge=molecule.get("molecular_charge", 0),
		database_path=database_path,
		output=output,
		rank=config.rank,
	)
	wavefunction = run(basis, mol, config, barrier=barrier)
	return mol, basis, wavefunction
