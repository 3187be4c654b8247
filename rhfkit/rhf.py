"""
Entry point of the restricted closed-shell Hartree-Fock calculation.

Stages the two-electron integrals to disk when the SCF is not direct, then runs the SCF driver.
"""

import logging
import os
import threading
from typing import Callable, Optional, Type

import numpy as np

from .basis import Basis
from .config import SCFConfig
from .hartree_fock import HartreeFock, Wavefunction
from .molecule import Molecule

TEI_KEY = "tei"


def _is_writer(config: SCFConfig) -> bool:
	return config.rank == 0 and threading.current_thread() is threading.main_thread()


def stage_electron_repulsion_integrals(eri: np.ndarray, path: str) -> None:
	"""
	Write the ERI tensor, flattened, under the key "tei".

	The data goes to a temporary file beside path and is renamed into place once synced,
	so a reader sees either the previous file or the complete new one.
	"""
	directory = os.path.dirname(os.path.abspath(path))
	os.makedirs(directory, exist_ok=True)
	tmp_path = f"{path}.{os.getpid()}.tmp"
	try:
		with open(tmp_path, "wb") as f:
			np.savez(f, **{TEI_KEY: np.ascontiguousarray(eri, dtype=float).ravel()})
			f.flush()
			os.fsync(f.fileno())
		os.replace(tmp_path, path)
	except BaseException:
		if os.path.exists(tmp_path):
			os.remove(tmp_path)
		raise
	logging.debug(f"Staged {eri.size} two-electron integrals to {path}")


def load_electron_repulsion_integrals(path: str) -> np.ndarray:
	with np.load(path) as data:
		return data[TEI_KEY]


def run(
	basis: Basis,
	molecule: Molecule,
	config: Optional[SCFConfig] = None,
	barrier: Optional[Callable[[], None]] = None,
	driver: Type[HartreeFock] = HartreeFock,
) -> Wavefunction:
	"""
	Run an RHF calculation.

	Args:
		basis: Finalized basis from assemble()
		molecule: Molecule from assemble()
		config: SCF settings; config.direct=False stages the ERIs to config.tei_path first
		barrier: Called by every process after staging, must return only once all processes
			have reached it (e.g. an MPI communicator's Barrier). Required on ranks other than 0
			when the integrals are staged
		driver: SCF driver class

	Returns:
		The converged Wavefunction
	"""
	config = config or SCFConfig()
	if not config.direct and config.rank != 0 and barrier is None:
		raise ValueError(f"Rank {config.rank} needs a barrier to wait for the integrals staged by rank 0")

	narrate = config.rank == 0

	if narrate:
		logging.info("RESTRICTED CLOSED-SHELL HARTREE-FOCK")

	scf = driver(molecule, basis, config)

	if not config.direct:
		if _is_writer(config):
			stage_electron_repulsion_integrals(scf.compute_electron_repulsion_integrals(), config.tei_path)
		if barrier is not None:
			barrier()
		scf.load_electron_repulsion_integrals(load_electron_repulsion_integrals(config.tei_path))

	wavefunction = scf.compute()

	if narrate:
		logging.info(f"END RESTRICTED CLOSED-SHELL HARTREE-FOCK: E = {wavefunction.energy:.10f} Hartree")
	return wavefunction
