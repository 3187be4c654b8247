import numpy as np

from rhfkit import SCFConfig, assemble, run
from rhfkit.log import setup_logging


def main():
	setup_logging("logs")

	molecule = {
		"geometry": [
			0.0000, 0.0000, 0.1173,
			0.0000, 0.7572, -0.4692,
			0.0000, -0.7572, -0.4692,
		],
		"symbols": ["O", "H", "H"],
	}

	mol, basis = assemble(molecule, "sto-3g", net_charge=0, output="verbose")
	print(f"{basis.n_shells} shells, {basis.n_orbitals} basis functions, {basis.n_electrons} electrons")
	for shell in basis.shells:
		print(f"  shell {shell.id:2d}  {shell.label}  atom {mol[shell.atom_index].symbol}  {shell.n_primitives} primitives")

	wavefunction = run(basis, mol, SCFConfig(tei_path="tei.npz"))

	print(f"\nTotal HF energy: {wavefunction.energy:.8f} Hartree ({wavefunction.iterations} iterations)")
	np.set_printoptions(precision=6, suppress=True)
	print("\nOrbital energies (Hartree):")
	print(wavefunction.orbital_energies)


if __name__ == "__main__":
	main()
