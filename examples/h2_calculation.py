from rhfkit import run_calculation


def main():
	# H2 with 0.74 Angstrom bond length
	molecule = {"geometry": [0.0, 0.0, 0.0, 0.0, 0.0, 0.74], "symbols": ["H", "H"], "molecular_charge": 0}
	model = {"basis": "sto-3g"}

	mol, basis, wavefunction = run_calculation(molecule, model, {"scf": {"direct": True}}, log_dir="logs")

	print(f"Basis functions: {basis.n_orbitals}")
	print(f"Nuclear repulsion energy: {mol.nuclear_repulsion_energy():.6f} Hartree")
	print(f"Total HF energy: {wavefunction.energy:.6f} Hartree")
	print("\nOrbital energies (Hartree):")
	for i, e in enumerate(wavefunction.orbital_energies):
		print(f"Orbital {i + 1}: {e:.6f}")

	print("\nOrbital coefficients:")
	print(wavefunction.coefficients)


if __name__ == "__main__":
	main()
