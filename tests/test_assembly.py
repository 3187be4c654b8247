import logging

import numpy as np
import pytest

from rhfkit.assembly import assemble, bohr_to_angstrom
from rhfkit.database import BasisDatabase
from rhfkit.errors import (
	BasisNotFoundError,
	DatabaseUnavailableError,
	MalformedRecordError,
	UnknownElementError,
	UnknownShellTypeError,
)
from rhfkit.tables import cartesian_count

WATER_ANGSTROM = {
	"geometry": [0.0, 0.0, 0.1173, 0.0, 0.7572, -0.4692, 0.0, -0.7572, -0.4692],
	"symbols": ["O", "H", "H"],
}


def test_hydrogen_molecule():
	spec = {"geometry": [0, 0, 0, 0, 0, 1.4], "symbols": ["H", "H"]}
	molecule, basis = assemble(spec, "sto-3g", 0)

	assert molecule.n_atoms == 2
	assert molecule.symbols == ["H", "H"]
	assert basis.n_shells == 2
	assert [s.atom_index for s in basis.shells] == [0, 1]
	assert all(s.angular_momentum == 0 for s in basis.shells)
	assert basis.n_electrons == 2
	assert basis.n_orbitals == 2


def test_carbon_combined_shell():
	molecule, basis = assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["C"]}, "sto-3g")

	assert basis.n_shells == 3
	split = [s for s in basis.shells if s.id in (2, 3)]
	s_shell, p_shell = sorted(split, key=lambda s: s.angular_momentum)
	assert (s_shell.angular_momentum, p_shell.angular_momentum) == (0, 1)
	assert s_shell.exponents == p_shell.exponents
	assert s_shell.center == p_shell.center
	assert s_shell.coefficients != p_shell.coefficients
	assert basis.n_orbitals == 1 + 1 + 3
	assert basis.n_electrons == 6


def test_shell_count_counts_combined_records_twice():
	_, basis = assemble(WATER_ANGSTROM, "6-31g")
	# O: S + 2 L records, H: 2 S records each
	assert basis.n_shells == (1 + 2 * 2) + 2 + 2


def test_ids_contiguous_and_order_stable():
	_, basis = assemble(WATER_ANGSTROM, "6-31g*")
	ids = [s.id for s in basis.shells]
	assert sorted(ids) == list(range(1, basis.n_shells + 1))

	am = [s.angular_momentum for s in basis.shells]
	assert am == sorted(am)
	for first, second in zip(basis.shells, basis.shells[1:]):
		if first.angular_momentum == second.angular_momentum:
			assert first.id < second.id
	assert basis.shells[-1].angular_momentum == 2


def test_orbital_count():
	_, basis = assemble(WATER_ANGSTROM, "6-31g")
	assert basis.n_orbitals == 13
	assert basis.n_orbitals == sum(cartesian_count(s.angular_momentum) for s in basis.shells)

	_, polarized = assemble(WATER_ANGSTROM, "6-31g*")
	assert polarized.n_orbitals == 13 + 6


@pytest.mark.parametrize("charge, expected", [(0, 10), (1, 9), (-1, 11), (2, 8)])
def test_electron_count_applies_charge_once(charge, expected):
	_, basis = assemble(WATER_ANGSTROM, "sto-3g", charge)
	assert basis.n_electrons == expected


def test_coordinates_converted_to_bohr():
	molecule, basis = assemble(WATER_ANGSTROM, "sto-3g")
	back = bohr_to_angstrom(molecule.coordinates.ravel())
	np.testing.assert_allclose(back, WATER_ANGSTROM["geometry"], rtol=1e-9, atol=1e-12)
	assert molecule.coordinates[1, 1] == pytest.approx(0.7572 / 0.52917724924)
	for shell in basis.shells:
		assert shell.center == molecule[shell.atom_index].center


def test_empty_molecule():
	molecule, basis = assemble({"geometry": [], "symbols": []}, "sto-3g")
	assert molecule.n_atoms == 0
	assert basis.n_shells == 0
	assert basis.n_orbitals == 0
	assert basis.n_electrons == 0


def test_unknown_element_fails_before_reading(monkeypatch):
	reads = []
	original = BasisDatabase.read_shells

	def spy(self, symbol, basis_name):
		reads.append(symbol)
		return original(self, symbol, basis_name)

	monkeypatch.setattr(BasisDatabase, "read_shells", spy)
	with pytest.raises(UnknownElementError):
		assemble({"geometry": [0.0] * 6, "symbols": ["H", "Xx"]}, "sto-3g")
	assert reads == ["H"]


def test_missing_basis_name():
	with pytest.raises(BasisNotFoundError):
		assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["H"]}, "def2-qzvpp")


def test_database_closed_after_failure(monkeypatch):
	closed = []
	original = BasisDatabase.close

	def spy(self):
		closed.append(self.path)
		original(self)

	monkeypatch.setattr(BasisDatabase, "close", spy)
	with pytest.raises(BasisNotFoundError):
		assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["H"]}, "def2-qzvpp")
	assert len(closed) == 1


def test_unavailable_database(tmp_path):
	with pytest.raises(DatabaseUnavailableError):
		assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["H"]}, "sto-3g", database_path=str(tmp_path / "none.json"))


def test_custom_database(make_database):
	path = make_database(
		{
			"Li": {
				"mini": {
					"1": {"Shell Type": "S", "Exponents": [16.1, 2.9], "Coefficients": [0.15, 0.53]},
					"2": {"Shell Type": "SP", "Exponents": [0.6, 0.16], "Coefficients": [[-0.1, 0.15], [0.4, 0.6]]},
					"3": {"Shell Type": "F", "Exponents": [0.2], "Coefficients": [1.0]},
				}
			}
		}
	)
	_, basis = assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["Li"]}, "mini", database_path=path)
	assert [(s.id, s.angular_momentum) for s in basis.shells] == [(1, 0), (2, 0), (3, 1), (4, 3)]
	assert basis.n_orbitals == 1 + 1 + 3 + 10


def test_invalid_input():
	with pytest.raises(ValueError):
		assemble({"geometry": [0.0, 0.0], "symbols": ["H"]}, "sto-3g")
	with pytest.raises(ValueError):
		assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["H"]}, "")


def test_verbose_output_only_on_rank_zero(caplog):
	spec = {"geometry": [0.0, 0.0, 0.0], "symbols": ["C"]}
	with caplog.at_level(logging.INFO):
		assemble(spec, "sto-3g", output="verbose", rank=1)
	assert "Contraction Coefficient" not in caplog.text

	with caplog.at_level(logging.INFO):
		assemble(spec, "sto-3g", output="verbose", rank=0)
	assert "Contraction Coefficient" in caplog.text
	assert "ATOM C:" in caplog.text


@pytest.mark.parametrize("charge", [0.5, 1.5, True])
def test_non_integral_charge(charge):
	with pytest.raises(ValueError, match="integer"):
		assemble(WATER_ANGSTROM, "sto-3g", charge)


def test_integral_float_charge_accepted():
	_, basis = assemble(WATER_ANGSTROM, "sto-3g", 1.0)
	assert basis.n_electrons == 9


def test_unknown_shell_type_closes_database(make_database, monkeypatch):
	closed = []
	original = BasisDatabase.close

	def spy(self):
		closed.append(self.path)
		original(self)

	monkeypatch.setattr(BasisDatabase, "close", spy)
	path = make_database({"H": {"odd": {"1": {"Shell Type": "Q", "Exponents": [1.0], "Coefficients": [1.0]}}}})
	with pytest.raises(UnknownShellTypeError, match="Q"):
		assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["H"]}, "odd", database_path=path)
	assert closed == [path]


def test_negative_exponent_rejected(make_database):
	path = make_database({"H": {"bad": {"1": {"Shell Type": "S", "Exponents": [-1.0], "Coefficients": [1.0]}}}})
	with pytest.raises(MalformedRecordError):
		assemble({"geometry": [0.0, 0.0, 0.0], "symbols": ["H"]}, "bad", database_path=path)
