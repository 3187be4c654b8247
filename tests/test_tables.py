import pytest

from rhfkit.errors import UnknownElementError, UnknownShellTypeError
from rhfkit.tables import (
	L_SHELL,
	angular_momentum_code_of,
	atomic_number_of,
	cartesian_components,
	cartesian_count,
)


def test_atomic_numbers():
	assert atomic_number_of("H") == 1
	assert atomic_number_of("C") == 6
	assert atomic_number_of("Fe") == 26
	assert atomic_number_of("Og") == 118


def test_unknown_element():
	with pytest.raises(UnknownElementError, match="Xx"):
		atomic_number_of("Xx")
	with pytest.raises(KeyError):
		atomic_number_of("xx")


def test_shell_type_codes():
	assert angular_momentum_code_of("S") == 0
	assert angular_momentum_code_of("P") == 1
	assert angular_momentum_code_of("d") == 2
	assert angular_momentum_code_of("F") == 3
	assert angular_momentum_code_of("L") == L_SHELL
	assert angular_momentum_code_of("SP") == L_SHELL
	assert L_SHELL < 0


def test_unknown_shell_type():
	with pytest.raises(UnknownShellTypeError):
		angular_momentum_code_of("Q")


def test_cartesian_counts():
	assert [cartesian_count(l) for l in range(5)] == [1, 3, 6, 10, 15]
	with pytest.raises(ValueError):
		cartesian_count(-1)


def test_cartesian_components():
	assert cartesian_components(0) == [(0, 0, 0)]
	assert cartesian_components(1) == [(1, 0, 0), (0, 1, 0), (0, 0, 1)]
	d = cartesian_components(2)
	assert len(d) == 6
	assert d[0] == (2, 0, 0)
	assert all(sum(c) == 2 for c in d)
	assert len(set(d)) == 6
