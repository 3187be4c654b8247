import json

import pytest

from rhfkit.assembly import BOHR_IN_ANGSTROM
from rhfkit.database import DEFAULT_DATABASE_PATH

# Water geometry in bohr
WATER_BOHR = [
	0.000000000000, -0.143225816552, 0.000000000000,
	1.638036840407, 1.136548822547, 0.000000000000,
	-1.638036840407, 1.136548822547, 0.000000000000,
]


@pytest.fixture
def database_path():
	return DEFAULT_DATABASE_PATH


@pytest.fixture
def make_database(tmp_path):
	"""Write a basis set database to a temporary file and return its path."""

	def _make(tree, name="bsed.json"):
		path = tmp_path / name
		path.write_text(json.dumps(tree), encoding="utf-8")
		return str(path)

	return _make


@pytest.fixture
def h2_spec():
	"""H2 at 1.4 bohr, geometry in angstrom."""
	return {"geometry": [0.0, 0.0, 0.0, 0.0, 0.0, 1.4 * BOHR_IN_ANGSTROM], "symbols": ["H", "H"]}


@pytest.fixture
def water_spec():
	return {"geometry": [x * BOHR_IN_ANGSTROM for x in WATER_BOHR], "symbols": ["O", "H", "H"]}
